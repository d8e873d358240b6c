#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Thu Feb 19 14:06:25 2026

@author: petermillington

Period Report
- Per-period table of ohlc, volume and efficiency from a finished simulation.
- Summary statistics of trade prices.
- One-page PDF of the price path, volume and efficiency by period.
"""
import os
from typing import Dict, Sequence

import numpy as np
import pandas as pd
from scipy.stats import skew, kurtosis
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages


def _frame(sim, name: str) -> pd.DataFrame:
    sink = sim.logs.get(name)
    if sink is None:
        return pd.DataFrame({"period": pd.Series(dtype=int)})
    df = sink.to_frame()
    if "period" in df:
        df["period"] = df["period"].astype(int)
    return df


def period_summary(sim) -> pd.DataFrame:
    """
    One row per completed period: volume, open/high/low/close (NaN when the
    period had no trades) and efficiencyOfAllocation (NaN when not logged).
    """
    periods = pd.DataFrame({"period": np.arange(1, sim.period + 1)})
    out = periods.merge(_frame(sim, "volume"), on="period", how="left")
    out = out.merge(_frame(sim, "ohlc"), on="period", how="left")
    out = out.merge(_frame(sim, "effalloc"), on="period", how="left")
    return out


def price_stats(prices: Sequence[float]) -> Dict[str, float]:
    """
    Mean, standard deviation, skewness and excess kurtosis of trade prices.
    Moments need at least 3 observations and are NaN otherwise.
    """
    p = np.asarray(prices, dtype=float)
    if p.size == 0:
        raise ValueError("Need at least 1 price observation")
    stats = {
        "n_obs": int(p.size),
        "mean": float(np.mean(p)),
        "std": float(np.std(p, ddof=1)) if p.size > 1 else np.nan,
        "skew": float(skew(p)) if p.size > 2 else np.nan,
        "kurt": float(kurtosis(p, fisher=True)) if p.size > 2 else np.nan,
    }
    return stats


def trade_prices(sim) -> np.ndarray:
    trades = _frame(sim, "trade")
    if "price" not in trades:
        return np.array([], dtype=float)
    return trades["price"].to_numpy(dtype=float)


def plot_period_report(sim, save_dir: str, filename: str = "period_report.pdf") -> str:
    """
    Writes a three-panel PDF: trade prices with period high/low, volume by
    period, efficiency of allocation by period.  Returns the file path.
    """
    os.makedirs(save_dir, exist_ok=True)
    path = os.path.join(save_dir, filename)
    summary = period_summary(sim)
    prices = trade_prices(sim)

    with PdfPages(path) as pdf:
        fig, axes = plt.subplots(3, 1, figsize=(8.27, 11.69))

        ax = axes[0]
        ax.plot(np.arange(len(prices)), prices, lw=0.5)
        ax.set_title("Trade prices")
        ax.set_xlabel("trade")
        ax.set_ylabel("price")
        ax.grid(True, linestyle='--', alpha=0.4)
        if prices.size > 2:
            stats = price_stats(prices)
            ax.text(0.02, 0.98,
                    f"mean: {stats['mean']:.2f}\nstd: {stats['std']:.2f}\n"
                    f"skew: {stats['skew']:.2f}\nkurt: {stats['kurt']:.2f}",
                    transform=ax.transAxes, fontsize=7, va='top',
                    bbox=dict(boxstyle='round,pad=0.3', facecolor='white',
                              edgecolor='gray', alpha=0.8))

        ax = axes[1]
        ax.bar(summary["period"], summary["volume"].fillna(0))
        if "high" in summary:
            ax2 = ax.twinx()
            ax2.plot(summary["period"], summary["high"], marker='^', lw=0.8, color='tab:green')
            ax2.plot(summary["period"], summary["low"], marker='v', lw=0.8, color='tab:red')
            ax2.set_ylabel("high / low")
        ax.set_title("Volume by period")
        ax.set_xlabel("period")
        ax.set_ylabel("volume")

        ax = axes[2]
        if "efficiencyOfAllocation" in summary:
            ax.plot(summary["period"], summary["efficiencyOfAllocation"], marker='o', lw=0.8)
        ax.set_title("Efficiency of allocation (cumulative)")
        ax.set_xlabel("period")
        ax.set_ylabel("%")
        ax.grid(True, linestyle='--', alpha=0.4)

        fig.tight_layout()
        pdf.savefig(fig)
        plt.close(fig)
    return path
