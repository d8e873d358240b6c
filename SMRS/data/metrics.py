#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Fri Feb 13 09:48:03 2026

@author: petermillington

End-of-period derived rows: ohlc, volume, profit and efficiency of allocation.
"""
from typing import List, Optional, Sequence
import numpy as np


def ohlc(period: int, prices: Sequence[float]) -> Optional[list]:
    """[period, open, high, low, close], or None for a period without trades."""
    if len(prices) == 0:
        return None
    return [period, prices[0], max(prices), min(prices), prices[-1]]


def volume(period: int, prices: Sequence[float]) -> list:
    return [period, len(prices)]


def wealth_snapshot(agents, money: str = "money") -> List[float]:
    """Money held by each agent, in pool order."""
    return [a.inventory[money] for a in agents]


def profit(snapshot: Sequence[float]) -> List[float]:
    return list(snapshot)


def efficiency_of_allocation(period: int, snapshot: Sequence[float], max_gains: float) -> Optional[list]:
    """
    [period, 100 * total money / max_gains], or None unless max_gains > 0.

    Money carries over between periods, so after the first period this is a
    cumulative figure and can exceed 100.
    """
    if not max_gains > 0:
        return None
    total = 0.0
    for m in snapshot:
        total += m
    return [period, 100 * (total / max_gains)]


def maximum_gains_from_trade(values: Sequence[float], costs: Sequence[float]) -> float:
    """
    Sort values high first and costs low first, then add up value - cost
    over the leading pairs while the pair is profitable.
    """
    if values is None or costs is None:
        return 0.0
    v = np.sort(np.asarray(values, dtype=float))[::-1]
    c = np.sort(np.asarray(costs, dtype=float))
    n = min(v.size, c.size)
    gains = v[:n] - c[:n]
    unprofitable = np.flatnonzero(gains <= 0)
    stop = int(unprofitable[0]) if unprofitable.size else n
    return float(gains[:stop].sum())
