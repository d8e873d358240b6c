#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Wed Feb 11 13:27:09 2026

@author: petermillington

Pricing policies for the robot traders.
"""
from typing import Optional
import numpy as np

from agents.base_agent import Trader


class ZIAgent(Trader):
    """
    Gode/Sunder zero-intelligence trader.  Bids are uniform between the
    minimum price and the unit value, asks uniform between the unit cost and
    the maximum price.  With the budget constraint ignored the whole
    [min_price, max_price] range is used.
    """

    def bid_price(self, value: float, market) -> Optional[float]:
        lo = self.min_price if self.min_price is not None else 0.0
        hi = self._bid_ceiling(value)
        return self._draw(lo, hi, up=False)

    def ask_price(self, cost: float, market) -> Optional[float]:
        lo = self._ask_floor(cost)
        hi = self.max_price if self.max_price is not None else cost
        return self._draw(lo, hi, up=True)

    def _draw(self, lo: float, hi: float, up: bool) -> Optional[float]:
        if hi is None or hi < lo:
            return None
        if self.integer:
            lo_i, hi_i = int(np.ceil(lo)), int(np.floor(hi))
            if hi_i < lo_i:
                return None
            return float(self.rng.integers(lo_i, hi_i + 1))
        return float(self.rng.uniform(lo, hi))


class UnitAgent(ZIAgent):
    """
    Quotes within one unit of the last trade price of the current period,
    falling back to zero-intelligence pricing before the first trade.
    """

    def bid_price(self, value: float, market) -> Optional[float]:
        last = market.last_trade_price()
        if last is None:
            return super().bid_price(value, market)
        price = self._finish_price(last + self.rng.uniform(-1.0, 1.0))
        ceiling = self._bid_ceiling(value)
        if ceiling is None or price > ceiling:
            return None
        return max(price, self.min_price or 0.0)

    def ask_price(self, cost: float, market) -> Optional[float]:
        last = market.last_trade_price()
        if last is None:
            return super().ask_price(cost, market)
        price = self._finish_price(last + self.rng.uniform(-1.0, 1.0), up=True)
        if price < self._ask_floor(cost):
            return None
        if self.max_price is not None:
            price = min(price, self.max_price)
        return price


class OneupmanshipAgent(Trader):
    """
    Improves the current best quote by one unit while the budget allows.
    Opens at min_price (bids) or max_price (asks) on an empty side.
    """

    def bid_price(self, value: float, market) -> Optional[float]:
        best = market.best_bid()
        price = (self.min_price or 0.0) if best is None else best + 1
        ceiling = self._bid_ceiling(value)
        if ceiling is None or price > ceiling:
            return None
        return self._finish_price(price)

    def ask_price(self, cost: float, market) -> Optional[float]:
        best = market.best_ask()
        if best is None:
            if self.max_price is None:
                return None
            price = self.max_price
        else:
            price = best - 1
        if price < self._ask_floor(cost):
            return None
        return self._finish_price(price, up=True)


class KaplanSniperAgent(Trader):
    """
    Kaplan's sniper: waits in the background and takes the opposite best
    quote when
      - it is at least as good as the juicy price from last period's ohlc,
      - the bid/ask spread is under `spread_threshold` of the ask, or
      - less than `near_end_fraction` of the period remains,
    and the trade is profitable.

    Juicy prices come from the SniperBehavior injected by the simulation.
    """
    behavior_kind = "sniper"

    def __init__(self, *args, spread_threshold: float = 0.10,
                 near_end_fraction: float = 0.10, **kwargs):
        super().__init__(*args, **kwargs)
        self.spread_threshold = spread_threshold
        self.near_end_fraction = near_end_fraction

    def _near_end(self) -> bool:
        remaining = self.period.end_time - (self.wake_time or 0.0)
        return remaining < self.near_end_fraction * self.period.duration

    def _tight(self, bid: Optional[float], ask: Optional[float]) -> bool:
        if bid is None or ask is None or ask <= 0:
            return False
        return (ask - bid) / ask < self.spread_threshold

    def bid_price(self, value: float, market) -> Optional[float]:
        ask = market.best_ask()
        if ask is None:
            return None
        ceiling = self._bid_ceiling(value)
        if ceiling is None or ask > ceiling:
            return None
        juicy = self.behavior.juicy_bid_price() if self.behavior is not None else None
        if ((juicy is not None and ask <= juicy)
                or self._tight(market.best_bid(), ask)
                or self._near_end()):
            return float(ask)
        return None

    def ask_price(self, cost: float, market) -> Optional[float]:
        bid = market.best_bid()
        if bid is None:
            return None
        if bid < self._ask_floor(cost):
            return None
        juicy = self.behavior.juicy_ask_price() if self.behavior is not None else None
        if ((juicy is not None and bid >= juicy)
                or self._tight(bid, market.best_ask())
                or self._near_end()):
            return float(bid)
        return None
