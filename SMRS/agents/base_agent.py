#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Wed Feb 11 10:05:44 2026

@author: petermillington

Base interface for all trading robots.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional
import numpy as np


@dataclass
class PeriodClock:
    """Timing of the agent's current period (equal durations)."""
    number: int = 0
    duration: float = 1000

    @property
    def start_time(self) -> float:
        return self.number * self.duration

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


class Trader:
    """
    Robot trader for a single market.

    A buyer holds `values[good]`, the redemption value of each successive
    unit it buys.  A seller holds `costs[good]`, the cost of each successive
    unit it sells.  Inventory of the good counts up for purchases and down
    for sales; money carries over from one period to the next.

    Each wake the trader quotes at most one bid and one ask through its
    injected `behavior`, then draws its next wake time from an exponential
    inter-arrival with mean 1/rate.

    Subclasses implement the pricing policy:
    - bid_price(value, market) -> float or None
    - ask_price(cost, market) -> float or None
    """
    behavior_kind = "standard"

    def __init__(self,
                 id: int,
                 rate: float = 1.0,
                 min_price: Optional[float] = 0.0,
                 max_price: Optional[float] = None,
                 integer: bool = False,
                 ignore_budget_constraint: bool = False,
                 period_duration: float = 1000,
                 goods: str = "X",
                 money: str = "money",
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        self.id = id
        self.rate = float(rate)
        self.min_price = min_price
        self.max_price = max_price
        self.integer = integer
        self.ignore_budget_constraint = ignore_budget_constraint
        self.goods = goods
        self.money = money
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.values: Dict[str, List[float]] = {}
        self.costs: Dict[str, List[float]] = {}
        self.inventory: Dict[str, float] = {goods: 0, money: 0.0}
        self.period = PeriodClock(number=0, duration=period_duration)
        self.wake_time: Optional[float] = None

        # set by the simulation
        self.behavior = None
        self.markets: list = []

    # -------- Values and costs --------
    def unit_value_function(self, good: str, inventory: Dict[str, float]) -> Optional[float]:
        """Value of the next unit bought, None when no valued units remain."""
        vals = self.values.get(good)
        if not vals:
            return None
        held = int(inventory.get(good, 0))
        if 0 <= held < len(vals):
            return vals[held]
        return None

    def unit_cost_function(self, good: str, inventory: Dict[str, float]) -> Optional[float]:
        """Cost of the next unit sold, None when no costed units remain."""
        costs = self.costs.get(good)
        if not costs:
            return None
        sold = -int(inventory.get(good, 0))
        if 0 <= sold < len(costs):
            return costs[sold]
        return None

    # -------- Period lifecycle --------
    def init_period(self, number: int) -> None:
        """Reset goods and the wake clock.  Money is kept."""
        self.period.number = number
        goods = {self.goods, *self.values, *self.costs, *self.inventory}
        goods.discard(self.money)
        for good in goods:
            self.inventory[good] = 0
        self.wake_time = self.period.start_time
        self.wake_time = self.next_wake_time()

    def end_period(self) -> None:
        """Redeem units bought at their values and pay for units sold at their costs."""
        for good, vals in self.values.items():
            held = max(int(self.inventory.get(good, 0)), 0)
            self.inventory[self.money] += float(sum(vals[:held]))
        for good, costs in self.costs.items():
            sold = max(-int(self.inventory.get(good, 0)), 0)
            self.inventory[self.money] -= float(sum(costs[:sold]))
        for good in list(self.inventory):
            if good != self.money:
                self.inventory[good] = 0

    def next_wake_time(self) -> float:
        return self.wake_time + float(self.rng.exponential(1.0 / self.rate))

    def transfer(self, good: str, quantity: float, money: float) -> None:
        self.inventory[good] = self.inventory.get(good, 0) + quantity
        self.inventory[self.money] = self.inventory.get(self.money, 0.0) + money

    # -------- Acting --------
    def wake(self) -> None:
        """Quote once at the current wake time, then schedule the next wake."""
        self.act()
        self.wake_time = self.next_wake_time()

    def act(self) -> None:
        if self.behavior is None:
            return
        for market in self.markets:
            good = market.goods
            value = self.unit_value_function(good, self.inventory)
            if value is not None:
                price = self.bid_price(value, market)
                if price is not None:
                    self.behavior.bid(market, price)
            cost = self.unit_cost_function(good, self.inventory)
            if cost is not None:
                price = self.ask_price(cost, market)
                if price is not None:
                    self.behavior.ask(market, price)

    def bid_price(self, value: float, market) -> Optional[float]:
        raise NotImplementedError("Must implement bid_price in subclass.")

    def ask_price(self, cost: float, market) -> Optional[float]:
        raise NotImplementedError("Must implement ask_price in subclass.")

    # -------- Budget helpers --------
    def _bid_ceiling(self, value: float) -> Optional[float]:
        if self.ignore_budget_constraint:
            return self.max_price if self.max_price is not None else value
        if self.max_price is not None:
            return min(value, self.max_price)
        return value

    def _ask_floor(self, cost: float) -> float:
        floor = self.min_price if self.min_price is not None else 0.0
        if self.ignore_budget_constraint:
            return floor
        return max(cost, floor)

    def _finish_price(self, price: float, up: bool = False) -> float:
        """Round asks up and bids down when integer prices are required."""
        if not self.integer:
            return float(price)
        return float(np.ceil(price)) if up else float(np.floor(price))
