#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb  9 14:18:27 2026

@author: petermillington
"""
# sim_config.py
import json
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple


def positive_number_array(x) -> Optional[list]:
    """
    Normalise a rate setting to a list of positive floats.

    Accepts a number, a numeric string or a sequence of those.  Returns None
    when nothing usable is given so callers can fall back to a default.
    """
    if x is None:
        return None
    if isinstance(x, (str, int, float)) and not isinstance(x, bool):
        x = [x]
    try:
        out = [float(v) for v in x]
    except (TypeError, ValueError):
        return None
    if not out or any(v <= 0 for v in out):
        return None
    return out


@dataclass(frozen=True)
class MarketConfig:
    """
    Settings forwarded to the matching engine.
    min_price / max_price: orders outside these bounds are rejected.
    """
    goods: str = "X"
    money: str = "money"
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "MarketConfig":
        data = dict(data or {})
        return cls(goods=data.get("goods", "X"),
                   money=data.get("money", "money"),
                   min_price=data.get("min_price", data.get("minPrice")),
                   max_price=data.get("max_price", data.get("maxPrice")))


# camelCase keys of the stand-alone config.json format
_CAMEL_KEYS = {
    "periodDuration": "period_duration",
    "buyerAgentType": "buyer_agent_type",
    "sellerAgentType": "seller_agent_type",
    "buyerRate": "buyer_rate",
    "sellerRate": "seller_rate",
    "buyerValues": "buyer_values",
    "sellerCosts": "seller_costs",
    "numberOfBuyers": "number_of_buyers",
    "numberOfSellers": "number_of_sellers",
    "xMarket": "x_market",
    "ignoreBudgetConstraint": "ignore_budget_constraint",
    "keepPreviousOrders": "keep_previous_orders",
    "withoutOrderLogs": "without_order_logs",
    "logDir": "log_dir",
    "logToFileSystem": "log_to_file_system",
}

_TUPLE_FIELDS = ("buyer_agent_type", "seller_agent_type", "buyer_values", "seller_costs")


@dataclass(frozen=True)
class SimulationConfig:
    """
    Configuration of a single-market robot simulation.

    periods: number of trading periods to run
    period_duration: length of each period in simulated seconds
    buyer_agent_type / seller_agent_type: rotation of registered agent type
        names used when creating buyers / sellers
    buyer_rate / seller_rate: poisson wake rate(s) per agent, a number or a
        list broadcast cyclically over agent index
    buyer_values / seller_costs: aggregate demand / supply for the good,
        dealt out among buyers / sellers
    number_of_buyers / number_of_sellers: default to one agent per value/cost
    L, H: minimum and maximum suggested agent prices
    integer: agents quote integer prices
    ignore_budget_constraint: agents price as if value were H / cost were L
    keep_previous_orders: orders do not cancel the agent's resting orders
    silent: suppress console messages
    without_order_logs: drop buyorder/sellorder and reject logs
    realtime: default discipline for async periods is wall-clock paced
    log_dir / log_to_file_system: write each log to <log_dir>/<name>.csv
    seed: master seed for the agents' generators
    """
    periods: int
    period_duration: float = 1000
    buyer_agent_type: Tuple[str, ...] = ("ZIAgent",)
    seller_agent_type: Tuple[str, ...] = ("ZIAgent",)
    buyer_rate: Any = 1.0
    seller_rate: Any = 1.0
    buyer_values: Tuple[float, ...] = ()
    seller_costs: Tuple[float, ...] = ()
    number_of_buyers: Optional[int] = None
    number_of_sellers: Optional[int] = None
    x_market: MarketConfig = field(default_factory=MarketConfig)
    integer: bool = False
    ignore_budget_constraint: bool = False
    keep_previous_orders: bool = False
    L: float = 0.0
    H: float = 200.0
    silent: bool = False
    without_order_logs: bool = False
    realtime: bool = False
    log_dir: str = "."
    log_to_file_system: bool = False
    seed: int | None = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        """Build from a dict with snake_case or camelCase keys."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_KEYS.get(key, key)
            if name in known and name != "extra":
                kwargs[name] = value
            else:
                extra[key] = value
        if "periods" not in kwargs:
            raise ValueError("SimulationConfig: 'periods' is required")
        for name in _TUPLE_FIELDS:
            if name in kwargs and kwargs[name] is not None:
                value = kwargs[name]
                kwargs[name] = (value,) if isinstance(value, str) else tuple(value)
        for name in ("buyer_rate", "seller_rate"):
            if isinstance(kwargs.get(name), list):
                kwargs[name] = tuple(kwargs[name])
        if not isinstance(kwargs.get("x_market"), MarketConfig):
            kwargs["x_market"] = MarketConfig.from_dict(kwargs.get("x_market"))
        kwargs["extra"] = extra
        return cls(**kwargs)


def load_config(path: str) -> SimulationConfig:
    with open(path, "r") as f:
        data = json.load(f)
    return SimulationConfig.from_dict(data)
