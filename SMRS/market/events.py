#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Feb 10 11:02:37 2026

@author: petermillington

Orders and the typed event stream produced by the matching engine.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

TRADE = "trade"
ORDER_ACCEPTED = "preorder"
ORDER_REJECTED = "reject"


@dataclass(frozen=True)
class Order:
    """
    A single order.  `buy_price` and `sell_price` are mutually exclusive;
    the engine rejects an order that carries both or neither.
    """
    t: float
    agent_id: int
    q: int = 1
    buy_price: Optional[float] = None
    sell_price: Optional[float] = None
    cancel: bool = False

    @property
    def is_buy(self) -> bool:
        return self.buy_price is not None and self.sell_price is None

    @property
    def is_sell(self) -> bool:
        return self.sell_price is not None and self.buy_price is None


@dataclass(frozen=True)
class Trade:
    """
    Trade report.  Indexes refer to slots in the engine's order table,
    resolved to agent ids with `MatchingEngine.identity`.
    """
    t: float
    total_q: int
    buy_indexes: Tuple[int, ...]
    sell_indexes: Tuple[int, ...]
    prices: Tuple[float, ...]
    initiator: str = "buy"
    kind: str = field(default=TRADE, init=False)


@dataclass(frozen=True)
class OrderAccepted:
    order: Order
    kind: str = field(default=ORDER_ACCEPTED, init=False)


@dataclass(frozen=True)
class OrderRejected:
    order: Order
    reason: str = ""
    kind: str = field(default=ORDER_REJECTED, init=False)


def trade_summary(trade: Trade) -> str:
    """Short description used in error messages."""
    return (f"Trade(t={trade.t}, total_q={trade.total_q}, "
            f"buy={list(trade.buy_indexes)}, sell={list(trade.sell_indexes)}, "
            f"prices={list(trade.prices)})")


def event_kinds(events: List[object]) -> List[str]:
    return [e.kind for e in events]
