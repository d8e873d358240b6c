#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Feb 10 11:40:05 2026

@author: petermillington

Reference single-good matching engine with price-time priority.
"""
from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from market.events import Order, OrderAccepted, OrderRejected, Trade


class MatchingEngine:
    """
    Continuous double auction for one good.

    Orders are queued with `submit` and handled one at a time by `process`.
    Every accepted order is stored in an append-only slot table, so a slot
    index identifies the order (and through it the agent) for the lifetime
    of the period.  Trades are single-unit and execute at the price of the
    resting order.

    Events (`OrderAccepted`, `OrderRejected`, `Trade`) are handed to the
    `on_event` consumer in the order they happen.

    Parameters
    ----------
    goods : str
        Name of the traded good.
    money : str
        Name of the money good.
    min_price, max_price : float, optional
        Orders priced outside these bounds are rejected.
    on_event : callable, optional
        Consumer for the event stream.
    """

    def __init__(self,
                 goods: str = "X",
                 money: str = "money",
                 min_price: Optional[float] = None,
                 max_price: Optional[float] = None,
                 on_event: Optional[Callable[[object], None]] = None):
        self.goods = goods
        self.money = money
        self.min_price = min_price
        self.max_price = max_price
        self.on_event = on_event
        self.clear()

    def clear(self) -> None:
        """Discard the book, the slot table and anything still queued."""
        self.inbox: Deque[Order] = deque()
        self.slots: List[Order] = []
        self.remaining: Dict[int, int] = {}
        self.bids: List[int] = []
        self.asks: List[int] = []
        self.trades: List[Trade] = []

    # -------- Order flow --------
    def submit(self, order: Order) -> None:
        self.inbox.append(order)

    def process(self) -> bool:
        """
        Handle one queued order.  Returns True while more queued orders
        remain.
        """
        if not self.inbox:
            return False
        order = self.inbox.popleft()
        reason = self._check(order)
        if reason:
            self._publish(OrderRejected(order=order, reason=reason))
        else:
            self._publish(OrderAccepted(order=order))
            self._accept(order)
        return bool(self.inbox)

    def _check(self, order: Order) -> str:
        if (order.buy_price is None) == (order.sell_price is None):
            return "order must carry exactly one of buy_price, sell_price"
        if order.q is None or order.q <= 0:
            return "order quantity must be positive"
        price = order.buy_price if order.is_buy else order.sell_price
        if price is None or price < 0:
            return "order price must be non-negative"
        if self.min_price is not None and price < self.min_price:
            return f"price {price} below min_price {self.min_price}"
        if self.max_price is not None and price > self.max_price:
            return f"price {price} above max_price {self.max_price}"
        return ""

    def _accept(self, order: Order) -> None:
        if order.cancel:
            self.cancel_agent_orders(order.agent_id)
        slot = len(self.slots)
        self.slots.append(order)
        self.remaining[slot] = int(order.q)
        if order.is_buy:
            self._match(slot, self.asks, lambda resting: self.slots[resting].sell_price <= order.buy_price)
            if self.remaining[slot] > 0:
                self._rest(slot, self.bids, key=lambda s: (-self.slots[s].buy_price, s))
        else:
            self._match(slot, self.bids, lambda resting: self.slots[resting].buy_price >= order.sell_price)
            if self.remaining[slot] > 0:
                self._rest(slot, self.asks, key=lambda s: (self.slots[s].sell_price, s))

    def _match(self, slot: int, opposite: List[int], crosses: Callable[[int], bool]) -> None:
        incoming = self.slots[slot]
        while self.remaining[slot] > 0 and opposite and crosses(opposite[0]):
            resting = opposite[0]
            resting_order = self.slots[resting]
            price = resting_order.sell_price if incoming.is_buy else resting_order.buy_price
            if incoming.is_buy:
                buy_idx, sell_idx = slot, resting
            else:
                buy_idx, sell_idx = resting, slot
            self.remaining[slot] -= 1
            self.remaining[resting] -= 1
            if self.remaining[resting] <= 0:
                opposite.pop(0)
            trade = Trade(t=incoming.t,
                          total_q=1,
                          buy_indexes=(buy_idx,),
                          sell_indexes=(sell_idx,),
                          prices=(price,),
                          initiator="buy" if incoming.is_buy else "sell")
            self.trades.append(trade)
            self._publish(trade)

    @staticmethod
    def _rest(slot: int, side: List[int], key) -> None:
        side.append(slot)
        side.sort(key=key)

    def cancel_agent_orders(self, agent_id) -> None:
        """Remove every resting order of `agent_id` from the book."""
        self.bids = [s for s in self.bids if self.slots[s].agent_id != agent_id]
        self.asks = [s for s in self.asks if self.slots[s].agent_id != agent_id]

    def _publish(self, event) -> None:
        if self.on_event is not None:
            self.on_event(event)

    # -------- Lookups --------
    def identity(self, slot: int):
        """Agent id that submitted the order in `slot`, or None."""
        if slot is None or slot < 0 or slot >= len(self.slots):
            return None
        return self.slots[slot].agent_id

    def best_bid(self) -> Optional[float]:
        return self.slots[self.bids[0]].buy_price if self.bids else None

    def best_ask(self) -> Optional[float]:
        return self.slots[self.asks[0]].sell_price if self.asks else None

    def last_trade_price(self) -> Optional[float]:
        return self.trades[-1].prices[0] if self.trades else None
