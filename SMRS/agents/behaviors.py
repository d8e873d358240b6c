#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Wed Feb 11 16:50:31 2026

@author: petermillington

How an agent sends its quotes to a market.
"""
from typing import Optional

from market.events import Order


class TradingBehavior:
    """
    Sends one-unit orders stamped with the agent's wake time and drains the
    market's processing queue before returning.

    Parameters
    ----------
    agent : Trader
        Agent whose id and wake time stamp the orders.
    goods : str
        Orders are only sent to a market trading this good.
    keep_previous_orders : bool
        When False every order cancels the agent's resting orders.
    """
    kind = "standard"

    def __init__(self, agent, goods: str = "X", keep_previous_orders: bool = False, logs=None):
        self.agent = agent
        self.goods = goods
        self.keep_previous_orders = keep_previous_orders
        self.logs = logs if logs is not None else {}

    def bid(self, market, price: float) -> None:
        self._send(market, Order(t=self.agent.wake_time,
                                 agent_id=self.agent.id,
                                 q=1,
                                 buy_price=price,
                                 cancel=not self.keep_previous_orders))

    def ask(self, market, price: float) -> None:
        self._send(market, Order(t=self.agent.wake_time,
                                 agent_id=self.agent.id,
                                 q=1,
                                 sell_price=price,
                                 cancel=not self.keep_previous_orders))

    def _send(self, market, order: Order) -> None:
        if market.goods != self.goods:
            return
        market.submit(order)
        while market.process():
            pass


class SniperBehavior(TradingBehavior):
    """Adds the juicy prices: last period's high (bids) and low (asks)."""
    kind = "sniper"

    def juicy_bid_price(self) -> Optional[float]:
        ohlc = self.logs.get("ohlc")
        return ohlc.last_by_key("high") if ohlc is not None else None

    def juicy_ask_price(self) -> Optional[float]:
        ohlc = self.logs.get("ohlc")
        return ohlc.last_by_key("low") if ohlc is not None else None


BEHAVIORS = {
    "standard": TradingBehavior,
    "sniper": SniperBehavior,
}


def behavior_for(agent, **kwargs) -> TradingBehavior:
    """Build the behavior variant named by the agent's `behavior_kind` tag."""
    kind = getattr(agent, "behavior_kind", "standard")
    if kind not in BEHAVIORS:
        raise ValueError(f"Unknown behavior kind {kind!r} for {type(agent).__name__}")
    return BEHAVIORS[kind](agent, **kwargs)
