#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Fri Feb 13 11:20:52 2026

@author: petermillington
"""
from typing import Tuple

from market.events import Order, Trade, trade_summary


class TradeRecorder:
    """
    Writes one `trade` row per trade and collects the period's trade prices.

    Only single-unit trades between one buyer and one seller are valid; any
    other shape, an unresolvable buyer or seller, or a missing price raises
    ValueError before anything is recorded.

    Row: period, t, tp, price, buyerAgentId, buyerValue, buyerProfit,
         sellerAgentId, sellerCost, sellerProfit
    where tp = t - period * period_duration.
    """

    def __init__(self, sim):
        self.sim = sim

    def record(self, trade: Trade) -> Tuple[object, object, float]:
        sim = self.sim
        if (trade.total_q != 1
                or len(trade.buy_indexes) != 1
                or len(trade.sell_indexes) != 1
                or len(trade.prices) != 1):
            raise ValueError(f"TradeRecorder.record: single unit trades required, got: {trade_summary(trade)}")

        buyer_id = sim.engine.identity(trade.buy_indexes[0])
        if buyer_id is None:
            raise ValueError(f"TradeRecorder.record: buyer id is undefined, trade={trade_summary(trade)}")
        seller_id = sim.engine.identity(trade.sell_indexes[0])
        if seller_id is None:
            raise ValueError(f"TradeRecorder.record: seller id is undefined, trade={trade_summary(trade)}")

        price = trade.prices[0]
        if not price:
            raise ValueError(f"TradeRecorder.record: undefined price in trade {trade_summary(trade)}")

        buyer = sim.pool.agents_by_id.get(buyer_id)
        seller = sim.pool.agents_by_id.get(seller_id)
        if buyer is None or seller is None:
            raise ValueError(f"TradeRecorder.record: no agent for buyer {buyer_id} / seller {seller_id}")

        good = sim.engine.goods
        buyer_value = buyer.unit_value_function(good, buyer.inventory)
        seller_cost = seller.unit_cost_function(good, seller.inventory)
        buyer_profit = None if buyer_value is None else buyer_value - price
        seller_profit = None if seller_cost is None else price - seller_cost

        row = [
            sim.period,
            trade.t,
            trade.t - (sim.period * sim.period_duration),
            price,
            buyer_id,
            buyer_value,
            buyer_profit,
            seller_id,
            seller_cost,
            seller_profit,
        ]
        sim.period_trade_prices.append(price)
        log = sim.logs.get("trade")
        if log is not None:
            log.write(row)
        return buyer_id, seller_id, price


class OrderRecorder:
    """
    Writes accepted orders to buyorder/sellorder and rejected orders to
    rejectbuyorder/rejectsellorder.  Orders without a known agent or a usable
    price are skipped.

    Row: period, t, tp, id, x, buyLimitPrice, value, sellLimitPrice, cost
    """

    def __init__(self, sim):
        self.sim = sim

    def record(self, prefix: str, order: Order) -> None:
        sim = self.sim
        agent = sim.pool.agents_by_id.get(order.agent_id)
        if agent is None:
            return
        good = sim.engine.goods
        tp = order.t - (sim.period * sim.period_duration)
        held = agent.inventory.get(good, 0)

        buy_log = sim.logs.get(prefix + "buyorder")
        if order.buy_price and buy_log is not None:
            buy_log.write([
                sim.period,
                order.t,
                tp,
                order.agent_id,
                held,
                order.buy_price,
                agent.unit_value_function(good, agent.inventory),
                "",
                "",
            ])

        sell_log = sim.logs.get(prefix + "sellorder")
        if order.sell_price and sell_log is not None:
            sell_log.write([
                sim.period,
                order.t,
                tp,
                order.agent_id,
                held,
                "",
                "",
                order.sell_price,
                agent.unit_cost_function(good, agent.inventory),
            ])
