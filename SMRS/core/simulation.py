#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb 16 15:02:44 2026

@author: petermillington
"""
import asyncio
import os
from typing import Callable, Dict, Optional

from agents.behaviors import behavior_for
from agents.registry import AGENT_REGISTRY
from core.population import build_population
from core.scheduler import PeriodScheduler, make_driver
from data.log_sink import LogSink
from data.metrics import (ohlc, volume, profit, wealth_snapshot,
                          efficiency_of_allocation, maximum_gains_from_trade)
from data.recorders import TradeRecorder, OrderRecorder
from market.engine import MatchingEngine
from market.events import TRADE, ORDER_ACCEPTED, ORDER_REJECTED

ORDER_HEADER = ['period', 't', 'tp', 'id', 'x', 'buyLimitPrice', 'value', 'sellLimitPrice', 'cost']

LOG_HEADERS = {
    "ohlc": ['period', 'open', 'high', 'low', 'close'],
    "buyorder": ORDER_HEADER,
    "sellorder": ORDER_HEADER,
    "rejectbuyorder": ORDER_HEADER,
    "rejectsellorder": ORDER_HEADER,
    "trade": ['period', 't', 'tp', 'price', 'buyerAgentId', 'buyerValue', 'buyerProfit',
              'sellerAgentId', 'sellerCost', 'sellerProfit'],
    "volume": ['period', 'volume'],
    "effalloc": ['period', 'efficiencyOfAllocation'],
}

LOG_NAMES = ['trade', 'buyorder', 'sellorder', 'rejectbuyorder', 'rejectsellorder',
             'profit', 'ohlc', 'volume', 'effalloc']


class Simulation:
    """
    Single-market robot trading simulation.

    Owns the configuration, the logs, the period counter and the period's
    trade prices; holds the matching engine and the agent pool.  Each call to
    `run_period` advances exactly one period:
      1) period += 1, trade prices reset, agents and book reset
      2) agents run to the period end under the chosen timing driver
      3) agents settle, then profit / ohlc / volume / effalloc rows are logged

    Parameters
    ----------
    config : SimulationConfig
    agent_registry : dict, optional
        Agent type name -> factory.  Defaults to AGENT_REGISTRY.

    Attributes
    ----------
    period : int
        Number of the current (or last completed) period, 0 before the first.
    period_trade_prices : list
        Trade prices of the current period, in trade order.
    logs : dict
        Log name -> LogSink for every enabled log.
    engine : MatchingEngine
    pool, buyers_pool, sellers_pool : AgentPool
    """

    def __init__(self, config, agent_registry: Optional[Dict[str, Callable]] = None):
        self.config = config
        self.agent_registry = dict(agent_registry if agent_registry is not None else AGENT_REGISTRY)
        self.period = 0
        self.period_trade_prices = []
        self.period_duration = config.period_duration
        self.realtime_offset = None
        self._max_gains = None

        self._init_logs()
        self._init_market()
        self._init_agents()

        self.trade_recorder = TradeRecorder(self)
        self.order_recorder = OrderRecorder(self)
        self.scheduler = PeriodScheduler(self)

        if not config.silent:
            print(f"duration of each period = {self.period_duration}")
            print(" ")
            print(f"Number of Buyers  = {self.number_of_buyers}")
            print(f"Number of Sellers = {self.number_of_sellers}")
            print(f"Total Number of Agents  = {self.number_of_agents}")
            print(" ")
            print(f"minPrice = {config.L}")
            print(f"maxPrice = {config.H}")

    # -------- Setup --------
    def _init_logs(self) -> None:
        cfg = self.config
        names = [n for n in LOG_NAMES if not (cfg.without_order_logs and 'order' in n)]
        self.logs = {}
        for name in names:
            path = os.path.join(cfg.log_dir or ".", f"{name}.csv") if cfg.log_to_file_system else None
            self.logs[name] = LogSink(path).set_header(LOG_HEADERS.get(name))

    def _init_market(self) -> None:
        x = self.config.x_market
        self.engine = MatchingEngine(goods=x.goods,
                                     money=x.money,
                                     min_price=x.min_price,
                                     max_price=x.max_price,
                                     on_event=self.handle_event)

    def _init_agents(self) -> None:
        self.pool, self.buyers_pool, self.sellers_pool = build_population(
            self.config, self.agent_registry, self.teach_agent)
        self.number_of_buyers = len(self.buyers_pool)
        self.number_of_sellers = len(self.sellers_pool)
        self.number_of_agents = self.number_of_buyers + self.number_of_sellers

    def teach_agent(self, agent) -> None:
        """Give a new agent its market and the behavior variant it asks for."""
        agent.behavior = behavior_for(agent,
                                      goods=self.config.x_market.goods,
                                      keep_previous_orders=self.config.keep_previous_orders,
                                      logs=self.logs)
        agent.markets = [self.engine]

    # -------- Event stream --------
    def handle_event(self, event) -> None:
        """Reduce one matching-engine event into logs and settlement."""
        if event.kind == TRADE:
            buyer_id, seller_id, price = self.trade_recorder.record(event)
            self.pool.settle(buyer_id, seller_id, price, good=self.engine.goods)
        elif event.kind == ORDER_ACCEPTED:
            if not self.config.without_order_logs:
                self.order_recorder.record('', event.order)
        elif event.kind == ORDER_REJECTED:
            if not self.config.without_order_logs:
                self.order_recorder.record('reject', event.order)
        else:
            raise ValueError(f"Simulation.handle_event: unknown event kind {event.kind!r}")

    # -------- Running --------
    def run_period(self, mode=None):
        """
        Advance exactly one period.

        mode "sync" (or an ImmediateDriver) returns the simulation.  "async"
        and "realtime" (or their drivers) return an awaitable resolving to
        the simulation.  None means "realtime" if config.realtime is set,
        otherwise "async".
        """
        if mode is None:
            mode = "realtime" if self.config.realtime else "async"
        driver = make_driver(mode)
        if driver.blocking:
            return self.scheduler.run(driver)
        return self.scheduler.run_async(driver)

    def run(self, sync: bool = False, update: Optional[Callable] = None, delay: float = 0.02):
        """
        Run until `period` reaches config.periods.

        sync=True runs every period now and returns the simulation.  Otherwise
        returns an awaitable that resolves to the simulation.  `update(sim)` is
        called after each period; `delay` is the pause in seconds between
        async periods.
        """
        if not self.config.silent:
            print(f"Periods = {self.config.periods}")
        if sync:
            while self.period < self.config.periods:
                self.run_period("sync")
                if callable(update):
                    update(self)
            if not self.config.silent:
                print("done")
            return self
        return self._run_async(update, delay)

    async def _run_async(self, update, delay):
        while self.period < self.config.periods:
            await self.run_period()
            if callable(update):
                update(self)
            if self.period < self.config.periods:
                await asyncio.sleep(delay)
        if not self.config.silent:
            print("done")
        return self

    # -------- Derived rows --------
    def get_maximum_possible_gains_from_trade(self) -> float:
        """
        Computed once from config.buyer_values / config.seller_costs and
        cached for the life of the simulation, even if the config changes.
        """
        if self._max_gains is None:
            self._max_gains = maximum_gains_from_trade(self.config.buyer_values,
                                                       self.config.seller_costs)
        return self._max_gains

    def log_period(self) -> None:
        """Write the end-of-period profit, ohlc, volume and effalloc rows."""
        final_money = wealth_snapshot(self.pool.agents, self.config.x_market.money)
        prices = self.period_trade_prices
        if 'profit' in self.logs:
            self.logs['profit'].write(profit(final_money))
        if 'ohlc' in self.logs:
            self.logs['ohlc'].write(ohlc(self.period, prices))
        if 'volume' in self.logs:
            self.logs['volume'].write(volume(self.period, prices))
        if 'effalloc' in self.logs:
            self.logs['effalloc'].write(
                efficiency_of_allocation(self.period, final_money,
                                         self.get_maximum_possible_gains_from_trade()))
