#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Feb 24 09:22:51 2026

@author: petermillington
"""

"""
Unit tests for traders, pricing policies, behaviors and the agent pool
"""
import asyncio

import numpy as np
import pytest
from agents.base_agent import Trader
from agents.traders import ZIAgent, UnitAgent, OneupmanshipAgent, KaplanSniperAgent
from agents.behaviors import TradingBehavior, SniperBehavior, behavior_for
from agents.pool import AgentPool
from agents.registry import AGENT_REGISTRY, new_agent
from data.log_sink import LogSink
from market.engine import MatchingEngine


def zi(id, seed=0, **kwargs):
    kwargs.setdefault("min_price", 1)
    kwargs.setdefault("max_price", 200)
    return ZIAgent(id=id, rng=np.random.default_rng(seed), **kwargs)


class TestTraderValues:
    """Test unit value and cost functions"""

    def test_unit_value_follows_inventory(self):
        """Test next unit value depends on units held"""
        a = zi(1)
        a.values["X"] = [90, 70]
        assert a.unit_value_function("X", {"X": 0}) == 90
        assert a.unit_value_function("X", {"X": 1}) == 70
        assert a.unit_value_function("X", {"X": 2}) is None

    def test_unit_cost_follows_sales(self):
        """Test next unit cost depends on units sold"""
        a = zi(1)
        a.costs["X"] = [20, 40]
        assert a.unit_cost_function("X", {"X": 0}) == 20
        assert a.unit_cost_function("X", {"X": -1}) == 40
        assert a.unit_cost_function("X", {"X": -2}) is None

    def test_no_values(self):
        """Test agent without values or costs"""
        a = zi(1)
        assert a.unit_value_function("X", a.inventory) is None
        assert a.unit_cost_function("X", a.inventory) is None

    def test_base_trader_requires_policy(self):
        """Test Trader pricing is abstract"""
        a = Trader(id=1)
        with pytest.raises(NotImplementedError):
            a.bid_price(10, None)


class TestTraderPeriods:
    """Test period lifecycle and settlement"""

    def test_inventory_holds_the_traded_good(self):
        """Test a new trader already carries zero units of its good"""
        a = zi(1)
        assert a.inventory == {"X": 0, "money": 0.0}
        assert Trader(id=2, goods="Y").inventory == {"Y": 0, "money": 0.0}

    def test_init_period_zeroes_valued_goods(self):
        """Test goods named by values or costs start each period at zero"""
        a = zi(1)
        a.inventory = {"money": 5.0}
        a.costs["Z"] = [10]
        a.init_period(1)
        assert a.inventory == {"X": 0, "Z": 0, "money": 5.0}

    def test_init_period_sets_clock(self):
        """Test wake time starts inside the period"""
        a = zi(1, period_duration=100, rate=1.0)
        a.init_period(3)
        assert a.period.start_time == 300
        assert a.period.end_time == 400
        assert a.wake_time > 300

    def test_end_period_redeems_and_keeps_money(self):
        """Test buyer redemption and seller costs at period end"""
        buyer = zi(1)
        buyer.values["X"] = [80, 60]
        seller = zi(2)
        seller.costs["X"] = [20, 30]

        buyer.transfer("X", 1, -50)
        seller.transfer("X", -1, 50)
        buyer.end_period()
        seller.end_period()

        assert buyer.inventory == {"money": 30.0, "X": 0}
        assert seller.inventory == {"money": 30.0, "X": 0}

        buyer.init_period(2)
        assert buyer.inventory["money"] == 30.0

    def test_wake_advances_clock(self):
        """Test wake moves to a later wake time"""
        a = zi(1)
        a.init_period(1)
        before = a.wake_time
        a.wake()
        assert a.wake_time > before


class TestPricingPolicies:
    """Test bid/ask pricing"""

    def test_zi_within_budget(self):
        """Test ZI quotes stay between limits and value/cost"""
        a = zi(1, seed=3)
        for _ in range(200):
            assert 1 <= a.bid_price(60, None) <= 60
            assert 40 <= a.ask_price(40, None) <= 200

    def test_zi_integer_prices(self):
        """Test integer flag gives whole prices"""
        a = zi(1, seed=5, integer=True)
        prices = [a.bid_price(60.5, None) for _ in range(50)]
        assert all(float(p).is_integer() for p in prices)
        assert max(prices) <= 60

    def test_zi_ignore_budget_uses_full_range(self):
        """Test ignoring budget allows bids above value"""
        a = zi(1, seed=11, ignore_budget_constraint=True)
        prices = [a.bid_price(10, None) for _ in range(200)]
        assert max(prices) > 10
        assert max(prices) <= 200

    def test_zi_no_room(self):
        """Test no bid when value is below min price"""
        a = zi(1, min_price=50)
        assert a.bid_price(40, None) is None

    def test_oneupmanship(self):
        """Test improving the best quote by one"""
        engine = MatchingEngine()
        a = OneupmanshipAgent(id=1, min_price=1, max_price=200)
        assert a.bid_price(80, engine) == 1
        assert a.ask_price(20, engine) == 200

        engine.bids = [0]
        engine.slots = [type("O", (), {"buy_price": 79, "agent_id": 9})()]
        assert a.bid_price(80, engine) == 80
        assert a.bid_price(79, engine) is None

    def test_unit_agent_near_last_trade(self):
        """Test unit agent quotes within one of last trade price"""
        engine = MatchingEngine()
        a = UnitAgent(id=1, min_price=1, max_price=200, rng=np.random.default_rng(2))
        engine.trades = [type("T", (), {"prices": (50,)})()]
        for _ in range(50):
            p = a.bid_price(100, engine)
            assert 49 <= p <= 51

    def test_unit_agent_falls_back_to_zi(self):
        """Test unit agent before any trade"""
        a = UnitAgent(id=1, min_price=1, max_price=200, rng=np.random.default_rng(2))
        p = a.bid_price(60, MatchingEngine())
        assert 1 <= p <= 60


class TestBehaviors:
    """Test order sending and behavior dispatch"""

    def test_bid_sends_stamped_order(self):
        """Test behavior builds a one-unit order at the wake time"""
        events = []
        engine = MatchingEngine(on_event=events.append)
        a = zi(7)
        a.wake_time = 123.0
        TradingBehavior(a).bid(engine, 55)

        order = events[0].order
        assert order.t == 123.0
        assert order.agent_id == 7
        assert order.q == 1
        assert order.buy_price == 55
        assert order.cancel is True

    def test_keep_previous_orders(self):
        """Test cancel flag off when previous orders are kept"""
        events = []
        engine = MatchingEngine(on_event=events.append)
        a = zi(7)
        a.wake_time = 1.0
        TradingBehavior(a, keep_previous_orders=True).ask(engine, 55)
        assert events[0].order.cancel is False

    def test_other_goods_ignored(self):
        """Test orders are only sent to a market for the agent's good"""
        events = []
        engine = MatchingEngine(goods="Y", on_event=events.append)
        a = zi(7)
        a.wake_time = 1.0
        TradingBehavior(a, goods="X").bid(engine, 10)
        assert events == []

    def test_dispatch_on_behavior_kind(self):
        """Test sniper agents get the sniper behavior"""
        assert type(behavior_for(zi(1))) is TradingBehavior
        sniper = KaplanSniperAgent(id=2)
        assert type(behavior_for(sniper)) is SniperBehavior

    def test_juicy_prices_from_ohlc(self):
        """Test juicy prices read last ohlc high and low"""
        ohlc = LogSink(header=['period', 'open', 'high', 'low', 'close'])
        behavior = SniperBehavior(KaplanSniperAgent(id=1), logs={"ohlc": ohlc})
        assert behavior.juicy_bid_price() is None
        ohlc.write([1, 50, 65, 42, 60])
        assert behavior.juicy_bid_price() == 65
        assert behavior.juicy_ask_price() == 42

    def test_sniper_takes_juicy_ask(self):
        """Test sniper bids the ask when at or below the juicy price"""
        ohlc = LogSink(header=['period', 'open', 'high', 'low', 'close'])
        ohlc.write([1, 50, 65, 42, 60])
        engine = MatchingEngine()
        sniper = KaplanSniperAgent(id=1, min_price=1, max_price=200, period_duration=1000)
        sniper.behavior = SniperBehavior(sniper, logs={"ohlc": ohlc})
        sniper.init_period(1)
        sniper.wake_time = 1100.0
        engine.asks = [0]
        engine.slots = [type("O", (), {"sell_price": 60, "agent_id": 9})()]
        assert sniper.bid_price(90, engine) == 60
        assert sniper.bid_price(55, engine) is None

    def test_unknown_behavior_kind(self):
        """Test unknown behavior kind"""
        a = zi(1)
        a.behavior_kind = "martian"
        with pytest.raises(ValueError):
            behavior_for(a)


class TestRegistry:
    """Test agent factory map"""

    def test_default_types(self):
        """Test registered agent type names"""
        assert set(AGENT_REGISTRY) == {"ZIAgent", "UnitAgent", "OneupmanshipAgent", "KaplanSniperAgent"}

    def test_new_agent(self):
        """Test creation by name"""
        a = new_agent(AGENT_REGISTRY, "UnitAgent", id=3, rate=2.0)
        assert isinstance(a, UnitAgent)
        assert a.id == 3 and a.rate == 2.0

    def test_unknown_type(self):
        """Test unknown agent type name"""
        with pytest.raises(ValueError, match="Unknown agent type"):
            new_agent(AGENT_REGISTRY, "NoSuchAgent", id=1)


class CountingAgent(Trader):
    """Agent that records its wakes instead of trading"""

    def __init__(self, id, log, **kwargs):
        super().__init__(id=id, **kwargs)
        self.log = log

    def act(self):
        self.log.append((self.wake_time, self.id))


def counting_pool(log, n=3, seed=0):
    pool = AgentPool()
    rngs = [np.random.default_rng(seed + i) for i in range(n)]
    for i in range(n):
        pool.push(CountingAgent(id=i + 1, log=log, rng=rngs[i], rate=0.05, period_duration=1000))
    return pool


class TestAgentPool:
    """Test pool bookkeeping and run order"""

    def test_push_and_lookup(self):
        """Test agents are kept in order and by id"""
        pool = AgentPool()
        a, b = zi(1), zi(2)
        pool.push(a)
        pool.push(b)
        assert pool.agents == [a, b]
        assert pool.agents_by_id[2] is b
        with pytest.raises(ValueError):
            pool.push(zi(1))

    def test_distribute_round_robin(self):
        """Test aggregate values dealt out round robin"""
        pool = AgentPool()
        for i in range(3):
            pool.push(zi(i + 1))
        pool.distribute("values", "X", [100, 90, 80, 70, 60])
        assert pool.agents[0].values["X"] == [100, 70]
        assert pool.agents[1].values["X"] == [90, 60]
        assert pool.agents[2].values["X"] == [80]

    def test_end_time_empty_pool(self):
        """Test empty pool has no end time"""
        assert AgentPool().end_time() is None
        assert AgentPool().start_time() is None

    def test_sync_run_wakes_in_time_order(self):
        """Test wakes happen in nondecreasing time before the end time"""
        log = []
        pool = counting_pool(log)
        pool.init_period(1)
        pool.sync_run(pool.end_time())
        times = [t for t, _ in log]
        assert times == sorted(times)
        assert all(1000 <= t < 2000 for t in times)
        assert len(log) > 0

    def test_sync_run_limit(self):
        """Test limit on number of wakes"""
        log = []
        pool = counting_pool(log)
        pool.init_period(1)
        assert pool.sync_run(pool.end_time(), limit_calls=2) == 2
        assert len(log) == 2

    def test_run_async_matches_sync_run(self):
        """Test batched async run wakes agents in the same sequence"""
        sync_log, async_log = [], []
        sync_pool = counting_pool(sync_log, seed=4)
        async_pool = counting_pool(async_log, seed=4)
        sync_pool.init_period(1)
        async_pool.init_period(1)

        sync_pool.sync_run(sync_pool.end_time())
        asyncio.run(async_pool.run_async(async_pool.end_time(), batch_size=3))

        assert async_log == sync_log

    def test_run_async_batch_size(self):
        """Test batch size must be positive"""
        with pytest.raises(ValueError):
            asyncio.run(AgentPool().run_async(10, batch_size=0))

    def test_settle(self):
        """Test one unit and its price change hands"""
        pool = AgentPool()
        buyer, seller = zi(1), zi(2)
        pool.push(buyer)
        pool.push(seller)
        pool.settle(1, 2, 45.0)
        assert buyer.inventory == {"money": -45.0, "X": 1}
        assert seller.inventory == {"money": 45.0, "X": -1}
