#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Thu Feb 12 11:31:40 2026

@author: petermillington
"""
import numpy as np
from numpy.random import SeedSequence

from agents.pool import AgentPool
from agents.registry import new_agent
from core.sim_config import positive_number_array


def agent_counts(config):
    """
    Number of buyers and sellers: explicit counts win, otherwise one agent
    per entry of buyer_values / seller_costs.
    """
    n_buyers = config.number_of_buyers or len(config.buyer_values or ())
    n_sellers = config.number_of_sellers or len(config.seller_costs or ())
    if not n_buyers or not n_sellers:
        raise ValueError("Simulation: can not determine number_of_buyers and/or number_of_sellers")
    if not config.buyer_agent_type or not config.seller_agent_type:
        raise ValueError("Simulation: buyer_agent_type and seller_agent_type must name at least one agent type")
    return int(n_buyers), int(n_sellers)


def agent_rngs(master_seed, n):
    """Independent, reproducible generators, one per agent."""
    ss = SeedSequence(master_seed)
    return [np.random.default_rng(s) for s in ss.spawn(n)]


def build_population(config, registry, teach):
    """
    Returns: (pool, buyers_pool, sellers_pool)

    Buyers get ids 1..B and sellers B+1..B+S.  Agent types and rates rotate
    cyclically over the agent index.  `teach(agent)` is called on every new
    agent before it joins the pools.
    """
    n_buyers, n_sellers = agent_counts(config)
    buyer_rate = positive_number_array(config.buyer_rate) or [1.0]
    seller_rate = positive_number_array(config.seller_rate) or [1.0]
    rngs = agent_rngs(config.seed, n_buyers + n_sellers)

    common = dict(integer=config.integer,
                  ignore_budget_constraint=config.ignore_budget_constraint,
                  period_duration=config.period_duration,
                  min_price=config.L,
                  max_price=config.H,
                  goods=config.x_market.goods,
                  money=config.x_market.money)

    pool, buyers, sellers = AgentPool(), AgentPool(), AgentPool()

    for i in range(n_buyers):
        a = new_agent(registry,
                      config.buyer_agent_type[i % len(config.buyer_agent_type)],
                      id=i + 1,
                      rate=buyer_rate[i % len(buyer_rate)],
                      rng=rngs[i],
                      **common)
        teach(a)
        buyers.push(a)
        pool.push(a)

    for i in range(n_sellers):
        a = new_agent(registry,
                      config.seller_agent_type[i % len(config.seller_agent_type)],
                      id=n_buyers + i + 1,
                      rate=seller_rate[i % len(seller_rate)],
                      rng=rngs[n_buyers + i],
                      **common)
        teach(a)
        sellers.push(a)
        pool.push(a)

    goods = config.x_market.goods
    buyers.distribute("values", goods, config.buyer_values or ())
    sellers.distribute("costs", goods, config.seller_costs or ())
    return pool, buyers, sellers
