#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb 23 09:30:11 2026

@author: petermillington

Shared pytest fixtures.
"""
import pytest

from core.sim_config import SimulationConfig


class StepClock:
    """Fake wall clock that moves forward `step` seconds on every read."""

    def __init__(self, start: float = 0.0, step: float = 100.0):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def basic_config():
    """Four ZI buyers and four ZI sellers with overlapping supply and demand."""
    return SimulationConfig(
        periods=3,
        period_duration=1000,
        buyer_agent_type=("ZIAgent",),
        seller_agent_type=("ZIAgent",),
        buyer_rate=(0.2,),
        seller_rate=(0.2,),
        buyer_values=(100, 95, 90, 85, 80, 75, 70, 65),
        seller_costs=(10, 20, 30, 40, 50, 60, 70, 80),
        number_of_buyers=4,
        number_of_sellers=4,
        L=1,
        H=200,
        silent=True,
        seed=1234,
    )


@pytest.fixture
def single_pair_config():
    """One buyer valuing a unit at 80, one seller with cost 20."""
    return SimulationConfig(
        periods=5,
        period_duration=1000,
        buyer_values=(80,),
        seller_costs=(20,),
        L=1,
        H=200,
        silent=True,
        seed=7,
    )


@pytest.fixture
def step_clock():
    return StepClock
