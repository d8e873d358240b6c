#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Thu Feb 12 09:14:58 2026

@author: petermillington
"""
import asyncio
from typing import Dict, List, Optional, Sequence


class AgentPool:
    """
    Ordered collection of agents that runs them in wake-time order.

    The agent with the earliest wake time acts next; ties go to the agent
    pushed first.  `sync_run` and `run_async` wake agents in exactly the same
    sequence, `run_async` only adds suspension points between batches.
    """

    def __init__(self):
        self.agents: List = []
        self.agents_by_id: Dict = {}

    def push(self, agent) -> None:
        if agent.id in self.agents_by_id:
            raise ValueError(f"AgentPool.push: duplicate agent id {agent.id}")
        self.agents.append(agent)
        self.agents_by_id[agent.id] = agent

    def __len__(self) -> int:
        return len(self.agents)

    def distribute(self, field: str, good: str, values: Sequence[float]) -> None:
        """
        Deal an aggregate array out among the agents round-robin:
        agent j receives values[j], values[j + n], ...
        """
        n = len(self.agents)
        if n == 0:
            return
        for a in self.agents:
            getattr(a, field)[good] = []
        for j, v in enumerate(values):
            getattr(self.agents[j % n], field)[good].append(float(v))

    # -------- Period lifecycle --------
    def init_period(self, number: int) -> None:
        for a in self.agents:
            a.init_period(number)

    def end_period(self) -> None:
        for a in self.agents:
            a.end_period()

    def start_time(self) -> Optional[float]:
        if not self.agents:
            return None
        return self.agents[0].period.start_time

    def end_time(self) -> Optional[float]:
        if not self.agents:
            return None
        return max(a.period.end_time for a in self.agents)

    # -------- Running --------
    def next_wake(self):
        """Agent with the earliest wake time, or None."""
        best = None
        for a in self.agents:
            if a.wake_time is None:
                continue
            if best is None or a.wake_time < best.wake_time:
                best = a
        return best

    def sync_run(self, until: float, limit_calls: Optional[int] = None) -> int:
        """
        Wake agents while the earliest wake time is before `until`.
        Returns the number of wakes performed.
        """
        calls = 0
        while limit_calls is None or calls < limit_calls:
            agent = self.next_wake()
            if agent is None or agent.wake_time >= until:
                break
            agent.wake()
            calls += 1
        return calls

    async def run_async(self, until: float, batch_size: int = 10) -> int:
        """Same wake sequence as `sync_run`, yielding to the event loop between batches."""
        if batch_size < 1:
            raise ValueError("AgentPool.run_async: batch_size must be at least 1")
        total = 0
        while True:
            calls = self.sync_run(until, batch_size)
            total += calls
            if calls < batch_size:
                return total
            await asyncio.sleep(0)

    # -------- Settlement --------
    def settle(self, buyer_id, seller_id, price: float, good: str = "X", quantity: int = 1) -> None:
        """Move `quantity` units of `good` from seller to buyer at `price` each."""
        buyer = self.agents_by_id[buyer_id]
        seller = self.agents_by_id[seller_id]
        buyer.transfer(good, quantity, -price * quantity)
        seller.transfer(good, -quantity, price * quantity)
