#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb 16 10:37:19 2026

@author: petermillington

Period scheduler: one state machine, three timing drivers.

A period moves Idle -> Initializing -> Advancing -> Finalizing -> Complete.
Only the Advancing step depends on the driver:
  - ImmediateDriver: one blocking run of the agents up to the period end
  - CooperativeDriver: the same run in batches, yielding to the event loop
    between batches
  - WallClockDriver: paces simulated time to the wall clock with a
    repeating tick
"""
import asyncio
import time
from enum import Enum
from typing import Callable, Optional


class PeriodState(Enum):
    IDLE = "idle"
    INITIALIZING = "initializing"
    ADVANCING = "advancing"
    FINALIZING = "finalizing"
    COMPLETE = "complete"


class RealtimeTimer:
    """
    Repeating tick on the running event loop.  `done` resolves when the
    callback calls `resolve`, or fails when `cancel` is given an error.
    """

    def __init__(self, interval: float, callback: Callable[["RealtimeTimer"], None]):
        self.loop = asyncio.get_running_loop()
        self.interval = interval
        self.callback = callback
        self.done = self.loop.create_future()
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def active(self) -> bool:
        return not self.done.done()

    def start(self) -> None:
        self._handle = self.loop.call_later(self.interval, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if not self.active:
            return
        try:
            self.callback(self)
        except Exception as exc:
            self.cancel(exc)
            return
        if self.active:
            self.start()

    def _stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def resolve(self, value=None) -> None:
        self._stop()
        if self.active:
            self.done.set_result(value)

    def cancel(self, error: Optional[BaseException] = None) -> None:
        self._stop()
        if self.active:
            if error is None:
                self.done.cancel()
            else:
                self.done.set_exception(error)


class ImmediateDriver:
    """Run every agent action up to the period end in one blocking call."""
    mode = "sync"
    blocking = True
    uses_timer = False

    def advance(self, scheduler: "PeriodScheduler", end_time: float) -> None:
        scheduler.pool.sync_run(end_time)


class CooperativeDriver:
    """Run agents in batches of `batch_size`, yielding between batches."""
    mode = "async"
    blocking = False
    uses_timer = False

    def __init__(self, batch_size: int = 10):
        self.batch_size = batch_size

    async def advance(self, scheduler: "PeriodScheduler", end_time: float) -> None:
        await scheduler.pool.run_async(end_time, self.batch_size)


class WallClockDriver:
    """
    Map "now" to the period start, then every `tick` seconds run the agents
    up to the elapsed simulated time.  The tick that reaches the period end
    runs to the end time and stops the timer.
    """
    mode = "realtime"
    blocking = False
    uses_timer = True

    def __init__(self, tick: float = 0.040, clock: Callable[[], float] = time.time):
        self.tick = tick
        self.clock = clock

    async def advance(self, scheduler: "PeriodScheduler", end_time: float) -> None:
        pool = scheduler.pool
        offset = self.clock() - pool.start_time()
        scheduler.sim.realtime_offset = offset

        def on_tick(timer: RealtimeTimer) -> None:
            now = self.clock() - offset
            if now >= end_time:
                pool.sync_run(end_time)
                timer.resolve(end_time)
                return
            pool.sync_run(now)

        timer = scheduler.start_timer(self.tick, on_tick)
        await timer.done


DRIVERS = {
    "sync": ImmediateDriver,
    "async": CooperativeDriver,
    "realtime": WallClockDriver,
}


def make_driver(mode):
    """Driver for a mode name; driver instances are passed through."""
    if not isinstance(mode, str):
        return mode
    try:
        return DRIVERS[mode]()
    except KeyError:
        raise ValueError(f"Unknown period mode {mode!r}; choose from {sorted(DRIVERS)}") from None


class PeriodScheduler:
    """
    Advances the simulation one period at a time.

    At most one wall-clock timer may be active per simulation.  Starting any
    period while one is active cancels the active timer with an
    error and raises RuntimeError before the period counter moves.
    """

    def __init__(self, sim):
        self.sim = sim
        self.state = PeriodState.IDLE
        self.timer: Optional[RealtimeTimer] = None

    @property
    def pool(self):
        return self.sim.pool

    # -------- Entry points --------
    def run(self, driver):
        """Run one period with a blocking driver and return the simulation."""
        if not driver.blocking:
            raise ValueError(f"PeriodScheduler.run: driver {driver.mode!r} must be awaited, use run_async")
        self._guard()
        end_time = self._initialize(driver)
        driver.advance(self, end_time)
        return self._finalize()

    async def run_async(self, driver):
        """Run one period with any driver; resolves to the simulation."""
        self._guard()
        if driver.blocking:
            end_time = self._initialize(driver)
            driver.advance(self, end_time)
            return self._finalize()
        end_time = self._initialize(driver)
        try:
            await driver.advance(self, end_time)
            return self._finalize()
        finally:
            if driver.uses_timer:
                self.timer = None

    def _guard(self) -> None:
        """No period may start while a real-time period holds the timer."""
        if self.timer is not None:
            error = RuntimeError("Simulation has an unexpected active real-time timer")
            self.timer.cancel(error)
            raise error

    def start_timer(self, interval: float, callback) -> RealtimeTimer:
        timer = RealtimeTimer(interval, callback)
        self.timer = timer
        timer.start()
        return timer

    # -------- States --------
    def _initialize(self, driver) -> float:
        sim = self.sim
        self.state = PeriodState.INITIALIZING
        sim.period += 1
        if not sim.config.silent:
            print(f"period: {sim.period}")
        sim.period_trade_prices = []
        self.pool.init_period(sim.period)
        sim.engine.clear()

        end_time = self.pool.end_time()
        if driver.uses_timer and not end_time:
            raise RuntimeError(f"period end time required for real-time pacing, got: {end_time}")
        self.state = PeriodState.ADVANCING
        return end_time

    def _finalize(self):
        sim = self.sim
        self.state = PeriodState.FINALIZING
        self.pool.end_period()
        sim.log_period()
        self.state = PeriodState.COMPLETE
        return sim
