"""Periodic tick generation and rate-limited fan-out."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from .clock import DEFAULT_MARKET_HOURS, MarketHours
from .models import Instrument, Quote
from .registry import ConnectionState, SubscriptionRegistry
from .simulator import TickGenerator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BroadcastStats:
    """Running counters for the broadcast loop."""

    cycles: int = 0
    gated_cycles: int = 0
    updates_sent: int = 0
    rate_limited: int = 0
    send_failures: int = 0
    send_timeouts: int = 0


class BroadcastLoop:
    """Scheduler that drives every tick and every outbound update.

    Each cycle re-polls the market gate (it is not latched):
      - closed: nothing is generated; next poll in `closed_interval` seconds
      - open:   one tick batch is generated and fanned out; next cycle in
                `interval` seconds

    Fan-out, per live connection:
      1. one rate-limiter admission check (denied -> whole cycle dropped
         for that connection, not deferred)
      2. one "update" per batch instrument the connection subscribes to,
         in batch order, each send bounded by `send_timeout`

    Connections are served concurrently, so a stalled client only loses its
    own updates; it never holds up delivery to the others.

    step() is the unit of work; run() just alternates step() and sleep, so
    tests can drive cycles directly with a fixed clock.
    """

    def __init__(
        self,
        generator: TickGenerator,
        registry: SubscriptionRegistry,
        hours: MarketHours = DEFAULT_MARKET_HOURS,
        interval: float = 0.8,
        closed_interval: float = 30.0,
        send_timeout: float = 1.0,
        clock: Callable[[], datetime] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._generator = generator
        self._registry = registry
        self._hours = hours
        self._interval = interval
        self._closed_interval = closed_interval
        self._send_timeout = send_timeout
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._sleep = sleep
        self._step_lock = asyncio.Lock()
        self._task: asyncio.Task | None = None
        self._stopping = False
        self.stats = BroadcastStats()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._stopping = False
        self._task = asyncio.create_task(self.run(), name="broadcast-loop")
        logger.info(
            "Broadcast loop started: %.3fs interval, %.1fs closed back-off",
            self._interval,
            self._closed_interval,
        )

    async def stop(self) -> None:
        self._stopping = True
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("Broadcast loop stopped")

    async def run(self) -> None:
        """Core loop: step, sleep for the delay the step asked for, repeat."""
        while not self._stopping:
            try:
                delay = await self.step()
            except Exception:
                logger.exception("Broadcast step failed")
                delay = self._interval
            await self._sleep(delay)

    async def step(self, now: datetime | None = None) -> float:
        """Run one cycle. Returns the number of seconds to wait before the next one."""
        async with self._step_lock:
            now = now or self._clock()
            self.stats.cycles += 1
            if not self._hours.is_open(now):
                self.stats.gated_cycles += 1
                logger.debug("Market closed at %s; next check in %.1fs",
                             self._hours.local_time(now).strftime("%H:%M"), self._closed_interval)
                return self._closed_interval

            batch = self._generator.generate(now)
            connections = self._registry.connections()
            if connections:
                await asyncio.gather(*(self._deliver(state, batch) for state in connections))
            return self._interval

    async def _deliver(self, state: ConnectionState, batch: list[Instrument]) -> None:
        """Send one connection its share of a batch, subject to its rate window."""
        if not state.limiter.allow():
            self.stats.rate_limited += 1
            return
        subscribed = state.subscriptions()
        for instrument in batch:
            if instrument.symbol not in subscribed:
                continue
            try:
                await asyncio.wait_for(
                    state.channel.send("update", Quote.from_instrument(instrument).to_dict()),
                    timeout=self._send_timeout,
                )
            except asyncio.TimeoutError:
                self.stats.send_timeouts += 1
                logger.warning(
                    "Send to %s timed out after %.2fs; dropping rest of cycle",
                    state.connection_id,
                    self._send_timeout,
                )
                return
            except Exception as e:
                # The transport owns disconnects; skip the rest of this cycle for the client
                self.stats.send_failures += 1
                logger.warning("Send to %s failed: %s", state.connection_id, e)
                return
            self.stats.updates_sent += 1
