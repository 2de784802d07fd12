"""Fixed-period asyncio tick loop.

The scheduler calls ``TickExecutor.execute_tick`` every
``base_tick_ms / speed`` milliseconds and hands each diff to an async sink
(the session's WebSocket broadcast). ``execute_tick`` is synchronous, so a
tick always runs to completion before the loop yields again.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..utils.constants import BASE_TICK_MS
from .tick_executor import TickExecutor

logger = logging.getLogger(__name__)

DiffSink = Callable[[list[dict]], Awaitable[None]]


class TickScheduler:
    """Drives a TickExecutor on the running event loop.

    Args:
        executor: Executor for the game
        sink: Coroutine function receiving each tick's diff
        base_tick_ms: Tick period at speed 1
        speed: Initial speed multiplier
    """

    def __init__(
        self,
        executor: TickExecutor,
        sink: Optional[DiffSink] = None,
        base_tick_ms: int = BASE_TICK_MS,
        speed: float = 1.0,
    ):
        self.executor = executor
        self.sink = sink
        self.base_tick_ms = base_tick_ms
        self.paused = False
        self._task: Optional[asyncio.Task] = None
        self.set_speed(speed)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def speed(self) -> float:
        return self.executor.speed

    @property
    def interval(self) -> float:
        """Seconds between ticks at the current speed."""
        return self.base_tick_ms / self.speed / 1000

    def set_speed(self, speed: float) -> None:
        if speed <= 0:
            raise ValueError(f"Invalid speed: {speed} (must be > 0)")
        self.executor.speed = speed

    def start(self) -> None:
        """Start ticking on the current event loop."""
        if self.running:
            return
        self.paused = False
        self._task = asyncio.create_task(self._run())
        logger.info(f"Scheduler started at {self.speed}x ({self.interval:.3f}s per tick)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info(f"Scheduler stopped at tick {self.executor.game.tick}")

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    async def tick_once(self) -> list[dict]:
        """Run a single tick and push its diff to the sink."""
        diff = self.executor.execute_tick()
        if self.sink is not None:
            await self.sink(diff)
        return diff

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            if self.paused:
                continue
            try:
                await self.tick_once()
            except Exception:
                logger.error(
                    f"Tick {self.executor.game.tick} failed, stopping scheduler", exc_info=True
                )
                return
