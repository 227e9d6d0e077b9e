from __future__ import annotations

import asyncio
import contextlib
from typing import Optional

import structlog

from ..errors import PipelineError
from .pipeline import WeatherPipeline

logger = structlog.get_logger(__name__)


class UpdateScheduler:
    """Runs the pipeline every `interval_s` seconds on the running event loop.

    Each tick executes the blocking pipeline in a worker thread. Failures are
    logged and the loop carries on; `stop` cancels the task, leaving any
    in-flight run to finish on its own.
    """

    def __init__(self, pipeline: WeatherPipeline, interval_s: float = 900.0, run_on_start: bool = False):
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self.pipeline = pipeline
        self.interval_s = interval_s
        self.run_on_start = run_on_start
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop(), name="weather-update-timer")
        logger.info("scheduler_started", interval_s=self.interval_s, run_on_start=self.run_on_start)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("scheduler_stopped")

    async def _loop(self) -> None:
        if self.run_on_start:
            await self._tick()
        while True:
            await asyncio.sleep(self.interval_s)
            await self._tick()

    async def _tick(self) -> None:
        try:
            await asyncio.to_thread(self.pipeline.run)
        except PipelineError as e:
            logger.error("scheduled_update_failed", error=str(e))
        except Exception:
            logger.exception("scheduled_update_crashed")
