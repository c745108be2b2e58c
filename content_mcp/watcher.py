"""Polling watcher for content config files used in development mode."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.5


class ConfigWatcher:
    """Watch a single file for modification and notify a callback.

    The watcher is an asyncio task polling the file's mtime and size. Errors
    raised by the callback are logged so one bad reload does not stop the
    watcher.
    """

    def __init__(
        self,
        path: Path,
        on_change: Callable[[Path], Awaitable[None]],
        interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.path = path
        self.on_change = on_change
        self.interval = interval
        self._task: asyncio.Task | None = None
        self._last_seen = self._snapshot()

    def _snapshot(self) -> tuple[float, int] | None:
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            return None
        return stat.st_mtime, stat.st_size

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start polling. Must be called from a running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._poll(), name=f"watch:{self.path}")
        logger.debug(f"Watching {self.path}")

    async def _poll(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            current = self._snapshot()
            if current == self._last_seen:
                continue
            self._last_seen = current
            logger.info(f"Config file changed: {self.path}")
            try:
                await self.on_change(self.path)
            except Exception:
                logger.exception(f"Error handling change of {self.path}")

    async def stop(self) -> None:
        """Stop polling and wait for the task to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.debug(f"Stopped watching {self.path}")
