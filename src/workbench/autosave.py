"""Debounced background persistence."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from common.errors import fetch_error_message
from workbench.settings import WorkbenchSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Run `callback` once per quiet period with the most recent value.

    Every `trigger` cancels the pending timer and arms a new one, so a burst
    of changes results in a single call carrying the last value. A callback
    that already started is not cancelled by later triggers.
    """

    def __init__(self, callback: Callable[[T], Awaitable[Any]], delay_seconds: float):
        """Initialize with the callback and the quiet period in seconds."""
        self.callback = callback
        self.delay_seconds = delay_seconds
        self._task: Optional[asyncio.Task] = None
        self._pending_value: Optional[T] = None
        self.fired_count = 0

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, value: T) -> None:
        """Arm (or re-arm) the timer for `value`. Must be called from a running loop."""
        if self.pending:
            self._task.cancel()
        self._pending_value = value
        self._task = asyncio.get_running_loop().create_task(self._run(value))

    async def _run(self, value: T) -> None:
        try:
            await asyncio.sleep(self.delay_seconds)
        except asyncio.CancelledError:
            return
        self._task = None
        self._pending_value = None
        await self._invoke(value)

    async def _invoke(self, value: T) -> None:
        self.fired_count += 1
        try:
            await self.callback(value)
        except Exception as e:
            logger.error(f"Debounced callback failed: {fetch_error_message(e)}")

    async def flush(self) -> None:
        """Fire the pending value now instead of waiting for the timer."""
        if not self.pending:
            return
        value = self._pending_value
        await self.cancel()
        await self._invoke(value)

    async def cancel(self) -> None:
        """Drop the pending value without firing."""
        task = self._task
        self._task = None
        self._pending_value = None
        if task and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass


class EditorAutosave:
    """Persist editor text through the backend after typing pauses."""

    def __init__(self, save: Callable[[str], Awaitable[Any]], delay_seconds: float = 1.0):
        """Initialize with the backend save call and the quiet period."""
        self._debouncer: Debouncer[str] = Debouncer(self._save, delay_seconds)
        self._save_fn = save
        self.last_saved: Optional[str] = None

    @classmethod
    def from_settings(
        cls, save: Callable[[str], Awaitable[Any]], settings: WorkbenchSettings
    ) -> "EditorAutosave":
        """Build an autosave using the configured quiet period."""
        return cls(save, delay_seconds=settings.autosave_delay_seconds)

    @property
    def delay_seconds(self) -> float:
        return self._debouncer.delay_seconds

    async def _save(self, sql: str) -> None:
        if not sql:
            return
        await self._save_fn(sql)
        self.last_saved = sql
        logger.debug("Saved editor content (%d chars)", len(sql))

    def on_change(self, sql: str) -> None:
        """Record an editor change; empty text is never persisted."""
        self._debouncer.trigger(sql)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    async def flush(self) -> None:
        await self._debouncer.flush()

    async def close(self) -> None:
        await self._debouncer.cancel()
