"""scheduler.py

Polled timers and a keyed debouncer for a single-threaded UI loop.

Streamlit has no background event loop we can hand callbacks to: every
widget interaction (and every autorefresh tick) reruns the script once.
`Scheduler` therefore keeps its timers in a plain list and fires the due
ones when `run_due()` is called at the top of a rerun. The clock is
injectable so tests can step time deterministically.
"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, Hashable

Clock = Callable[[], float]

_seq = itertools.count()


@dataclass(order=True)
class Timer:
    """Handle returned by `Scheduler.call_later`."""

    due: float
    order: int = field(default_factory=lambda: next(_seq))
    callback: Callable[[], None] = field(default=lambda: None, compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    def __init__(self, clock: Clock = time.monotonic) -> None:
        self.clock = clock
        self._timers: list[Timer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> Timer:
        """Schedule *callback* to run once, *delay* seconds from now."""
        timer = Timer(due=self.clock() + max(delay, 0.0), callback=callback)
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def next_due_in(self) -> float | None:
        """Seconds until the earliest live timer (0 if overdue), ``None`` if idle."""
        live = [t.due for t in self._timers if not t.cancelled]
        if not live:
            return None
        return max(min(live) - self.clock(), 0.0)

    def run_due(self) -> int:
        """Fire every due, non-cancelled timer in due-time order.

        Timers scheduled by a callback are not fired in the same pass even
        when their delay is zero.
        """
        now = self.clock()
        due = sorted(t for t in self._timers if t.due <= now and not t.cancelled)
        self._timers = [t for t in self._timers if t.due > now and not t.cancelled]

        fired = 0
        for timer in due:
            # an earlier callback in this pass may have cancelled it
            if timer.cancelled:
                continue
            timer.cancelled = True
            timer.callback()
            fired += 1
        return fired


class Debouncer:
    """Coalesces rapid triggers per key into one call after a quiet window."""

    def __init__(self, scheduler: Scheduler, delay: float) -> None:
        self.scheduler = scheduler
        self.delay = delay
        self._pending: dict[Hashable, Timer] = {}

    def trigger(self, key: Hashable, callback: Callable[[], None]) -> Timer:
        """Cancel any pending call for *key* and reschedule *callback*."""
        self.cancel(key)

        def fire() -> None:
            self._pending.pop(key, None)
            callback()

        timer = self.scheduler.call_later(self.delay, fire)
        self._pending[key] = timer
        return timer

    def cancel(self, key: Hashable) -> bool:
        timer = self._pending.pop(key, None)
        if timer is None:
            return False
        timer.cancel()
        return True

    def is_pending(self, key: Hashable) -> bool:
        timer = self._pending.get(key)
        return timer is not None and not timer.cancelled
