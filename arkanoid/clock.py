"""Time sources and task scheduling for the game loop.

The game never reads the wall clock directly. It asks a Scheduler for
the current time (milliseconds) and registers periodic or one-shot
tasks on it, so tests can drive time by hand with ManualClock while the
real game runs on PygameClock.

Usage:
    clock = ManualClock()
    task = clock.call_every(1000 / 60, game.loop)
    clock.advance(100)   # runs game.loop six times
    task.cancel()
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from itertools import count
from typing import Callable, List, Optional

from .logging import get_logger

log = get_logger('clock')

_task_ids = count()


@dataclass
class Task:
    """A scheduled callback.

    Attributes:
        callback: Function to call when due
        due: Time (ms) at which the callback fires next
        interval: Repeat period in ms, or None for a one-shot task
    """
    callback: Callable[[], None]
    due: float
    interval: Optional[float] = None
    cancelled: bool = False
    fired: bool = False
    task_id: int = field(default_factory=lambda: next(_task_ids))

    @property
    def is_periodic(self) -> bool:
        return self.interval is not None

    @property
    def is_active(self) -> bool:
        """Whether the task will still fire in the future."""
        if self.cancelled:
            return False
        return self.is_periodic or not self.fired

    def cancel(self) -> None:
        """Stop the task from firing again. Safe to call more than once."""
        self.cancelled = True


class Scheduler(ABC):
    """Clock plus a queue of periodic and one-shot tasks."""

    def __init__(self):
        self._tasks: List[Task] = []

    @abstractmethod
    def now(self) -> float:
        """Current time in milliseconds from an arbitrary monotonic origin."""
        pass

    def call_every(self, interval: float, callback: Callable[[], None]) -> Task:
        """Run callback every interval milliseconds, starting one interval from now."""
        if interval <= 0:
            raise ValueError(f'interval must be positive, got {interval}')
        task = Task(callback, self.now() + interval, interval)
        self._tasks.append(task)
        return task

    def call_later(self, delay: float, callback: Callable[[], None]) -> Task:
        """Run callback once, delay milliseconds from now."""
        task = Task(callback, self.now() + max(0.0, delay))
        self._tasks.append(task)
        return task

    @property
    def pending(self) -> List[Task]:
        """Tasks that will still fire."""
        return [t for t in self._tasks if t.is_active]

    def next_due(self) -> Optional[float]:
        """Time the earliest active task fires, or None if nothing is scheduled."""
        pending = self.pending
        if not pending:
            return None
        return min(t.due for t in pending)

    def run_pending(self) -> int:
        """Fire every task due at the current time.

        A periodic task fires at most once per call; if it fell behind it
        is rescheduled one interval after now instead of catching up.

        Returns:
            Number of callbacks invoked
        """
        now = self.now()
        due = sorted(
            (t for t in self._tasks if t.is_active and t.due <= now),
            key=lambda t: (t.due, t.task_id),
        )

        ran = 0
        for task in due:
            # An earlier callback in this batch may have cancelled it
            if not task.is_active:
                continue
            if task.is_periodic:
                task.due += task.interval
                if task.due <= now:
                    task.due = now + task.interval
            else:
                task.fired = True
            task.callback()
            ran += 1

        self._tasks = [t for t in self._tasks if t.is_active]
        return ran


class ManualClock(Scheduler):
    """Deterministic clock advanced explicitly, for tests and replays."""

    def __init__(self, start: float = 0.0):
        super().__init__()
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> int:
        """Move time forward, firing tasks at their exact due times.

        Args:
            ms: Milliseconds to advance

        Returns:
            Number of callbacks invoked
        """
        if ms < 0:
            raise ValueError(f'Cannot move time backwards ({ms} ms)')

        target = self._now + ms
        ran = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            self._now = max(self._now, due)
            ran += self.run_pending()
        self._now = target
        return ran


class PygameClock(Scheduler):
    """Real-time clock backed by pygame's millisecond tick counter."""

    # Longest sleep between polls, so input stays responsive
    MAX_WAIT_MS = 4

    def __init__(self):
        super().__init__()
        self._running = False

    def now(self) -> float:
        import pygame
        return float(pygame.time.get_ticks())

    @property
    def is_running(self) -> bool:
        return self._running

    def run(self, poll: Callable[[], bool]) -> None:
        """Run tasks in real time until stop() is called or poll returns False.

        Args:
            poll: Called once per iteration before due tasks run (event
                pumping); returning False ends the loop
        """
        import pygame

        self._running = True
        log.info("Clock started")
        while self._running:
            if not poll():
                break
            self.run_pending()

            due = self.next_due()
            wait = self.MAX_WAIT_MS if due is None else min(self.MAX_WAIT_MS, due - self.now())
            if wait > 0:
                pygame.time.wait(int(wait))
        self._running = False
        log.info("Clock stopped")

    def stop(self) -> None:
        self._running = False
