"""Host-side frame driver.

Browsers and game loops hand out absolute timestamps once per display
refresh.  :class:`Runner` turns them into the elapsed-time ticks the core
integrates, forwards input intents, and optionally hands a snapshot to a
renderer after every frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, Optional

from .game import GameCore, Intent, Snapshot


LOGGER = logging.getLogger(__name__)


@dataclass
class Runner:
    core: GameCore = field(default_factory=GameCore)
    on_frame: Optional[Callable[[Snapshot], None]] = None
    last_ts: Optional[float] = None

    def start(self) -> None:
        """Start a new run; the next frame only establishes the time baseline."""

        self.core.start()
        self.last_ts = None
        self._draw()

    def frame(self, ts: float) -> bool:
        """Advance the core to host time ``ts`` (milliseconds).

        Returns ``True`` while the host should keep scheduling frames.
        """

        if not self.core.running:
            return False
        if self.last_ts is None:
            self.last_ts = ts
        dt = max(0.0, ts - self.last_ts)
        self.last_ts = ts
        try:
            self.core.tick(dt)
            self._draw()
        except Exception:
            LOGGER.exception("Crash detected at ts=%.1f", ts)
            raise
        return self.core.running

    def handle(self, intent: Intent) -> bool:
        if not self.core.running:
            return False
        moved = self.core.apply(intent)
        self._draw()
        return moved

    def continue_after_win(self) -> bool:
        """Resume after a win without counting the paused interval."""

        if not self.core.resume():
            LOGGER.info("Continue ignored: nothing to resume")
            return False
        # Time spent on the win screen must not reach the core as one huge tick.
        self.last_ts = None
        return True

    def _draw(self) -> None:
        if self.on_frame is not None:
            self.on_frame(self.core.snapshot())
