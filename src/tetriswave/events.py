"""Events the core raises for host collaborators (audio, overlays, scores)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict


class EventKind(str, Enum):
    PIECE_LOCKED = "piece_locked"
    LINES_CLEARED = "lines_cleared"
    WAVE_INCREASED = "wave_increased"
    MILESTONE = "milestone"
    GAME_OVER = "game_over"
    WIN = "win"


@dataclass(frozen=True)
class GameEvent:
    """Something that happened during a tick or an input call.

    ``data`` carries the kind-specific payload:

    * ``PIECE_LOCKED``: ``color_id``
    * ``LINES_CLEARED``: ``count``, ``combo``, ``points``
    * ``WAVE_INCREASED``: ``wave``, ``drop_interval_ms``
    * ``MILESTONE``: ``threshold``
    * ``GAME_OVER``: ``score``, ``reached_target``
    * ``WIN``: ``score``
    """

    kind: EventKind
    data: Dict[str, object] = field(default_factory=dict)

    def __getitem__(self, key: str) -> object:
        return self.data[key]


Listener = Callable[[GameEvent], None]
