"""Score leaderboard collaborator.

The core only hands over a final score; where the scores are kept is up to the
host.  :class:`Leaderboard` is the contract a backend has to meet and
:class:`InMemoryLeaderboard` is a process-local implementation of it.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable, List, Optional, Protocol, Tuple

from .config import DEFAULT_PLAYER_NAME, MAX_LEADERBOARD_ENTRIES, MAX_NAME_LENGTH


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    score: int
    timestamp: float


@dataclass(frozen=True)
class Submission:
    """Outcome of a submit: 1-based ``rank`` or ``None`` if it did not place."""

    rank: Optional[int]
    entries: Tuple[LeaderboardEntry, ...]


class Leaderboard(Protocol):
    def top(self, limit: int = MAX_LEADERBOARD_ENTRIES) -> List[LeaderboardEntry]:
        ...

    def submit(self, name: str, score: int) -> Submission:
        ...


def qualifies(score: int) -> bool:
    """Only runs that scored something are offered a leaderboard entry."""

    return score > 0


def normalise_name(name: str) -> str:
    """Trim ``name``, falling back to the default player name when blank.

    Raises:
        ValueError: If the trimmed name is longer than the allowed length.
    """

    name = name.strip() or DEFAULT_PLAYER_NAME
    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"name must be at most {MAX_NAME_LENGTH} characters")
    return name


def validate_score(score: int) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValueError("score must be an integer")
    if score <= 0:
        raise ValueError("score must be positive")
    return score


class InMemoryLeaderboard:
    """Keeps the best ``capacity`` scores, highest first."""

    def __init__(
        self,
        capacity: int = MAX_LEADERBOARD_ENTRIES,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.capacity = capacity
        self._clock = clock or time.time
        self._entries: List[LeaderboardEntry] = []

    def top(self, limit: int = MAX_LEADERBOARD_ENTRIES) -> List[LeaderboardEntry]:
        return list(self._entries[: max(0, limit)])

    def submit(self, name: str, score: int) -> Submission:
        entry = LeaderboardEntry(normalise_name(name), validate_score(score), self._clock())
        entries = self._entries + [entry]
        # Stable sort: on equal scores the earlier entry stays ahead.
        entries.sort(key=lambda e: e.score, reverse=True)
        self._entries = entries[: self.capacity]

        rank = None
        for index, kept in enumerate(self._entries):
            if kept is entry:
                rank = index + 1
                break
        LOGGER.info("Leaderboard submission %s=%d ranked %s", entry.name, entry.score, rank)
        return Submission(rank, tuple(self._entries))
