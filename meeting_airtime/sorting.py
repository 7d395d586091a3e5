# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Speaker table ordering.

Selecting the current sort key again flips the direction. Selecting a new key
starts ascending for the speaker name and descending for numeric columns.
"""

from dataclasses import dataclass
from typing import Iterable

from meeting_airtime.metrics import SpeakerStat


SORT_KEYS = ("speaker", "words", "time", "turns", "longest_turn", "word_share", "time_share")

SORT_KEY_ALIASES = {
    "longestTurn": "longest_turn",
    "wordShare": "word_share",
    "timeShare": "time_share",
}

ASCENDING = "asc"
DESCENDING = "desc"


def normalize_sort_key(key: str) -> str:
    """Return the canonical field name for a sort key.

    Raises:
        ValueError:
            If the key does not name a speaker stat field.
    """

    canonical = SORT_KEY_ALIASES.get(key, key)
    if canonical not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key} (supported: {', '.join(SORT_KEYS)})")
    return canonical


def default_direction(key: str) -> str:
    return ASCENDING if normalize_sort_key(key) == "speaker" else DESCENDING


@dataclass(frozen=True)
class SortState:
    """Current sort key and direction of a speaker table."""

    key: str = "word_share"
    direction: str = DESCENDING

    def select(self, key: str) -> SortState:
        """Return the state after the user (re)selects a column."""

        canonical = normalize_sort_key(key)
        if canonical == self.key:
            flipped = ASCENDING if self.direction == DESCENDING else DESCENDING
            return SortState(key=canonical, direction=flipped)
        return SortState(key=canonical, direction=default_direction(canonical))

    @classmethod
    def reset(cls, key: str) -> SortState:
        """Return a state for `key` with its default direction."""

        canonical = normalize_sort_key(key)
        return cls(key=canonical, direction=default_direction(canonical))


def sort_speaker_stats(stats: Iterable[SpeakerStat], state: SortState = SortState()) -> list[SpeakerStat]:
    """Return the stats sorted by the state's key and direction.

    The sort is stable. Speaker names compare case-insensitively.
    """

    key = normalize_sort_key(state.key)
    if state.direction not in {ASCENDING, DESCENDING}:
        raise ValueError(f"Unknown sort direction: {state.direction}")

    def _value(stat: SpeakerStat) -> str | float:
        value = getattr(stat, key)
        if isinstance(value, str):
            return value.lower()
        return value

    return sorted(stats, key=_value, reverse=state.direction == DESCENDING)
