# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Speaker participation metrics.

Word counts use pure whitespace tokenization (punctuation is not stripped).
Speaking time is the sum of turn durations, where negative spans caused by
clock irregularities count as zero.
"""

from dataclasses import dataclass
from typing import Iterable

from meeting_airtime.transcripts.base import Utterance


@dataclass(frozen=True)
class SpeakerStat:
    """
    Aggregated participation figures of one speaker.

    Attributes:
        speaker:
            Speaker label.
        words:
            Number of whitespace-separated tokens spoken.
        time:
            Speaking time in seconds.
        turns:
            Number of merged turns.
        longest_turn:
            Duration of the longest turn in seconds.
        word_share:
            Fraction of all words in the meeting (0..1).
        time_share:
            Fraction of the meeting duration (0..1 for non-overlapping turns).
    """

    speaker: str
    words: int
    time: float
    turns: int
    longest_turn: float
    word_share: float
    time_share: float


@dataclass(frozen=True)
class MeetingSummary:
    """
    Whole-meeting figures.

    Attributes:
        meeting_duration:
            Latest turn end minus earliest turn start, in seconds.
        total_words:
            Sum of all word counts.
    """

    meeting_duration: float
    total_words: int


def count_words(text: str) -> int:
    """Count whitespace-separated tokens."""

    return len(text.split())


def turn_duration(utterance: Utterance) -> float:
    """Return the duration of a turn, clamping negative spans to zero."""

    return max(utterance.end - utterance.start, 0.0)


@dataclass
class _Accumulator:
    words: int = 0
    time: float = 0.0
    turns: int = 0
    longest_turn: float = 0.0


def compute_metrics(turns: Iterable[Utterance]) -> tuple[MeetingSummary, list[SpeakerStat]]:
    """Aggregate meeting and per-speaker statistics.

    Args:
        turns:
            Merged utterances in source order.

    Returns:
        The meeting summary and one `SpeakerStat` per distinct speaker, in
        order of first appearance.
    """

    per_speaker: dict[str, _Accumulator] = {}
    meeting_start = float("inf")
    meeting_end = 0.0
    total_words = 0

    for turn in turns:
        duration = turn_duration(turn)
        words = count_words(turn.text)

        meeting_start = min(meeting_start, turn.start)
        meeting_end = max(meeting_end, turn.end)
        total_words += words

        acc = per_speaker.setdefault(turn.speaker, _Accumulator())
        acc.words += words
        acc.time += duration
        acc.turns += 1
        acc.longest_turn = max(acc.longest_turn, duration)

    if per_speaker:
        meeting_duration = max(meeting_end - meeting_start, 0.0)
    else:
        meeting_duration = 0.0

    stats = [
        SpeakerStat(
            speaker=speaker,
            words=acc.words,
            time=acc.time,
            turns=acc.turns,
            longest_turn=acc.longest_turn,
            word_share=acc.words / total_words if total_words else 0.0,
            time_share=acc.time / meeting_duration if meeting_duration else 0.0,
        )
        for speaker, acc in per_speaker.items()
    ]

    return MeetingSummary(meeting_duration=meeting_duration, total_words=total_words), stats


def silent_attendees(attendees: int | None, speaker_count: int) -> int | None:
    """Return how many attendees never spoke, or None without a headcount."""

    if attendees is None:
        return None
    return max(attendees - speaker_count, 0)
