# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Utterance merging.

Transcription tools often split one person's speech into many short cues. This
module coalesces consecutive utterances of the same speaker into turns.
"""

from dataclasses import replace
from typing import Iterable

from meeting_airtime.transcripts.base import Utterance


def merge_utterances(utterances: Iterable[Utterance]) -> list[Utterance]:
    """Merge consecutive same-speaker utterances into turns.

    Speakers are compared by exact (case-sensitive) string equality. A merged
    turn keeps the first utterance's start, takes the last utterance's end and
    joins the texts with single spaces.

    Args:
        utterances:
            Utterances in source order.

    Returns:
        Turns in source order. No two adjacent turns share a speaker.
    """

    merged: list[Utterance] = []
    current: Utterance | None = None
    parts: list[str] = []

    for utterance in utterances:
        if current is not None and utterance.speaker == current.speaker:
            current = replace(current, end=utterance.end)
            parts.append(utterance.text)
            continue

        if current is not None:
            merged.append(replace(current, text=" ".join(parts)))
        current = utterance
        parts = [utterance.text]

    if current is not None:
        merged.append(replace(current, text=" ".join(parts)))

    return merged
