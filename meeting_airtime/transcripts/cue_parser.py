# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Cue-based (WebVTT-like) transcript parser.

Rules:
- A cue starts with a line `HH:MM:SS.mmm --> HH:MM:SS.mmm`. Anything after the
  end timestamp (cue settings) is ignored.
- The first non-blank line after the timestamp line is the cue payload.
- The payload is split on its first colon into `Speaker: text`. Without a
  colon the speaker is `Unknown`.
- A timestamp line without a payload before end of input is dropped.
"""

import re

from meeting_airtime.transcripts.base import UNKNOWN_SPEAKER, Utterance, trim
from meeting_airtime.transcripts.timestamps import cue_time_to_seconds


CUE_TIMESTAMP_RE = re.compile(
    r"^(\d{2}:\d{2}:\d{2}\.\d{3})\s+-->\s+(\d{2}:\d{2}:\d{2}\.\d{3})"
)

_LINE_SPLIT_RE = re.compile(r"\r?\n")


def split_speaker(line: str) -> tuple[str, str]:
    """Split a cue payload into `(speaker, text)` at the first colon."""

    speaker, sep, text = line.partition(":")
    if not sep:
        return UNKNOWN_SPEAKER, trim(line)
    return trim(speaker), trim(text)


class CueTranscriptParser:
    """Parse transcripts with explicit `start --> end` cue lines."""

    format = "cue"

    def parse(self, raw: str) -> list[Utterance]:
        lines = _LINE_SPLIT_RE.split(raw)
        utterances: list[Utterance] = []

        idx = 0
        total = len(lines)
        while idx < total:
            match = CUE_TIMESTAMP_RE.match(trim(lines[idx]))
            if match is None:
                idx += 1
                continue

            start = cue_time_to_seconds(match.group(1))
            end = cue_time_to_seconds(match.group(2))

            payload_idx = idx + 1
            while payload_idx < total and not trim(lines[payload_idx]):
                payload_idx += 1
            if payload_idx >= total:
                break

            speaker, text = split_speaker(lines[payload_idx])
            utterances.append(Utterance(speaker=speaker, start=start, end=end, text=text))

            idx = payload_idx + 1

        return utterances
