# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Caption-block (plain TXT export) transcript parser.

Rules:
- A block starts with a header line `[Speaker Name] HH:MM:SS`.
- The block text is every following line up to a blank line or the next
  header line (some exports omit the blank separator).
- Blocks without text are dropped.
- The format has no end timestamps. Each block ends where the next one starts;
  the last block gets a fixed default tail.
"""

import logging
import re
from dataclasses import dataclass

from meeting_airtime.transcripts.base import Utterance, trim
from meeting_airtime.transcripts.timestamps import clock_to_seconds, roll_forward


logger = logging.getLogger(__name__)

CAPTION_HEADER_RE = re.compile(r"^\s*\[(.+?)\]\s+(\d{2}):(\d{2}):(\d{2})\s*$")

DEFAULT_LAST_CUE_SECONDS = 2.0


def normalize_raw(raw: str) -> str:
    """Strip a leading byte-order mark and normalize line endings to `\\n`."""

    if raw.startswith("\ufeff"):
        raw = raw[1:]
    return raw.replace("\r\n", "\n").replace("\r", "\n")


@dataclass(frozen=True)
class _Block:
    speaker: str
    start: float
    text: str


class CaptionBlockParser:
    """Parse `[Speaker] HH:MM:SS` caption blocks with inferred end times."""

    format = "caption"

    def __init__(self, default_last_cue_seconds: float = DEFAULT_LAST_CUE_SECONDS) -> None:
        self.default_last_cue_seconds = default_last_cue_seconds

    def parse(self, raw: str) -> list[Utterance]:
        lines = normalize_raw(raw).split("\n")
        blocks = self._read_blocks(lines)

        utterances: list[Utterance] = []
        for idx, block in enumerate(blocks):
            if idx + 1 < len(blocks):
                end = blocks[idx + 1].start
            else:
                end = block.start + self.default_last_cue_seconds
            utterances.append(
                Utterance(speaker=block.speaker, start=block.start, end=end, text=block.text)
            )

        logger.debug("Caption blocks: %d, utterances: %d", len(blocks), len(utterances))
        if not blocks:
            logger.debug("No caption header found. First lines: %r", lines[:5])

        return utterances

    def _read_blocks(self, lines: list[str]) -> list[_Block]:
        """Collect non-empty blocks with day-rollover corrected start times."""

        blocks: list[_Block] = []
        last_start = float("-inf")

        idx = 0
        total = len(lines)
        while idx < total:
            header = CAPTION_HEADER_RE.match(trim(lines[idx]))
            if header is None:
                idx += 1
                continue

            speaker = trim(header.group(1))
            start = roll_forward(
                clock_to_seconds(header.group(2), header.group(3), header.group(4)),
                last_start,
            )
            last_start = start

            text_lines: list[str] = []
            idx += 1
            while idx < total:
                line = trim(lines[idx])
                if not line:
                    break
                if CAPTION_HEADER_RE.match(line):
                    break
                text_lines.append(line)
                idx += 1

            text = " ".join(text_lines)
            if text:
                blocks.append(_Block(speaker=speaker, start=start, text=text))

        return blocks
