# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript parser interface and shared records."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


UNKNOWN_SPEAKER = "Unknown"

# Byte-order marks are not whitespace for `str.strip()`.
_EDGE_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def trim(text: str) -> str:
    """Strip whitespace and byte-order marks from both ends of a line."""

    return _EDGE_RE.sub("", text)


@dataclass(frozen=True)
class Utterance:
    """One contiguous unit of speech.

    The same record is used for merged turns. `end >= start` is not
    guaranteed: consumers must treat a negative span as zero duration.

    Attributes:
        speaker:
            Speaker label exactly as found in the transcript (trimmed).
        start:
            Meeting-relative start in seconds.
        end:
            Meeting-relative end in seconds.
        text:
            Spoken text (trimmed).
    """

    speaker: str
    start: float
    end: float
    text: str


class TranscriptParser(Protocol):
    """Interface for transcript text parsing.

    Implementations turn a raw text buffer into utterances. They must never
    raise on malformed input; unrecognized content yields an empty list.
    """

    format: str

    def parse(self, raw: str) -> list[Utterance]:
        """Return the utterances found in the raw transcript text."""

        raise NotImplementedError


class TranscriptLoader(Protocol):
    """Interface for reading a transcript file into a raw text buffer."""

    def can_read(self, path: Path) -> bool:
        """Return True if this loader supports the given file."""

        raise NotImplementedError

    def read_text(self, path: Path) -> str:
        """Return the raw transcript text of the given file."""

        raise NotImplementedError


@dataclass(frozen=True)
class ParserError(RuntimeError):
    """Raised when a transcript file cannot be read."""

    message: str
    path: Path | None = None
    line: int | None = None
    excerpt: str | None = None

    def __str__(self) -> str:
        parts: list[str] = []

        if self.path is not None:
            if self.line is not None:
                parts.append(f"{self.path}:{self.line}: {self.message}")
            else:
                parts.append(f"{self.path}: {self.message}")
        else:
            parts.append(self.message)

        if isinstance(self.excerpt, str) and self.excerpt.strip():
            excerpt = self.excerpt.strip().replace("\n", " ")
            if len(excerpt) > 160:
                excerpt = excerpt[:157] + "..."
            parts.append(f"> {excerpt}")

        return "\n".join(parts)
