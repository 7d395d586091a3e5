# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Plain text transcript loader.

Covers WebVTT exports (`.vtt`) as well as plain caption-block exports
(`.txt`, `.md`). A leading UTF-8 byte-order mark is dropped; format detection
happens on the text, not on the file suffix.
"""

from pathlib import Path

from meeting_airtime.transcripts.base import ParserError


class TextTranscriptLoader:
    """Read `.vtt`, `.txt` and `.md` transcripts as UTF-8 text."""

    suffixes = frozenset({".vtt", ".txt", ".md"})

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() in self.suffixes

    def read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParserError(f"File is not valid UTF-8: {exc}", path=path) from exc
        except OSError as exc:
            raise ParserError(f"Failed to read text file: {exc}", path=path) from exc
