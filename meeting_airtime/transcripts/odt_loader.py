# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""ODT transcript loader.

Transcripts pasted into a word processor keep one transcript line per
paragraph. The paragraphs are joined with newlines so the text parsers see the
same line structure as in the original export.
"""

from pathlib import Path

from odfdo import Document

from meeting_airtime.transcripts.base import ParserError


def _node_text(node: object) -> str:
    # odfdo Paragraph objects often expose richer text via
    # `inner_text`/`text_recursive` than via `.text`.
    for attr in ("inner_text", "text_recursive", "text"):
        value = getattr(node, attr, None)
        if callable(value):
            value = value()
        if value is not None:
            return str(value)
    return str(node)


class OdtTranscriptLoader:
    """Read ODT documents into a raw transcript text buffer."""

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() == ".odt"

    def read_text(self, path: Path) -> str:
        try:
            doc = Document(path)
            body = doc.body

            # XPath keeps document order across headings and paragraphs and is
            # more robust than `get_paragraphs()` for documents converted from
            # DOCX.
            nodes = list(body.xpath(".//text:p | .//text:h"))
            if not nodes:
                nodes = list(body.get_paragraphs())

            return "\n".join(_node_text(n) for n in nodes)
        except Exception as exc:  # noqa: BLE001
            raise ParserError(f"Failed to parse ODT file '{path}': {exc}", path=path) from exc
