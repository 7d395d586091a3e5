"""Transcript parsing.

The pipeline accepts transcripts in two text formats. Each parser converts the
raw text buffer into a list of `Utterance` records:

- `speaker`: label taken verbatim from the transcript (or `Unknown`)
- `start` / `end`: meeting-relative seconds
- `text`: trimmed spoken text

Format detection and file loading live in `registry`.
"""

from meeting_airtime.transcripts.base import UNKNOWN_SPEAKER, TranscriptParser, Utterance
from meeting_airtime.transcripts.registry import (
    UNRECOGNIZED,
    ParsedTranscript,
    Unrecognized,
    detect_transcript,
    parse_transcript,
    read_transcript_text,
)

__all__ = [
    "UNKNOWN_SPEAKER",
    "UNRECOGNIZED",
    "ParsedTranscript",
    "TranscriptParser",
    "Unrecognized",
    "Utterance",
    "detect_transcript",
    "parse_transcript",
    "read_transcript_text",
]
