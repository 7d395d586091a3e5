# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript format detection and loader registry.

Format detection is an ordered fallback chain rather than pure sniffing:

1. If the cue timestamp pattern appears anywhere in the text, try the cue
   parser.
2. Try the caption-block parser.
3. Try the cue parser again without the signature check.

The first attempt that yields at least one utterance wins.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from meeting_airtime.config import ConfigError
from meeting_airtime.transcripts.base import ParserError, TranscriptLoader, TranscriptParser, Utterance
from meeting_airtime.transcripts.caption_parser import DEFAULT_LAST_CUE_SECONDS, CaptionBlockParser
from meeting_airtime.transcripts.cue_parser import CueTranscriptParser
from meeting_airtime.transcripts.odt_loader import OdtTranscriptLoader
from meeting_airtime.transcripts.text_loader import TextTranscriptLoader


logger = logging.getLogger(__name__)

# Bump this whenever transcript parsing semantics change in a way that should
# force regeneration of result work files even if the underlying transcript
# file bytes are unchanged.
TRANSCRIPT_PARSING_VERSION = 1

CUE_SIGNATURE_RE = re.compile(
    r"^[ \t]*\d{2}:\d{2}:\d{2}\.\d{3}\s+-->\s+\d{2}:\d{2}:\d{2}\.\d{3}",
    re.MULTILINE,
)


@dataclass(frozen=True)
class ParsedTranscript:
    """Successful detection result.

    Attributes:
        format:
            Format tag of the parser that produced the utterances.
        utterances:
            Non-empty list of parsed utterances in source order.
    """

    format: str
    utterances: list[Utterance]


@dataclass(frozen=True)
class Unrecognized:
    """Detection result when no parser found any utterance."""


UNRECOGNIZED = Unrecognized()


@dataclass(frozen=True)
class ParseAttempt:
    """One step of the detection chain.

    Attributes:
        parser:
            Parser to run.
        requires_signature:
            Only run the parser if the cue timestamp signature occurs in the
            text.
    """

    parser: TranscriptParser
    requires_signature: bool = False

    def applies_to(self, raw: str) -> bool:
        return not self.requires_signature or CUE_SIGNATURE_RE.search(raw) is not None


def default_attempts(
    default_last_cue_seconds: float = DEFAULT_LAST_CUE_SECONDS,
) -> tuple[ParseAttempt, ...]:
    """Return the detection chain in priority order."""

    cue = CueTranscriptParser()
    caption = CaptionBlockParser(default_last_cue_seconds=default_last_cue_seconds)
    return (
        ParseAttempt(cue, requires_signature=True),
        ParseAttempt(caption),
        ParseAttempt(cue),
    )


def detect_transcript(
    raw: str,
    attempts: tuple[ParseAttempt, ...] | None = None,
) -> ParsedTranscript | Unrecognized:
    """Parse raw transcript text with the first matching format.

    Args:
        raw:
            Full transcript buffer in either supported format.
        attempts:
            Optional detection chain. Defaults to `default_attempts()`.

    Returns:
        `ParsedTranscript` for the first attempt yielding utterances, otherwise
        `UNRECOGNIZED`.
    """

    for attempt in attempts if attempts is not None else default_attempts():
        if not attempt.applies_to(raw):
            continue
        utterances = attempt.parser.parse(raw)
        if utterances:
            logger.debug(
                "Detected %s transcript with %d utterance(s)",
                attempt.parser.format,
                len(utterances),
            )
            return ParsedTranscript(format=attempt.parser.format, utterances=utterances)
        logger.debug("Parser %s found no utterances", attempt.parser.format)

    return UNRECOGNIZED


def parse_transcript(raw: str) -> list[Utterance]:
    """Return the utterances of a transcript or an empty list if unrecognized."""

    result = detect_transcript(raw)
    if isinstance(result, ParsedTranscript):
        return result.utterances
    return []


_LOADERS: list[TranscriptLoader] = [
    OdtTranscriptLoader(),
    TextTranscriptLoader(),
]

SUPPORTED_SUFFIXES = (".md", ".odt", ".txt", ".vtt")


def get_transcript_loader(path: Path) -> TranscriptLoader:
    """Select a transcript loader based on the file.

    Args:
        path:
            Transcript file path.

    Returns:
        A loader instance.

    Raises:
        ConfigError:
            If no loader supports the file.
    """

    for loader in _LOADERS:
        if loader.can_read(path):
            return loader

    supported = ", ".join(SUPPORTED_SUFFIXES)
    raise ConfigError(f"Unsupported transcript format: {path} (supported: {supported})")


def read_transcript_text(path: Path) -> str:
    """Read a transcript file and normalize errors to ConfigError."""

    loader = get_transcript_loader(path)
    try:
        return loader.read_text(path)
    except ParserError as exc:
        raise ConfigError(str(exc)) from exc
