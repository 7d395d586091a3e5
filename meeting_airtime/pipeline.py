# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Parse-and-analyze pipeline.

One call consumes one complete transcript buffer and returns one complete
result:

    raw text -> utterances -> turns -> metrics + frequency tables

The pipeline holds no state between calls. Unrecognized or empty input yields
`None`, which callers must treat as "no valid data" and not render any
downstream sections.
"""

import logging
import re
from dataclasses import asdict, dataclass
from typing import Any

from meeting_airtime.config import AirtimeConfig
from meeting_airtime.hash_utils import md5_json
from meeting_airtime.merge import merge_utterances
from meeting_airtime.metrics import MeetingSummary, SpeakerStat, compute_metrics, silent_attendees
from meeting_airtime.transcripts.base import Utterance
from meeting_airtime.transcripts.caption_parser import DEFAULT_LAST_CUE_SECONDS
from meeting_airtime.transcripts.registry import ParsedTranscript, default_attempts, detect_transcript
from meeting_airtime.wordfreq import DEFAULT_STOPWORDS, FrequencyTable, build_frequency_tables


logger = logging.getLogger(__name__)

_FILENAME_DATE_RE = re.compile(r"GMT(\d{4})(\d{2})(\d{2})-(\d{6})")


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Tunables of one analysis run.

    Attributes:
        default_last_cue_seconds:
            Tail assigned to the last caption block.
        top_speakers:
            Number of speakers that get their own frequency table.
        speaker_words:
            Maximum words per speaker table.
        overall_words:
            Maximum words in the aggregate table.
        stopwords:
            Words excluded from all frequency counts.
    """

    default_last_cue_seconds: float = DEFAULT_LAST_CUE_SECONDS
    top_speakers: int = 4
    speaker_words: int = 40
    overall_words: int = 60
    stopwords: frozenset[str] = DEFAULT_STOPWORDS

    def fingerprint(self) -> str:
        """Return a stable hash used to detect changed settings."""

        return md5_json(
            {
                "default_last_cue_seconds": self.default_last_cue_seconds,
                "top_speakers": self.top_speakers,
                "speaker_words": self.speaker_words,
                "overall_words": self.overall_words,
                "stopwords": sorted(self.stopwords),
            }
        )


def settings_from_config(config: AirtimeConfig) -> AnalysisSettings:
    """Build analysis settings from a loaded config file."""

    wordcloud = config.wordcloud
    base = wordcloud.stopwords if wordcloud.stopwords is not None else DEFAULT_STOPWORDS
    return AnalysisSettings(
        default_last_cue_seconds=config.parsing.default_last_cue_seconds,
        top_speakers=wordcloud.top_speakers,
        speaker_words=wordcloud.speaker_words,
        overall_words=wordcloud.overall_words,
        stopwords=frozenset(base) | frozenset(wordcloud.extra_stopwords),
    )


@dataclass(frozen=True)
class TranscriptAnalysis:
    """
    Complete result of one analysis run.

    Attributes:
        format:
            Detected transcript format (`cue` or `caption`).
        utterances:
            Raw utterances as parsed.
        turns:
            Merged utterances.
        summary:
            Whole-meeting figures.
        speakers:
            Per-speaker stats in order of first appearance.
        speaker_tables:
            Frequency tables of the most talkative speakers.
        overall_table:
            Frequency table over all speakers.
        meeting_date:
            Display date derived from the source file name, if any.
        attendees:
            External headcount, if given.
        silent_attendees:
            Attendees who never spoke, if a headcount was given.
    """

    format: str
    utterances: list[Utterance]
    turns: list[Utterance]
    summary: MeetingSummary
    speakers: list[SpeakerStat]
    speaker_tables: list[FrequencyTable]
    overall_table: FrequencyTable
    meeting_date: str | None = None
    attendees: int | None = None
    silent_attendees: int | None = None

    def to_record(self) -> dict[str, Any]:
        """Return the result as plain mappings and lists (YAML/JSON friendly)."""

        def _table(table: FrequencyTable) -> dict[str, Any]:
            return {"label": table.label, "words": [asdict(e) for e in table.entries]}

        return {
            "format": self.format,
            "meeting_date": self.meeting_date,
            "summary": {
                "meeting_duration": self.summary.meeting_duration,
                "total_words": self.summary.total_words,
                "utterances_total": len(self.utterances),
                "turns_total": len(self.turns),
                "speakers_total": len(self.speakers),
                "attendees": self.attendees,
                "silent_attendees": self.silent_attendees,
            },
            "speakers": [asdict(s) for s in self.speakers],
            "word_clouds": {
                "speakers": [_table(t) for t in self.speaker_tables],
                "overall": _table(self.overall_table),
            },
            "turns": [asdict(t) for t in self.turns],
        }


def meeting_date_from_filename(name: str | None) -> str | None:
    """Extract a display date from names like `GMT20220401-170425_Recording.vtt`.

    Returns:
        `DD/MM/YYYY HH:MM`, or None if the name does not follow the pattern.
    """

    if not name:
        return None
    match = _FILENAME_DATE_RE.search(name)
    if match is None:
        return None
    year, month, day, clock = match.groups()
    return f"{day}/{month}/{year} {clock[0:2]}:{clock[2:4]}"


def analyze_transcript(
    raw: str,
    *,
    attendees: int | None = None,
    source_name: str | None = None,
    settings: AnalysisSettings | None = None,
) -> TranscriptAnalysis | None:
    """
    Parse and analyze one transcript buffer.

    Args:
        raw:
            Full transcript text in either supported format.
        attendees:
            Optional headcount for the silent attendee figure.
        source_name:
            Optional file name, only used for the display date hint.
        settings:
            Analysis tunables. Defaults to `AnalysisSettings()`.

    Returns:
        The analysis, or None if the text contains no recognizable transcript
        blocks.
    """

    if not raw.strip():
        return None

    settings = settings or AnalysisSettings()
    detected = detect_transcript(raw, default_attempts(settings.default_last_cue_seconds))
    if not isinstance(detected, ParsedTranscript):
        logger.debug("No transcript blocks recognized")
        return None

    turns = merge_utterances(detected.utterances)
    summary, speakers = compute_metrics(turns)
    speaker_tables, overall_table = build_frequency_tables(
        turns,
        speakers,
        top_speakers=settings.top_speakers,
        speaker_limit=settings.speaker_words,
        overall_limit=settings.overall_words,
        stopwords=settings.stopwords,
    )

    return TranscriptAnalysis(
        format=detected.format,
        utterances=detected.utterances,
        turns=turns,
        summary=summary,
        speakers=speakers,
        speaker_tables=speaker_tables,
        overall_table=overall_table,
        meeting_date=meeting_date_from_filename(source_name),
        attendees=attendees,
        silent_attendees=silent_attendees(attendees, len(speakers)),
    )
