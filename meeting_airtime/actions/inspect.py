# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Single transcript inspection action.

Prints a plain-text participation summary for one transcript file (or stdin)
without requiring a config file.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

from meeting_airtime.config import AirtimeConfig, ConfigError
from meeting_airtime.metrics import SpeakerStat
from meeting_airtime.pipeline import TranscriptAnalysis, analyze_transcript
from meeting_airtime.sorting import (
    ASCENDING,
    DESCENDING,
    SORT_KEY_ALIASES,
    SORT_KEYS,
    SortState,
    sort_speaker_stats,
)
from meeting_airtime.transcripts.registry import read_transcript_text
from meeting_airtime.wordfreq import top_terms_text


NO_DATA_MESSAGE = (
    "No valid transcript blocks were found. "
    "Supported formats: VTT, or TXT blocks like: [Speaker] 12:34:56"
)


@dataclass(frozen=True)
class InspectAction:
    """
    `inspect` subcommand.

    Analyzes a single transcript and prints the speaker table to stdout.
    """

    name: str = "inspect"
    help: str = "Print participation metrics for a single transcript"
    requires_config: bool = False

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `inspect` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument("path", help="Transcript file (.vtt, .txt, .md, .odt) or '-' for stdin")
        parser.add_argument(
            "--attendees",
            type=int,
            default=None,
            help="Number of meeting attendees (reports how many never spoke)",
        )
        parser.add_argument(
            "--sort",
            default="word_share",
            choices=[*SORT_KEYS, *SORT_KEY_ALIASES],
            help="Speaker table sort key (default: word_share)",
        )
        direction = parser.add_mutually_exclusive_group()
        direction.add_argument("--asc", dest="direction", action="store_const", const=ASCENDING)
        direction.add_argument("--desc", dest="direction", action="store_const", const=DESCENDING)
        parser.add_argument(
            "--terms",
            type=int,
            default=12,
            help="Number of top terms shown per word table (default: 12)",
        )

    def run(self, args: argparse.Namespace, config: AirtimeConfig | None) -> int | None:
        """
        Execute the inspection.

        Returns:
            1 if the transcript contains no recognizable blocks, else None.

        Raises:
            ConfigError:
                If the file cannot be read or the arguments are invalid.
        """

        _ = config
        if args.attendees is not None and args.attendees < 0:
            raise ConfigError("--attendees must be >= 0")

        if args.path == "-":
            raw = sys.stdin.read()
            source_name = None
        else:
            path = Path(args.path)
            if not path.is_file():
                raise ConfigError(f"Transcript file not found: {path}")
            raw = read_transcript_text(path)
            source_name = path.name

        analysis = analyze_transcript(raw, attendees=args.attendees, source_name=source_name)
        if analysis is None:
            print(NO_DATA_MESSAGE, file=sys.stderr)
            return 1

        state = SortState.reset(args.sort)
        if args.direction is not None and args.direction != state.direction:
            state = state.select(args.sort)

        self._print_report(analysis, state, terms=int(args.terms), title=args.path)
        return None

    def _print_report(self, analysis: TranscriptAnalysis, state: SortState, *, terms: int, title: str) -> None:
        summary = analysis.summary

        print(f"Transcript: {title} ({analysis.format})")
        if analysis.meeting_date:
            print(f"Date: {analysis.meeting_date}")
        print(f"Total words: {summary.total_words}")
        print(f"Meeting duration: {summary.meeting_duration / 60:.1f} minutes")
        if analysis.attendees:
            print(
                f"Attendees: {analysis.attendees}, spoke: {len(analysis.speakers)}, "
                f"silent: {analysis.silent_attendees}"
            )

        direction = "ascending" if state.direction == ASCENDING else "descending"
        print()
        print(f"Speakers (sorted by {state.key}, {direction}):")
        for line in self._speaker_lines(sort_speaker_stats(analysis.speakers, state)):
            print(line)

        tables = [*analysis.speaker_tables, analysis.overall_table]
        print()
        print("Top terms:")
        for table in tables:
            print(f"  {table.label}: {top_terms_text(table, terms) or '-'}")

    def _speaker_lines(self, stats: list[SpeakerStat]) -> list[str]:
        width = max([len("Speaker"), *(len(s.speaker) for s in stats)])
        lines = [
            f"  {'Speaker':<{width}}  {'Words':>6}  {'Minutes':>7}  {'Words %':>7}  {'Time %':>7}  {'Turns':>5}"
        ]
        for s in stats:
            lines.append(
                f"  {s.speaker:<{width}}  {s.words:>6}  {s.time / 60:>7.1f}  "
                f"{s.word_share * 100:>6.1f}%  {s.time_share * 100:>6.1f}%  {s.turns:>5}"
            )
        return lines
