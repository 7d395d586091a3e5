# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Template configuration generator.

This action writes a ready-to-edit `airtime.yaml` file into the current
directory (or a user-specified path).
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from meeting_airtime.cli_io import confirm
from meeting_airtime.config import CONFIG_FILENAME, AirtimeConfig


@dataclass(frozen=True)
class TemplateAction:
    """
    `template` subcommand.

    This action does not require a YAML config because it produces one.
    """

    name: str = "template"
    help: str = f"Write a template {CONFIG_FILENAME} config"
    requires_config: bool = False

    _TEMPLATE_YAML: str = "\n".join(
        [
            "# Recursive glob patterns for transcript files to include/exclude",
            "# Supported transcript files: .vtt, .txt, .md, .odt",
            "# Both the WebVTT cue format and the '[Speaker] HH:MM:SS' caption-block",
            "# format are detected from the file content.",
            "# 'include' can be a string or a list of strings.",
            'include: ["transcripts/**/*.vtt", "transcripts/**/*.txt"]',
            "# 'exclude' is optional and can be a string or a list of strings.",
            '# exclude: "private/**"',
            "",
            "# Working directory for result files",
            "workdir: ./work",
            "",
            "# Optional headcount of the meeting, used to report silent attendees",
            "# attendees: 12",
            "",
            "# Parsing options (optional; defaults shown)",
            "# parsing:",
            "#   # Caption-block transcripts carry no end times. Every block ends",
            "#   # where the next one starts; the last block gets this many seconds.",
            "#   default_last_cue_seconds: 2",
            "",
            "# Word cloud options (optional; defaults shown)",
            "# wordcloud:",
            "#   # Number of speakers (by word count) with their own word table",
            "#   top_speakers: 4",
            "#   speaker_words: 40",
            "#   overall_words: 60",
            "#",
            "#   # Words excluded in addition to the built-in stopword list",
            "#   extra_stopwords: [agenda, slide]",
            "#",
            "#   # Replace the built-in stopword list (one word per line, '#' comments)",
            "#   stopwords_file: stopwords.txt",
            "",
        ]
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `template` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "path",
            nargs="?",
            default=CONFIG_FILENAME,
            help=f"Destination path for the template (default: ./{CONFIG_FILENAME})",
        )
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Allow overwriting an existing file",
        )

    def run(self, args: argparse.Namespace, config: AirtimeConfig | None) -> int | None:
        """
        Execute the template writer.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Unused for this action.

        Returns:
            None

        Raises:
            ConfigError:
                If the destination exists, `--force` is not set and the user
                cannot be asked.
        """

        _ = config
        dest = Path(args.path)

        if dest.exists() and not confirm(
            f"Output file already exists: {dest}. Overwrite?",
            force=bool(args.force),
        ):
            print("Aborted.")
            return None

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(self._TEMPLATE_YAML, encoding="utf-8")
        print(f"Wrote template config to: {dest}")
        return None
