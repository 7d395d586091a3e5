# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Batch analysis action.

This action runs the parse-and-analyze pipeline over every configured
transcript and writes one YAML result file per transcript plus an index.

Result files are only regenerated when the transcript bytes, the parsing
version, the analysis settings or the attendee count changed.
"""

import argparse
import fnmatch
import glob
import hashlib
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from meeting_airtime.config import AirtimeConfig, ConfigError
from meeting_airtime.hash_utils import md5_file
from meeting_airtime.pipeline import AnalysisSettings, analyze_transcript, settings_from_config
from meeting_airtime.transcripts.registry import TRANSCRIPT_PARSING_VERSION, read_transcript_text
from meeting_airtime.yaml_io import read_yaml_mapping, write_yaml_mapping


RESULTS_DIRNAME = "results"
SCHEMA_VERSION = 1


@dataclass(frozen=True)
class AnalyzeAction:
    """
    `analyze` subcommand.

    Computes speaker participation metrics and word frequency tables for all
    transcripts matched by the config.
    """

    name: str = "analyze"
    help: str = "Analyze all configured transcripts"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `analyze` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "--rebuild",
            action="store_true",
            help="Re-analyze transcripts even if their result files are up to date",
        )

    def run(self, args: argparse.Namespace, config: AirtimeConfig | None) -> int | None:
        """
        Execute the batch analysis.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Loaded configuration.

        Returns:
            None

        Raises:
            RuntimeError:
                If no configuration was provided.
        """

        if config is None:
            raise RuntimeError("AnalyzeAction requires a config, but none was provided")

        settings = settings_from_config(config)
        rebuild = bool(getattr(args, "rebuild", False))

        out_dir = config.workdir / RESULTS_DIRNAME
        out_dir.mkdir(parents=True, exist_ok=True)

        input_files = self._discover_input_files(config)
        if not input_files:
            print("No input transcript files found.")
            return None

        index: dict[str, Any] = {
            "schema_version": SCHEMA_VERSION,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "config": {
                "path": self._rel_posix(config.base_dir, config.config_path),
            },
            "transcript_parsing_version": TRANSCRIPT_PARSING_VERSION,
            "settings_fingerprint": settings.fingerprint(),
            "documents": [],
        }

        counts = {"updated": 0, "skipped": 0, "failed": 0, "unrecognized": 0}
        for input_path in input_files:
            doc_record, status = self._analyze_one_file(
                config=config,
                settings=settings,
                input_path=input_path,
                out_dir=out_dir,
                rebuild=rebuild,
            )
            index["documents"].append(doc_record)
            counts[status] += 1

        index_path = out_dir / "index.yaml"
        write_yaml_mapping(index_path, index)

        print(
            f"Processed {len(input_files)} transcript(s): updated {counts['updated']}, "
            f"skipped {counts['skipped']}, unrecognized {counts['unrecognized']}, "
            f"failed {counts['failed']}. Wrote index: {index_path}"
        )
        return None

    def _discover_input_files(self, config: AirtimeConfig) -> list[Path]:
        """
        Find transcript files based on include/exclude patterns.

        Patterns are resolved relative to the directory containing the YAML
        configuration.

        Returns:
            Sorted list of paths to transcript files.
        """

        base_dir = config.base_dir

        paths: list[Path] = []
        for pattern in config.include:
            include = self._normalize_glob_pattern(pattern)
            matches = glob.glob((base_dir / include).as_posix(), recursive=True)
            paths.extend(Path(p) for p in matches)

        if config.exclude:
            exclude_norms = [self._normalize_glob_pattern(p) for p in config.exclude]
            paths = [
                p
                for p in paths
                if not any(fnmatch.fnmatch(self._rel_posix(base_dir, p), ex) for ex in exclude_norms)
            ]

        paths = [p for p in paths if p.is_file()]
        return sorted({p.resolve() for p in paths})

    def _analyze_one_file(
        self,
        *,
        config: AirtimeConfig,
        settings: AnalysisSettings,
        input_path: Path,
        out_dir: Path,
        rebuild: bool,
    ) -> tuple[dict[str, Any], str]:
        """
        Analyze one transcript and write its YAML result file.

        Args:
            config:
                Loaded configuration.
            settings:
                Analysis settings derived from the config.
            input_path:
                Path to the transcript.
            out_dir:
                Result directory inside the workdir.
            rebuild:
                Ignore existing up-to-date result files.

        Returns:
            The document entry for the index file and one of the statuses
            `updated`, `skipped`, `unrecognized`, `failed`.
        """

        doc_id = self._document_id(config.base_dir, input_path)
        rel_path = self._rel_posix(config.base_dir, input_path)
        out_path = out_dir / f"{doc_id}.yaml"
        entry: dict[str, Any] = {"document_id": doc_id, "source_path": rel_path}

        transcript_md5 = md5_file(input_path)
        fingerprint = settings.fingerprint()
        if out_path.exists() and not rebuild:
            try:
                existing = read_yaml_mapping(out_path)
            except ConfigError:
                # Damaged result files are simply regenerated.
                existing = {}
            if self._result_up_to_date(
                existing,
                rel_path=rel_path,
                transcript_md5=transcript_md5,
                fingerprint=fingerprint,
                attendees=config.attendees,
            ):
                print(f"Skipping unchanged transcript: {rel_path}")
                entry.update(self._index_fields(config, out_path, existing))
                entry["status"] = "ok"
                return entry, "skipped"

        try:
            raw = read_transcript_text(input_path)
        except ConfigError as exc:
            print(f"WARNING: Skipping transcript due to read error: {rel_path}\n{exc}")
            entry.update({"status": "failed", "error": str(exc)})
            return entry, "failed"

        analysis = analyze_transcript(
            raw,
            attendees=config.attendees,
            source_name=input_path.name,
            settings=settings,
        )
        if analysis is None:
            print(f"WARNING: No valid transcript blocks found: {rel_path}")
            entry["status"] = "unrecognized"
            return entry, "unrecognized"

        payload: dict[str, Any] = {
            "schema_version": SCHEMA_VERSION,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "transcript_parsing_version": TRANSCRIPT_PARSING_VERSION,
            "settings_fingerprint": fingerprint,
            "source": {
                "path": rel_path,
                "md5": transcript_md5,
            },
            "document_id": doc_id,
            **analysis.to_record(),
        }
        write_yaml_mapping(out_path, payload)

        speakers = len(analysis.speakers)
        print(f"Analyzed: {rel_path} ({analysis.format}, {len(analysis.turns)} turn(s), {speakers} speaker(s))")

        entry.update(self._index_fields(config, out_path, payload))
        entry["status"] = "ok"
        return entry, "updated"

    def _index_fields(self, config: AirtimeConfig, out_path: Path, payload: dict[str, Any]) -> dict[str, Any]:
        """Return the index summary fields of a result payload."""

        summary = payload.get("summary")
        if not isinstance(summary, dict):
            summary = {}
        return {
            "result_file": self._rel_posix(config.base_dir, out_path),
            "format": payload.get("format"),
            "meeting_date": payload.get("meeting_date"),
            "speakers_total": int(summary.get("speakers_total") or 0),
            "total_words": int(summary.get("total_words") or 0),
        }

    def _result_up_to_date(
        self,
        existing: dict[str, Any],
        *,
        rel_path: str,
        transcript_md5: str,
        fingerprint: str,
        attendees: int | None,
    ) -> bool:
        """Return True if an existing result file matches current inputs."""

        if int(existing.get("transcript_parsing_version") or 0) != TRANSCRIPT_PARSING_VERSION:
            return False

        if str(existing.get("settings_fingerprint") or "") != fingerprint:
            return False

        source = existing.get("source")
        if not isinstance(source, dict):
            return False

        if str(source.get("path") or "") != rel_path:
            return False

        if str(source.get("md5") or "") != transcript_md5:
            return False

        summary = existing.get("summary")
        if not isinstance(summary, dict) or summary.get("attendees") != attendees:
            return False

        return True

    def _document_id(self, base_dir: Path, input_path: Path) -> str:
        """
        Compute a stable document identifier from the file path.

        Returns:
            `<safe-stem>-<sha1(relative path)[:10]>`
        """

        rel = self._rel_posix(base_dir, input_path)
        digest = hashlib.sha1(rel.encode("utf-8"), usedforsecurity=False).hexdigest()[:10]
        safe = "".join(ch if ch.isalnum() or ch in {"-", "_"} else "_" for ch in input_path.stem)
        safe = safe.strip("_") or "transcript"
        return f"{safe}-{digest}"

    def _normalize_glob_pattern(self, pattern: str) -> str:
        """
        Normalize user-provided glob patterns to Python's recursive glob syntax.

        Converts patterns like `**.vtt` to `**/*.vtt`.
        """

        p = pattern.strip()
        if p.startswith("**.") and "/" not in p:
            return f"**/*.{p[3:]}"
        if p in {"**", "**/"}:
            return "**/*"
        return p

    def _rel_posix(self, base_dir: Path, path: Path) -> str:
        """Compute a stable POSIX-style path relative to `base_dir`."""

        try:
            rel = path.resolve().relative_to(base_dir.resolve())
        except ValueError:
            rel = path.resolve()
        return rel.as_posix()
