from __future__ import annotations

"""
Result file cleanup action.

`analyze` keeps one YAML result file per transcript plus `index.yaml` in
`<workdir>/results/`. The `clean` subcommand deletes exactly these files so
that the next `analyze` run starts from scratch. Anything else the user keeps
in the workdir is left alone.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from meeting_airtime.actions.analyze import RESULTS_DIRNAME
from meeting_airtime.cli_io import confirm
from meeting_airtime.config import AirtimeConfig, ConfigError


@dataclass(frozen=True)
class CleanAction:
    """
    `clean` subcommand.

    Removes the analysis result files of the configured `workdir`.
    """

    name: str = "clean"
    help: str = "Delete the analysis result files"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Do not prompt for confirmation",
        )

    def run(self, args: argparse.Namespace, config: AirtimeConfig | None) -> int | None:
        """
        Execute the cleanup.

        Raises:
            ConfigError:
                If the result files cannot be removed or if confirmation is
                required but cannot be requested.
        """

        if config is None:
            raise RuntimeError("CleanAction requires a config, but none was provided")

        results_dir = config.workdir / RESULTS_DIRNAME
        result_files = self._result_files(results_dir)
        if not result_files:
            print(f"No result files to clean in: {results_dir}")
            return None

        if not confirm(
            f"This will delete {len(result_files)} result file(s) in '{results_dir}'. Continue?",
            force=bool(args.force),
        ):
            print("Aborted.")
            return None

        for path in result_files:
            try:
                path.unlink()
            except OSError as exc:
                raise ConfigError(f"Failed to remove '{path}': {exc}") from exc

        if not any(results_dir.iterdir()):
            results_dir.rmdir()

        print(f"Removed {len(result_files)} result file(s) from: {results_dir}")
        return None

    def _result_files(self, results_dir: Path) -> list[Path]:
        """List the YAML files written by `analyze`, index included."""

        if not results_dir.exists():
            return []
        if not results_dir.is_dir():
            raise ConfigError(f"Result path is not a directory: {results_dir}")

        return sorted(p for p in results_dir.glob("*.yaml") if p.is_file())
