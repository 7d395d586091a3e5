from __future__ import annotations

"""
CLI entrypoint for the meeting airtime tool.

This module builds a git-style subcommand CLI (via argparse) and dispatches
execution to action modules.
"""

import argparse
import logging
import sys
from dotenv import load_dotenv

from meeting_airtime.actions.analyze import AnalyzeAction
from meeting_airtime.actions.base import Action
from meeting_airtime.actions.clean import CleanAction
from meeting_airtime.actions.inspect import InspectAction
from meeting_airtime.actions.template import TemplateAction
from meeting_airtime.config import CONFIG_ENV_VAR, CONFIG_FILENAME, ConfigError, find_config_path, load_config


def _action_repository() -> dict[str, Action]:
	"""
	Construct the action registry.

	Returns:
		A mapping from subcommand name to an action instance.
	"""
	actions = [
		TemplateAction(),
		AnalyzeAction(),
		InspectAction(),
		CleanAction(),
	]
	return {a.name: a for a in actions}


def build_parser() -> argparse.ArgumentParser:
	"""
	Build the top-level argument parser.

	The parser uses subcommands (similar to `git`) where each action registers its
	own arguments.

	Returns:
		The configured ArgumentParser instance.
	"""
	parser = argparse.ArgumentParser(
		prog="meeting-airtime",
		description=(
			"Measure who spoke how much in a meeting from its VTT or TXT transcript."
		),
	)
	parser.add_argument(
		"--verbose",
		"-v",
		action="store_true",
		help="Enable debug logging",
	)

	actions = _action_repository()

	config_parent = argparse.ArgumentParser(add_help=False)
	config_parent.add_argument(
		"--config",
		"-c",
		help=(
			f"Path to {CONFIG_FILENAME}. If omitted, ${CONFIG_ENV_VAR} or "
			f"./{CONFIG_FILENAME} in the current directory is used."
		),
	)

	subparsers = parser.add_subparsers(dest="action", metavar="COMMAND", required=True)

	for name, action in actions.items():
		parents = [config_parent] if action.requires_config else []
		sub = subparsers.add_parser(name, help=action.help, parents=parents)
		action.add_arguments(sub)
		sub.set_defaults(_action_name=name)

	return parser


def _configure_logging(verbose: bool) -> None:
	logging.basicConfig(
		level=logging.DEBUG if verbose else logging.WARNING,
		format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
		datefmt="%Y-%m-%d %H:%M:%S",
	)


def main(argv: list[str] | None = None) -> int:
	"""
	Run the CLI.

	Args:
		argv:
			Optional argument list (without program name). If omitted, argparse
			reads from sys.argv.

	Returns:
		Process exit code. `0` on success, `1` if a transcript contains no
		recognizable data, `2` on configuration/usage errors.

	Raises:
		SystemExit:
			When invoked via `python -m meeting_airtime.app` (see module guard).
	"""
	load_dotenv()

	parser = build_parser()
	args = parser.parse_args(argv)
	_configure_logging(bool(args.verbose))

	try:
		actions = _action_repository()
		action_name = getattr(args, "_action_name", None)
		if not action_name or action_name not in actions:
			parser.error("Unknown or missing command")
			return 2

		action = actions[action_name]

		config = None
		if action.requires_config:
			config_path = find_config_path(getattr(args, "config", None))
			config = load_config(config_path)

		result = action.run(args, config)
		return int(result or 0)
	except ConfigError as exc:
		print(f"error: {exc}", file=sys.stderr)
		return 2


if __name__ == "__main__":
	raise SystemExit(main())
