# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Small CLI interaction helpers.

Destructive actions (overwriting the config template, emptying the workdir)
ask for confirmation in interactive terminals. In non-interactive contexts
(CI, pipes) they require an explicit `--force` instead.
"""

import sys

from meeting_airtime.config import ConfigError


def is_interactive_tty() -> bool:
    """
    Determine whether we can safely prompt the user.

    Returns:
        True if both stdin and stdout are connected to a TTY.
    """

    try:
        return sys.stdin.isatty() and sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def prompt_yes_no(question: str, *, default_no: bool = True) -> bool:
    """
    Ask the user a yes/no question.

    Args:
        question:
            Prompt text without the trailing choice suffix.
        default_no:
            If true, empty input is treated as "no".

    Returns:
        True if the user answered yes.
    """

    suffix = "[y/N]" if default_no else "[Y/n]"
    while True:
        answer = input(f"{question} {suffix} ").strip().lower()
        if not answer:
            return not default_no
        if answer in {"y", "yes"}:
            return True
        if answer in {"n", "no"}:
            return False


def confirm(question: str, *, force: bool) -> bool:
    """
    Confirm a destructive operation.

    Args:
        question:
            Prompt shown in interactive terminals.
        force:
            Skip the prompt (`--force`).

    Returns:
        True if the operation may proceed.

    Raises:
        ConfigError:
            If confirmation is required but the session is not interactive.
    """

    if force:
        return True

    if not is_interactive_tty():
        raise ConfigError(
            "Refusing to continue without confirmation on a non-interactive TTY. "
            "Re-run with --force."
        )

    return prompt_yes_no(question, default_no=True)
