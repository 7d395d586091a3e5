# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Timestamp normalization.

Both transcript formats carry clock strings. This module converts them into
meeting-relative seconds:

- Cue timestamps (`HH:MM:SS.mmm`) always carry milliseconds.
- Caption-block headers (`HH:MM:SS`) are wall-clock times without a date. A
  meeting that runs past midnight makes the clock appear to go backwards, so
  each start is rolled forward by whole days until it is not earlier than the
  previous one.
"""

SECONDS_PER_DAY = 24 * 3600


def cue_time_to_seconds(value: str) -> float:
    """Convert an `HH:MM:SS.mmm` cue timestamp to seconds.

    Args:
        value:
            Timestamp string as matched by the cue parser.

    Returns:
        Seconds including the millisecond fraction.
    """

    hours, minutes, rest = value.split(":")
    seconds, millis = rest.split(".")
    return int(hours) * 3600 + int(minutes) * 60 + int(seconds) + int(millis) / 1000


def clock_to_seconds(hours: str | int, minutes: str | int, seconds: str | int) -> int:
    """Convert `HH`, `MM`, `SS` clock fields to seconds since midnight."""

    return int(hours) * 3600 + int(minutes) * 60 + int(seconds)


def roll_forward(seconds: float, last_start: float) -> float:
    """Carry a wall-clock time into the following day(s) if needed.

    Args:
        seconds:
            Newly parsed start time.
        last_start:
            Previously emitted (already corrected) start time. Use
            `float("-inf")` for the first header.

    Returns:
        `seconds` plus as many whole days as needed to reach `last_start`.
    """

    value = seconds
    while value < last_start:
        value += SECONDS_PER_DAY
    return value
