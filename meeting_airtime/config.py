# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Configuration loading and validation.

This module handles reading `airtime.yaml`, validating keys, and normalizing
paths so that downstream actions can rely on a typed config object.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


CONFIG_FILENAME = "airtime.yaml"
CONFIG_ENV_VAR = "MEETING_AIRTIME_CONFIG"


@dataclass(frozen=True)
class ParsingConfig:
    """
    Configuration for transcript parsing.

    Attributes:
        default_last_cue_seconds:
            Duration assigned to the last block of a caption-block transcript,
            which carries no end timestamp.
    """

    default_last_cue_seconds: float = 2.0


@dataclass(frozen=True)
class WordCloudConfig:
    """
    Configuration for the word frequency tables.

    Attributes:
        top_speakers:
            Number of speakers (by word count) that get their own table.
        speaker_words:
            Maximum number of words per speaker table.
        overall_words:
            Maximum number of words in the table over all speakers.
        extra_stopwords:
            Additional words excluded from all counts.
        stopwords:
            Replacement stopword list read from `stopwords_file`, or None to
            use the built-in list.
    """

    top_speakers: int = 4
    speaker_words: int = 40
    overall_words: int = 60
    extra_stopwords: tuple[str, ...] = ()
    stopwords: tuple[str, ...] | None = None


@dataclass(frozen=True)
class AirtimeConfig:
    """
    Parsed configuration for a batch analysis run.

    Attributes:
        config_path:
            Path to the YAML config file used for this run.
        base_dir:
            Directory that relative paths and glob patterns are resolved against.
        include:
            Glob patterns for transcript files to include.
        exclude:
            Glob patterns for transcript files to exclude.
        workdir:
            Directory for result work files.
        attendees:
            Optional headcount used for the "silent attendees" figure.
        parsing:
            Settings used by the transcript parsers.
        wordcloud:
            Settings used by the word frequency tables.
    """

    config_path: Path
    base_dir: Path
    include: list[str]
    exclude: list[str]
    workdir: Path
    attendees: int | None = None
    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    wordcloud: WordCloudConfig = field(default_factory=WordCloudConfig)


class ConfigError(RuntimeError):
    """
    Raised when the YAML configuration is missing, invalid, or cannot be parsed.
    """

    pass


def find_config_path(cli_path: str | None) -> Path:
    """
    Determine which YAML config file to use.

    Args:
        cli_path:
            Optional config path provided on the command line. Takes precedence
            over the `MEETING_AIRTIME_CONFIG` environment variable.

    Returns:
        The resolved Path object (not necessarily existing).
    """

    if cli_path:
        return Path(cli_path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    return Path.cwd() / CONFIG_FILENAME


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_patterns(value: Any, *, key: str, required: bool) -> list[str]:
    """
    Parse a glob pattern setting given as a string or a list of strings.

    Args:
        value:
            Raw YAML value.
        key:
            Config key for error messages.
        required:
            Whether at least one pattern must be given.

    Returns:
        Stripped, non-empty patterns.

    Raises:
        ConfigError:
            If the value has the wrong type or is empty while required.
    """

    if value is None:
        if required:
            raise ConfigError(f"'{key}' must be a non-empty string or list of strings")
        return []

    items = [value] if isinstance(value, str) else value
    if not isinstance(items, list) or not items:
        raise ConfigError(f"'{key}' must be a non-empty string or list of strings")

    patterns: list[str] = []
    for idx, item in enumerate(items, start=1):
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(f"'{key}' entries must be non-empty strings (problem at index {idx})")
        patterns.append(item.strip())

    return patterns


def _parse_parsing(value: Any) -> ParsingConfig:
    """
    Parse and validate the optional `parsing` section.

    Args:
        value:
            Raw YAML value for the `parsing` key.

    Returns:
        A ParsingConfig instance (with defaults if section is missing).

    Raises:
        ConfigError:
            If the section exists but is not valid.
    """

    if value is None:
        return ParsingConfig()

    if not isinstance(value, dict):
        raise ConfigError("'parsing' must be a mapping if provided")

    tail = value.get("default_last_cue_seconds", ParsingConfig.default_last_cue_seconds)
    if isinstance(tail, bool) or not isinstance(tail, (int, float)):
        raise ConfigError("parsing.default_last_cue_seconds must be a number")
    if tail < 0:
        raise ConfigError("parsing.default_last_cue_seconds must be >= 0")

    return ParsingConfig(default_last_cue_seconds=float(tail))


def read_stopwords_file(path: Path) -> tuple[str, ...]:
    """
    Read a stopword list with one word per line.

    Blank lines and lines starting with `#` are ignored. Words are lower-cased.

    Raises:
        ConfigError:
            If the file cannot be read.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read stopwords file '{path}': {exc}") from exc

    words: list[str] = []
    for line in raw.splitlines():
        word = line.strip().lower()
        if word and not word.startswith("#"):
            words.append(word)
    return tuple(words)


def _parse_wordcloud(value: Any, *, base_dir: Path) -> WordCloudConfig:
    """
    Parse and validate the optional `wordcloud` section.

    Args:
        value:
            Raw YAML value for the `wordcloud` key.
        base_dir:
            Directory that `stopwords_file` is resolved against.

    Returns:
        A WordCloudConfig instance (with defaults if section is missing).

    Raises:
        ConfigError:
            If the section exists but is not valid.
    """

    if value is None:
        return WordCloudConfig()

    if not isinstance(value, dict):
        raise ConfigError("'wordcloud' must be a mapping if provided")

    limits: dict[str, int] = {}
    for key in ("top_speakers", "speaker_words", "overall_words"):
        limit = value.get(key, getattr(WordCloudConfig, key))
        if not _is_int(limit):
            raise ConfigError(f"wordcloud.{key} must be an integer")
        if limit <= 0:
            raise ConfigError(f"wordcloud.{key} must be > 0")
        limits[key] = limit

    extra = value.get("extra_stopwords")
    if extra is None:
        extra = []
    if not isinstance(extra, list) or not all(isinstance(w, str) and w.strip() for w in extra):
        raise ConfigError("wordcloud.extra_stopwords must be a list of non-empty strings")

    stopwords: tuple[str, ...] | None = None
    stopwords_file = value.get("stopwords_file")
    if stopwords_file is not None:
        if not isinstance(stopwords_file, str) or not stopwords_file.strip():
            raise ConfigError("wordcloud.stopwords_file must be a non-empty string if provided")
        stopwords = read_stopwords_file((base_dir / stopwords_file.strip()).resolve())

    return WordCloudConfig(
        top_speakers=limits["top_speakers"],
        speaker_words=limits["speaker_words"],
        overall_words=limits["overall_words"],
        extra_stopwords=tuple(w.strip().lower() for w in extra),
        stopwords=stopwords,
    )


def load_config(path: Path) -> AirtimeConfig:
    """
    Load and validate an `airtime.yaml` configuration file.

    Args:
        path:
            Path to the YAML config file.

    Returns:
        A validated AirtimeConfig instance.

    Raises:
        ConfigError:
            If the file is missing, unreadable, cannot be parsed as YAML, or is
            missing required keys.
    """

    if not path.exists():
        raise ConfigError(
            f"No {CONFIG_FILENAME} found in current directory and no --config provided. "
            "Use the 'template' command to create one or pass --config PATH."
        )
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to read YAML config: {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError("Config YAML must contain a mapping at the top level")

    missing = [k for k in ("include", "workdir") if k not in raw]
    if missing:
        raise ConfigError(f"Config is missing required key(s): {', '.join(missing)}")

    include = _parse_patterns(raw.get("include"), key="include", required=True)
    exclude = _parse_patterns(raw.get("exclude"), key="exclude", required=False)

    workdir = raw.get("workdir")
    if not isinstance(workdir, str) or not workdir.strip():
        raise ConfigError("'workdir' must be a non-empty string")

    attendees = raw.get("attendees")
    if attendees is not None and (not _is_int(attendees) or attendees < 0):
        raise ConfigError("'attendees' must be a non-negative integer if provided")

    # Interpret workdir and glob patterns relative to config file location.
    base_dir = path.parent.resolve()

    parsing = _parse_parsing(raw.get("parsing"))
    wordcloud = _parse_wordcloud(raw.get("wordcloud"), base_dir=base_dir)

    return AirtimeConfig(
        config_path=path.resolve(),
        base_dir=base_dir,
        include=include,
        exclude=exclude,
        workdir=(base_dir / workdir.strip()).resolve(),
        attendees=attendees,
        parsing=parsing,
        wordcloud=wordcloud,
    )
