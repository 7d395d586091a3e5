# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Lexical frequency tables for word clouds.

Tokenization is deliberately simple: lower-case, replace everything except
`a-z`, `0-9` and whitespace with spaces, split on whitespace, then drop
single-character tokens and stopwords.

Per-speaker tables are counted from each speaker's own text. They are not
derived from the aggregate table.
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Sequence

from meeting_airtime.metrics import SpeakerStat
from meeting_airtime.transcripts.base import Utterance


DEFAULT_STOPWORDS: frozenset[str] = frozenset(
    [
        "the", "and", "a", "to", "of", "in", "it", "is", "i", "you", "that", "on", "for", "this",
        "with", "we", "as", "at", "be", "are", "was", "were", "have", "has", "had", "or", "so",
        "if", "but", "they", "them", "our", "us", "by", "from", "an", "about", "not", "do",
        "does", "did", "can", "could", "should", "would", "will", "just", "like", "into",
        "over", "out", "up", "down", "then", "than", "there", "here", "what", "when", "where",
        "who", "which", "how", "also", "all", "any", "some", "your", "my", "me", "their", "its",
        # filler / discourse markers
        "yeah", "ok", "okay", "uh", "um", "uhm", "hmm", "mm", "kind", "sort", "ve", "re", "right",
        "well", "actually", "really", "literally", "basically", "kinda", "sorta", "gonna",
    ]
)

ALL_SPEAKERS_LABEL = "All speakers"

_NON_WORD_RE = re.compile(r"[^a-z0-9\s]")


@dataclass(frozen=True)
class WordCount:
    """
    One word cloud term.

    Attributes:
        word:
            Normalized token.
        count:
            Number of occurrences.
        weight:
            Display weight in [0, 1], relative to the table's min/max count.
    """

    word: str
    count: int
    weight: float


@dataclass(frozen=True)
class FrequencyTable:
    """Ranked word counts for one speaker or for the whole meeting."""

    label: str
    entries: tuple[WordCount, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def pairs(self) -> list[tuple[str, int]]:
        return [(e.word, e.count) for e in self.entries]


def tokenize(text: str, stopwords: Iterable[str] = DEFAULT_STOPWORDS) -> list[str]:
    """Split text into lower-case content tokens."""

    stop = stopwords if isinstance(stopwords, (set, frozenset)) else frozenset(stopwords)
    cleaned = _NON_WORD_RE.sub(" ", text.lower())
    return [t for t in cleaned.split() if len(t) > 1 and t not in stop]


def word_frequencies(text: str, stopwords: Iterable[str] = DEFAULT_STOPWORDS) -> Counter[str]:
    """Count content tokens. Keys keep first-seen order."""

    return Counter(tokenize(text, stopwords))


def rank_words(counts: Counter[str], limit: int) -> list[tuple[str, int]]:
    """Return the top `limit` words by descending count.

    The sort is stable, so words with equal counts keep their first-seen order.
    """

    return sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]


def display_weights(pairs: Sequence[tuple[str, int]]) -> list[float]:
    """Scale counts to [0, 1] using the table's own min and max.

    A table whose counts are all equal gives every word the full weight 1.
    """

    if not pairs:
        return []
    counts = [count for _, count in pairs]
    low = min(counts)
    high = max(counts)
    if high == low:
        return [1.0] * len(counts)
    return [(count - low) / (high - low) for count in counts]


def build_table(label: str, text: str, limit: int, stopwords: Iterable[str] = DEFAULT_STOPWORDS) -> FrequencyTable:
    """Build a ranked, weighted frequency table from free text."""

    pairs = rank_words(word_frequencies(text, stopwords), limit)
    weights = display_weights(pairs)
    return FrequencyTable(
        label=label,
        entries=tuple(
            WordCount(word=word, count=count, weight=weight)
            for (word, count), weight in zip(pairs, weights)
        ),
    )


def speaker_texts(turns: Iterable[Utterance]) -> dict[str, str]:
    """Concatenate each speaker's text in source order."""

    parts: dict[str, list[str]] = {}
    for turn in turns:
        parts.setdefault(turn.speaker, []).append(turn.text)
    return {speaker: " ".join(texts) for speaker, texts in parts.items()}


def build_frequency_tables(
    turns: Sequence[Utterance],
    stats: Sequence[SpeakerStat],
    *,
    top_speakers: int = 4,
    speaker_limit: int = 40,
    overall_limit: int = 60,
    stopwords: Iterable[str] = DEFAULT_STOPWORDS,
) -> tuple[list[FrequencyTable], FrequencyTable]:
    """Build word cloud tables for the most talkative speakers and overall.

    Args:
        turns:
            Merged utterances.
        stats:
            Speaker stats as returned by `compute_metrics`.
        top_speakers:
            Number of speakers (by raw word count) that get their own table.
        speaker_limit:
            Maximum number of words per speaker table.
        overall_limit:
            Maximum number of words in the aggregate table.
        stopwords:
            Words excluded from all counts.

    Returns:
        `(speaker_tables, overall_table)`. A speaker whose text consists only
        of stopwords gets an empty table.
    """

    stop = frozenset(stopwords)
    texts = speaker_texts(turns)
    ranked = sorted(stats, key=lambda s: s.words, reverse=True)[:top_speakers]

    speaker_tables = [
        build_table(s.speaker, texts.get(s.speaker, ""), speaker_limit, stop) for s in ranked
    ]
    overall = build_table(
        ALL_SPEAKERS_LABEL,
        " ".join(turn.text for turn in turns),
        overall_limit,
        stop,
    )
    return speaker_tables, overall


def top_terms_text(table: FrequencyTable, limit: int = 12) -> str:
    """Return a short `word (count), ...` summary of a table."""

    return ", ".join(f"{e.word} ({e.count})" for e in table.entries[:limit])
