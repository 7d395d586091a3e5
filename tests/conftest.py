"""Shared test fixtures and sample transcripts."""

import textwrap

import pytest

from meeting_airtime.transcripts.base import Utterance


CUE_TRANSCRIPT = textwrap.dedent(
    """\
    WEBVTT

    1
    00:00:01.000 --> 00:00:03.000
    Alice: hello there

    2
    00:00:03.000 --> 00:00:05.000
    Alice: how are you

    3
    00:00:05.000 --> 00:00:09.000
    Bob: fine thanks, the budget looks good
    """
)

CAPTION_TRANSCRIPT = textwrap.dedent(
    """\
    [Jane Doe] 23:59:40
    Good evening everyone, let's review the budget.

    [John Roe] 23:59:50
    The budget draft is ready.
    I shared the budget link.

    [Jane Doe] 00:00:05
    Thanks John.
    """
)


def utt(speaker, start, end, text):
    """Build an utterance with terse positional arguments."""
    return Utterance(speaker=speaker, start=float(start), end=float(end), text=text)


@pytest.fixture
def cue_transcript():
    return CUE_TRANSCRIPT


@pytest.fixture
def caption_transcript():
    return CAPTION_TRANSCRIPT


@pytest.fixture
def project_dir(tmp_path):
    """A project directory with a config file and two transcripts."""
    transcripts = tmp_path / "transcripts"
    transcripts.mkdir()
    (transcripts / "GMT20220401-170425_standup.vtt").write_text(CUE_TRANSCRIPT, encoding="utf-8")
    (transcripts / "late_call.txt").write_text(CAPTION_TRANSCRIPT, encoding="utf-8")
    (tmp_path / "airtime.yaml").write_text(
        textwrap.dedent(
            """\
            include: ["transcripts/*.vtt", "transcripts/*.txt"]
            workdir: ./work
            attendees: 5
            """
        ),
        encoding="utf-8",
    )
    return tmp_path
