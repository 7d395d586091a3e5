"""Tests for timestamp normalization and the two transcript parsers."""

import pytest

from meeting_airtime.transcripts.base import UNKNOWN_SPEAKER, trim
from meeting_airtime.transcripts.caption_parser import CaptionBlockParser, normalize_raw
from meeting_airtime.transcripts.cue_parser import CueTranscriptParser, split_speaker
from meeting_airtime.transcripts.timestamps import (
    SECONDS_PER_DAY,
    clock_to_seconds,
    cue_time_to_seconds,
    roll_forward,
)


# ---------------------------------------------------------------------------
# timestamps
# ---------------------------------------------------------------------------

class TestCueTimeToSeconds:
    def test_hours_minutes_seconds_millis(self):
        assert cue_time_to_seconds("01:02:03.500") == pytest.approx(3723.5)

    def test_zero(self):
        assert cue_time_to_seconds("00:00:00.000") == 0

    def test_millis_are_thousandths(self):
        assert cue_time_to_seconds("00:00:01.005") == pytest.approx(1.005)


class TestClockToSeconds:
    def test_string_fields(self):
        assert clock_to_seconds("09", "59", "58") == 35998

    def test_int_fields(self):
        assert clock_to_seconds(0, 0, 2) == 2


class TestRollForward:
    def test_first_header_unchanged(self):
        assert roll_forward(10, float("-inf")) == 10

    def test_equal_start_not_rolled(self):
        assert roll_forward(5, 5) == 5

    def test_midnight_crossing(self):
        assert roll_forward(2, 35998) == 86402

    def test_rolls_multiple_days(self):
        assert roll_forward(0, 2 * SECONDS_PER_DAY + 1) == 3 * SECONDS_PER_DAY


# ---------------------------------------------------------------------------
# cue parser
# ---------------------------------------------------------------------------

class TestTrim:
    def test_whitespace_and_bom(self):
        assert trim("\ufeff  Alice: hi \ufeff\n") == "Alice: hi"

    def test_inner_bom_kept(self):
        assert trim("a\ufeffb") == "a\ufeffb"

    def test_blank(self):
        assert trim(" \ufeff\t") == ""


class TestSplitSpeaker:
    def test_speaker_and_text(self):
        assert split_speaker("  Alice :  hello there ") == ("Alice", "hello there")

    def test_no_colon(self):
        assert split_speaker("  just words ") == (UNKNOWN_SPEAKER, "just words")

    def test_first_colon_wins(self):
        assert split_speaker("Note: starts 10:30") == ("Note", "starts 10:30")


class TestCueParser:
    def test_two_cues(self):
        raw = (
            "00:00:01.000 --> 00:00:03.000\nAlice: hello there\n\n"
            "00:00:03.000 --> 00:00:05.000\nAlice: how are you"
        )
        result = CueTranscriptParser().parse(raw)
        assert [(u.speaker, u.start, u.end, u.text) for u in result] == [
            ("Alice", 1.0, 3.0, "hello there"),
            ("Alice", 3.0, 5.0, "how are you"),
        ]

    def test_skips_blank_lines_before_payload(self):
        raw = "00:00:01.000 --> 00:00:02.000\n\n   \nBob: hi"
        result = CueTranscriptParser().parse(raw)
        assert len(result) == 1
        assert result[0].text == "hi"

    def test_dangling_cue_dropped(self):
        raw = "00:00:01.000 --> 00:00:02.000\nBob: hi\n\n00:00:05.000 --> 00:00:06.000\n\n"
        result = CueTranscriptParser().parse(raw)
        assert [u.text for u in result] == ["hi"]

    def test_payload_without_colon(self):
        raw = "00:00:01.000 --> 00:00:02.000\nno speaker label here"
        result = CueTranscriptParser().parse(raw)
        assert result[0].speaker == UNKNOWN_SPEAKER
        assert result[0].text == "no speaker label here"

    def test_header_and_cue_ids_ignored(self, cue_transcript):
        result = CueTranscriptParser().parse(cue_transcript)
        assert [u.speaker for u in result] == ["Alice", "Alice", "Bob"]

    def test_cue_settings_ignored(self):
        raw = "00:00:01.000 --> 00:00:02.000 align:start position:10%\nBob: hi"
        result = CueTranscriptParser().parse(raw)
        assert result[0].end == 2.0

    def test_crlf_and_indented_timestamp(self):
        raw = "  00:00:01.000 --> 00:00:02.000\r\nBob: hi\r\n"
        result = CueTranscriptParser().parse(raw)
        assert [(u.speaker, u.text) for u in result] == [("Bob", "hi")]

    def test_empty_text_is_kept(self):
        raw = "00:00:01.000 --> 00:00:02.000\nBob:"
        result = CueTranscriptParser().parse(raw)
        assert result[0].text == ""

    def test_timestamp_without_millis_not_matched(self):
        assert CueTranscriptParser().parse("00:00:01 --> 00:00:02\nBob: hi") == []

    def test_leading_bom_keeps_first_cue(self):
        raw = (
            "\ufeff00:00:01.000 --> 00:00:03.000\nAlice: hello\n\n"
            "00:00:03.000 --> 00:00:05.000\nBob: hi"
        )
        result = CueTranscriptParser().parse(raw)
        assert [u.speaker for u in result] == ["Alice", "Bob"]

    def test_bom_only_line_is_blank(self):
        raw = "00:00:01.000 --> 00:00:02.000\n\ufeff\nBob: hi"
        result = CueTranscriptParser().parse(raw)
        assert [(u.speaker, u.text) for u in result] == [("Bob", "hi")]

    def test_empty_input(self):
        assert CueTranscriptParser().parse("") == []


# ---------------------------------------------------------------------------
# caption-block parser
# ---------------------------------------------------------------------------

class TestNormalizeRaw:
    def test_strips_bom_and_line_endings(self):
        assert normalize_raw("\ufeffa\r\nb\rc") == "a\nb\nc"


class TestCaptionBlockParser:
    def test_day_rollover(self):
        raw = "[Bob] 09:59:58\nhi all\n\n[Bob] 00:00:02\nstill here"
        result = CaptionBlockParser().parse(raw)
        assert [u.start for u in result] == [35998, 86402]

    def test_end_is_next_start_and_last_gets_tail(self):
        raw = "[Bob] 09:59:58\nhi all\n\n[Ann] 10:00:10\nhello"
        result = CaptionBlockParser().parse(raw)
        assert [u.end for u in result] == [36010, 36012]

    def test_custom_tail(self):
        result = CaptionBlockParser(default_last_cue_seconds=5).parse("[Ann] 00:00:10\nhello")
        assert result[0].end == 15

    def test_header_terminates_block_without_blank_line(self):
        raw = "[Ann] 10:00:00\nfirst line\n[Ben] 10:00:05\nsecond"
        result = CaptionBlockParser().parse(raw)
        assert [(u.speaker, u.text) for u in result] == [("Ann", "first line"), ("Ben", "second")]
        assert result[0].end == 36005

    def test_multiline_text_joined(self):
        raw = "[Ann] 10:00:00\nline one\nline two  \n\nnot part of the block"
        result = CaptionBlockParser().parse(raw)
        assert result[0].text == "line one line two"

    def test_empty_block_dropped_before_end_inference(self):
        raw = "[Ann] 10:00:00\n\n[Ben] 10:00:05\nhello"
        result = CaptionBlockParser().parse(raw)
        assert [u.speaker for u in result] == ["Ben"]
        assert result[0].end == 36007

    def test_bom_and_crlf(self):
        result = CaptionBlockParser().parse("\ufeff[Ann] 10:00:00\r\nhello\r\n")
        assert [(u.speaker, u.text) for u in result] == [("Ann", "hello")]

    def test_bom_only_line_ends_block(self):
        raw = "[Ann] 10:00:00\nhello\n\ufeff\n[Ben] 10:00:05\nhi"
        result = CaptionBlockParser().parse(raw)
        assert [u.text for u in result] == ["hello", "hi"]

    def test_speaker_trimmed(self):
        result = CaptionBlockParser().parse("[ Ann Lee ] 10:00:00\nhi")
        assert result[0].speaker == "Ann Lee"

    def test_header_with_trailing_text_not_matched(self):
        assert CaptionBlockParser().parse("[Ann] 10:00:00 extra\nhi") == []

    def test_start_times_non_decreasing_across_midnight(self):
        raw = "\n\n".join(
            f"[S{i}] {clock}\ntext"
            for i, clock in enumerate(["23:59:00", "23:59:30", "00:00:10", "00:01:00", "00:01:00"])
        )
        starts = [u.start for u in CaptionBlockParser().parse(raw)]
        assert starts == sorted(starts)
        assert starts[2] == 86410

    def test_cue_transcript_yields_nothing(self, cue_transcript):
        assert CaptionBlockParser().parse(cue_transcript) == []
