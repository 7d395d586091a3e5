"""End-to-end tests for the parse-and-analyze pipeline."""

import pytest
import yaml

from meeting_airtime.pipeline import (
    AnalysisSettings,
    analyze_transcript,
    meeting_date_from_filename,
)


# ---------------------------------------------------------------------------
# cue transcripts
# ---------------------------------------------------------------------------

class TestCueTranscript:
    def test_same_speaker_cues_merge(self):
        raw = (
            "00:00:01.000 --> 00:00:03.000\nAlice: hello there\n\n"
            "00:00:03.000 --> 00:00:05.000\nAlice: how are you"
        )
        analysis = analyze_transcript(raw)

        assert analysis.format == "cue"
        assert len(analysis.utterances) == 2
        assert len(analysis.turns) == 1
        turn = analysis.turns[0]
        assert (turn.speaker, turn.start, turn.end) == ("Alice", 1, 5)
        assert turn.text == "hello there how are you"

    def test_metrics(self, cue_transcript):
        analysis = analyze_transcript(cue_transcript)

        assert analysis.summary.meeting_duration == 8
        assert analysis.summary.total_words == 11
        assert [(s.speaker, s.words, s.time, s.turns) for s in analysis.speakers] == [
            ("Alice", 5, 4, 1),
            ("Bob", 6, 4, 1),
        ]

    def test_frequency_tables(self, cue_transcript):
        analysis = analyze_transcript(cue_transcript)

        assert [t.label for t in analysis.speaker_tables] == ["Bob", "Alice"]
        assert analysis.speaker_tables[0].pairs() == [
            ("fine", 1),
            ("thanks", 1),
            ("budget", 1),
            ("looks", 1),
            ("good", 1),
        ]
        assert analysis.speaker_tables[1].pairs() == [("hello", 1)]


# ---------------------------------------------------------------------------
# caption transcripts
# ---------------------------------------------------------------------------

class TestCaptionTranscript:
    def test_rollover_scenario(self):
        analysis = analyze_transcript("[Bob] 09:59:58\nhi all\n\n[Bob] 00:00:02\nstill here")

        assert analysis.format == "caption"
        assert [u.start for u in analysis.utterances] == [35998, 86402]
        assert len(analysis.turns) == 1
        assert analysis.turns[0].text == "hi all still here"

    def test_header_without_blank_separator(self):
        analysis = analyze_transcript("[Ann] 10:00:00\nfirst\n[Ben] 10:00:04\nsecond")
        assert [(t.speaker, t.text) for t in analysis.turns] == [("Ann", "first"), ("Ben", "second")]

    def test_metrics_across_midnight(self, caption_transcript):
        analysis = analyze_transcript(caption_transcript)

        assert [u.start for u in analysis.utterances] == [86380, 86390, 86405]
        assert [u.end for u in analysis.utterances] == [86390, 86405, 86407]
        assert analysis.summary.meeting_duration == 27
        assert analysis.summary.total_words == 19

        jane, john = analysis.speakers
        assert (jane.speaker, jane.words, jane.time, jane.turns) == ("Jane Doe", 9, 12, 2)
        assert (john.speaker, john.words, john.time, john.turns) == ("John Roe", 10, 15, 1)
        assert jane.longest_turn == 10

    def test_shares_sum_to_one(self, caption_transcript):
        analysis = analyze_transcript(caption_transcript)
        assert sum(s.word_share for s in analysis.speakers) == pytest.approx(1.0)
        assert sum(s.time_share for s in analysis.speakers) == pytest.approx(1.0)

    def test_frequency_tables(self, caption_transcript):
        analysis = analyze_transcript(caption_transcript)

        assert [t.label for t in analysis.speaker_tables] == ["John Roe", "Jane Doe"]
        assert analysis.speaker_tables[0].pairs() == [
            ("budget", 2),
            ("draft", 1),
            ("ready", 1),
            ("shared", 1),
            ("link", 1),
        ]
        assert all(e.weight == 1.0 for e in analysis.speaker_tables[1].entries)

        overall = analysis.overall_table.pairs()
        assert overall[0] == ("budget", 3)
        assert [w for w, _ in overall[1:]] == [
            "good",
            "evening",
            "everyone",
            "let",
            "review",
            "draft",
            "ready",
            "shared",
            "link",
            "thanks",
            "john",
        ]

    def test_frequency_ranking_non_increasing(self, caption_transcript):
        analysis = analyze_transcript(caption_transcript)
        for table in [*analysis.speaker_tables, analysis.overall_table]:
            counts = [count for _, count in table.pairs()]
            assert counts == sorted(counts, reverse=True)

    def test_custom_tail(self, caption_transcript):
        analysis = analyze_transcript(
            caption_transcript,
            settings=AnalysisSettings(default_last_cue_seconds=10),
        )
        assert analysis.utterances[-1].end == 86415


# ---------------------------------------------------------------------------
# no data and edge cases
# ---------------------------------------------------------------------------

class TestNoData:
    @pytest.mark.parametrize("raw", ["", "  \n \t \n"])
    def test_blank_input(self, raw):
        assert analyze_transcript(raw) is None

    def test_unrecognized_input(self):
        assert analyze_transcript("Meeting notes\n- budget\n- roadmap") is None

    def test_stopword_only_speaker(self):
        analysis = analyze_transcript(
            "00:00:01.000 --> 00:00:02.000\nSam: um yeah so\n\n"
            "00:00:02.000 --> 00:00:03.000\nKim: budget"
        )
        tables = {t.label: t for t in analysis.speaker_tables}
        assert len(tables["Sam"]) == 0
        assert tables["Kim"].pairs() == [("budget", 1)]


class TestIdempotence:
    def test_same_input_same_output(self, caption_transcript):
        first = analyze_transcript(caption_transcript, attendees=4, source_name="x.txt")
        second = analyze_transcript(caption_transcript, attendees=4, source_name="x.txt")
        assert first == second
        assert first.to_record() == second.to_record()


# ---------------------------------------------------------------------------
# attendees, date hint and settings
# ---------------------------------------------------------------------------

class TestAttendees:
    def test_silent_attendees(self, cue_transcript):
        analysis = analyze_transcript(cue_transcript, attendees=5)
        assert analysis.attendees == 5
        assert analysis.silent_attendees == 3

    def test_without_attendees(self, cue_transcript):
        analysis = analyze_transcript(cue_transcript)
        assert analysis.attendees is None
        assert analysis.silent_attendees is None


class TestMeetingDate:
    def test_from_recording_name(self):
        assert meeting_date_from_filename("GMT20220401-170425_Recording.vtt") == "01/04/2022 17:04"

    @pytest.mark.parametrize("name", [None, "", "standup.vtt", "GMT2022-01.vtt"])
    def test_no_hint(self, name):
        assert meeting_date_from_filename(name) is None

    def test_pipeline_uses_source_name(self, cue_transcript):
        analysis = analyze_transcript(cue_transcript, source_name="GMT20231224-090000_Team.vtt")
        assert analysis.meeting_date == "24/12/2023 09:00"


class TestAnalysisSettings:
    def test_fingerprint_stable(self):
        assert AnalysisSettings().fingerprint() == AnalysisSettings().fingerprint()

    def test_fingerprint_changes_with_settings(self):
        base = AnalysisSettings().fingerprint()
        assert AnalysisSettings(top_speakers=2).fingerprint() != base
        assert AnalysisSettings(stopwords=frozenset({"x"})).fingerprint() != base

    def test_limits_apply(self, caption_transcript):
        settings = AnalysisSettings(top_speakers=1, speaker_words=2, overall_words=3)
        analysis = analyze_transcript(caption_transcript, settings=settings)
        assert [t.label for t in analysis.speaker_tables] == ["John Roe"]
        assert len(analysis.speaker_tables[0]) == 2
        assert len(analysis.overall_table) == 3

    def test_custom_stopwords(self, caption_transcript):
        settings = AnalysisSettings(stopwords=frozenset({"budget"}))
        analysis = analyze_transcript(caption_transcript, settings=settings)
        assert "budget" not in dict(analysis.overall_table.pairs())
        assert "the" in dict(analysis.overall_table.pairs())


class TestToRecord:
    def test_yaml_safe(self, caption_transcript):
        analysis = analyze_transcript(caption_transcript, attendees=3, source_name="late.txt")
        record = analysis.to_record()

        dumped = yaml.safe_dump(record, sort_keys=False, allow_unicode=True)
        assert yaml.safe_load(dumped) == record

    def test_summary_fields(self, caption_transcript):
        record = analyze_transcript(caption_transcript, attendees=3).to_record()

        assert record["format"] == "caption"
        assert record["summary"] == {
            "meeting_duration": 27,
            "total_words": 19,
            "utterances_total": 3,
            "turns_total": 3,
            "speakers_total": 2,
            "attendees": 3,
            "silent_attendees": 1,
        }
        assert record["speakers"][0]["speaker"] == "Jane Doe"
        assert record["word_clouds"]["overall"]["label"] == "All speakers"
        assert record["word_clouds"]["overall"]["words"][0] == {"word": "budget", "count": 3, "weight": 1.0}
        assert record["turns"][1]["text"] == "The budget draft is ready. I shared the budget link."
