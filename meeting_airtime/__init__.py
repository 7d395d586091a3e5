"""
Meeting airtime analysis package.

This package turns a meeting transcript (WebVTT cues or `[Speaker] HH:MM:SS`
caption blocks) into:
- a normalized list of speaker turns,
- per-speaker participation metrics (words, speaking time, turns, shares),
- word frequency tables for word clouds.
"""

from meeting_airtime.pipeline import AnalysisSettings, TranscriptAnalysis, analyze_transcript

__all__ = [
    "AnalysisSettings",
    "TranscriptAnalysis",
    "analyze_transcript",
]
