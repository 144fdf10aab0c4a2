"""
Recommendation Logic Module

Provides the deterministic track scorer and the merger that combines it with
the AI advisor.
"""

from .contracts import (
    StudentProfile,
    TrackScore,
    Recommendation,
    AdvisorResult,
)
from .heuristics import score_tracks, top_tracks, raw_track_scores
from .merger import RecommendationMerger, build_fallback, parse_advisor_reply
from .runner import run_recommendation
from .constants import TRACKS, LearningEase

__all__ = [
    # Scoring
    "score_tracks",
    "top_tracks",
    "raw_track_scores",

    # Merging
    "RecommendationMerger",
    "build_fallback",
    "parse_advisor_reply",
    "run_recommendation",

    # Contracts
    "StudentProfile",
    "TrackScore",
    "Recommendation",
    "AdvisorResult",

    # Constants
    "TRACKS",
    "LearningEase",
]
