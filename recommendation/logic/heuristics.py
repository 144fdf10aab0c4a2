"""
Heuristic Track Scorer

Scores a student profile against the nine fixed tracks using weighted rules,
then normalizes each raw score against the best track.
All logic is deterministic - no AI/ML components, no I/O.
"""

import math
from typing import Any, Callable, Dict, List, Mapping, Tuple, Union

from .contracts import StudentProfile, TrackScore
from .constants import (
    TRACKS,
    SOFTWARE_ENGINEERING,
    INFORMATION_TECHNOLOGY,
    DATA_SCIENCE,
    NETWORK_ENGINEERING,
    CYBER_SECURITY,
    INFORMATION_SYSTEMS,
    INTERACTIVE_MEDIA,
    COMPUTER_SCIENCE,
    COMPUTER_SYSTEMS,
    CAREER_GOAL_BONUSES,
    NO_SIGNAL_PERCENTAGE,
    HEURISTIC_TOP_N,
)

ProfileData = Mapping[str, Any]


def _num(profile: ProfileData, field: str) -> float:
    """Numeric field, missing or empty counts as 0."""
    value = profile.get(field)
    if value is None or value == "":
        return 0
    return float(value)


def _is(profile: ProfileData, field: str, expected: str) -> int:
    return int(profile.get(field) == expected)


def _flag(profile: ProfileData, field: str) -> int:
    return int(bool(profile.get(field)))


def _stated(profile: ProfileData, field: str) -> int:
    """1 unless the field is explicitly empty; a missing field counts as stated."""
    return int(profile.get(field) != "")


def _has(profile: ProfileData, field: str, item: str) -> int:
    return int(item in (profile.get(field) or []))


# =============================================================================
# PER-TRACK SCORERS
# =============================================================================

def score_software_engineering(p: ProfileData) -> float:
    return (
        15 * _num(p, "programmingSkill")
        + 5 * _is(p, "debugPatience", "High")
        + 5 * _is(p, "workStyle", "Team")
    )


def score_information_technology(p: ProfileData) -> float:
    # Only an explicitly empty work style scores nothing
    return (
        10 * _num(p, "programmingSkill")
        + 10 * _stated(p, "workStyle")
        + 10 * _is(p, "excitement", "Managing IT Systems")
    )


def score_data_science(p: ProfileData) -> float:
    return (
        12 * _num(p, "mathSkill")
        + 10 * _is(p, "dataHandlingComfort", "High")
        + 6 * _is(p, "excitement", "Analyzing Data")
    )


def score_network_engineering(p: ProfileData) -> float:
    return (
        8 * _num(p, "programmingSkill")
        + 10 * _is(p, "hardwareInterest", "High")
        + 10 * _has(p, "subjects", "Networking")
    )


def score_cyber_security(p: ProfileData) -> float:
    return (
        10 * _num(p, "cyberSkill")
        + 10 * _is(p, "securityMindset", "High")
        + 8 * _is(p, "excitement", "Securing Systems & Networks")
    )


def score_information_systems(p: ProfileData) -> float:
    return (
        8 * _num(p, "programmingSkill")
        + 8 * _has(p, "careerGoals", "Business Analyst")
        + 6 * _has(p, "careerGoals", "Systems Analyst")
    )


def score_interactive_media(p: ProfileData) -> float:
    return (
        12 * _num(p, "uiuxSkill")
        + 10 * _is(p, "designCreativity", "High")
        + 8 * int("Media" in str(p.get("excitement") or ""))
    )


def score_computer_science(p: ProfileData) -> float:
    return (
        12 * _num(p, "mathSkill")
        + 6 * _num(p, "researchSkill")
        + 6 * _flag(p, "wantsResearchPath")
    )


def score_computer_systems(p: ProfileData) -> float:
    return (
        10 * _is(p, "hardwareInterest", "High")
        + 8 * _flag(p, "hasPhysicsAndCombinedMaths")
        + 8 * _num(p, "mathSkill")
    )


TRACK_SCORERS: List[Tuple[str, Callable[[ProfileData], float]]] = [
    (SOFTWARE_ENGINEERING, score_software_engineering),
    (INFORMATION_TECHNOLOGY, score_information_technology),
    (DATA_SCIENCE, score_data_science),
    (NETWORK_ENGINEERING, score_network_engineering),
    (CYBER_SECURITY, score_cyber_security),
    (INFORMATION_SYSTEMS, score_information_systems),
    (INTERACTIVE_MEDIA, score_interactive_media),
    (COMPUTER_SCIENCE, score_computer_science),
    (COMPUTER_SYSTEMS, score_computer_systems),
]


def apply_career_goal_bonuses(raw: Dict[str, float], career_goals) -> None:
    """Add keyword bonuses for every selected career goal, in place."""
    for goal in career_goals or []:
        goal = str(goal)
        for keywords, bonuses in CAREER_GOAL_BONUSES:
            if any(keyword in goal for keyword in keywords):
                for track, bonus in bonuses.items():
                    raw[track] += bonus


# =============================================================================
# AGGREGATION
# =============================================================================

def raw_track_scores(profile: Union[StudentProfile, ProfileData]) -> Dict[str, float]:
    """
    Compute the unnormalized score of every track.

    Args:
        profile: Validated StudentProfile, or a camelCase mapping with
            possibly missing fields

    Returns:
        Dict of track -> raw score, in TRACKS order
    """
    p = _as_mapping(profile)
    raw = {track: scorer(p) for track, scorer in TRACK_SCORERS}
    apply_career_goal_bonuses(raw, p.get("careerGoals"))
    return {track: raw[track] for track in TRACKS}


def score_tracks(profile: Union[StudentProfile, ProfileData]) -> List[TrackScore]:
    """
    Rank all nine tracks for a profile.

    Each raw score is normalized to round(score / best * 100). When no track
    scores above zero every track gets NO_SIGNAL_PERCENTAGE.

    Returns:
        All nine TrackScores, highest percentage first. Ties keep TRACKS order.
    """
    raw = raw_track_scores(profile)
    best = max(raw.values())

    scores = [
        TrackScore(
            track=track,
            percentage=_round_half_up(score / best * 100) if best > 0 else NO_SIGNAL_PERCENTAGE,
        )
        for track, score in raw.items()
    ]
    # sorted() is stable with reverse=True, ties stay in TRACKS order
    return sorted(scores, key=lambda s: s.percentage, reverse=True)


def top_tracks(profile: Union[StudentProfile, ProfileData], limit: int = HEURISTIC_TOP_N) -> List[TrackScore]:
    return score_tracks(profile)[:limit]


def _as_mapping(profile: Union[StudentProfile, ProfileData]) -> ProfileData:
    if isinstance(profile, StudentProfile):
        return profile.model_dump(by_alias=True)
    return profile


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
