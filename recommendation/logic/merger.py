"""
Recommendation Merger

Turns the heuristic ranking into the final three recommendations.

Pipeline flow:
1. Ask the AI advisor, grounded by the heuristic top 5
2. Normalize the reply (old `score` shape, clamped percentages, defaults)
3. On any advisor failure, build a deterministic answer from the heuristic top 3
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..errors import UpstreamServiceError
from .contracts import AdvisorResult, Recommendation, StudentProfile, TrackScore
from .serializers import ingest_ai_recommendation
from .constants import (
    TRACKS,
    LearningEase,
    RECOMMENDATION_COUNT,
    MIN_EXPERT_TAGS,
    DEFAULT_EXPERT_TAGS,
    FALLBACK_MODEL,
    FALLBACK_REASON,
    FALLBACK_LEARNING_EASE,
    FALLBACK_FUTURE_SCOPE,
    FALLBACK_OPPORTUNITIES,
    TRACK_FALLBACK_CONTENT,
    SOFTWARE_ENGINEERING,
    SOURCE_AI,
    SOURCE_FALLBACK,
)

logger = logging.getLogger(__name__)


class RecommendationMerger:
    """
    Merges heuristic scores with the AI advisor's reply.

    The advisor is injected so tests can replace it; it must expose
    `model` and an async `advise(profile, heuristic_top, email)`.
    """

    def __init__(self, advisor: Any):
        self.advisor = advisor

    async def merge(
        self,
        profile: StudentProfile,
        heuristic_top: List[TrackScore],
        email: Optional[str] = None,
    ) -> AdvisorResult:
        """
        Produce exactly three recommendations, at least five expert tags
        and a summary. Never raises for advisor failures.
        """
        try:
            reply = await self.advisor.advise(profile, heuristic_top, email)
            return parse_advisor_reply(reply, self.advisor.model)
        except UpstreamServiceError as e:
            logger.warning("AI advisor unusable, falling back to heuristics: %s", e)
        except Exception:
            logger.exception("AI advisor raised unexpectedly, falling back to heuristics")

        return build_fallback(heuristic_top)


# =============================================================================
# AI REPLY NORMALIZATION
# =============================================================================

def parse_advisor_reply(reply: Dict[str, Any], model: str) -> AdvisorResult:
    """
    Validate and normalize the advisor's JSON reply.

    Raises:
        UpstreamServiceError: reply lacks three usable recommendations
    """
    raw_recs = reply.get("recommendations")
    if not isinstance(raw_recs, list):
        raise UpstreamServiceError("Reply has no recommendations list")

    recommendations = [_parse_recommendation(raw) for raw in raw_recs[:RECOMMENDATION_COUNT]]
    if len(recommendations) < RECOMMENDATION_COUNT:
        raise UpstreamServiceError(
            f"Reply has {len(recommendations)} recommendations, expected {RECOMMENDATION_COUNT}"
        )
    tracks = [r.track for r in recommendations]
    if len(set(tracks)) != len(tracks):
        raise UpstreamServiceError(f"Reply repeats a track: {tracks}")

    summary = reply.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = build_summary([TrackScore(track=r.track, percentage=r.percentage) for r in recommendations])

    return AdvisorResult(
        recommendations=recommendations,
        suggested_expert_tags=pad_expert_tags(_string_list(reply.get("suggestedExpertTags"))),
        summary=summary.strip(),
        source=SOURCE_AI,
        model=model,
    )


def _parse_recommendation(raw: Any) -> Recommendation:
    if not isinstance(raw, dict):
        raise UpstreamServiceError("Recommendation is not an object")

    rec = ingest_ai_recommendation(raw)
    track = rec.get("track")
    if track not in TRACKS:
        raise UpstreamServiceError(f"Unknown track in reply: {track!r}")

    learning_ease = rec.get("learningEase")
    if learning_ease not in {e.value for e in LearningEase}:
        learning_ease = LearningEase.MODERATE.value

    try:
        return Recommendation(
            track=track,
            percentage=_clamp_percentage(rec.get("percentage")),
            reason=_text(rec.get("reason")),
            roles=_string_list(rec.get("roles")),
            required_skills=_string_list(rec.get("requiredSkills")),
            develop_next=_string_list(rec.get("developNext")),
            learning_ease=learning_ease,
            future_scope=_text(rec.get("futureScope")),
            opportunities=_text(rec.get("opportunities")),
        )
    except ValidationError as e:
        raise UpstreamServiceError(f"Invalid recommendation in reply: {e}") from e


def _clamp_percentage(value: Any) -> int:
    if isinstance(value, bool):
        raise UpstreamServiceError("Percentage is not a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise UpstreamServiceError(f"Percentage is not a number: {value!r}")
    if number != number:  # NaN
        raise UpstreamServiceError("Percentage is NaN")
    return max(0, min(100, int(round(number))))


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def pad_expert_tags(tags: List[str]) -> List[str]:
    """Ensure at least MIN_EXPERT_TAGS distinct tags, topping up from the defaults."""
    result: List[str] = []
    for tag in tags:
        if tag not in result:
            result.append(tag)
    for tag in DEFAULT_EXPERT_TAGS:
        if len(result) >= MIN_EXPERT_TAGS:
            break
        if tag not in result:
            result.append(tag)
    return result


# =============================================================================
# FALLBACK
# =============================================================================

def build_fallback(heuristic_top: List[TrackScore]) -> AdvisorResult:
    """
    Deterministic answer from the heuristic top 3.
    Uses only local data, so it cannot fail.
    """
    top = heuristic_top[:RECOMMENDATION_COUNT]
    recommendations = []
    for score in top:
        roles, required, develop = _fallback_content(score.track)
        recommendations.append(Recommendation(
            track=score.track,
            percentage=score.percentage,
            reason=FALLBACK_REASON,
            roles=roles,
            required_skills=required,
            develop_next=develop,
            learning_ease=FALLBACK_LEARNING_EASE,
            future_scope=FALLBACK_FUTURE_SCOPE,
            opportunities=FALLBACK_OPPORTUNITIES,
        ))

    return AdvisorResult(
        recommendations=recommendations,
        suggested_expert_tags=list(DEFAULT_EXPERT_TAGS),
        summary=build_summary(top),
        source=SOURCE_FALLBACK,
        model=FALLBACK_MODEL,
    )


def build_summary(top: List[TrackScore]) -> str:
    """Four-line summary naming each track with its percentage."""
    if not top:
        return ""
    roles, required, develop = _fallback_content(top[0].track)
    ranked = ", ".join(f"{t.track} {t.percentage}%" for t in top)
    return (
        f"Top tracks: {ranked}.\n"
        f"Roles & opportunities: {', '.join(roles)} - strong local & global demand.\n"
        f"Required: {', '.join(required)}; develop: {', '.join(develop)}; "
        f"Ease: {FALLBACK_LEARNING_EASE}; Scope: high.\n"
        f"Final verdict: choose {top[0].track}."
    )


def _fallback_content(track: str):
    roles, required, develop = TRACK_FALLBACK_CONTENT.get(
        track, TRACK_FALLBACK_CONTENT[SOFTWARE_ENGINEERING]
    )
    return list(roles), list(required), list(develop)
