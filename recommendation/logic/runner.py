"""
Engine Runner

Orchestrates one recommendation request:
1. Scores the validated StudentProfile with the heuristics
2. Merges the heuristic top 5 with the AI advisor (or falls back)
3. Persists the profile and its recommendation
4. Returns the API response body

This is a pure orchestration layer - NO scoring, NO prompt building.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .contracts import StudentProfile
from .heuristics import top_tracks
from .merger import RecommendationMerger
from .serializers import to_document, to_response

logger = logging.getLogger(__name__)


async def run_recommendation(
    profile: StudentProfile,
    email: Optional[str],
    merger: RecommendationMerger,
    store: Any,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Run the full pipeline for one submission.

    Args:
        profile: Validated student profile
        email: Owner email from the cookie (not authenticated)
        merger: Recommendation merger with its advisor
        store: Preference store exposing async `create(document)`
        now: Insert timestamp, defaults to the current UTC time

    Returns:
        Response body with `percentage` on every recommendation

    Raises:
        Any store failure. Advisor failures never propagate.
    """
    heuristic_top5 = top_tracks(profile)
    logger.info(
        "Heuristic top tracks for %s: %s",
        email or "anonymous",
        ", ".join(f"{s.track} {s.percentage}%" for s in heuristic_top5),
    )

    result = await merger.merge(profile, heuristic_top5, email)
    logger.info("Recommendation source=%s model=%s", result.source, result.model)

    document = to_document(profile, email, result, now or datetime.now(timezone.utc))
    await store.create(document)

    return to_response(email, result)
