"""
Serializers

Maps recommendations between their three shapes:
- AI reply   (may still use the old `score` name)
- storage    (`score`)
- API        (`percentage`, the canonical name)

Every rename between `score` and `percentage` happens in this module.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from .contracts import AdvisorResult, Recommendation, StudentProfile


def ingest_ai_recommendation(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Accept an AI recommendation in either the `percentage` or `score` shape."""
    rec = dict(raw)
    if "percentage" not in rec and "score" in rec:
        rec["percentage"] = rec.pop("score")
    else:
        rec.pop("score", None)
    return rec


def stored_recommendation(rec: Recommendation) -> Dict[str, Any]:
    """Storage shape of a recommendation: `percentage` is kept as `score`."""
    data = rec.model_dump(by_alias=True)
    data["score"] = data.pop("percentage")
    return data


def response_recommendation(rec: Recommendation) -> Dict[str, Any]:
    return rec.model_dump(by_alias=True)


def to_document(
    profile: StudentProfile,
    email: Optional[str],
    result: AdvisorResult,
    now: datetime,
) -> Dict[str, Any]:
    """
    Build the preference document persisted for one submission.

    Args:
        profile: Validated profile
        email: Owner email from the cookie, normalized here
        result: Merged advisor result
        now: Insert timestamp (UTC)
    """
    return {
        "email": normalize_email(email),
        **profile.model_dump(by_alias=True),
        "aiRecommendation": {
            "recommendations": [stored_recommendation(r) for r in result.recommendations],
            "suggestedExpertTags": list(result.suggested_expert_tags),
            "summary": result.summary,
            "source": result.source,
            "model": result.model,
        },
        "createdAt": now,
        "updatedAt": now,
    }


def to_response(email: Optional[str], result: AdvisorResult) -> Dict[str, Any]:
    """Body returned by POST /aiRoute/preferDetails."""
    return {
        "email": email,
        "summary": result.summary,
        "recommendations": [response_recommendation(r) for r in result.recommendations],
        "expertTypes": list(result.suggested_expert_tags),
    }


def from_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """
    Read shape of a stored preference.
    `_id` becomes a string and each stored `score` is exposed as `percentage`.
    """
    data = dict(doc)
    if "_id" in data:
        data["_id"] = str(data["_id"])
    for key in ("createdAt", "updatedAt"):
        if isinstance(data.get(key), datetime):
            data[key] = data[key].isoformat()

    ai = data.get("aiRecommendation")
    if isinstance(ai, dict):
        ai = dict(ai)
        ai["recommendations"] = [_stored_to_read(r) for r in ai.get("recommendations") or []]
        data["aiRecommendation"] = ai
    return data


def from_documents(docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [from_document(d) for d in docs]


def normalize_email(email: Optional[str]) -> Optional[str]:
    if email is None:
        return None
    email = email.strip().lower()
    return email or None


def _stored_to_read(rec: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(rec)
    if "score" in data:
        data["percentage"] = data.pop("score")
    return data
