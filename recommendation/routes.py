"""
Recommendation API Routes

Exposes the specialization recommendation engine and the admin views over
stored preferences.
Main endpoint: POST /aiRoute/preferDetails
"""

import logging
from typing import Any, Dict, Optional
from fastapi import APIRouter, Cookie, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .ai.advisor import get_advisor
from .errors import InvalidPreferenceId
from .logic.constants import (
    DEFAULT_PAGE_LIMIT,
    FIELD_MESSAGES,
    MIN_ITEMS_ERROR_TYPES,
    MIN_ITEMS_MESSAGES,
)
from .logic.contracts import StudentProfile
from .logic.merger import RecommendationMerger
from .logic.runner import run_recommendation
from .store import PreferenceStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/aiRoute", tags=["recommendations"])


def get_merger() -> RecommendationMerger:
    """FastAPI dependency: merger around the shared AI advisor."""
    return RecommendationMerger(get_advisor())


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/preferDetails", summary="Recommend specialization tracks")
async def prefer_details(
    request: Request,
    email: Optional[str] = Cookie(default=None),
    merger: RecommendationMerger = Depends(get_merger),
    store: PreferenceStore = Depends(get_store),
):
    """
    Score a student profile, ask the AI advisor for three recommendations
    and save everything.

    **Request Body:** StudentProfile (camelCase fields)

    **Cookie:** `email`, used as the profile owner

    **Response:**
    - 200 `{email, summary, recommendations, expertTypes}`
    - 400 `{errors: {field: message}, message}` when the profile is invalid
    - 500 `{message}` on any other failure
    """
    try:
        body = await request.json()
    except ValueError:
        return _validation_failed({"form": "Request body must be valid JSON."})

    if not isinstance(body, dict):
        return _validation_failed({"form": "Request body must be a JSON object."})

    try:
        profile = StudentProfile.model_validate(body)
    except ValidationError as e:
        return _validation_failed(_field_errors(e))

    try:
        return await run_recommendation(profile, email, merger, store)
    except Exception:
        logger.exception("Error in preferDetails")
        return JSONResponse(status_code=500, content={"message": "Internal server error."})


@router.get("/getPreferDetails", summary="List stored preferences")
async def get_all_preferences(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=100),
    search: Optional[str] = None,
    store: PreferenceStore = Depends(get_store),
):
    try:
        return await store.paginate(page=page, limit=limit, search=search)
    except Exception as e:
        logger.exception("Error fetching preferences")
        return _read_failed("Failed to fetch preferences", e)


@router.get("/getPreferDetailsStats", summary="Preference statistics")
async def get_preference_stats(store: PreferenceStore = Depends(get_store)):
    try:
        return await store.stats()
    except Exception as e:
        logger.exception("Error fetching preference stats")
        return _read_failed("Failed to fetch statistics", e)


@router.get("/getPreferDetails/{preference_id}", summary="Fetch one preference")
async def get_preference_by_id(preference_id: str, store: PreferenceStore = Depends(get_store)):
    try:
        preference = await store.get(preference_id)
    except InvalidPreferenceId:
        return JSONResponse(status_code=400, content={"message": "Invalid preference ID"})
    except Exception as e:
        logger.exception("Error fetching preference %s", preference_id)
        return _read_failed("Failed to fetch preference", e)

    if preference is None:
        return JSONResponse(status_code=404, content={"message": "Preference not found"})
    return preference


@router.get("/getPreferDetailsByEmail/{email}", summary="Preferences of one student")
async def get_preferences_by_email(email: str, store: PreferenceStore = Depends(get_store)):
    try:
        return await store.by_email(email)
    except Exception as e:
        logger.exception("Error fetching preferences by email")
        return _read_failed("Failed to fetch preferences", e)


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Recommendation engine health check")
def health_check():
    """Check if recommendation engine is operational."""
    return {"status": "ok", "engine": "recommendation", "version": "1.0.0"}


# =============================================================================
# HELPERS
# =============================================================================

def _field_errors(error: ValidationError) -> Dict[str, str]:
    """First problem per top-level field, using the form's wording where one exists."""
    errors: Dict[str, str] = {}
    for issue in error.errors():
        loc = issue.get("loc") or ()
        field = str(loc[0]) if loc else "form"
        if field in MIN_ITEMS_MESSAGES and issue.get("type") in MIN_ITEMS_ERROR_TYPES:
            message = MIN_ITEMS_MESSAGES[field]
        else:
            message = FIELD_MESSAGES.get(field, issue.get("msg", "Invalid value."))
        errors.setdefault(field, message)
    return errors


def _validation_failed(errors: Dict[str, str]) -> JSONResponse:
    return JSONResponse(status_code=400, content={"errors": errors, "message": "Validation failed."})


def _read_failed(message: str, error: Exception) -> JSONResponse:
    content: Dict[str, Any] = {"message": message, "error": str(error)}
    return JSONResponse(status_code=500, content=content)
