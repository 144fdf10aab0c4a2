"""
Preference Store

Async repository over the `preferences` MongoDB collection.
Writes one document per submission; read paths serve the admin dashboard.
"""

import math
import re
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from .errors import InvalidPreferenceId, PersistenceError
from .logic.constants import DEFAULT_PAGE_LIMIT, RECENT_WINDOW_DAYS, TOP_TRACK_STATS
from .logic.serializers import from_document, from_documents, normalize_email

logger = logging.getLogger(__name__)

EMPTY_SKILL_AVERAGES = {
    "avgProgramming": 0,
    "avgMath": 0,
    "avgCyber": 0,
    "avgUiux": 0,
    "avgResearch": 0,
}


def build_search_filter(search: Optional[str]) -> Dict[str, Any]:
    """Case-insensitive literal match on owner email or any recommended track."""
    if not search:
        return {}
    pattern = re.escape(search.strip())
    return {
        "$or": [
            {"email": {"$regex": pattern, "$options": "i"}},
            {"aiRecommendation.recommendations.track": {"$regex": pattern, "$options": "i"}},
        ]
    }


class PreferenceStore:
    def __init__(self, collection):
        self.collection = collection

    async def create(self, document: Dict[str, Any]) -> str:
        """Single unconditional insert; returns the new id."""
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            raise PersistenceError(f"Could not save preference: {e}") from e
        logger.info("Saved preference %s", result.inserted_id)
        return str(result.inserted_id)

    async def paginate(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_LIMIT,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Newest-first page of preferences, with paging totals."""
        page = max(1, page)
        limit = max(1, limit)
        query = build_search_filter(search)

        total = await self.collection.count_documents(query)
        cursor = (
            self.collection.find(query)
            .sort("createdAt", -1)
            .skip((page - 1) * limit)
            .limit(limit)
        )
        docs = await cursor.to_list(length=limit)

        return {
            "preferences": from_documents(docs),
            "totalPages": max(1, math.ceil(total / limit)),
            "currentPage": page,
            "totalPreferences": total,
        }

    async def get(self, preference_id: str) -> Optional[Dict[str, Any]]:
        if not ObjectId.is_valid(preference_id):
            raise InvalidPreferenceId(preference_id)
        doc = await self.collection.find_one({"_id": ObjectId(preference_id)})
        return from_document(doc) if doc else None

    async def by_email(self, email: str) -> List[Dict[str, Any]]:
        cursor = self.collection.find({"email": normalize_email(email)}).sort("createdAt", -1)
        return from_documents(await cursor.to_list(length=None))

    async def stats(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Totals, the most recommended tracks and average self-rated skills."""
        now = now or datetime.now(timezone.utc)

        total = await self.collection.count_documents({})
        recent = await self.collection.count_documents(
            {"createdAt": {"$gte": now - timedelta(days=RECENT_WINDOW_DAYS)}}
        )

        track_stats = await self.collection.aggregate([
            {"$unwind": "$aiRecommendation.recommendations"},
            {
                "$group": {
                    "_id": "$aiRecommendation.recommendations.track",
                    "count": {"$sum": 1},
                    "avgPercentage": {"$avg": "$aiRecommendation.recommendations.score"},
                }
            },
            {"$sort": {"count": -1}},
            {"$limit": TOP_TRACK_STATS},
        ]).to_list(length=None)

        skill_averages = await self.collection.aggregate([
            {
                "$group": {
                    "_id": None,
                    "avgProgramming": {"$avg": "$programmingSkill"},
                    "avgMath": {"$avg": "$mathSkill"},
                    "avgCyber": {"$avg": "$cyberSkill"},
                    "avgUiux": {"$avg": "$uiuxSkill"},
                    "avgResearch": {"$avg": "$researchSkill"},
                }
            },
        ]).to_list(length=None)

        if skill_averages:
            averages = {k: v for k, v in skill_averages[0].items() if k != "_id"}
        else:
            averages = dict(EMPTY_SKILL_AVERAGES)

        return {
            "totalPreferences": total,
            "recentPreferences": recent,
            "trackStats": track_stats,
            "skillAverages": averages,
        }


def get_store() -> PreferenceStore:
    """FastAPI dependency: store bound to the configured collection."""
    from db_mongo import preferences_collection

    return PreferenceStore(preferences_collection)
