"""Exceptions raised by the recommendation pipeline and preference store."""


class RecommendationError(Exception):
    """Base class for recommendation failures."""


class UpstreamServiceError(RecommendationError):
    """The AI advisor failed or returned an unusable reply."""


class AdvisorUnavailable(UpstreamServiceError):
    """No AI client is configured."""


class PersistenceError(RecommendationError):
    """A preference could not be written to the store."""


class InvalidPreferenceId(RecommendationError):
    """A preference id is not a valid ObjectId."""
