from .advisor import AIAdvisor, get_advisor

__all__ = ["AIAdvisor", "get_advisor"]
