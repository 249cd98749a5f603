"""Static reference data."""

from .verbs import COMMON_VERBS, search_verbs

__all__ = ['COMMON_VERBS', 'search_verbs']
