"""Scoring and candidate selection."""

from .similarity import keyword_overlap, match_percentage
from .policy import DisambiguationPolicy, PolicyResult

__all__ = [
    "keyword_overlap",
    "match_percentage",
    "DisambiguationPolicy",
    "PolicyResult",
]
