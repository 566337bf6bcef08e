"""Data models for Lot Matcher."""

from .session import (
    WorkflowState,
    MatchVerdict,
    MatchRecord,
    Session,
    SessionSnapshot,
)

__all__ = [
    "WorkflowState",
    "MatchVerdict",
    "MatchRecord",
    "Session",
    "SessionSnapshot",
]
