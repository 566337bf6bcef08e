"""Session, snapshot and match-log models for the capture workflow."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..contracts import Candidate


class WorkflowState(Enum):
    """Phases of one vendor/inhouse comparison, in capture order."""

    CAPTURE_VENDOR = 1
    CAPTURE_INHOUSE = 2
    SHOW_MATCH_PERCENTAGE = 3

    def next(self) -> "WorkflowState":
        """Following phase; SHOW_MATCH_PERCENTAGE wraps to CAPTURE_VENDOR."""
        if self is WorkflowState.CAPTURE_VENDOR:
            return WorkflowState.CAPTURE_INHOUSE
        if self is WorkflowState.CAPTURE_INHOUSE:
            return WorkflowState.SHOW_MATCH_PERCENTAGE
        return WorkflowState.CAPTURE_VENDOR

    def previous(self) -> Optional["WorkflowState"]:
        """Phase undo returns to, or None where undo is not allowed."""
        if self is WorkflowState.CAPTURE_INHOUSE:
            return WorkflowState.CAPTURE_VENDOR
        if self is WorkflowState.SHOW_MATCH_PERCENTAGE:
            return WorkflowState.CAPTURE_INHOUSE
        return None


class MatchVerdict(Enum):
    """Banner shown for a completed pair."""
    EXACT = "exact"        # 100%
    PARTIAL = "partial"    # acceptance threshold .. 99%
    MISMATCH = "mismatch"  # below acceptance threshold

    @classmethod
    def from_percentage(
        cls, percentage: int, acceptance_threshold: int = 80, exact_threshold: int = 100
    ) -> "MatchVerdict":
        if percentage >= exact_threshold:
            return cls.EXACT
        if percentage >= acceptance_threshold:
            return cls.PARTIAL
        return cls.MISMATCH


@dataclass(frozen=True)
class MatchRecord:
    """
    One accepted vendor/inhouse pair.

    Attributes:
        time: Local timestamp, "YYYY-MM-DD HH:MM:SS"
        vendor: Vendor code
        inhouse: Inhouse code
    """
    time: str
    vendor: str
    inhouse: str


@dataclass
class Session:
    """
    Live mutable record owned by CaptureWorkflow.

    Invariants:
        - ambiguous_candidates non-empty => try_again is False and nothing
          has been accepted for the current phase
        - vendor is set only in CAPTURE_INHOUSE or later
        - inhouse is set only in SHOW_MATCH_PERCENTAGE
    """
    state: WorkflowState = WorkflowState.CAPTURE_VENDOR
    vendor: str = ""
    inhouse: str = ""
    try_again: bool = False
    ambiguous_candidates: List[str] = field(default_factory=list)
    scanned_count: int = 0
    match_log: List[MatchRecord] = field(default_factory=list)
    last_candidates: List[Candidate] = field(default_factory=list)


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Read-only copy of a Session handed to the host after each operation.

    Attributes:
        match_percentage: Score of the current pair (None until both codes are set)
        verdict: Banner for the current pair (None until both codes are set)
    """
    state: WorkflowState
    vendor: str
    inhouse: str
    try_again: bool
    ambiguous_candidates: Tuple[str, ...]
    scanned_count: int
    match_log: Tuple[MatchRecord, ...]
    last_candidates: Tuple[Candidate, ...] = ()
    match_percentage: Optional[int] = None
    verdict: Optional[MatchVerdict] = None

    @property
    def is_ambiguous(self) -> bool:
        return bool(self.ambiguous_candidates)
