"""Capture workflow: vendor photo -> inhouse photo -> match result.

CaptureWorkflow owns the only mutable state in the package (a Session)
and is the single place transitions happen:

    CAPTURE_VENDOR --accept--> CAPTURE_INHOUSE --accept--> SHOW_MATCH_PERCENTAGE
          ^                          |                            |
          +---------- undo ----------+<---------- undo -----------+
          +------------------ accept_match / reset ---------------+

Operator-level failures are state, not exceptions:
- nothing extracted          -> try_again = True
- low-confidence, >1 codes   -> ambiguous_candidates set, operator picks
- out-of-place UI events     -> no-op (logged at debug level)

All mutating calls are serialized with a re-entrant lock because the
session invariants span several fields.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple

from ..comparison.policy import DisambiguationPolicy, PolicyResult
from ..comparison.similarity import match_percentage
from ..config import Config, default_config
from ..contracts import Candidate
from ..extractors.candidates import CandidateExtractor
from ..models.session import (
    MatchRecord,
    MatchVerdict,
    Session,
    SessionSnapshot,
    WorkflowState,
)

logger = logging.getLogger(__name__)


class CaptureWorkflow:
    """
    State machine driving one operator session.

    Usage:
        workflow = CaptureWorkflow()
        workflow.submit_extraction("Batch: XYZ987654321")   # vendor
        workflow.submit_extraction("Vend: XYZ987654322")    # inhouse
        snap = workflow.accept_match()
        print(snap.scanned_count, snap.match_log)
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize workflow.

        Args:
            config: Config override (uses default_config if None)
            clock: Returns "now" for match timestamps (datetime.now if None)
        """
        self.config = config or default_config
        self.extractor = CandidateExtractor(self.config)
        self.policy = DisambiguationPolicy(config=self.config)
        self._clock = clock or datetime.now
        self._session = Session()
        self._lock = threading.RLock()
        self._capture_seq = 0

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> WorkflowState:
        return self._session.state

    @property
    def vendor(self) -> str:
        return self._session.vendor

    @property
    def inhouse(self) -> str:
        return self._session.inhouse

    @property
    def try_again(self) -> bool:
        return self._session.try_again

    @property
    def ambiguous_candidates(self) -> Tuple[str, ...]:
        return tuple(self._session.ambiguous_candidates)

    @property
    def scanned_count(self) -> int:
        return self._session.scanned_count

    @property
    def match_data_list(self) -> Tuple[MatchRecord, ...]:
        return tuple(self._session.match_log)

    def keywords_for(self, state: WorkflowState) -> Tuple[str, ...]:
        """Keyword set used to rank candidates in a phase."""
        if state is WorkflowState.CAPTURE_VENDOR:
            return tuple(self.config.vendor_keywords)
        if state is WorkflowState.CAPTURE_INHOUSE:
            return tuple(self.config.inhouse_keywords)
        return tuple(self.config.result_keywords)

    def snapshot(self) -> SessionSnapshot:
        """Copy of the current session."""
        with self._lock:
            s = self._session
            percentage = None
            verdict = None
            if s.state is WorkflowState.SHOW_MATCH_PERCENTAGE and s.vendor and s.inhouse:
                percentage = match_percentage(s.inhouse, s.vendor)
                verdict = MatchVerdict.from_percentage(
                    percentage,
                    acceptance_threshold=self.config.acceptance_threshold,
                    exact_threshold=self.config.exact_threshold,
                )
            return SessionSnapshot(
                state=s.state,
                vendor=s.vendor,
                inhouse=s.inhouse,
                try_again=s.try_again,
                ambiguous_candidates=tuple(s.ambiguous_candidates),
                scanned_count=s.scanned_count,
                match_log=tuple(s.match_log),
                last_candidates=tuple(s.last_candidates),
                match_percentage=percentage,
                verdict=verdict,
            )

    # ------------------------------------------------------------------
    # Capture tokens
    # ------------------------------------------------------------------

    def begin_capture(self) -> int:
        """
        Register a new photo and return its token.

        Pass the token to submit_extraction(); results carrying an older
        token are ignored so a slow OCR call cannot overwrite a newer one.
        """
        with self._lock:
            self._capture_seq += 1
            return self._capture_seq

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def submit_extraction(self, raw_text: str, capture_token: Optional[int] = None) -> SessionSnapshot:
        """
        Run extraction and disambiguation on OCR text and apply the outcome.

        Args:
            raw_text: OCR output for the latest photo (empty/garbage is fine)
            capture_token: Token from begin_capture(), or None for untagged input

        Returns:
            Updated snapshot
        """
        with self._lock:
            if capture_token is not None and capture_token != self._capture_seq:
                logger.warning(
                    "Ignoring stale OCR result (token %d, latest %d)",
                    capture_token, self._capture_seq,
                )
                return self.snapshot()
            if self._session.state is WorkflowState.SHOW_MATCH_PERCENTAGE:
                logger.debug("submit_extraction ignored in %s", self._session.state.name)
                return self.snapshot()

            keywords = self.keywords_for(self._session.state)
            candidates = list(self.extractor.extract(raw_text))
            result = self.policy.decide(candidates, keywords)
            return self.submit_candidates(candidates, result)

    def submit_candidates(
        self,
        candidates: Iterable[Candidate],
        result: PolicyResult,
    ) -> SessionSnapshot:
        """
        Apply a policy result computed elsewhere.

        Args:
            candidates: Raw candidates of the extraction call
            result: Policy decision for those candidates

        Returns:
            Updated snapshot
        """
        with self._lock:
            s = self._session
            if s.state is WorkflowState.SHOW_MATCH_PERCENTAGE:
                logger.debug("submit_candidates ignored in %s", s.state.name)
                return self.snapshot()

            s.last_candidates = list(candidates)

            if result.ambiguous and result.candidates:
                s.ambiguous_candidates = list(result.candidates)
                s.try_again = False
                return self.snapshot()

            s.ambiguous_candidates = []
            if result.best_code:
                self._accept(result.best_code)
            else:
                logger.info("No code found in %s, asking for another photo", s.state.name)
                s.try_again = True
            return self.snapshot()

    def resolve_ambiguous(self, selected_code: str) -> SessionSnapshot:
        """
        Accept the operator's pick from the ambiguous list.

        A code that was not offered sets try_again instead.  The pending
        list is cleared either way.  No-op when nothing is pending.
        """
        with self._lock:
            s = self._session
            if not s.ambiguous_candidates:
                logger.debug("resolve_ambiguous with nothing pending")
                return self.snapshot()

            offered: List[str] = s.ambiguous_candidates
            s.ambiguous_candidates = []
            if selected_code and selected_code in offered:
                self._accept(selected_code)
            else:
                logger.info("Selected code %r was not offered", selected_code)
                s.try_again = True
            return self.snapshot()

    def dismiss_ambiguous(self) -> SessionSnapshot:
        """Operator declined every offered code; a new photo is needed."""
        with self._lock:
            s = self._session
            if not s.ambiguous_candidates:
                logger.debug("dismiss_ambiguous with nothing pending")
                return self.snapshot()
            s.ambiguous_candidates = []
            s.try_again = True
            return self.snapshot()

    def undo(self) -> SessionSnapshot:
        """Step back one phase, clearing the code captured in it."""
        with self._lock:
            s = self._session
            previous = s.state.previous()
            if previous is None:
                logger.debug("undo ignored in %s", s.state.name)
                return self.snapshot()

            if s.state is WorkflowState.CAPTURE_INHOUSE:
                s.vendor = ""
            else:
                s.inhouse = ""
            s.state = previous
            s.try_again = False
            s.ambiguous_candidates = []
            logger.info("Undo -> %s", s.state.name)
            return self.snapshot()

    def accept_match(self) -> SessionSnapshot:
        """
        Close the current pair and start over.

        The pair is logged only if its match percentage reaches the
        acceptance threshold.  Below that it is discarded, and the
        operator re-scans both labels from the vendor phase.
        """
        with self._lock:
            s = self._session
            if s.state is not WorkflowState.SHOW_MATCH_PERCENTAGE:
                logger.debug("accept_match ignored in %s", s.state.name)
                return self.snapshot()

            percentage = match_percentage(s.inhouse, s.vendor)
            if percentage >= self.config.acceptance_threshold:
                record = MatchRecord(
                    time=self._clock().strftime(self.config.timestamp_format),
                    vendor=s.vendor,
                    inhouse=s.inhouse,
                )
                s.match_log.append(record)
                s.scanned_count += 1
                logger.info(
                    "Match logged: %s / %s (%d%%)", record.vendor, record.inhouse, percentage
                )
            else:
                logger.info(
                    "Match discarded: %s / %s (%d%% < %d%%)",
                    s.vendor, s.inhouse, percentage, self.config.acceptance_threshold,
                )

            self._reset_codes()
            return self.snapshot()

    def reset_vendor_and_inhouse(self) -> SessionSnapshot:
        """Drop both codes and return to the vendor phase; the match log is kept."""
        with self._lock:
            self._reset_codes()
            return self.snapshot()

    # ------------------------------------------------------------------
    # Internals (caller holds the lock)
    # ------------------------------------------------------------------

    def _accept(self, code: str) -> None:
        s = self._session
        if s.state is WorkflowState.CAPTURE_VENDOR:
            s.vendor = code
        elif s.state is WorkflowState.CAPTURE_INHOUSE:
            s.inhouse = code
        else:
            return
        s.try_again = False
        s.state = s.state.next()
        logger.info("Accepted %r -> %s", code, s.state.name)

    def _reset_codes(self) -> None:
        s = self._session
        s.vendor = ""
        s.inhouse = ""
        s.ambiguous_candidates = []
        s.try_again = False
        s.state = WorkflowState.CAPTURE_VENDOR
