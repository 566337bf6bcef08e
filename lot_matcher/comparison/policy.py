"""Pick one code out of the candidates of an extraction call.

Strategy:
1. Score every candidate by keyword overlap of its source line
2. Keep the best score; a later candidate with an equal or better score
   replaces the current best ("last wins" on ties)
3. If the best score is below the ambiguity threshold and more than one
   distinct code was seen, give up and hand the list to the operator
4. Otherwise select the best code ("" when nothing was extracted)
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import Config, default_config
from ..contracts import Candidate
from ..extractors.patterns import STRIP_SCORED_LINES
from .similarity import keyword_overlap

logger = logging.getLogger(__name__)


@dataclass
class PolicyResult:
    """
    Outcome of disambiguating one extraction call.

    Attributes:
        best_code: Selected code, "" if none was found or the call is ambiguous
        best_score: Highest keyword overlap seen (0.0-100.0)
        ambiguous: True when the operator has to choose
        candidates: Distinct codes in first-seen order (offered when ambiguous)
        scores: (code, score) per raw candidate, in extraction order
    """
    best_code: str = ""
    best_score: float = 0.0
    ambiguous: bool = False
    candidates: List[str] = field(default_factory=list)
    scores: List[Tuple[str, float]] = field(default_factory=list)

    @property
    def found(self) -> bool:
        """True when a code was selected automatically."""
        return not self.ambiguous and bool(self.best_code)


class DisambiguationPolicy:
    """
    Rank candidates against a keyword set and decide whether to auto-accept.

    Usage:
        policy = DisambiguationPolicy()
        result = policy.decide(candidates, config.vendor_keywords)
        if result.ambiguous:
            show_picker(result.candidates)
    """

    def __init__(
        self,
        ambiguity_threshold: Optional[float] = None,
        lowercase_lines: Optional[bool] = None,
        strip_lines: Optional[bool] = None,
        config: Optional[Config] = None,
    ):
        cfg = config or default_config
        self.ambiguity_threshold = (
            cfg.ambiguity_threshold if ambiguity_threshold is None else ambiguity_threshold
        )
        self.lowercase_lines = cfg.lowercase_lines if lowercase_lines is None else lowercase_lines
        if strip_lines is None:
            strip_lines = cfg.score_stripped_lines
        if strip_lines is None:
            strip_lines = STRIP_SCORED_LINES.get(cfg.pattern_variant, False)
        self.strip_lines = strip_lines

    def score(self, candidate: Candidate, keywords: Sequence[str]) -> float:
        line = candidate.source_line
        if self.strip_lines:
            line = line.strip()
        if self.lowercase_lines:
            line = line.lower()
        return keyword_overlap(line, keywords)

    def decide(self, candidates: Iterable[Candidate], keywords: Sequence[str]) -> PolicyResult:
        """
        Select the best candidate or flag the call as ambiguous.

        Args:
            candidates: All candidates from one extraction call
            keywords: Keyword set of the current workflow phase

        Returns:
            PolicyResult
        """
        best_score = 0.0
        best_code = ""
        distinct: List[str] = []
        scores: List[Tuple[str, float]] = []

        for cand in candidates:
            s = self.score(cand, keywords)
            scores.append((cand.code, s))
            logger.debug("Candidate %r line=%r score=%.1f", cand.code, cand.source_line, s)
            if cand.code not in distinct:
                distinct.append(cand.code)
            if s >= best_score:
                best_score = s
                best_code = cand.code

        if best_score < self.ambiguity_threshold and len(distinct) > 1:
            logger.info(
                "Ambiguous extraction: %d codes, best score %.1f < %.1f",
                len(distinct), best_score, self.ambiguity_threshold,
            )
            return PolicyResult(
                best_code="",
                best_score=best_score,
                ambiguous=True,
                candidates=distinct,
                scores=scores,
            )

        return PolicyResult(
            best_code=best_code,
            best_score=best_score,
            ambiguous=False,
            candidates=distinct,
            scores=scores,
        )
