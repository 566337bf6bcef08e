"""Extract candidate lot codes from raw OCR text.

The extractor is pure: it never touches workflow state.  The workflow
keeps the raw candidates of the last call so the operator can be shown
the full list when the policy cannot pick one.
"""

import logging
import re
from typing import Iterator, List, Optional

from ..config import Config, default_config
from ..contracts import Candidate
from .patterns import build_code_pattern, code_from_match

logger = logging.getLogger(__name__)

# Only CR, LF and CRLF end a line; form feeds and other separators stay inline
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _has_digit(code: str) -> bool:
    return any(c.isdigit() for c in code)


def split_lines(text: str) -> List[str]:
    return _LINE_BREAK.split(text)


class CandidateSequence:
    """
    Lazy, restartable sequence of candidates for one OCR text.

    Each iteration re-scans the text, so the sequence can be consumed
    more than once (e.g. by the policy and again by a diagnostics dump).
    """

    def __init__(self, text: str, pattern: re.Pattern, require_digit: bool = True):
        self.text = text or ""
        self.pattern = pattern
        self.require_digit = require_digit

    def __iter__(self) -> Iterator[Candidate]:
        for line in split_lines(self.text):
            for match in self.pattern.finditer(line.strip()):
                code = code_from_match(match)
                if not code:
                    continue
                # The lookahead only asks for a digit somewhere on the line
                if self.require_digit and not _has_digit(code):
                    logger.debug("Dropping digit-less code %r from line %r", code, line)
                    continue
                yield Candidate(code=code, source_line=line)

    def __repr__(self) -> str:
        return f"CandidateSequence(lines={len(split_lines(self.text))}, pattern={self.pattern.pattern!r})"


class CandidateExtractor:
    """
    Scan OCR text line by line for codes matching the configured pattern.

    Usage:
        extractor = CandidateExtractor()
        for cand in extractor.extract("Batch: AB123456"):
            print(cand.code, cand.source_line)
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or default_config
        self.pattern = build_code_pattern(
            self.config.pattern_variant,
            self.config.min_code_length,
        )

    def extract(self, text: str) -> CandidateSequence:
        """Return a lazy sequence of every plausible code in text."""
        return CandidateSequence(text, self.pattern, require_digit=self.config.require_digit)


def extract_candidates(text: str, config: Optional[Config] = None) -> List[Candidate]:
    """
    Convenience wrapper: extract and materialise all candidates.

    Args:
        text: Raw multi-line OCR output (may be empty or garbage)
        config: Config override (uses default_config if None)

    Returns:
        Candidates in line order, then match order within a line
    """
    return list(CandidateExtractor(config).extract(text))
