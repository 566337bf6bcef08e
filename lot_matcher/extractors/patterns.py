"""Regex patterns for pulling lot/batch codes out of OCR lines.

Two extraction rules have been used on the labels so far; both are kept
as named variants so a deployment can pick one through Config:

- "labeled": optional label ending in ':' (or leading whitespace), then a
  run of word characters/hyphens.  The code is capture group 1.
    "Batch: AB123456"      -> "AB123456"
    "Lot 12345678 Exp"     -> "12345678"
- "legacy": a bare run of word characters and colons bounded by word
  boundaries.  The whole match is the code.
    "PO:4500012345"        -> "PO:4500012345"
  Lines are scored trimmed under this rule.  The rest of the historical
  legacy setup is plain Config:
    Config(pattern_variant="legacy", vendor_keywords=("batch",),
           inhouse_keywords=("vend",), ambiguity_threshold=0.0)
  (single keyword per phase, no operator choice)

Usage:
    from lot_matcher.extractors.patterns import build_code_pattern

    pattern = build_code_pattern("labeled", 8)
    codes = [code_from_match(m) for m in pattern.finditer("Batch: AB123456")]
    # codes == ["AB123456"]
"""

import re
from typing import Dict, Optional


# Default minimum length per variant, as used when each rule was current
DEFAULT_MIN_LENGTH: Dict[str, int] = {
    "labeled": 8,
    "legacy": 10,
}

# Whether candidate lines are trimmed before keyword scoring, per variant
STRIP_SCORED_LINES: Dict[str, bool] = {
    "labeled": False,
    "legacy": True,
}

_TEMPLATES: Dict[str, str] = {
    "labeled": (
        r"(?:.*?:\s*|\s+)?"            # optional label ("Batch: ") or leading space
        r"(?=.*\d)"                    # a digit somewhere in the rest of the line
        r"([A-Za-z0-9_-]{{{n},}})"     # the code (ASCII only, unlike Python's \w)
        r"\b"
    ),
    "legacy": (
        r"\b(?=.*\d)"
        r"[:A-Za-z0-9_]{{{n},}}"
        r"\b"
    ),
}

PATTERN_VARIANTS = tuple(_TEMPLATES)


def build_code_pattern(variant: str = "labeled", min_length: Optional[int] = None) -> re.Pattern:
    """
    Compile the code pattern for a variant.

    Args:
        variant: One of PATTERN_VARIANTS
        min_length: Minimum number of characters in the code run
            (None = the variant's DEFAULT_MIN_LENGTH)

    Returns:
        Compiled pattern.  If it has a capture group, group 1 is the code;
        otherwise the whole match is.

    Raises:
        ValueError: Unknown variant or min_length < 1
    """
    if variant not in _TEMPLATES:
        raise ValueError(
            f"Unknown pattern variant {variant!r}; expected one of {PATTERN_VARIANTS}"
        )
    if min_length is None:
        min_length = DEFAULT_MIN_LENGTH[variant]
    if min_length < 1:
        raise ValueError(f"min_length must be >= 1, got {min_length}")

    return re.compile(_TEMPLATES[variant].format(n=min_length))


def code_from_match(match: "re.Match[str]") -> str:
    """Return the code portion of a match produced by build_code_pattern()."""
    if match.re.groups:
        return match.group(1)
    return match.group(0)
