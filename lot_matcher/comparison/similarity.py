"""Similarity scores used for ranking candidates and judging a pair.

Both scores are crude:

- keyword_overlap() is a Jaccard index over *character sets*, not words.
  "batch" and "Batch: AB123" share {a, t, c, h}; it only says the line
  uses a similar alphabet to the keyword.
- match_percentage() compares characters position by position.  It is
  not an edit distance: one inserted character shifts every later
  position and the score collapses.
"""

from typing import Iterable


def keyword_overlap(line: str, keywords: Iterable[str]) -> float:
    """
    Highest character-set overlap between a line and any keyword.

    Comparison is case-sensitive; keywords are lowercase, so pass a
    lowercased line for case-insensitive behavior.

    Args:
        line: OCR line the candidate came from
        keywords: Phase keyword set (empty keywords are skipped)

    Returns:
        Percentage in [0, 100]; 0.0 if there are no non-empty keywords
    """
    line_chars = set(line)
    best = 0.0

    for keyword in keywords:
        if not keyword:
            continue
        keyword_chars = set(keyword)
        union = len(keyword_chars | line_chars)
        if union == 0:
            continue
        score = len(keyword_chars & line_chars) / union * 100
        if score > best:
            best = score

    return best


def match_percentage(a: str, b: str) -> int:
    """
    Positional character equality between two codes, as a whole percentage.

    Characters are compared pairwise up to the shorter length and the
    count is divided by the longer length, then truncated.

        match_percentage("XYZ987654321", "XYZ987654322") == 91

    Returns:
        0-100; 0 when both strings are empty
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 0
    equal = sum(1 for x, y in zip(a, b) if x == y)
    return int(equal / longest * 100)
