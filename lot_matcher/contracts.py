"""Inter-stage data contracts for the capture pipeline."""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Candidate:
    """Output from the candidate extractor."""
    code: str
    source_line: str  # Unstripped OCR line the code was found on


@dataclass
class OCRResult:
    """Output from OCR adapter."""
    text: str
    confidence: float
    meta: Dict[str, Any] = field(default_factory=dict)
