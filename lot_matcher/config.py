"""
Configuration for the lot matcher.

All settings centralized here. Override by creating a Config instance
with custom values.

Usage:
    from lot_matcher.config import Config, default_config

    # Use defaults
    print(default_config.ambiguity_threshold)  # 10.0

    # Override for a run
    my_config = Config(pattern_variant="legacy", min_code_length=10)
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class Config:
    """
    Central configuration for extraction, disambiguation and the workflow.

    Every historical extraction/scoring rule is a combination of these
    values; the defaults reproduce the current label-aware behavior.
    """

    # === Code extraction ===
    pattern_variant: str = "labeled"  # "labeled" or "legacy"
    min_code_length: Optional[int] = None  # None = variant default (labeled 8, legacy 10)
    require_digit: bool = True        # Drop codes without any digit

    # === Keyword sets (lowercase, per phase) ===
    vendor_keywords: Tuple[str, ...] = ("batch", "lot", "p.o.")
    inhouse_keywords: Tuple[str, ...] = ("vend",)
    # Result screen set; extraction is ignored there, so it only shows up
    # through CaptureWorkflow.keywords_for()
    result_keywords: Tuple[str, ...] = ("",)

    # === Disambiguation ===
    ambiguity_threshold: float = 10.0  # Best overlap below this + >1 code = ambiguous
    lowercase_lines: bool = False      # Keywords are lowercase; lines compared raw by default
    score_stripped_lines: Optional[bool] = None  # None = variant default (legacy trims, labeled does not)

    # === Match acceptance ===
    acceptance_threshold: int = 80     # Percentage needed to log a match
    exact_threshold: int = 100

    # === Match log ===
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    csv_filename: str = "match_data.csv"
    csv_header: Tuple[str, ...] = ("Time", "Vendor", "Inhouse")

    # === OCR (vision model used as the recognizer) ===
    ocr_model_id: str = "gpt-4o-mini"
    ocr_max_tokens: int = 512
    ocr_temperature: float = 0.0
    ocr_image_detail: str = "high"  # OpenAI image detail level ("low", "high", "auto")
    ocr_max_image_dimension: int = 2048

    # Extra per-run notes for the OCR prompt (e.g. label layout hints)
    ocr_prompt_hints: Tuple[str, ...] = field(default_factory=tuple)


# Default configuration instance
default_config = Config()
