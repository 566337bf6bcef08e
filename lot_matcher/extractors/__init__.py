"""Code extraction and OCR adapters."""

# Engine exports (stdlib only)
from .patterns import PATTERN_VARIANTS, build_code_pattern, code_from_match
from .candidates import CandidateExtractor, CandidateSequence, extract_candidates

# OCR adapters pull in Pillow (and OpenAI on load)
_OCR_NAMES = {
    "OCRAdapter": ("ocr_adapter", "OCRAdapter"),
    "MockOCRAdapter": ("ocr_adapter", "MockOCRAdapter"),
}


def __getattr__(name):
    """Lazy import for OCR adapters to keep Pillow out of the engine import."""
    if name in _OCR_NAMES:
        module_name, attr_name = _OCR_NAMES[name]
        import importlib
        mod = importlib.import_module(f".{module_name}", __package__)
        return getattr(mod, attr_name)
    raise AttributeError(f"module 'lot_matcher.extractors' has no attribute {name!r}")


__all__ = [
    # OCR (lazy)
    "OCRAdapter",
    "MockOCRAdapter",
    # Engine (eager)
    "PATTERN_VARIANTS",
    "build_code_pattern",
    "code_from_match",
    "CandidateExtractor",
    "CandidateSequence",
    "extract_candidates",
]
