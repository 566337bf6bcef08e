"""
Lot Matcher v1.0

Verifies that a vendor label and an inhouse label denote the same lot by
comparing codes pulled out of OCR text.

Stages:
- Candidate extraction: regex scan of OCR lines for lot/batch codes
- Disambiguation: keyword-overlap ranking, operator pick when unsure
- Capture workflow: vendor -> inhouse -> match percentage, undo/retry
- Match log: in-memory list of accepted pairs, CSV export

The OCR recognizer (OpenAI vision) and the camera stay outside the engine;
only extractors.ocr_adapter, pipeline and utils import Pillow/OpenAI.
"""

__version__ = "1.0.0"


def __getattr__(name):
    """Lazy imports so the engine can be used without pulling in Pillow/OpenAI."""

    _workflow_names = {
        "CaptureWorkflow",
    }
    _model_names = {
        "WorkflowState", "MatchVerdict", "MatchRecord", "Session", "SessionSnapshot",
    }
    _comparison_names = {
        "keyword_overlap", "match_percentage", "DisambiguationPolicy", "PolicyResult",
    }
    _extractor_names = {
        "CandidateExtractor", "extract_candidates", "build_code_pattern",
    }
    _pipeline_names = {
        "CapturePipeline", "CaptureResult",
    }

    if name in _workflow_names:
        from . import workflow
        return getattr(workflow, name)
    elif name in _model_names:
        from . import models
        return getattr(models, name)
    elif name in _comparison_names:
        from . import comparison
        return getattr(comparison, name)
    elif name in _extractor_names:
        from . import extractors
        return getattr(extractors, name)
    elif name in _pipeline_names:
        from . import pipeline
        return getattr(pipeline, name)

    raise AttributeError(f"module 'lot_matcher' has no attribute {name!r}")
