"""Host-side capture pipeline (OCR adapter -> workflow)."""

from .capture_pipeline import CapturePipeline, CaptureResult

__all__ = ["CapturePipeline", "CaptureResult"]
