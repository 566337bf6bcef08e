"""Host loop tying the OCR adapter to the capture workflow.

One call per photo:
1. Register the capture (token guards against out-of-order OCR results)
2. Transcribe the label with the OCR adapter
3. Hand the text to the workflow (extraction -> policy -> transition)

OCR failures stay on this side of the boundary: they are logged and
recorded on the CaptureResult, and the session is left untouched.

Usage:
    from lot_matcher.pipeline import CapturePipeline

    pipeline = CapturePipeline(api_key="sk-...")
    pipeline.load()
    result = pipeline.capture_image(Image.open("vendor.jpg"))
    print(result.snapshot.state, result.snapshot.vendor)
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from PIL import Image

from ..config import Config, default_config
from ..contracts import OCRResult
from ..models.session import SessionSnapshot
from ..workflow.capture import CaptureWorkflow

logger = logging.getLogger(__name__)


@dataclass
class CaptureResult:
    """
    Result of feeding one photo (or text dump) through the pipeline.

    Attributes:
        snapshot: Session after the capture was applied (or unchanged on error)
        capture_token: Token issued for this capture
        ocr: OCR output, None when text was supplied directly or OCR failed
        ocr_error: Error message if the recognizer failed
        timing: Seconds spent per stage
    """
    snapshot: SessionSnapshot
    capture_token: int = 0
    ocr: Optional[OCRResult] = None
    ocr_error: Optional[str] = None
    timing: Dict[str, float] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.ocr_error is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        snap = self.snapshot
        return {
            "captureToken": self.capture_token,
            "state": snap.state.name,
            "vendor": snap.vendor,
            "inhouse": snap.inhouse,
            "tryAgain": snap.try_again,
            "ambiguousCandidates": list(snap.ambiguous_candidates),
            "scannedCount": snap.scanned_count,
            "matchPercentage": snap.match_percentage,
            "verdict": snap.verdict.value if snap.verdict else None,
            "ocrText": self.ocr.text if self.ocr else None,
            "ocrConfidence": self.ocr.confidence if self.ocr else None,
            "ocrError": self.ocr_error,
            "timing": self.timing,
        }


class CapturePipeline:
    """
    Drive a CaptureWorkflow from label photos.

    The OCR adapter is any object with read(image) -> OCRResult, e.g.
    OCRAdapter (OpenAI vision) or MockOCRAdapter.
    """

    def __init__(
        self,
        workflow: Optional[CaptureWorkflow] = None,
        ocr_adapter: Any = None,
        api_key: Optional[str] = None,
        config: Optional[Config] = None,
    ):
        self.config = config or default_config
        self.workflow = workflow or CaptureWorkflow(self.config)
        self.api_key = api_key
        self.ocr = ocr_adapter

    def load(self) -> None:
        """Create the default OCR adapter if none was injected."""
        if self.ocr is None:
            from ..extractors.ocr_adapter import OCRAdapter
            self.ocr = OCRAdapter(api_key=self.api_key, config=self.config)
        if not self.ocr.is_loaded:
            self.ocr.load()

    def unload(self) -> None:
        if self.ocr is not None:
            self.ocr.unload()

    def capture_image(self, image: Image.Image) -> CaptureResult:
        """
        Transcribe a photo and apply it to the workflow.

        Args:
            image: Label photo

        Returns:
            CaptureResult
        """
        token = self.workflow.begin_capture()
        timing: Dict[str, float] = {}

        if self.ocr is None:
            self.load()

        t0 = time.time()
        try:
            ocr_result = self.ocr.read(image)
        except Exception as e:
            logger.warning("Text recognition failed: %s", e)
            return CaptureResult(
                snapshot=self.workflow.snapshot(),
                capture_token=token,
                ocr_error=f"OCR error: {str(e)[:200]}",
                timing={"ocr": time.time() - t0},
            )
        timing["ocr"] = time.time() - t0
        logger.debug("Extracted text: %s", ocr_result.text)

        t0 = time.time()
        snapshot = self.workflow.submit_extraction(ocr_result.text, capture_token=token)
        timing["extract"] = time.time() - t0

        return CaptureResult(
            snapshot=snapshot,
            capture_token=token,
            ocr=ocr_result,
            timing=timing,
        )

    def capture_text(self, text: str) -> CaptureResult:
        """Apply already-recognized text (e.g. from an on-device recognizer)."""
        token = self.workflow.begin_capture()
        t0 = time.time()
        snapshot = self.workflow.submit_extraction(text, capture_token=token)
        return CaptureResult(
            snapshot=snapshot,
            capture_token=token,
            timing={"extract": time.time() - t0},
        )

    def run_pair(self, vendor_image: Image.Image, inhouse_image: Image.Image) -> List[CaptureResult]:
        """
        Capture a vendor and an inhouse photo in sequence.

        Stops early if a capture does not advance the workflow (no code,
        ambiguity or OCR error); the caller decides how to continue.
        """
        results = []
        for image in (vendor_image, inhouse_image):
            before = self.workflow.state
            result = self.capture_image(image)
            results.append(result)
            if result.snapshot.state is before:
                break
        return results
