from unittest.mock import MagicMock

from PIL import Image

from lot_matcher.extractors.ocr_adapter import MockOCRAdapter
from lot_matcher.models.session import WorkflowState
from lot_matcher.pipeline.capture_pipeline import CapturePipeline


def _image():
    return Image.new("RGB", (32, 32), "white")


def test_two_photos_reach_result_screen():
    ocr = MockOCRAdapter()
    ocr.queue("Batch: XYZ987654321", "Vend: XYZ987654322")
    pipeline = CapturePipeline(ocr_adapter=ocr)

    first = pipeline.capture_image(_image())
    assert first.ok
    assert first.snapshot.state is WorkflowState.CAPTURE_INHOUSE
    assert first.ocr.text == "Batch: XYZ987654321"

    second = pipeline.capture_image(_image())
    assert second.snapshot.state is WorkflowState.SHOW_MATCH_PERCENTAGE
    assert second.capture_token == first.capture_token + 1
    assert second.to_dict()["matchPercentage"] == 91


def test_ocr_failure_leaves_session_untouched():
    ocr = MagicMock()
    ocr.read.side_effect = RuntimeError("recognizer offline")
    pipeline = CapturePipeline(ocr_adapter=ocr)

    result = pipeline.capture_image(_image())

    assert not result.ok
    assert "recognizer offline" in result.ocr_error
    assert result.snapshot.state is WorkflowState.CAPTURE_VENDOR
    assert not result.snapshot.try_again


def test_capture_text_skips_ocr():
    pipeline = CapturePipeline(ocr_adapter=MockOCRAdapter())
    result = pipeline.capture_text("Batch: XYZ987654321")
    assert result.ocr is None
    assert result.snapshot.vendor == "XYZ987654321"


def test_run_pair_stops_when_a_capture_does_not_advance():
    ocr = MockOCRAdapter()
    ocr.queue("no code here", "Vend: XYZ987654322")
    pipeline = CapturePipeline(ocr_adapter=ocr)

    results = pipeline.run_pair(_image(), _image())

    assert len(results) == 1
    assert results[0].snapshot.try_again
    assert pipeline.workflow.state is WorkflowState.CAPTURE_VENDOR


def test_load_keeps_injected_adapter():
    ocr = MockOCRAdapter()
    pipeline = CapturePipeline(ocr_adapter=ocr)
    pipeline.load()
    assert pipeline.ocr is ocr
    assert ocr.is_loaded
