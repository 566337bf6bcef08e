"""OCR adapter wrapping an OpenAI vision model as the label recognizer.

Provides a consistent interface for the capture pipeline:
    adapter.read(image) -> OCRResult(text, confidence, meta)

The recognizer is a black box: the adapter only asks it for a verbatim,
line-preserving transcription of the label.  Code extraction happens
downstream in the workflow, never here.
"""

import base64
import io
import re
from typing import Optional, Tuple

from PIL import Image

from ..config import Config, default_config
from ..contracts import OCRResult


TRANSCRIBE_SYSTEM = (
    "You are an OCR engine. Transcribe the text printed on the label in the "
    "image exactly as it appears, one printed line per output line. Do not "
    "explain, summarize, translate or correct anything. If there is no "
    "readable text, output nothing."
)


def _estimate_confidence(text: str) -> float:
    """
    Estimate OCR confidence heuristically.

    The chat API returns no per-token scores, so the estimate is based on
    text characteristics:

    - Empty text -> 0.0
    - Mostly alphanumeric content -> higher confidence
    - A digit-bearing run of 8+ characters (a likely code) -> bonus
    - Long runs of one repeated character -> penalty

    Returns:
        Confidence score between 0.0 and 1.0
    """
    if not text or not text.strip():
        return 0.0

    stripped = text.strip()
    score = 0.5

    visible = [c for c in stripped if not c.isspace()]
    alnum_ratio = sum(1 for c in visible if c.isalnum()) / len(visible) if visible else 0

    if alnum_ratio > 0.6:
        score += 0.15
    elif alnum_ratio < 0.3:
        score -= 0.15

    if re.search(r"(?=[A-Za-z0-9-]*\d)[A-Za-z0-9-]{8,}", stripped):
        score += 0.2

    if re.search(r"(.)\1{5,}", stripped):
        score -= 0.2

    return max(0.0, min(1.0, score))


def _encode_image(image: Image.Image, max_dimension: int = 2048) -> str:
    """Encode PIL Image to base64 PNG, resizing if needed."""
    w, h = image.size
    if max(w, h) > max_dimension:
        scale = max_dimension / max(w, h)
        image = image.resize((int(w * scale), int(h * scale)), Image.LANCZOS)

    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")

    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("utf-8")


def _strip_fences(text: str) -> str:
    """Remove markdown code fences some models wrap transcriptions in."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = re.sub(r"^```\w*\s*", "", cleaned)
        cleaned = re.sub(r"\s*```$", "", cleaned)
    return cleaned


class OCRAdapter:
    """
    Adapter wrapping an OpenAI vision model for label transcription.

    Usage:
        adapter = OCRAdapter(api_key="sk-...")
        adapter.load()

        result = adapter.read(Image.open("label.jpg"))
        print(result.text, result.confidence)
    """

    def __init__(self, api_key: Optional[str] = None, config: Optional[Config] = None):
        """
        Initialize adapter.

        Args:
            api_key: OpenAI API key (None = uses OPENAI_API_KEY env var)
            config: Config override (uses default_config if None)
        """
        self.api_key = api_key
        self.config = config or default_config
        self._client = None

    def load(self) -> None:
        """Create the OpenAI client."""
        from openai import OpenAI
        self._client = OpenAI(api_key=self.api_key)

    def unload(self) -> None:
        self._client = None

    @property
    def is_loaded(self) -> bool:
        return self._client is not None

    def _build_prompt(self) -> str:
        lines = ["Transcribe this label."]
        for hint in self.config.ocr_prompt_hints:
            lines.append(f"- {hint}")
        return "\n".join(lines)

    def read(self, image: Image.Image) -> OCRResult:
        """
        Transcribe a label photo.

        Args:
            image: PIL Image of the label

        Returns:
            OCRResult with raw multi-line text, estimated confidence and metadata

        Raises:
            RuntimeError: If load() has not been called
        """
        if not self.is_loaded:
            raise RuntimeError("OCR client not loaded. Call load() first.")

        cfg = self.config
        b64_image = _encode_image(image, max_dimension=cfg.ocr_max_image_dimension)

        response = self._client.chat.completions.create(
            model=cfg.ocr_model_id,
            messages=[
                {"role": "system", "content": TRANSCRIBE_SYSTEM},
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image_url",
                            "image_url": {
                                "url": f"data:image/png;base64,{b64_image}",
                                "detail": cfg.ocr_image_detail,
                            },
                        },
                        {"type": "text", "text": self._build_prompt()},
                    ],
                },
            ],
            max_tokens=cfg.ocr_max_tokens,
            temperature=cfg.ocr_temperature,
        )

        raw_text = response.choices[0].message.content or ""
        text = _strip_fences(raw_text)
        tokens_used = response.usage.total_tokens if response.usage else 0

        return OCRResult(
            text=text,
            confidence=_estimate_confidence(text),
            meta={
                "raw_text": raw_text,
                "line_count": len(text.splitlines()),
                "engine": cfg.ocr_model_id,
                "tokens_used": tokens_used,
            },
        )

    def read_simple(self, image: Image.Image) -> Tuple[str, float]:
        """Simple interface returning (text, confidence) tuple."""
        result = self.read(image)
        return result.text, result.confidence


class MockOCRAdapter:
    """
    Mock OCR adapter for tests and dry runs without an API key.

    Returns configurable fixed text, or pops queued texts in order.
    """

    def __init__(self, default_text: str = "", default_confidence: float = 0.5):
        self.default_text = default_text
        self.default_confidence = default_confidence
        self.queued = []
        self._loaded = False

    def queue(self, *texts: str) -> None:
        """Queue texts returned by subsequent read() calls."""
        self.queued.extend(texts)

    def load(self) -> None:
        self._loaded = True

    def unload(self) -> None:
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def read(self, image: Optional[Image.Image]) -> OCRResult:
        text = self.queued.pop(0) if self.queued else self.default_text
        return OCRResult(
            text=text,
            confidence=self.default_confidence,
            meta={"engine": "MockOCR"},
        )

    def read_simple(self, image: Optional[Image.Image]) -> Tuple[str, float]:
        result = self.read(image)
        return result.text, result.confidence
