"""Claude API backend: transcribe a photographed sheet to plain text."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from . import OCRBackend, ProgressCallback

_PROMPT = """\
This image is a photo of a handwritten or printed kitchen sheet
(a waste log or a production log) from a convenience store.

Transcribe every line of text exactly as written, one line per row,
keeping item names and the quantity on the same line (e.g. "Hot Dog 25").
Include headers, employee names, shift and times.
Return only the transcribed text, with no commentary.
"""


class ClaudeOCRBackend(OCRBackend):
    """Recognize sheet text using Claude's vision capability."""

    def __init__(
        self, api_key: str = "", model: str = "claude-sonnet-4-5-20250929"
    ) -> None:
        self._api_key = api_key
        self._model = model

    async def recognize_text(
        self, image_path: str, progress: ProgressCallback | None = None
    ) -> str:
        if not self._api_key:
            raise ValueError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install 'superstore[ocr]'"
            ) from None

        if progress is not None:
            progress(0.0)

        data = Path(image_path).read_bytes()
        media_type = mimetypes.guess_type(image_path)[0] or "image/jpeg"
        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": media_type,
                    "data": base64.standard_b64encode(data).decode(),
                },
            },
            {"type": "text", "text": _PROMPT},
        ]

        client = anthropic.AsyncAnthropic(api_key=self._api_key)
        response = await client.messages.create(
            model=self._model,
            max_tokens=4096,
            messages=[{"role": "user", "content": content}],
        )

        if progress is not None:
            progress(1.0)

        return _strip_fences(response.content[0].text)


def _strip_fences(text: str) -> str:
    """Remove markdown code fences the model sometimes wraps text in."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned
