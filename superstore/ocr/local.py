"""Local EasyOCR backend for sheet photos."""

from __future__ import annotations

import asyncio
import logging

from . import OCRBackend, ProgressCallback
from .preprocess import prepare_image

logger = logging.getLogger(__name__)


class EasyOCRBackend(OCRBackend):
    """Recognize sheet text on-device with EasyOCR.

    The reader model is loaded on first use and reused afterwards.
    """

    def __init__(self, languages: list[str] | None = None, gpu: bool = False) -> None:
        self._languages = languages or ["en"]
        self._gpu = gpu
        self._reader = None

    def _get_reader(self):
        if self._reader is None:
            try:
                import easyocr
            except ImportError:
                raise ImportError(
                    "easyocr is required: pip install 'superstore[ocr]'"
                ) from None
            self._reader = easyocr.Reader(self._languages, gpu=self._gpu)
        return self._reader

    async def recognize_text(
        self, image_path: str, progress: ProgressCallback | None = None
    ) -> str:
        if progress is not None:
            progress(0.0)

        image = await asyncio.to_thread(prepare_image, image_path)
        if progress is not None:
            progress(0.3)

        reader = self._get_reader()
        detections = await asyncio.to_thread(reader.readtext, image)
        if progress is not None:
            progress(1.0)

        logger.debug("EasyOCR returned %d text boxes for %s", len(detections), image_path)
        return "\n".join(group_into_lines(detections))


def group_into_lines(detections: list) -> list[str]:
    """Join EasyOCR boxes into text lines.

    EasyOCR reports each word group as a separate box, so an item name and
    its quantity come back apart. Boxes whose vertical centers lie within
    half a box height of a line's center are joined left to right.

    Args:
        detections: ``(bbox, text, confidence)`` tuples, where bbox is four
            ``[x, y]`` corner points.
    """
    boxes: list[tuple[float, float, float, str]] = []
    for bbox, text, _conf in detections:
        xs = [p[0] for p in bbox]
        ys = [p[1] for p in bbox]
        top, bottom = min(ys), max(ys)
        boxes.append(((top + bottom) / 2, bottom - top, min(xs), text))

    boxes.sort(key=lambda b: b[0])

    rows: list[list[tuple[float, float, float, str]]] = []
    for box in boxes:
        if rows:
            row = rows[-1]
            row_center = sum(b[0] for b in row) / len(row)
            row_height = max(b[1] for b in row)
            if abs(box[0] - row_center) <= max(row_height, box[1]) / 2:
                row.append(box)
                continue
        rows.append([box])

    lines: list[str] = []
    for row in rows:
        row.sort(key=lambda b: b[2])
        line = " ".join(b[3].strip() for b in row if b[3].strip())
        if line:
            lines.append(line)
    return lines
