"""Image cleanup before local OCR."""

from __future__ import annotations

from pathlib import Path

_MIN_LONG_SIDE = 1200
_TARGET_LONG_SIDE = 1600


def prepare_image(image_path: str | Path):
    """Load a sheet photo and return a binarized grayscale array for OCR.

    Small photos are upscaled (at most 2x), then denoised and thresholded
    with Otsu so pen strokes stand out from the paper.

    Raises:
        ImportError: If opencv-python is not installed.
        FileNotFoundError: If the image does not exist.
        ValueError: If the file cannot be decoded as an image.
    """
    try:
        import cv2
    except ImportError:
        raise ImportError(
            "opencv-python is required: pip install 'superstore[ocr]'"
        ) from None

    path = Path(image_path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise ValueError(f"Failed to read image: {path}")

    gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)

    h, w = gray.shape[:2]
    long_side = max(h, w)
    if long_side < _MIN_LONG_SIDE:
        scale = min(_TARGET_LONG_SIDE / long_side, 2.0)
        gray = cv2.resize(
            gray,
            (int(w * scale), int(h * scale)),
            interpolation=cv2.INTER_CUBIC,
        )

    gray = cv2.bilateralFilter(gray, 9, 75, 75)
    _, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
    return binary
