"""Heuristic parsing of OCR text from photographed waste/production sheets."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime

from ..catalog import DEFAULT_CATALOG, DEFAULT_EMPLOYEES, DEFAULT_KNOWN_ITEMS, Catalog

logger = logging.getLogger(__name__)

MIN_MATCH_SCORE = 0.5
REVIEW_CONFIDENCE = 0.7
MIN_QUANTITY = 1
MAX_QUANTITY = 500

_PRODUCTION_KEYWORDS = ("production", "cooked", "prepared", "qty 1", "qty 2")
_WASTE_KEYWORDS = ("waste", "discard", "throw", "time discarded")

_SHIFT_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Morning", ("morning", "6am", "6:00")),
    ("Afternoon", ("afternoon", "2pm", "14:")),
    ("Night", ("night", "10pm", "22:")),
)

_HEADER_RE = re.compile(
    r"^(item|name|qty|quantity|shift|total|waste|production)", re.IGNORECASE
)

# "Hot Dog....25", "Hot Dog 25", "Hot Dog: 25" / "Hot Dog - 25"
_LINE_PATTERNS = (
    re.compile(r"^([A-Za-z\s'&]+?)[\s.]{2,}([0-9]{1,3})$"),
    re.compile(r"^([A-Za-z\s'&]+?)\s+([0-9]{1,3})$"),
    re.compile(r"^([A-Za-z\s'&]+?)[\s:\-]+([0-9]{1,3})$"),
)

# Common OCR misreads inside words
_CHAR_FIXES = (
    (re.compile(r"[|\\]"), "I"),
    (re.compile(r"[1!]"), "i"),
    (re.compile(r"0"), "O"),
    (re.compile(r"5"), "S"),
)


@dataclass
class ExtractedItem:
    name: str  # catalog name the line resolved to
    quantity: int
    confidence: float  # 0.0 to 1.0


@dataclass
class OCRResult:
    form_type: str  # "production" | "waste" | "unknown"
    employee_name: str | None
    shift: str | None  # "Morning" | "Afternoon" | "Night"
    date: datetime
    items: list[ExtractedItem] = field(default_factory=list)
    raw_text: str = ""

    def to_dict(self) -> dict:
        return {
            "form_type": self.form_type,
            "employee_name": self.employee_name,
            "shift": self.shift,
            "date": self.date.isoformat(),
            "items": [
                {"name": i.name, "quantity": i.quantity, "confidence": i.confidence}
                for i in self.items
            ],
            "raw_text": self.raw_text,
        }

    def display(self, review_confidence: float = REVIEW_CONFIDENCE) -> str:
        """Format the extraction for review in a terminal.

        Items scoring below ``review_confidence`` are flagged.
        """
        lines: list[str] = [
            f"Form Type: {self.form_type.upper()}",
            f"Employee: {self.employee_name or 'Unknown'}",
            f"Shift: {self.shift or 'Unknown'}",
            "",
            f"Items Found ({len(self.items)}):",
            "-" * 40,
        ]
        for item in self.items:
            flag = " ⚠️" if item.confidence < review_confidence else ""
            lines.append(f"{item.name:<25} {item.quantity:>3}{flag}")
        return "\n".join(lines)


@dataclass
class ValidationReport:
    is_valid: bool
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def detect_form_type(text: str) -> str:
    """Classify a sheet as "production", "waste" or "unknown".

    Production keywords win when both kinds appear.
    """
    lower = text.lower()
    if any(k in lower for k in _PRODUCTION_KEYWORDS):
        return "production"
    if any(k in lower for k in _WASTE_KEYWORDS):
        return "waste"
    return "unknown"


def extract_employee(
    text: str, roster: tuple[str, ...] | list[str] = DEFAULT_EMPLOYEES
) -> str | None:
    """Find a roster member named in the text.

    Each roster entry is tried by full name, then first name, then last
    name; the first entry matching at any tier is returned.
    """
    for name in roster:
        if name in text:
            return name
        parts = name.split(" ")
        if parts[0] and parts[0] in text:
            return name
        if len(parts) > 1 and parts[1] and parts[1] in text:
            return name
    return None


def extract_shift(text: str) -> str | None:
    lower = text.lower()
    for shift, markers in _SHIFT_MARKERS:
        if any(m in lower for m in markers):
            return shift
    return None


def clean_ocr_text(text: str) -> str:
    """Undo common character misreads and collapse whitespace."""
    for pattern, replacement in _CHAR_FIXES:
        text = pattern.sub(replacement, text)
    return re.sub(r"\s+", " ", text).strip()


def string_similarity(a: str, b: str) -> float:
    """Score how closely two item names match, from 0.0 to 1.0.

    Exact (case-insensitive) match scores 1.0 and containment either way
    scores 0.8. Otherwise the score is the share of words in ``a`` that
    equal or overlap a word in ``b``, over the larger word count.
    """
    s1 = a.lower()
    s2 = b.lower()

    if s1 == s2:
        return 1.0
    if s1 in s2 or s2 in s1:
        return 0.8

    words1 = s1.split(" ")
    words2 = s2.split(" ")

    matches = 0
    for w1 in words1:
        for w2 in words2:
            if w1 == w2 or w2 in w1 or w1 in w2:
                matches += 1
                break

    return matches / max(len(words1), len(words2))


def find_best_item_match(
    text: str, items: tuple[str, ...] | list[str] = DEFAULT_KNOWN_ITEMS
) -> ExtractedItem | None:
    """Resolve OCR text to the best scoring catalog name.

    Scores must exceed 0.5. On equal scores the earlier catalog entry wins.
    Returns an ExtractedItem with quantity 0; callers fill it in.
    """
    cleaned = clean_ocr_text(text)

    best_name: str | None = None
    best_score = 0.0
    for known in items:
        score = string_similarity(cleaned, known)
        if score > best_score and score > MIN_MATCH_SCORE:
            best_score = score
            best_name = known

    if best_name is None:
        return None
    return ExtractedItem(name=best_name, quantity=0, confidence=best_score)


def _split_line(line: str) -> tuple[str, int] | None:
    for pattern in _LINE_PATTERNS:
        m = pattern.match(line)
        if m:
            return m.group(1).strip(), int(m.group(2))
    return None


def extract_item_quantities(
    text: str, items: tuple[str, ...] | list[str] = DEFAULT_KNOWN_ITEMS
) -> list[ExtractedItem]:
    """Pull (item, quantity) pairs out of sheet text, one per line.

    Lines that don't parse, fall outside the quantity range, or don't
    resolve to a catalog name are skipped. A catalog name is reported once;
    later lines resolving to the same name are dropped.
    """
    results: list[ExtractedItem] = []
    seen: set[str] = set()

    for line in text.split("\n"):
        trimmed = line.strip()
        if len(trimmed) < 3 or _HEADER_RE.match(trimmed):
            continue

        parsed = _split_line(trimmed)
        if parsed is None:
            continue
        item_text, quantity = parsed

        if not MIN_QUANTITY <= quantity <= MAX_QUANTITY:
            continue

        match = find_best_item_match(item_text, items)
        if match is None:
            logger.debug("No catalog match for OCR line %r", trimmed)
            continue
        if match.name in seen:
            continue

        seen.add(match.name)
        results.append(
            ExtractedItem(
                name=match.name, quantity=quantity, confidence=match.confidence
            )
        )

    return results


def process_ocr_text(
    text: str,
    catalog: Catalog = DEFAULT_CATALOG,
    now: datetime | None = None,
) -> OCRResult:
    """Run all extractors over recognized sheet text."""
    result = OCRResult(
        form_type=detect_form_type(text),
        employee_name=extract_employee(text, catalog.employees),
        shift=extract_shift(text),
        date=now or datetime.now(),
        items=extract_item_quantities(text, catalog.items),
        raw_text=text,
    )
    logger.info(
        "OCR text parsed: form=%s employee=%s shift=%s items=%d",
        result.form_type,
        result.employee_name,
        result.shift,
        len(result.items),
    )
    return result


def validate_ocr_result(
    result: OCRResult, review_confidence: float = REVIEW_CONFIDENCE
) -> ValidationReport:
    """Check an extraction before it is saved.

    Errors block saving; warnings ask for human review.
    """
    warnings: list[str] = []
    errors: list[str] = []

    if not result.employee_name:
        errors.append("Could not detect employee name")

    if not result.shift:
        warnings.append("Could not detect shift - you'll need to select it")

    if result.form_type == "unknown":
        warnings.append("Could not determine form type - assuming waste sheet")

    if not result.items:
        errors.append("No items found in the image")

    low_confidence = [i for i in result.items if i.confidence < review_confidence]
    if low_confidence:
        warnings.append(f"{len(low_confidence)} item(s) may need verification")

    return ValidationReport(is_valid=not errors, warnings=warnings, errors=errors)
