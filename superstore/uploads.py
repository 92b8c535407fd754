"""Bulk item imports from text/CSV files and conversion of reviewed OCR sheets."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

from .catalog import DEFAULT_CATALOG, Catalog
from .models import ProductionEntry, ProductionItem, WasteEntry, new_id
from .ocr.processor import OCRResult, validate_ocr_result

if TYPE_CHECKING:
    from .db.inventory import InventoryDB

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".txt", ".csv", ".tsv")

_HEADER_KEYWORDS = (
    "item", "name", "product", "description", "sku", "id",
    "code", "category", "#", "no.", "number",
)

_LEADING_NUMBERING_RE = re.compile(r"^[0-9.\-)\s]+")
_QUOTES_RE = re.compile(r"[\"']")
_WORD_START_RE = re.compile(r"\b\w")


@dataclass
class UploadResult:
    added: list[str] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.added) + len(self.duplicates) + len(self.errors)


def is_header_row(text: str) -> bool:
    lower = text.lower()
    return any(lower == k or lower.startswith(k + " ") for k in _HEADER_KEYWORDS)


def clean_item_name(name: str) -> str:
    """Strip list numbering and quotes, then capitalize each word."""
    name = _LEADING_NUMBERING_RE.sub("", name)
    name = _QUOTES_RE.sub("", name).strip()
    return _WORD_START_RE.sub(lambda m: m.group().upper(), name)


def parse_file_content(content: str) -> list[str]:
    """Extract item names from an uploaded list.

    One item per line; for comma- or tab-separated rows the first column
    is the name. Header-looking rows are skipped.
    """
    names: list[str] = []
    for line in re.split(r"[\n\r]+", content):
        if not line.strip():
            continue
        if "," in line:
            parts = [p.strip() for p in line.split(",") if p.strip()]
        elif "\t" in line:
            parts = [p.strip() for p in line.split("\t") if p.strip()]
        else:
            parts = [line.strip()]
        first = parts[0] if parts else ""
        if first and not is_header_row(first):
            names.append(clean_item_name(first))
    return [n for n in names if 0 < len(n) < 100]


def read_upload(path: str | Path) -> str:
    """Read an uploaded item list from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the extension is not a supported text format.
    """
    p = Path(path)
    if p.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise ValueError(
            f"Unsupported file type {p.suffix or '(none)'}: "
            f"use one of {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    if not p.exists():
        raise FileNotFoundError(f"Upload not found: {p}")
    return p.read_text(encoding="utf-8", errors="replace")


def import_item_names(
    names: list[str],
    inventory_db: InventoryDB,
    catalog: Catalog = DEFAULT_CATALOG,
    source: str = "",
) -> UploadResult:
    """Add new names to the inventory, skipping ones already present.

    New items start at par 0 with no stock so a manager can set their par
    later.
    """
    result = UploadResult()
    if not names:
        result.errors.append(f"No valid items found in {source or 'upload'}")
        return result

    for name in names:
        if inventory_db.find_item(name) is not None:
            result.duplicates.append(name)
            continue
        try:
            inventory_db.add_item(name, catalog.categorize(name), par_level=0)
        except ValueError as e:
            result.errors.append(f"{name}: {e}")
            continue
        result.added.append(name)

    logger.info(
        "Imported %s: %d added, %d duplicates, %d errors",
        source or "upload",
        len(result.added),
        len(result.duplicates),
        len(result.errors),
    )
    return result


def _require_valid(result: OCRResult, employee: str | None) -> str:
    """Validate with any employee override applied; return the employee name."""
    if employee:
        result = replace(result, employee_name=employee)
    report = validate_ocr_result(result)
    if not report.is_valid:
        raise ValueError("; ".join(report.errors))
    return result.employee_name or ""


def ocr_result_to_waste_entries(
    result: OCRResult,
    catalog: Catalog = DEFAULT_CATALOG,
    employee: str | None = None,
) -> list[WasteEntry]:
    """Turn a reviewed waste sheet into waste log entries.

    ``employee`` overrides the name read from the sheet.

    Raises:
        ValueError: If the result has no items or no employee name.
    """
    who = _require_valid(result, employee)
    return [
        WasteEntry(
            id=new_id("waste"),
            item=item.name,
            quantity=item.quantity,
            timestamp=result.date,
            category=catalog.categorize(item.name),
            employee=who,
        )
        for item in result.items
    ]


def ocr_result_to_production_entry(
    result: OCRResult,
    catalog: Catalog = DEFAULT_CATALOG,
    shift: str | None = None,
    employee: str | None = None,
) -> ProductionEntry:
    """Turn a reviewed production sheet into a production entry.

    Raises:
        ValueError: If the result has no items or no employee name.
    """
    who = _require_valid(result, employee)
    return ProductionEntry(
        id=new_id("prod"),
        employee_name=who,
        shift=shift or result.shift or "Morning",
        date=result.date,
        items=[
            ProductionItem(
                name=item.name,
                quantity=item.quantity,
                category=catalog.section_for(item.name),
            )
            for item in result.items
        ],
    )
