"""TOML configuration loader."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .catalog import DEFAULT_EMPLOYEES, DEFAULT_KNOWN_ITEMS, Catalog

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

_DEFAULT_DB_PATH = "~/.config/superstore/store.db"
_DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-5-20250929"


@dataclass
class StorageConfig:
    path: str = _DEFAULT_DB_PATH


@dataclass
class ClaudeOCRConfig:
    api_key: str = ""
    model: str = _DEFAULT_CLAUDE_MODEL


@dataclass
class EasyOCRConfig:
    languages: list[str] = field(default_factory=lambda: ["en"])
    gpu: bool = False


@dataclass
class OCRConfig:
    backend: str = "claude"
    review_confidence: float = 0.7
    claude: ClaudeOCRConfig = field(default_factory=ClaudeOCRConfig)
    easyocr: EasyOCRConfig = field(default_factory=EasyOCRConfig)


@dataclass
class CatalogConfig:
    items: list[str] = field(default_factory=lambda: list(DEFAULT_KNOWN_ITEMS))
    employees: list[str] = field(default_factory=lambda: list(DEFAULT_EMPLOYEES))

    def to_catalog(self) -> Catalog:
        return Catalog(items=tuple(self.items), employees=tuple(self.employees))


@dataclass
class AnalyticsConfig:
    waste_window_days: int = 7
    performance_par_target: int = 150


@dataclass
class ReportConfig:
    output_dir: str = "~/.config/superstore/reports"
    store_name: str = "KEITH'S SUPERSTORE"


@dataclass
class PrinterConfig:
    enabled: bool = False
    printer_name: str = ""


@dataclass
class GDriveConfig:
    enabled: bool = False
    credentials_path: str = "~/.config/superstore/gdrive_credentials.json"
    token_path: str = "~/.config/superstore/gdrive_token.json"
    folder_id: str = ""


@dataclass
class ScheduleConfig:
    enabled: bool = False
    report_schedule: str = "0 6 * * 1"  # Monday 06:00
    rollover_schedule: str = "0 0 * * 1"  # Monday midnight


@dataclass
class SuperstoreConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    ocr: OCRConfig = field(default_factory=OCRConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    printer: PrinterConfig = field(default_factory=PrinterConfig)
    gdrive: GDriveConfig = field(default_factory=GDriveConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)


def load_config(path: str | Path | None = None) -> SuperstoreConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The Anthropic API key can be supplied via ANTHROPIC_API_KEY.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    sto = raw.get("storage", {})
    ocr = raw.get("ocr", {})
    cat = raw.get("catalog", {})
    ana = raw.get("analytics", {})
    rep = raw.get("report", {})
    prn = raw.get("printer", {})
    gdr = raw.get("gdrive", {})
    sch = raw.get("schedule", {})

    claude_cfg = ocr.get("claude", {})
    easyocr_cfg = ocr.get("easyocr", {})

    # Config file wins over the environment
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )

    return SuperstoreConfig(
        storage=StorageConfig(
            path=sto.get("path", _DEFAULT_DB_PATH),
        ),
        ocr=OCRConfig(
            backend=ocr.get("backend", "claude"),
            review_confidence=ocr.get("review_confidence", 0.7),
            claude=ClaudeOCRConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", _DEFAULT_CLAUDE_MODEL),
            ),
            easyocr=EasyOCRConfig(
                languages=easyocr_cfg.get("languages", ["en"]),
                gpu=easyocr_cfg.get("gpu", False),
            ),
        ),
        catalog=CatalogConfig(
            items=cat.get("items", list(DEFAULT_KNOWN_ITEMS)),
            employees=cat.get("employees", list(DEFAULT_EMPLOYEES)),
        ),
        analytics=AnalyticsConfig(
            waste_window_days=ana.get("waste_window_days", 7),
            performance_par_target=ana.get("performance_par_target", 150),
        ),
        report=ReportConfig(
            output_dir=rep.get("output_dir", "~/.config/superstore/reports"),
            store_name=rep.get("store_name", "KEITH'S SUPERSTORE"),
        ),
        printer=PrinterConfig(
            enabled=prn.get("enabled", False),
            printer_name=prn.get("printer_name", ""),
        ),
        gdrive=GDriveConfig(
            enabled=gdr.get("enabled", False),
            credentials_path=gdr.get(
                "credentials_path",
                "~/.config/superstore/gdrive_credentials.json",
            ),
            token_path=gdr.get(
                "token_path",
                "~/.config/superstore/gdrive_token.json",
            ),
            folder_id=gdr.get("folder_id", ""),
        ),
        schedule=ScheduleConfig(
            enabled=sch.get("enabled", False),
            report_schedule=sch.get("report_schedule", "0 6 * * 1"),
            rollover_schedule=sch.get("rollover_schedule", "0 0 * * 1"),
        ),
    )
