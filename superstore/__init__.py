"""Waste tracking, order suggestions and sheet OCR for Keith's Superstore."""

from .analytics import (
    OrderSuggestion,
    WeeklySalesData,
    calculate_weekly_sales,
    generate_all_order_suggestions,
    generate_order_suggestion,
)
from .catalog import DEFAULT_CATALOG, Catalog
from .config import (
    AnalyticsConfig,
    GDriveConfig,
    OCRConfig,
    PrinterConfig,
    ReportConfig,
    SuperstoreConfig,
    load_config,
)
from .models import Employee, InventoryItem, ProductionEntry, ProductionItem, WasteEntry
from .ocr import OCRBackend, OCRResult, create_backend, process_ocr_text, validate_ocr_result
from .performance import EmployeePerformance, calculate_performance
from .report import format_order_report

__all__ = [
    "InventoryItem",
    "WasteEntry",
    "ProductionEntry",
    "ProductionItem",
    "Employee",
    "Catalog",
    "DEFAULT_CATALOG",
    "WeeklySalesData",
    "OrderSuggestion",
    "calculate_weekly_sales",
    "generate_order_suggestion",
    "generate_all_order_suggestions",
    "format_order_report",
    "EmployeePerformance",
    "calculate_performance",
    "OCRBackend",
    "OCRResult",
    "create_backend",
    "process_ocr_text",
    "validate_ocr_result",
    "SuperstoreConfig",
    "OCRConfig",
    "AnalyticsConfig",
    "ReportConfig",
    "PrinterConfig",
    "GDriveConfig",
    "load_config",
]
