"""CLI entry point for the superstore tools."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import tempfile
from dataclasses import asdict
from datetime import datetime, timedelta
from pathlib import Path

from .catalog import INVENTORY_CATEGORIES
from .config import load_config

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="superstore",
        description="Keith's Superstore - waste tracking, order suggestions and sheet OCR",
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="Path to config file (TOML)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # suggest
    suggest_parser = sub.add_parser("suggest", help="Show this week's order suggestions")
    suggest_parser.add_argument("--json", action="store_true", help="Output as JSON")
    suggest_parser.add_argument(
        "--save", action="store_true", help="Save the text report to the report directory"
    )
    suggest_parser.add_argument(
        "--pdf", type=str, default=None, metavar="FILE", help="Write a PDF report"
    )
    suggest_parser.add_argument(
        "--print", action="store_true", dest="do_print", help="Print on the default printer"
    )
    suggest_parser.add_argument("--printer", type=str, default=None, help="Print on this printer")
    suggest_parser.add_argument("--drive", action="store_true", help="Upload to Google Drive")
    suggest_parser.add_argument(
        "--drive-folder", type=str, default=None, help="Google Drive folder ID"
    )

    # ocr
    ocr_parser = sub.add_parser("ocr", help="Read a photographed waste or production sheet")
    ocr_parser.add_argument("images", nargs="*", help="Sheet image files")
    ocr_parser.add_argument(
        "--text", type=str, default=None, metavar="FILE",
        help="Parse already-recognized text instead of images",
    )
    ocr_parser.add_argument("--json", action="store_true", help="Output as JSON")
    ocr_parser.add_argument(
        "--save", action="store_true", help="Save the sheet to the waste or production log"
    )
    ocr_parser.add_argument("--employee", type=str, default=None, help="Override employee name")
    ocr_parser.add_argument(
        "--shift", choices=["Morning", "Afternoon", "Night"], default=None,
        help="Override shift",
    )

    # import
    import_parser = sub.add_parser("import", help="Add items from text/CSV lists")
    import_parser.add_argument("files", nargs="+", help=".txt, .csv or .tsv files")

    # inventory
    inv_parser = sub.add_parser("inventory", help="List or edit inventory items")
    inv_parser.add_argument("--add", type=str, default=None, metavar="NAME", help="Add an item")
    inv_parser.add_argument(
        "--category", choices=INVENTORY_CATEGORIES, default=None,
        help="Category for --add (guessed from the name if omitted)",
    )
    inv_parser.add_argument("--par", type=int, default=0, help="Par level for --add")
    inv_parser.add_argument("--unit", type=str, default="pcs", help="Unit for --add")
    inv_parser.add_argument(
        "--remove", type=str, default=None, metavar="NAME", help="Remove an item"
    )

    # par
    par_parser = sub.add_parser("par", help="Set an item's par level")
    par_parser.add_argument("item", help="Item name")
    par_parser.add_argument("value", type=int, help="New par level")

    # count
    count_parser = sub.add_parser("count", help="Record an item's stock count")
    count_parser.add_argument("item", help="Item name")
    count_parser.add_argument("value", type=int, help="Units on hand")

    # waste
    waste_parser = sub.add_parser("waste", help="Log or list waste")
    waste_parser.add_argument("item", nargs="?", help="Item name")
    waste_parser.add_argument("quantity", nargs="?", type=int, help="Units discarded")
    waste_parser.add_argument("--employee", type=str, default="", help="Who logged it")
    waste_parser.add_argument("--unit", type=str, default="pcs", help="Unit")

    # performance
    perf_parser = sub.add_parser("performance", help="Show employee performance")
    perf_parser.add_argument("--employee", type=str, default=None, help="One employee only")
    perf_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # rollover
    sub.add_parser("rollover", help="Close the week and start a new one")

    # printers
    sub.add_parser("printers", help="List available printers")

    # schedule
    sub.add_parser("schedule", help="Run the weekly report and rollover jobs")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    from dotenv import load_dotenv

    load_dotenv()
    config = load_config(args.config)

    try:
        match args.command:
            case "suggest":
                _cmd_suggest(config, args)
            case "ocr":
                asyncio.run(_cmd_ocr(config, args))
            case "import":
                _cmd_import(config, args)
            case "inventory":
                _cmd_inventory(config, args)
            case "par":
                _cmd_par(config, args)
            case "count":
                _cmd_count(config, args)
            case "waste":
                _cmd_waste(config, args)
            case "performance":
                _cmd_performance(config, args)
            case "rollover":
                _cmd_rollover(config)
            case "printers":
                _cmd_printers()
            case "schedule":
                try:
                    asyncio.run(_cmd_schedule(config))
                except KeyboardInterrupt:
                    print("Scheduler stopped.")
    except (ValueError, ImportError, FileNotFoundError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _db_path(config) -> Path:
    return Path(config.storage.path).expanduser()


def _require_item(db, name: str):
    item = db.find_item(name)
    if item is None:
        raise ValueError(f"Unknown inventory item: {name}")
    return item


def _cmd_suggest(config, args) -> None:
    from .report import collect_order_suggestions, format_order_report, write_order_report

    now = datetime.now()
    suggestions = collect_order_suggestions(config, now=now)

    if args.json:
        print(json.dumps([s.to_dict() for s in suggestions], ensure_ascii=False, indent=2))
    else:
        text = format_order_report(
            suggestions, generated_at=now, store_name=config.report.store_name
        )
        print(text)
        if args.save:
            path = write_order_report(text, config.report.output_dir, generated_at=now)
            print(f"Report saved: {path}")

    # PDF / Print / Drive pipeline
    if not (args.pdf or args.do_print or args.printer or args.drive):
        return

    if args.pdf:
        pdf_path = Path(args.pdf)
    else:
        with tempfile.NamedTemporaryFile(
            suffix=".pdf", prefix="order_report_", delete=False
        ) as tmp:
            pdf_path = Path(tmp.name)

    from .pdf import generate_pdf

    try:
        generate_pdf(
            suggestions, pdf_path, generated_at=now, store_name=config.report.store_name
        )
        print(f"PDF saved: {pdf_path}")

        if args.do_print or args.printer:
            from .printer import Printer

            try:
                Printer.print_file(pdf_path, printer_name=args.printer)
                print(f"Sent to {args.printer or 'default printer'}")
            except RuntimeError as e:
                print(f"Print error: {e}", file=sys.stderr)

        if args.drive:
            from .gdrive import GoogleDriveUploader

            try:
                uploader = GoogleDriveUploader(
                    credentials_path=config.gdrive.credentials_path,
                    token_path=config.gdrive.token_path,
                    folder_id=config.gdrive.folder_id,
                )
                folder_id = args.drive_folder or config.gdrive.folder_id or None
                file_id = uploader.upload(
                    pdf_path,
                    filename=f"Order Report {now:%Y-%m-%d}.pdf",
                    folder_id=folder_id,
                )
                print(f"Uploaded to Google Drive (File ID: {file_id})")
            except (ImportError, FileNotFoundError) as e:
                print(f"Google Drive error: {e}", file=sys.stderr)
    finally:
        # Temp PDF only lives for print/upload
        if not args.pdf and pdf_path.exists():
            pdf_path.unlink()


async def _cmd_ocr(config, args) -> None:
    from .ocr import create_backend, process_ocr_text, validate_ocr_result

    if args.text:
        texts = [Path(args.text).read_text(encoding="utf-8")]
    elif args.images:
        backend = create_backend(config)
        texts = []
        for image in args.images:
            print(f"Reading {image}...", file=sys.stderr)
            texts.append(
                await backend.recognize_text(
                    image,
                    progress=lambda p: logger.debug("OCR progress %.0f%%", p * 100),
                )
            )
    else:
        raise ValueError("Give sheet images or --text FILE")

    catalog = config.catalog.to_catalog()
    for text in texts:
        result = process_ocr_text(text, catalog=catalog)
        if args.employee:
            result.employee_name = args.employee
        if args.shift:
            result.shift = args.shift
        report = validate_ocr_result(result, config.ocr.review_confidence)

        if args.json:
            data = result.to_dict()
            data["validation"] = {
                "is_valid": report.is_valid,
                "warnings": report.warnings,
                "errors": report.errors,
            }
            print(json.dumps(data, ensure_ascii=False, indent=2))
        else:
            print(result.display(config.ocr.review_confidence))
            for w in report.warnings:
                print(f"Warning: {w}")
            for e in report.errors:
                print(f"Error: {e}")

        if args.save:
            _save_sheet(config, result, catalog)


def _save_sheet(config, result, catalog) -> None:
    from .uploads import ocr_result_to_production_entry, ocr_result_to_waste_entries

    if result.form_type == "production":
        from .db import ProductionLogDB

        entry = ocr_result_to_production_entry(result, catalog)
        db = ProductionLogDB(_db_path(config))
        try:
            db.add_entry(entry)
        finally:
            db.close()
        print(f"Saved production sheet: {len(entry.items)} items, {entry.total_cooked} cooked")
    else:
        from .db import WasteLogDB

        entries = ocr_result_to_waste_entries(result, catalog)
        db = WasteLogDB(_db_path(config))
        try:
            db.add_entries(entries)
        finally:
            db.close()
        print(f"Saved {len(entries)} waste entries")


def _cmd_import(config, args) -> None:
    from .db import InventoryDB
    from .uploads import import_item_names, parse_file_content, read_upload

    catalog = config.catalog.to_catalog()
    db = InventoryDB(_db_path(config))
    try:
        for file in args.files:
            names = parse_file_content(read_upload(file))
            result = import_item_names(names, db, catalog, source=Path(file).name)
            print(
                f"{Path(file).name}: {len(result.added)} added, "
                f"{len(result.duplicates)} duplicates, {len(result.errors)} errors"
            )
            for name in result.added:
                print(f"  + {name}")
            for err in result.errors:
                print(f"  ! {err}", file=sys.stderr)
    finally:
        db.close()


def _cmd_inventory(config, args) -> None:
    from .analytics import restock_quantity, stock_status
    from .db import InventoryDB

    catalog = config.catalog.to_catalog()
    db = InventoryDB(_db_path(config))
    try:
        if args.add:
            item = db.add_item(
                args.add,
                args.category or catalog.categorize(args.add),
                par_level=args.par,
                unit=args.unit,
            )
            print(f"Added {item.name} ({item.category}, par {item.par_level})")
            return
        if args.remove:
            item = _require_item(db, args.remove)
            db.delete_item(item.id)
            print(f"Removed {item.name}")
            return

        items = db.get_items()
    finally:
        db.close()

    print(f"{'Item':<25} {'Category':<10} {'Stock':>6} {'Par':>5} {'Need':>5}  Status")
    print("-" * 66)
    for item in items:
        print(
            f"{item.name:<25} {item.category:<10} {item.current_stock:>6} "
            f"{item.par_level:>5} {restock_quantity(item):>5}  {stock_status(item)}"
        )


def _cmd_par(config, args) -> None:
    from .db import InventoryDB

    db = InventoryDB(_db_path(config))
    try:
        item = db.set_par_level(_require_item(db, args.item).id, args.value)
    finally:
        db.close()
    print(f"{item.name}: par level {item.par_level}")


def _cmd_count(config, args) -> None:
    from .db import InventoryDB

    db = InventoryDB(_db_path(config))
    try:
        item = db.set_count(_require_item(db, args.item).id, args.value)
    finally:
        db.close()
    print(f"{item.name}: {item.current_stock} {item.unit} on hand")


def _cmd_waste(config, args) -> None:
    from .db import WasteLogDB

    db = WasteLogDB(_db_path(config))
    try:
        if args.item is None:
            entries = db.get_recent(config.analytics.waste_window_days)
            if not entries:
                print("No waste logged in the last week.")
                return
            for e in entries:
                who = f"  ({e.employee})" if e.employee else ""
                print(f"{e.timestamp:%Y-%m-%d %H:%M}  {e.item:<25} {e.quantity:>4} {e.unit}{who}")
            return

        if args.quantity is None:
            raise ValueError("Give a quantity to log waste")
        catalog = config.catalog.to_catalog()
        entry = db.add_entry(
            args.item,
            args.quantity,
            employee=args.employee,
            category=catalog.categorize(args.item),
            unit=args.unit,
        )
        print(f"Logged {entry.quantity} {entry.unit} of {entry.item} ({db.today_count()} today)")
    finally:
        db.close()


def _cmd_performance(config, args) -> None:
    from .db import ProductionLogDB, StaffDB, WasteLogDB
    from .performance import calculate_performance, format_performance_report

    db_path = _db_path(config)
    cutoff = datetime.now() - timedelta(days=config.analytics.waste_window_days)

    production_db = ProductionLogDB(db_path)
    waste_db = WasteLogDB(db_path)
    staff_db = StaffDB(db_path)
    try:
        production = [p for p in production_db.get_entries() if p.date >= cutoff]
        waste = waste_db.get_recent(config.analytics.waste_window_days)
        names = [args.employee] if args.employee else [
            e.name for e in staff_db.active_employees()
        ]
    finally:
        production_db.close()
        waste_db.close()
        staff_db.close()

    # Only employees with something recorded this week
    active = {p.employee_name for p in production} | {w.employee for w in waste}
    perfs = [
        calculate_performance(
            name, production, waste, par_target=config.analytics.performance_par_target
        )
        for name in names
        if name in active
    ]

    if args.json:
        print(json.dumps([asdict(p) for p in perfs], ensure_ascii=False, indent=2))
    else:
        print(format_performance_report(perfs))


def _cmd_rollover(config) -> None:
    from .db import InventoryDB, WasteLogDB

    waste_db = WasteLogDB(_db_path(config))
    try:
        waste = waste_db.get_entries()
    finally:
        waste_db.close()

    db = InventoryDB(_db_path(config))
    try:
        items = db.roll_week(waste, window_days=config.analytics.waste_window_days)
    finally:
        db.close()
    print(f"Week closed for {len(items)} items.")


def _cmd_printers() -> None:
    from .printer import Printer

    printers = Printer.list_printers()
    if not printers:
        print("No printers found.")
        return
    print(f"Available printers: {len(printers)}")
    for p in printers:
        default_mark = " (default)" if p.is_default else ""
        print(f"  {p.name}{default_mark}")


async def _cmd_schedule(config) -> None:
    from .scheduler import ReportScheduler

    scheduler = ReportScheduler(config)
    scheduler.start()
    for job in scheduler.get_jobs():
        print(f"  {job['id']}: next run {job['next_run']}")
    print("Scheduler running. Press Ctrl+C to stop.")
    try:
        await asyncio.Event().wait()
    finally:
        scheduler.stop()
