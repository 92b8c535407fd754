"""Scheduled weekly report and week rollover jobs."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


class ReportScheduler:
    """Runs the weekly order report and the week rollover on cron schedules.

    Uses APScheduler's AsyncIOScheduler; call ``start()`` from inside a
    running event loop.
    """

    def __init__(self, config) -> None:
        """Initialize scheduler with a SuperstoreConfig.

        Raises:
            ImportError: If apscheduler is not installed.
        """
        try:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler
            from apscheduler.triggers.cron import CronTrigger
        except ImportError:
            raise ImportError("apscheduler is required: pip install apscheduler")

        self._config = config
        self._scheduler = AsyncIOScheduler()
        self._CronTrigger = CronTrigger
        self._running = False

    def setup_jobs(self) -> None:
        """Register both jobs from the [schedule] config section."""
        sched = self._config.schedule

        self._scheduler.add_job(
            self._job_weekly_order_report,
            trigger=self._parse_cron(sched.report_schedule),
            id="weekly_order_report",
            name="Weekly order report",
            replace_existing=True,
        )
        logger.info("Registered weekly_order_report: %s", sched.report_schedule)

        self._scheduler.add_job(
            self._job_week_rollover,
            trigger=self._parse_cron(sched.rollover_schedule),
            id="week_rollover",
            name="Week rollover",
            replace_existing=True,
        )
        logger.info("Registered week_rollover: %s", sched.rollover_schedule)

    def start(self) -> None:
        self.setup_jobs()
        self._scheduler.start()
        self._running = True
        logger.info("Scheduler started")

    def stop(self) -> None:
        if self._running:
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Scheduler stopped")

    @property
    def running(self) -> bool:
        return self._running

    def get_jobs(self) -> list[dict]:
        """Return id, name and next run time of each scheduled job."""
        jobs = []
        for job in self._scheduler.get_jobs():
            # Unset until the scheduler has started
            next_run = getattr(job, "next_run_time", None)
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run": str(next_run) if next_run else None,
            })
        return jobs

    def _parse_cron(self, expr: str):
        """Parse a five-field cron expression into a CronTrigger."""
        parts = expr.split()
        if len(parts) == 5:
            return self._CronTrigger(
                minute=parts[0],
                hour=parts[1],
                day=parts[2],
                month=parts[3],
                day_of_week=parts[4],
            )
        raise ValueError(f"Invalid cron expression: {expr}")

    async def _job_weekly_order_report(self) -> None:
        """Write the text and PDF order reports, then print and upload them."""
        logger.info("Running weekly order report")

        try:
            from .pdf import generate_pdf
            from .report import (
                collect_order_suggestions,
                format_order_report,
                write_order_report,
            )

            now = datetime.now()
            rep = self._config.report
            suggestions = collect_order_suggestions(self._config, now=now)

            text = format_order_report(
                suggestions, generated_at=now, store_name=rep.store_name
            )
            text_path = write_order_report(text, rep.output_dir, generated_at=now)
            pdf_path = generate_pdf(
                suggestions,
                text_path.with_suffix(".pdf"),
                generated_at=now,
                store_name=rep.store_name,
            )
            logger.info("Order report saved: %s", pdf_path)

            self._distribute(pdf_path)
        except Exception:
            logger.exception("Weekly order report job failed")

    def _distribute(self, pdf_path: Path) -> None:
        if self._config.printer.enabled:
            from .printer import Printer

            try:
                Printer.print_file(
                    pdf_path, printer_name=self._config.printer.printer_name or None
                )
            except (RuntimeError, FileNotFoundError):
                logger.exception("Printing the order report failed")

        if self._config.gdrive.enabled:
            from .gdrive import GoogleDriveUploader

            try:
                uploader = GoogleDriveUploader(
                    credentials_path=self._config.gdrive.credentials_path,
                    token_path=self._config.gdrive.token_path,
                    folder_id=self._config.gdrive.folder_id,
                )
                file_id = uploader.upload(pdf_path)
                logger.info("Uploaded order report to Google Drive: %s", file_id)
            except Exception:
                logger.exception("Uploading the order report failed")

    async def _job_week_rollover(self) -> None:
        """Close the week so next week's trends compare against this one."""
        logger.info("Running week rollover")

        try:
            from .db import InventoryDB, WasteLogDB

            db_path = Path(self._config.storage.path).expanduser()
            waste_db = WasteLogDB(db_path)
            try:
                waste = waste_db.get_entries()
            finally:
                waste_db.close()

            inventory_db = InventoryDB(db_path)
            try:
                items = inventory_db.roll_week(
                    waste, window_days=self._config.analytics.waste_window_days
                )
            finally:
                inventory_db.close()
            logger.info("Week rolled over for %d items", len(items))
        except Exception:
            logger.exception("Week rollover job failed")
