"""Send order reports to a CUPS printer."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_CUPS_HINT = (
    "Check that CUPS is installed:\n"
    "  Ubuntu/Debian: sudo apt install cups\n"
    "  Fedora/RHEL:   sudo dnf install cups"
)


@dataclass
class PrinterInfo:
    name: str
    is_default: bool


def _run(cmd: list[str], timeout: int) -> subprocess.CompletedProcess | None:
    try:
        return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.warning("%s failed: %s", cmd[0], e)
        return None


class Printer:
    """Print report files with lpr and discover queues with lpstat."""

    @staticmethod
    def default_printer() -> str:
        """Return the system default queue name, or "" if none is set."""
        result = _run(["lpstat", "-d"], timeout=10)
        # "system default destination: Office_Laser"
        if result is not None and result.returncode == 0 and ":" in result.stdout:
            return result.stdout.strip().split(":")[-1].strip()
        return ""

    @classmethod
    def list_printers(cls) -> list[PrinterInfo]:
        """List configured print queues.

        Raises:
            RuntimeError: If lpstat is not available.
        """
        if shutil.which("lpstat") is None:
            raise RuntimeError(f"lpstat command not found. {_CUPS_HINT}")

        default_name = cls.default_printer()
        result = _run(["lpstat", "-p"], timeout=10)
        if result is None or result.returncode != 0:
            return []

        printers: list[PrinterInfo] = []
        for line in result.stdout.splitlines():
            # "printer Office_Laser is idle.  enabled since ..."
            parts = line.split()
            if len(parts) >= 2 and parts[0] == "printer":
                printers.append(
                    PrinterInfo(name=parts[1], is_default=parts[1] == default_name)
                )
        return printers

    @staticmethod
    def print_file(
        file_path: str | Path,
        printer_name: str | None = None,
        copies: int = 1,
    ) -> None:
        """Queue a file for printing.

        Args:
            file_path: Report file (PDF or text).
            printer_name: Target queue. Uses the system default if None.
            copies: Number of copies.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            RuntimeError: If lpr is not available or the job is rejected.
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if shutil.which("lpr") is None:
            raise RuntimeError(f"lpr command not found. {_CUPS_HINT}")

        cmd = ["lpr"]
        if printer_name:
            cmd.extend(["-P", printer_name])
        if copies > 1:
            cmd.extend(["-#", str(copies)])
        cmd.append(str(file_path))

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=30)
        except subprocess.TimeoutExpired:
            raise RuntimeError("Print job timed out.")
        if result.returncode != 0:
            raise RuntimeError(f"Printing failed: {result.stderr.strip()}")
        logger.info("Sent %s to %s", file_path.name, printer_name or "default printer")
