"""
Logging setup for the dashboard.

Records go to the console and to a CSV file rotated at midnight. Controller
log calls attach the repository slug or org login they concern, which becomes
the `slug` column of the CSV.
"""

import csv
import io
import logging
import os
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CSV_FIELDS = ['timestamp', 'level', 'module', 'message', 'slug', 'error']
CSV_BACKUP_DAYS = 30


class SyncCsvFormatter(logging.Formatter):
    """
    One CSV row per record, keyed by the repo or org it concerns.

    Usage:
        logger.warning("activate failed", extra={'slug': 'acme/api', 'error': 'HTTP 500'})
        logger.warning("enable failed", extra={'login': 'acme'})
    """

    def format(self, record):
        subject = getattr(record, 'slug', '') or getattr(record, 'login', '')
        buffer = io.StringIO()
        csv.writer(buffer, quoting=csv.QUOTE_MINIMAL).writerow([
            self.formatTime(record, self.datefmt),
            record.levelname,
            record.name,
            record.getMessage(),
            subject,
            getattr(record, 'error', ''),
        ])
        return buffer.getvalue().strip()


class CsvRotatingFileHandler(TimedRotatingFileHandler):
    """Rotating handler that starts every new file with the CSV header row."""

    def _open(self):
        needs_header = not os.path.exists(self.baseFilename) or \
            os.path.getsize(self.baseFilename) == 0
        stream = super()._open()
        if needs_header:
            stream.write(','.join(CSV_FIELDS) + '\n')
            stream.flush()
        return stream


def setup_logging(level: int = logging.INFO, log_dir: Path | None = None) -> None:
    """
    Attach console and CSV handlers to the root logger.

    Does nothing when a CSV handler is already attached.
    """
    root_logger = logging.getLogger()
    if any(isinstance(h, CsvRotatingFileHandler) for h in root_logger.handlers):
        return

    log_dir = Path(log_dir) if log_dir else Path.cwd() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)

    started = datetime.now().strftime("%Y_%m_%d")
    csv_handler = CsvRotatingFileHandler(
        filename=log_dir / f"dashboard_sync_{started}.csv",
        when="midnight",
        interval=1,
        backupCount=CSV_BACKUP_DAYS,
        encoding="utf-8",
    )
    csv_handler.setFormatter(SyncCsvFormatter(datefmt=DATE_FORMAT))
    root_logger.addHandler(csv_handler)

    # request lines from the HTTP client duplicate the controller's own records
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
