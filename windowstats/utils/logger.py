"""
Logging configuration with multi-handler setup and structured snapshot logging
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Generator

if TYPE_CHECKING:
    from windowstats.monitoring.stats import SnapshotResult

SNAPSHOT_LOGGER_NAME = "snapshots"


class SnapshotLogFilter(logging.Filter):
    """
    Filter to isolate snapshot reports from general logging

    Only allows log records with logger name 'snapshots' to pass through
    to the snapshot-specific handler.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name == SNAPSHOT_LOGGER_NAME


class MetricsLogger:
    """
    Centralized logging system for metrics aggregation

    Features:
    - Multi-handler logging (console, file, snapshot-specific)
    - Automatic log rotation (size-based and time-based)
    - Structured JSON lines for snapshot reports
    """

    def __init__(self, config: dict):
        """
        Initialize logging infrastructure

        Args:
            config: Configuration dictionary with keys:
                - log_level: str (DEBUG, INFO, WARNING, ERROR)
                - log_dir: str (directory path for log files, relative to cwd)

        Raises:
            OSError: If log directory creation fails
        """
        self.log_level = config.get('log_level', 'INFO')
        self.log_dir = Path(config.get('log_dir', 'logs'))
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._setup_logging()

    def _setup_logging(self) -> None:
        """
        Configure root logger with all handlers

        Sets up:
        1. Console handler (INFO+, simple format)
        2. Rotating file handler (DEBUG+, detailed format)
        3. Snapshot handler (INFO, JSON lines, daily rotation)
        """
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, self.log_level.upper()))

        # Clear existing handlers to avoid duplicates
        root_logger.handlers.clear()

        log_format = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s'
        )

        # Console Handler - INFO and above
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(log_format)
        root_logger.addHandler(console_handler)

        # File Handler - All levels, rotating (10MB max, 5 backups)
        file_handler = RotatingFileHandler(
            self.log_dir / 'windowstats.log',
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(log_format)
        root_logger.addHandler(file_handler)

        # Snapshot Log - daily rotation, 30-day retention
        snapshot_handler = TimedRotatingFileHandler(
            self.log_dir / 'snapshots.log',
            when='midnight',
            backupCount=30
        )
        snapshot_handler.setLevel(logging.INFO)
        snapshot_handler.addFilter(SnapshotLogFilter())
        root_logger.addHandler(snapshot_handler)

    @staticmethod
    def log_snapshot(name: str, snapshot: "SnapshotResult") -> None:
        """
        Log a snapshot as one JSON line

        Args:
            name: Metric name the aggregator tracks (e.g. 'cpu_percent')
            snapshot: Result of SlidingWindowAggregator.snapshot()

        Example:
            MetricsLogger.log_snapshot('request_latency_ms', aggregator.snapshot())
        """
        logger = logging.getLogger(SNAPSHOT_LOGGER_NAME)
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'metric': name,
            **snapshot.to_dict()
        }
        logger.info(json.dumps(log_entry))


@contextmanager
def log_execution_time(operation: str) -> Generator[None, None, None]:
    """
    Context manager for measuring and logging execution time

    Usage:
        with log_execution_time('snapshot'):
            result = aggregator.snapshot()

    Logs at DEBUG level: "{operation} completed in {elapsed:.3f}s"
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logging.getLogger(__name__).debug(f"{operation} completed in {elapsed:.3f}s")
