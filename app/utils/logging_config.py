"""
Logging setup for the Job Tracker AI API.

Profiles are picked from ENVIRONMENT:

    production   console + rotating files, level from LOG_LEVEL
    development  console + rotating files at DEBUG
    testing      console only at WARNING

Every application logger lives under the ``job_tracker`` namespace.
"""
import functools
import logging
import logging.config
import os
import time
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

LOG_FORMATS = {
    "simple": "%(levelname)s - %(name)s - %(message)s",
    "detailed": "%(asctime)s | %(levelname)-8s | %(name)-40s | %(funcName)-24s:%(lineno)-4d | %(message)s",
}
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

PROFILES: Dict[str, Dict[str, Any]] = {
    "production": {"level": None, "console": True, "file": True, "style": "detailed"},
    "development": {"level": "DEBUG", "console": True, "file": True, "style": "detailed"},
    "testing": {"level": "WARNING", "console": True, "file": False, "style": "simple"},
}


def _rotating_handler(filename: Path, level: str) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": "detailed",
        "filename": str(filename),
        "maxBytes": MAX_LOG_BYTES,
        "backupCount": LOG_BACKUPS,
        "encoding": "utf8",
    }


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    enable_console: bool = True,
    enable_file: bool = True,
    format_style: str = "detailed",
) -> None:
    """
    Apply a dictConfig for the API, uvicorn and pdfminer loggers.

    Args:
        level: Root logging level
        log_file: Main log file (defaults to $LOG_DIR/job_tracker_<date>.log)
        enable_console: Log to stdout
        enable_file: Log to rotating files, plus a separate errors-only file
        format_style: 'simple' or 'detailed'
    """
    stamp = date.today().strftime("%Y%m%d")
    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_file = Path(log_file) if log_file else log_dir / f"job_tracker_{stamp}.log"

    handlers: Dict[str, Dict[str, Any]] = {}
    if enable_console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "simple" if format_style == "simple" else "detailed",
            "stream": "ext://sys.stdout",
        }
    if enable_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = _rotating_handler(log_file, level)
        handlers["error_file"] = _rotating_handler(log_file.parent / f"job_tracker_errors_{stamp}.log", "ERROR")

    server_handlers = [name for name in ("console", "file") if name in handlers]

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {"format": LOG_FORMATS.get(format_style, LOG_FORMATS["detailed"]), "datefmt": DATE_FORMAT},
            "simple": {"format": LOG_FORMATS["simple"]},
        },
        "handlers": handlers,
        "loggers": {
            "": {"level": level, "handlers": list(handlers), "propagate": False},
            "uvicorn": {"level": "INFO", "handlers": server_handlers, "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": server_handlers[:1], "propagate": False},
            # malformed fonts and xrefs in uploads produce a flood of pdfminer warnings
            "pdfminer": {"level": "ERROR", "propagate": True},
        },
    })

    logger = logging.getLogger("job_tracker.logging")
    logger.info(f"Logging configured - level: {level}, handlers: {', '.join(handlers) or 'none'}")
    if enable_file:
        logger.info(f"Log file: {log_file}")


def configure_for_environment() -> None:
    """Apply the profile named by ENVIRONMENT (unknown names get console logging at LOG_LEVEL)."""
    environment = os.getenv("ENVIRONMENT", "development").lower()
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    profile = PROFILES.get(environment)
    if profile is None:
        setup_logging(level=log_level, enable_file=False)
        return

    setup_logging(
        level=profile["level"] or log_level,
        enable_console=profile["console"],
        enable_file=profile["file"],
        format_style=profile["style"],
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"job_tracker.{name}")


def log_api_call(operation: str):
    """Log start, duration and failure of an async endpoint."""
    def decorator(func):
        logger = get_logger(f"api.{func.__module__}")

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            started = time.perf_counter()
            logger.info(f"{operation} started")
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                elapsed = time.perf_counter() - started
                logger.warning(
                    f"{operation} failed after {elapsed:.3f}s: {e}",
                    extra={"operation": operation, "execution_time": elapsed, "error_type": type(e).__name__},
                )
                raise
            elapsed = time.perf_counter() - started
            logger.info(f"{operation} completed in {elapsed:.3f}s", extra={"operation": operation, "execution_time": elapsed})
            return result

        return wrapper
    return decorator


class PerformanceMonitor:
    """Times a block and logs it; slow blocks are logged as warnings."""

    def __init__(self, operation_name: str, logger: logging.Logger = None, threshold_ms: float = 1000):
        self.operation_name = operation_name
        self.logger = logger or get_logger("performance")
        self.threshold_ms = threshold_ms
        self.elapsed_ms: Optional[float] = None
        self._started: Optional[float] = None

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.debug(f"Starting {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000
        if exc_type is not None:
            self.logger.warning(f"{self.operation_name} failed after {self.elapsed_ms:.2f}ms: {exc_val}")
        elif self.elapsed_ms > self.threshold_ms:
            self.logger.warning(
                f"{self.operation_name} took {self.elapsed_ms:.2f}ms (threshold {self.threshold_ms:.0f}ms)"
            )
        else:
            self.logger.debug(f"{self.operation_name} completed in {self.elapsed_ms:.2f}ms")
        return False


# Initialize logging on module import
if __name__ != "__main__":
    configure_for_environment()
