"""Logging setup for the training data bridge.

Every sink passes through ``redact_credentials`` so Authorization header
values never reach the console or the log file.
"""

import re
import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

_AUTH_HEADER_PATTERN = re.compile(r"\b(Bearer|Basic)\s+([A-Za-z0-9._~+/=-]+)")


def mask_token(token: str | None) -> str:
    """Mask a secret for logging, keeping the first and last four characters."""
    if not token or len(token) <= 12:
        return "***"
    return f"{token[:4]}...{token[-4:]}"


def redact_credentials(record: dict) -> bool:
    """Loguru filter masking ``Bearer``/``Basic`` credentials in the message."""
    record["message"] = _AUTH_HEADER_PATTERN.sub(
        lambda m: f"{m.group(1)} {mask_token(m.group(2))}", record["message"]
    )
    return True


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru for the service.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a rotating log file; console only when None
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        colorize=True,
        filter=redact_credentials,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # diagnose=False keeps local variables (tokens) out of tracebacks
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            backtrace=True,
            diagnose=False,
            filter=redact_credentials,
        )

    logger.info(f"[LOGGER] Initialized with level={level} file={log_file or '-'}")
