"""
Logging setup for the DocExtract service.

Console output is always on; a debug-level file log is opt-in for local runs.
Settings come from LOG_LEVEL, LOG_TO_FILE and LOG_DIR.
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FILE_LOGGING = os.getenv("LOG_TO_FILE", "false").lower() == "true"
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_FILE_NAME = "docextract.log"

CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

# Server and multipart parser loggers are chatty at DEBUG
QUIET_LOGGERS = {
    "uvicorn.access": logging.INFO,
    "multipart": logging.WARNING,
    "python_multipart": logging.WARNING,
    "httpx": logging.WARNING,
}


def _file_handler(log_file: Union[str, Path, None]) -> logging.FileHandler:
    path = Path(log_file) if log_file is not None else LOG_DIR / LOG_FILE_NAME
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    enable_file_logging: bool = DEFAULT_FILE_LOGGING
) -> None:
    """
    Configure the root logger. Calling it again replaces earlier handlers.

    Args:
        log_level: Level name; unknown names fall back to INFO
        log_file: File log path (defaults to LOG_DIR/docextract.log)
        enable_file_logging: Attach the file handler
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    root_logger.addHandler(console_handler)

    if enable_file_logging:
        root_logger.addHandler(_file_handler(log_file))

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(quiet_level, level))


def get_logger(name: str) -> logging.Logger:
    """Module logger; use with ``__name__``."""
    return logging.getLogger(name)
