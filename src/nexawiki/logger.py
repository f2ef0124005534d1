"""
Logger Configuration Module

Handles logging setup for query orchestration.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def create_logger(log_dir: str | None = None) -> logging.Logger:
    log_path = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    log_path.mkdir(parents=True, exist_ok=True)

    # Package logger; module loggers propagate into it
    package_logger = logging.getLogger("nexawiki")
    package_logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

    file_handler = logging.FileHandler(log_path / "nexawiki.log", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(file_handler)

    # One line per round lifecycle event
    rounds_handler = logging.FileHandler(
        log_path / "query_rounds.log", encoding="utf-8"
    )
    rounds_handler.setFormatter(logging.Formatter("%(asctime)s | %(message)s"))

    rounds_logger = logging.getLogger("query_rounds")
    rounds_logger.setLevel(logging.INFO)
    rounds_logger.propagate = False
    rounds_logger.addHandler(rounds_handler)

    return rounds_logger


rounds_logger: logging.Logger | None = None


def setup_logging(log_dir: str | None = None) -> logging.Logger:
    global rounds_logger
    if rounds_logger is None:
        rounds_logger = create_logger(log_dir)
    return rounds_logger
