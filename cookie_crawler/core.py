"""
FILE DESCRIPTION: Foundational module for cookie crawler configuration and logging.
KEY FUNCTIONS/CLASSES: setup_logger, CompanyFormatter, logger, env_flag
"""

import logging
import sys
import os
from datetime import datetime
from pathlib import Path
from dotenv import load_dotenv

# === CONFIGURATION SECTION ===

# .env in the working directory wins over the one next to the package
load_dotenv(Path.cwd() / '.env')
load_dotenv(Path(__file__).resolve().parents[1] / '.env')


def env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Browser window visibility (CLI --headful overrides)
HEADLESS = env_flag("CRAWL_HEADLESS", True)

# Crawl depth used by the CLI when --depth is not given
MAX_CRAWL_DEPTH = int(os.getenv("CRAWL_MAX_DEPTH", 0))

# Playwright navigation timeout (seconds). 0 disables it.
NAV_TIMEOUT = float(os.getenv("NAV_TIMEOUT", 25))

USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36",
)

BROWSER_ARGS = ["--disable-gpu", "--no-sandbox", "--disable-dev-shm-usage", "--log-level=3"]

# Links ending with these (after canonicalization) are never enqueued
EXCLUDED_SUFFIXES = (".pdf",)

# Expiry recorded for cookies without one
SESSION_EXPIRY = "session"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE") or None


# === LOGGING SECTION ===

class CompanyFormatter(logging.Formatter):
    """
    FLOW: Receives a log record -> Extracts timestamp -> Formats according to company standard
    (e.g., [ Tue Jan 06 05:32:41 AM UTC 2026 ]) -> Prepends level and context -> Returns final string.
    """
    def format(self, record):
        dt = datetime.fromtimestamp(record.created)
        timestamp = dt.strftime("%a %b %d %I:%M:%S %p UTC %Y")
        context = getattr(record, 'context', 'root')
        return f"[ {timestamp} ] : {record.levelname} : {context} : {record.getMessage()}"

def setup_logger(name="cookie_crawler", log_file=None, level=logging.INFO):
    """
    FLOW: Initializes/Retrieves logger -> Checks for existing handlers to prevent duplicates ->
    Sets propagation for child loggers -> Attaches Console and optional File handlers with CompanyFormatter.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    if name != "cookie_crawler":
        logger.propagate = True
        setup_logger("cookie_crawler", log_file=log_file, level=level)
        return logger

    formatter = CompanyFormatter()

    # Console handler (stderr, stdout carries the cookie report)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

def add_file_handler(logger, log_file):
    """
    Attach a FileHandler after startup (used when the CLI gets --log-file).
    Returns None when the logger already writes to that file (e.g. LOG_FILE).
    """
    path = os.path.abspath(log_file)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == path:
            return None
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(CompanyFormatter())
    logger.addHandler(file_handler)
    return file_handler

# Global logger instance
logger = setup_logger(log_file=LOG_FILE, level=getattr(logging, LOG_LEVEL, logging.INFO))
