"""
Simple structured logger for console and optional file output.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import Optional

from config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: Optional[str] = None, level: Optional[str] = None) -> logging.Logger:
    """
    Return a configured logger instance.

    Ensures handlers are attached only once to avoid duplicate logs. Console
    output goes to stderr so reports and exported files on stdout stay clean.
    """
    logger = logging.getLogger(name if name else "risk_control")
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

        # File handler only when LOG_DIR is set (LOG_DIR/YYYY-MM-DD/risk-HHMMSS-<pid>.log)
        if settings.LOG_DIR:
            now = datetime.now()
            log_dir = os.path.join(settings.LOG_DIR, now.strftime("%Y-%m-%d"))
            os.makedirs(log_dir, exist_ok=True)
            file_path = os.path.join(log_dir, f"risk-{now.strftime('%H%M%S')}-{os.getpid()}.log")
            file_handler = logging.FileHandler(file_path, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(file_handler)

        logger.setLevel(level or settings.LOG_LEVEL)
        logger.propagate = False
    return logger
