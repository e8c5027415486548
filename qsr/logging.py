"""
Logging setup for the storefront.

Usage:
    from qsr.logging import get_logger
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Control characters that could forge extra log lines (CWE-117)
_LOG_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def _configure_root_logger() -> None:
    """Attach one stdout handler to the root logger, unless the host already did."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    # Vercel prefixes its own timestamps
    on_vercel = os.environ.get("VERCEL") == "1"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if on_vercel else LOG_FORMAT))
    root.addHandler(handler)

    # Supabase and Upstash both talk over httpx
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a module, typically ``get_logger(__name__)``."""
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value: str | None) -> str:
    """First 8 chars of a client-supplied id, control characters escaped."""
    if not id_value:
        return "N/A"
    return str(id_value).translate(_LOG_ESCAPES)[:8]


def mask_mobile_for_logging(mobile: str | None) -> str:
    """Keep only the last 2 characters of a mobile number."""
    if not mobile:
        return "N/A"
    safe_value = str(mobile).translate(_LOG_ESCAPES)
    if len(safe_value) <= 2:
        return "*" * len(safe_value)
    return "*" * (len(safe_value) - 2) + safe_value[-2:]


__all__ = [
    "get_logger",
    "mask_mobile_for_logging",
    "sanitize_id_for_logging",
]
