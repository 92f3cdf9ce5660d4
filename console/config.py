"""
Global Configuration for Application
"""

import logging
import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"true", "1", "yes"}


# Secret for session management
SECRET_KEY = os.getenv("SECRET_KEY", "s3cr3t-key-shhhh")
LOG_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

# Load the mock users and payments at start-up
SEED_MOCK_DATA = _env_bool("SEED_MOCK_DATA", True)

# New promo codes run from today for this many days
PROMO_DEFAULT_DAYS = int(os.getenv("PROMO_DEFAULT_DAYS", "30"))

# Receipt uploads
RECEIPT_MAX_BYTES = int(os.getenv("RECEIPT_MAX_BYTES", str(5 * 1024 * 1024)))
RECEIPT_MIME_PREFIX = os.getenv("RECEIPT_MIME_PREFIX", "image/")
RECEIPT_WORKERS = int(os.getenv("RECEIPT_WORKERS", "2"))

# Seconds a request waits for a receipt read before giving up
RECEIPT_READ_TIMEOUT = float(os.getenv("RECEIPT_READ_TIMEOUT", "10"))
