"""
Receipt reader

Turns an uploaded image into a self-contained data URL on a worker thread.
Callers get a Future that resolves to the data URL or fails with one of the
ReceiptError subclasses.
"""

import base64
import logging
from concurrent.futures import Future, ThreadPoolExecutor

from console.models import DataValidationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 5 * 1024 * 1024


class ReceiptError(DataValidationError):
    """Base class for receipts that cannot be attached"""


class ReceiptTooLargeError(ReceiptError):
    """The receipt is bigger than the configured limit"""


class UnsupportedReceiptError(ReceiptError):
    """The receipt is not an accepted media type"""


def to_data_url(data: bytes, mimetype: str) -> str:
    """Encodes raw bytes as a base64 data URL"""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mimetype};base64,{payload}"


class ReceiptReader:
    """Reads receipt files into data URLs without blocking the caller"""

    def __init__(
        self,
        max_bytes: int = DEFAULT_MAX_BYTES,
        mime_prefix: str = "image/",
        workers: int = 2,
    ):
        self.max_bytes = max_bytes
        self.mime_prefix = mime_prefix
        self._executor = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="receipt-reader"
        )

    def __repr__(self):
        return f"<ReceiptReader max_bytes=[{self.max_bytes}] mime=[{self.mime_prefix}*]>"

    def read(self, data: bytes, mimetype: str) -> Future:
        """Starts converting data to a data URL and returns its Future"""
        logger.info("Reading receipt of %d bytes (%s)", len(data), mimetype)
        return self._executor.submit(self._convert, data, mimetype)

    def shutdown(self):
        """Stops the worker threads, cancelling reads that have not started"""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _convert(self, data: bytes, mimetype: str) -> str:
        mimetype = (mimetype or "").strip().lower()
        if not mimetype.startswith(self.mime_prefix):
            raise UnsupportedReceiptError(
                f"Receipt must be of type {self.mime_prefix}*; received {mimetype or 'none'}"
            )
        if len(data) > self.max_bytes:
            raise ReceiptTooLargeError(
                f"Receipt is {len(data)} bytes; the limit is {self.max_bytes} bytes"
            )
        return to_data_url(data, mimetype)
