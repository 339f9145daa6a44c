from __future__ import annotations

import logging
import re
from typing import Any

from tenancy.context import get_current_correlation_id


# Optional country code, required area code (bare or in parentheses), then an
# 8 or 9 digit subscriber number. Digits glued to paths, times or dates never match.
_PHONE_RE = re.compile(
    r"(?<![\w/:+])(?<!\d[.-])"
    r"(?:\+?\d{1,3}[\s.-]?)?"
    r"(?:\(\d{2,3}\)\s?|\d{2,3}[\s.-]?)"
    r"\d{4,5}[\s.-]?\d{4}"
    r"(?![\w/:]|[.-]\d)"
)

_CONTACT_EXTRA_FIELDS = ("phone_number", "phone")


def mask_contact_data(text: str) -> str:
    """Mask phone-number-like sequences in a string.

    No digits are kept, so partial numbers never reach the logs either.
    """

    if not text:
        return text

    return _PHONE_RE.sub("***PHONE***", text)


class MaskContactDataFilter(logging.Filter):
    """Logging filter to mask phone numbers in log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except Exception:  # pragma: no cover
            message = str(getattr(record, "msg", ""))

        # Replace the formatted message and clear args to avoid double formatting.
        record.msg = mask_contact_data(str(message))
        record.args = ()

        for key in _CONTACT_EXTRA_FIELDS:
            if hasattr(record, key):
                value: Any = getattr(record, key)
                if isinstance(value, str):
                    setattr(record, key, mask_contact_data(value))

        return True


class RequestContextFilter(logging.Filter):
    """Attach the current request correlation id to every record.

    django.request records are emitted after the middleware has left the
    request context, so they fall back to the id stored on the request.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            request = getattr(record, "request", None)
            record.correlation_id = (
                get_current_correlation_id()
                or getattr(request, "correlation_id", None)
                or "-"
            )
        return True
