"""
Error types raised by the calendar clients, resolver and window assembler.
"""
from typing import Optional


class CalendarError(Exception):
    """Base class for every failure building a prayer-time month."""


class InvalidResponseShape(CalendarError):
    """Provider answered, but the payload does not match the expected schema."""


class ApiError(CalendarError):
    """Primary provider envelope carried a non-200 application code."""

    def __init__(self, code: int, status: str):
        super().__init__(f"API {code}: {status}")
        self.code = code
        self.status = status


class FetchFailed(CalendarError):
    """HTTP request failed or returned a non-success status."""

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        detail = f"HTTP {status_code}" if status_code is not None else (reason or "request failed")
        super().__init__(f"Fetch failed for {url}: {detail}")
        self.url = url
        self.status_code = status_code


class LocationNotFound(CalendarError):
    def __init__(self, query: str):
        super().__init__(f"No location matches {query!r}")
        self.query = query


class IncompleteWindow(CalendarError):
    def __init__(self, available: int, required: int):
        super().__init__(f"Window needs {required} days, only {available} available")
        self.available = available
        self.required = required
