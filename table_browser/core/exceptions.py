from __future__ import annotations

from typing import Optional


class TableBrowserError(Exception):
    """Base exception for all table_browser errors"""
    pass


class ConfigError(TableBrowserError):
    """Invalid or inconsistent global.json"""
    pass


class RecordFormatError(TableBrowserError):
    """A column/row record from the API is not a mapping"""
    pass


class InvalidRowModeError(TableBrowserError, ValueError):
    """Row mode value is not one of the known options"""
    pass


class DocApiError(TableBrowserError):
    """
    Request to the document API failed.

    `code` is a short machine-readable reason (unauthorized, not_found,
    rate_limited, request_failed, network_error, invalid_response),
    `status_code` is the HTTP status when a response was received.
    """

    def __init__(self, code: str, *, status_code: Optional[int] = None, detail: str = ""):
        self.code = code
        self.status_code = status_code
        self.detail = detail
        message = code if status_code is None else f"{code} (HTTP {status_code})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
