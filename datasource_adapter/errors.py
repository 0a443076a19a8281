"""Adapter error taxonomy: every failure carries a machine-readable code."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes understood by the adapter framework."""

    INTERNAL = "ERROR_CODE_INTERNAL"
    DATASOURCE_FAILED = "ERROR_CODE_DATASOURCE_FAILED"
    INVALID_CURSOR = "ERROR_CODE_INVALID_CURSOR"
    INVALID_PAGE_REQUEST_CONFIG = "ERROR_CODE_INVALID_PAGE_REQUEST_CONFIG"


class AdapterError(Exception):
    """Base adapter exception. Subclasses pin ``code``."""

    code: ErrorCode = ErrorCode.INTERNAL

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value}, message={self.message!r})"


class InternalError(AdapterError):
    """Request construction, transport, or decode failure."""

    code = ErrorCode.INTERNAL


class DatasourceFailedError(AdapterError):
    """Response body could not be read after a successful status."""

    code = ErrorCode.DATASOURCE_FAILED


class InvalidCursorError(AdapterError, ValueError):
    """Raised when a cursor string cannot be decoded to an offset."""

    code = ErrorCode.INVALID_CURSOR


class InvalidPageRequestConfigError(AdapterError):
    """The page request is unusable (bad cursor, bad page size)."""

    code = ErrorCode.INVALID_PAGE_REQUEST_CONFIG
