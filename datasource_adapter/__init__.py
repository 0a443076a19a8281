"""Paginated datasource adapter: offset cursors over a single page fetch."""

from datasource_adapter.core.config import AdapterConfig, ResponseFields
from datasource_adapter.cursor import decode_cursor, encode_cursor
from datasource_adapter.errors import (
    AdapterError,
    DatasourceFailedError,
    ErrorCode,
    InternalError,
    InvalidCursorError,
    InvalidPageRequestConfigError,
)
from datasource_adapter.fetcher import PageFetcher
from datasource_adapter.models import PageRequest, PageResponse, Record
from datasource_adapter.parser import ResponseParser, parse_response

__all__ = [
    "AdapterConfig",
    "AdapterError",
    "DatasourceFailedError",
    "ErrorCode",
    "InternalError",
    "InvalidCursorError",
    "InvalidPageRequestConfigError",
    "PageFetcher",
    "PageRequest",
    "PageResponse",
    "Record",
    "ResponseFields",
    "ResponseParser",
    "decode_cursor",
    "encode_cursor",
    "parse_response",
]
