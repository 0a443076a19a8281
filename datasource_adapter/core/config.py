"""Adapter configuration: defaults overridable through environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_REQUEST_TIMEOUT = 5.0  # seconds, per page call

_ENV_PREFIX = "DATASOURCE_ADAPTER_"


@dataclass(frozen=True)
class ResponseFields:
    """Wire names of the envelope fields returned by the datasource."""

    records: str = "records-list"
    has_more: str = "more"
    limit: str = "limit"
    offset: str = "offset"


@dataclass(frozen=True)
class AdapterConfig:
    """Per-instance settings for :class:`~datasource_adapter.fetcher.PageFetcher`."""

    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    accept: str = "application/json"
    content_type: str = "application/json"
    fields: ResponseFields = field(default_factory=ResponseFields)

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> AdapterConfig:
        """Build a config from ``DATASOURCE_ADAPTER_*`` variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        defaults = ResponseFields()

        def _get(key: str, default: str) -> str:
            return env.get(_ENV_PREFIX + key, default)

        return cls(
            request_timeout=float(_get("TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))),
            accept=_get("ACCEPT", "application/json"),
            content_type=_get("CONTENT_TYPE", "application/json"),
            fields=ResponseFields(
                records=_get("RECORDS_FIELD", defaults.records),
                has_more=_get("HAS_MORE_FIELD", defaults.has_more),
                limit=_get("LIMIT_FIELD", defaults.limit),
                offset=_get("OFFSET_FIELD", defaults.offset),
            ),
        )
