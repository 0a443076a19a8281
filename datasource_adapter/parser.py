"""Response parser: datasource envelope bytes → (records, next cursor)."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

from datasource_adapter.core.config import ResponseFields
from datasource_adapter.cursor import encode_cursor
from datasource_adapter.errors import InternalError
from datasource_adapter.models import Record

log = structlog.get_logger("datasource_adapter.parser")


class DatasourceEnvelope(BaseModel):
    """Wire shape of one datasource page.

    Missing keys take their zero value, so a page without the has-more flag
    is the last one. Present keys must have the right JSON type.

    Concrete subclasses bind each field to the datasource's own key names;
    see :func:`envelope_model`.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    records: list[dict[str, Any]] | None = None
    has_more: bool = False
    limit: int = 0
    offset: int = 0


@lru_cache(maxsize=32)
def envelope_model(fields: ResponseFields) -> type[DatasourceEnvelope]:
    """Return a :class:`DatasourceEnvelope` subclass aliased to *fields*."""
    return create_model(
        "DatasourceEnvelope",
        __base__=DatasourceEnvelope,
        records=(list[dict[str, Any]] | None, Field(None, alias=fields.records)),
        has_more=(bool, Field(False, alias=fields.has_more)),
        limit=(int, Field(0, alias=fields.limit)),
        offset=(int, Field(0, alias=fields.offset)),
    )


class ResponseParser:
    """Decode datasource bodies and compute the continuation cursor.

    Records are returned untouched. The parser does not check that a page
    with ``has_more`` set actually contains records, nor that the echoed
    offset matches the one requested.
    """

    def __init__(self, fields: ResponseFields | None = None) -> None:
        self._fields = fields or ResponseFields()
        self._model = envelope_model(self._fields)

    @property
    def fields(self) -> ResponseFields:
        return self._fields

    def parse(self, body: bytes) -> tuple[list[Record], str]:
        """Return ``(records, next_cursor)`` for a raw response *body*.

        Raises ``InternalError`` when *body* is not JSON or does not match
        the envelope shape.
        """
        try:
            envelope = self._model.model_validate_json(body)
        except ValidationError as exc:
            raise InternalError(
                f"Failed to unmarshal the datasource response: {exc}."
            ) from exc

        records = envelope.records if envelope.records is not None else []
        next_cursor = encode_cursor(envelope.offset, envelope.limit, envelope.has_more)

        if envelope.has_more and not records:
            log.debug(
                "datasource.empty_page_with_more",
                offset=envelope.offset,
                limit=envelope.limit,
            )
        return records, next_cursor


def parse_response(body: bytes, fields: ResponseFields | None = None) -> tuple[list[Record], str]:
    """Shortcut for ``ResponseParser(fields).parse(body)``."""
    return ResponseParser(fields).parse(body)
