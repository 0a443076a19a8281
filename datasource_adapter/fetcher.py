"""Page fetcher — one bounded GET per call against an offset/limit datasource."""

from __future__ import annotations

import asyncio
import contextlib

import httpx
import structlog

from datasource_adapter.core.config import AdapterConfig
from datasource_adapter.cursor import decode_cursor
from datasource_adapter.errors import (
    DatasourceFailedError,
    InternalError,
    InvalidCursorError,
    InvalidPageRequestConfigError,
)
from datasource_adapter.models import PageRequest, PageResponse
from datasource_adapter.parser import ResponseParser

log = structlog.get_logger("datasource_adapter.fetcher")


class PageFetcher:
    """Fetch single pages from a datasource over a borrowed ``httpx.AsyncClient``.

    The client (and its connection pool) belongs to the caller; the fetcher
    never opens or closes it. The fetcher keeps no state between calls, so one
    instance may serve any number of concurrent ``fetch_page`` calls.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: AdapterConfig | None = None,
        parser: ResponseParser | None = None,
    ) -> None:
        self._client = client
        self._config = config or AdapterConfig()
        self._parser = parser or ResponseParser(self._config.fields)

    # ── public ─────────────────────────────────────────────────────────────

    async def fetch_page(
        self,
        request: PageRequest,
        *,
        timeout: float | None = None,
    ) -> PageResponse:
        """Fetch the page addressed by ``request.cursor``.

        The call is bounded by ``config.request_timeout``; a shorter caller
        *timeout* wins. Cancelling the calling task aborts the request as
        usual and the ``CancelledError`` propagates unchanged.

        A non-200 status is not an error: the response carries the status
        code and the ``Retry-After`` value so the caller can decide whether
        and when to retry. Nothing is retried here.

        Raises:
            InvalidPageRequestConfigError: bad cursor or page size; no I/O done.
            InternalError: request could not be built or sent, deadline hit
                before a response arrived, or the body is not a valid envelope.
            DatasourceFailedError: body could not be read after a 200.
        """
        offset = self._resolve_offset(request)
        http_request = self._build_request(request, offset)

        deadline = self._config.request_timeout
        if timeout is not None:
            deadline = min(deadline, timeout)

        bound = log.bind(entity=request.entity_name, offset=offset, limit=request.page_size)
        bound.debug("datasource.request", url=str(http_request.url))

        reading = False
        # The stream is released after the deadline scope has exited.
        # The deadline does not cover the close.
        async with contextlib.AsyncExitStack() as stack:
            try:
                async with asyncio.timeout(deadline):
                    try:
                        response = await self._client.send(http_request, stream=True)
                    except httpx.RequestError as exc:
                        bound.warning("datasource.transport_error", error=repr(exc))
                        raise InternalError("Failed to send request to datasource.") from exc
                    stack.push_async_callback(response.aclose)

                    retry_hint = response.headers.get("Retry-After")
                    if response.status_code != httpx.codes.OK:
                        bound.info(
                            "datasource.non_ok_status",
                            status=response.status_code,
                            retry_after=retry_hint,
                        )
                        return PageResponse(
                            status_code=response.status_code,
                            retry_hint=retry_hint,
                        )

                    reading = True
                    try:
                        body = await response.aread()
                    except (httpx.RequestError, httpx.StreamError) as exc:
                        bound.warning("datasource.read_failed", error=repr(exc))
                        raise DatasourceFailedError("Failed to read response body.") from exc
            except TimeoutError as exc:
                bound.warning("datasource.timeout", deadline=deadline, reading=reading)
                if reading:
                    raise DatasourceFailedError("Failed to read response body.") from exc
                raise InternalError(
                    f"Request to datasource timed out after {deadline:g}s."
                ) from exc

        records, next_cursor = self._parser.parse(body)
        bound.debug("datasource.page", records=len(records), has_more=bool(next_cursor))
        return PageResponse(
            status_code=response.status_code,
            records=records,
            next_cursor=next_cursor,
            retry_hint=retry_hint,
        )

    # ── internal ───────────────────────────────────────────────────────────

    @staticmethod
    def _resolve_offset(request: PageRequest) -> int:
        """Validate *request* and decode its cursor, before any I/O."""
        if request.page_size <= 0:
            raise InvalidPageRequestConfigError(
                f"Page size must be positive, got {request.page_size}."
            )
        try:
            return decode_cursor(request.cursor)
        except InvalidCursorError as exc:
            raise InvalidPageRequestConfigError(
                "Request cursor conversion to int64 failed."
            ) from exc

    def _build_request(self, request: PageRequest, offset: int) -> httpx.Request:
        # The authorization value is opaque here and forwarded as given, empty included.
        headers = {
            "Accept": self._config.accept,
            "Authorization": request.auth_token,
            "Content-Type": self._config.content_type,
        }

        url = f"{request.base_url.rstrip('/')}/{request.entity_name}"
        try:
            return self._client.build_request(
                "GET",
                url,
                params={"offset": offset, "limit": request.page_size},
                headers=headers,
            )
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            raise InternalError("Failed to create HTTP request to datasource.") from exc
