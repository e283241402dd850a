# pyright: reportAny=false
"""Channel talking to the tracker file server over HTTP."""

from typing import TYPE_CHECKING, Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from tracker.enums import ChannelName
from tracker.exceptions import NotFoundError, StoreError

if TYPE_CHECKING:
    from tracker._types import Record

DEFAULT_API_URL = "http://localhost:3001/api"

_RETRYABLE = (httpx.ConnectError, httpx.TimeoutException)


class RemoteStore:
    """Collections persisted through the ``/api/{collection}`` endpoints.

    Connection errors and timeouts are retried with exponential backoff;
    anything else that goes wrong becomes a StoreError so that a fallback
    chain can demote past this channel.

    Attributes:
        api_url: Base URL of the API, without a trailing slash.
        retry_attempts: Total attempts per request for retryable errors.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        *,
        timeout: float = 5.0,
        retry_attempts: int = 3,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the channel.

        Args:
            api_url: Base URL of the API.
            timeout: Per-request timeout in seconds.
            retry_attempts: Total attempts for connection errors and timeouts.
            client: Client to use instead of creating one. The channel does
                not close a client it did not create.
        """
        self.api_url: str = api_url.rstrip("/")
        self.retry_attempts: int = max(1, retry_attempts)
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        return ChannelName.REMOTE.value

    async def get(self, collection: str) -> list[Record]:
        response = await self._request("GET", collection, operation="get")
        data = self._decode(response, collection, operation="get")
        if not isinstance(data, list):
            msg = f"Expected a JSON array for {collection}, received {type(data).__name__}"
            raise StoreError(msg, channel=self.name, operation="get", collection=collection)
        return data

    async def set(self, collection: str, records: list[Record]) -> None:
        _ = await self._request("POST", collection, operation="set", payload=records)

    async def delete(self, collection: str, record_id: str) -> None:
        _ = await self._request("DELETE", collection, operation="delete", record_id=record_id)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        collection: str,
        *,
        operation: str,
        record_id: str | None = None,
        payload: Any = None,  # pyright: ignore[reportExplicitAny]
    ) -> httpx.Response:
        url = f"{self.api_url}/{collection}"
        if record_id is not None:
            url = f"{url}/{record_id}"

        try:
            response = await self._send(method, url, payload)
        except httpx.HTTPError as e:
            msg = f"{method} {url} failed: {e}"
            raise StoreError(msg, channel=self.name, operation=operation, collection=collection, cause=e) from e

        if response.status_code == httpx.codes.NOT_FOUND and record_id is not None:
            msg = f"Record {record_id} not found in {collection} ({self.name})"
            raise NotFoundError(msg, collection=collection, record_id=record_id)
        if response.is_error:
            msg = f"{method} {url} returned HTTP {response.status_code}"
            raise StoreError(msg, channel=self.name, operation=operation, collection=collection)
        return response

    async def _send(
        self,
        method: str,
        url: str,
        payload: Any,  # pyright: ignore[reportExplicitAny]
    ) -> httpx.Response:
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(_RETRYABLE),
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._client.request(method, url, json=payload)
        # AsyncRetrying with reraise=True either returns above or raises
        msg = f"{method} {url} exhausted retries"
        raise httpx.TransportError(msg)

    def _decode(
        self,
        response: httpx.Response,
        collection: str,
        *,
        operation: str,
    ) -> Any:  # pyright: ignore[reportExplicitAny]
        try:
            return response.json()
        except ValueError as e:
            msg = f"Invalid JSON from {response.request.url}: {e}"
            raise StoreError(msg, channel=self.name, operation=operation, collection=collection, cause=e) from e
