"""HTTP call gateway - async httpx client for the pipeline service."""

import asyncio
import logging

import httpx

from pipeline_console.domain.ports.config import PipelineServiceConfig
from pipeline_console.domain.ports.gateway import (
    CallError,
    CallResult,
    StructuredPayload,
    TextPayload,
)

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON in response body"


def decode_response(response: httpx.Response) -> CallResult:
    """Decode a successful response by its declared content type."""
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            return StructuredPayload(response.json())
        except (ValueError, RecursionError):
            # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting recurses
            logger.warning("Malformed JSON from %s", response.request.url)
            raise CallError(INVALID_JSON_MESSAGE, status=response.status_code) from None
    return TextPayload(response.text)


class HTTPGateway:
    """Implements GatewayPort via POST <base_url>/<endpoint> with a JSON body.

    No retries and no caching; each invoke is one independent request.
    """

    def __init__(
        self,
        config: PipelineServiceConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize with pipeline service config (client created on first use)."""
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json"}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create persistent async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout,
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client (call during app shutdown)."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def invoke(
        self,
        endpoint: str,
        body: dict[str, str],
        cancel: asyncio.Event | None = None,
    ) -> CallResult:
        """POST body to the endpoint and decode the response.

        Raises CallError on a non-2xx status, an unreachable service or a
        body that claims JSON but does not parse.
        """
        if cancel is not None and cancel.is_set():
            raise asyncio.CancelledError(f"Call to {endpoint} cancelled before dispatch")

        url = f"{self._base_url}/{endpoint}"
        client = self._get_client()
        try:
            resp = await client.post(url, json=body)
        except (httpx.HTTPError, httpx.InvalidURL, OSError, OverflowError, ExceptionGroup) as e:
            logger.error("Pipeline service unreachable at %s: %s", url, e)
            raise CallError(f"Failed to reach {url}: {e}") from e

        if not resp.is_success:
            err_text = resp.text
            logger.error("Pipeline API error %s on /%s: %s", resp.status_code, endpoint, err_text[:500])
            raise CallError(
                f"HTTP error! Status: {resp.status_code}, Message: {err_text}",
                status=resp.status_code,
            )

        logger.info("Pipeline call /%s -> %s", endpoint, resp.status_code)
        return decode_response(resp)
