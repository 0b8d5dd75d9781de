"""Gateway Port - one request/response cycle against the pipeline service."""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class StructuredPayload:
    """Decoded JSON response body."""

    value: Any

    def as_text(self) -> str:
        return json.dumps(self.value, ensure_ascii=False)


@dataclass(frozen=True)
class TextPayload:
    """Raw text response body."""

    text: str

    def as_text(self) -> str:
        return self.text


CallResult = StructuredPayload | TextPayload


class CallError(Exception):
    """A call that did not produce a payload.

    status is None when the service could not be reached at all.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class GatewayPort(Protocol):
    """Interface for calling the remote pipeline service."""

    async def invoke(
        self,
        endpoint: str,
        body: dict[str, str],
        cancel: asyncio.Event | None = None,
    ) -> CallResult:
        """POST body to endpoint and decode the response. Raises CallError."""
        ...

    async def close(self) -> None:
        """Release the underlying connection pool."""
        ...
