# oaiweave/types.py
"""Core type definitions shared by the client and its configuration.

Defines the data structure describing one HTTP request attempt and the type
aliases for user-supplied request hooks.
"""

from collections.abc import Callable, Mapping
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field


class RequestData(BaseModel):
    """Encapsulates data for a single OAI-PMH HTTP request."""

    method: str = "GET"
    url: str
    params: Mapping[str, Any] | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    def build_request(self, client: httpx.Client | None = None) -> httpx.Request:
        """Builds an httpx.Request object from the stored data.

        When ``client`` is given, its default headers and timeout are merged in.
        """
        if client is not None:
            return client.build_request(
                method=self.method,
                url=self.url,
                params=self.params,
                headers=self.headers,
            )
        return httpx.Request(
            method=self.method,
            url=self.url,
            params=self.params,
            headers=self.headers,
        )


class HTTPResponse(BaseModel):
    """Status code and raw body of the HTTP exchange behind an envelope."""

    status_code: int
    raw: bytes = b""
    url: str = ""


PreRequestHook = Callable[[str, str, dict[str, Any] | None, httpx.Headers], None]
"""Type alias for a pre-request hook.

Pre-request hooks are called before an HTTP request is sent and may modify
the query parameters or headers in place.

Args:
    method (str): The HTTP method of the request (always "GET" for OAI-PMH).
    url (str): The repository base URL.
    params (dict[str, Any] | None): A mutable dictionary of query parameters.
    headers (httpx.Headers): A mutable `httpx.Headers` object.
"""

PostRequestHook = Callable[[httpx.Response, Any], None]
"""Type alias for a post-request hook.

Post-request hooks are called after a response has been received and its
envelope decoded (even when the envelope carries a protocol error).

Args:
    response (httpx.Response): The raw `httpx.Response` object.
    envelope (Any): The decoded envelope model, or `None` if decoding failed.
"""
