# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Async HTTP transport for the autograder REST API.

This module wraps a persistent httpx.AsyncClient and exposes the five
request primitives entity operations are built on (post, get, patch, put,
delete). Each returns an HttpResponse holding the status code and the
decoded body, or raises one of the client's failure types:

- 404: NotFound
- other 4xx: RemoteRejected
- 5xx and transport errors: RemoteUnavailable

Requests are never retried.

Example:
    client = HttpClient(base_url="http://localhost:9000/api/")

    response = await client.get("/courses/")
    print(response.status, len(response.data))

    await client.aclose()
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx

from ag_client.core.exceptions import NotFound, RemoteRejected, RemoteUnavailable

logger = logging.getLogger(__name__)

# (part name, filename, content)
FileUpload = tuple[str, str, bytes]


@dataclass
class HttpResponse:
    """Decoded response from the autograder API.

    Attributes:
        status: HTTP status code.
        data: Decoded JSON body, raw bytes for non-JSON bodies, or None
            for empty bodies. Always the undecoded bytes for raw requests.
        headers: Response headers.
    """

    status: int
    data: Any
    headers: Mapping[str, str] = field(default_factory=dict)


class HttpClient:
    """Async HTTP client for the autograder API.

    Attributes:
        base_url: Base URL every relative path is resolved against.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        headers: Mapping[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the API (e.g. "http://localhost:9000/api/").
            headers: Default headers sent with every request.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (tests pass a MockTransport).
        """
        self.base_url = base_url
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=dict(headers or {}),
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        raw: bool = False,
    ) -> HttpResponse:
        """Issue a GET request.

        Args:
            path: Resource path, or an absolute URL such as a page token.
            params: Optional query parameters.
            raw: Return the success body as bytes whatever its content
                type. Used for file downloads.
        """
        return await self._request("GET", path, params=params, raw=raw)

    async def post(
        self,
        path: str,
        payload: Any = None,
        files: Sequence[FileUpload] | None = None,
    ) -> HttpResponse:
        """Issue a POST request with a JSON or multipart body."""
        return await self._request("POST", path, payload=payload, files=files)

    async def patch(self, path: str, payload: Any = None) -> HttpResponse:
        """Issue a PATCH request with a JSON body."""
        return await self._request("PATCH", path, payload=payload)

    async def put(
        self,
        path: str,
        payload: Any = None,
        files: Sequence[FileUpload] | None = None,
    ) -> HttpResponse:
        """Issue a PUT request with a JSON or multipart body."""
        return await self._request("PUT", path, payload=payload, files=files)

    async def delete(self, path: str) -> HttpResponse:
        """Issue a DELETE request."""
        return await self._request("DELETE", path)

    async def _request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        files: Sequence[FileUpload] | None = None,
        params: Mapping[str, Any] | None = None,
        raw: bool = False,
    ) -> HttpResponse:
        kwargs: dict[str, Any] = {}
        if params:
            kwargs["params"] = {
                key: _query_value(value) for key, value in params.items()
            }
        if files:
            kwargs["files"] = [
                (part, (filename, content)) for part, filename, content in files
            ]
            if payload:
                kwargs["data"] = payload
        elif payload is not None:
            kwargs["json"] = payload

        logger.debug("%s %s", method, path)

        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            logger.error("Autograder API connection error: %s %s: %s", method, path, str(e))
            raise RemoteUnavailable(
                message=f"Failed to reach autograder API: {str(e)}",
                details={"error_type": type(e).__name__, "path": path},
            ) from e

        logger.debug("%s %s -> %d", method, path, response.status_code)

        if response.is_success:
            return HttpResponse(
                status=response.status_code,
                data=response.content if raw else _decode_body(response),
                headers=response.headers,
            )

        body = _decode_body(response)
        details = body if isinstance(body, dict) else {"body": body}

        if response.status_code == 404:
            raise NotFound(
                message=f"{method} {path}: not found",
                path=path,
                response_body=body,
                details=details,
            )

        if 400 <= response.status_code < 500:
            logger.warning(
                "Autograder API rejected %s %s: [%d] %s",
                method,
                path,
                response.status_code,
                body,
            )
            raise RemoteRejected(
                message=f"{method} {path} rejected",
                status_code=response.status_code,
                response_body=body,
                details=details,
            )

        logger.error(
            "Autograder API failure on %s %s: [%d]",
            method,
            path,
            response.status_code,
        )
        raise RemoteUnavailable(
            message=f"{method} {path} failed on the server",
            status_code=response.status_code,
            response_body=body,
            details=details,
        )


def _query_value(value: Any) -> Any:
    # The API expects lowercase booleans in query strings
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None

    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        return response.json()
    return response.content
