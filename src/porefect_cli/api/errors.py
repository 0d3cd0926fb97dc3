"""Errors raised by the Porefect API client."""

from typing import Any, Optional

import httpx


class APIError(Exception):
    """A failed request. ``body`` holds the raw response body when there was one."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UnauthorizedError(APIError):
    """HTTP 401."""


class ForbiddenError(APIError):
    """HTTP 403."""


class NotFoundError(APIError):
    """HTTP 404."""


class ConnectivityError(APIError):
    """The server could not be reached."""


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def from_status_error(error: httpx.HTTPStatusError, path: str) -> APIError:
    """Map an HTTP error response onto the user-facing error categories."""
    response = error.response
    status = response.status_code
    body = _response_body(response)

    if status == 401:
        return UnauthorizedError(
            "Unauthorized: Please log in", status_code=status, body=body
        )
    if status == 403:
        return ForbiddenError(
            "Forbidden: You do not have permission to access this resource",
            status_code=status,
            body=body,
        )
    if status == 404:
        return NotFoundError(
            f"Resource not found: {path}", status_code=status, body=body
        )

    # Everything else passes the server's own body through
    if isinstance(body, dict):
        message = body.get("message") or body.get("error") or str(body)
    else:
        message = str(body) or f"Request failed with status {status}"
    return APIError(message, status_code=status, body=body)


def from_request_error(error: httpx.RequestError) -> ConnectivityError:
    """Map a transport failure (DNS, refused connection, timeout)."""
    return ConnectivityError(
        "Network error: Please check your connection or try again later",
        body=str(error),
    )
