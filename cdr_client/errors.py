"""
Error types raised by the CDR client.

Taxonomy:
    - RepositoryError: the server answered with a non-2xx status.
    - Transport failures (DNS, refused connection, transport timeout) are
      httpx.HTTPError subclasses and reach the caller unwrapped.
    - A malformed JSON error body raises json.JSONDecodeError while the
      RepositoryError is being built. It is not caught here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import httpx


class CDRClientError(Exception):
    """Base class for errors raised by cdr_client."""


@dataclass(frozen=True)
class JsonErrorBody:
    """Structured error payload (response content-type was JSON)."""
    value: Any


@dataclass(frozen=True)
class TextErrorBody:
    """Raw error payload, e.g. an HTML error page."""
    text: str

    @property
    def value(self) -> str:
        return self.text


ErrorBody = Union[JsonErrorBody, TextErrorBody]


def _is_json(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type") or ""
    return "application/json" in content_type.lower()


class RepositoryError(CDRClientError):
    """
    Raised when a repository answers a query with an error status.

    Attributes:
        message: "<status> <reason>", e.g. "401 Unauthorized"
        status_code: HTTP status code
        reason: HTTP reason phrase
        body: JsonErrorBody or TextErrorBody, depending on the content-type
    """

    def __init__(self, status_code: int, reason: str, body: ErrorBody):
        self.status_code = status_code
        self.reason = reason
        self.message = f"{status_code} {reason}"
        self.body = body
        super().__init__(self.message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "RepositoryError":
        """
        Build the error from a completed HTTP response.

        RAISES:
            json.JSONDecodeError: content-type claims JSON but the body is not
        """
        if _is_json(response):
            body: ErrorBody = JsonErrorBody(response.json())
        else:
            body = TextErrorBody(response.text)
        return cls(response.status_code, response.reason_phrase, body)

    def __repr__(self) -> str:
        return f"RepositoryError({self.message!r}, body={self.body!r})"
