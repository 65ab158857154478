"""Simulated request and response-writer values passed through hooks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from .definition import APIDefinition
from .errors import RequestError


@dataclass
class SimRequest:
    """Mutable request flowing through the hook stages.

    Hooks mutate it in place. ``definition`` is the API definition bound
    to this request for the lifetime of one simulation.
    """

    method: str
    url: httpx.URL
    definition: APIDefinition
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: bytes = b""
    context: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(cls, method: str, url: str, definition: APIDefinition) -> SimRequest:
        try:
            parsed = httpx.URL(url)
        except (httpx.InvalidURL, TypeError) as e:
            raise RequestError(f"Invalid inbound URL {url!r}: {e}") from e
        if not parsed.is_absolute_url:
            raise RequestError(f"Inbound URL must be absolute: {url!r}")
        return cls(method=method, url=parsed, definition=definition)

    @property
    def path(self) -> str:
        return self.url.path

    @path.setter
    def path(self, value: str) -> None:
        self.url = self.url.copy_with(path=value)

    @property
    def query(self) -> str:
        return self.url.query.decode("ascii")

    @query.setter
    def query(self, value: str) -> None:
        # Non-ASCII characters are percent-encoded as UTF-8
        encoded = quote(value, safe="=&;+%/?:@!$'()*,[]~")
        self.url = self.url.copy_with(query=encoded.encode("ascii") or None)

    def clone(self) -> SimRequest:
        """Return an independent copy. The definition is shared."""
        return SimRequest(
            method=self.method,
            url=self.url,
            definition=self.definition,
            headers=httpx.Headers(self.headers),
            body=self.body,
            context=dict(self.context),
        )


@dataclass
class ResponseRecorder:
    """Response-writer sink handed to every hook."""
    status_code: int = 200
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: bytearray = field(default_factory=bytearray)
    wrote_header: bool = False

    def write_header(self, status_code: int) -> None:
        if self.wrote_header:
            return
        self.status_code = status_code
        self.wrote_header = True

    def write(self, data: bytes) -> int:
        if not self.wrote_header:
            self.write_header(200)
        self.body.extend(data)
        return len(data)
