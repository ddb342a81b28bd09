# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request/response data models shared by the builder, dispatcher and transports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..config import DEFAULT_CONNECT_TIMEOUT, DEFAULT_REQUEST_TIMEOUT
from ..errors import FormatError
from .headers import group_header_items, header_values

Headers = dict[str, str]
HeaderItems = list[tuple[str, str]]


@dataclass(frozen=True)
class RequestConfig:
    """Frozen snapshot of everything a RequestBuilder accumulated."""

    url: str | None = None
    method: str = "GET"
    headers: Headers = field(default_factory=dict)
    body: str | None = None
    form_fields: dict[str, str] = field(default_factory=dict)
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    follow_redirects: bool = True
    verify_ssl: bool = True


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None
    connect_timeout: float | None = None
    follow_redirects: bool = True


@dataclass
class HttpResponse:
    """Raw transport response; header items keep arrival order and duplicates."""

    status_code: int
    headers: HeaderItems = field(default_factory=list)
    text: str = ""
    url: str | None = None


@dataclass(frozen=True)
class ResponseView:
    """Read-only view of one completed exchange."""

    status_code: int
    text: str
    header_map: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    url: str | None = None

    @classmethod
    def from_http_response(cls, response: HttpResponse) -> ResponseView:
        return cls(
            status_code=response.status_code,
            text=response.text,
            header_map=group_header_items(response.headers),
            url=response.url,
        )

    def status(self) -> int:
        return self.status_code

    def body(self) -> str:
        return self.text

    def is_ok(self) -> bool:
        """True for the 2xx range."""
        return 200 <= self.status_code < 300

    def headers(self) -> dict[str, list[str]]:
        return {name: list(values) for name, values in self.header_map.items()}

    def header(self, name: str) -> str | None:
        """Return the first value of ``name`` (case-insensitive), or None when absent."""
        values = header_values(self.header_map, name)
        return values[0] if values else None

    def as_json(self) -> str:
        """
        Return the body if it looks like a JSON document.

        Only the first non-whitespace character is inspected; nothing is parsed.
        """
        if self.text is None:
            raise FormatError("Response body is not valid JSON")
        stripped = self.text.strip()
        if not (stripped.startswith("{") or stripped.startswith("[")):
            raise FormatError("Response body is not valid JSON")
        return self.text

    def to_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code,
            "url": self.url,
            "headers": self.headers(),
            "body": self.text,
        }

    def __str__(self) -> str:
        return f"Status: {self.status_code}\nHeaders: {self.headers()}\nBody:\n{self.text}"
