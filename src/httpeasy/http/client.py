# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factories."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse

if TYPE_CHECKING:
    import httpx


class HttpClient(Protocol):
    """Minimal protocol for issuing one HTTP exchange.

    Implementations raise on transport failure; the dispatcher translates those errors.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


TransportFactory = Callable[[HttpSettings], HttpClient]


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())


def shared_client_factory(client: httpx.Client) -> TransportFactory:
    """
    Build a factory that reuses a caller-owned ``httpx.Client`` for every dispatch.

    The caller keeps ownership: dispatches never close the shared client. TLS verification is
    whatever the shared client was built with; timeouts and redirect policy are still applied per
    request.
    """
    from .httpx_client import HttpxClient

    def factory(settings: HttpSettings) -> HttpClient:
        return HttpxClient(settings, client=client)

    return factory


__all__ = ["HttpClient", "TransportFactory", "create_default_http_client", "shared_client_factory"]
