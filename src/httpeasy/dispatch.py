# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Single-exchange dispatch.

Turns a frozen RequestConfig into exactly one HTTP exchange: validate, build a transport scoped to
the call, assemble the request, execute it synchronously and wrap the result. Nothing is retried.
"""

from __future__ import annotations

import logging

import httpx

from .config import HttpSettings, load_http_settings
from .errors import ConfigurationError, InterruptionError, TransportError, categorize_exception
from .http.client import HttpClient, TransportFactory, create_default_http_client
from .http.forms import encode_form_fields
from .http.models import HttpRequest, RequestConfig, ResponseView

logger = logging.getLogger(__name__)


def validate_config(config: RequestConfig) -> None:
    if not config.url:
        raise ConfigurationError("URL must be set before sending a request")


def transport_settings(config: RequestConfig, base: HttpSettings | None = None) -> HttpSettings:
    """Derive the settings a per-call transport is built with."""
    base = base or load_http_settings()
    return HttpSettings(
        connect_timeout=config.connect_timeout,
        request_timeout=config.request_timeout,
        follow_redirects=config.follow_redirects,
        verify_ssl=config.verify_ssl,
        user_agent=base.user_agent,
    )


def build_request(config: RequestConfig) -> HttpRequest:
    """
    Assemble the transport request.

    Non-empty form fields win over any raw body and force POST, whatever method was configured.
    """
    method = config.method
    body: str | None = None
    if config.form_fields:
        method = "POST"
        body = encode_form_fields(config.form_fields)
    elif config.body is not None:
        body = config.body

    return HttpRequest(
        url=config.url or "",
        method=method,
        headers=dict(config.headers),
        body=body,
        timeout=config.request_timeout,
        connect_timeout=config.connect_timeout,
        follow_redirects=config.follow_redirects,
    )


def dispatch(
    config: RequestConfig,
    *,
    transport_factory: TransportFactory | None = None,
    settings: HttpSettings | None = None,
) -> ResponseView:
    """Execute one exchange for ``config`` and return its ResponseView."""
    validate_config(config)

    factory = transport_factory or create_default_http_client
    request = build_request(config)
    client: HttpClient = factory(transport_settings(config, settings))
    try:
        logger.debug("Dispatching %s %s", request.method, request.url)
        try:
            response = client.request(request)
        except KeyboardInterrupt as exc:
            raise InterruptionError(f"HTTP request to {request.url} was interrupted") from exc
        except (httpx.HTTPError, OSError) as exc:
            raise TransportError(
                f"Error sending HTTP request: {exc}",
                category=categorize_exception(exc),
            ) from exc
    finally:
        client.close()

    logger.debug("Received %s from %s %s", response.status_code, request.method, request.url)
    if response.url is None:
        response.url = request.url
    return ResponseView.from_http_response(response)


__all__ = ["build_request", "dispatch", "transport_settings", "validate_config"]
