# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fluent request builder."""

from __future__ import annotations

from .config import HttpSettings, load_http_settings
from .dispatch import dispatch
from .http.client import TransportFactory
from .http.forms import FORM_CONTENT_TYPE
from .http.models import RequestConfig, ResponseView

JSON_CONTENT_TYPE = "application/json"


class RequestBuilder:
    """
    Accumulates request configuration through chained calls and sends it.

    Every configuration method returns the builder itself. A builder is a single mutable object and
    is not safe to configure from several threads; use one builder per concurrent request. ``send``
    leaves the configuration untouched, so calling it again repeats the same request.

    Form fields take precedence: once any field is added the request goes out as a POST with the
    form-encoded body, regardless of ``set_method``/``put``/``delete`` or ``set_body`` calls made
    before or after.
    """

    def __init__(
        self,
        settings: HttpSettings | None = None,
        *,
        transport_factory: TransportFactory | None = None,
    ):
        self.settings = settings or load_http_settings()
        self._transport_factory = transport_factory
        self._url: str | None = None
        self._method = "GET"
        self._headers: dict[str, str] = {}
        self._body: str | None = None
        self._form_fields: dict[str, str] = {}
        self._connect_timeout = self.settings.connect_timeout
        self._request_timeout = self.settings.request_timeout
        self._follow_redirects = self.settings.follow_redirects
        self._verify_ssl = self.settings.verify_ssl

    @classmethod
    def create(
        cls,
        settings: HttpSettings | None = None,
        *,
        transport_factory: TransportFactory | None = None,
    ) -> RequestBuilder:
        return cls(settings, transport_factory=transport_factory)

    def set_url(self, url: str) -> RequestBuilder:
        self._url = url
        return self

    def set_header(self, name: str, value: str) -> RequestBuilder:
        self._headers[name] = value
        return self

    def use_json_content_type(self) -> RequestBuilder:
        return self.set_header("Content-Type", JSON_CONTENT_TYPE)

    def use_form_content_type(self) -> RequestBuilder:
        return self.set_header("Content-Type", FORM_CONTENT_TYPE)

    def set_body(self, text: str) -> RequestBuilder:
        self._body = text
        return self

    def set_method(self, name: str) -> RequestBuilder:
        self._method = name.upper()
        return self

    def add_form_field(self, name: str, value: str) -> RequestBuilder:
        self._form_fields[name] = value
        return self

    def set_connect_timeout_seconds(self, seconds: float) -> RequestBuilder:
        self._connect_timeout = float(seconds)
        return self

    def set_request_timeout_seconds(self, seconds: float) -> RequestBuilder:
        self._request_timeout = float(seconds)
        return self

    def set_follow_redirects(self, follow: bool) -> RequestBuilder:
        self._follow_redirects = bool(follow)
        return self

    def set_verify_ssl(self, verify: bool) -> RequestBuilder:
        self._verify_ssl = bool(verify)
        return self

    def get(self) -> RequestBuilder:
        return self.set_method("GET")

    def post(self) -> RequestBuilder:
        return self.set_method("POST")

    def put(self) -> RequestBuilder:
        return self.set_method("PUT")

    def delete(self) -> RequestBuilder:
        return self.set_method("DELETE")

    def snapshot(self) -> RequestConfig:
        """Freeze the current configuration; later builder calls do not affect it."""
        return RequestConfig(
            url=self._url,
            method=self._method,
            headers=dict(self._headers),
            body=self._body,
            form_fields=dict(self._form_fields),
            connect_timeout=self._connect_timeout,
            request_timeout=self._request_timeout,
            follow_redirects=self._follow_redirects,
            verify_ssl=self._verify_ssl,
        )

    def send(self) -> ResponseView:
        """
        Dispatch the configured request and block until it completes.

        Raises ConfigurationError when no URL is set (before any transport exists), TransportError
        when the exchange fails and InterruptionError when the blocked call is interrupted.
        """
        return dispatch(self.snapshot(), transport_factory=self._transport_factory, settings=self.settings)


__all__ = ["JSON_CONTENT_TYPE", "RequestBuilder"]
