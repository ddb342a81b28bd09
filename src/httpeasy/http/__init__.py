# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubHttpClient
from .client import HttpClient, TransportFactory, create_default_http_client, shared_client_factory
from .forms import FORM_CONTENT_TYPE, encode_form_fields
from .headers import group_header_items, header_values
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse, RequestConfig, ResponseView

__all__ = [
    "FORM_CONTENT_TYPE",
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "RequestConfig",
    "ResponseView",
    "StubHttpClient",
    "TransportFactory",
    "create_default_http_client",
    "encode_form_fields",
    "group_header_items",
    "header_values",
    "shared_client_factory",
]
