# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
httpeasy package entrypoint.

A fluent request builder over a synchronous httpx transport. Requests are assembled through chained
RequestBuilder calls and dispatched one exchange at a time; results come back as immutable
ResponseView objects. The transport is injectable through a factory invoked once per dispatch.
"""

from .builder import RequestBuilder
from .config import HttpSettings, load_http_settings
from .dispatch import dispatch
from .errors import (
    ConfigurationError,
    ErrorCategory,
    FormatError,
    HttpEasyError,
    InterruptionError,
    TransportError,
)
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    RequestConfig,
    ResponseView,
    create_default_http_client,
    shared_client_factory,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "ConfigurationError",
    "ErrorCategory",
    "FormatError",
    "HttpClient",
    "HttpEasyError",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "InterruptionError",
    "RequestBuilder",
    "RequestConfig",
    "ResponseView",
    "TransportError",
    "create_default_http_client",
    "dispatch",
    "load_http_settings",
    "setup_logging",
    "shared_client_factory",
    "__version__",
]
