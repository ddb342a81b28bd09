# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for httpeasy."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"httpeasy/{__version__}"
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_REQUEST_TIMEOUT = 10.0


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """Per-request transport defaults."""

    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    follow_redirects: bool = True
    verify_ssl: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        connect_timeout = _float_env("HTTPEASY_CONNECT_TIMEOUT", cls.connect_timeout)
        if connect_timeout <= 0:
            connect_timeout = cls.connect_timeout
        request_timeout = _float_env("HTTPEASY_REQUEST_TIMEOUT", cls.request_timeout)
        if request_timeout <= 0:
            request_timeout = cls.request_timeout
        return cls(
            connect_timeout=connect_timeout,
            request_timeout=request_timeout,
            follow_redirects=_bool_env("HTTPEASY_REDIRECTS", cls.follow_redirects),
            verify_ssl=_bool_env("HTTPEASY_VERIFY_SSL", cls.verify_ssl),
            user_agent=os.getenv("HTTPEASY_USER_AGENT", cls.user_agent),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
