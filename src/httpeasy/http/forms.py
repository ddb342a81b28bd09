# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""application/x-www-form-urlencoded body synthesis."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import quote_plus

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def encode_form_fields(fields: Mapping[str, str]) -> str:
    """
    Join ``name=value`` pairs with ``&``.

    Only values are percent-encoded (space becomes ``+``); names are emitted verbatim. Pairs follow
    the mapping's iteration order, which for a dict is insertion order.
    """
    return "&".join(f"{name}={quote_plus(str(value))}" for name, value in fields.items())


__all__ = ["FORM_CONTENT_TYPE", "encode_form_fields"]
