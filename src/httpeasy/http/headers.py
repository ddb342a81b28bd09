# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header utilities.

HTTP header field names are case-insensitive (RFC 9110). Outbound headers are kept exactly as the
caller spelled them; inbound headers are grouped by name with every value kept in arrival order,
and lookups ignore case.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence


def group_header_items(items: Iterable[tuple[str, str]] | None) -> dict[str, tuple[str, ...]]:
    """Group ``(name, value)`` pairs into ``name -> values`` preserving duplicates and order."""
    grouped: dict[str, list[str]] = {}
    for name, value in items or ():
        if name is None:
            continue
        grouped.setdefault(str(name), []).append("" if value is None else str(value))
    return {name: tuple(values) for name, values in grouped.items()}


def header_values(headers: Mapping[str, Sequence[str]] | None, name: str) -> tuple[str, ...]:
    """
    Return all values for ``name`` using case-insensitive key matching.

    Values from keys differing only in case are concatenated in mapping order.
    """
    if not headers or not name:
        return ()

    lower = str(name).lower()
    values: list[str] = []
    for key, key_values in headers.items():
        if str(key).lower() == lower:
            values.extend(key_values)
    return tuple(values)


__all__ = ["group_header_items", "header_values"]
