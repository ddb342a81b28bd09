# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpeasy CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..builder import RequestBuilder
from ..config import HttpSettings, load_http_settings
from ..errors import HttpEasyError, TransportError
from ..http.client import TransportFactory
from ..http.models import ResponseView
from ..log import setup_logging

CLI_TEXT_TRUNCATION_BYTES = 64 * 1024


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send a single HTTP request and print the response")
    parser.add_argument("url", help="Target URL")
    parser.add_argument("-X", "--method", default="GET", help="HTTP method (default: GET)")
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="NAME:VALUE",
        help="Request header; repeat for several headers",
    )
    parser.add_argument("-d", "--data", help="Raw request body")
    parser.add_argument(
        "-F",
        "--form",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Form field; any form field turns the request into a form-encoded POST",
    )
    parser.add_argument("--json-body", action="store_true", help="Send Content-Type: application/json")
    parser.add_argument("--no-redirects", action="store_true", help="Return 3xx responses instead of following them")
    parser.add_argument("--connect-timeout", type=float, help="Connect timeout in seconds")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("-i", "--include", action="store_true", help="Print response headers")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    return parser


def _split_pair(raw: str, separator: str) -> tuple[str, str]:
    name, sep, value = raw.partition(separator)
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME{separator}VALUE, got {raw!r}")
    return name.strip(), value.strip() if separator == ":" else value


def _truncate_text_bytes(text: str, max_bytes: int) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    suffix = "...[truncated]"
    keep = max_bytes - len(suffix.encode("utf-8"))
    if keep <= 0:
        return suffix.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")
    return raw[:keep].decode("utf-8", errors="ignore") + suffix


def configure_builder(
    args: argparse.Namespace,
    settings: HttpSettings | None = None,
    transport_factory: TransportFactory | None = None,
) -> RequestBuilder:
    """Translate parsed arguments into a configured RequestBuilder."""
    builder = RequestBuilder.create(settings, transport_factory=transport_factory).set_url(args.url).set_method(args.method)
    if args.json_body:
        builder.use_json_content_type()
    for raw in args.header:
        name, value = _split_pair(raw, ":")
        builder.set_header(name, value)
    if args.data is not None:
        builder.set_body(args.data)
    if args.form:
        builder.use_form_content_type()
        for raw in args.form:
            name, value = _split_pair(raw, "=")
            builder.add_form_field(name, value)
    if args.no_redirects:
        builder.set_follow_redirects(False)
    if args.connect_timeout is not None:
        builder.set_connect_timeout_seconds(args.connect_timeout)
    if args.timeout is not None:
        builder.set_request_timeout_seconds(args.timeout)
    if args.ignore_ssl_errors:
        builder.set_verify_ssl(False)
    return builder


def _print_json(response: ResponseView) -> None:
    payload: dict[str, Any] = response.to_dict()
    payload["body"] = _truncate_text_bytes(payload["body"] or "", CLI_TEXT_TRUNCATION_BYTES)
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(response: ResponseView, *, include_headers: bool) -> None:
    print(f"Status: {response.status()}")
    if include_headers:
        for name, values in response.headers().items():
            for value in values:
                print(f"{name}: {value}")
        print()
    print(_truncate_text_bytes(response.body() or "", CLI_TEXT_TRUNCATION_BYTES))


def main(argv: list[str] | None = None, *, transport_factory: TransportFactory | None = None) -> int:
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        builder = configure_builder(args, load_http_settings(), transport_factory)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    try:
        response = builder.send()
    except TransportError as exc:
        print(f"error: {exc} ({exc.reason})", file=sys.stderr)
        return 2
    except HttpEasyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        _print_json(response)
    else:
        _pretty_print(response, include_headers=args.include)

    return 0 if response.is_ok() else 1


if __name__ == "__main__":
    raise SystemExit(main())
