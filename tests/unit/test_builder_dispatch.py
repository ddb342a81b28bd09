# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from httpeasy import RequestBuilder
from httpeasy.config import HttpSettings
from httpeasy.dispatch import build_request, dispatch, transport_settings
from httpeasy.errors import ConfigurationError, ErrorCategory, InterruptionError, TransportError
from httpeasy.http.adapters import StubHttpClient
from httpeasy.http.client import shared_client_factory
from httpeasy.http.models import HttpResponse, RequestConfig

ITEM_URL = "https://example.test/items/1"
ITEMS_URL = "https://example.test/items"


def _builder(stub: StubHttpClient) -> RequestBuilder:
    return RequestBuilder.create(HttpSettings(), transport_factory=stub.factory())


def _ok(text: str = "{}") -> HttpResponse:
    return HttpResponse(status_code=200, headers=[("content-type", "application/json")], text=text)


def test_get_with_default_config():
    stub = StubHttpClient({ITEM_URL: _ok('{"id": 1}')})

    response = _builder(stub).set_url(ITEM_URL).send()

    assert response.status() == 200
    assert response.body()
    sent = stub.requests[0]
    assert sent.url == ITEM_URL
    assert sent.method == "GET"
    assert sent.body is None
    assert sent.timeout == 10.0
    assert sent.connect_timeout == 10.0
    assert sent.follow_redirects is True


@pytest.mark.parametrize("url", ["http://a", "https://example.test/path?q=1&r=two#frag", "not even a url"])
def test_url_is_used_verbatim(url):
    stub = StubHttpClient({url: _ok()})
    _builder(stub).set_url(url).send()
    assert stub.requests[0].url == url
    assert stub.requests[0].method == "GET"


def test_post_json_body():
    payload = '{"title":"foo","body":"bar","userId":1}'
    stub = StubHttpClient({ITEMS_URL: HttpResponse(status_code=201, text=payload)})

    response = _builder(stub).set_url(ITEMS_URL).post().use_json_content_type().set_body(payload).send()

    assert response.status() == 201
    sent = stub.requests[0]
    assert sent.method == "POST"
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.body == payload


def test_header_last_write_wins():
    stub = StubHttpClient({ITEM_URL: _ok()})
    _builder(stub).set_url(ITEM_URL).set_header("X-Token", "one").set_header("X-Token", "two").send()
    assert stub.requests[0].headers == {"X-Token": "two"}


def test_set_method_is_upper_cased():
    stub = StubHttpClient({ITEM_URL: _ok()})
    _builder(stub).set_url(ITEM_URL).set_method("patch").set_body("x").send()
    assert stub.requests[0].method == "PATCH"


@pytest.mark.parametrize(("verb", "expected"), [("post", "POST"), ("put", "PUT"), ("delete", "DELETE"), ("get", "GET")])
def test_method_shorthands(verb, expected):
    stub = StubHttpClient({ITEM_URL: _ok()})
    builder = _builder(stub).set_url(ITEM_URL).set_method("OPTIONS")
    getattr(builder, verb)().send()
    assert stub.requests[0].method == expected


def test_form_fields_are_encoded():
    stub = StubHttpClient({ITEMS_URL: _ok()})

    _builder(stub).set_url(ITEMS_URL).use_form_content_type().add_form_field("username", "johndoe").add_form_field("password", "secret").send()

    sent = stub.requests[0]
    assert sent.method == "POST"
    assert sent.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert set(sent.body.split("&")) == {"username=johndoe", "password=secret"}
    # dicts iterate in insertion order
    assert sent.body == "username=johndoe&password=secret"


def test_form_values_are_url_encoded_but_names_are_not():
    stub = StubHttpClient({ITEMS_URL: _ok()})
    _builder(stub).set_url(ITEMS_URL).add_form_field("full name", "Jane Doe & co").send()
    assert stub.requests[0].body == "full name=Jane+Doe+%26+co"


def test_form_field_last_write_wins():
    stub = StubHttpClient({ITEMS_URL: _ok()})
    _builder(stub).set_url(ITEMS_URL).add_form_field("a", "1").add_form_field("a", "2").send()
    assert stub.requests[0].body == "a=2"


@pytest.mark.parametrize("verb", ["put", "delete", "get"])
def test_form_fields_force_post_whatever_the_method_order(verb):
    stub = StubHttpClient({ITEMS_URL: _ok()})

    before = _builder(stub).set_url(ITEMS_URL)
    getattr(before, verb)().add_form_field("k", "v").send()
    after = _builder(stub).set_url(ITEMS_URL).add_form_field("k", "v")
    getattr(after, verb)().send()

    assert [request.method for request in stub.requests] == ["POST", "POST"]
    assert [request.body for request in stub.requests] == ["k=v", "k=v"]


def test_form_fields_discard_raw_body():
    stub = StubHttpClient({ITEMS_URL: _ok()})
    _builder(stub).set_url(ITEMS_URL).put().set_body('{"ignored": true}').add_form_field("k", "v").send()
    assert stub.requests[0].method == "POST"
    assert stub.requests[0].body == "k=v"


def test_no_body_when_neither_form_nor_body():
    stub = StubHttpClient({ITEMS_URL: _ok()})
    _builder(stub).set_url(ITEMS_URL).post().send()
    assert stub.requests[0].method == "POST"
    assert stub.requests[0].body is None


def test_empty_body_is_still_sent():
    config = RequestConfig(url=ITEMS_URL, method="POST", body="")
    assert build_request(config).body == ""


def test_timeouts_and_redirects_reach_transport():
    stub = StubHttpClient({ITEM_URL: _ok()})

    (
        _builder(stub)
        .set_url(ITEM_URL)
        .set_connect_timeout_seconds(3)
        .set_request_timeout_seconds(7)
        .set_follow_redirects(False)
        .set_verify_ssl(False)
        .send()
    )

    settings = stub.settings[0]
    assert settings.connect_timeout == 3.0
    assert settings.request_timeout == 7.0
    assert settings.follow_redirects is False
    assert settings.verify_ssl is False
    sent = stub.requests[0]
    assert sent.timeout == 7.0
    assert sent.connect_timeout == 3.0
    assert sent.follow_redirects is False


def test_builder_defaults_come_from_settings():
    stub = StubHttpClient({ITEM_URL: _ok()})
    settings = HttpSettings(connect_timeout=1.0, request_timeout=2.0, follow_redirects=False)
    RequestBuilder(settings, transport_factory=stub.factory()).set_url(ITEM_URL).send()
    assert stub.requests[0].timeout == 2.0
    assert stub.requests[0].connect_timeout == 1.0
    assert stub.requests[0].follow_redirects is False


def test_transport_settings_keep_base_user_agent():
    settings = transport_settings(RequestConfig(url=ITEM_URL), HttpSettings(user_agent="UA/9"))
    assert settings.user_agent == "UA/9"


def test_fresh_transport_per_send_and_builder_is_reusable():
    stub = StubHttpClient({ITEM_URL: _ok()})
    builder = _builder(stub).set_url(ITEM_URL).set_header("X", "1")

    builder.send()
    builder.send()

    assert len(stub.settings) == 2
    assert stub.close_count == 2
    assert stub.requests[0] == stub.requests[1]


def test_snapshot_is_isolated_from_later_calls():
    builder = RequestBuilder(HttpSettings()).set_url(ITEM_URL).set_header("X", "1")
    snapshot = builder.snapshot()
    builder.set_header("X", "2").add_form_field("a", "b").set_url("http://other")
    assert snapshot.url == ITEM_URL
    assert snapshot.headers == {"X": "1"}
    assert snapshot.form_fields == {}


@pytest.mark.parametrize("url", [None, ""])
def test_missing_url_fails_before_any_transport(url):
    def factory(settings):
        raise AssertionError("transport must not be created")

    builder = RequestBuilder(HttpSettings(), transport_factory=factory)
    if url is not None:
        builder.set_url(url)

    with pytest.raises(ConfigurationError, match="URL must be set"):
        builder.send()


def test_transport_failure_is_wrapped():
    cause = httpx.ConnectError("Connection refused")
    stub = StubHttpClient({ITEM_URL: cause})

    with pytest.raises(TransportError) as excinfo:
        _builder(stub).set_url(ITEM_URL).send()

    assert "Connection refused" in str(excinfo.value)
    assert excinfo.value.__cause__ is cause
    assert excinfo.value.category == ErrorCategory.CONNECTION_ERROR
    assert stub.close_count == 1


def test_timeout_is_wrapped_as_transport_error():
    stub = StubHttpClient({ITEM_URL: httpx.ReadTimeout("timed out")})
    with pytest.raises(TransportError) as excinfo:
        _builder(stub).set_url(ITEM_URL).send()
    assert excinfo.value.category == ErrorCategory.TIMEOUT


def test_os_errors_are_wrapped():
    stub = StubHttpClient({ITEM_URL: ConnectionResetError("reset by peer")})
    with pytest.raises(TransportError, match="reset by peer"):
        _builder(stub).set_url(ITEM_URL).send()


def test_interruption_is_distinct_from_transport_error():
    interrupt = KeyboardInterrupt()
    stub = StubHttpClient({ITEM_URL: interrupt})

    with pytest.raises(InterruptionError) as excinfo:
        _builder(stub).set_url(ITEM_URL).send()

    assert not isinstance(excinfo.value, TransportError)
    assert excinfo.value.__cause__ is interrupt
    assert stub.close_count == 1


def test_unexpected_errors_propagate_unchanged():
    stub = StubHttpClient({ITEM_URL: ValueError("bug")})
    with pytest.raises(ValueError, match="bug"):
        _builder(stub).set_url(ITEM_URL).send()


def test_response_url_defaults_to_request_url():
    stub = StubHttpClient({ITEM_URL: _ok()})
    assert _builder(stub).set_url(ITEM_URL).send().url == ITEM_URL


def _redirecting_client() -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(302, headers={"Location": "https://example.test/new"})
        return httpx.Response(200, text="moved here")

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_redirect_not_followed_returns_302():
    with _redirecting_client() as client:
        response = RequestBuilder(HttpSettings(), transport_factory=shared_client_factory(client)).set_url("https://example.test/old").set_follow_redirects(False).send()
    assert response.status() == 302
    assert response.header("Location") == "https://example.test/new"
    assert response.is_ok() is False


def test_redirect_followed_by_default():
    with _redirecting_client() as client:
        response = RequestBuilder(HttpSettings(), transport_factory=shared_client_factory(client)).set_url("https://example.test/old").send()
    assert response.status() == 200
    assert response.body() == "moved here"
    assert response.url == "https://example.test/new"


def test_dispatch_with_httpx_mock_transport_end_to_end():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, headers=[("X-Multi", "1"), ("X-Multi", "2")], text='{"ok": true}')

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        config = RequestConfig(url=ITEMS_URL, method="DELETE", headers={"Authorization": "Bearer t"}, form_fields={"q": "a b"})
        response = dispatch(config, transport_factory=shared_client_factory(client), settings=HttpSettings())

    assert seen[0].method == "POST"
    assert seen[0].content == b"q=a+b"
    assert seen[0].headers["Authorization"] == "Bearer t"
    assert response.header("x-multi") == "1"
    assert [value for name, values in response.headers().items() if name.lower() == "x-multi" for value in values] == ["1", "2"]
    assert response.as_json() == '{"ok": true}'
