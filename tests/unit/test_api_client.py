"""Unit tests for MailboxAPIClient."""

import base64
import json

import httpx
import pytest

from mbx.cli.api_client import DecodeError, MailboxAPIClient, ServerError, TransportError, basic_auth_header

BASE = "http://mbx.test/api"


def _page_body(page: int, page_count: int, ids: list[str]) -> dict:
    return {
        "page": page,
        "page_count": page_count,
        "entry_count": len(ids),
        "entries": [{"id": i, "from": f"{i}@example.com", "subject": "Hi", "message": "test"} for i in ids],
    }


@pytest.mark.unit
def test_list_page_returns_rows_and_next_page(mock_transport):
    transport = mock_transport(lambda req: httpx.Response(200, json=_page_body(0, 2, ["a", "b"])))
    client = MailboxAPIClient(BASE, transport=transport)

    rows, next_page = client.list_page(0)

    assert [r.id for r in rows] == ["a", "b"]
    assert rows[0].sender == "a@example.com"
    assert next_page == 1
    request = transport.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/api/entries/"
    assert request.url.params["page"] == "0"


@pytest.mark.unit
def test_list_page_last_page_has_no_next(mock_transport):
    transport = mock_transport(lambda req: httpx.Response(200, json=_page_body(1, 2, ["c"])))
    client = MailboxAPIClient(BASE, transport=transport)

    rows, next_page = client.list_page(1)

    assert [r.id for r in rows] == ["c"]
    assert next_page is None


@pytest.mark.unit
def test_list_page_malformed_json_is_decode_error(mock_transport):
    transport = mock_transport(lambda req: httpx.Response(200, text="{not json"))
    client = MailboxAPIClient(BASE, transport=transport)

    with pytest.raises(DecodeError):
        client.list_page(0)


@pytest.mark.unit
def test_list_page_wrong_shape_is_decode_error(mock_transport):
    transport = mock_transport(lambda req: httpx.Response(200, json={"entries": "nope"}))
    client = MailboxAPIClient(BASE, transport=transport)

    with pytest.raises(DecodeError):
        client.list_page(0)


@pytest.mark.unit
def test_server_error_message_is_verbatim(mock_transport):
    transport = mock_transport(lambda req: httpx.Response(404, json={"error": "document not found"}))
    client = MailboxAPIClient(BASE, transport=transport)

    with pytest.raises(ServerError) as excinfo:
        client.delete_entry("missing")

    assert str(excinfo.value) == "document not found"
    assert excinfo.value.status_code == 404
    assert excinfo.value.status_line == "404 Not Found"
    assert transport.requests[0].method == "DELETE"
    assert transport.requests[0].url.path == "/api/entry/missing"


@pytest.mark.unit
def test_server_error_without_json_falls_back_to_body(mock_transport):
    transport = mock_transport(lambda req: httpx.Response(502, text="bad gateway upstream"))
    client = MailboxAPIClient(BASE, transport=transport)

    with pytest.raises(ServerError) as excinfo:
        client.list_page(0)

    assert str(excinfo.value) == "bad gateway upstream"


@pytest.mark.unit
def test_connect_failure_is_transport_error(mock_transport):
    def _raise(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = MailboxAPIClient(BASE, transport=mock_transport(_raise))

    with pytest.raises(TransportError):
        client.list_page(0)


@pytest.mark.unit
def test_create_entry_posts_json_payload(mock_transport):
    transport = mock_transport(lambda req: httpx.Response(200, text=""))
    client = MailboxAPIClient(BASE, transport=transport)

    client.create_entry("a@b.com", "Hi", "test")

    request = transport.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/submit"
    assert json.loads(request.content) == {"from": "a@b.com", "subject": "Hi", "message": "test"}


@pytest.mark.unit
def test_create_entry_surfaces_validation_message(mock_transport):
    message = "'from' field must be a valid email address"
    transport = mock_transport(lambda req: httpx.Response(400, json={"error": message}))
    client = MailboxAPIClient(BASE, transport=transport)

    with pytest.raises(ServerError, match="valid email address"):
        client.create_entry("nope", "Hi", "test")


@pytest.mark.unit
def test_get_entry_returns_raw_body(mock_transport):
    raw = '{"id":"x1","from":"a@b.com","subject":"Hi","message":"test"}'
    transport = mock_transport(lambda req: httpx.Response(200, text=raw))
    client = MailboxAPIClient(BASE, transport=transport)

    assert client.get_entry("x1") == raw
    assert transport.requests[0].url.path == "/api/entry/x1"


@pytest.mark.unit
def test_auth_header_sent_only_with_both_credentials(mock_transport):
    transport = mock_transport(lambda req: httpx.Response(200, text=""))

    MailboxAPIClient(BASE, "admin", "secret", transport=transport).delete_entry("a")
    MailboxAPIClient(BASE, "admin", "", transport=transport).delete_entry("b")
    MailboxAPIClient(BASE, transport=transport).delete_entry("c")

    with_auth, user_only, anonymous = transport.requests
    expected = "Basic " + base64.b64encode(b"admin:secret").decode()
    assert with_auth.headers["Authorization"] == expected
    assert "Authorization" not in user_only.headers
    assert "Authorization" not in anonymous.headers


@pytest.mark.unit
def test_basic_auth_header_encoding():
    assert basic_auth_header("user", "p:ss") == "Basic dXNlcjpwOnNz"


@pytest.mark.unit
def test_list_page_null_entries_is_empty_page(mock_transport):
    body = {"page": 0, "page_count": 0, "entry_count": 0, "entries": None}
    transport = mock_transport(lambda req: httpx.Response(200, json=body))
    client = MailboxAPIClient(BASE, transport=transport)

    assert client.list_page(0) == ([], None)


@pytest.mark.unit
def test_entry_id_escaped_in_path(mock_transport):
    transport = mock_transport(lambda req: httpx.Response(200, text="{}"))
    client = MailboxAPIClient(BASE, transport=transport)

    client.get_entry("a/b?c#d")
    client.delete_entry("a/b?c#d")

    for request in transport.requests:
        assert request.url.raw_path == b"/api/entry/a%2Fb%3Fc%23d"
        assert request.url.query == b""
