from __future__ import annotations

import httpx
import pytest

from table_browser.core.exceptions import DocApiError
from table_browser.services.doc_api import DocApiClient

BASE_URL = "https://api.example.test/v1"


def _client(handler) -> DocApiClient:
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return DocApiClient("secret-token", base_url=BASE_URL, client=http)


def test_list_tables_sends_bearer_token_and_parses_items():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/docs/doc1/tables"
        assert request.headers["Authorization"] == "Bearer secret-token"
        return httpx.Response(
            200,
            json={"items": [{"id": "t1", "name": "Sales", "rowCount": 10, "updatedAt": "2024-01-01T00:00:00Z"}]},
        )

    tables = _client(handler).list_tables("doc1")

    assert [t.id for t in tables] == ["t1"]
    assert tables[0].row_count == 10


def test_list_tables_follows_pages():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params.get("pageToken") == "p2":
            return httpx.Response(200, json={"items": [{"id": "t2", "name": "B"}]})
        return httpx.Response(200, json={"items": [{"id": "t1", "name": "A"}], "nextPageToken": "p2"})

    tables = _client(handler).list_tables("doc1")

    assert [t.id for t in tables] == ["t1", "t2"]


def test_list_rows_with_limit_sends_limit_and_value_format():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"items": [{"id": "r1"}], "nextPageToken": "more"},
        )

    rows = _client(handler).list_rows("doc1", "t1", limit=1)

    assert rows == [{"id": "r1"}]
    assert len(seen) == 1
    assert seen[0].url.path == "/v1/docs/doc1/tables/t1/rows"
    assert seen[0].url.params["limit"] == "1"
    assert seen[0].url.params["valueFormat"] == "simpleWithArrays"


def test_list_rows_unbounded_omits_limit_and_reads_every_page():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        token = request.url.params.get("pageToken")
        if token is None:
            return httpx.Response(200, json={"items": [{"id": "r1"}, {"id": "r2"}], "nextPageToken": "n"})
        return httpx.Response(200, json={"items": [{"id": "r3"}]})

    rows = _client(handler).list_rows("doc1", "t1")

    assert [r["id"] for r in rows] == ["r1", "r2", "r3"]
    assert "limit" not in seen[0].url.params
    assert len(seen) == 2
    assert seen[1].url.params["pageToken"] == "n"
    assert seen[1].url.params["valueFormat"] == "simpleWithArrays"


def test_list_rows_zero_limit_makes_no_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert _client(handler).list_rows("doc1", "t1", limit=0) == []


def test_ids_are_url_quoted():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.raw_path.startswith(b"/v1/docs/doc%2F1/tables/grid-%20x/columns")
        return httpx.Response(200, json={"items": []})

    assert _client(handler).list_columns("doc/1", "grid- x") == []


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        (401, "unauthorized"),
        (403, "unauthorized"),
        (404, "not_found"),
        (429, "rate_limited"),
        (500, "request_failed"),
    ],
)
def test_http_errors_are_mapped(status_code: int, expected: str):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"message": "nope"})

    with pytest.raises(DocApiError) as exc_info:
        _client(handler).list_columns("doc1", "t1")

    assert exc_info.value.code == expected
    assert exc_info.value.status_code == status_code


def test_transport_errors_are_mapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(DocApiError) as exc_info:
        _client(handler).list_tables("doc1")

    assert exc_info.value.code == "network_error"


@pytest.mark.parametrize("body", [b"not json", b"[1, 2]", b'{"items": "x"}'])
def test_invalid_bodies_are_rejected(body: bytes):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body)

    with pytest.raises(DocApiError) as exc_info:
        _client(handler).list_columns("doc1", "t1")

    assert exc_info.value.code == "invalid_response"


def test_injected_client_is_not_closed():
    http = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"items": []})))

    with DocApiClient("t", base_url=BASE_URL, client=http) as api:
        api.list_tables("doc1")

    assert not http.is_closed
    http.close()


def test_limited_continuation_pages_keep_value_format():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if "pageToken" not in request.url.params:
            return httpx.Response(200, json={"items": [{"id": "r1"}], "nextPageToken": "n"})
        return httpx.Response(200, json={"items": [{"id": "r2"}, {"id": "r3"}]})

    rows = _client(handler).list_rows("doc1", "t1", limit=2)

    assert [r["id"] for r in rows] == ["r1", "r2"]
    assert seen[1].url.params["limit"] == "1"
    assert seen[1].url.params["valueFormat"] == "simpleWithArrays"


def test_non_ascii_token_is_rejected_before_any_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    http = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(DocApiError) as excinfo:
        DocApiClient("tökén", base_url=BASE_URL, client=http)

    assert excinfo.value.code == "invalid_credentials"
