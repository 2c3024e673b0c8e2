from __future__ import annotations

from table_browser.core.exceptions import DocApiError
from table_browser.core.models import RowMode, TableData
from table_browser.services.fetch_service import COLUMNS_ERROR, ROWS_ERROR, TableDataFetcher

COLUMNS = [{"id": "c1", "name": "Amount", "type": "currency"}]
ROWS = [
    {"id": "r1", "type": "row", "values": {"Amount": "", "Date": "2024-01-01"}},
    {"id": "r2", "type": "row", "values": {"Amount": 5, "Date": ""}},
]


class _FakeApi:
    def __init__(self, *, fail_columns=False, fail_rows=False):
        self.fail_columns = fail_columns
        self.fail_rows = fail_rows
        self.row_calls = []
        self.column_calls = []

    def list_columns(self, doc_id, table_id):
        self.column_calls.append((doc_id, table_id))
        if self.fail_columns:
            raise DocApiError("request_failed", status_code=500)
        return [dict(c) for c in COLUMNS]

    def list_rows(self, doc_id, table_id, *, limit=None):
        self.row_calls.append((doc_id, table_id, limit))
        if self.fail_rows:
            raise DocApiError("network_error")
        items = [dict(r) for r in ROWS]
        return items if limit is None else items[:limit]


def _fetch(api, mode, previous=None):
    return TableDataFetcher(api, "doc1").fetch(
        "t1",
        mode,
        column_attributes=["id", "name"],
        row_attributes=["id", "values"],
        previous=previous,
    )


def test_mode_none_never_requests_rows():
    api = _FakeApi()

    data = _fetch(api, RowMode.NONE)

    assert api.row_calls == []
    assert data.rows == []
    assert data.columns == [{"id": "c1", "name": "Amount"}]
    assert data.error is None


def test_mode_one_requests_a_single_row():
    api = _FakeApi()

    data = _fetch(api, "1")

    assert api.row_calls == [("doc1", "t1", 1)]
    assert data.rows == [{"id": "r1", "values": {"Date": "2024-01-01"}}]
    assert data.row_mode is RowMode.ONE


def test_mode_all_requests_unbounded_rows():
    api = _FakeApi()

    data = _fetch(api, RowMode.ALL)

    assert api.row_calls == [("doc1", "t1", None)]
    assert data.rows == [
        {"id": "r1", "values": {"Date": "2024-01-01"}},
        {"id": "r2", "values": {"Amount": 5}},
    ]


def test_row_failure_keeps_previous_rows_and_reports_error():
    previous = TableData(table_id="t1", row_mode=RowMode.ONE, columns=[{"id": "old"}], rows=[{"id": "kept"}])

    data = _fetch(_FakeApi(fail_rows=True), RowMode.ALL, previous=previous)

    assert data.rows == [{"id": "kept"}]
    assert data.columns == [{"id": "c1", "name": "Amount"}]
    assert data.error == ROWS_ERROR


def test_column_failure_without_previous_yields_empty_columns():
    data = _fetch(_FakeApi(fail_columns=True), RowMode.ONE)

    assert data.columns == []
    assert data.rows == [{"id": "r1", "values": {"Date": "2024-01-01"}}]
    assert data.error == COLUMNS_ERROR


def test_both_failures_are_reported():
    data = _fetch(_FakeApi(fail_columns=True, fail_rows=True), RowMode.ALL)

    assert COLUMNS_ERROR in data.error
    assert ROWS_ERROR in data.error
