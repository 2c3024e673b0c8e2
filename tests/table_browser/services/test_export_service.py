from __future__ import annotations

import json

from table_browser.core.models import RowMode, TableData
from table_browser.services.export_service import COPY_EMPTY, COPY_OK, export_table, serialize_table_data


def test_serialize_uses_two_space_indent_and_key_order():
    text = serialize_table_data([{"id": "c1"}], [])

    assert text == '{\n  "columns": [\n    {\n      "id": "c1"\n    }\n  ],\n  "rows": []\n}'


def test_serialize_keeps_non_ascii_text():
    text = serialize_table_data([], [{"values": {"Name": "Zoë"}}])

    assert "Zoë" in text
    assert json.loads(text)["rows"][0]["values"]["Name"] == "Zoë"


def test_export_table_ok():
    data = TableData(table_id="t1", row_mode=RowMode.ONE, columns=[{"id": "c1"}], rows=[{"id": "r1"}])

    result = export_table(data)

    assert result.ok
    assert result.message == COPY_OK
    assert json.loads(result.text) == {"columns": [{"id": "c1"}], "rows": [{"id": "r1"}]}
    # stored state untouched
    assert data.columns == [{"id": "c1"}]


def test_export_table_without_data():
    result = export_table(None)

    assert not result.ok
    assert result.text == ""
    assert result.message == COPY_EMPTY


def test_export_table_unserialisable_data_fails_cleanly():
    data = TableData(table_id="t1", row_mode=RowMode.ONE, rows=[{"id": object()}])

    result = export_table(data)

    assert not result.ok
