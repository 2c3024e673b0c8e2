from __future__ import annotations

from table_browser.core.models import RowMode, TableData
from table_browser.core.selection_state import SelectionState
from table_browser.ui.callbacks.callbacks_utils import (
    apply_row_mode_event,
    apply_selection_event,
    needs_fetch,
    parse_tables,
    try_parse_selection,
    try_parse_table_data,
)
from table_browser.ui.ids import IDs, pattern_id

ALL_IDS = ["t1", "t2", "t3"]


def _checkbox(table_id):
    return pattern_id(IDs.Pattern.TABLE_SELECT, table_id)


def test_checkbox_toggles_and_assigns_default_mode():
    st = apply_selection_event(
        SelectionState(),
        ALL_IDS,
        _checkbox("t2"),
        checked={"t1": False, "t2": True, "t3": False},
        default_mode=RowMode.ALL,
    )

    assert st.selected == {"t2"}
    assert st.row_modes == {"t2": RowMode.ALL}


def test_checkbox_agreeing_with_state_is_a_no_op():
    st = apply_selection_event(
        SelectionState(selected={"t2"}, row_modes={"t2": RowMode.NONE}),
        ALL_IDS,
        _checkbox("t2"),
        checked={"t2": True},
    )

    assert st.selected == {"t2"}
    assert st.row_modes == {"t2": RowMode.NONE}


def test_select_all_button_scenario():
    st = SelectionState()
    for tid in ALL_IDS:
        st = apply_selection_event(st, ALL_IDS, _checkbox(tid), checked={tid: True})
    assert st.selected == set(ALL_IDS)

    st = apply_selection_event(st, ALL_IDS, IDs.Control.SELECT_ALL_BTN)
    assert st.selected == set()

    st = apply_selection_event(st, ALL_IDS, IDs.Control.SELECT_ALL_BTN)
    assert st.selected == set(ALL_IDS)


def test_remove_button_deselects_only_when_clicked():
    remove = pattern_id(IDs.Pattern.TABLE_REMOVE, "t1")

    st = apply_selection_event(SelectionState(selected={"t1"}), ALL_IDS, remove, clicks={"t1": None})
    assert st.selected == {"t1"}

    st = apply_selection_event(st, ALL_IDS, remove, clicks={"t1": 1})
    assert st.selected == set()


def test_row_mode_event_records_mode():
    st = SelectionState(selected={"t1"})
    trigger = pattern_id(IDs.Pattern.ROW_MODE, "t1")

    assert apply_row_mode_event(st, trigger, {"t1": "All"})
    assert st.row_modes["t1"] is RowMode.ALL
    # same value again: nothing to store
    assert not apply_row_mode_event(st, trigger, {"t1": "All"})
    # not a radio trigger
    assert not apply_row_mode_event(st, None, {"t1": "0"})


def test_needs_fetch():
    cached = TableData(table_id="t1", row_mode=RowMode.ONE)
    select = _checkbox("t1")
    radio = pattern_id(IDs.Pattern.ROW_MODE, "t1")

    assert not needs_fetch(select, selected=False, mode=RowMode.ONE, cached=None)
    assert needs_fetch(select, selected=True, mode=RowMode.ONE, cached=None)
    # re-selecting reuses a clean cache with the same mode
    assert not needs_fetch(select, selected=True, mode=RowMode.ONE, cached=cached)
    assert needs_fetch(select, selected=True, mode=RowMode.ALL, cached=cached)
    # row mode or attribute changes always refetch
    assert needs_fetch(radio, selected=True, mode=RowMode.ONE, cached=cached)
    assert needs_fetch(IDs.Control.COLUMN_ATTRIBUTES, selected=True, mode=RowMode.ONE, cached=cached)


def test_needs_fetch_retries_after_error():
    cached = TableData(table_id="t1", row_mode=RowMode.ONE, error="Failed")

    assert needs_fetch(_checkbox("t1"), selected=True, mode=RowMode.ONE, cached=cached)


def test_parsers_tolerate_bad_store_data():
    assert try_parse_selection(None) == SelectionState()
    assert try_parse_selection({"row_modes": {"t1": "bogus"}}) == SelectionState()
    assert try_parse_table_data({}) is None
    assert try_parse_table_data({"row_mode": "1"}) is None
    assert parse_tables(None) == []
    assert [t.id for t in parse_tables([{"id": "t1", "name": "A"}, {"name": "no id"}])] == ["t1"]
