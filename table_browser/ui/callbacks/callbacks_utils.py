from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence

from table_browser.core.exceptions import InvalidRowModeError
from table_browser.core.models import RowMode, Table, TableData
from table_browser.core.selection_state import SelectionState
from table_browser.ui.ids import IDs

logger = logging.getLogger(__name__)


def try_parse_selection(data: object) -> SelectionState:
    if not isinstance(data, dict) or not data:
        return SelectionState()
    try:
        return SelectionState.from_dict(data)
    except (InvalidRowModeError, TypeError, AttributeError):
        logger.exception("Invalid selection-state: %r", data)
        return SelectionState()


def try_parse_table_data(data: object) -> Optional[TableData]:
    if not isinstance(data, dict) or not data:
        return None
    try:
        return TableData.from_dict(data)
    except (KeyError, InvalidRowModeError, TypeError):
        logger.exception("Invalid table-data store")
        return None


def parse_tables(data: object) -> List[Table]:
    if not isinstance(data, list):
        return []
    tables: List[Table] = []
    for item in data:
        try:
            tables.append(Table.from_dict(item))
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping invalid table entry: %r", item)
    return tables


def _pattern(triggered_id: Any) -> tuple[Optional[str], Optional[str]]:
    if isinstance(triggered_id, dict):
        return triggered_id.get("type"), triggered_id.get("index")
    return None, None


def apply_selection_event(
        selection: SelectionState,
        table_ids: Sequence[str],
        triggered_id: Any,
        *,
        checked: Optional[dict] = None,
        clicks: Optional[dict] = None,
        default_mode: RowMode = RowMode.ONE,
) -> SelectionState:
    """
    Apply one user action to the selection.

    - select-all button: SelectionState.select_all over every loaded table
    - table checkbox: toggle only when the checkbox disagrees with the state,
      so re-fired callbacks (component insertion) are no-ops
    - remove button: deselect the table

    :param checked: table id -> checkbox value, for the checkbox trigger.
    :param clicks: table id -> n_clicks, for the remove trigger.
    """
    kind, table_id = _pattern(triggered_id)

    if triggered_id == IDs.Control.SELECT_ALL_BTN:
        selection.select_all(table_ids)
    elif kind == IDs.Pattern.TABLE_SELECT and table_id is not None:
        is_checked = bool((checked or {}).get(table_id))
        if is_checked != selection.is_selected(table_id):
            selection.toggle_table(table_id)
    elif kind == IDs.Pattern.TABLE_REMOVE and table_id is not None:
        if (clicks or {}).get(table_id) and selection.is_selected(table_id):
            selection.toggle_table(table_id)

    for tid in selection.selected:
        if tid not in selection.row_modes:
            selection.set_row_mode(tid, default_mode)

    return selection


def apply_row_mode_event(selection: SelectionState, triggered_id: Any, modes: dict) -> bool:
    """Record the row mode of the radio that fired. Returns False when nothing changed."""
    kind, table_id = _pattern(triggered_id)
    if kind != IDs.Pattern.ROW_MODE or table_id is None:
        return False

    value = modes.get(table_id)
    if value is None:
        return False

    mode = RowMode.parse(value)
    if selection.row_modes.get(table_id) is mode:
        return False
    selection.set_row_mode(table_id, mode)
    return True


def needs_fetch(
        triggered_id: Any,
        *,
        selected: bool,
        mode: RowMode,
        cached: Optional[TableData],
) -> bool:
    """
    Decide whether a table's data must be (re)requested.

    A table that is not selected never fetches (its cache is kept). Selecting
    a table reuses a clean cache fetched with the same row mode; any other
    trigger (row mode, attribute pickers) refetches.
    """
    if not selected:
        return False

    kind, _ = _pattern(triggered_id)
    selection_trigger = triggered_id is None or kind == IDs.Pattern.TABLE_SELECT
    if selection_trigger and cached is not None:
        return cached.row_mode is not mode or cached.error is not None
    return True


def ids_from_pattern_list(items: Iterable[dict]) -> List[str]:
    """Table ids, in order, from a dash.ctx inputs_list/outputs_list entry."""
    return [item["id"]["index"] for item in items]


def match_index(entry: Any) -> str:
    """Table id of a MATCH input/output entry from dash.ctx."""
    if isinstance(entry, list):
        entry = entry[0]
    return entry["id"]["index"]
