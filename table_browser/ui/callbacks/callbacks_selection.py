from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import ALL, Input, Output, State, exceptions

from table_browser.core.exceptions import InvalidRowModeError
from table_browser.ui.callbacks.callbacks_utils import (
    apply_row_mode_event,
    apply_selection_event,
    ids_from_pattern_list,
    parse_tables,
    try_parse_selection,
)
from table_browser.ui.helpers import HIDDEN, VISIBLE, row_mode_options, select_all_label
from table_browser.ui.ids import IDs

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_selection_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # 1. Checkboxes / Select All / Remove -> selection store
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.SELECTION, "data", allow_duplicate=True),
        Output({"type": IDs.Pattern.TABLE_SELECT, "index": ALL}, "value"),
        Output({"type": IDs.Pattern.ROW_MODE, "index": ALL}, "options"),
        Output({"type": IDs.Pattern.PREVIEW_CARD, "index": ALL}, "style"),
        Output(IDs.Control.SELECT_ALL_BTN, "children"),
        Input(IDs.Control.SELECT_ALL_BTN, "n_clicks"),
        Input({"type": IDs.Pattern.TABLE_SELECT, "index": ALL}, "value"),
        Input({"type": IDs.Pattern.TABLE_REMOVE, "index": ALL}, "n_clicks"),
        State(IDs.Store.SELECTION, "data"),
        State(IDs.Store.TABLES, "data"),
        prevent_initial_call=True,
    )
    def sync_selection(_select_all_clicks, checkbox_values, remove_clicks, selection_data, tables_data):
        table_ids = [t.id for t in parse_tables(tables_data)]

        checkbox_ids = ids_from_pattern_list(dash.ctx.inputs_list[1])
        remove_ids = ids_from_pattern_list(dash.ctx.inputs_list[2])
        checked = dict(zip(checkbox_ids, checkbox_values or []))

        selection = apply_selection_event(
            try_parse_selection(selection_data),
            table_ids,
            dash.ctx.triggered_id,
            checked=checked,
            clicks=dict(zip(remove_ids, remove_clicks or [])),
            default_mode=ctx.settings.default_row_mode,
        )

        logger.debug("Selection changed", extra={"n_selected": len(selection.selected)})

        radio_ids = ids_from_pattern_list(dash.ctx.outputs_list[2])
        card_ids = ids_from_pattern_list(dash.ctx.outputs_list[3])

        # Only push checkbox values that differ, so a user click is not echoed
        # back (which would trigger the table's fetch a second time)
        checkbox_out = [
            dash.no_update if bool(checked.get(tid)) == selection.is_selected(tid) else selection.is_selected(tid)
            for tid in checkbox_ids
        ]

        return (
            selection.to_dict(),
            checkbox_out,
            [row_mode_options(selection.is_selected(tid)) for tid in radio_ids],
            [VISIBLE if selection.is_selected(tid) else HIDDEN for tid in card_ids],
            select_all_label(selection, table_ids),
        )

    # ---------------------------------------------------------
    # 2. Row mode radios -> selection store
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.SELECTION, "data", allow_duplicate=True),
        Input({"type": IDs.Pattern.ROW_MODE, "index": ALL}, "value"),
        State(IDs.Store.SELECTION, "data"),
        prevent_initial_call=True,
    )
    def sync_row_modes(mode_values, selection_data):
        radio_ids = ids_from_pattern_list(dash.ctx.inputs_list[0])
        selection = try_parse_selection(selection_data)

        try:
            changed = apply_row_mode_event(
                selection,
                dash.ctx.triggered_id,
                dict(zip(radio_ids, mode_values or [])),
            )
        except InvalidRowModeError:
            logger.warning("Ignoring invalid row mode", extra={"trigger": str(dash.ctx.triggered_id)})
            raise exceptions.PreventUpdate

        if not changed:
            raise exceptions.PreventUpdate
        return selection.to_dict()
