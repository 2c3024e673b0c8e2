from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import MATCH, Input, Output, State, exceptions

from table_browser.services.export_service import export_table
from table_browser.ui.callbacks.callbacks_utils import try_parse_table_data
from table_browser.ui.helpers import error_alert, preview_body
from table_browser.ui.ids import IDs

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

SELECT_FIRST = "Select the table first."


def register_preview_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    @app.callback(
        Output({"type": IDs.Pattern.PREVIEW_BODY, "index": MATCH}, "children"),
        Output({"type": IDs.Pattern.TABLE_ERROR, "index": MATCH}, "children"),
        Input({"type": IDs.Pattern.TABLE_DATA, "index": MATCH}, "data"),
    )
    def render_preview(data):
        table_data = try_parse_table_data(data)
        return preview_body(table_data), error_alert(table_data.error if table_data else None)

    @app.callback(
        Output({"type": IDs.Pattern.PREVIEW_COLLAPSE, "index": MATCH}, "is_open"),
        Input({"type": IDs.Pattern.PREVIEW_TOGGLE, "index": MATCH}, "n_clicks"),
        State({"type": IDs.Pattern.PREVIEW_COLLAPSE, "index": MATCH}, "is_open"),
        prevent_initial_call=True,
    )
    def toggle_preview(n_clicks, is_open):
        if not n_clicks:
            raise exceptions.PreventUpdate
        return not is_open

    # dcc.Clipboard copies whatever `content` this callback returns
    @app.callback(
        Output({"type": IDs.Pattern.TABLE_COPY, "index": MATCH}, "content"),
        Output({"type": IDs.Pattern.COPY_STATUS, "index": MATCH}, "children"),
        Input({"type": IDs.Pattern.TABLE_COPY, "index": MATCH}, "n_clicks"),
        State({"type": IDs.Pattern.TABLE_DATA, "index": MATCH}, "data"),
        State({"type": IDs.Pattern.TABLE_SELECT, "index": MATCH}, "value"),
        prevent_initial_call=True,
    )
    def copy_table_data(n_clicks, data, selected):
        if not n_clicks:
            raise exceptions.PreventUpdate
        if not selected:
            return dash.no_update, SELECT_FIRST

        result = export_table(try_parse_table_data(data))
        if not result.ok:
            return dash.no_update, result.message
        return result.text, result.message
