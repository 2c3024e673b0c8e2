from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Tuple

import dash
import dash_bootstrap_components as dbc
from dash import Input, Output, State, exceptions

from table_browser.core.exceptions import DocApiError
from table_browser.services.session_service import Credentials, SessionContext, describe_api_error
from table_browser.ui.helpers import EMPTY_TABLES_TEXT, build_preview_cards, build_table_list, select_all_label
from table_browser.ui.ids import IDs

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS = "Enter both an API token and a document ID."
UNEXPECTED_ERROR = "Failed to fetch tables due to an unexpected error. Please try again."


def _status_only(message: str, color: str) -> Tuple[Any, ...]:
    status = dbc.Alert(message, color=color, className="mb-0 py-2")
    return (dash.no_update,) * 3 + (status,) + (dash.no_update,) * 3


def load_tables_outputs(ctx: AppConfig, api_token: Optional[str], doc_id: Optional[str]) -> Tuple[Any, ...]:
    """
    Outputs of the load button, in callback order:
    credentials, tables, selection, status, table list, preview cards, select-all label.

    On failure only the status changes; previously loaded tables stay.
    """
    credentials = Credentials.from_dict({"api_token": api_token, "doc_id": doc_id})
    if not credentials.is_complete:
        return _status_only(MISSING_CREDENTIALS, "warning")

    session = SessionContext(credentials=credentials)
    try:
        tables = session.load_tables(ctx.client_factory)
    except DocApiError as e:
        logger.error(
            "Error fetching tables",
            extra={"doc_id": credentials.doc_id, "error": str(e)},
        )
        return _status_only(describe_api_error(e), "danger")
    except Exception:
        logger.exception("Unexpected error fetching tables", extra={"doc_id": credentials.doc_id})
        return _status_only(UNEXPECTED_ERROR, "danger")

    if tables:
        status = dbc.Alert(f"Loaded {len(tables)} tables.", color="success", className="mb-0 py-2")
    else:
        status = dbc.Alert(EMPTY_TABLES_TEXT, color="info", className="mb-0 py-2")

    default_mode = ctx.settings.default_row_mode
    return (
        credentials.to_dict(),
        [t.to_dict() for t in tables],
        session.selection.to_dict(),
        status,
        build_table_list(tables, session.selection, default_mode),
        build_preview_cards(tables, session.selection),
        select_all_label(session.selection, session.table_ids),
    )


def register_table_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    @app.callback(
        Output(IDs.Store.CREDENTIALS, "data"),
        Output(IDs.Store.TABLES, "data"),
        Output(IDs.Store.SELECTION, "data"),
        Output(IDs.Control.LOAD_STATUS, "children"),
        Output(IDs.Control.TABLE_LIST, "children"),
        Output(IDs.Control.PREVIEW_CONTAINER, "children"),
        Output(IDs.Control.SELECT_ALL_BTN, "children", allow_duplicate=True),
        Input(IDs.Control.LOAD_TABLES_BTN, "n_clicks"),
        State(IDs.Control.API_TOKEN_INPUT, "value"),
        State(IDs.Control.DOC_ID_INPUT, "value"),
        prevent_initial_call=True,
    )
    def load_tables(n_clicks, api_token, doc_id):
        if not n_clicks:
            raise exceptions.PreventUpdate
        return load_tables_outputs(ctx, api_token, doc_id)
