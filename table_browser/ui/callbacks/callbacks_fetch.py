from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional

import dash
from dash import MATCH, Input, Output, State, exceptions

from table_browser.core.exceptions import DocApiError, InvalidRowModeError
from table_browser.core.models import RowMode, TableData
from table_browser.services.fetch_service import TABLE_ERROR, failed_table_data
from table_browser.services.session_service import Credentials, SessionContext
from table_browser.ui.callbacks.callbacks_utils import match_index, needs_fetch, try_parse_table_data
from table_browser.ui.ids import IDs

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def fetch_table(
        ctx: AppConfig,
        credentials: Credentials,
        table_id: str,
        mode: RowMode,
        *,
        column_attributes: Optional[Iterable[str]],
        row_attributes: Optional[Iterable[str]],
        cached: Optional[TableData] = None,
) -> TableData:
    """
    Fetch one table's data, never raising.

    Failures outside the per-part handling of the fetcher (client creation,
    unexpected errors) become an error result that keeps the cached data.
    """
    session = SessionContext(credentials=credentials)
    try:
        with ctx.client_factory(credentials.api_token) as client:
            return session.fetcher(client).fetch(
                table_id,
                mode,
                column_attributes=column_attributes or [],
                row_attributes=row_attributes or [],
                previous=cached,
            )
    except DocApiError as e:
        logger.error("Error fetching table data", extra={"table_id": table_id, "error": str(e)})
    except Exception:
        logger.exception("Unexpected error fetching table data", extra={"table_id": table_id})
    return failed_table_data(table_id, mode, TABLE_ERROR, cached)


def register_fetch_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # One invocation per table (MATCH), so tables load and fail independently.
    # No cancellation: a slow older response can land after a newer one.
    @app.callback(
        Output({"type": IDs.Pattern.TABLE_DATA, "index": MATCH}, "data"),
        Input({"type": IDs.Pattern.TABLE_SELECT, "index": MATCH}, "value"),
        Input({"type": IDs.Pattern.ROW_MODE, "index": MATCH}, "value"),
        Input(IDs.Control.COLUMN_ATTRIBUTES, "value"),
        Input(IDs.Control.ROW_ATTRIBUTES, "value"),
        State(IDs.Store.CREDENTIALS, "data"),
        State({"type": IDs.Pattern.TABLE_DATA, "index": MATCH}, "data"),
        prevent_initial_call=True,
    )
    def fetch_table_data(selected, mode_value, column_attributes, row_attributes, credentials_data, cached_data):
        table_id = match_index(dash.ctx.inputs_list[0])

        try:
            mode = RowMode.parse(mode_value or ctx.settings.default_row_mode)
        except InvalidRowModeError:
            logger.warning("Invalid row mode for table", extra={"table_id": table_id})
            raise exceptions.PreventUpdate

        cached = try_parse_table_data(cached_data)
        if not needs_fetch(dash.ctx.triggered_id, selected=bool(selected), mode=mode, cached=cached):
            raise exceptions.PreventUpdate

        credentials = Credentials.from_dict(credentials_data)
        if not credentials.is_complete:
            raise exceptions.PreventUpdate

        return fetch_table(
            ctx,
            credentials,
            table_id,
            mode,
            column_attributes=column_attributes,
            row_attributes=row_attributes,
            cached=cached,
        ).to_dict()
