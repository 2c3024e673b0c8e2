from __future__ import annotations

from typing import List, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.core.models import RowMode, Table, TableData
from table_browser.core.selection_state import SelectionState
from table_browser.services.export_service import serialize_table_data
from table_browser.ui.ids import IDs, pattern_id

EMPTY_TABLES_TEXT = "No tables found. Enter your API Token and Document ID to load tables."
HIDDEN = {"display": "none"}
VISIBLE: dict = {}


def row_mode_options(enabled: bool) -> List[dict]:
    return [
        {"label": opt["label"], "value": opt["value"], "disabled": not enabled}
        for opt in RowMode.options()
    ]


def select_all_label(selection: SelectionState, table_ids: List[str]) -> str:
    return "Deselect All" if selection.all_selected(table_ids) else "Select All"


def empty_tables_state() -> html.Div:
    return html.Div(EMPTY_TABLES_TEXT, className="text-center text-muted py-4")


def build_table_list(tables: List[Table], selection: SelectionState, default_mode: RowMode):
    """
    Table of available tables: checkbox, name, row count, last modified,
    row-mode selector ("Data To Include") and copy button.
    """
    if not tables:
        return empty_tables_state()

    header = html.Thead(
        html.Tr(
            [
                html.Th(html.Span("Select", className="visually-hidden")),
                html.Th("Table Name"),
                html.Th("Rows"),
                html.Th("Last Modified"),
                html.Th("Data To Include"),
                html.Th(html.Span("Copy", className="visually-hidden")),
            ]
        )
    )

    body_rows = []
    for table in tables:
        selected = selection.is_selected(table.id)
        mode = selection.row_mode_for(table.id, default_mode)

        body_rows.append(
            html.Tr(
                [
                    html.Td(
                        dbc.Checkbox(
                            id=pattern_id(IDs.Pattern.TABLE_SELECT, table.id),
                            value=selected,
                        )
                    ),
                    html.Td(html.Span(table.name, className="fw-semibold")),
                    html.Td(str(table.row_count), className="text-muted small"),
                    html.Td(table.updated_label, className="text-muted small"),
                    html.Td(
                        dcc.RadioItems(
                            id=pattern_id(IDs.Pattern.ROW_MODE, table.id),
                            options=row_mode_options(selected),
                            value=mode.value,
                            inline=True,
                            inputClassName="me-1",
                            labelClassName="me-3 small",
                        )
                    ),
                    html.Td(
                        [
                            dcc.Clipboard(
                                id=pattern_id(IDs.Pattern.TABLE_COPY, table.id),
                                title="Copy Table JSON",
                                className="tb-copy-btn",
                                style={"display": "inline-block", "cursor": "pointer"},
                            ),
                            html.Span(
                                id=pattern_id(IDs.Pattern.COPY_STATUS, table.id),
                                className="ms-2 small text-muted",
                            ),
                        ],
                        className="text-end",
                    ),
                ],
                className="table-active" if selected else None,
            )
        )

    return dbc.Table(
        [header, html.Tbody(body_rows)],
        hover=True,
        responsive=True,
        size="sm",
        className="mb-0",
    )


def build_preview_cards(tables: List[Table], selection: SelectionState) -> List[dbc.Card]:
    """
    One collapsible preview card per table; hidden while the table is not selected.
    Each card also holds the table's data store.
    """
    cards = []
    for table in tables:
        cards.append(
            dbc.Card(
                id=pattern_id(IDs.Pattern.PREVIEW_CARD, table.id),
                style=VISIBLE if selection.is_selected(table.id) else HIDDEN,
                className="mb-3 shadow-sm",
                children=[
                    dcc.Store(id=pattern_id(IDs.Pattern.TABLE_DATA, table.id), storage_type="memory"),
                    dbc.CardHeader(
                        html.Div(
                            [
                                html.Div(
                                    [
                                        html.H6(table.name, className="mb-0"),
                                        html.Small(f"{table.row_count} rows", className="text-muted"),
                                    ]
                                ),
                                dbc.Button(
                                    "Remove",
                                    id=pattern_id(IDs.Pattern.TABLE_REMOVE, table.id),
                                    color="link",
                                    size="sm",
                                    title="Remove Table",
                                ),
                            ],
                            className="d-flex justify-content-between align-items-center",
                        )
                    ),
                    dbc.CardBody(
                        [
                            dbc.Button(
                                "Preview",
                                id=pattern_id(IDs.Pattern.PREVIEW_TOGGLE, table.id),
                                color="link",
                                size="sm",
                                className="px-0",
                            ),
                            dbc.Collapse(
                                dcc.Loading(
                                    html.Div(id=pattern_id(IDs.Pattern.PREVIEW_BODY, table.id)),
                                    type="dot",
                                ),
                                id=pattern_id(IDs.Pattern.PREVIEW_COLLAPSE, table.id),
                                is_open=False,
                            ),
                            html.Div(id=pattern_id(IDs.Pattern.TABLE_ERROR, table.id)),
                        ]
                    ),
                ],
            )
        )
    return cards


def preview_body(data: Optional[TableData]):
    if data is None:
        return html.Div("Not loaded yet.", className="text-muted small")

    return html.Div(
        [
            html.Small(
                f"{len(data.columns)} columns · {len(data.rows)} rows · {data.row_mode.label}",
                className="text-muted",
            ),
            html.Pre(
                serialize_table_data(data.columns, data.rows),
                className="tb-json-preview bg-light p-3 rounded small mt-2",
                style={"maxHeight": "240px", "overflow": "auto"},
            ),
        ]
    )


def error_alert(message: Optional[str]):
    if not message:
        return None
    return dbc.Alert(f"Error: {message}", color="danger", className="mt-3 mb-0 py-2 small")
