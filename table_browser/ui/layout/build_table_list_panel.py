from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from table_browser.ui.helpers import empty_tables_state
from table_browser.ui.ids import IDs


def build_table_list_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Span("Available Tables", className="fw-semibold"),
                        dbc.Button(
                            "Select All",
                            id=IDs.Control.SELECT_ALL_BTN,
                            color="primary",
                            size="sm",
                        ),
                    ],
                    className="d-flex justify-content-between align-items-center",
                )
            ),
            dbc.CardBody(html.Div(id=IDs.Control.TABLE_LIST, children=empty_tables_state()), className="p-2"),
        ],
        className="mt-3",
    )


def build_preview_panel() -> html.Div:
    return html.Div(
        [
            html.H5("Preview", className="mt-3"),
            html.Div(id=IDs.Control.PREVIEW_CONTAINER),
        ]
    )
