from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.ui.ids import IDs


def build_credentials_panel() -> dbc.Card:
    """
    API token + document id inputs. Values only ever reach in-memory stores.
    """
    return dbc.Card(
        [
            dbc.CardHeader("Document", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.Label("API Token", className="form-label", htmlFor=IDs.Control.API_TOKEN_INPUT),
                    dbc.Input(
                        id=IDs.Control.API_TOKEN_INPUT,
                        type="password",
                        placeholder="Bearer token",
                        autoComplete="off",
                        className="mb-3",
                    ),
                    html.Label("Document ID", className="form-label", htmlFor=IDs.Control.DOC_ID_INPUT),
                    dbc.Input(
                        id=IDs.Control.DOC_ID_INPUT,
                        type="text",
                        placeholder="e.g. AbCDeFGH",
                        autoComplete="off",
                        className="mb-3",
                    ),
                    dbc.Button(
                        "Load tables",
                        id=IDs.Control.LOAD_TABLES_BTN,
                        color="primary",
                        className="w-100",
                    ),
                    dcc.Loading(
                        html.Div(id=IDs.Control.LOAD_STATUS, className="mt-3 small"),
                        type="dot",
                    ),
                ]
            ),
        ],
        className="mt-3",
    )
