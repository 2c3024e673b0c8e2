from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.config.model import AppSettings
from table_browser.ui.ids import IDs


def _checklist(component_id: str, available, chosen) -> dcc.Checklist:
    return dcc.Checklist(
        id=component_id,
        options=[{"label": a, "value": a} for a in available],
        value=list(chosen),
        inputClassName="me-1",
        labelClassName="d-block small",
        className="mb-3",
    )


def build_attribute_panel(settings: AppSettings) -> dbc.Card:
    """Allow-lists for column and row attributes."""
    return dbc.Card(
        [
            dbc.CardHeader("Attributes", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.Label("Column attributes", className="form-label"),
                    _checklist(
                        IDs.Control.COLUMN_ATTRIBUTES,
                        settings.available_column_attributes,
                        settings.column_attributes,
                    ),
                    html.Label("Row attributes", className="form-label"),
                    _checklist(
                        IDs.Control.ROW_ATTRIBUTES,
                        settings.available_row_attributes,
                        settings.row_attributes,
                    ),
                ]
            ),
        ],
        className="mt-3",
    )
