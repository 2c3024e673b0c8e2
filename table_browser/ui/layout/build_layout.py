from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from table_browser.ui.ids import IDs
from table_browser.ui.layout.build_attribute_panel import build_attribute_panel
from table_browser.ui.layout.build_credentials_panel import build_credentials_panel
from table_browser.ui.layout.build_navbar import build_navbar
from table_browser.ui.layout.build_table_list_panel import build_preview_panel, build_table_list_panel

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig


def build_layout(ctx: AppConfig):
    settings = ctx.settings

    return dbc.Container(
        fluid=True,
        className="tb-root",
        children=[
            build_navbar(settings),

            # Session stores: memory only, gone when the tab closes
            dcc.Store(id=IDs.Store.CREDENTIALS, storage_type="memory"),
            dcc.Store(id=IDs.Store.TABLES, storage_type="memory", data=[]),
            dcc.Store(id=IDs.Store.SELECTION, storage_type="memory"),

            dbc.Row(
                [
                    dbc.Col(
                        [
                            build_credentials_panel(),
                            build_attribute_panel(settings),
                        ],
                        md=3,
                    ),
                    dbc.Col(
                        [
                            build_table_list_panel(),
                            build_preview_panel(),
                        ],
                        md=9,
                    ),
                ],
                className="gx-3",
            ),
        ],
    )
