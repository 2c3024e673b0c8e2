from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Callable, Optional

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from table_browser.config.io import load_app_settings
from table_browser.config.model import AppSettings
from table_browser.services.doc_api import DocApiClient
from table_browser.ui.layout.build_layout import build_layout
from table_browser.ui.callbacks.callbacks_tables import register_table_callbacks
from table_browser.ui.callbacks.callbacks_selection import register_selection_callbacks
from table_browser.ui.callbacks.callbacks_fetch import register_fetch_callbacks
from table_browser.ui.callbacks.callbacks_preview import register_preview_callbacks

logger = logging.getLogger(__name__)


def _default_client_factory(settings: AppSettings) -> Callable[[str], DocApiClient]:
    return partial(
        DocApiClient,
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
    )


def create_dash_app(
        config_root: Path | str = Path("config"),
        *,
        settings: Optional[AppSettings] = None,
        client_factory: Optional[Callable[[str], DocApiClient]] = None,
) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    if settings is None:
        settings = load_app_settings(config_root)

    # 2) App Context
    ctx = AppConfig(
        config_root=config_root,
        settings=settings,
        client_factory=client_factory or _default_client_factory(settings),
    )
    ctx.validate()

    logger.info(
        "Creating app",
        extra={"config_root": str(config_root), "api_base_url": settings.api_base_url},
    )

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        # Pattern-matching components only exist after tables are loaded
        suppress_callback_exceptions=True,
    )
    app.title = settings.ui_title
    app.layout = build_layout(ctx)

    # Register callbacks
    register_table_callbacks(app, ctx)
    register_selection_callbacks(app, ctx)
    register_fetch_callbacks(app, ctx)
    register_preview_callbacks(app, ctx)

    return app
