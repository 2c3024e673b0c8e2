from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from table_browser.core.models import RowMode

DEFAULT_API_BASE_URL = "https://coda.io/apis/v1"

# Attribute names the document API returns for column and row items
COLUMN_ATTRIBUTES = [
    "id",
    "type",
    "name",
    "href",
    "display",
    "calculated",
    "formula",
    "defaultValue",
    "format",
]

ROW_ATTRIBUTES = [
    "id",
    "type",
    "name",
    "href",
    "index",
    "browserLink",
    "createdAt",
    "updatedAt",
    "values",
]


@dataclass
class AppSettings:
    """
    Parsed global.json.

    - column_attributes / row_attributes: default allow-lists, pre-checked in the UI.
    - available_*_attributes: what the attribute pickers offer.
    - default_row_mode: mode given to a table the first time it is selected.
    """
    ui_title: str = "Document Table Browser"
    subtitle: str = "Select tables, preview and copy JSON"
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = 30.0
    default_row_mode: RowMode = RowMode.ONE
    column_attributes: List[str] = field(default_factory=lambda: ["id", "name", "format"])
    row_attributes: List[str] = field(default_factory=lambda: ["id", "name", "values"])
    available_column_attributes: List[str] = field(default_factory=lambda: list(COLUMN_ATTRIBUTES))
    available_row_attributes: List[str] = field(default_factory=lambda: list(ROW_ATTRIBUTES))
