from __future__ import annotations

__all__ = ["IDs", "pattern_id"]


class IDs:
    class Store:
        CREDENTIALS = "credentials-store"
        TABLES = "tables-store"
        SELECTION = "selection-store"

    class Control:
        # Credentials
        API_TOKEN_INPUT = "api-token-input"
        DOC_ID_INPUT = "doc-id-input"
        LOAD_TABLES_BTN = "load-tables-btn"
        LOAD_STATUS = "load-status"

        # Attribute pickers
        COLUMN_ATTRIBUTES = "column-attributes"
        ROW_ATTRIBUTES = "row-attributes"

        # Table list
        TABLE_LIST = "table-list"
        SELECT_ALL_BTN = "select-all-btn"

        # Previews
        PREVIEW_CONTAINER = "preview-container"

    class Pattern:
        # pattern-matching "type" strings, indexed by table id
        TABLE_SELECT = "table-select"
        ROW_MODE = "table-row-mode"
        TABLE_DATA = "table-data"
        TABLE_COPY = "table-copy"
        COPY_STATUS = "table-copy-status"
        TABLE_REMOVE = "table-remove"
        PREVIEW_CARD = "preview-card"
        PREVIEW_TOGGLE = "preview-toggle"
        PREVIEW_COLLAPSE = "preview-collapse"
        PREVIEW_BODY = "preview-body"
        TABLE_ERROR = "table-error"


def pattern_id(kind: str, table_id: str) -> dict:
    return {"type": kind, "index": table_id}
