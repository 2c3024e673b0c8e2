from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import List, Optional

from table_browser.core.models import Record, TableData

logger = logging.getLogger(__name__)

COPY_OK = "Table data copied to clipboard!"
COPY_EMPTY = "No data to copy yet."


@dataclass(frozen=True)
class ExportResult:
    ok: bool
    text: str
    message: str


def serialize_table_data(columns: List[Record], rows: List[Record]) -> str:
    return json.dumps({"columns": columns, "rows": rows}, indent=2, ensure_ascii=False)


def export_table(data: Optional[TableData]) -> ExportResult:
    """
    Build the clipboard text for a table's cached (already filtered) data.

    Never changes `data`.
    """
    if data is None:
        return ExportResult(ok=False, text="", message=COPY_EMPTY)

    try:
        text = serialize_table_data(data.columns, data.rows)
    except (TypeError, ValueError):
        logger.exception("Failed to serialise table data", extra={"table_id": data.table_id})
        return ExportResult(ok=False, text="", message="Failed to copy table data.")

    logger.info(
        "Exported table data",
        extra={"table_id": data.table_id, "n_columns": len(data.columns), "n_rows": len(data.rows)},
    )
    return ExportResult(ok=True, text=text, message=COPY_OK)
