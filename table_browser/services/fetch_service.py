from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from table_browser.core.attribute_filter import filter_records
from table_browser.core.exceptions import DocApiError, RecordFormatError
from table_browser.core.models import Record, RowMode, TableData
from table_browser.services.doc_api import DocApiClient

logger = logging.getLogger(__name__)

COLUMNS_ERROR = "Failed to fetch columns. Please check your inputs and try again."
ROWS_ERROR = "Failed to fetch rows. Please check your inputs and try again."
TABLE_ERROR = "Failed to fetch table data. Please check your inputs and try again."


def failed_table_data(
        table_id: str,
        mode: RowMode,
        message: str,
        previous: Optional[TableData] = None,
) -> TableData:
    """Error result for a fetch that never reached the API; keeps `previous` data."""
    return TableData(
        table_id=table_id,
        row_mode=mode,
        columns=list(previous.columns) if previous else [],
        rows=list(previous.rows) if previous else [],
        error=message,
        fetched_at=datetime.now(timezone.utc).isoformat(),
    )


class TableDataFetcher:
    """
    Fetches and filters the data of one table at a time.

    Column and row requests fail independently: a failed part keeps
    whatever `previous` held for it, and the error message is returned on
    the result instead of being raised, so one table never breaks another.
    """

    def __init__(self, client: DocApiClient, doc_id: str):
        self.client = client
        self.doc_id = doc_id

    def _fetch_columns(self, table_id: str, allow_list: Iterable[str]) -> List[Record]:
        logger.info("Fetching columns", extra={"table_id": table_id})
        return filter_records(self.client.list_columns(self.doc_id, table_id), allow_list)

    def _fetch_rows(self, table_id: str, mode: RowMode, allow_list: Iterable[str]) -> List[Record]:
        if mode is RowMode.NONE:
            return []
        logger.info("Fetching rows", extra={"table_id": table_id, "row_mode": mode.value})
        items = self.client.list_rows(self.doc_id, table_id, limit=mode.limit)
        return filter_records(items, allow_list)

    def fetch(
            self,
            table_id: str,
            mode: RowMode | str,
            *,
            column_attributes: Iterable[str],
            row_attributes: Iterable[str],
            previous: Optional[TableData] = None,
    ) -> TableData:
        mode = RowMode.parse(mode)
        errors: List[str] = []

        try:
            columns = self._fetch_columns(table_id, column_attributes)
        except (DocApiError, RecordFormatError) as e:
            logger.error(
                "Error fetching columns",
                extra={"table_id": table_id, "error": str(e)},
            )
            errors.append(COLUMNS_ERROR)
            columns = list(previous.columns) if previous else []

        try:
            rows = self._fetch_rows(table_id, mode, row_attributes)
        except (DocApiError, RecordFormatError) as e:
            logger.error(
                "Error fetching rows",
                extra={"table_id": table_id, "row_mode": mode.value, "error": str(e)},
            )
            errors.append(ROWS_ERROR)
            rows = list(previous.rows) if previous else []

        return TableData(
            table_id=table_id,
            row_mode=mode,
            columns=columns,
            rows=rows,
            error=" ".join(errors) or None,
            fetched_at=datetime.now(timezone.utc).isoformat(),
        )
