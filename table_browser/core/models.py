from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from table_browser.core.exceptions import InvalidRowModeError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    try:
        # API sends ISO-8601 with a trailing "Z"
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Unparseable timestamp %r, falling back to now", value)
        return None


class RowMode(str, enum.Enum):
    """
    How many rows to request for a selected table.

    Values match the option values the UI submits.
    """
    NONE = "0"
    ONE = "1"
    ALL = "All"

    @property
    def label(self) -> str:
        return _ROW_MODE_LABELS[self]

    @property
    def limit(self) -> Optional[int]:
        """Row request limit; None means unbounded."""
        if self is RowMode.NONE:
            return 0
        if self is RowMode.ONE:
            return 1
        return None

    @classmethod
    def parse(cls, value: Any) -> RowMode:
        if isinstance(value, cls):
            return value
        if value is None:
            raise InvalidRowModeError("Row mode is required")

        text = str(value).strip()
        for mode in cls:
            if text == mode.value:
                return mode

        alias = _ROW_MODE_ALIASES.get(text.lower())
        if alias is None:
            raise InvalidRowModeError(f"Unknown row mode {value!r}")
        return alias

    @classmethod
    def options(cls) -> List[dict]:
        return [{"label": m.label, "value": m.value} for m in cls]


_ROW_MODE_LABELS = {
    RowMode.NONE: "Columns Only",
    RowMode.ONE: "1 Row",
    RowMode.ALL: "All Rows",
}

_ROW_MODE_ALIASES = {
    "none": RowMode.NONE,
    "one": RowMode.ONE,
    "all": RowMode.ALL,
}


@dataclass(frozen=True)
class Table:
    """
    A table of the current document, as listed by the API.

    `updated_at` defaults to "now" when the API does not send one.
    """
    id: str
    name: str
    row_count: int = 0
    updated_at: datetime = field(default_factory=now_utc)

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> Table:
        try:
            row_count = int(item.get("rowCount") or 0)
        except (TypeError, ValueError):
            row_count = 0

        return cls(
            id=str(item["id"]),
            name=str(item.get("name") or item["id"]),
            row_count=max(row_count, 0),
            updated_at=_parse_timestamp(item.get("updatedAt")) or now_utc(),
        )

    @property
    def updated_label(self) -> str:
        return self.updated_at.date().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "row_count": self.row_count,
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Table:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            row_count=int(data.get("row_count") or 0),
            updated_at=_parse_timestamp(data.get("updated_at")) or now_utc(),
        )


@dataclass
class TableData:
    """
    Filtered columns/rows cached for one table.

    This is the single source for both the preview and the copy action.
    """
    table_id: str
    row_mode: RowMode
    columns: List[Record] = field(default_factory=list)
    rows: List[Record] = field(default_factory=list)
    error: Optional[str] = None
    fetched_at: Optional[str] = None

    def payload(self) -> Dict[str, List[Record]]:
        return {"columns": self.columns, "rows": self.rows}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table_id": self.table_id,
            "row_mode": self.row_mode.value,
            "columns": list(self.columns),
            "rows": list(self.rows),
            "error": self.error,
            "fetched_at": self.fetched_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TableData:
        return cls(
            table_id=str(data["table_id"]),
            row_mode=RowMode.parse(data.get("row_mode", RowMode.ONE.value)),
            columns=list(data.get("columns") or []),
            rows=list(data.get("rows") or []),
            error=data.get("error"),
            fetched_at=data.get("fetched_at"),
        )
