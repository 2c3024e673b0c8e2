from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Set

from table_browser.core.models import RowMode


@dataclass
class SelectionState:
    """
    Represents which tables the user wants and how many rows of each.

    Fields:

    - selected: ids of the tables currently checked.
    - row_modes: per-table row mode. Entries for tables that were deselected
      are kept (and ignored) so re-selecting a table restores its mode.
    """

    selected: Set[str] = field(default_factory=set)
    row_modes: Dict[str, RowMode] = field(default_factory=dict)

    def is_selected(self, table_id: str) -> bool:
        return table_id in self.selected

    def toggle_table(self, table_id: str) -> None:
        if table_id in self.selected:
            self.selected.discard(table_id)
        else:
            self.selected.add(table_id)

    def select_all(self, all_ids: Iterable[str]) -> None:
        """Select every id, or clear the selection when it already equals all_ids."""
        wanted = set(all_ids)
        if self.selected == wanted:
            self.selected = set()
        else:
            self.selected = wanted

    def all_selected(self, all_ids: Iterable[str]) -> bool:
        wanted = set(all_ids)
        return bool(wanted) and self.selected == wanted

    def set_row_mode(self, table_id: str, mode: Any) -> None:
        self.row_modes[table_id] = RowMode.parse(mode)

    def row_mode_for(self, table_id: str, default: Optional[RowMode] = RowMode.ONE) -> Optional[RowMode]:
        return self.row_modes.get(table_id, default)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selected": sorted(self.selected),
            "row_modes": {k: v.value for k, v in self.row_modes.items()},
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> SelectionState:
        if not data:
            return cls()
        return cls(
            selected=set(data.get("selected") or []),
            row_modes={
                str(k): RowMode.parse(v)
                for k, v in (data.get("row_modes") or {}).items()
            },
        )
