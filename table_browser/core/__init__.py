"""
Core domain layer: table models, selection state, and attribute filtering
"""

from .attribute_filter import filter_record, filter_records
from .models import RowMode, Table, TableData
from .selection_state import SelectionState

__all__ = ["filter_record", "filter_records", "RowMode", "Table", "TableData", "SelectionState"]
