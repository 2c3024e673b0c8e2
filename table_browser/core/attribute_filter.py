"""
Attribute filtering for column and row records.

A record keeps only the allow-listed attributes. Attributes whose value is
None or "" are dropped, and the nested `values` mapping of a row loses its
empty-string cells (one level deep).
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

from table_browser.core.exceptions import RecordFormatError
from table_browser.core.models import Record

logger = logging.getLogger(__name__)

VALUES_KEY = "values"


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _clean_values(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: v for k, v in value.items() if not (isinstance(v, str) and v == "")}
    return value


def _allowed(allow_list: Optional[Iterable[str]]) -> frozenset:
    # A bare string is one attribute name, not a set of characters
    if isinstance(allow_list, str):
        return frozenset((allow_list,))
    if isinstance(allow_list, frozenset):
        return allow_list
    return frozenset(allow_list or ())


def filter_record(record: Mapping[str, Any], allow_list: Iterable[str]) -> Record:
    if not isinstance(record, Mapping):
        raise RecordFormatError(f"Expected a mapping record, got {type(record).__name__}")

    allowed = _allowed(allow_list)

    out: Record = {}
    for key, value in record.items():
        if key not in allowed:
            continue
        if key == VALUES_KEY:
            value = _clean_values(value)
        if _is_empty(value):
            continue
        out[key] = value
    return out


def filter_records(
    records: Optional[Iterable[Mapping[str, Any]]],
    allow_list: Iterable[str],
) -> List[Record]:
    """
    Apply `filter_record` to every record. Inputs are never mutated.

    :param records: column or row items as returned by the API; None is treated as empty.
    :param allow_list: attribute names to keep.
    :raises RecordFormatError: if an item is not a mapping.
    """
    if not records:
        return []

    allowed = _allowed(allow_list)
    filtered = [filter_record(r, allowed) for r in records]

    logger.debug(
        "Filtered records",
        extra={"n_records": len(filtered), "allow_list": sorted(allowed)},
    )
    return filtered
