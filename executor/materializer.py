"""Turn a DB-API cursor of unknown shape into rows of text values."""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from utils.log import get_logger

log = get_logger(__name__)

ResultRow = Dict[str, str]
ResultSet = List[ResultRow]


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, memoryview):
        value = value.tobytes()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def column_names(cursor: Any) -> List[str]:
    description = cursor.description
    if not description:
        return []
    return [str(desc[0]) for desc in description]


def materialize(cursor: Any) -> ResultSet:
    """Collect every remaining row of ``cursor`` as a column -> text mapping.

    Rows keep cursor order and columns keep physical order. A cursor without
    columns (DDL, writes) yields an empty result, as does a cursor whose
    column names cannot be read.
    """
    try:
        columns = column_names(cursor)
    except Exception as exc:
        log.warning("Could not read result columns, returning no rows: %s", exc)
        return []
    if not columns:
        return []

    results: ResultSet = []
    for row in cursor.fetchall():
        results.append({name: to_text(value) for name, value in zip(columns, row)})
    return results


def sorted_items(row: ResultRow) -> List[Tuple[str, str]]:
    return sorted(row.items(), key=lambda item: item[0])
