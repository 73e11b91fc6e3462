from __future__ import annotations

from typing import List

from executor.materializer import ResultSet, sorted_items


def format_rows(rows: ResultSet) -> List[str]:
    total = len(rows)
    lines: List[str] = []
    for index, row in enumerate(rows, start=1):
        lines.append(f"{{ {index}/{total}")
        for column, value in sorted_items(row):
            lines.append(f"  {column}: {value}")
        lines.append("}," if index < total else "}")
    if total:
        lines.append("")
        lines.append(f"Fetched {total} result(s).")
    return lines


def format_elapsed(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.3f}ms"
    return f"{seconds:.3f}s"


def done_line(seconds: float) -> str:
    return f"DONE ({format_elapsed(seconds)})"
