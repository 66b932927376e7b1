"""Ordering and rendering of ranked issue rows.

Rows are sorted by score, highest first, and rendered either as a GitHub
markdown table or as single-line JSON. Both renderers keep the given order
and truncate from the top when a limit is set.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .score import Breakdown

__all__ = ["RankedRow", "sort_rows", "table_markdown", "render_json"]


@dataclass(frozen=True)
class RankedRow:
    """One ranked issue: identifying fields plus its score breakdown."""

    full_name: str
    number: int
    title: str
    html_url: str
    breakdown: Breakdown


def _sort_key(row: RankedRow) -> float:
    total = row.breakdown.total
    return 0.0 if math.isnan(total) else -total


def sort_rows(rows: Iterable[RankedRow]) -> list[RankedRow]:
    """Rows by total score, highest first; ties keep their input order."""
    return sorted(rows, key=_sort_key)


def _take(rows: Sequence[RankedRow], limit: int | None) -> Sequence[RankedRow]:
    return rows if limit is None else rows[:limit]


def _sanitize_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\r", " ").replace("\n", " ")


def table_markdown(rows: Sequence[RankedRow], limit: int | None = None) -> str:
    """Render rows as a ``score | issue | title`` markdown table."""
    lines = ["| score | issue | title |", "| ----: | :---- | :---- |"]
    for row in _take(rows, limit):
        link = f"[{row.full_name}#{row.number}]({row.html_url})"
        lines.append(f"| {row.breakdown.total:.2f} | {link} | {_sanitize_cell(row.title)} |")
    return "\n".join(lines) + "\n"


def _number(value: float) -> float | None:
    return value if math.isfinite(value) else None


def render_json(rows: Sequence[RankedRow], limit: int | None = None) -> str:
    """Render rows as a single-line JSON array."""
    view = [
        {
            "full_name": row.full_name,
            "number": row.number,
            "title": row.title,
            "html_url": row.html_url,
            "score": _number(row.breakdown.total),
            "parts": [[name, _number(value)] for name, value in row.breakdown.parts],
        }
        for row in _take(rows, limit)
    ]
    return json.dumps(view, separators=(",", ":"), ensure_ascii=False)