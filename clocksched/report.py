"""Plain-text report of a search result."""

from __future__ import annotations

from clocksched.models import SearchResult


def format_result(result: SearchResult) -> list[str]:
    if not result.feasible or result.schedule is None:
        return ["Infeasible."]
    lines = ["Job start times:"]
    for row in result.schedule.rows:
        lines.append(f"{row.job} = {row.start}")
    return lines


def print_result(result: SearchResult) -> None:
    for line in format_result(result):
        print(line)
