"""
Browse-page listing logic: filter a fetched batch of jobs in memory, then
reveal it a page at a time. Works on anything exposing the job attributes
(ORM rows or JobResponse models).
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Sequence

DEFAULT_PER_PAGE = 8


@dataclass
class JobFilters:
    search: str = ""
    location: str = ""
    type: str = ""
    salary_min: int | None = None
    salary_max: int | None = None

    def is_empty(self) -> bool:
        return not (self.search or self.location or self.type) and self.salary_min is None and self.salary_max is None


def _text(value: Any) -> str:
    return (value or "").lower()


def _sort_key(job: Any) -> datetime:
    created = getattr(job, "created_at", None)
    if created is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if created.tzinfo is None:
        return created.replace(tzinfo=timezone.utc)
    return created


def filter_jobs(jobs: Sequence[Any], filters: JobFilters) -> list[Any]:
    """Apply every non-empty filter (AND) and return matches newest first."""
    search = filters.search.strip().lower()
    location = filters.location.strip().lower()
    result = []
    for job in jobs:
        if search and not (
            search in _text(job.title) or search in _text(job.company) or search in _text(job.description)
        ):
            continue
        if location and location not in _text(job.location):
            continue
        if filters.type and job.type != filters.type:
            continue
        if filters.salary_min is not None and (job.salary_max or 0) < filters.salary_min:
            continue
        if filters.salary_max is not None and (job.salary_min or 0) > filters.salary_max:
            continue
        result.append(job)
    result.sort(key=_sort_key, reverse=True)
    return result


def paginate(jobs: Sequence[Any], page: int, per_page: int = DEFAULT_PER_PAGE) -> tuple[list[Any], bool]:
    """Cumulative reveal: page N shows the first N * per_page jobs. Returns (shown, has_more)."""
    page = max(1, page)
    per_page = max(1, per_page)
    shown = list(jobs[: page * per_page])
    return shown, len(jobs) > len(shown)


def next_load_action(displayed_count: int, filtered_count: int) -> str:
    """'reveal' while fetched jobs are still hidden, else 'fetch' the next batch."""
    return "reveal" if displayed_count < filtered_count else "fetch"
