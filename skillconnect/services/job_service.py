"""
Cached read access to public job listings. Results are kept for
settings.job_cache_ttl_seconds; any job write calls invalidate().
"""

import logging
from collections import Counter

from sqlalchemy.orm import Session

from skillconnect.config import settings
from skillconnect.core.ttl_cache import TTLCache, make_key
from skillconnect.repos.job_repo import (
    distinct_companies,
    distinct_locations,
    get_active,
    get_active_by_id,
)
from skillconnect.schemas.job import JobResponse

logger = logging.getLogger(__name__)

_cache = TTLCache(settings.job_cache_ttl_seconds)


def invalidate() -> None:
    _cache.clear()
    logger.debug("Job cache cleared")


def _cached(method: str, params: dict, load):
    key = make_key(method, params)
    hit = _cache.get(key)
    if hit is not None:
        return hit
    value = load()
    _cache.set(key, value)
    return value


def list_active_jobs(db: Session, limit: int) -> list[JobResponse]:
    return _cached(
        "list_active_jobs",
        {"limit": limit},
        lambda: [JobResponse.model_validate(j) for j in get_active(db, limit=limit)],
    )


def get_job(db: Session, job_id: str) -> JobResponse | None:
    key = make_key("get_job", {"job_id": job_id})
    hit = _cache.get(key)
    if hit is not None:
        return hit
    job = get_active_by_id(db, job_id)
    if job is None:
        # misses are not cached
        return None
    result = JobResponse.model_validate(job)
    _cache.set(key, result)
    return result


def job_stats(db: Session) -> dict:
    def load():
        jobs = get_active(db)
        salaries = [j.salary_min for j in jobs if j.salary_min]
        return {
            "total": len(jobs),
            "by_type": dict(Counter(j.type for j in jobs)),
            "by_location": dict(Counter(j.location for j in jobs if j.location)),
            "average_salary": round(sum(salaries) / len(salaries), 2) if salaries else None,
        }

    return _cached("job_stats", {}, load)


def unique_locations(db: Session) -> list[str]:
    return _cached("unique_locations", {}, lambda: distinct_locations(db))


def unique_companies(db: Session) -> list[str]:
    return _cached("unique_companies", {}, lambda: distinct_companies(db))
