"""
Aggregated job search.

Merges active local jobs with JSearch results into one list of a common
shape, local jobs first. External listings are never persisted.
"""

import logging

from sqlalchemy.orm import Session, joinedload

from emploirapide.db import Job
from emploirapide.services.jobs import applications_count_column, filter_active_jobs
from emploirapide.tools.jsearch import JSearchClient
from emploirapide.utils.formatting import format_date_fr, format_external_salary, format_salary

logger = logging.getLogger(__name__)

DEFAULT_QUERY = "emploi"
DEFAULT_LOCATION = "Côte d'Ivoire"
LOCAL_SEARCH_LIMIT = 20
SOURCES = ("all", "local", "external")


def local_job_result(job: Job, applications_count: int) -> dict:
    return {
        "id": job.id,
        "title": job.title,
        "company": job.company,
        "location": job.location,
        "type": job.contract_type,
        "salary": format_salary(job.salary_min, job.salary_max),
        "postedAt": format_date_fr(job.created_at),
        "description": job.description,
        "logo": job.user.profile_photo if job.user else None,
        "applyLink": None,
        "qualifications": [],
        "responsibilities": [],
        "requirements": job.requirements,
        "isLocal": True,
        "applicationCount": applications_count,
    }


def external_job_result(record: dict, default_location: str) -> dict:
    highlights = record.get("job_highlights") or {}
    return {
        "id": record.get("job_id"),
        "title": record.get("job_title"),
        "company": record.get("employer_name"),
        "location": record.get("job_city") or record.get("job_country") or default_location,
        "type": record.get("job_employment_type") or "Full-time",
        "salary": format_external_salary(record),
        "postedAt": format_date_fr(record.get("job_posted_at_datetime_utc")),
        "description": record.get("job_description") or "Description non disponible",
        "logo": record.get("employer_logo"),
        "applyLink": record.get("job_apply_link"),
        "qualifications": highlights.get("Qualifications") or [],
        "responsibilities": highlights.get("Responsibilities") or [],
        "requirements": None,
        "isLocal": False,
        "applicationCount": None,
    }


def search_local_jobs(db: Session, query: str, employment_type: str | None) -> list[dict]:
    q = db.query(Job, applications_count_column()).options(joinedload(Job.user))
    q = filter_active_jobs(
        q,
        query=query if query and query != DEFAULT_QUERY else None,
        contract_type=employment_type if employment_type and employment_type != "all" else None,
    )
    rows = q.order_by(Job.created_at.desc()).limit(LOCAL_SEARCH_LIMIT).all()
    return [local_job_result(job, count) for job, count in rows]


def search_jobs(
    db: Session,
    client: JSearchClient,
    query: str = DEFAULT_QUERY,
    location: str = DEFAULT_LOCATION,
    page: int = 1,
    employment_type: str | None = None,
    source: str = "all",
) -> dict:
    """
    Search local and external jobs.

    Returns:
        {"jobs", "total", "local", "external"}
    """
    local_jobs: list[dict] = []
    external_jobs: list[dict] = []

    if source in ("all", "local"):
        local_jobs = search_local_jobs(db, query, employment_type)
        logger.info(f"Found {len(local_jobs)} local jobs")

    if source in ("all", "external"):
        if not client.enabled:
            logger.warning("JSearch API key not configured, skipping external jobs")
        else:
            records = client.search(query, location, page=page, employment_type=employment_type)
            external_jobs = [external_job_result(r, location) for r in records]

    jobs = local_jobs + external_jobs
    logger.info(f"Total jobs: {len(jobs)} ({len(local_jobs)} local + {len(external_jobs)} external)")
    return {
        "jobs": jobs,
        "total": len(jobs),
        "local": len(local_jobs),
        "external": len(external_jobs),
    }
