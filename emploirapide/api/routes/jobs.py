"""Public job endpoints: published listings, aggregated search, details."""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from emploirapide.api.deps import get_job_search_client
from emploirapide.api.limiter import limiter
from emploirapide.api.schemas import PublicJob, PublicJobListResponse, SearchResponse
from emploirapide.config import get_settings
from emploirapide.db import get_db
from emploirapide.services import jobs as job_store
from emploirapide.services import search as job_search
from emploirapide.tools.jsearch import JSearchClient

router = APIRouter()


@router.get("/published", response_model=PublicJobListResponse)
def list_published_jobs(
    query: str | None = None,
    contractType: str | None = None,
    limit: int = Query(default=job_store.DEFAULT_PUBLIC_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """List active local jobs, newest first."""
    rows = job_store.list_public_jobs(db, query=query, contract_type=contractType, limit=limit)
    jobs = [PublicJob.from_job(job, count) for job, count in rows]
    return PublicJobListResponse(jobs=jobs, total=len(jobs))


@router.get("/search", response_model=SearchResponse)
@limiter.limit(lambda: get_settings().search_rate_limit)
def search_jobs(
    request: Request,
    query: str = job_search.DEFAULT_QUERY,
    location: str = job_search.DEFAULT_LOCATION,
    page: int = Query(default=1, ge=1),
    type: str | None = None,
    source: str = Query(default="all", pattern="^(all|local|external)$"),
    db: Session = Depends(get_db),
    client: JSearchClient = Depends(get_job_search_client),
):
    """Search local jobs and, when configured, the external provider."""
    result = job_search.search_jobs(
        db,
        client,
        query=query or job_search.DEFAULT_QUERY,
        location=location or job_search.DEFAULT_LOCATION,
        page=page,
        employment_type=type,
        source=source,
    )
    return SearchResponse(**result)


@router.get("/{job_id}")
def get_job(job_id: str, db: Session = Depends(get_db)):
    """Get the details of a local job."""
    job, count = job_store.get_job(db, job_id)
    return {"job": PublicJob.from_job(job, count)}
