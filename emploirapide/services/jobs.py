"""
Job listing store.

Recruiters own their jobs: every mutation is filtered by owner id, and a job
owned by someone else is reported exactly like a missing one.
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Query, Session, joinedload

from emploirapide.db import Application, Job
from emploirapide.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_JOB_FIELDS = ("title", "company", "location", "description", "contract_type", "category")
OPTIONAL_JOB_FIELDS = ("requirements", "salary_min", "salary_max", "keywords", "status")
JOB_STATUSES = ("active", "paused", "closed")
DEFAULT_PUBLIC_LIMIT = 15


def applications_count_column():
    return (
        select(func.count(Application.id))
        .where(Application.job_id == Job.id)
        .correlate(Job)
        .scalar_subquery()
        .label("applications_count")
    )


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def filter_active_jobs(q: Query, query: str | None = None, contract_type: str | None = None) -> Query:
    """Restrict a Job query to publicly visible jobs matching the filters."""
    q = q.filter(Job.status == "active")
    if query:
        pattern = _like_pattern(query)
        q = q.filter(
            or_(
                Job.title.ilike(pattern, escape="\\"),
                Job.description.ilike(pattern, escape="\\"),
                Job.company.ilike(pattern, escape="\\"),
            )
        )
    if contract_type:
        q = q.filter(Job.contract_type == contract_type)
    return q


def list_public_jobs(
    db: Session,
    query: str | None = None,
    contract_type: str | None = None,
    limit: int = DEFAULT_PUBLIC_LIMIT,
) -> list[tuple[Job, int]]:
    """Active jobs, newest first, with their application counts."""
    q = db.query(Job, applications_count_column()).options(joinedload(Job.user))
    q = filter_active_jobs(q, query=query, contract_type=contract_type)
    return [(job, count) for job, count in q.order_by(Job.created_at.desc()).limit(limit).all()]


def get_job(db: Session, job_id: str) -> tuple[Job, int]:
    """Fetch one job with its owner loaded and its application count."""
    row = (
        db.query(Job, applications_count_column())
        .options(joinedload(Job.user))
        .filter(Job.id == job_id)
        .first()
    )
    if row is None:
        raise NotFound("Offre d'emploi non trouvée")
    job, count = row
    return job, count


def list_recruiter_jobs(db: Session, recruiter_id: str) -> list[tuple[Job, int]]:
    """All jobs of a recruiter whatever their status, newest first."""
    rows = (
        db.query(Job, applications_count_column())
        .filter(Job.user_id == recruiter_id)
        .order_by(Job.created_at.desc())
        .all()
    )
    return [(job, count) for job, count in rows]


def _parse_salary(value) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError("Salaire invalide")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError("Salaire invalide") from None


def _clean_fields(fields: dict) -> dict:
    """Normalize optional fields and reject invalid values."""
    cleaned = dict(fields)
    for name in ("salary_min", "salary_max"):
        if name in cleaned:
            cleaned[name] = _parse_salary(cleaned[name])
    if "keywords" in cleaned:
        keywords = cleaned["keywords"] or []
        if not isinstance(keywords, list):
            raise ValidationError("Les mots-clés doivent être une liste")
        cleaned["keywords"] = [str(k) for k in keywords]
    if "status" in cleaned and cleaned["status"] not in JOB_STATUSES:
        raise ValidationError(f"Statut invalide: {cleaned['status']}")
    if "requirements" in cleaned and not cleaned["requirements"]:
        cleaned["requirements"] = None
    return cleaned


def create_job(db: Session, recruiter_id: str, fields: dict) -> Job:
    """Create a job owned by the recruiter. Status defaults to active."""
    missing = [name for name in REQUIRED_JOB_FIELDS if not str(fields.get(name) or "").strip()]
    if missing:
        raise ValidationError(f"Champs obligatoires manquants: {', '.join(missing)}")

    data = {k: v for k, v in fields.items() if k in REQUIRED_JOB_FIELDS + OPTIONAL_JOB_FIELDS}
    if not data.get("status"):
        data["status"] = "active"
    data.setdefault("keywords", [])
    data = _clean_fields(data)

    job = Job(user_id=recruiter_id, **data)
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info(f"Job {job.id} created by recruiter {recruiter_id}")
    return job


def get_owned_job(db: Session, recruiter_id: str, job_id: str) -> Job:
    job = db.query(Job).filter(Job.id == job_id, Job.user_id == recruiter_id).first()
    if job is None:
        raise NotFound("Offre non trouvée")
    return job


def update_job(db: Session, recruiter_id: str, job_id: str, patch: dict) -> Job:
    """Apply the fields present in patch to a job the recruiter owns."""
    job = get_owned_job(db, recruiter_id, job_id)

    for name in REQUIRED_JOB_FIELDS:
        if name in patch and not str(patch[name] or "").strip():
            raise ValidationError(f"Le champ {name} ne peut pas être vide")

    data = {k: v for k, v in patch.items() if k in REQUIRED_JOB_FIELDS + OPTIONAL_JOB_FIELDS}
    for name, value in _clean_fields(data).items():
        setattr(job, name, value)

    db.commit()
    db.refresh(job)
    return job


def delete_job(db: Session, recruiter_id: str, job_id: str) -> None:
    """Delete a job the recruiter owns, along with its applications."""
    job = get_owned_job(db, recruiter_id, job_id)
    db.delete(job)
    db.commit()
    logger.info(f"Job {job_id} deleted by recruiter {recruiter_id}")
