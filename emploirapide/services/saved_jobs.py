"""Saved jobs (bookmarks) for local and external listings."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from emploirapide.db import SavedJob
from emploirapide.errors import Conflict, NotFound, ValidationError
from emploirapide.services.snapshots import parse_job_data


def saved_job_view(saved: SavedJob) -> dict:
    return {
        **(saved.job_data or {}),
        "savedAt": saved.saved_at,
        "savedJobId": saved.id,
    }


def list_saved_jobs(db: Session, candidate_id: str) -> list[SavedJob]:
    return (
        db.query(SavedJob)
        .filter(SavedJob.user_id == candidate_id)
        .order_by(SavedJob.saved_at.desc())
        .all()
    )


def find_saved_job(db: Session, candidate_id: str, job_id: str) -> SavedJob | None:
    return (
        db.query(SavedJob)
        .filter(SavedJob.user_id == candidate_id, SavedJob.job_id == job_id)
        .first()
    )


def save_job(db: Session, candidate_id: str, job_id: str, job_data) -> SavedJob:
    if not job_id or not job_data:
        raise ValidationError("Données manquantes")

    saved = SavedJob(user_id=candidate_id, job_id=job_id, job_data=parse_job_data(job_data))
    db.add(saved)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Emploi déjà sauvegardé") from None
    db.refresh(saved)
    return saved


def unsave_job(db: Session, candidate_id: str, job_id: str) -> None:
    if not job_id:
        raise ValidationError("ID de l'emploi manquant")

    deleted = (
        db.query(SavedJob)
        .filter(SavedJob.user_id == candidate_id, SavedJob.job_id == job_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotFound("Emploi sauvegardé non trouvé")
    db.commit()
