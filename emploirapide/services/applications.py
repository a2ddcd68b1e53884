"""
Local application tracker.

A candidate applies at most once to a given job. The pair is protected by a
UNIQUE constraint, so a duplicate surfaces as an IntegrityError from the
insert rather than from a prior lookup.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from emploirapide.core.security import Identity, Role
from emploirapide.db import Application, Job
from emploirapide.errors import Conflict, NotFound, ValidationError

logger = logging.getLogger(__name__)

APPLICATION_STATUSES = ("pending", "reviewed", "shortlisted", "rejected", "accepted")


def _candidate_applications(db: Session, candidate_id: str) -> list[Application]:
    return (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.user_id == candidate_id)
        .order_by(Application.created_at.desc())
        .all()
    )


def _recruiter_applications(db: Session, recruiter_id: str) -> list[Application]:
    return (
        db.query(Application)
        .join(Application.job)
        .options(joinedload(Application.job), joinedload(Application.user))
        .filter(Job.user_id == recruiter_id)
        .order_by(Application.created_at.desc())
        .all()
    )


_LISTERS = {
    Role.CANDIDATE: _candidate_applications,
    Role.RECRUITER: _recruiter_applications,
}


def list_applications(db: Session, identity: Identity) -> list[Application]:
    """Candidates see their own applications, recruiters those made to their jobs."""
    lister = _LISTERS.get(identity.role)
    if lister is None:
        return []
    return lister(db, identity.id)


def create_application(db: Session, candidate_id: str, job_id: str, cover_letter: str | None = None) -> Application:
    if not job_id:
        raise ValidationError("ID de l'emploi manquant")
    if db.get(Job, job_id) is None:
        raise NotFound("Emploi non trouvé")

    application = Application(
        user_id=candidate_id,
        job_id=job_id,
        cover_letter=cover_letter or None,
        status="pending",
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Vous avez déjà postulé à cette offre") from None
    db.refresh(application)
    logger.info(f"Candidate {candidate_id} applied to job {job_id}")
    return application


def update_application_status(db: Session, recruiter_id: str, application_id: str, status: str) -> Application:
    """Change the status of an application made to one of the recruiter's jobs."""
    if not application_id or not status:
        raise ValidationError("Données manquantes")
    if status not in APPLICATION_STATUSES:
        raise ValidationError(f"Statut invalide: {status}")

    application = (
        db.query(Application)
        .join(Application.job)
        .filter(Application.id == application_id, Job.user_id == recruiter_id)
        .first()
    )
    if application is None:
        raise NotFound("Candidature non trouvée")

    application.status = status
    db.commit()
    db.refresh(application)
    return application
