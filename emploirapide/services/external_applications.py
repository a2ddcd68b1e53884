"""Applications to jobs found through the external search provider."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from emploirapide.db import ExternalApplication
from emploirapide.errors import Conflict, NotFound, ValidationError
from emploirapide.services.snapshots import parse_job_data

logger = logging.getLogger(__name__)


def external_application_view(application: ExternalApplication) -> dict:
    """Snapshot fields merged with the record fields, record fields winning."""
    return {
        **(application.job_data or {}),
        "id": application.id,
        "jobId": application.job_id,
        "status": application.status,
        "appliedAt": application.applied_at,
    }


def list_external_applications(db: Session, candidate_id: str) -> list[ExternalApplication]:
    return (
        db.query(ExternalApplication)
        .filter(ExternalApplication.user_id == candidate_id)
        .order_by(ExternalApplication.applied_at.desc())
        .all()
    )


def create_external_application(db: Session, candidate_id: str, job_id: str, job_data) -> ExternalApplication:
    if not job_id or not job_data:
        raise ValidationError("jobId et jobData sont requis")

    application = ExternalApplication(
        user_id=candidate_id,
        job_id=job_id,
        job_data=parse_job_data(job_data),
        status="applied",
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Vous avez déjà postulé à cette offre") from None
    db.refresh(application)
    logger.info(f"Candidate {candidate_id} recorded external application to {job_id}")
    return application


def update_external_application_status(
    db: Session, candidate_id: str, application_id: str, status: str
) -> ExternalApplication:
    if not application_id or not status:
        raise ValidationError("applicationId et status sont requis")

    application = (
        db.query(ExternalApplication)
        .filter(ExternalApplication.id == application_id, ExternalApplication.user_id == candidate_id)
        .first()
    )
    if application is None:
        raise NotFound("Candidature non trouvée")

    application.status = status
    db.commit()
    db.refresh(application)
    return application
