"""Application endpoints for local and external jobs."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from emploirapide.api.deps import get_current_identity, require_candidate, require_recruiter
from emploirapide.api.schemas import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationRecord,
    ApplicationResponse,
    SnapshotCreate,
    StatusUpdate,
)
from emploirapide.core.security import Identity
from emploirapide.db import get_db
from emploirapide.services import applications as tracker
from emploirapide.services import external_applications as external_tracker

router = APIRouter()


@router.get("", response_model=ApplicationListResponse)
def list_applications(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """Candidates get their applications, recruiters the applications to their jobs."""
    applications = tracker.list_applications(db, identity)
    return ApplicationListResponse(
        applications=[
            ApplicationRecord.from_application(a, with_job=True, with_applicant=identity.is_recruiter)
            for a in applications
        ]
    )


@router.post("", response_model=ApplicationResponse)
def create_application(
    data: ApplicationCreate,
    identity: Identity = Depends(require_candidate),
    db: Session = Depends(get_db),
):
    """Apply to a local job."""
    application = tracker.create_application(db, identity.id, data.jobId, data.coverLetter)
    return ApplicationResponse(
        message="Candidature envoyée avec succès",
        application=ApplicationRecord.from_application(application),
    )


@router.patch("/{application_id}", response_model=ApplicationResponse)
def update_application_status(
    application_id: str,
    data: StatusUpdate,
    identity: Identity = Depends(require_recruiter),
    db: Session = Depends(get_db),
):
    """Change the status of an application to one of the recruiter's jobs."""
    application = tracker.update_application_status(db, identity.id, application_id, data.status)
    return ApplicationResponse(
        message="Statut mis à jour avec succès",
        application=ApplicationRecord.from_application(application),
    )


@router.get("/external")
def list_external_applications(identity: Identity = Depends(require_candidate), db: Session = Depends(get_db)):
    """List applications to external jobs with their snapshots."""
    applications = external_tracker.list_external_applications(db, identity.id)
    return {"applications": [external_tracker.external_application_view(a) for a in applications]}


@router.post("/external")
def create_external_application(
    data: SnapshotCreate,
    identity: Identity = Depends(require_candidate),
    db: Session = Depends(get_db),
):
    """Record an application made on an external job board."""
    application = external_tracker.create_external_application(db, identity.id, data.jobId, data.jobData)
    return {
        "message": "Candidature enregistrée avec succès",
        "application": external_tracker.external_application_view(application),
    }


@router.patch("/external/{application_id}")
def update_external_application_status(
    application_id: str,
    data: StatusUpdate,
    identity: Identity = Depends(require_candidate),
    db: Session = Depends(get_db),
):
    """Update the status of an external application."""
    application = external_tracker.update_external_application_status(db, identity.id, application_id, data.status)
    return {
        "message": "Statut mis à jour",
        "application": external_tracker.external_application_view(application),
    }
