"""Recruiter endpoints: own job listings and company profile."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from emploirapide.api.deps import get_file_storage, require_recruiter
from emploirapide.api.schemas import JobFields, JobRecord, JobResponse, ProfileResponse, RecruiterProfileUpdate
from emploirapide.core.security import Identity, Role
from emploirapide.db import get_db
from emploirapide.services import jobs as job_store
from emploirapide.services import profiles
from emploirapide.tools.storage import FileStorage

router = APIRouter()


@router.get("/jobs")
def list_jobs(identity: Identity = Depends(require_recruiter), db: Session = Depends(get_db)):
    """List every job of the recruiter, whatever its status."""
    rows = job_store.list_recruiter_jobs(db, identity.id)
    return {"jobs": [JobRecord.from_job(job, count) for job, count in rows]}


@router.post("/jobs", response_model=JobResponse)
def create_job(
    data: JobFields,
    identity: Identity = Depends(require_recruiter),
    db: Session = Depends(get_db),
):
    """Publish a new job."""
    job = job_store.create_job(db, identity.id, data.model_dump(exclude_unset=True))
    return JobResponse(message="Offre créée avec succès", job=JobRecord.from_job(job, 0))


@router.patch("/jobs/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    data: JobFields,
    identity: Identity = Depends(require_recruiter),
    db: Session = Depends(get_db),
):
    """Update the fields present in the body."""
    job = job_store.update_job(db, identity.id, job_id, data.model_dump(exclude_unset=True))
    return JobResponse(message="Offre mise à jour avec succès", job=JobRecord.from_job(job))


@router.delete("/jobs/{job_id}")
def delete_job(job_id: str, identity: Identity = Depends(require_recruiter), db: Session = Depends(get_db)):
    """Delete a job and the applications made to it."""
    job_store.delete_job(db, identity.id, job_id)
    return {"message": "Offre supprimée avec succès"}


@router.get("/profile", response_model=ProfileResponse)
def get_profile(identity: Identity = Depends(require_recruiter), db: Session = Depends(get_db)):
    """Get the recruiter profile."""
    return ProfileResponse(user=profiles.get_profile(db, identity.id, Role.RECRUITER))


@router.patch("/profile", response_model=ProfileResponse)
def update_profile(
    data: RecruiterProfileUpdate,
    identity: Identity = Depends(require_recruiter),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    """Update the recruiter profile; profilePhoto may carry an inline logo."""
    user = profiles.update_profile(db, storage, identity.id, Role.RECRUITER, data.to_patch())
    return ProfileResponse(message="Profil mis à jour avec succès", user=user)
