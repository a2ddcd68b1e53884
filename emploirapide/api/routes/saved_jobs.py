"""Saved job endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from emploirapide.api.deps import require_candidate
from emploirapide.api.schemas import SnapshotCreate
from emploirapide.core.security import Identity
from emploirapide.db import get_db
from emploirapide.services import saved_jobs

router = APIRouter()


@router.get("")
def list_saved_jobs(identity: Identity = Depends(require_candidate), db: Session = Depends(get_db)):
    """List saved jobs, newest first."""
    return {"jobs": [saved_jobs.saved_job_view(s) for s in saved_jobs.list_saved_jobs(db, identity.id)]}


@router.get("/check")
def check_saved_job(jobId: str, identity: Identity = Depends(require_candidate), db: Session = Depends(get_db)):
    """Check if a job is saved."""
    saved = saved_jobs.find_saved_job(db, identity.id, jobId)
    return {"saved": saved is not None, "savedJobId": saved.id if saved else None}


@router.post("")
def save_job(data: SnapshotCreate, identity: Identity = Depends(require_candidate), db: Session = Depends(get_db)):
    """Save a job with a snapshot of its data."""
    saved = saved_jobs.save_job(db, identity.id, data.jobId, data.jobData)
    return {"message": "Emploi sauvegardé avec succès", "savedJob": saved_jobs.saved_job_view(saved)}


@router.delete("")
def unsave_job(jobId: str, identity: Identity = Depends(require_candidate), db: Session = Depends(get_db)):
    """Remove a saved job."""
    saved_jobs.unsave_job(db, identity.id, jobId)
    return {"message": "Emploi retiré des favoris avec succès"}
