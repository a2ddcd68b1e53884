"""Candidate endpoints: profile and CVs."""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from emploirapide.api.deps import get_file_storage, require_candidate
from emploirapide.api.schemas import CandidateProfileUpdate, CVListResponse, CVResponse, ProfileResponse
from emploirapide.core.security import Identity, Role
from emploirapide.db import get_db
from emploirapide.services import profiles
from emploirapide.tools.storage import FileStorage

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
def get_profile(identity: Identity = Depends(require_candidate), db: Session = Depends(get_db)):
    """Get the candidate profile."""
    return ProfileResponse(user=profiles.get_profile(db, identity.id, Role.CANDIDATE))


@router.patch("/profile", response_model=ProfileResponse)
def update_profile(
    data: CandidateProfileUpdate,
    identity: Identity = Depends(require_candidate),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    """Update the candidate profile; profilePhoto may carry an inline image."""
    user = profiles.update_profile(db, storage, identity.id, Role.CANDIDATE, data.to_patch())
    return ProfileResponse(message="Profil mis à jour avec succès", user=user)


@router.get("/cv", response_model=CVListResponse)
def list_cvs(identity: Identity = Depends(require_candidate), db: Session = Depends(get_db)):
    """List uploaded CVs, newest first."""
    return CVListResponse(cvs=[CVResponse(**profiles.cv_view(cv)) for cv in profiles.list_cvs(db, identity.id)])


@router.post("/cv")
def upload_cv(
    file: UploadFile = File(...),
    identity: Identity = Depends(require_candidate),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    """Upload a CV (PDF, 5 MB max)."""
    content = file.file.read(profiles.MAX_CV_SIZE + 1)
    cv = profiles.upload_cv(db, storage, identity.id, content, file.filename or "")
    return {"message": "CV téléchargé avec succès", "cv": CVResponse(**profiles.cv_view(cv))}


@router.delete("/cv/{cv_id}")
def delete_cv(
    cv_id: str,
    identity: Identity = Depends(require_candidate),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    """Delete a CV."""
    profiles.delete_cv(db, storage, identity.id, cv_id)
    return {"message": "CV supprimé avec succès"}
