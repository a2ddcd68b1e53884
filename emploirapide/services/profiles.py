"""
Candidate and recruiter profiles, and the CV sub-resource.

Inline images are uploaded before anything is written, so a storage failure
leaves the profile untouched; the fields and the new photo URL are then
committed together.
"""

import base64
import binascii
import logging
import time

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from emploirapide.core.security import Role
from emploirapide.db import CV, User
from emploirapide.errors import NotFound, UploadError, ValidationError
from emploirapide.tools.pdf_parser import count_pdf_pages
from emploirapide.tools.storage import FileStorage

logger = logging.getLogger(__name__)

MAX_CV_SIZE = 5 * 1024 * 1024  # 5 MB
CV_FOLDER = "emploirapide/cvs"

# Public field name -> User attribute
COMMON_FIELDS = {
    "name": "name",
    "phone": "phone",
    "address": "address",
    "city": "city",
    "about": "about",
}
ROLE_FIELDS = {
    Role.CANDIDATE: {
        "experiences": "experiences",
        "education": "education",
        "skills": "skills",
        "languages": "languages",
    },
    Role.RECRUITER: {
        "companyName": "company_name",
        "website": "website",
    },
}
PHOTO_TARGETS = {
    Role.CANDIDATE: ("emploirapide/profile-photos", "user_{id}"),
    Role.RECRUITER: ("emploirapide/company-logos", "company_{id}"),
}
IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


def profile_view(user: User, role: Role) -> dict:
    """The profile fields shown for a role."""
    view = {
        "id": user.id,
        "email": user.email,
        "profilePhoto": user.profile_photo,
    }
    for public, attr in {**COMMON_FIELDS, **ROLE_FIELDS[role]}.items():
        view[public] = getattr(user, attr)
    return view


def get_profile(db: Session, user_id: str, role: Role) -> dict:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("Utilisateur non trouvé")
    return profile_view(user, role)


def decode_data_url(data_url: str) -> tuple[bytes, str]:
    """
    Decode a base64 image data URL.

    Returns:
        The raw bytes and a file extension derived from the media type
    """
    header, _, payload = data_url.partition(",")
    media_type = header[len("data:"):].split(";")[0].lower()
    if ";base64" not in header or media_type not in IMAGE_EXTENSIONS:
        raise ValidationError("Image invalide")
    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Image invalide") from None
    return content, IMAGE_EXTENSIONS[media_type]


def update_profile(db: Session, storage: FileStorage, user_id: str, role: Role, patch: dict) -> dict:
    """
    Apply the fields present in patch.

    A "data:" URL in profilePhoto is uploaded and replaces the photo; null or
    an empty string clears it; any other value (usually the current URL sent
    back by the client) is ignored.
    """
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("Utilisateur non trouvé")
    if "name" in patch and not (patch["name"] or "").strip():
        raise ValidationError("Le nom est requis")

    updates = {}
    for public, attr in {**COMMON_FIELDS, **ROLE_FIELDS[role]}.items():
        if public in patch:
            updates[attr] = patch[public]

    if "profilePhoto" in patch:
        photo = patch["profilePhoto"]
        if not photo:
            updates["profile_photo"] = None
        elif photo.startswith("data:"):
            content, extension = decode_data_url(photo)
            folder, public_id = PHOTO_TARGETS[role]
            stored = storage.upload(
                content,
                folder=folder,
                public_id=public_id.format(id=user_id),
                resource_type="image",
                extension=extension,
            )
            updates["profile_photo"] = stored.url

    for attr, value in updates.items():
        setattr(user, attr, value)
    db.commit()
    db.refresh(user)
    return profile_view(user, role)


def cv_view(cv: CV) -> dict:
    return {
        "id": cv.id,
        "filename": cv.filename,
        "url": cv.content,
        "uploadedAt": cv.uploaded_at,
    }


def list_cvs(db: Session, user_id: str) -> list[CV]:
    return db.query(CV).filter(CV.user_id == user_id).order_by(CV.uploaded_at.desc()).all()


def upload_cv(db: Session, storage: FileStorage, user_id: str, content: bytes, filename: str) -> CV:
    """Store a PDF CV and record it."""
    if not content or not filename:
        raise ValidationError("Fichier CV manquant")
    if not filename.lower().endswith(".pdf"):
        raise ValidationError("Seuls les fichiers PDF sont acceptés")
    if len(content) > MAX_CV_SIZE:
        raise ValidationError("Le fichier dépasse la taille maximale de 5 Mo")
    count_pdf_pages(content)

    stored = storage.upload(
        content,
        folder=CV_FOLDER,
        public_id=f"cv_{user_id}_{int(time.time() * 1000)}",
        resource_type="raw",
        extension="pdf",
    )

    cv = CV(user_id=user_id, filename=filename, content=stored.url, storage_key=stored.key, keywords=[])
    db.add(cv)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        _discard_stored_cv(storage, stored.key)
        raise
    db.refresh(cv)
    logger.info(f"CV {cv.id} uploaded for user {user_id}")
    return cv


def delete_cv(db: Session, storage: FileStorage, user_id: str, cv_id: str) -> None:
    """Delete a CV record. Removing the stored file is best effort."""
    cv = db.query(CV).filter(CV.id == cv_id, CV.user_id == user_id).first()
    if cv is None:
        raise NotFound("CV non trouvé")

    key = cv.storage_key
    db.delete(cv)
    db.commit()

    if key:
        _discard_stored_cv(storage, key)


def _discard_stored_cv(storage: FileStorage, key: str) -> None:
    try:
        storage.delete(key, resource_type="raw")
    except UploadError as e:
        logger.warning(f"Could not delete stored CV {key}: {e}")
