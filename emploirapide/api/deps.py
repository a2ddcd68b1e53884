"""
Request dependencies: settings, collaborators and the caller's identity.

Tests swap any of these through app.dependency_overrides.
"""

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from emploirapide.config import Settings, get_settings
from emploirapide.core.security import Identity, Role, decode_access_token
from emploirapide.db import User, get_db
from emploirapide.errors import Forbidden, Unauthenticated
from emploirapide.tools.jsearch import JSearchClient
from emploirapide.tools.storage import FileStorage, get_storage_for

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_job_search_client(settings: Settings = Depends(get_settings)) -> JSearchClient:
    return JSearchClient(settings)


def get_file_storage(settings: Settings = Depends(get_settings)) -> FileStorage:
    return get_storage_for(settings)


def get_current_identity(
    token: str | None = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> Identity:
    """Resolve the bearer token to an identity; fail with Unauthenticated."""
    if not token:
        raise Unauthenticated()

    identity = decode_access_token(token, settings)
    if identity is None:
        raise Unauthenticated("Session invalide ou expirée")

    # The account must still exist and hold the role the token was issued for
    user = db.get(User, identity.id)
    if user is None or user.role != identity.role.value:
        raise Unauthenticated("Session invalide ou expirée")
    return identity


def require_role(role: Role):
    """Dependency factory restricting an endpoint to one role."""

    def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role is not role:
            raise Forbidden()
        return identity

    return dependency


require_candidate = require_role(Role.CANDIDATE)
require_recruiter = require_role(Role.RECRUITER)
