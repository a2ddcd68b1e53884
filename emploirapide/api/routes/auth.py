"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from emploirapide.api.deps import get_current_identity
from emploirapide.api.schemas import SignupRequest, TokenResponse, UserResponse
from emploirapide.config import Settings, get_settings
from emploirapide.core.security import Identity, Role, create_access_token
from emploirapide.db import User, get_db
from emploirapide.errors import Unauthenticated
from emploirapide.services import accounts

router = APIRouter()


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(data: SignupRequest, db: Session = Depends(get_db)):
    """Create a candidate or recruiter account."""
    user = accounts.signup(
        db,
        email=data.email,
        password=data.password,
        name=data.name,
        role=data.role,
        phone=data.phone,
        company_name=data.companyName,
    )
    return UserResponse.from_user(user)


@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Login and get a JWT access token.

    Uses the OAuth2 password flow: send username (email) and password as
    form data.
    """
    user = accounts.authenticate(db, form_data.username, form_data.password)
    identity = Identity(id=user.id, role=Role(user.role))
    return TokenResponse(access_token=create_access_token(identity, settings), role=identity.role)


@router.get("/me", response_model=UserResponse)
def me(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """Get the authenticated account."""
    user = db.get(User, identity.id)
    if user is None:
        raise Unauthenticated()
    return UserResponse.from_user(user)
