"""Account registration and login."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from emploirapide.core.security import Role, get_password_hash, verify_password
from emploirapide.db import User
from emploirapide.errors import Conflict, Unauthenticated, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.lower()).first()


def signup(
    db: Session,
    email: str,
    password: str,
    name: str,
    role: Role,
    phone: str | None = None,
    company_name: str | None = None,
) -> User:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Le mot de passe doit contenir au moins 8 caractères")
    if not name.strip():
        raise ValidationError("Le nom est requis")

    user = User(
        email=email.lower(),
        hashed_password=get_password_hash(password),
        name=name.strip(),
        role=role.value,
        phone=phone or None,
        company_name=company_name if role is Role.RECRUITER else None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Cet email est déjà utilisé") from None
    db.refresh(user)
    logger.info(f"New {role.value} account {user.id}")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        raise Unauthenticated("Email ou mot de passe incorrect")
    return user
