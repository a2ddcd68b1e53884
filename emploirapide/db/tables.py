"""Database table models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from emploirapide.db.base import Base, JSONText


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """Candidate or recruiter account."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    name: Mapped[str] = mapped_column(String(255), default="")
    role: Mapped[str] = mapped_column(String(20))  # candidate/recruiter
    phone: Mapped[str | None] = mapped_column(String(50), default=None)
    address: Mapped[str | None] = mapped_column(String(255), default=None)
    city: Mapped[str | None] = mapped_column(String(100), default=None)
    about: Mapped[str | None] = mapped_column(Text, default=None)
    profile_photo: Mapped[str | None] = mapped_column(Text, default=None)

    # Recruiter fields
    company_name: Mapped[str | None] = mapped_column(String(255), default=None)
    website: Mapped[str | None] = mapped_column(String(255), default=None)

    # Candidate fields
    experiences: Mapped[list] = mapped_column(JSONText, default=list)
    education: Mapped[list] = mapped_column(JSONText, default=list)
    skills: Mapped[list] = mapped_column(JSONText, default=list)
    languages: Mapped[list] = mapped_column(JSONText, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    jobs: Mapped[list["Job"]] = relationship(back_populates="user")
    applications: Mapped[list["Application"]] = relationship(back_populates="user")
    cvs: Mapped[list["CV"]] = relationship(back_populates="user")


class Job(Base):
    """A job listing owned by a recruiter."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    title: Mapped[str] = mapped_column(String(255))
    company: Mapped[str] = mapped_column(String(255))
    location: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    requirements: Mapped[str | None] = mapped_column(Text, default=None)
    salary_min: Mapped[int | None] = mapped_column(Integer, default=None)
    salary_max: Mapped[int | None] = mapped_column(Integer, default=None)
    contract_type: Mapped[str] = mapped_column(String(50))  # CDI/CDD/Stage/Freelance
    category: Mapped[str] = mapped_column(String(100))
    keywords: Mapped[list] = mapped_column(JSONText, default=list)
    status: Mapped[str] = mapped_column(String(20), default="active")  # active/paused/closed
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user: Mapped["User"] = relationship(back_populates="jobs")
    applications: Mapped[list["Application"]] = relationship(
        back_populates="job", cascade="all, delete-orphan"
    )


class Application(Base):
    """A candidate's application to a local job."""

    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("user_id", "job_id", name="uq_applications_user_job"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id", ondelete="CASCADE"), index=True)
    cover_letter: Mapped[str | None] = mapped_column(Text, default=None)
    status: Mapped[str] = mapped_column(String(20), default="pending")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    user: Mapped["User"] = relationship(back_populates="applications")
    job: Mapped["Job"] = relationship(back_populates="applications")


class ExternalApplication(Base):
    """A candidate's application to a job from the external search provider."""

    __tablename__ = "external_applications"
    __table_args__ = (UniqueConstraint("user_id", "job_id", name="uq_external_applications_user_job"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    job_id: Mapped[str] = mapped_column(String(255))
    job_data: Mapped[dict] = mapped_column(JSONText)
    status: Mapped[str] = mapped_column(String(50), default="applied")
    applied_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class SavedJob(Base):
    """A bookmarked job, local or external."""

    __tablename__ = "saved_jobs"
    __table_args__ = (UniqueConstraint("user_id", "job_id", name="uq_saved_jobs_user_job"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    job_id: Mapped[str] = mapped_column(String(255))
    job_data: Mapped[dict] = mapped_column(JSONText)
    saved_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class CV(Base):
    """An uploaded CV document."""

    __tablename__ = "cvs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    filename: Mapped[str] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(Text)  # Durable URL
    storage_key: Mapped[str | None] = mapped_column(String(255), default=None)
    keywords: Mapped[list] = mapped_column(JSONText, default=list)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    user: Mapped["User"] = relationship(back_populates="cvs")
