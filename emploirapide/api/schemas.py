"""API request/response schemas."""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

from emploirapide.core.security import Role
from emploirapide.db import Application, Job, User
from emploirapide.utils.formatting import format_salary


# Auth schemas
class SignupRequest(BaseModel):
    email: EmailStr
    password: str
    name: str
    role: Role = Role.CANDIDATE
    phone: str | None = None
    companyName: str | None = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: Role


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    role: Role
    profilePhoto: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, email=user.email, name=user.name, role=user.role, profilePhoto=user.profile_photo)


# Job schemas
class JobFields(BaseModel):
    """Job create/update body. Required fields are checked by the service."""

    title: str | None = None
    company: str | None = None
    location: str | None = None
    description: str | None = None
    requirements: str | None = None
    salary_min: int | str | None = None
    salary_max: int | str | None = None
    contract_type: str | None = None
    category: str | None = None
    keywords: list[str] | None = None
    status: str | None = None


class RecruiterPublic(BaseModel):
    companyName: str | None
    name: str
    profilePhoto: str | None


class PublicJob(BaseModel):
    id: str
    title: str
    company: str
    companyLogo: str | None
    location: str
    description: str
    requirements: str | None
    salary: str
    salary_min: int | None
    salary_max: int | None
    contract_type: str
    category: str
    keywords: list[str]
    postedAt: datetime
    applicationsCount: int
    isLocal: bool = True
    recruiter: RecruiterPublic | None = None

    @classmethod
    def from_job(cls, job: Job, applications_count: int) -> "PublicJob":
        owner = job.user
        return cls(
            id=job.id,
            title=job.title,
            company=job.company,
            companyLogo=owner.profile_photo if owner else None,
            location=job.location,
            description=job.description,
            requirements=job.requirements,
            salary=format_salary(job.salary_min, job.salary_max),
            salary_min=job.salary_min,
            salary_max=job.salary_max,
            contract_type=job.contract_type,
            category=job.category,
            keywords=job.keywords or [],
            postedAt=job.created_at,
            applicationsCount=applications_count,
            recruiter=RecruiterPublic(
                companyName=owner.company_name, name=owner.name, profilePhoto=owner.profile_photo
            )
            if owner
            else None,
        )


class PublicJobListResponse(BaseModel):
    jobs: list[PublicJob]
    total: int


class JobRecord(BaseModel):
    """A job as its owner sees it."""

    id: str
    userId: str
    title: str
    company: str
    location: str
    description: str
    requirements: str | None
    salary: str
    salary_min: int | None
    salary_max: int | None
    contract_type: str
    category: str
    keywords: list[str]
    status: str
    createdAt: datetime
    updatedAt: datetime | None
    applicationsCount: int | None = None

    @classmethod
    def from_job(cls, job: Job, applications_count: int | None = None) -> "JobRecord":
        return cls(
            id=job.id,
            userId=job.user_id,
            title=job.title,
            company=job.company,
            location=job.location,
            description=job.description,
            requirements=job.requirements,
            salary=format_salary(job.salary_min, job.salary_max),
            salary_min=job.salary_min,
            salary_max=job.salary_max,
            contract_type=job.contract_type,
            category=job.category,
            keywords=job.keywords or [],
            status=job.status,
            createdAt=job.created_at,
            updatedAt=job.updated_at,
            applicationsCount=applications_count,
        )


class JobResponse(BaseModel):
    message: str
    job: JobRecord


# Search schemas
class SearchJobResult(BaseModel):
    id: str | None
    title: str | None
    company: str | None
    location: str | None
    type: str | None
    salary: str
    postedAt: str
    description: str | None
    logo: str | None
    applyLink: str | None
    qualifications: list[str] = []
    responsibilities: list[str] = []
    requirements: str | None = None
    isLocal: bool
    applicationCount: int | None = None


class SearchResponse(BaseModel):
    jobs: list[SearchJobResult]
    total: int
    local: int
    external: int


# Application schemas
class ApplicationCreate(BaseModel):
    jobId: str | None = None
    coverLetter: str | None = None


class StatusUpdate(BaseModel):
    status: str | None = None


class ApplicantPublic(BaseModel):
    id: str
    name: str
    email: str
    phone: str | None
    city: str | None
    address: str | None
    about: str | None
    profilePhoto: str | None
    experiences: list[dict]
    education: list[dict]
    skills: list[dict]
    languages: list[dict]

    @classmethod
    def from_user(cls, user: User) -> "ApplicantPublic":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            phone=user.phone,
            city=user.city,
            address=user.address,
            about=user.about,
            profilePhoto=user.profile_photo,
            experiences=user.experiences or [],
            education=user.education or [],
            skills=user.skills or [],
            languages=user.languages or [],
        )


class ApplicationRecord(BaseModel):
    id: str
    userId: str
    jobId: str
    coverLetter: str | None
    status: str
    createdAt: datetime
    job: JobRecord | None = None
    user: ApplicantPublic | None = None

    @classmethod
    def from_application(
        cls, application: Application, with_job: bool = False, with_applicant: bool = False
    ) -> "ApplicationRecord":
        return cls(
            id=application.id,
            userId=application.user_id,
            jobId=application.job_id,
            coverLetter=application.cover_letter,
            status=application.status,
            createdAt=application.created_at,
            job=JobRecord.from_job(application.job) if with_job else None,
            user=ApplicantPublic.from_user(application.user) if with_applicant else None,
        )


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationRecord]


class ApplicationResponse(BaseModel):
    message: str
    application: ApplicationRecord


# External applications and saved jobs
class SnapshotCreate(BaseModel):
    jobId: str | None = None
    jobData: dict[str, Any] | str | None = None


# Profile schemas
class Experience(BaseModel):
    id: str
    title: str = ""
    company: str = ""
    location: str = ""
    startDate: str = ""
    endDate: str = ""
    current: bool = False
    description: str = ""


class Education(BaseModel):
    id: str
    degree: str = ""
    school: str = ""
    field: str = ""
    startDate: str = ""
    endDate: str = ""
    description: str = ""


class Skill(BaseModel):
    id: str
    name: str
    level: str = Field(default="intermédiaire", description="débutant/intermédiaire/avancé/expert")


class Language(BaseModel):
    id: str
    name: str
    level: str = Field(default="courant", description="débutant/intermédiaire/courant/natif")


class ProfileUpdate(BaseModel):
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    about: str | None = None
    profilePhoto: str | None = None

    def to_patch(self) -> dict[str, Any]:
        """Fields sent by the client; nested records keep their defaults."""
        return self.model_dump(include=self.model_fields_set)


class CandidateProfileUpdate(ProfileUpdate):
    experiences: list[Experience] | None = None
    education: list[Education] | None = None
    skills: list[Skill] | None = None
    languages: list[Language] | None = None

    @field_validator("experiences", "education", "skills", "languages", mode="before")
    @classmethod
    def decode_json_list(cls, v):
        """Web clients send these lists JSON-encoded."""
        if isinstance(v, str):
            return json.loads(v) if v.strip() else []
        return v


class RecruiterProfileUpdate(ProfileUpdate):
    companyName: str | None = None
    website: str | None = None


class ProfileResponse(BaseModel):
    message: str | None = None
    user: dict[str, Any]


# CV schemas
class CVResponse(BaseModel):
    id: str
    filename: str
    url: str
    uploadedAt: datetime


class CVListResponse(BaseModel):
    cvs: list[CVResponse]
