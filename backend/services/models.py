"""
Job, candidate and application records plus the request bodies that create/update them.
"""

import uuid
from datetime import datetime, timezone
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, BeforeValidator, Field


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _split_skills(value):
    """Accepts a list or a comma-separated string."""
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    return value


SkillList = Annotated[list[str], BeforeValidator(_split_skills)]


class JobCreate(BaseModel):
    title: str = Field(min_length=1)
    company_name: str = Field(min_length=1)
    company_email: Optional[str] = None
    description: str = Field(min_length=1)
    skills: SkillList = Field(default_factory=list)
    experience_required: float = Field(ge=0)
    location: str = Field(min_length=1)
    salary: Optional[str] = None


class Job(JobCreate):
    id: str = Field(default_factory=_new_id)
    status: Literal["active", "closed"] = "active"
    created_at: datetime = Field(default_factory=_now)


class CandidateCreate(BaseModel):
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    skills: SkillList = Field(default_factory=list)
    experience_years: float = Field(default=0, ge=0)
    open_to_work: bool = True
    resume_url: Optional[str] = None


class Candidate(CandidateCreate):
    id: str = Field(default_factory=_new_id)


class CandidateUpdate(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    skills: Optional[SkillList] = None
    experience_years: Optional[float] = Field(default=None, ge=0)
    open_to_work: Optional[bool] = None
    resume_url: Optional[str] = None


class ApplicationCreate(BaseModel):
    candidate_id: str


ApplicationStatus = Literal["applied", "in-progress", "shortlisted", "interview", "rejected", "offer"]


class ApplicationSubmit(BaseModel):
    candidate_id: str
    relevant_projects: Optional[str] = None
    relevant_experience: Optional[str] = None


class Application(ApplicationSubmit):
    id: str = Field(default_factory=_new_id)
    job_id: str
    status: ApplicationStatus = "applied"
    ai_score: int = Field(default=0, ge=0, le=100)
    applied_at: datetime = Field(default_factory=_now)


class StatusUpdate(BaseModel):
    status: ApplicationStatus
