from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from schemas.user_schema import CamelModel, UserSummary


class JobValues(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    gender: Optional[str] = None
    availability: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    age: Optional[str] = None
    experience: Optional[str] = None
    priority: Optional[str] = None
    visibility: Optional[str] = None
    payment: Optional[str] = None
    paymentdesc: Optional[str] = None
    link: Optional[str] = None
    years: Optional[str] = None


class JobCreate(CamelModel):
    values: JobValues
    goals: list[str] = []
    skills: list[str] = []
    contents: list[str] = []
    platforms: list[str] = []


class JobUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    gender: Optional[str] = None
    availability: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    age: Optional[str] = None
    experience: Optional[str] = None
    priority: Optional[str] = None
    visibility: Optional[str] = None
    payment: Optional[str] = None
    paymentdesc: Optional[str] = None
    link: Optional[str] = None
    years: Optional[str] = None
    goals: Optional[list[str]] = None
    skills: Optional[list[str]] = None
    contents: Optional[list[str]] = None
    platforms: Optional[list[str]] = None


class ProposalCreate(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    proposed_budget: Optional[str] = None
    deliverables: list[str] = []


class ProposalStatusUpdate(CamelModel):
    status: Literal["pending", "accepted", "rejected"]


class ProposalOut(CamelModel):
    id: int
    job_id: int
    title: str
    description: Optional[str] = None
    proposed_budget: Optional[str] = None
    deliverables: Optional[list[str]] = None
    proposer_id: int
    proposer: Optional[UserSummary] = None
    status: str
    created_at: datetime
    updated_at: datetime


class JobOut(CamelModel):
    id: int
    title: str
    description: str
    gender: Optional[str] = None
    availability: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    age: Optional[str] = None
    experience: Optional[str] = None
    priority: Optional[str] = None
    visibility: Optional[str] = None
    payment: Optional[str] = None
    paymentdesc: Optional[str] = None
    link: Optional[str] = None
    years: Optional[str] = None
    goals: Optional[list[str]] = None
    skills: Optional[list[str]] = None
    contents: Optional[list[str]] = None
    platforms: Optional[list[str]] = None
    owner_id: int
    owner: Optional[UserSummary] = None
    proposals: list[ProposalOut] = []
    is_active: bool
    created_at: datetime
    updated_at: datetime
