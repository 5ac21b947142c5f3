from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from schemas.user_schema import CamelModel


class CampaignCreate(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    goals: list[str] = []
    budget: Optional[float] = None
    cocampaign: Optional[str] = None
    job_id: Optional[str] = None


class CampaignUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    goals: Optional[list[str]] = None
    budget: Optional[float] = None
    active: Optional[bool] = None
    cocampaign: Optional[str] = None


class MilestoneCreate(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    due_date: Optional[date] = None
    status: str = "pending"


class MilestoneUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = None
    status: Optional[str] = None

    @field_validator("title", "status")
    @classmethod
    def not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class TeamMemberIn(CamelModel):
    name: str = Field(min_length=1)
    role: Optional[str] = None
    email: Optional[str] = None


class TeamCreate(CamelModel):
    name: str = ""
    members: list[TeamMemberIn] = []


class FeedbackCreate(CamelModel):
    message: str = Field(min_length=1)
    author: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class MilestoneOut(CamelModel):
    id: int
    campaign_id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    status: str


class TeamMemberOut(CamelModel):
    id: int
    name: str
    role: Optional[str] = None
    email: Optional[str] = None


class TeamOut(CamelModel):
    id: int
    campaign_id: int
    name: str
    members: list[TeamMemberOut] = []


class FeedbackOut(CamelModel):
    id: int
    campaign_id: int
    author: Optional[str] = None
    message: str
    rating: Optional[int] = None
    created_at: datetime


class CampaignOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    goals: Optional[list[str]] = None
    budget: Optional[float] = None
    createdby: Optional[str] = None
    cocampaign: Optional[str] = None
    job_id: Optional[str] = None
    active: bool
    milestones: list[MilestoneOut] = []
    teams: list[TeamOut] = []
    feedback: list[FeedbackOut] = []
    created_at: datetime
    updated_at: datetime
