# models/campaign_model.py

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, Float, Date, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from database import Base


class Campaign(Base):
    __tablename__ = "campaigns"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    goals = Column(JSON, nullable=True)
    budget = Column(Float, nullable=True)
    createdby = Column(String, nullable=True, index=True)
    cocampaign = Column(String, nullable=True)
    job_id = Column(String, nullable=True)
    active = Column(Boolean, default=True, nullable=False)

    milestones = relationship(
        "CampaignMilestone",
        back_populates="campaign",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CampaignMilestone.id",
    )
    teams = relationship(
        "CampaignTeam",
        back_populates="campaign",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CampaignTeam.id",
    )
    feedback = relationship(
        "CampaignFeedback",
        back_populates="campaign",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CampaignFeedback.id",
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class CampaignMilestone(Base):
    __tablename__ = "campaign_milestones"

    id = Column(Integer, primary_key=True, index=True)
    campaign_id = Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    campaign = relationship("Campaign", back_populates="milestones")

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(Date, nullable=True)
    status = Column(String, default="pending", nullable=False)


class CampaignTeam(Base):
    __tablename__ = "campaign_teams"

    id = Column(Integer, primary_key=True, index=True)
    campaign_id = Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    campaign = relationship("Campaign", back_populates="teams")

    name = Column(String, nullable=False, default="")
    members = relationship(
        "CampaignTeamMember",
        back_populates="team",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CampaignTeamMember.id",
    )


class CampaignTeamMember(Base):
    __tablename__ = "campaign_team_members"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("campaign_teams.id", ondelete="CASCADE"), nullable=False, index=True)
    team = relationship("CampaignTeam", back_populates="members")

    name = Column(String, nullable=False)
    role = Column(String, nullable=True)
    email = Column(String, nullable=True)


class CampaignFeedback(Base):
    __tablename__ = "campaign_feedback"

    id = Column(Integer, primary_key=True, index=True)
    campaign_id = Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    campaign = relationship("Campaign", back_populates="feedback")

    author = Column(String, nullable=True)
    message = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
