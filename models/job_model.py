# models/job_model.py

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)

    gender = Column(String, nullable=True)
    availability = Column(String, nullable=True)
    location = Column(String, nullable=True)
    category = Column(String, nullable=True, index=True)
    age = Column(String, nullable=True)
    experience = Column(String, nullable=True)
    priority = Column(String, nullable=True)
    visibility = Column(String, nullable=True)
    payment = Column(String, nullable=True)
    paymentdesc = Column(Text, nullable=True)
    link = Column(String, nullable=True)
    years = Column(String, nullable=True)

    goals = Column(JSON, nullable=True)
    skills = Column(JSON, nullable=True)
    contents = Column(JSON, nullable=True)
    platforms = Column(JSON, nullable=True)

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    owner = relationship("User", lazy="selectin")

    proposals = relationship(
        "JobProposal",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="JobProposal.id",
    )

    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class JobProposal(Base):
    __tablename__ = "job_proposals"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    proposed_budget = Column(String, nullable=True)
    deliverables = Column(JSON, nullable=True)

    proposer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    proposer = relationship("User", lazy="selectin")

    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    job = relationship("Job", back_populates="proposals", lazy="selectin")

    status = Column(String, default="pending", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
