import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from models.job_model import Job, JobProposal
from models.user_model import User
from schemas.job_schema import JobCreate, JobUpdate, ProposalCreate
from utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class JobService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_job(self, owner_id: int, data: JobCreate) -> Job:
        owner = await self.db.get(User, owner_id)
        if not owner:
            raise NotFoundError("Job owner not found", error="Job creation failed")

        job = Job(
            **data.values.model_dump(),
            goals=data.goals,
            skills=data.skills,
            contents=data.contents,
            platforms=data.platforms,
            owner=owner,
            owner_id=owner.id,
            proposals=[],
            is_active=True,
        )
        self.db.add(job)
        await self.db.commit()
        logger.info(f"Job {job.id} created by user {owner.id}")
        return await self.get_job_by_id(job.id)

    async def get_all_jobs(self) -> list[Job]:
        result = await self.db.scalars(select(Job).where(Job.is_active.is_(True)).order_by(Job.id))
        return list(result)

    async def get_job_by_id(self, job_id: int) -> Optional[Job]:
        stmt = select(Job).where(Job.id == job_id).execution_options(populate_existing=True)
        return await self.db.scalar(stmt)

    async def get_jobs_by_owner(self, owner_id: int) -> list[Job]:
        stmt = select(Job).where(Job.owner_id == owner_id, Job.is_active.is_(True)).order_by(Job.id)
        return list(await self.db.scalars(stmt))

    async def update_job(self, job_id: int, data: JobUpdate) -> Optional[Job]:
        job = await self.get_job_by_id(job_id)
        if not job:
            return None

        # empty values leave the stored field as is
        for field, value in data.model_dump(exclude_unset=True).items():
            if value:
                setattr(job, field, value)

        await self.db.commit()
        return await self.get_job_by_id(job_id)

    async def delete_job(self, job_id: int) -> bool:
        job = await self.get_job_by_id(job_id)
        if not job:
            return False

        job.is_active = False
        await self.db.commit()
        logger.info(f"Job {job_id} deactivated")
        return True

    async def search_jobs(self, query: str) -> list[Job]:
        pattern = f"%{query}%"
        stmt = (
            select(Job)
            .where(Job.is_active.is_(True))
            .where(or_(Job.title.ilike(pattern), Job.description.ilike(pattern)))
            .order_by(Job.id)
        )
        return list(await self.db.scalars(stmt))

    async def get_jobs_by_category(self, category: str) -> list[Job]:
        stmt = select(Job).where(Job.category == category, Job.is_active.is_(True)).order_by(Job.id)
        return list(await self.db.scalars(stmt))

    async def create_proposal(self, job_id: int, proposer_id: int, data: ProposalCreate) -> JobProposal:
        job = await self.get_job_by_id(job_id)
        if not job:
            raise NotFoundError("Job not found", error="Proposal creation failed")
        proposer = await self.db.get(User, proposer_id)
        if not proposer:
            raise NotFoundError("Proposer not found", error="Proposal creation failed")

        proposal = JobProposal(
            title=data.title,
            description=data.description,
            proposed_budget=data.proposed_budget,
            deliverables=data.deliverables,
            job_id=job.id,
            proposer=proposer,
            proposer_id=proposer.id,
            status="pending",
        )
        self.db.add(proposal)
        await self.db.commit()
        logger.info(f"Proposal {proposal.id} submitted to job {job.id} by user {proposer.id}")
        return await self.get_proposal(proposal.id)

    async def get_proposal(self, proposal_id: int) -> Optional[JobProposal]:
        stmt = select(JobProposal).where(JobProposal.id == proposal_id).execution_options(populate_existing=True)
        return await self.db.scalar(stmt)

    async def get_job_proposals(self, job_id: int) -> list[JobProposal]:
        stmt = select(JobProposal).where(JobProposal.job_id == job_id).order_by(JobProposal.id)
        return list(await self.db.scalars(stmt))

    async def update_proposal_status(self, proposal_id: int, status: str) -> Optional[JobProposal]:
        proposal = await self.get_proposal(proposal_id)
        if not proposal:
            return None

        proposal.status = status
        await self.db.commit()
        return proposal

    async def delete_proposal(self, proposal_id: int) -> bool:
        proposal = await self.get_proposal(proposal_id)
        if not proposal:
            return False

        await self.db.delete(proposal)
        await self.db.commit()
        return True
