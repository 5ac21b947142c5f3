import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from dependencies.auth import get_current_user, forbid_creators
from dependencies.services import get_job_service
from schemas.job_schema import JobCreate, JobUpdate, JobOut, ProposalCreate, ProposalOut, ProposalStatusUpdate
from schemas.user_schema import AuthenticatedUser
from services.job_service import JobService
from utils.exceptions import AppError, ForbiddenError, InternalError, NotFoundError, ValidationFailedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


def job_not_found(job_id: int) -> NotFoundError:
    return NotFoundError(f"Job with ID {job_id} not found", error="Job not found")


def proposal_not_found(proposal_id: int) -> NotFoundError:
    return NotFoundError(f"Proposal with ID {proposal_id} not found", error="Proposal not found")


async def owned_job(job_id: int, current_user: AuthenticatedUser, service: JobService):
    job = await service.get_job_by_id(job_id)
    if not job or not job.is_active:
        raise job_not_found(job_id)
    if job.owner_id != current_user.id:
        raise ForbiddenError("Only the job owner can modify this job")
    return job


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_job(
    data: JobCreate,
    current_user: AuthenticatedUser = Depends(forbid_creators),
    service: JobService = Depends(get_job_service),
):
    try:
        job = await service.create_job(current_user.id, data)
    except AppError:
        raise
    except Exception:
        logger.exception("Create job error")
        raise InternalError("Internal server error while creating job", error="Job creation failed")
    return {
        "message": "Job created successfully",
        "job": {"insertedId": str(job.id)},
        "data": JobOut.model_validate(job),
    }


@router.get("")
async def get_all_jobs(service: JobService = Depends(get_job_service)):
    jobs = await service.get_all_jobs()
    return {"message": "Jobs retrieved successfully", "data": [JobOut.model_validate(j) for j in jobs]}


@router.get("/search")
async def search_jobs(query: Optional[str] = None, service: JobService = Depends(get_job_service)):
    if not query:
        raise ValidationFailedError("Search query is required", error="Search failed")
    jobs = await service.search_jobs(query)
    return {"message": "Search completed successfully", "data": [JobOut.model_validate(j) for j in jobs]}


@router.get("/category/{category}")
async def get_jobs_by_category(category: str, service: JobService = Depends(get_job_service)):
    jobs = await service.get_jobs_by_category(category)
    return {"message": "Category jobs retrieved successfully", "data": [JobOut.model_validate(j) for j in jobs]}


@router.get("/owner/{owner_id}")
async def get_jobs_by_owner(owner_id: int, service: JobService = Depends(get_job_service)):
    jobs = await service.get_jobs_by_owner(owner_id)
    return {"message": "Owner jobs retrieved successfully", "data": [JobOut.model_validate(j) for j in jobs]}


@router.get("/{job_id}")
async def get_job(job_id: int, service: JobService = Depends(get_job_service)):
    job = await service.get_job_by_id(job_id)
    if not job:
        raise job_not_found(job_id)
    return {"message": "Job retrieved successfully", "data": JobOut.model_validate(job)}


@router.put("/{job_id}")
async def update_job(
    job_id: int,
    data: JobUpdate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: JobService = Depends(get_job_service),
):
    await owned_job(job_id, current_user, service)
    job = await service.update_job(job_id, data)
    if not job:
        raise job_not_found(job_id)
    return {"message": "Job updated successfully", "data": JobOut.model_validate(job)}


@router.delete("/{job_id}")
async def delete_job(
    job_id: int,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: JobService = Depends(get_job_service),
):
    await owned_job(job_id, current_user, service)
    if not await service.delete_job(job_id):
        raise job_not_found(job_id)
    return {"message": "Job deleted successfully"}


@router.post("/{job_id}/proposals", status_code=status.HTTP_201_CREATED)
async def create_proposal(
    job_id: int,
    data: ProposalCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: JobService = Depends(get_job_service),
):
    try:
        proposal = await service.create_proposal(job_id, current_user.id, data)
    except AppError:
        raise
    except Exception:
        logger.exception("Create proposal error")
        raise InternalError("Internal server error while creating proposal", error="Proposal creation failed")
    return {"message": "Proposal created successfully", "data": ProposalOut.model_validate(proposal)}


@router.get("/{job_id}/proposals")
async def get_job_proposals(job_id: int, service: JobService = Depends(get_job_service)):
    proposals = await service.get_job_proposals(job_id)
    return {
        "message": "Proposals retrieved successfully",
        "data": [ProposalOut.model_validate(p) for p in proposals],
    }


@router.patch("/{job_id}/proposals/{proposal_id}")
async def update_proposal_status(
    job_id: int,
    proposal_id: int,
    data: ProposalStatusUpdate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: JobService = Depends(get_job_service),
):
    await owned_job(job_id, current_user, service)
    existing = await service.get_proposal(proposal_id)
    if not existing or existing.job_id != job_id:
        raise proposal_not_found(proposal_id)

    proposal = await service.update_proposal_status(proposal_id, data.status)
    return {"message": "Proposal status updated successfully", "data": ProposalOut.model_validate(proposal)}


@router.delete("/{job_id}/proposals/{proposal_id}")
async def delete_proposal(
    job_id: int,
    proposal_id: int,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: JobService = Depends(get_job_service),
):
    job = await service.get_job_by_id(job_id)
    proposal = await service.get_proposal(proposal_id)
    if not job or not proposal or proposal.job_id != job_id:
        raise proposal_not_found(proposal_id)
    if current_user.id not in (proposal.proposer_id, job.owner_id):
        raise ForbiddenError("Only the proposer or the job owner can delete this proposal")

    await service.delete_proposal(proposal_id)
    return {"message": "Proposal deleted successfully"}
