from typing import Optional

from fastapi import APIRouter, Depends, status

from dependencies.auth import get_current_user
from dependencies.services import get_campaign_service
from schemas.campaign_schema import (
    CampaignCreate, CampaignUpdate, CampaignOut, MilestoneCreate, MilestoneUpdate,
    MilestoneOut, TeamCreate, FeedbackCreate, FeedbackOut,
)
from schemas.user_schema import AuthenticatedUser
from services.campaign_service import CampaignService
from utils.exceptions import NotFoundError, ValidationFailedError

router = APIRouter(prefix="/campaigns", tags=["campaigns"])


def not_found(kind: str, item_id: int) -> NotFoundError:
    return NotFoundError(f"{kind} with ID {item_id} not found", error=f"{kind} not found")


def campaign_list(campaigns) -> list[CampaignOut]:
    return [CampaignOut.model_validate(c) for c in campaigns]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_campaign(
    data: CampaignCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: CampaignService = Depends(get_campaign_service),
):
    campaign = await service.create_campaign(data, createdby=str(current_user.id))
    return {"message": "Campaign created successfully", "data": CampaignOut.model_validate(campaign)}


@router.get("")
async def get_all_campaigns(service: CampaignService = Depends(get_campaign_service)):
    campaigns = await service.get_all_campaigns()
    return {"message": "Campaigns retrieved successfully", "data": campaign_list(campaigns)}


@router.get("/search")
async def search_campaigns(query: Optional[str] = None, service: CampaignService = Depends(get_campaign_service)):
    if not query:
        raise ValidationFailedError("Search query is required", error="Search failed")
    campaigns = await service.search_campaigns(query)
    return {"message": "Search completed successfully", "data": campaign_list(campaigns)}


@router.get("/user/{createdby}")
async def get_campaigns_by_user(createdby: str, service: CampaignService = Depends(get_campaign_service)):
    campaigns = await service.get_campaigns_by_user(createdby)
    return {"message": "User campaigns retrieved successfully", "data": campaign_list(campaigns)}


@router.get("/{campaign_id}")
async def get_campaign(campaign_id: int, service: CampaignService = Depends(get_campaign_service)):
    campaign = await service.get_campaign_by_id(campaign_id)
    if not campaign:
        raise not_found("Campaign", campaign_id)
    return {"message": "Campaign retrieved successfully", "data": CampaignOut.model_validate(campaign)}


@router.put("/{campaign_id}")
async def update_campaign(
    campaign_id: int,
    data: CampaignUpdate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: CampaignService = Depends(get_campaign_service),
):
    campaign = await service.update_campaign(campaign_id, data)
    if not campaign:
        raise not_found("Campaign", campaign_id)
    return {"message": "Campaign updated successfully", "data": CampaignOut.model_validate(campaign)}


@router.delete("/{campaign_id}")
async def delete_campaign(
    campaign_id: int,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: CampaignService = Depends(get_campaign_service),
):
    if not await service.delete_campaign(campaign_id):
        raise not_found("Campaign", campaign_id)
    return {"message": "Campaign deleted successfully"}


@router.post("/{campaign_id}/milestones", status_code=status.HTTP_201_CREATED)
async def add_milestone(
    campaign_id: int,
    data: MilestoneCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: CampaignService = Depends(get_campaign_service),
):
    campaign = await service.add_milestone(campaign_id, data)
    if not campaign:
        raise not_found("Campaign", campaign_id)
    return {"message": "Milestone added successfully", "data": CampaignOut.model_validate(campaign)}


@router.put("/{campaign_id}/milestones/{milestone_id}")
async def update_milestone(
    campaign_id: int,
    milestone_id: int,
    data: MilestoneUpdate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: CampaignService = Depends(get_campaign_service),
):
    milestone = await service.update_milestone(campaign_id, milestone_id, data)
    if not milestone:
        raise not_found("Milestone", milestone_id)
    return {"message": "Milestone updated successfully", "data": MilestoneOut.model_validate(milestone)}


@router.delete("/{campaign_id}/milestones/{milestone_id}")
async def delete_milestone(
    campaign_id: int,
    milestone_id: int,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: CampaignService = Depends(get_campaign_service),
):
    if not await service.delete_milestone(campaign_id, milestone_id):
        raise not_found("Milestone", milestone_id)
    return {"message": "Milestone deleted successfully"}


@router.post("/{campaign_id}/teams", status_code=status.HTTP_201_CREATED)
async def add_team(
    campaign_id: int,
    data: TeamCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: CampaignService = Depends(get_campaign_service),
):
    campaign = await service.add_team(campaign_id, data)
    if not campaign:
        raise not_found("Campaign", campaign_id)
    return {"message": "Team added successfully", "data": CampaignOut.model_validate(campaign)}


@router.delete("/{campaign_id}/teams/{team_id}")
async def delete_team(
    campaign_id: int,
    team_id: int,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: CampaignService = Depends(get_campaign_service),
):
    if not await service.delete_team(campaign_id, team_id):
        raise not_found("Team", team_id)
    return {"message": "Team deleted successfully"}


@router.post("/{campaign_id}/feedback", status_code=status.HTTP_201_CREATED)
async def add_feedback(
    campaign_id: int,
    data: FeedbackCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: CampaignService = Depends(get_campaign_service),
):
    if not data.author:
        data = data.model_copy(update={"author": current_user.email})
    campaign = await service.add_feedback(campaign_id, data)
    if not campaign:
        raise not_found("Campaign", campaign_id)
    return {"message": "Feedback added successfully", "data": CampaignOut.model_validate(campaign)}


@router.get("/{campaign_id}/feedback")
async def get_campaign_feedback(campaign_id: int, service: CampaignService = Depends(get_campaign_service)):
    feedback = await service.get_campaign_feedback(campaign_id)
    return {"message": "Feedback retrieved successfully", "data": [FeedbackOut.model_validate(f) for f in feedback]}


@router.delete("/{campaign_id}/feedback/{feedback_id}")
async def delete_feedback(
    campaign_id: int,
    feedback_id: int,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: CampaignService = Depends(get_campaign_service),
):
    if not await service.delete_feedback(campaign_id, feedback_id):
        raise not_found("Feedback", feedback_id)
    return {"message": "Feedback deleted successfully"}
