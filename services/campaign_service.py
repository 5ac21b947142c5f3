import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from models.campaign_model import (
    Campaign,
    CampaignMilestone,
    CampaignTeam,
    CampaignTeamMember,
    CampaignFeedback,
)
from schemas.campaign_schema import (
    CampaignCreate,
    CampaignUpdate,
    MilestoneCreate,
    MilestoneUpdate,
    TeamCreate,
    FeedbackCreate,
)

logger = logging.getLogger(__name__)


class CampaignService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_campaign(self, data: CampaignCreate, createdby: Optional[str] = None) -> Campaign:
        campaign = Campaign(
            **data.model_dump(),
            createdby=createdby,
            active=True,
            milestones=[],
            teams=[],
            feedback=[],
        )
        self.db.add(campaign)
        await self.db.commit()
        logger.info(f"Campaign {campaign.id} created by {createdby}")
        return await self.get_campaign_by_id(campaign.id)

    async def get_all_campaigns(self) -> list[Campaign]:
        return list(await self.db.scalars(select(Campaign).order_by(Campaign.id)))

    async def get_campaign_by_id(self, campaign_id: int) -> Optional[Campaign]:
        stmt = select(Campaign).where(Campaign.id == campaign_id).execution_options(populate_existing=True)
        return await self.db.scalar(stmt)

    async def update_campaign(self, campaign_id: int, data: CampaignUpdate) -> Optional[Campaign]:
        campaign = await self.get_campaign_by_id(campaign_id)
        if not campaign:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "active":
                if isinstance(value, bool):
                    campaign.active = value
            elif value:
                setattr(campaign, field, value)

        await self.db.commit()
        return await self.get_campaign_by_id(campaign_id)

    async def delete_campaign(self, campaign_id: int) -> bool:
        campaign = await self.get_campaign_by_id(campaign_id)
        if not campaign:
            return False

        await self.db.delete(campaign)
        await self.db.commit()
        logger.info(f"Campaign {campaign_id} deleted")
        return True

    async def _child(self, model, child_id: int, campaign_id: int):
        stmt = select(model).where(model.id == child_id, model.campaign_id == campaign_id)
        return await self.db.scalar(stmt)

    async def add_milestone(self, campaign_id: int, data: MilestoneCreate) -> Optional[Campaign]:
        campaign = await self.get_campaign_by_id(campaign_id)
        if not campaign:
            return None

        self.db.add(CampaignMilestone(campaign_id=campaign.id, **data.model_dump()))
        await self.db.commit()
        return await self.get_campaign_by_id(campaign_id)

    async def update_milestone(
        self, campaign_id: int, milestone_id: int, data: MilestoneUpdate
    ) -> Optional[CampaignMilestone]:
        milestone = await self._child(CampaignMilestone, milestone_id, campaign_id)
        if not milestone:
            return None

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(milestone, field, value)
        await self.db.commit()
        return milestone

    async def delete_milestone(self, campaign_id: int, milestone_id: int) -> bool:
        milestone = await self._child(CampaignMilestone, milestone_id, campaign_id)
        if not milestone:
            return False

        await self.db.delete(milestone)
        await self.db.commit()
        return True

    async def add_team(self, campaign_id: int, data: TeamCreate) -> Optional[Campaign]:
        campaign = await self.get_campaign_by_id(campaign_id)
        if not campaign:
            return None

        team = CampaignTeam(
            campaign_id=campaign.id,
            name=data.name or "",
            members=[CampaignTeamMember(**member.model_dump()) for member in data.members],
        )
        self.db.add(team)
        await self.db.commit()
        return await self.get_campaign_by_id(campaign_id)

    async def delete_team(self, campaign_id: int, team_id: int) -> bool:
        team = await self._child(CampaignTeam, team_id, campaign_id)
        if not team:
            return False

        await self.db.delete(team)
        await self.db.commit()
        return True

    async def add_feedback(self, campaign_id: int, data: FeedbackCreate) -> Optional[Campaign]:
        campaign = await self.get_campaign_by_id(campaign_id)
        if not campaign:
            return None

        self.db.add(CampaignFeedback(campaign_id=campaign.id, **data.model_dump()))
        await self.db.commit()
        return await self.get_campaign_by_id(campaign_id)

    async def get_campaign_feedback(self, campaign_id: int) -> list[CampaignFeedback]:
        stmt = select(CampaignFeedback).where(CampaignFeedback.campaign_id == campaign_id).order_by(CampaignFeedback.id)
        return list(await self.db.scalars(stmt))

    async def delete_feedback(self, campaign_id: int, feedback_id: int) -> bool:
        feedback = await self._child(CampaignFeedback, feedback_id, campaign_id)
        if not feedback:
            return False

        await self.db.delete(feedback)
        await self.db.commit()
        return True

    async def get_campaigns_by_user(self, createdby: str) -> list[Campaign]:
        stmt = select(Campaign).where(Campaign.createdby == createdby).order_by(Campaign.id)
        return list(await self.db.scalars(stmt))

    async def search_campaigns(self, query: str) -> list[Campaign]:
        pattern = f"%{query}%"
        stmt = (
            select(Campaign)
            .where(or_(Campaign.title.ilike(pattern), Campaign.description.ilike(pattern)))
            .order_by(Campaign.id)
        )
        return list(await self.db.scalars(stmt))
