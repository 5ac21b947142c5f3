from models.user_model import User, AccountType
from models.job_model import Job, JobProposal
from models.campaign_model import (
    Campaign,
    CampaignMilestone,
    CampaignTeam,
    CampaignTeamMember,
    CampaignFeedback,
)

__all__ = [
    "User",
    "AccountType",
    "Job",
    "JobProposal",
    "Campaign",
    "CampaignMilestone",
    "CampaignTeam",
    "CampaignTeamMember",
    "CampaignFeedback",
]
