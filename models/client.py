"""
Client account models.

``trainer_id`` on the client record is the one canonical trainer-client link.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from models.user import UserSummary


class SubscriptionStatus(str, Enum):
    """Client subscription state. Only ACTIVE clients can be scheduled."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"
    PENDING = "PENDING"


class SubscriptionPlan(str, Enum):
    """Paid plans."""

    BASIC = "BASIC"
    PRO = "PRO"
    ELITE = "ELITE"


class Client(BaseModel):
    """A client profile linked to a CLIENT-role user."""

    id: str
    user_id: str
    trainer_id: Optional[str] = None
    subscription_status: SubscriptionStatus = SubscriptionStatus.INACTIVE
    subscription_plan: Optional[SubscriptionPlan] = None
    user: Optional[UserSummary] = None
    trainer: Optional[UserSummary] = None
    created_at: Optional[datetime] = None


class ClientSummary(BaseModel):
    """Client fields embedded in assignment responses."""

    id: str
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None


class TrainerAssignRequest(BaseModel):
    """Request model for POST /clients/assign."""

    client_id: str
    trainer_id: Optional[str] = None


class TrainerUnassignRequest(BaseModel):
    """Request model for POST /clients/unassign."""

    client_id: str


class ReassignRequest(BaseModel):
    """Request model for POST /clients/reassign (admin only)."""

    client_id: str
    new_trainer_id: str


class SubscriptionUpdateRequest(BaseModel):
    """Request model for PUT /clients/subscription (admin only)."""

    client_id: str
    subscription_status: Optional[SubscriptionStatus] = None
    subscription_plan: Optional[SubscriptionPlan] = None


class ClientListResponse(BaseModel):
    """Response model for client listing."""

    clients: List[Client]
    count: int
