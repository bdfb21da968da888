"""
Clients router: trainer-client relationship and calendar views.

This router contains endpoints for:
- /clients - Clients of the caller (all clients for admins)
- /clients/available - Unassigned clients with an ACTIVE subscription
- /clients/assign, /clients/unassign - Trainer takes or releases a client
- /clients/reassign - Admin moves a client to another trainer
- /clients/subscription - Admin updates a client's subscription
- /clients/{client_id}/calendar - Projected date -> labels calendar
- /clients/{client_id}/assignments - Dates that carry at least one workout
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_assignment_manager, get_calendar_projector, get_current_user
from models.calendar import CalendarProjection, ScheduledDatesResponse
from models.client import (
    Client,
    ClientListResponse,
    ReassignRequest,
    SubscriptionUpdateRequest,
    TrainerAssignRequest,
    TrainerUnassignRequest,
)
from models.user import CurrentUser
from services import AssignmentManager, CalendarProjector

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/clients",
    tags=["Clients"],
)


@router.get("", response_model=ClientListResponse)
def list_clients(
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> ClientListResponse:
    clients = manager.list_clients(user)
    return ClientListResponse(clients=clients, count=len(clients))


@router.get("/available", response_model=ClientListResponse)
def list_available_clients(
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> ClientListResponse:
    clients = manager.list_available_clients(user)
    return ClientListResponse(clients=clients, count=len(clients))


@router.post("/assign", response_model=Client)
def assign_trainer(
    request: TrainerAssignRequest,
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> Client:
    """
    Assign an unassigned, ACTIVE client to a trainer.

    Trainers assign themselves; admins pass ``trainer_id``.
    """
    return manager.assign_trainer_to_client(user, request.client_id, request.trainer_id)


@router.post("/unassign", response_model=Client)
def unassign_trainer(
    request: TrainerUnassignRequest,
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> Client:
    return manager.unassign_trainer_from_client(user, request.client_id)


@router.post("/reassign", response_model=Client)
def reassign_client(
    request: ReassignRequest,
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> Client:
    """Move a client to another trainer (admins only)."""
    return manager.reassign_client(user, request.client_id, request.new_trainer_id)


@router.put("/subscription", response_model=Client)
def update_subscription(
    request: SubscriptionUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> Client:
    return manager.update_subscription(user, request)


@router.get("/{client_id}/calendar", response_model=CalendarProjection)
def get_calendar(
    client_id: str,
    start: Optional[date] = Query(None, description="First date to include"),
    end: Optional[date] = Query(None, description="Last date to include"),
    user: CurrentUser = Depends(get_current_user),
    projector: CalendarProjector = Depends(get_calendar_projector),
) -> CalendarProjection:
    """
    Project the client's calendar.

    Recomputed from current assignments on every call.
    """
    return projector.project(user, client_id, start=start, end=end)


@router.get("/{client_id}/assignments", response_model=ScheduledDatesResponse)
def get_scheduled_dates(
    client_id: str,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    user: CurrentUser = Depends(get_current_user),
    projector: CalendarProjector = Depends(get_calendar_projector),
) -> ScheduledDatesResponse:
    dates = projector.scheduled_dates(user, client_id, start=start, end=end)
    return ScheduledDatesResponse(scheduled_dates=dates, count=len(dates))
