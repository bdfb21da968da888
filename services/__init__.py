"""
Scheduling services for the coaching schedule API.

- Catalog: exercises, workouts and programs
- AssignmentManager: template-to-client bindings and the trainer relationship
- CalendarProjector: on-demand date -> labels view of a client's schedule

Services receive repository ports through their constructors and return
pydantic models; routers never touch repositories directly.
"""

from services.assignment_manager import AssignmentManager
from services.calendar_projector import CalendarProjector, project_client
from services.catalog import Catalog

__all__ = [
    "AssignmentManager",
    "CalendarProjector",
    "Catalog",
    "project_client",
]
