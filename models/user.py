"""
Identity models.

Roles arrive as raw strings in the token; they are converted to ``Role`` once
at the auth boundary and compared as enum members everywhere else.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Role(str, Enum):
    """Account roles."""

    ADMIN = "ADMIN"
    TRAINER = "TRAINER"
    CLIENT = "CLIENT"


class CurrentUser(BaseModel):
    """Authenticated caller identity."""

    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_trainer(self) -> bool:
        return self.role == Role.TRAINER

    @property
    def is_client(self) -> bool:
        return self.role == Role.CLIENT

    @property
    def is_staff(self) -> bool:
        """Trainers and admins."""
        return self.role in (Role.TRAINER, Role.ADMIN)


class UserSummary(BaseModel):
    """Public fields of a user account."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None
