"""
Calendar projection models.
"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel


class CalendarDay(BaseModel):
    """Labels scheduled on one calendar date, in insertion order."""

    date: date
    labels: List[str]


class CalendarProjection(BaseModel):
    """A client's projected calendar, sorted by date."""

    client_id: str
    start: Optional[date] = None
    end: Optional[date] = None
    days: List[CalendarDay] = []

    def as_mapping(self) -> Dict[str, List[str]]:
        """``{"YYYY-MM-DD": [labels]}`` view of the projection."""
        return {day.date.isoformat(): list(day.labels) for day in self.days}


class ScheduledDatesResponse(BaseModel):
    """Response model for GET /clients/{id}/assignments."""

    scheduled_dates: List[str]
    count: int
