from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    title: str = Field(..., max_length=200)
    event_date: datetime
    is_private: bool = False
    is_scavenger_hunt: bool = False


class EventResponse(BaseModel):
    id: str
    title: str
    event_date: str
    status: str = "planning"
    is_private: bool = False
    is_scavenger_hunt: bool = False
    user_id: str


class PlanCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=1000)
    start_date: date
    number_of_weeks: int = Field(..., ge=1, le=52)


class PlanResponse(BaseModel):
    id: str
    description: str
    start_date: str
    number_of_weeks: int
    created_by: str
    last_update: Optional[str] = None
    time_created: Optional[str] = None


