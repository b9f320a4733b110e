from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class VoteType(str, Enum):
    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class VenueTally(BaseModel):
    """Vote summary for one venue, recomputed on every read."""

    upvotes: int = 0
    downvotes: int = 0
    user_vote: Optional[VoteType] = None


class VenueCreate(BaseModel):
    name: str = Field(..., max_length=200)
    address: str = Field(..., max_length=500)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    start_time: str = Field(
        ..., description="Local start time, HH:MM (24h)", pattern=r"^\d{2}:\d{2}$"
    )
    utc_offset_minutes: int = Field(
        0,
        ge=-14 * 60,
        le=14 * 60,
        description="Client timezone offset east of UTC, in minutes",
    )
    google_place_id: Optional[str] = None
    event_id: Optional[str] = None


class VenueResponse(BaseModel):
    id: str
    event_id: Optional[str] = None
    name: str
    address: str
    status: str = "pending"
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    google_place_id: Optional[str] = None
    start_time: Optional[str] = None


class VenueWithTallyResponse(VenueResponse):
    upvotes: int = 0
    downvotes: int = 0
    user_vote: Optional[VoteType] = None


class VoteRequest(BaseModel):
    vote_type: VoteType
