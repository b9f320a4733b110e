from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class CompletionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaderboardUserDetails(BaseModel):
    email: Optional[str] = None
    avatar_url: Optional[str] = None


class LeaderboardEntry(BaseModel):
    user_id: str
    user_details: Optional[LeaderboardUserDetails] = None
    total_points: int = 0
    completed_count: int = 0
    rank: int


class LeaderboardResponse(BaseModel):
    event_id: str
    entries: List[LeaderboardEntry]


class ChallengeCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    points: int = Field(..., ge=0)


class CompletionSummary(BaseModel):
    id: Optional[str] = None
    status: CompletionStatus
    proof_photo_url: Optional[str] = None


class ChallengeResponse(BaseModel):
    id: str
    event_id: str
    title: str
    description: Optional[str] = None
    points: int = 0
    completion: Optional[CompletionSummary] = None


class CompletionReview(BaseModel):
    # Moderators only move a completion out of pending
    status: CompletionStatus


class CompletionResponse(BaseModel):
    id: str
    challenge_id: str
    user_id: str
    status: CompletionStatus
    proof_photo_url: Optional[str] = None
