"""
Venue vote tallies.

Vote rows come straight from the venue_votes table as dicts
({"venue_id", "user_id", "vote_type", ...}). A user holds at most one vote per
venue; the table enforces that with an upsert on (venue_id, user_id).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from nightout.models.venues import VenueTally, VoteType


class VoteActionKind(str, Enum):
    RETRACT = "retract"
    UPSERT = "upsert"


@dataclass(frozen=True)
class VoteAction:
    kind: VoteActionKind
    vote_type: Optional[VoteType] = None

    @classmethod
    def retract(cls) -> "VoteAction":
        return cls(VoteActionKind.RETRACT)

    @classmethod
    def upsert(cls, vote_type: VoteType) -> "VoteAction":
        return cls(VoteActionKind.UPSERT, vote_type)


def parse_vote_type(value: Any) -> Optional[VoteType]:
    """Return the VoteType for a raw column value, or None if unrecognised."""
    if isinstance(value, VoteType):
        return value
    try:
        return VoteType(value)
    except ValueError:
        return None


def compute_tally(
    votes: Iterable[Mapping[str, Any]],
    venue_id: str,
    current_user_id: Optional[str],
) -> VenueTally:
    """
    Count up/down votes for one venue and find the caller's own vote.

    Rows for other venues are ignored. Rows with an unknown vote_type are
    neither counted nor reported as the user's vote.
    """
    upvotes = 0
    downvotes = 0
    user_vote: Optional[VoteType] = None

    for vote in votes:
        if vote.get("venue_id") != venue_id:
            continue
        vote_type = parse_vote_type(vote.get("vote_type"))
        if vote_type is VoteType.UPVOTE:
            upvotes += 1
        elif vote_type is VoteType.DOWNVOTE:
            downvotes += 1

        if (
            user_vote is None
            and current_user_id is not None
            and vote.get("user_id") == current_user_id
        ):
            user_vote = vote_type

    return VenueTally(upvotes=upvotes, downvotes=downvotes, user_vote=user_vote)


def apply_vote(existing: Optional[VoteType], requested: VoteType) -> VoteAction:
    """Pressing the vote you already hold retracts it; anything else replaces it."""
    if existing == requested:
        return VoteAction.retract()
    return VoteAction.upsert(requested)
