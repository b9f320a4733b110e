"""
Events API endpoints

An event is an outing. Its venues, votes, challenges and leaderboard are all
addressed under /events/{event_id}.
"""

from fastapi import APIRouter, HTTPException, status, Depends
from typing import Any, Dict, List

from nightout.core.auth import get_current_session
from nightout.core.session import SessionContext
from nightout.models.challenges import (
    ChallengeCreate,
    ChallengeResponse,
    LeaderboardResponse,
)
from nightout.models.events import EventCreate, EventResponse
from nightout.models.venues import VenueTally, VenueWithTallyResponse, VoteRequest
from nightout.services.challenge_service import challenge_service
from nightout.services.event_service import event_service
from nightout.services.logger import logger
from nightout.services.venue_service import venue_service

router = APIRouter(redirect_slashes=False)


async def get_accessible_event(event_id: str, session: SessionContext) -> Dict[str, Any]:
    """
    Load an event the caller may see.

    Public events are visible to everyone; private events only to the owner
    and participants. A private event the caller cannot see is reported as
    missing.
    """
    try:
        event = await event_service.get_event(event_id)
        has_access = bool(event) and (
            not event.get("is_private")
            or await event_service.is_participant(event, session.user_id)
        )
    except Exception as e:
        logger.error(
            f"Failed to load event {event_id}",
            {"error": str(e), "event_id": event_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve event",
        )

    if not has_access:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        )

    return event


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    session: SessionContext = Depends(get_current_session),
):
    """Create a new event"""
    try:
        return await event_service.create_event(
            session,
            title=event_data.title,
            event_date=event_data.event_date,
            is_private=event_data.is_private,
            is_scavenger_hunt=event_data.is_scavenger_hunt,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(
            f"Failed to create event for user {session.user_id}",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create event",
        )


@router.get("/", response_model=List[EventResponse])
async def get_my_events(session: SessionContext = Depends(get_current_session)):
    """Get events the user owns or has joined"""
    try:
        return await event_service.list_events(session)
    except Exception as e:
        logger.error(
            "Failed to get events",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve events",
        )


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    session: SessionContext = Depends(get_current_session),
):
    return await get_accessible_event(event_id, session)


@router.post("/{event_id}/join")
async def join_event(
    event_id: str,
    session: SessionContext = Depends(get_current_session),
):
    """Join a public event"""
    event = await get_accessible_event(event_id, session)

    if event.get("is_private") and event.get("user_id") != session.user_id:
        # Visible private events are ones the user already belongs to
        return {"event_id": event_id, "user_id": session.user_id}

    try:
        return await event_service.join_event(session, event_id)
    except Exception as e:
        logger.error(
            f"Failed to join event {event_id}",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to join event",
        )


@router.get("/{event_id}/venues", response_model=List[VenueWithTallyResponse])
async def get_event_venues(
    event_id: str,
    session: SessionContext = Depends(get_current_session),
):
    """Get venues proposed for an event with their vote tallies"""
    await get_accessible_event(event_id, session)

    try:
        return await venue_service.list_event_venues(session, event_id)
    except Exception as e:
        logger.error(
            f"Failed to get venues for event {event_id}",
            {"error": str(e), "event_id": event_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve venues",
        )


@router.post("/{event_id}/venues/{venue_id}/vote", response_model=VenueTally)
async def vote_on_venue(
    event_id: str,
    venue_id: str,
    vote: VoteRequest,
    session: SessionContext = Depends(get_current_session),
):
    """
    Vote on a venue.

    Sending the vote you already hold removes it; sending the other vote
    type replaces it. Returns the venue's updated tally.
    """
    await get_accessible_event(event_id, session)

    try:
        venue = await venue_service.get_venue(venue_id, include_place_details=False)
        if not venue or venue.get("event_id") != event_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found"
            )

        return await venue_service.cast_vote(session, event_id, venue_id, vote.vote_type)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            f"Failed to vote on venue {venue_id}",
            {"error": str(e), "user_id": session.user_id, "event_id": event_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error submitting vote",
        )


@router.get("/{event_id}/challenges", response_model=List[ChallengeResponse])
async def get_event_challenges(
    event_id: str,
    session: SessionContext = Depends(get_current_session),
):
    """Get an event's challenges with the caller's own completion"""
    await get_accessible_event(event_id, session)

    try:
        return await challenge_service.list_event_challenges(session, event_id)
    except Exception as e:
        logger.error(
            f"Failed to get challenges for event {event_id}",
            {"error": str(e), "event_id": event_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error loading challenges",
        )


@router.post(
    "/{event_id}/challenges",
    response_model=ChallengeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_event_challenge(
    event_id: str,
    challenge_data: ChallengeCreate,
    session: SessionContext = Depends(get_current_session),
):
    """Add a challenge to a scavenger hunt (event owner only)"""
    event = await get_accessible_event(event_id, session)

    if event.get("user_id") != session.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the event owner can add challenges",
        )

    try:
        return await challenge_service.create_challenge(
            event,
            title=challenge_data.title,
            description=challenge_data.description,
            points=challenge_data.points,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(
            f"Failed to create challenge for event {event_id}",
            {"error": str(e), "event_id": event_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create challenge",
        )


@router.get("/{event_id}/leaderboard", response_model=LeaderboardResponse)
async def get_event_leaderboard(
    event_id: str,
    session: SessionContext = Depends(get_current_session),
):
    """Get the scavenger-hunt leaderboard for an event"""
    await get_accessible_event(event_id, session)

    try:
        entries = await challenge_service.get_event_leaderboard(event_id)
    except Exception as e:
        logger.error(
            f"Failed to get leaderboard for event {event_id}",
            {"error": str(e), "event_id": event_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve leaderboard",
        )

    return LeaderboardResponse(event_id=event_id, entries=entries)
