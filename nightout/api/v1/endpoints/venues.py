from fastapi import APIRouter, HTTPException, status, Depends

from nightout.api.v1.endpoints.events import get_accessible_event
from nightout.core.auth import get_current_session
from nightout.core.session import SessionContext
from nightout.models.venues import VenueCreate, VenueResponse
from nightout.services.logger import logger
from nightout.services.venue_service import venue_service

router = APIRouter(redirect_slashes=False)


@router.post("/", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
async def add_venue(
    venue_data: VenueCreate,
    session: SessionContext = Depends(get_current_session),
):
    """Propose a venue, optionally for a specific event"""
    if venue_data.event_id:
        await get_accessible_event(venue_data.event_id, session)

    try:
        return await venue_service.add_venue(
            session,
            name=venue_data.name,
            address=venue_data.address,
            latitude=venue_data.latitude,
            longitude=venue_data.longitude,
            start_time=venue_data.start_time,
            utc_offset_minutes=venue_data.utc_offset_minutes,
            google_place_id=venue_data.google_place_id,
            event_id=venue_data.event_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(
            "Failed to add venue",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error adding venue",
        )


@router.get("/{venue_id}")
async def get_venue(
    venue_id: str,
    session: SessionContext = Depends(get_current_session),
):
    """Get a venue with Google place details when available"""
    try:
        venue = await venue_service.get_venue(venue_id)
    except Exception as e:
        logger.error(
            f"Failed to get venue {venue_id}",
            {"error": str(e), "venue_id": venue_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve venue",
        )

    if not venue:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found"
        )

    if venue.get("event_id"):
        await get_accessible_event(venue["event_id"], session)

    return venue
