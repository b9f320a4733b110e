from fastapi import APIRouter, HTTPException, status, Depends, Query

from nightout.core.auth import get_current_session
from nightout.core.session import SessionContext
from nightout.services.logger import logger
from nightout.services.places_service import places_service, PlacesError

router = APIRouter(redirect_slashes=False)


def _require_places():
    if not places_service.is_configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Place search is not configured",
        )


@router.get("/reverse-geocode")
async def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    session: SessionContext = Depends(get_current_session),
):
    """Resolve a map tap to a place (falls back to the raw coordinate)"""
    _require_places()
    return await places_service.reverse_geocode(lat, lng)


@router.get("/search")
async def search_places(
    query: str = Query(..., min_length=1, max_length=200),
    session: SessionContext = Depends(get_current_session),
):
    _require_places()
    try:
        return await places_service.search(query)
    except PlacesError as e:
        logger.error("Place search failed", {"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Place search failed",
        )


@router.get("/{place_id}")
async def get_place_details(
    place_id: str,
    session: SessionContext = Depends(get_current_session),
):
    _require_places()
    try:
        return await places_service.place_details(place_id)
    except PlacesError as e:
        logger.error(
            f"Place details failed for {place_id}",
            {"error": str(e), "place_id": place_id},
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Error fetching place details",
        )
