from fastapi import APIRouter
from nightout.api.v1.endpoints import (
    auth,
    events,
    venues,
    challenges,
    places,
    plans,
    users,
)

# Create main API router
api_router = APIRouter(
    redirect_slashes=False
)  # Disable redirects to preserve Authorization header

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(events.router, prefix="/events", tags=["Events"])
api_router.include_router(venues.router, prefix="/venues", tags=["Venues"])
api_router.include_router(challenges.router, prefix="/challenges", tags=["Challenges"])
api_router.include_router(places.router, prefix="/places", tags=["Places"])
api_router.include_router(plans.router, prefix="/plans", tags=["Plans"])
api_router.include_router(users.router, prefix="/users", tags=["User Management"])
