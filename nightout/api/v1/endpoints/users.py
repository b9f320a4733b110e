from fastapi import APIRouter, HTTPException, status, Depends, UploadFile, File
from pydantic import BaseModel

from nightout.core.auth import get_current_session
from nightout.core.config import settings
from nightout.core.session import SessionContext
from nightout.services.logger import logger
from nightout.services.profile_service import profile_service

router = APIRouter(redirect_slashes=False)


class LocationSharing(BaseModel):
    enabled: bool


@router.get("/me")
async def get_me(session: SessionContext = Depends(get_current_session)):
    return {"id": session.user_id, "email": session.email}


@router.get("/me/location-sharing", response_model=LocationSharing)
async def get_location_sharing(session: SessionContext = Depends(get_current_session)):
    try:
        enabled = await profile_service.get_location_sharing(session)
    except Exception as e:
        logger.error(
            "Failed to load location sharing",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error loading settings",
        )
    return LocationSharing(enabled=enabled)


@router.put("/me/location-sharing", response_model=LocationSharing)
async def update_location_sharing(
    settings_data: LocationSharing,
    session: SessionContext = Depends(get_current_session),
):
    try:
        enabled = await profile_service.set_location_sharing(
            session, settings_data.enabled
        )
    except Exception as e:
        logger.error(
            "Failed to update location sharing",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating settings",
        )
    return LocationSharing(enabled=enabled)


@router.post("/me/avatar")
async def upload_avatar(
    file: UploadFile = File(...),
    session: SessionContext = Depends(get_current_session),
):
    # One byte past the limit is enough to reject an oversized upload
    content = await file.read(int(settings.MAX_UPLOAD_BYTES) + 1)
    try:
        avatar_url = await profile_service.upload_avatar(session, content)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(
            "Failed to upload avatar",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error uploading avatar",
        )
    return {"avatar_url": avatar_url}
