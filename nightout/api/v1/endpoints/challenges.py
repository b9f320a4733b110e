"""
Challenges API endpoints

Listing and creating challenges lives under /events/{event_id}/challenges;
these routes act on a single challenge or completion.
"""

from fastapi import APIRouter, HTTPException, status, Depends, UploadFile, File

from nightout.api.v1.endpoints.events import get_accessible_event
from nightout.core.auth import get_current_session
from nightout.core.config import settings
from nightout.core.session import SessionContext
from nightout.models.challenges import CompletionResponse, CompletionReview
from nightout.services.challenge_service import challenge_service
from nightout.services.event_service import event_service
from nightout.services.logger import logger

router = APIRouter(redirect_slashes=False)


@router.post(
    "/{challenge_id}/proof",
    response_model=CompletionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_challenge_proof(
    challenge_id: str,
    file: UploadFile = File(...),
    session: SessionContext = Depends(get_current_session),
):
    """Upload photo proof for a challenge; the completion goes back to pending"""
    challenge = await challenge_service.get_challenge(challenge_id)
    if not challenge:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Challenge not found"
        )

    event = await get_accessible_event(challenge["event_id"], session)
    if not await event_service.is_participant(event, session.user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Join the event to complete its challenges",
        )

    # One byte past the limit is enough to reject an oversized upload
    content = await file.read(int(settings.MAX_UPLOAD_BYTES) + 1)

    try:
        return await challenge_service.submit_proof(session, challenge_id, content)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(
            f"Failed to upload proof for challenge {challenge_id}",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error uploading proof. Please try again.",
        )


@router.patch("/completions/{completion_id}", response_model=CompletionResponse)
async def review_completion(
    completion_id: str,
    review: CompletionReview,
    session: SessionContext = Depends(get_current_session),
):
    """Approve or reject a completion (event owner only)"""
    completion = await challenge_service.get_completion(completion_id)
    challenge = (
        await challenge_service.get_challenge(completion["challenge_id"])
        if completion
        else None
    )
    if not challenge:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Completion not found"
        )

    event = await get_accessible_event(challenge["event_id"], session)
    if event.get("user_id") != session.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the event owner can review completions",
        )

    try:
        return await challenge_service.review_completion(completion_id, review.status)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(
            f"Failed to review completion {completion_id}",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to review completion",
        )
