from fastapi import APIRouter, HTTPException, status, Depends
from typing import List

from nightout.core.auth import get_current_session
from nightout.core.session import SessionContext
from nightout.models.events import PlanCreate, PlanResponse
from nightout.services.logger import logger
from nightout.services.plan_service import plan_service

router = APIRouter(redirect_slashes=False)


@router.post("/", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(
    plan_data: PlanCreate,
    session: SessionContext = Depends(get_current_session),
):
    try:
        return await plan_service.create_plan(
            session,
            description=plan_data.description,
            start_date=plan_data.start_date,
            number_of_weeks=plan_data.number_of_weeks,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(
            "Failed to create plan",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create plan",
        )


@router.get("/", response_model=List[PlanResponse])
async def get_plans(session: SessionContext = Depends(get_current_session)):
    try:
        return await plan_service.list_plans(session)
    except Exception as e:
        logger.error(
            "Failed to get plans",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve plans",
        )
