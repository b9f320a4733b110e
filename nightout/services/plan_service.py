"""
Plan Service

Multi-week plans a user drafts for future outings.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List

from nightout.core.database import get_supabase_client
from nightout.core.session import SessionContext


class PlanService:
    async def create_plan(
        self,
        session: SessionContext,
        description: str,
        start_date: date,
        number_of_weeks: int,
    ) -> Dict[str, Any]:
        description = description.strip()
        if not description:
            raise ValueError("Plan description is required")
        if number_of_weeks < 1:
            raise ValueError("A plan must last at least one week")

        now = datetime.now(timezone.utc).isoformat()
        supabase = get_supabase_client()
        result = (
            supabase.table("plan")
            .insert(
                {
                    "description": description,
                    "start_date": start_date.isoformat(),
                    "number_of_weeks": number_of_weeks,
                    "created_by": session.user_id,
                    "last_update": now,
                    "time_created": now,
                }
            )
            .execute()
        )

        if not result.data:
            raise RuntimeError("Plan insert returned no data")

        return result.data[0]

    async def list_plans(self, session: SessionContext) -> List[Dict[str, Any]]:
        supabase = get_supabase_client()
        result = (
            supabase.table("plan")
            .select("*")
            .eq("created_by", session.user_id)
            .order("time_created", desc=True)
            .execute()
        )
        return result.data or []


# Global instance
plan_service = PlanService()
