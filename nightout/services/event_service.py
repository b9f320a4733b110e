"""
Event Service

Handles outing creation, listing and participation.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime

from postgrest.exceptions import APIError

from nightout.core.database import get_supabase_client, is_invalid_id_error
from nightout.core.session import SessionContext
from nightout.services.logger import logger


class EventService:
    """Service for managing events"""

    async def create_event(
        self,
        session: SessionContext,
        title: str,
        event_date: datetime,
        is_private: bool = False,
        is_scavenger_hunt: bool = False,
    ) -> Dict[str, Any]:
        """
        Create a new event owned by the session user.

        Events start in the 'planning' status.
        """
        title = title.strip()
        if not title:
            raise ValueError("Event title is required")

        supabase = get_supabase_client()

        event = {
            "user_id": session.user_id,
            "title": title,
            "event_date": event_date.isoformat(),
            "is_private": is_private,
            "is_scavenger_hunt": is_scavenger_hunt,
            "status": "planning",
        }

        result = supabase.table("events").insert(event).execute()

        if not result.data:
            raise RuntimeError("Event insert returned no data")

        logger.info(
            f"Created event {result.data[0]['id']}",
            {"user_id": session.user_id},
        )
        return result.data[0]

    async def get_event(self, event_id: str) -> Optional[Dict[str, Any]]:
        supabase = get_supabase_client()

        try:
            result = (
                supabase.table("events")
                .select("*")
                .eq("id", event_id)
                .limit(1)
                .execute()
            )
        except APIError as e:
            if is_invalid_id_error(e):
                return None
            raise
        return result.data[0] if result.data else None

    async def list_events(self, session: SessionContext) -> List[Dict[str, Any]]:
        """
        Get every event the user owns or has joined, soonest first.
        """
        supabase = get_supabase_client()
        user_id = session.user_id

        owned_result = (
            supabase.table("events").select("*").eq("user_id", user_id).execute()
        )
        owned_events = owned_result.data or []

        participant_result = (
            supabase.table("event_participants")
            .select("event_id")
            .eq("user_id", user_id)
            .execute()
        )
        owned_ids = {e["id"] for e in owned_events}
        joined_ids = [
            p["event_id"]
            for p in (participant_result.data or [])
            if p.get("event_id") and p["event_id"] not in owned_ids
        ]

        joined_events = []
        if joined_ids:
            joined_result = (
                supabase.table("events").select("*").in_("id", joined_ids).execute()
            )
            joined_events = joined_result.data or []

        all_events = owned_events + joined_events
        all_events.sort(key=lambda e: e.get("event_date") or "")
        return all_events

    async def join_event(
        self, session: SessionContext, event_id: str
    ) -> Dict[str, Any]:
        supabase = get_supabase_client()

        result = (
            supabase.table("event_participants")
            .upsert(
                {"event_id": event_id, "user_id": session.user_id},
                on_conflict="event_id,user_id",
            )
            .execute()
        )
        return result.data[0] if result.data else {
            "event_id": event_id,
            "user_id": session.user_id,
        }

    async def is_participant(self, event: Dict[str, Any], user_id: str) -> bool:
        """Owners count as participants."""
        if event.get("user_id") == user_id:
            return True

        supabase = get_supabase_client()
        result = (
            supabase.table("event_participants")
            .select("event_id")
            .eq("event_id", event["id"])
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        return bool(result.data)


# Global instance
event_service = EventService()
