"""
Venue Service

Handles venue proposals and venue voting. Tallies are never stored; they are
recomputed from venue_votes on every read.
"""

from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError

from nightout.core.database import get_supabase_client, is_invalid_id_error
from nightout.core.session import SessionContext
from nightout.models.venues import VenueTally, VoteType
from nightout.services.logger import logger
from nightout.services.places_service import places_service, PlacesError
from nightout.services.vote_tally import (
    VoteActionKind,
    apply_vote,
    compute_tally,
    parse_vote_type,
)


def format_start_time(start_time: str, utc_offset_minutes: int) -> str:
    """
    Format a local HH:MM as a Postgres timetz literal, e.g. '21:30:00+02:00'.
    """
    hours, minutes = start_time.split(":")
    if not (0 <= int(hours) <= 23 and 0 <= int(minutes) <= 59):
        raise ValueError(f"Invalid start time '{start_time}'")

    sign = "+" if utc_offset_minutes >= 0 else "-"
    offset = abs(utc_offset_minutes)
    return f"{int(hours):02d}:{int(minutes):02d}:00{sign}{offset // 60:02d}:{offset % 60:02d}"


class VenueService:
    """Service for venues and venue votes"""

    async def add_venue(
        self,
        session: SessionContext,
        name: str,
        address: str,
        latitude: float,
        longitude: float,
        start_time: str,
        utc_offset_minutes: int = 0,
        google_place_id: Optional[str] = None,
        event_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Propose a venue. New venues start as 'pending'.
        """
        name = (name or "").strip()
        address = (address or "").strip()
        if not name or not address:
            raise ValueError("Venue name and address are required")

        venue = {
            "name": name,
            "address": address,
            "status": "pending",
            "latitude": latitude,
            "longitude": longitude,
            "google_place_id": google_place_id,
            "start_time": format_start_time(start_time, utc_offset_minutes),
        }
        if event_id:
            venue["event_id"] = event_id

        supabase = get_supabase_client()
        result = supabase.table("venues").insert(venue).execute()

        if not result.data:
            raise RuntimeError("Venue insert returned no data")

        logger.info(
            f"Venue {result.data[0]['id']} proposed",
            {"user_id": session.user_id, "event_id": event_id},
        )
        return result.data[0]

    async def get_venue(
        self, venue_id: str, include_place_details: bool = True
    ) -> Optional[Dict[str, Any]]:
        """
        Get a venue, enriched with Google place details when it has a place id.

        A failed details lookup still returns the stored venue.
        """
        supabase = get_supabase_client()
        try:
            result = (
                supabase.table("venues").select("*").eq("id", venue_id).limit(1).execute()
            )
        except APIError as e:
            if is_invalid_id_error(e):
                return None
            raise
        if not result.data:
            return None

        venue = result.data[0]
        venue["place_details"] = None

        place_id = venue.get("google_place_id")
        if include_place_details and place_id and places_service.is_configured:
            try:
                venue["place_details"] = await places_service.place_details(place_id)
            except PlacesError as e:
                logger.warning(
                    f"Place details unavailable for venue {venue_id}",
                    {"error": str(e), "place_id": place_id},
                )

        return venue

    async def get_event_votes(self, event_id: str) -> List[Dict[str, Any]]:
        supabase = get_supabase_client()
        result = (
            supabase.table("venue_votes")
            .select("venue_id, user_id, vote_type")
            .eq("event_id", event_id)
            .execute()
        )
        return result.data or []

    async def list_event_venues(
        self, session: SessionContext, event_id: str
    ) -> List[Dict[str, Any]]:
        """
        Get the venues proposed for an event, each with its vote tally.
        """
        supabase = get_supabase_client()
        venues_result = (
            supabase.table("venues").select("*").eq("event_id", event_id).execute()
        )
        venues = venues_result.data or []
        if not venues:
            return []

        votes = await self.get_event_votes(event_id)

        for venue in venues:
            tally = compute_tally(votes, venue["id"], session.user_id)
            venue.update(tally.model_dump())

        return venues

    async def get_user_vote(
        self, venue_id: str, user_id: str
    ) -> Optional[VoteType]:
        supabase = get_supabase_client()
        result = (
            supabase.table("venue_votes")
            .select("vote_type")
            .eq("venue_id", venue_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return parse_vote_type(result.data[0].get("vote_type"))

    async def get_venue_tally(self, venue_id: str, user_id: str) -> VenueTally:
        supabase = get_supabase_client()
        result = (
            supabase.table("venue_votes")
            .select("venue_id, user_id, vote_type")
            .eq("venue_id", venue_id)
            .execute()
        )
        return compute_tally(result.data or [], venue_id, user_id)

    async def cast_vote(
        self,
        session: SessionContext,
        event_id: str,
        venue_id: str,
        vote_type: VoteType,
    ) -> VenueTally:
        """
        Toggle the user's vote on a venue and return the fresh tally.

        Voting the same way twice removes the vote; voting the other way
        replaces it.
        """
        supabase = get_supabase_client()
        existing = await self.get_user_vote(venue_id, session.user_id)
        action = apply_vote(existing, vote_type)

        if action.kind is VoteActionKind.RETRACT:
            supabase.table("venue_votes").delete().match(
                {"venue_id": venue_id, "user_id": session.user_id}
            ).execute()
        else:
            supabase.table("venue_votes").upsert(
                {
                    "venue_id": venue_id,
                    "event_id": event_id,
                    "user_id": session.user_id,
                    "vote_type": action.vote_type.value,
                },
                on_conflict="venue_id,user_id",
            ).execute()

        logger.info(
            f"Vote {action.kind.value} on venue {venue_id}",
            {"user_id": session.user_id, "vote_type": vote_type.value},
        )
        return await self.get_venue_tally(venue_id, session.user_id)


# Global instance
venue_service = VenueService()
