"""
Challenge Service

Handles scavenger-hunt challenges, photo-proof completions and the event
leaderboard.
"""

from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError

from nightout.core.config import settings
from nightout.core.database import get_supabase_client, is_invalid_id_error
from nightout.core.session import SessionContext
from nightout.models.challenges import (
    CompletionStatus,
    LeaderboardEntry,
    LeaderboardUserDetails,
)
from nightout.services.leaderboard import compute_leaderboard
from nightout.services.logger import logger
from nightout.services.media_service import upload_image


class ChallengeService:
    """Service for managing challenges"""

    async def create_challenge(
        self,
        event: Dict[str, Any],
        title: str,
        description: Optional[str],
        points: int,
    ) -> Dict[str, Any]:
        """
        Add a challenge to a scavenger-hunt event.

        Args:
            event: Event row the challenge belongs to
            title: Challenge title
            description: What the player has to photograph
            points: Points awarded once a completion is approved

        Returns:
            Created challenge data
        """
        if not event.get("is_scavenger_hunt"):
            raise ValueError("Challenges can only be added to scavenger hunt events")

        title = title.strip()
        if not title:
            raise ValueError("Challenge title is required")
        if points < 0:
            raise ValueError("Challenge points must not be negative")

        supabase = get_supabase_client()
        result = (
            supabase.table("challenges")
            .insert(
                {
                    "event_id": event["id"],
                    "title": title,
                    "description": description,
                    "points": points,
                }
            )
            .execute()
        )

        if not result.data:
            raise RuntimeError("Challenge insert returned no data")

        return result.data[0]

    async def get_challenge(self, challenge_id: str) -> Optional[Dict[str, Any]]:
        supabase = get_supabase_client()
        try:
            result = (
                supabase.table("challenges")
                .select("*")
                .eq("id", challenge_id)
                .limit(1)
                .execute()
            )
        except APIError as e:
            if is_invalid_id_error(e):
                return None
            raise
        return result.data[0] if result.data else None

    async def list_event_challenges(
        self, session: SessionContext, event_id: str
    ) -> List[Dict[str, Any]]:
        """
        Get an event's challenges, each with the caller's own completion.
        """
        supabase = get_supabase_client()

        challenges_result = (
            supabase.table("challenges")
            .select("*")
            .eq("event_id", event_id)
            .order("created_at")
            .execute()
        )
        challenges = challenges_result.data or []
        if not challenges:
            return []

        completions_result = (
            supabase.table("challenge_completions")
            .select("id, challenge_id, status, proof_photo_url")
            .in_("challenge_id", [c["id"] for c in challenges])
            .eq("user_id", session.user_id)
            .execute()
        )
        completion_map = {
            c["challenge_id"]: c for c in (completions_result.data or [])
        }

        for challenge in challenges:
            challenge["completion"] = completion_map.get(challenge["id"])

        return challenges

    async def submit_proof(
        self,
        session: SessionContext,
        challenge_id: str,
        content: bytes,
    ) -> Dict[str, Any]:
        """
        Upload photo proof and (re)submit the completion for review.

        Resubmitting replaces the previous proof and resets the status to
        pending.
        """
        proof_path = upload_image(
            settings.CHALLENGE_PROOF_BUCKET,
            f"{session.user_id}/{challenge_id}",
            content,
        )

        supabase = get_supabase_client()
        result = (
            supabase.table("challenge_completions")
            .upsert(
                {
                    "challenge_id": challenge_id,
                    "user_id": session.user_id,
                    "proof_photo_url": proof_path,
                    "status": CompletionStatus.PENDING.value,
                },
                on_conflict="challenge_id,user_id",
            )
            .execute()
        )

        if not result.data:
            raise RuntimeError("Completion upsert returned no data")

        logger.info(
            f"Proof submitted for challenge {challenge_id}",
            {"user_id": session.user_id, "path": proof_path},
        )
        return result.data[0]

    async def get_completion(self, completion_id: str) -> Optional[Dict[str, Any]]:
        supabase = get_supabase_client()
        try:
            result = (
                supabase.table("challenge_completions")
                .select("*")
                .eq("id", completion_id)
                .limit(1)
                .execute()
            )
        except APIError as e:
            if is_invalid_id_error(e):
                return None
            raise
        return result.data[0] if result.data else None

    async def review_completion(
        self, completion_id: str, status: CompletionStatus
    ) -> Dict[str, Any]:
        if status is CompletionStatus.PENDING:
            raise ValueError("A review must approve or reject the completion")

        supabase = get_supabase_client()
        result = (
            supabase.table("challenge_completions")
            .update({"status": status.value})
            .eq("id", completion_id)
            .execute()
        )

        if not result.data:
            raise RuntimeError("Completion update returned no data")

        return result.data[0]

    async def get_event_leaderboard(self, event_id: str) -> List[LeaderboardEntry]:
        """
        Rank an event's players by the points of their approved completions.
        """
        supabase = get_supabase_client()

        challenges_result = (
            supabase.table("challenges")
            .select("id, points")
            .eq("event_id", event_id)
            .execute()
        )
        points_map = {c["id"]: c.get("points") for c in (challenges_result.data or [])}
        if not points_map:
            return []

        completions_result = (
            supabase.table("challenge_completions")
            .select("user_id, challenge_id")
            .eq("status", CompletionStatus.APPROVED.value)
            .in_("challenge_id", list(points_map.keys()))
            .order("created_at")
            .execute()
        )

        completions = [
            {**c, "points": points_map.get(c["challenge_id"])}
            for c in (completions_result.data or [])
        ]
        entries = compute_leaderboard(completions)
        for entry in entries:
            entry.user_details = await self.get_user_details(entry.user_id)
        return entries

    async def get_user_details(self, user_id: str) -> Optional[LeaderboardUserDetails]:
        """
        Email and avatar for a player, read from Supabase Auth.

        A failed lookup leaves the entry without details rather than failing
        the whole leaderboard.
        """
        supabase = get_supabase_client()
        try:
            response = supabase.auth.admin.get_user_by_id(user_id)
        except Exception as e:
            logger.warning(
                f"User lookup failed for leaderboard entry {user_id}",
                {"error": str(e), "user_id": user_id},
            )
            return None

        user = getattr(response, "user", None)
        if user is None:
            return None

        metadata = getattr(user, "user_metadata", None) or {}
        return LeaderboardUserDetails(
            email=getattr(user, "email", None),
            avatar_url=metadata.get("avatar_url"),
        )


# Global instance
challenge_service = ChallengeService()
