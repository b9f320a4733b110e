"""
Profile Service

Per-user settings: location sharing and avatar.
"""

from nightout.core.config import settings
from nightout.core.database import get_supabase_client
from nightout.core.session import SessionContext
from nightout.services.logger import logger
from nightout.services.media_service import public_url, upload_image


class ProfileService:
    async def get_location_sharing(self, session: SessionContext) -> bool:
        supabase = get_supabase_client()
        result = (
            supabase.table("event_participants")
            .select("location_sharing_enabled")
            .eq("user_id", session.user_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return False
        return bool(result.data[0].get("location_sharing_enabled"))

    async def set_location_sharing(self, session: SessionContext, enabled: bool) -> bool:
        """
        The preference lives on the user's participant rows, so it applies to
        every event they have joined.
        """
        supabase = get_supabase_client()
        supabase.table("event_participants").update(
            {"location_sharing_enabled": enabled}
        ).eq("user_id", session.user_id).execute()
        return enabled

    async def upload_avatar(self, session: SessionContext, content: bytes) -> str:
        """Store a new avatar and point the user's auth metadata at it."""
        path = upload_image(settings.AVATAR_BUCKET, session.user_id, content)
        avatar_url = public_url(settings.AVATAR_BUCKET, path)

        supabase = get_supabase_client()
        supabase.auth.admin.update_user_by_id(
            session.user_id, {"user_metadata": {"avatar_url": avatar_url}}
        )

        logger.info("Avatar updated", {"user_id": session.user_id})
        return avatar_url


# Global instance
profile_service = ProfileService()
