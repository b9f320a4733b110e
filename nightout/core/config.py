from pydantic_settings import BaseSettings
from typing import List
from dotenv import load_dotenv
import os

load_dotenv()


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", True)

    # Supabase
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_SERVICE_KEY: str = os.getenv("SUPABASE_SERVICE_KEY", "")

    # JWT (tokens are issued by Supabase Auth, we only verify them)
    SUPABASE_JWT_SECRET: str = os.getenv("SUPABASE_JWT_SECRET", "")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

    # CORS
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "*")

    @property
    def allowed_origins_list(self) -> List[str]:
        return self.ALLOWED_ORIGINS.split(",")

    @property
    def supabase_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_KEY)

    # Google Places / Geocoding
    GOOGLE_PLACES_API_KEY: str = os.getenv("GOOGLE_PLACES_API_KEY", "")
    PLACES_TIMEOUT_SECONDS: float = os.getenv("PLACES_TIMEOUT_SECONDS", 10.0)

    # Storage buckets
    CHALLENGE_PROOF_BUCKET: str = os.getenv("CHALLENGE_PROOF_BUCKET", "challenge-proofs")
    AVATAR_BUCKET: str = os.getenv("AVATAR_BUCKET", "avatars")
    MAX_UPLOAD_BYTES: int = os.getenv("MAX_UPLOAD_BYTES", 10 * 1024 * 1024)

    # Auth emails
    PASSWORD_RESET_REDIRECT_URL: str = os.getenv(
        "PASSWORD_RESET_REDIRECT_URL", "nightout://reset-password"
    )

    class Config:
        env_file = [".env.local", ".env"]
        case_sensitive = True
        extra = "ignore"


# Create settings instance
settings = Settings()
