"""
Application settings and environment configuration.
Centralized configuration management for the creator dashboard backend.
"""
import os
from dotenv import load_dotenv
from typing import List

# Load environment variables
load_dotenv()


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Settings:
    """Application settings loaded from environment variables."""

    # API Keys
    YOUTUBE_API_KEY: str = os.getenv("YOUTUBE_API_KEY", "")
    OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY", "")

    # Chat-completion proxy (OpenAI-compatible)
    OPENROUTER_BASE_URL: str = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
    ASSISTANT_MODEL: str = os.getenv("ASSISTANT_MODEL", "google/gemini-pro")
    ASSISTANT_SITE_URL: str = os.getenv("ASSISTANT_SITE_URL", "https://youtubeanalytics.com")
    ASSISTANT_APP_TITLE: str = os.getenv("ASSISTANT_APP_TITLE", "YouTube Analytics Assistant")
    ASSISTANT_TEMPERATURE: float = 0.7
    ASSISTANT_MAX_TOKENS: int = 800
    ASSISTANT_TOP_VIDEOS: int = 3

    # Google identity provider
    GOOGLE_CLIENT_ID: str = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET: str = os.getenv("GOOGLE_CLIENT_SECRET", "")
    GOOGLE_REDIRECT_URI: str = os.getenv(
        "GOOGLE_REDIRECT_URI", "http://localhost:8000/youtube/auth/callback"
    )

    # Application Settings
    APP_NAME: str = "Creator Dashboard API"
    APP_VERSION: str = "1.0.0"

    # Server Configuration
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Consumer-side client
    DASHBOARD_API_URL: str = os.getenv("DASHBOARD_API_URL", "http://localhost:8000")
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

    # CORS Settings
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")
    CORS_ORIGINS: List[str] = _split_origins(
        os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    )
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # YouTube API Settings
    SEARCH_CANDIDATE_POOL: int = 50
    SEARCH_PAGE_SIZE: int = 10
    DEFAULT_VIDEO_RESULTS: int = 10
    MAX_VIDEO_RESULTS: int = 50

    # YouTube's own channel, shown when the signed-in user has none
    FALLBACK_CHANNEL_ID: str = os.getenv("FALLBACK_CHANNEL_ID", "UCBR8-60-B28hp2BmDPdntcQ")

    def allowed_origins(self) -> List[str]:
        """CORS origins, always including the frontend URL."""
        origins = list(self.CORS_ORIGINS)
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins

    def missing_keys(self) -> List[str]:
        """Names of the optional secrets that are not configured."""
        keys = [
            "YOUTUBE_API_KEY",
            "OPENROUTER_API_KEY",
            "GOOGLE_CLIENT_ID",
            "GOOGLE_CLIENT_SECRET",
        ]
        return [key for key in keys if not getattr(self, key)]


# Global settings instance
settings = Settings()
