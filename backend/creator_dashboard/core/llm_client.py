"""
Shared OpenRouter (OpenAI-compatible) client singleton.
Avoids creating duplicate OpenAI client instances across modules.
"""
from typing import Optional
from openai import OpenAI

from creator_dashboard.config.settings import settings

_openrouter_client: Optional[OpenAI] = None


def get_openrouter_client() -> Optional[OpenAI]:
    """Get or create shared OpenRouter client singleton.
    Returns None if OPENROUTER_API_KEY is not configured.
    """
    global _openrouter_client
    if _openrouter_client is None and settings.OPENROUTER_API_KEY:
        _openrouter_client = OpenAI(
            api_key=settings.OPENROUTER_API_KEY,
            base_url=settings.OPENROUTER_BASE_URL,
            default_headers={
                "HTTP-Referer": settings.ASSISTANT_SITE_URL,
                "X-Title": settings.ASSISTANT_APP_TITLE,
            },
        )
    return _openrouter_client
