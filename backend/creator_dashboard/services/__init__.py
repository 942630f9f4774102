"""
Services package for calls to YouTube, Google sign-in and the chat-completion API.
"""
from .youtube_service import get_channel_stats, get_channel_videos, search_channels
from .auth_service import get_authenticated_channel
from .assistant_service import generate_response

__all__ = [
    "get_channel_stats",
    "get_channel_videos",
    "search_channels",
    "get_authenticated_channel",
    "generate_response",
]
