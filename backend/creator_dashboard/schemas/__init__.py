"""
Pydantic schemas for request/response models.
"""
from .models import (
    SORT_KEYS,
    ChannelStats,
    VideoStats,
    Thumbnails,
    CountRange,
    ChannelFilters,
    AuthChannelRequest,
    AssistantRequest,
    AssistantResponse,
    GrowthDataPoint,
    VideoPerformance,
    ChannelSummary,
    ChannelAnalyticsResponse,
    ChatMessage,
)

__all__ = [
    "SORT_KEYS",
    "ChannelStats",
    "VideoStats",
    "Thumbnails",
    "CountRange",
    "ChannelFilters",
    "AuthChannelRequest",
    "AssistantRequest",
    "AssistantResponse",
    "GrowthDataPoint",
    "VideoPerformance",
    "ChannelSummary",
    "ChannelAnalyticsResponse",
    "ChatMessage",
]
