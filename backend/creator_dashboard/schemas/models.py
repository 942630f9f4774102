"""
Pydantic models for API request and response validation.

Wire format is camelCase (matching what the dashboard frontend consumes);
Python code works with the snake_case attribute names.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Literal


SortBy = Literal["relevance", "viewCount", "videoCount", "subscriberCount"]
SORT_KEYS = ("relevance", "viewCount", "videoCount", "subscriberCount")


def _coerce_count(value) -> int:
    """Counts arrive as strings from the YouTube API; anything unusable is 0."""
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class Thumbnails(BaseModel):
    model_config = ConfigDict(frozen=True)

    default: str = ""
    medium: str = ""
    high: str = ""


class ChannelStats(BaseModel):
    """Point-in-time snapshot of a channel's public statistics."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = ""
    title: str = ""
    description: str = ""
    custom_url: str = Field("", alias="customUrl")
    published_at: str = Field("", alias="publishedAt")
    thumbnails: Thumbnails = Field(default_factory=Thumbnails)
    subscriber_count: int = Field(0, alias="subscriberCount")
    video_count: int = Field(0, alias="videoCount")
    view_count: int = Field(0, alias="viewCount")

    @field_validator("subscriber_count", "video_count", "view_count", mode="before")
    @classmethod
    def _counts(cls, value):
        return _coerce_count(value)


class VideoStats(BaseModel):
    """Point-in-time snapshot of a single video's statistics."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = ""
    title: str = ""
    description: str = ""
    published_at: str = Field("", alias="publishedAt")
    thumbnails: Thumbnails = Field(default_factory=Thumbnails)
    view_count: int = Field(0, alias="viewCount")
    like_count: int = Field(0, alias="likeCount")
    comment_count: int = Field(0, alias="commentCount")
    duration: str = Field("", description="ISO-8601 duration, e.g. PT4M13S")

    @field_validator("view_count", "like_count", "comment_count", mode="before")
    @classmethod
    def _counts(cls, value):
        return _coerce_count(value)


class CountRange(BaseModel):
    min: Optional[int] = None
    max: Optional[int] = None

    def contains(self, value: int) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


class ChannelFilters(BaseModel):
    """Search filters applied after the channel details are fetched."""
    model_config = ConfigDict(populate_by_name=True)

    subscriber_count: CountRange = Field(default_factory=CountRange, alias="subscriberCount")
    video_count: CountRange = Field(default_factory=CountRange, alias="videoCount")
    sort_by: SortBy = Field("relevance", alias="sortBy")

    def has_bounds(self) -> bool:
        return any(
            bound is not None
            for bound in (
                self.subscriber_count.min,
                self.subscriber_count.max,
                self.video_count.min,
                self.video_count.max,
            )
        )


class AuthChannelRequest(BaseModel):
    """Request model for resolving the signed-in user's channel."""
    model_config = ConfigDict(populate_by_name=True)

    access_token: Optional[str] = Field(None, alias="accessToken", description="Google OAuth access token")


class AssistantRequest(BaseModel):
    """Request model for the AI assistant."""
    model_config = ConfigDict(populate_by_name=True)

    prompt: Optional[str] = Field(None, description="Question typed by the user")
    channel_data: Optional[ChannelStats] = Field(
        None,
        alias="channelData",
        description="Currently selected channel, if any",
    )
    video_stats: Optional[List[VideoStats]] = Field(
        None,
        alias="videoStats",
        description="Currently loaded videos, if any",
    )


class AssistantResponse(BaseModel):
    response: str


class GrowthDataPoint(BaseModel):
    date: str
    subscribers: int
    views: int


class VideoPerformance(BaseModel):
    """Chart row for one video, plus the figures its detail view shows."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    title: str
    full_title: str = Field(..., alias="fullTitle")
    views: int
    likes: int
    comments: int
    engagement: float
    views_label: str = Field("", alias="viewsLabel", description="Compact view count, e.g. 1.5M")
    duration: str = Field("", description="Clock-style duration, e.g. 4:05")
    duration_verbose: str = Field("", alias="durationVerbose", description="e.g. 1h 30m 15s")
    watch_hours: int = Field(0, alias="watchHours", description="Estimated at 50% average watch")


class TopVideo(BaseModel):
    title: str
    views: int
    likes: int
    comments: int


class OverviewChart(BaseModel):
    labels: List[str] = ["Videos", "Subscribers", "Views"]
    data: List[int]


class ChannelSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_videos: int = Field(..., alias="totalVideos")
    total_subscribers: int = Field(..., alias="totalSubscribers")
    total_views: int = Field(..., alias="totalViews")
    average_views_per_video: int = Field(..., alias="averageViewsPerVideo")
    engagement_rate: float = Field(..., alias="engagementRate")
    top_videos: List[TopVideo] = Field(default_factory=list, alias="topVideos")
    overview: OverviewChart


class ChannelAnalyticsResponse(BaseModel):
    channel: ChannelStats
    summary: ChannelSummary
    growth: List[GrowthDataPoint]
    performance: List[VideoPerformance]


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
