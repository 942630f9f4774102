"""
YouTube Data API service for channel lookups, channel search and video lists.
Every response is flattened into the local ChannelStats/VideoStats schema.
"""
import logging
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from typing import Any, Dict, List, Optional

from creator_dashboard.config.settings import settings
from creator_dashboard.schemas.models import ChannelFilters, ChannelStats, VideoStats
from creator_dashboard.utils.errors import YouTubeServiceError

logger = logging.getLogger(__name__)

# Cached YouTube API service singleton (build() does HTTP discovery, so cache it)
_youtube_service = None

CHANNEL_PARTS = "snippet,statistics,contentDetails"
VIDEO_PARTS = "snippet,statistics,contentDetails"

# sortBy value -> ChannelStats attribute
SORT_FIELDS = {
    "subscriberCount": "subscriber_count",
    "videoCount": "video_count",
    "viewCount": "view_count",
}


def get_youtube_service():
    """Get or create cached YouTube API service singleton."""
    global _youtube_service
    if not settings.YOUTUBE_API_KEY:
        raise YouTubeServiceError("YouTube API key not configured")
    if _youtube_service is None:
        _youtube_service = build(
            "youtube", "v3", developerKey=settings.YOUTUBE_API_KEY, cache_discovery=False
        )
    return _youtube_service


def _thumbnail_urls(snippet: Dict[str, Any]) -> Dict[str, str]:
    thumbnails = snippet.get("thumbnails") or {}
    return {
        size: (thumbnails.get(size) or {}).get("url") or ""
        for size in ("default", "medium", "high")
    }


def normalize_channel(item: Dict[str, Any]) -> ChannelStats:
    """Flatten a channels.list item. Strings default to "" and counts to 0."""
    snippet = item.get("snippet") or {}
    statistics = item.get("statistics") or {}
    return ChannelStats(
        id=item.get("id") or "",
        title=snippet.get("title") or "",
        description=snippet.get("description") or "",
        custom_url=snippet.get("customUrl") or "",
        published_at=snippet.get("publishedAt") or "",
        thumbnails=_thumbnail_urls(snippet),
        subscriber_count=statistics.get("subscriberCount"),
        video_count=statistics.get("videoCount"),
        view_count=statistics.get("viewCount"),
    )


def normalize_video(item: Dict[str, Any]) -> VideoStats:
    """Flatten a videos.list item. Strings default to "" and counts to 0."""
    snippet = item.get("snippet") or {}
    statistics = item.get("statistics") or {}
    content_details = item.get("contentDetails") or {}
    return VideoStats(
        id=item.get("id") or "",
        title=snippet.get("title") or "",
        description=snippet.get("description") or "",
        published_at=snippet.get("publishedAt") or "",
        thumbnails=_thumbnail_urls(snippet),
        view_count=statistics.get("viewCount"),
        like_count=statistics.get("likeCount"),
        comment_count=statistics.get("commentCount"),
        duration=content_details.get("duration") or "",
    )


def apply_channel_filters(channels: List[ChannelStats], filters: ChannelFilters) -> List[ChannelStats]:
    """Keep channels whose subscriber and video counts sit inside the inclusive bounds."""
    if not filters.has_bounds():
        return list(channels)
    return [
        channel for channel in channels
        if filters.subscriber_count.contains(channel.subscriber_count)
        and filters.video_count.contains(channel.video_count)
    ]


def sort_channels(channels: List[ChannelStats], sort_by: str) -> List[ChannelStats]:
    """
    Sort descending on the chosen count. "relevance" keeps the API order.
    sorted() is stable, so equal counts keep their relevance order.
    """
    field = SORT_FIELDS.get(sort_by)
    if field is None:
        return list(channels)
    return sorted(channels, key=lambda channel: getattr(channel, field), reverse=True)


def get_channel_stats(channel_id: str) -> Optional[ChannelStats]:
    """Fetch one channel. Returns None when YouTube knows no such channel."""
    try:
        youtube = get_youtube_service()
        response = youtube.channels().list(part=CHANNEL_PARTS, id=channel_id).execute()
    except HttpError as e:
        logger.error("[YOUTUBE] channels.list failed for %s: %s", channel_id, e)
        raise YouTubeServiceError(f"channels.list failed: {e}") from e

    items = response.get("items") or []
    if not items:
        logger.info("[YOUTUBE] Channel not found: %s", channel_id)
        return None
    return normalize_channel(items[0])


def get_channel_videos(channel_id: str, max_results: int = None) -> List[VideoStats]:
    """Fetch a channel's most viewed videos with full statistics."""
    if max_results is None:
        max_results = settings.DEFAULT_VIDEO_RESULTS
    max_results = max(1, min(int(max_results), settings.MAX_VIDEO_RESULTS))

    try:
        youtube = get_youtube_service()
        search_response = youtube.search().list(
            part="snippet",
            channelId=channel_id,
            order="viewCount",
            type="video",
            maxResults=max_results,
        ).execute()

        video_ids = [
            (item.get("id") or {}).get("videoId")
            for item in search_response.get("items") or []
        ]
        video_ids = [video_id for video_id in video_ids if video_id]
        if not video_ids:
            logger.info("[YOUTUBE] No videos found for channel %s", channel_id)
            return []

        details = youtube.videos().list(part=VIDEO_PARTS, id=",".join(video_ids)).execute()
    except HttpError as e:
        logger.error("[YOUTUBE] Video lookup failed for %s: %s", channel_id, e)
        raise YouTubeServiceError(f"video lookup failed: {e}") from e

    videos = [normalize_video(item) for item in details.get("items") or []]
    logger.info("[YOUTUBE] Fetched %d videos for channel %s", len(videos), channel_id)
    return videos


def search_channels(query: str, filters: ChannelFilters = None) -> List[ChannelStats]:
    """
    Search channels by free text, then filter and sort on their statistics.

    A wide candidate pool is fetched so filtering still leaves a full page;
    the result is capped at SEARCH_PAGE_SIZE after filtering.
    """
    filters = filters or ChannelFilters()

    search_params = {
        "part": "snippet",
        "q": query,
        "type": "channel",
        "maxResults": settings.SEARCH_CANDIDATE_POOL,
    }
    if filters.sort_by == "relevance":
        search_params["order"] = "relevance"

    try:
        youtube = get_youtube_service()
        search_response = youtube.search().list(**search_params).execute()

        channel_ids = [
            (item.get("id") or {}).get("channelId")
            for item in search_response.get("items") or []
        ]
        channel_ids = [channel_id for channel_id in channel_ids if channel_id]
        if not channel_ids:
            logger.info("[YOUTUBE] No channels matched query %r", query)
            return []

        details = youtube.channels().list(part=CHANNEL_PARTS, id=",".join(channel_ids)).execute()
    except HttpError as e:
        logger.error("[YOUTUBE] Channel search failed for %r: %s", query, e)
        raise YouTubeServiceError(f"channel search failed: {e}") from e

    # channels.list does not promise to echo the requested order
    rank = {channel_id: index for index, channel_id in enumerate(channel_ids)}
    channels = [normalize_channel(item) for item in details.get("items") or []]
    channels.sort(key=lambda channel: rank.get(channel.id, len(rank)))

    candidates = len(channels)
    channels = apply_channel_filters(channels, filters)
    channels = sort_channels(channels, filters.sort_by)
    channels = channels[:settings.SEARCH_PAGE_SIZE]

    logger.info(
        "[YOUTUBE] Search %r: %d candidates -> %d returned (sortBy=%s)",
        query, candidates, len(channels), filters.sort_by,
    )
    return channels
