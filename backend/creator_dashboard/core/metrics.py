"""
Derived metrics computed on read from channel and video snapshots.
Pure functions; nothing here touches the network.
"""
import math
import random
import re
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Union

from creator_dashboard.schemas.models import (
    ChannelStats,
    ChannelSummary,
    GrowthDataPoint,
    OverviewChart,
    TopVideo,
    VideoPerformance,
    VideoStats,
)

VideoLike = Union[VideoStats, Dict[str, Any]]

ISO_DURATION_RE = re.compile(r'PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?')

# Monthly growth rate ranges for the synthetic history
SUBSCRIBER_RATE_RANGE = (0.005, 0.05)
VIEW_RATE_RANGE = (0.01, 0.10)
JITTER_RANGE = (0.98, 1.02)

# Average share of a video a viewer is assumed to watch
AVERAGE_WATCH_FRACTION = 0.5


def round_half_up(value: float) -> int:
    """Nearest integer with halves rounded up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def _counts(video: VideoLike) -> tuple:
    """(views, likes, comments) from a VideoStats or a plain dict."""
    if isinstance(video, VideoStats):
        return video.view_count, video.like_count, video.comment_count
    views = video.get("views", video.get("viewCount", 0)) or 0
    likes = video.get("likes", video.get("likeCount", 0)) or 0
    comments = video.get("comments", video.get("commentCount", 0)) or 0
    return int(views), int(likes), int(comments)


def video_engagement_rate(video: VideoLike) -> float:
    """(likes + comments) / views as a percentage. Zero views count as one."""
    views, likes, comments = _counts(video)
    return round((likes + comments) / max(views, 1) * 100, 2)


def engagement_rate(videos: Iterable[VideoLike]) -> float:
    """Aggregate engagement over a video list, as a percentage."""
    total_views = 0
    total_engagement = 0
    for video in videos:
        views, likes, comments = _counts(video)
        total_views += views
        total_engagement += likes + comments
    return round(total_engagement / max(total_views, 1) * 100, 2)


def average_views_per_video(channel: ChannelStats) -> int:
    if channel.video_count > 0:
        return round_half_up(channel.view_count / channel.video_count)
    return 0


def _months_back(today: date, offset: int) -> date:
    month_index = today.year * 12 + (today.month - 1) - offset
    return date(month_index // 12, month_index % 12 + 1, 1)


def growth_projection(
    channel: ChannelStats,
    months: int = 6,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> List[GrowthDataPoint]:
    """
    Synthetic monthly history ending at the channel's current counts.

    A random monthly rate is applied geometrically backwards from today;
    this is presentation filler, not measured data.
    """
    rng = rng or random.Random()
    today = today or date.today()

    subscriber_rate = rng.uniform(*SUBSCRIBER_RATE_RANGE)
    view_rate = rng.uniform(*VIEW_RATE_RANGE)

    points = []
    for offset in range(months, -1, -1):
        jitter = rng.uniform(*JITTER_RANGE)
        points.append(GrowthDataPoint(
            date=_months_back(today, offset).strftime("%b %Y"),
            subscribers=round_half_up(channel.subscriber_count * (1 - subscriber_rate) ** offset * jitter),
            views=round_half_up(channel.view_count * (1 - view_rate) ** offset * jitter),
        ))
    return points


def parse_iso_duration(duration: str) -> int:
    """Parse ISO 8601 duration to seconds including hours."""
    match = ISO_DURATION_RE.match(duration or "")
    if not match:
        return 0
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours * 3600 + minutes * 60 + seconds


def format_duration(duration: str) -> str:
    """PT1H30M15S -> 1:30:15, PT4M5S -> 4:05."""
    match = ISO_DURATION_RE.match(duration or "")
    if not match:
        return "Unknown"
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_duration_verbose(duration: str) -> str:
    """PT1H30M15S -> 1h 30m 15s."""
    match = ISO_DURATION_RE.match(duration or "")
    if not match:
        return "Unknown"
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def estimated_watch_hours(video: VideoStats) -> int:
    """Total watch time in hours, assuming viewers watch half of each video."""
    seconds = parse_iso_duration(video.duration)
    return round_half_up(seconds * AVERAGE_WATCH_FRACTION * video.view_count / 3600)


def _one_decimal(value: float) -> str:
    return str(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_compact_number(value: int) -> str:
    """1500000 -> 1.5M, 45000 -> 45.0K."""
    if value >= 1_000_000:
        return f"{_one_decimal(value / 1_000_000)}M"
    if value >= 1_000:
        return f"{_one_decimal(value / 1_000)}K"
    return str(value)


def truncate_title(title: str, limit: int) -> str:
    if len(title) > limit:
        return title[:limit] + "..."
    return title


def sort_videos(videos: List[VideoStats], sort_option: str = "recent") -> List[VideoStats]:
    """Newest first, or most viewed first for sort_option == "popular"."""
    if sort_option == "popular":
        return sorted(videos, key=lambda video: video.view_count, reverse=True)
    # ISO-8601 UTC timestamps order correctly as strings
    return sorted(videos, key=lambda video: video.published_at, reverse=True)


def top_videos(videos: List[VideoStats], limit: int = 5) -> List[VideoStats]:
    return sort_videos(videos, "popular")[:limit]


def video_performance(videos: List[VideoStats], max_videos: int = 10) -> List[VideoPerformance]:
    """Per-video chart rows with the detail-view figures, most viewed first."""
    rows = [
        VideoPerformance(
            id=video.id,
            title=truncate_title(video.title, 20),
            full_title=video.title,
            views=video.view_count,
            likes=video.like_count,
            comments=video.comment_count,
            engagement=video_engagement_rate(video),
            views_label=format_compact_number(video.view_count),
            duration=format_duration(video.duration),
            duration_verbose=format_duration_verbose(video.duration),
            watch_hours=estimated_watch_hours(video),
        )
        for video in videos[:max_videos]
    ]
    rows.sort(key=lambda row: row.views, reverse=True)
    return rows


def channel_summary(channel: ChannelStats, videos: List[VideoStats]) -> ChannelSummary:
    return ChannelSummary(
        total_videos=channel.video_count,
        total_subscribers=channel.subscriber_count,
        total_views=channel.view_count,
        average_views_per_video=average_views_per_video(channel),
        engagement_rate=engagement_rate(videos),
        top_videos=[
            TopVideo(
                title=video.title,
                views=video.view_count,
                likes=video.like_count,
                comments=video.comment_count,
            )
            for video in top_videos(videos)
        ],
        overview=OverviewChart(
            data=[channel.video_count, channel.subscriber_count, channel.view_count]
        ),
    )
