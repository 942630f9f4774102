from fastapi import APIRouter, HTTPException, Query
import logging

from creator_dashboard.core import metrics
from creator_dashboard.schemas.models import ChannelAnalyticsResponse
from creator_dashboard.services import youtube_service

router = APIRouter(tags=["Analytics"])
logger = logging.getLogger(__name__)

# Videos pulled for the charts; the performance chart shows up to max_videos of them
CHART_VIDEO_POOL = 20


@router.get("/{channel_id}", response_model=ChannelAnalyticsResponse)
def channel_analytics(channel_id: str, max_videos: int = Query(10, alias="maxVideos", ge=1, le=CHART_VIDEO_POOL)):
    """Chart data for a channel: summary card, growth curve and per-video performance."""
    try:
        channel = youtube_service.get_channel_stats(channel_id)
        videos = youtube_service.get_channel_videos(channel_id, CHART_VIDEO_POOL) if channel else []
    except Exception:
        logger.exception("[ANALYTICS] Lookup failed for %s", channel_id)
        raise HTTPException(status_code=500, detail="Failed to fetch channel data")

    if channel is None:
        raise HTTPException(status_code=404, detail="Channel not found")

    return ChannelAnalyticsResponse(
        channel=channel,
        summary=metrics.channel_summary(channel, videos),
        growth=metrics.growth_projection(channel),
        performance=metrics.video_performance(videos, max_videos),
    )
