from fastapi import APIRouter, HTTPException, Query
from typing import Optional
import logging

from creator_dashboard.schemas.models import (
    SORT_KEYS,
    AuthChannelRequest,
    ChannelFilters,
    ChannelStats,
    CountRange,
)
from creator_dashboard.services import auth_service, youtube_service
from creator_dashboard.utils.errors import AuthServiceError, handle_error

router = APIRouter(tags=["YouTube"])
logger = logging.getLogger(__name__)


def _parse_bound(name: str, value: Optional[str]) -> Optional[int]:
    """Empty strings mean "no bound"; anything else must be an integer."""
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"{name} must be an integer")


def build_filters(
    subscriber_min: Optional[str] = None,
    subscriber_max: Optional[str] = None,
    video_min: Optional[str] = None,
    video_max: Optional[str] = None,
    sort_by: Optional[str] = None,
) -> ChannelFilters:
    sort_by = sort_by or "relevance"
    if sort_by not in SORT_KEYS:
        raise HTTPException(status_code=400, detail=f"Invalid sortBy: {sort_by}")

    return ChannelFilters(
        subscriber_count=CountRange(
            min=_parse_bound("subscriberMin", subscriber_min),
            max=_parse_bound("subscriberMax", subscriber_max),
        ),
        video_count=CountRange(
            min=_parse_bound("videoMin", video_min),
            max=_parse_bound("videoMax", video_max),
        ),
        sort_by=sort_by,
    )


@router.get("")
def youtube_action(
    action: Optional[str] = None,
    channel_id: Optional[str] = Query(None, alias="channelId"),
    max_results: Optional[str] = Query(None, alias="maxResults"),
    query: Optional[str] = None,
    subscriber_min: Optional[str] = Query(None, alias="subscriberMin"),
    subscriber_max: Optional[str] = Query(None, alias="subscriberMax"),
    video_min: Optional[str] = Query(None, alias="videoMin"),
    video_max: Optional[str] = Query(None, alias="videoMax"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
):
    """Single entry point; the action parameter picks the lookup."""
    if action == "getChannelStats" and channel_id:
        try:
            channel = youtube_service.get_channel_stats(channel_id)
        except Exception:
            logger.exception("[YOUTUBE] getChannelStats failed for %s", channel_id)
            raise HTTPException(status_code=500, detail="Failed to fetch channel data")
        if channel is None:
            raise HTTPException(status_code=404, detail="Channel not found")
        return channel

    if action == "getChannelVideos" and channel_id:
        limit = _parse_bound("maxResults", max_results)
        try:
            return youtube_service.get_channel_videos(channel_id, limit)
        except Exception:
            logger.exception("[YOUTUBE] getChannelVideos failed for %s", channel_id)
            raise HTTPException(status_code=500, detail="Failed to fetch videos")

    if action == "searchChannels":
        if not query:
            raise HTTPException(status_code=400, detail="Query parameter is required")
        filters = build_filters(subscriber_min, subscriber_max, video_min, video_max, sort_by)
        try:
            return youtube_service.search_channels(query, filters)
        except Exception:
            logger.exception("[YOUTUBE] searchChannels failed for %r", query)
            raise HTTPException(status_code=500, detail="Failed to search channels")

    raise HTTPException(status_code=400, detail="Invalid request")


@router.post("/auth", response_model=ChannelStats)
def authenticated_channel(payload: AuthChannelRequest):
    """Resolve the channel owned by the Google account behind accessToken."""
    if not payload.access_token:
        raise HTTPException(status_code=400, detail="Access token is required")

    try:
        channel = auth_service.get_authenticated_channel(payload.access_token)
    except Exception as e:
        logger.error("[AUTH] Error fetching authenticated channel: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch authenticated channel")

    if channel is None:
        raise HTTPException(status_code=404, detail="No channel found")
    return channel


@router.get("/auth/login")
def start_google_sign_in():
    """Return the Google consent URL the frontend should redirect to."""
    try:
        return {"url": auth_service.build_authorization_url()}
    except AuthServiceError as e:
        raise handle_error(e, status_code=500)


@router.get("/auth/callback")
def google_sign_in_callback(state: str = None, code: str = None):
    """Trade the consent callback's code for an access token."""
    if not state or not code:
        raise HTTPException(status_code=400, detail="Missing state or code in callback")

    try:
        access_token = auth_service.exchange_code(state, code)
    except AuthServiceError as e:
        raise handle_error(e, status_code=400)

    return {"accessToken": access_token}
