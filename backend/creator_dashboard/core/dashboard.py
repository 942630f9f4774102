"""
Fetch chains behind the dashboard pages. Each one fills the ChannelStore
from the DashboardClient; rendering is left to the frontend.
"""
import logging
from typing import Any, Dict, Optional

from creator_dashboard.client import DashboardClient
from creator_dashboard.config.settings import settings
from creator_dashboard.core import metrics
from creator_dashboard.core.state import ChannelStore
from creator_dashboard.schemas.models import ChannelFilters

logger = logging.getLogger(__name__)

SIGN_IN_AGAIN = "Could not access your YouTube account. Please sign in again."
NO_USER_CHANNEL = "Could not find your YouTube channel. Showing YouTube's official channel as an example."
CHANNEL_NOT_FOUND = "Channel not found"
NO_SEARCH_RESULTS = "No channels found. Try a different search term."


def load_channel(store: ChannelStore, client: DashboardClient, channel_id: str) -> bool:
    """Channel lookup then video lookup. Returns True when the channel was found."""
    store.set_is_loading(True)
    store.set_error(None)
    try:
        channel = client.get_channel_stats(channel_id)
        if channel is None:
            store.set_selected_channel(None)
            store.set_error(CHANNEL_NOT_FOUND)
            return False

        store.set_selected_channel(channel)
        store.set_channel_videos(client.get_channel_videos(channel.id))
        return True
    finally:
        store.set_is_loading(False)


def load_user_channel(
    store: ChannelStore,
    client: DashboardClient,
    access_token: Optional[str],
    fallback_channel_id: str = None,
) -> bool:
    """
    Show the signed-in user's own channel. When it cannot be resolved the
    example channel is shown instead, with an explanation in store.error.
    Returns True when the user's own channel was loaded.
    """
    if not access_token:
        store.set_error(SIGN_IN_AGAIN)
        return False

    store.set_is_loading(True)
    store.set_error(None)
    try:
        channel = client.get_authenticated_channel(access_token)
        if channel is not None:
            store.set_selected_channel(channel)
            store.set_channel_videos(client.get_channel_videos(channel.id))
            return True

        fallback_id = fallback_channel_id or settings.FALLBACK_CHANNEL_ID
        logger.info("[DASHBOARD] No channel for signed-in user, falling back to %s", fallback_id)
        store.set_selected_channel(client.get_channel_stats(fallback_id))
        store.set_channel_videos(client.get_channel_videos(fallback_id))
        store.set_error(NO_USER_CHANNEL)
        return False
    finally:
        store.set_is_loading(False)


def run_search(
    store: ChannelStore,
    client: DashboardClient,
    query: str,
    filters: ChannelFilters = None,
) -> None:
    if not query or not query.strip():
        store.set_search_results([])
        return

    store.set_is_loading(True)
    store.set_error(None)
    try:
        results = client.search_channels(query.strip(), filters)
        store.set_search_results(results)
        if not results:
            store.set_error(NO_SEARCH_RESULTS)
    finally:
        store.set_is_loading(False)


def export_snapshot(store: ChannelStore, sort_option: str = "recent") -> Dict[str, Any]:
    """JSON-ready dump of the selected channel and its first five videos in sort_option order ("recent" or "popular")."""
    channel = store.selected_channel
    videos = metrics.sort_videos(store.channel_videos, sort_option)
    return {
        "channelInfo": channel.model_dump(by_alias=True) if channel else None,
        "analyticsData": {
            "totalViews": channel.view_count if channel else 0,
            "totalSubscribers": channel.subscriber_count if channel else 0,
            "totalVideos": channel.video_count if channel else 0,
            "topVideos": [
                {
                    "title": video.title,
                    "views": video.view_count,
                    "likes": video.like_count,
                    "comments": video.comment_count,
                }
                for video in videos[:5]
            ],
        },
    }
