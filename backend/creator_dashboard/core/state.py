"""
In-memory holder for what the dashboard is currently showing.
"""
import logging
from typing import List, Optional

from creator_dashboard.schemas.models import ChannelStats, VideoStats

logger = logging.getLogger(__name__)


class ChannelStore:
    """
    Selected channel, its videos, the last search results and the
    loading/error flags. Mutated only from the thread that issues fetches.
    """

    def __init__(self):
        self.selected_channel: Optional[ChannelStats] = None
        self.channel_videos: List[VideoStats] = []
        self.search_results: List[ChannelStats] = []
        self.is_loading: bool = False
        self.error: Optional[str] = None

    def set_selected_channel(self, channel: Optional[ChannelStats]) -> None:
        previous = self.selected_channel
        self.selected_channel = channel
        # videos belong to the channel they were loaded for
        if channel is None or previous is None or previous.id != channel.id:
            self.channel_videos = []

    def set_channel_videos(self, videos: List[VideoStats]) -> None:
        self.channel_videos = list(videos)

    def set_search_results(self, channels: List[ChannelStats]) -> None:
        self.search_results = list(channels)

    def set_is_loading(self, is_loading: bool) -> None:
        self.is_loading = is_loading

    def set_error(self, error: Optional[str]) -> None:
        if error:
            logger.debug("[STORE] error set: %s", error)
        self.error = error

    def reset(self) -> None:
        self.selected_channel = None
        self.channel_videos = []
        self.search_results = []
        self.is_loading = False
        self.error = None
