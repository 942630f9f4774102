"""
HTTP client for the dashboard's own API, used by the presentation side.

Nothing here raises past its boundary: transport errors, error statuses and
malformed bodies are logged and turned into None / [] / an apology string.
"""
import logging
import httpx
from pydantic import ValidationError
from typing import Any, Dict, List, Optional

from creator_dashboard.config.settings import settings
from creator_dashboard.schemas.models import ChannelFilters, ChannelStats, VideoStats

logger = logging.getLogger(__name__)

ASSISTANT_APOLOGY = "Sorry, I couldn't process your request. Please check your connection and try again."


class DashboardClient:
    def __init__(
        self,
        base_url: str = None,
        timeout: float = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._http = httpx.Client(
            base_url=base_url or settings.DASHBOARD_API_URL,
            timeout=timeout or settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request_json(self, method: str, url: str, **kwargs) -> Optional[Any]:
        """Return the decoded body of a 2xx response, otherwise None."""
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("[CLIENT] %s %s failed: %s", method, url, e)
            return None

        if response.is_error:
            logger.warning("[CLIENT] %s %s returned %d: %s", method, url, response.status_code, response.text)
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("[CLIENT] %s %s returned invalid JSON: %s", method, url, e)
            return None

    def _channel(self, data: Any) -> Optional[ChannelStats]:
        if not isinstance(data, dict):
            return None
        try:
            return ChannelStats.model_validate(data)
        except ValidationError as e:
            logger.error("[CLIENT] Malformed channel payload: %s", e)
            return None

    def _list_of(self, model, data: Any) -> list:
        if not isinstance(data, list):
            if data is not None:
                logger.error("[CLIENT] Expected a list, got %s", type(data).__name__)
            return []
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error("[CLIENT] Malformed %s list: %s", model.__name__, e)
            return []

    def get_channel_stats(self, channel_id: str) -> Optional[ChannelStats]:
        data = self._request_json(
            "GET", "/youtube", params={"action": "getChannelStats", "channelId": channel_id}
        )
        return self._channel(data)

    def get_channel_videos(self, channel_id: str, max_results: int = 10) -> List[VideoStats]:
        data = self._request_json(
            "GET",
            "/youtube",
            params={"action": "getChannelVideos", "channelId": channel_id, "maxResults": max_results},
        )
        return self._list_of(VideoStats, data)

    def search_channels(self, query: str, filters: ChannelFilters = None) -> List[ChannelStats]:
        filters = filters or ChannelFilters()
        params: Dict[str, Any] = {"action": "searchChannels", "query": query, "sortBy": filters.sort_by}
        bounds = {
            "subscriberMin": filters.subscriber_count.min,
            "subscriberMax": filters.subscriber_count.max,
            "videoMin": filters.video_count.min,
            "videoMax": filters.video_count.max,
        }
        params.update({key: value for key, value in bounds.items() if value is not None})

        data = self._request_json("GET", "/youtube", params=params)
        return self._list_of(ChannelStats, data)

    def get_authenticated_channel(self, access_token: str) -> Optional[ChannelStats]:
        data = self._request_json("POST", "/youtube/auth", json={"accessToken": access_token})
        return self._channel(data)

    def ask_assistant(
        self,
        prompt: str,
        channel: Optional[ChannelStats] = None,
        videos: Optional[List[VideoStats]] = None,
    ) -> str:
        payload = {
            "prompt": prompt,
            "channelData": channel.model_dump(by_alias=True) if channel else None,
            "videoStats": [video.model_dump(by_alias=True) for video in videos or []],
        }
        try:
            response = self._http.post("/assistant", json=payload)
        except httpx.HTTPError as e:
            logger.error("[CLIENT] POST /assistant failed: %s", e)
            return ASSISTANT_APOLOGY

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if response.is_error:
            detail = data.get("detail") or "Unknown error"
            logger.warning("[CLIENT] Assistant returned %d: %s", response.status_code, detail)
            return f"Sorry, I encountered an error: {detail}. Please try again."

        reply = data.get("response")
        if not isinstance(reply, str):
            logger.error("[CLIENT] Assistant reply missing 'response' field")
            return ASSISTANT_APOLOGY
        return reply
