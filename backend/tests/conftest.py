import httplib2
import pytest
from fastapi.testclient import TestClient
from googleapiclient.errors import HttpError

from creator_dashboard.config.settings import settings
from creator_dashboard.main import app
from creator_dashboard.services import youtube_service


def make_channel_item(channel_id, subscribers=0, videos=0, views=0, **snippet):
    snippet.setdefault("title", f"Channel {channel_id}")
    return {
        "id": channel_id,
        "snippet": {
            "description": "",
            "customUrl": f"@{channel_id.lower()}",
            "publishedAt": "2015-01-01T00:00:00Z",
            "thumbnails": {
                "default": {"url": f"https://img/{channel_id}/default.jpg"},
                "medium": {"url": f"https://img/{channel_id}/medium.jpg"},
                "high": {"url": f"https://img/{channel_id}/high.jpg"},
            },
            **snippet,
        },
        "statistics": {
            "subscriberCount": str(subscribers),
            "videoCount": str(videos),
            "viewCount": str(views),
        },
    }


def make_video_item(video_id, views=0, likes=0, comments=0, duration="PT3M", published_at="2024-01-01T00:00:00Z"):
    return {
        "id": video_id,
        "snippet": {
            "title": f"Video {video_id}",
            "description": "",
            "publishedAt": published_at,
            "thumbnails": {"medium": {"url": f"https://img/{video_id}.jpg"}},
        },
        "statistics": {
            "viewCount": str(views),
            "likeCount": str(likes),
            "commentCount": str(comments),
        },
        "contentDetails": {"duration": duration},
    }


def make_http_error(status, message="boom"):
    content = ('{"error": {"code": %d, "message": "%s"}}' % (status, message)).encode()
    return HttpError(httplib2.Response({"status": status}), content)


class FakeRequest:
    def __init__(self, payload):
        self.payload = payload

    def execute(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeCollection:
    def __init__(self, name, youtube):
        self.name = name
        self.youtube = youtube

    def list(self, **kwargs):
        self.youtube.calls.append((self.name, kwargs))
        return FakeRequest(self.youtube.responses.get(self.name, {"items": []}))


class FakeYouTube:
    """Stands in for the googleapiclient resource; responses keyed by collection."""

    def __init__(self):
        self.responses = {}
        self.calls = []

    def channels(self):
        return FakeCollection("channels", self)

    def search(self):
        return FakeCollection("search", self)

    def videos(self):
        return FakeCollection("videos", self)

    def calls_to(self, name):
        return [kwargs for called, kwargs in self.calls if called == name]


@pytest.fixture
def fake_youtube(monkeypatch):
    youtube = FakeYouTube()
    monkeypatch.setattr(youtube_service, "get_youtube_service", lambda: youtube)
    return youtube


@pytest.fixture
def api_client():
    return TestClient(app)


@pytest.fixture(autouse=True)
def known_settings(monkeypatch):
    monkeypatch.setattr(settings, "SEARCH_PAGE_SIZE", 10)
    monkeypatch.setattr(settings, "SEARCH_CANDIDATE_POOL", 50)
    monkeypatch.setattr(settings, "DEFAULT_VIDEO_RESULTS", 10)
    monkeypatch.setattr(settings, "FALLBACK_CHANNEL_ID", "UCBR8-60-B28hp2BmDPdntcQ")
