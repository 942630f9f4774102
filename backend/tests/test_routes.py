from types import SimpleNamespace

from conftest import FakeYouTube, make_channel_item, make_http_error, make_video_item
from creator_dashboard.services import assistant_service, auth_service
from creator_dashboard.utils.errors import AuthServiceError


def test_health(api_client):
    assert api_client.get("/health").json() == {"status": "healthy"}


def test_get_channel_stats(api_client, fake_youtube):
    fake_youtube.responses["channels"] = {"items": [make_channel_item("UC1", subscribers=42, videos=3, views=900)]}

    response = api_client.get("/youtube", params={"action": "getChannelStats", "channelId": "UC1"})

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "UC1"
    assert body["subscriberCount"] == 42
    assert body["videoCount"] == 3
    assert body["viewCount"] == 900
    assert body["thumbnails"]["high"] == "https://img/UC1/high.jpg"


def test_get_channel_stats_not_found(api_client, fake_youtube):
    response = api_client.get("/youtube", params={"action": "getChannelStats", "channelId": "UC_NOPE"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Channel not found"


def test_get_channel_stats_upstream_failure_is_500(api_client, fake_youtube):
    fake_youtube.responses["channels"] = make_http_error(403, "quotaExceeded")
    response = api_client.get("/youtube", params={"action": "getChannelStats", "channelId": "UC1"})
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to fetch channel data"


def test_get_channel_videos(api_client, fake_youtube):
    fake_youtube.responses["search"] = {"items": [{"id": {"videoId": "v1"}}]}
    fake_youtube.responses["videos"] = {"items": [make_video_item("v1", views=100, likes=5, comments=5)]}

    response = api_client.get(
        "/youtube", params={"action": "getChannelVideos", "channelId": "UC1", "maxResults": "20"}
    )

    assert response.status_code == 200
    assert response.json() == [{
        "id": "v1",
        "title": "Video v1",
        "description": "",
        "publishedAt": "2024-01-01T00:00:00Z",
        "thumbnails": {"default": "", "medium": "https://img/v1.jpg", "high": ""},
        "viewCount": 100,
        "likeCount": 5,
        "commentCount": 5,
        "duration": "PT3M",
    }]
    assert fake_youtube.calls_to("search")[0]["maxResults"] == 20


def test_get_channel_videos_empty(api_client, fake_youtube):
    response = api_client.get("/youtube", params={"action": "getChannelVideos", "channelId": "UC1"})
    assert response.status_code == 200
    assert response.json() == []


def test_search_channels_with_subscriber_min(api_client, fake_youtube):
    fake_youtube.responses["search"] = {"items": [
        {"id": {"channelId": cid}} for cid in ("UCa", "UCb", "UCc")
    ]}
    fake_youtube.responses["channels"] = {"items": [
        make_channel_item("UCa", subscribers=999),
        make_channel_item("UCb", subscribers=1000),
        make_channel_item("UCc", subscribers=250000),
    ]}

    response = api_client.get("/youtube", params={
        "action": "searchChannels",
        "query": "test",
        "subscriberMin": "1000",
        "subscriberMax": "",
    })

    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == ["UCb", "UCc"]


def test_search_channels_requires_query(api_client, fake_youtube):
    response = api_client.get("/youtube", params={"action": "searchChannels"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Query parameter is required"


def test_search_channels_rejects_bad_filters(api_client, fake_youtube):
    bad_bound = api_client.get("/youtube", params={"action": "searchChannels", "query": "q", "videoMin": "lots"})
    bad_sort = api_client.get("/youtube", params={"action": "searchChannels", "query": "q", "sortBy": "likes"})
    assert bad_bound.status_code == 400
    assert bad_sort.status_code == 400
    assert fake_youtube.calls == []


def test_invalid_action(api_client):
    assert api_client.get("/youtube", params={"action": "deleteChannel"}).status_code == 400
    assert api_client.get("/youtube", params={"action": "getChannelStats"}).status_code == 400
    assert api_client.get("/youtube").json() == {"detail": "Invalid request"}


def test_auth_requires_access_token(api_client):
    response = api_client.post("/youtube/auth", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "Access token is required"


def test_auth_returns_own_channel(api_client, monkeypatch):
    youtube = FakeYouTube()
    youtube.responses["channels"] = {"items": [make_channel_item("UCme", subscribers=7)]}
    seen = {}

    def fake_build(service, version, credentials=None, **kwargs):
        seen["token"] = credentials.token
        return youtube

    monkeypatch.setattr(auth_service, "build", fake_build)

    response = api_client.post("/youtube/auth", json={"accessToken": "ya29.token"})

    assert response.status_code == 200
    assert response.json()["id"] == "UCme"
    assert seen["token"] == "ya29.token"
    assert youtube.calls_to("channels")[0]["mine"] is True


def test_auth_without_channel_is_404(api_client, monkeypatch):
    monkeypatch.setattr(auth_service, "build", lambda *args, **kwargs: FakeYouTube())
    response = api_client.post("/youtube/auth", json={"accessToken": "ya29.token"})
    assert response.status_code == 404


def test_auth_with_rejected_token_is_404(api_client, monkeypatch):
    youtube = FakeYouTube()
    youtube.responses["channels"] = make_http_error(401, "Invalid Credentials")
    monkeypatch.setattr(auth_service, "build", lambda *args, **kwargs: youtube)
    response = api_client.post("/youtube/auth", json={"accessToken": "expired"})
    assert response.status_code == 404


def test_auth_upstream_failure_is_500(api_client, monkeypatch):
    youtube = FakeYouTube()
    youtube.responses["channels"] = make_http_error(503, "backendError")
    monkeypatch.setattr(auth_service, "build", lambda *args, **kwargs: youtube)
    response = api_client.post("/youtube/auth", json={"accessToken": "ya29.token"})
    assert response.status_code == 500


def test_sign_in_callback_requires_state_and_code(api_client):
    assert api_client.get("/youtube/auth/callback", params={"code": "abc"}).status_code == 400


def test_sign_in_callback_returns_access_token(api_client, monkeypatch):
    monkeypatch.setattr(auth_service, "exchange_code", lambda state, code: f"token-for-{code}")
    response = api_client.get("/youtube/auth/callback", params={"state": "s1", "code": "abc"})
    assert response.status_code == 200
    assert response.json() == {"accessToken": "token-for-abc"}


def test_sign_in_callback_with_unknown_state(api_client, monkeypatch):
    def reject(state, code):
        raise AuthServiceError("Invalid or expired state")

    monkeypatch.setattr(auth_service, "exchange_code", reject)
    response = api_client.get("/youtube/auth/callback", params={"state": "stale", "code": "abc"})
    assert response.status_code == 400


def test_sign_in_login_returns_consent_url(api_client, monkeypatch):
    monkeypatch.setattr(auth_service, "build_authorization_url", lambda: "https://accounts.google.com/o/oauth2/auth?x=1")
    response = api_client.get("/youtube/auth/login")
    assert response.status_code == 200
    assert response.json()["url"].startswith("https://accounts.google.com/")


class FakeCompletions:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def install_fake_llm(monkeypatch, completions):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    monkeypatch.setattr(assistant_service, "get_openrouter_client", lambda: client)


def test_assistant_relays_reply_verbatim(api_client, monkeypatch):
    completions = FakeCompletions(reply="Try brighter thumbnails.\n\n- tip one")
    install_fake_llm(monkeypatch, completions)

    response = api_client.post("/assistant", json={
        "prompt": "How do I grow?",
        "channelData": {"title": "My Channel", "subscriberCount": 1200, "viewCount": 50000, "videoCount": 30},
        "videoStats": [
            {"title": "First", "viewCount": 900, "likeCount": 40},
            {"title": "Second", "viewCount": 800, "likeCount": 30},
            {"title": "Third", "viewCount": 700, "likeCount": 20},
            {"title": "Fourth", "viewCount": 600, "likeCount": 10},
        ],
    })

    assert response.status_code == 200
    assert response.json() == {"response": "Try brighter thumbnails.\n\n- tip one"}

    call = completions.calls[0]
    assert call["messages"][0]["role"] == "system"
    assert "CreativeCoach" in call["messages"][0]["content"]
    user_message = call["messages"][1]["content"]
    assert user_message.startswith("How do I grow?")
    assert "Subscribers: 1200" in user_message
    assert "3. Third - 700 views, 20 likes" in user_message
    assert "Fourth" not in user_message
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 800


def test_assistant_requires_prompt(api_client, monkeypatch):
    install_fake_llm(monkeypatch, FakeCompletions(reply="unused"))
    assert api_client.post("/assistant", json={"prompt": "   "}).status_code == 400
    assert api_client.post("/assistant", json={}).status_code == 400


def test_assistant_upstream_failure_is_500(api_client, monkeypatch):
    install_fake_llm(monkeypatch, FakeCompletions(error=RuntimeError("upstream exploded")))
    response = api_client.post("/assistant", json={"prompt": "hello"})
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to generate response. Please try again later."


def test_assistant_context_length_error_is_not_an_auth_error(api_client, monkeypatch):
    error = RuntimeError("This model's maximum context length is 8192 tokens")
    install_fake_llm(monkeypatch, FakeCompletions(error=error))
    response = api_client.post("/assistant", json={"prompt": "hello"})
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to generate response. Please try again later."


def test_assistant_without_api_key_is_500(api_client, monkeypatch):
    monkeypatch.setattr(assistant_service, "get_openrouter_client", lambda: None)
    assert api_client.post("/assistant", json={"prompt": "hello"}).status_code == 500


def test_channel_analytics(api_client, fake_youtube):
    fake_youtube.responses["channels"] = {"items": [make_channel_item("UC1", subscribers=1000, videos=4, views=400)]}
    fake_youtube.responses["search"] = {"items": [{"id": {"videoId": "v1"}}, {"id": {"videoId": "v2"}}]}
    fake_youtube.responses["videos"] = {"items": [
        make_video_item("v1", views=100, likes=5, comments=5),
        make_video_item("v2", views=300, likes=0, comments=0),
    ]}

    response = api_client.get("/analytics/UC1")

    assert response.status_code == 200
    body = response.json()
    assert body["summary"]["averageViewsPerVideo"] == 100
    assert body["summary"]["engagementRate"] == 2.5
    assert body["summary"]["overview"]["data"] == [4, 1000, 400]
    assert len(body["growth"]) == 7
    assert [row["fullTitle"] for row in body["performance"]] == ["Video v2", "Video v1"]
    top_row = body["performance"][0]
    assert top_row["id"] == "v2"
    assert top_row["duration"] == "3:00"
    assert top_row["durationVerbose"] == "3m 0s"
    assert top_row["watchHours"] == 8
    assert top_row["viewsLabel"] == "300"
    assert fake_youtube.calls_to("search")[0]["maxResults"] == 20


def test_channel_analytics_not_found(api_client, fake_youtube):
    assert api_client.get("/analytics/UC_NOPE").status_code == 404


def test_root(api_client):
    assert api_client.get("/").json() == {"message": "Creator Dashboard API is running!"}


def test_allowed_origins_include_frontend(monkeypatch):
    from creator_dashboard.config.settings import settings
    monkeypatch.setattr(settings, "CORS_ORIGINS", ["http://localhost:3000"])
    monkeypatch.setattr(settings, "FRONTEND_URL", "https://dashboard.example.com")
    assert settings.allowed_origins() == ["http://localhost:3000", "https://dashboard.example.com"]
