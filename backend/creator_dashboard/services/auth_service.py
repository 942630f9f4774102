"""
Google sign-in helpers and lookup of the signed-in user's own channel.
"""
import logging
import threading
import time
import uuid
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from typing import Dict, Optional, Tuple

from creator_dashboard.config.settings import settings
from creator_dashboard.schemas.models import ChannelStats
from creator_dashboard.services.youtube_service import CHANNEL_PARTS, normalize_channel
from creator_dashboard.utils.errors import AuthServiceError, YouTubeServiceError

logger = logging.getLogger(__name__)

# IMPORTANT: include OIDC / userinfo scopes because Google may add them automatically
SCOPES = [
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
    "https://www.googleapis.com/auth/youtube.readonly",
]

# TTL for state (seconds)
STATE_TTL_SECONDS = 60 * 15  # 15 minutes

# state -> (issued-at timestamp, PKCE code verifier) for consent URLs handed out by this process
_pending_states: Dict[str, Tuple[float, Optional[str]]] = {}
_states_lock = threading.Lock()


def _build_flow(code_verifier: Optional[str] = None) -> Flow:
    if not settings.GOOGLE_CLIENT_ID or not settings.GOOGLE_CLIENT_SECRET:
        raise AuthServiceError("Google OAuth credentials not configured")
    flow = Flow.from_client_config(
        {
            "web": {
                "client_id": settings.GOOGLE_CLIENT_ID,
                "client_secret": settings.GOOGLE_CLIENT_SECRET,
                "redirect_uris": [settings.GOOGLE_REDIRECT_URI],
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
            }
        },
        scopes=SCOPES,
        code_verifier=code_verifier,
    )
    flow.redirect_uri = settings.GOOGLE_REDIRECT_URI
    return flow


def _drop_expired_states(now: float) -> None:
    """Caller must hold _states_lock."""
    expired = [
        state for state, (issued, _) in _pending_states.items()
        if now - issued > STATE_TTL_SECONDS
    ]
    for state in expired:
        _pending_states.pop(state, None)


def build_authorization_url() -> str:
    """Create a state, remember it, and return the Google consent URL."""
    now = time.time()
    state = str(uuid.uuid4())
    flow = _build_flow()
    authorization_url, _ = flow.authorization_url(
        access_type="online",
        include_granted_scopes="true",
        prompt="consent",
        state=state,
    )
    with _states_lock:
        _drop_expired_states(now)
        _pending_states[state] = (now, flow.code_verifier)
        pending_count = len(_pending_states)
    logger.info("[AUTH] Issued consent URL (pending states: %d)", pending_count)
    return authorization_url


def exchange_code(state: str, code: str) -> str:
    """Validate and consume the state, then trade the code for an access token."""
    with _states_lock:
        pending = _pending_states.pop(state, None)
    if pending is None:
        raise AuthServiceError("Invalid or expired state")
    issued, code_verifier = pending
    if time.time() - issued > STATE_TTL_SECONDS:
        raise AuthServiceError("State expired")

    flow = _build_flow(code_verifier)
    try:
        flow.fetch_token(code=code)
    except Exception as e:
        logger.warning("[AUTH] Token exchange failed: %s", e)
        raise AuthServiceError(f"Token exchange failed: {e}") from e

    token = flow.credentials.token
    if not token:
        raise AuthServiceError("Token exchange returned no access token")
    return token


def get_authenticated_channel(access_token: str) -> Optional[ChannelStats]:
    """Fetch the channel owned by the holder of access_token, or None."""
    creds = Credentials(token=access_token, scopes=SCOPES)
    try:
        youtube = build("youtube", "v3", credentials=creds, cache_discovery=False)
        response = youtube.channels().list(part="id," + CHANNEL_PARTS, mine=True).execute()
    except HttpError as e:
        if e.resp.status in (401, 403):
            logger.warning("[AUTH] Access token rejected by YouTube: %s", e)
            return None
        logger.error("[AUTH] channels.list(mine=True) failed: %s", e)
        raise YouTubeServiceError(f"authenticated channel lookup failed: {e}") from e

    items = response.get("items") or []
    if not items:
        logger.info("[AUTH] Signed-in account has no YouTube channel")
        return None
    return normalize_channel(items[0])
