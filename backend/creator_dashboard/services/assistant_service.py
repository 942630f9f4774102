"""
Creative Coach assistant service.
Forwards the user's prompt, enriched with the selected channel and its videos,
to the chat-completion API and hands the text back untouched.
"""
import logging
from typing import List, Optional

from creator_dashboard.config.settings import settings
from creator_dashboard.core.llm_client import get_openrouter_client
from creator_dashboard.schemas.models import ChannelStats, VideoStats
from creator_dashboard.utils.errors import AssistantServiceError

logger = logging.getLogger(__name__)

SYSTEM_MESSAGE = (
    "You are CreativeCoach, a specialized AI assistant for YouTube content creators. "
    "Your purpose is to help creators enhance their creativity, develop better content strategies, and "
    "improve their channel performance. Provide specific, actionable advice based on their channel data "
    "and questions. Be encouraging, insightful, and focused on helping them grow their audience and "
    "creative abilities. Always maintain a supportive and professional tone."
)


def build_enriched_prompt(
    prompt: str,
    channel_data: Optional[ChannelStats] = None,
    video_stats: Optional[List[VideoStats]] = None,
) -> str:
    """Append the channel snapshot and the first few videos to the user's prompt."""
    enriched = prompt

    if channel_data:
        enriched += (
            "\n\nChannel Information:"
            f"\nName: {channel_data.title}"
            f"\nSubscribers: {channel_data.subscriber_count}"
            f"\nTotal Views: {channel_data.view_count}"
            f"\nVideos: {channel_data.video_count}"
        )

    if video_stats:
        enriched += "\n\nTop Performing Videos:\n"
        for index, video in enumerate(video_stats[:settings.ASSISTANT_TOP_VIDEOS], start=1):
            enriched += f"{index}. {video.title} - {video.view_count} views, {video.like_count} likes\n"

    return enriched


def generate_response(
    prompt: str,
    channel_data: Optional[ChannelStats] = None,
    video_stats: Optional[List[VideoStats]] = None,
) -> str:
    """Ask the chat-completion API and return its reply verbatim."""
    client = get_openrouter_client()
    if client is None:
        raise AssistantServiceError("OPENROUTER_API_KEY not configured")

    enriched_prompt = build_enriched_prompt(prompt, channel_data, video_stats)
    logger.info(
        "[ASSISTANT] Prompt of %d chars (channel=%s, videos=%d)",
        len(enriched_prompt),
        channel_data.id if channel_data else None,
        len(video_stats or []),
    )

    try:
        completion = client.chat.completions.create(
            model=settings.ASSISTANT_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_MESSAGE},
                {"role": "user", "content": enriched_prompt},
            ],
            temperature=settings.ASSISTANT_TEMPERATURE,
            max_tokens=settings.ASSISTANT_MAX_TOKENS,
        )
    except Exception as e:
        logger.error("[ASSISTANT] Chat completion failed: %s", e)
        raise AssistantServiceError(str(e)) from e

    if not completion.choices:
        raise AssistantServiceError("Chat completion returned no choices")
    content = completion.choices[0].message.content
    if content is None:
        raise AssistantServiceError("Chat completion returned an empty message")
    return content
