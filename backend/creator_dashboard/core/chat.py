"""
Creative Coach chat transcript. The assistant has no memory of its own;
the visible transcript is the only conversation state.
"""
from typing import List

from creator_dashboard.client import DashboardClient
from creator_dashboard.core.state import ChannelStore
from creator_dashboard.schemas.models import ChatMessage

GREETING = (
    "👋 Hi there! I'm your Creative Coach, powered by AI. I can help you enhance your YouTube "
    "content strategy, provide creative ideas, and suggest improvements based on your channel's "
    "performance. What would you like help with today?"
)
CLEARED_GREETING = "Conversation cleared! How else can I help you with your YouTube content today?"

CREATIVE_PROMPTS = [
    "How can I make my thumbnails more clickable?",
    "Suggest content ideas based on my channel's performance",
    "How to increase audience engagement in my videos?",
    "What video length works best for my type of content?",
    "Tips for improving my video titles and descriptions",
    "How can I develop a unique content style?",
    "Ways to repurpose my existing YouTube content",
    "Trending topics I should cover in my niche",
]


class AssistantChat:
    def __init__(self, client: DashboardClient, store: ChannelStore):
        self.client = client
        self.store = store
        self.messages: List[ChatMessage] = [ChatMessage(role="assistant", content=GREETING)]
        self.is_loading = False

    def send(self, prompt: str) -> str:
        """Send prompt with the store's current channel and videos; returns the reply."""
        if not prompt or not prompt.strip():
            return ""

        self.messages.append(ChatMessage(role="user", content=prompt))
        self.is_loading = True
        try:
            reply = self.client.ask_assistant(
                prompt,
                channel=self.store.selected_channel,
                videos=self.store.channel_videos,
            )
        finally:
            self.is_loading = False

        self.messages.append(ChatMessage(role="assistant", content=reply))
        return reply

    def clear(self) -> None:
        self.messages = [ChatMessage(role="assistant", content=CLEARED_GREETING)]
