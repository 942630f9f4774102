from fastapi import APIRouter, HTTPException
import logging

from creator_dashboard.schemas.models import AssistantRequest, AssistantResponse
from creator_dashboard.services import assistant_service
from creator_dashboard.utils.errors import handle_error

router = APIRouter(tags=["Assistant"])
logger = logging.getLogger(__name__)


@router.post("", response_model=AssistantResponse)
def ask_assistant(payload: AssistantRequest):
    """Relay the prompt plus channel context to the Creative Coach."""
    if not payload.prompt or not payload.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt is required")

    try:
        reply = assistant_service.generate_response(
            payload.prompt,
            channel_data=payload.channel_data,
            video_stats=payload.video_stats,
        )
    except Exception as e:
        raise handle_error(e, status_code=500)

    return AssistantResponse(response=reply)
