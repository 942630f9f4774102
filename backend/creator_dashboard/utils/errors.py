from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class YouTubeServiceError(Exception):
    """Raised when the YouTube Data API call fails or returns something unusable."""


class AssistantServiceError(Exception):
    """Raised when the chat-completion call fails."""


class AuthServiceError(Exception):
    """Raised when the Google sign-in exchange cannot be completed."""


def handle_error(e: Exception, status_code: int = 500):
    """
    Handle exceptions and return user-friendly error messages.
    Logs the original error for debugging while providing safe messages to users.
    """
    logger.error("Error occurred: %s", e, exc_info=True)

    error_message = get_friendly_error_message(e, status_code)

    return HTTPException(status_code=status_code, detail=error_message)


def get_friendly_error_message(e: Exception, status_code: int = 500) -> str:
    """
    Convert technical exceptions to user-friendly messages.
    """
    error_str = str(e).lower()

    # Network-related errors
    if any(keyword in error_str for keyword in ['connection', 'network', 'timeout', 'dns', 'unreachable']):
        return "Network connection issue. Please check your internet connection and try again."

    if status_code == 401:
        return "Authentication failed. Please sign in again."

    if status_code == 403:
        return "You don't have permission to perform this action."

    # Rate limiting and quota
    if status_code == 429 or 'quota' in error_str:
        return "Too many requests. Please wait a moment and try again."

    # Validation errors
    if status_code in (400, 422) or 'validation' in error_str:
        return "Invalid input. Please check your data and try again."

    if isinstance(e, YouTubeServiceError):
        return "Failed to fetch YouTube data. Please try again later."

    if isinstance(e, AssistantServiceError):
        return "Failed to generate response. Please try again later."

    # OAuth/Google API errors
    if any(keyword in error_str for keyword in ['oauth', 'token', 'credentials', 'invalid_grant']):
        return "Authentication with Google failed. Please try again."

    # Server errors
    if status_code >= 500:
        return "Server error. Please try again later."

    # Generic fallback
    return "An unexpected error occurred. Please try again."
