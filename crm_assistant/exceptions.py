"""
Exception hierarchy for the CRM assistant.

This module defines a structured exception hierarchy that enables:
- Clear categorization of upstream failures
- Retry decision support
- User-friendly error messages for the terminal

Usage:
    from crm_assistant.exceptions import UpstreamRateLimitError

    raise UpstreamRateLimitError(
        "API rate limit exceeded",
        retry_after=30,
        model="gpt-4o"
    )
"""

from typing import Any

import anthropic
import openai


class AssistantError(Exception):
    """
    Base exception for all CRM assistant errors.

    Attributes:
        retryable: Whether this error can be retried
        user_message: User-friendly error description
        context: Additional context for debugging
    """

    retryable: bool = False
    user_message: str = "An error occurred"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.context = context

    def __str__(self) -> str:
        base = super().__str__()
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base} ({ctx_str})"
        return base


# ============================================================================
# Upstream (AI provider) Errors
# ============================================================================

class UpstreamRequestFailure(AssistantError):
    """Base class for failures reported by the AI provider."""
    user_message = "The AI service could not complete the request"


class UpstreamConnectionError(UpstreamRequestFailure):
    """
    Cannot reach the provider API.

    Retryable with exponential backoff.
    """
    retryable = True
    user_message = "Cannot connect to AI service. Please check your network."


class UpstreamTimeoutError(UpstreamRequestFailure):
    """Provider request timed out."""
    retryable = True
    user_message = "AI request timed out. Please try again."


class UpstreamAuthenticationError(UpstreamRequestFailure):
    """
    API key invalid, missing or expired.

    Not retryable - user needs to fix credentials.
    """
    retryable = False
    user_message = "API authentication failed. Please check your API key."


class UpstreamRateLimitError(UpstreamRequestFailure):
    """
    API rate limit exceeded.

    Use the retry_after context value if available.
    """
    retryable = True
    user_message = "API rate limit exceeded. Please wait and try again."

    @property
    def retry_after(self) -> float:
        """Suggested wait time in seconds."""
        return self.context.get("retry_after", 1.0)


class UpstreamResponseError(UpstreamRequestFailure):
    """Provider rejected the request or returned an unusable response."""
    retryable = False
    user_message = "The AI service rejected the request"


# ============================================================================
# Tool Server Errors
# ============================================================================

class ToolServerError(AssistantError):
    """
    A remote tool server could not be reached or answered with an error.

    Retryable - the server might recover.
    """
    retryable = True
    user_message = "Tool server error"


class UnknownToolServerError(ToolServerError):
    """The requested tool server id is not configured."""
    retryable = False
    user_message = "Tool server is not configured"


# ============================================================================
# Storage Errors
# ============================================================================

class StorageError(AssistantError):
    """Saving a response to disk failed."""
    retryable = False
    user_message = "Failed to save the response"


# ============================================================================
# Utility Functions
# ============================================================================

def is_retryable(error: Exception) -> bool:
    """
    Check if an exception is retryable.

    Args:
        error: The exception to check

    Returns:
        True if the error is an AssistantError with retryable=True
    """
    if isinstance(error, AssistantError):
        return error.retryable
    return False


def get_user_message(error: Exception) -> str:
    """Get a user-friendly error message."""
    if isinstance(error, AssistantError):
        return error.user_message
    return str(error)


def _retry_after(error: Exception) -> float | None:
    response = getattr(error, "response", None)
    if response is None:
        return None
    value = response.headers.get("retry-after")
    try:
        return float(value) if value is not None else None
    except ValueError:
        return None


def translate_provider_error(
    error: Exception, provider: str, model: str
) -> UpstreamRequestFailure:
    """
    Map an ``anthropic`` or ``openai`` SDK exception onto the assistant hierarchy.

    Timeouts are checked before connection errors since both SDKs derive
    ``APITimeoutError`` from ``APIConnectionError``.
    """
    message = str(error) or error.__class__.__name__

    if isinstance(error, (anthropic.APITimeoutError, openai.APITimeoutError)):
        return UpstreamTimeoutError(message, provider=provider, model=model)
    if isinstance(error, (anthropic.APIConnectionError, openai.APIConnectionError)):
        return UpstreamConnectionError(message, provider=provider, model=model)
    if isinstance(error, (anthropic.AuthenticationError, openai.AuthenticationError,
                          anthropic.PermissionDeniedError, openai.PermissionDeniedError)):
        return UpstreamAuthenticationError(message, provider=provider, model=model)
    if isinstance(error, (anthropic.RateLimitError, openai.RateLimitError)):
        retry_after = _retry_after(error)
        if retry_after is not None:
            return UpstreamRateLimitError(
                message, provider=provider, model=model, retry_after=retry_after
            )
        return UpstreamRateLimitError(message, provider=provider, model=model)
    if isinstance(error, (anthropic.InternalServerError, openai.InternalServerError)):
        return UpstreamConnectionError(
            message, provider=provider, model=model, status=error.status_code
        )
    if isinstance(error, (anthropic.APIStatusError, openai.APIStatusError)):
        return UpstreamResponseError(
            message, provider=provider, model=model, status=error.status_code
        )
    return UpstreamResponseError(message, provider=provider, model=model)
