"""
CRM Assistant - An AI assistant for Wave CRM in the terminal.

This package validates provider/model choices, assembles chat completion
requests with optional remote tool servers, and sends them to Anthropic or
OpenAI.
"""

__version__ = "0.1.0"

from crm_assistant.agent import AgentRequest, AgentRequestBuilder, MAX_OUTPUT_TOKENS
from crm_assistant.catalog import DEFAULT_PROVIDER, MODELS, Provider
from crm_assistant.logging import get_logger, configure_logging, StructuredLogger, LogLevel
from crm_assistant.exceptions import (
    AssistantError,
    UpstreamRequestFailure,
    UpstreamConnectionError,
    UpstreamTimeoutError,
    UpstreamAuthenticationError,
    UpstreamRateLimitError,
    UpstreamResponseError,
    ToolServerError,
    UnknownToolServerError,
    StorageError,
    is_retryable,
    get_user_message,
)
from crm_assistant.model import CompletionClient, ModelResponse
from crm_assistant.retry import retry_sync, RetryConfig
from crm_assistant.storage import ResponseStore
from crm_assistant.tools import ToolDefinition, ToolRegistry, ToolResult

__all__ = [
    # Core
    "AgentRequest",
    "AgentRequestBuilder",
    "MAX_OUTPUT_TOKENS",
    "DEFAULT_PROVIDER",
    "MODELS",
    "Provider",
    "CompletionClient",
    "ModelResponse",
    "ResponseStore",
    # Tools
    "ToolDefinition",
    "ToolRegistry",
    "ToolResult",
    # Retry
    "retry_sync",
    "RetryConfig",
    "is_retryable",
    "get_user_message",
    # Logging
    "get_logger",
    "configure_logging",
    "StructuredLogger",
    "LogLevel",
    # Exceptions
    "AssistantError",
    "UpstreamRequestFailure",
    "UpstreamConnectionError",
    "UpstreamTimeoutError",
    "UpstreamAuthenticationError",
    "UpstreamRateLimitError",
    "UpstreamResponseError",
    "ToolServerError",
    "UnknownToolServerError",
    "StorageError",
]
