"""Model catalog and completion client."""

from crm_assistant.catalog import MODELS, Provider, list_models
from crm_assistant.model.client import CompletionClient, ModelResponse

__all__ = ["MODELS", "Provider", "list_models", "CompletionClient", "ModelResponse"]
