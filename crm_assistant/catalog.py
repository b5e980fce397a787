"""Supported providers and the models each one accepts."""

from enum import Enum


class Provider(str, Enum):
    """AI vendors the assistant can talk to."""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


DEFAULT_PROVIDER = Provider.ANTHROPIC

# First entry of each list is the provider's fallback model.
MODELS: dict[Provider, tuple[str, ...]] = {
    Provider.ANTHROPIC: (
        "claude-3-7-sonnet-latest",
        "claude-3-5-sonnet-latest",
        "claude-3-opus-latest",
        "claude-3-haiku-latest",
    ),
    Provider.OPENAI: (
        "gpt-4o",
        "gpt-4o-mini",
        "gpt-4-turbo",
        "gpt-3.5-turbo",
    ),
}


def list_models(provider: Provider) -> list[str]:
    """Return the allowed models of a provider, in preference order."""
    return list(MODELS[provider])


def resolve_provider(name: str | None) -> Provider:
    """Map a provider name to a Provider, falling back to the default."""
    try:
        return Provider(name)
    except ValueError:
        return DEFAULT_PROVIDER


def resolve_model(provider: Provider, name: str | None) -> str:
    """Return ``name`` if the provider accepts it, else the provider's first model."""
    models = MODELS[provider]
    if name in models:
        return name
    return models[0]
