"""Validation and assembly of chat completion requests."""

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from crm_assistant.catalog import Provider, resolve_model, resolve_provider
from crm_assistant.logging import get_logger
from crm_assistant.tools.registry import ToolDefinition

# Module logger
logger = get_logger("agent")

MAX_OUTPUT_TOKENS = 4096


class ToolSource(Protocol):
    """Anything that can resolve a tool server id to its tools."""

    def tools(self, server_id: str) -> list[ToolDefinition]: ...


@dataclass
class AgentRequest:
    """A validated, ready-to-send completion request."""

    provider: Provider
    model: str
    prompt: str
    system_prompt: str | None = None
    tools: list[ToolDefinition] = field(default_factory=list)
    max_output_tokens: int = MAX_OUTPUT_TOKENS


class AgentRequestBuilder:
    """
    Builds AgentRequest objects from loosely validated user input.

    Unknown providers fall back to the default provider and unknown models to
    the resolved provider's first model. The fallback never raises; each
    substitution is logged as a warning.

    Args:
        tool_source: Registry used to resolve tool server ids. Only needed
            when requests ask for tools.

    Example:
        >>> builder = AgentRequestBuilder()
        >>> request = builder.build("bogus", "bogus", "hi")
        >>> request.provider, request.model
        (<Provider.ANTHROPIC: 'anthropic'>, 'claude-3-7-sonnet-latest')
    """

    def __init__(self, tool_source: ToolSource | None = None):
        self.tool_source = tool_source

    def build(
        self,
        provider_in: str | None,
        model_in: str | None,
        prompt: str,
        system_prompt: str | None = "",
        tool_server_ids: Sequence[str] = (),
    ) -> AgentRequest:
        """
        Resolve provider and model, then assemble the request.

        Args:
            provider_in: Requested provider name.
            model_in: Requested model id.
            prompt: User prompt.
            system_prompt: Attached only when non-empty.
            tool_server_ids: Tool servers whose tools are concatenated in order.

        Returns:
            AgentRequest with the fixed output-token ceiling.
        """
        provider = resolve_provider(provider_in)
        if provider.value != provider_in:
            logger.warn("Unknown provider, using default", requested=provider_in, provider=provider.value)

        model = resolve_model(provider, model_in)
        if model != model_in:
            logger.warn("Model not offered by provider, using first model",
                        requested=model_in, provider=provider.value, model=model)

        tools: list[ToolDefinition] = []
        if tool_server_ids:
            if self.tool_source is None:
                raise ValueError("tool_server_ids given but no tool source configured")
            for server_id in tool_server_ids:
                tools.extend(self.tool_source.tools(server_id))

        request = AgentRequest(
            provider=provider,
            model=model,
            prompt=prompt,
            system_prompt=system_prompt or None,
            tools=tools,
        )
        logger.debug("Request built", provider=provider.value, model=model, tools=len(tools))
        return request
