"""Completion client for the Anthropic and OpenAI APIs."""

import json
from dataclasses import dataclass, field
from typing import Any, Callable

import anthropic
import openai
from anthropic import Anthropic
from openai import OpenAI

from crm_assistant.agent import AgentRequest
from crm_assistant.catalog import Provider
from crm_assistant.config.settings import ModelSettings
from crm_assistant.exceptions import (
    ToolServerError,
    UpstreamAuthenticationError,
    UpstreamRequestFailure,
    translate_provider_error,
)
from crm_assistant.logging import get_logger
from crm_assistant.retry import retry_sync
from crm_assistant.tools.registry import ToolDefinition, ToolResult

# Module logger
logger = get_logger("model")


@dataclass
class ModelResponse:
    """Response from the AI model."""

    text: str
    finish_reason: str | None = None
    tool_calls: list[str] = field(default_factory=list)
    input_tokens: int = 0
    output_tokens: int = 0


class CompletionClient:
    """
    Sends AgentRequests to the provider they name.

    When a request carries tools, tool calls requested by the model are
    executed through the tool registry and fed back until the model answers
    with text or ``max_tool_steps`` round trips have been made.

    Args:
        config: Model settings; defaults to the global settings.
        tool_registry: Executes tool calls; required only for requests with tools.
        anthropic_client: Preconfigured Anthropic SDK client.
        openai_client: Preconfigured OpenAI SDK client.
    """

    def __init__(
        self,
        config: ModelSettings | None = None,
        tool_registry: Any = None,
        anthropic_client: Anthropic | None = None,
        openai_client: OpenAI | None = None,
    ):
        if config is None:
            from crm_assistant.config import settings
            config = settings.model
        self.config = config
        self.tool_registry = tool_registry
        self._anthropic = anthropic_client
        self._openai = openai_client

    # ========== SDK clients ==========

    @property
    def anthropic_client(self) -> Anthropic:
        if self._anthropic is None:
            if not self.config.anthropic_api_key:
                raise UpstreamAuthenticationError(
                    "No Anthropic API key configured", provider=Provider.ANTHROPIC.value
                )
            kwargs: dict[str, Any] = {
                "api_key": self.config.anthropic_api_key,
                "timeout": self.config.timeout,
                "max_retries": 0,
            }
            if self.config.anthropic_base_url:
                kwargs["base_url"] = self.config.anthropic_base_url
            self._anthropic = Anthropic(**kwargs)
        return self._anthropic

    @property
    def openai_client(self) -> OpenAI:
        if self._openai is None:
            if not self.config.openai_api_key:
                raise UpstreamAuthenticationError(
                    "No OpenAI API key configured", provider=Provider.OPENAI.value
                )
            self._openai = OpenAI(
                api_key=self.config.openai_api_key,
                base_url=self.config.openai_base_url,
                timeout=self.config.timeout,
                max_retries=0,
            )
        return self._openai

    # ========== Public API ==========

    def complete(self, request: AgentRequest) -> ModelResponse:
        """
        Send a request and return the model's final text.

        Raises:
            UpstreamRequestFailure: If the provider call fails after retries.
        """
        logger.request(request.provider.value, request.model, tools=len(request.tools))
        if request.provider is Provider.OPENAI:
            response = self._complete_openai(request)
        else:
            response = self._complete_anthropic(request)
        logger.result(
            "Response received",
            finish_reason=response.finish_reason,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
        )
        return response

    # ========== Internals ==========

    def _create(self, request: AgentRequest, create: Callable[..., Any], **kwargs: Any) -> Any:
        """Call an SDK create method with error translation and retry."""
        provider = request.provider.value

        @retry_sync(
            max_attempts=max(0, self.config.max_retries) + 1,
            base_delay=self.config.retry_base_delay,
            retryable_exceptions=(UpstreamRequestFailure,),
        )
        def attempt() -> Any:
            try:
                return create(**kwargs)
            except (anthropic.APIError, openai.APIError) as e:
                raise translate_provider_error(e, provider, request.model) from e

        return attempt()

    def _run_tool(self, request: AgentRequest, name: str, arguments: dict[str, Any]) -> ToolResult:
        tool = _find_tool(request.tools, name)
        if tool is None:
            return ToolResult(text=f"Unknown tool: {name}", is_error=True)
        if self.tool_registry is None:
            raise ValueError("Request has tools but the client has no tool registry")
        try:
            return self.tool_registry.call_tool(tool.server_id, name, arguments)
        except ToolServerError as e:
            logger.error("Tool call failed", tool=name, error=str(e))
            return ToolResult(text=f"Tool call failed: {e}", is_error=True)

    def _complete_anthropic(self, request: AgentRequest) -> ModelResponse:
        client = self.anthropic_client
        messages: list[dict[str, Any]] = [{"role": "user", "content": request.prompt}]
        kwargs: dict[str, Any] = {
            "model": request.model,
            "max_tokens": request.max_output_tokens,
        }
        if request.system_prompt:
            kwargs["system"] = request.system_prompt
        if request.tools:
            kwargs["tools"] = [tool.to_anthropic() for tool in request.tools]

        result = ModelResponse(text="")
        for step in range(self.config.max_tool_steps + 1):
            response = self._create(request, client.messages.create, messages=list(messages), **kwargs)
            if response.usage is not None:
                result.input_tokens += response.usage.input_tokens or 0
                result.output_tokens += response.usage.output_tokens or 0
            result.finish_reason = response.stop_reason

            text_blocks = [b for b in response.content if b.type == "text"]
            tool_uses = [b for b in response.content if b.type == "tool_use"]
            result.text = "".join(b.text for b in text_blocks)

            if response.stop_reason != "tool_use" or not tool_uses:
                return result
            if step == self.config.max_tool_steps:
                logger.warn("Tool step limit reached", steps=step)
                return result

            messages.append({
                "role": "assistant",
                "content": [{"type": "text", "text": b.text} for b in text_blocks]
                + [{"type": "tool_use", "id": b.id, "name": b.name, "input": b.input} for b in tool_uses],
            })
            tool_results = []
            for block in tool_uses:
                result.tool_calls.append(block.name)
                output = self._run_tool(request, block.name, dict(block.input or {}))
                tool_results.append({
                    "type": "tool_result",
                    "tool_use_id": block.id,
                    "content": output.text,
                    "is_error": output.is_error,
                })
            messages.append({"role": "user", "content": tool_results})

        return result

    def _complete_openai(self, request: AgentRequest) -> ModelResponse:
        client = self.openai_client
        messages: list[dict[str, Any]] = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.append({"role": "user", "content": request.prompt})
        kwargs: dict[str, Any] = {
            "model": request.model,
            "max_tokens": request.max_output_tokens,
        }
        if request.tools:
            kwargs["tools"] = [tool.to_openai() for tool in request.tools]

        result = ModelResponse(text="")
        for step in range(self.config.max_tool_steps + 1):
            response = self._create(request, client.chat.completions.create, messages=list(messages), **kwargs)
            if response.usage is not None:
                result.input_tokens += response.usage.prompt_tokens or 0
                result.output_tokens += response.usage.completion_tokens or 0

            choice = response.choices[0]
            result.finish_reason = choice.finish_reason
            result.text = choice.message.content or ""
            tool_calls = choice.message.tool_calls or []

            if choice.finish_reason != "tool_calls" or not tool_calls:
                return result
            if step == self.config.max_tool_steps:
                logger.warn("Tool step limit reached", steps=step)
                return result

            messages.append({
                "role": "assistant",
                "content": choice.message.content,
                "tool_calls": [
                    {
                        "id": call.id,
                        "type": "function",
                        "function": {"name": call.function.name, "arguments": call.function.arguments},
                    }
                    for call in tool_calls
                ],
            })
            for call in tool_calls:
                result.tool_calls.append(call.function.name)
                output = self._run_tool(request, call.function.name, _parse_arguments(call.function.arguments))
                messages.append({"role": "tool", "tool_call_id": call.id, "content": output.text})

        return result


def _find_tool(tools: list[ToolDefinition], name: str) -> ToolDefinition | None:
    for tool in tools:
        if tool.name == name:
            return tool
    return None


def _parse_arguments(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.warn("Tool arguments are not valid JSON", arguments=raw)
        return {}
    return parsed if isinstance(parsed, dict) else {}
