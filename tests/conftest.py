"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


# =============================================================================
# Settings fixtures
# =============================================================================

@pytest.fixture
def model_settings():
    """Provide model settings that never sleep between retries."""
    from crm_assistant.config import ModelSettings
    return ModelSettings(
        anthropic_api_key="test-anthropic-key",
        openai_api_key="test-openai-key",
        max_retries=2,
        retry_base_delay=0.0,
        max_tool_steps=3,
    )


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Run with no CRM_ASSISTANT_* variables and no config file in cwd."""
    import os
    for key in list(os.environ):
        if key.startswith("CRM_ASSISTANT_") or key in ("ANTHROPIC_API_KEY", "OPENAI_API_KEY"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


# =============================================================================
# Tool fixtures
# =============================================================================

@pytest.fixture
def browser_tools():
    """Provide tools declared by a browser tool server."""
    from crm_assistant.tools import ToolDefinition
    return [
        ToolDefinition(
            server_id="puppeteer",
            name="puppeteer_navigate",
            description="Navigate to a URL",
            input_schema={"type": "object", "properties": {"url": {"type": "string"}}},
        ),
        ToolDefinition(server_id="puppeteer", name="puppeteer_screenshot"),
    ]


@pytest.fixture
def search_tools():
    """Provide tools declared by a search tool server."""
    from crm_assistant.tools import ToolDefinition
    return [ToolDefinition(server_id="search", name="web_search")]


@pytest.fixture
def tool_source(browser_tools, search_tools):
    """Mock registry resolving 'puppeteer' and 'search'."""
    source = MagicMock()
    by_server = {"puppeteer": browser_tools, "search": search_tools}
    source.tools.side_effect = lambda server_id: list(by_server[server_id])
    return source


# =============================================================================
# Provider response fixtures
# =============================================================================

def anthropic_message(*blocks, stop_reason="end_turn", input_tokens=10, output_tokens=20):
    """Build an object shaped like an Anthropic Message."""
    return SimpleNamespace(
        content=list(blocks),
        stop_reason=stop_reason,
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
    )


def anthropic_text(text):
    return SimpleNamespace(type="text", text=text)


def anthropic_tool_use(tool_id, name, tool_input):
    return SimpleNamespace(type="tool_use", id=tool_id, name=name, input=tool_input)


def openai_completion(content=None, finish_reason="stop", tool_calls=None,
                      prompt_tokens=10, completion_tokens=20):
    """Build an object shaped like an OpenAI ChatCompletion."""
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message, finish_reason=finish_reason)],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


def openai_tool_call(call_id, name, arguments):
    return SimpleNamespace(
        id=call_id,
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments),
    )


@pytest.fixture
def provider_responses():
    """Expose the response builders to tests."""
    return SimpleNamespace(
        anthropic_message=anthropic_message,
        anthropic_text=anthropic_text,
        anthropic_tool_use=anthropic_tool_use,
        openai_completion=openai_completion,
        openai_tool_call=openai_tool_call,
    )
