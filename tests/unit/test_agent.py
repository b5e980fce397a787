"""
Unit tests for AgentRequestBuilder.
"""
import pytest


class TestProviderResolution:
    """Tests for provider and model fallback."""

    @pytest.mark.parametrize("provider_in", ["bogus", "", None, "Anthropic", "gemini"])
    def test_unknown_provider_uses_default(self, provider_in):
        """Test unsupported provider strings resolve to anthropic."""
        from crm_assistant import AgentRequestBuilder, Provider

        request = AgentRequestBuilder().build(provider_in, "claude-3-opus-latest", "hi")
        assert request.provider is Provider.ANTHROPIC

    def test_unknown_model_uses_first_model(self):
        """Test unsupported model resolves to the provider's first model."""
        from crm_assistant import AgentRequestBuilder, Provider

        request = AgentRequestBuilder().build("openai", "claude-3-opus-latest", "hi")
        assert request.provider is Provider.OPENAI
        assert request.model == "gpt-4o"

    def test_supported_pairs_pass_through(self):
        """Test every supported pair is kept unchanged."""
        from crm_assistant import AgentRequestBuilder, MODELS

        builder = AgentRequestBuilder()
        for provider, models in MODELS.items():
            for model in models:
                request = builder.build(provider.value, model, "hi")
                assert request.provider is provider
                assert request.model == model

    def test_bogus_everything(self):
        """Test the documented all-invalid example."""
        from crm_assistant import AgentRequestBuilder, Provider, MAX_OUTPUT_TOKENS

        request = AgentRequestBuilder().build("bogus", "bogus", "hi", "", [])

        assert request.provider is Provider.ANTHROPIC
        assert request.model == "claude-3-7-sonnet-latest"
        assert request.prompt == "hi"
        assert request.system_prompt is None
        assert request.tools == []
        assert request.max_output_tokens == MAX_OUTPUT_TOKENS == 4096

    def test_fallback_is_logged(self, capsys):
        """Test substitutions emit warnings on stderr."""
        from crm_assistant import AgentRequestBuilder

        AgentRequestBuilder().build("bogus", "bogus", "hi")
        err = capsys.readouterr().err
        assert "Unknown provider" in err
        assert "Model not offered" in err


class TestRequestAssembly:
    """Tests for system prompt and tool attachment."""

    def test_system_prompt_attached_when_present(self):
        from crm_assistant import AgentRequestBuilder

        request = AgentRequestBuilder().build("anthropic", None, "hi", "Be brief.")
        assert request.system_prompt == "Be brief."

    @pytest.mark.parametrize("system_prompt", ["", None])
    def test_system_prompt_absent_when_empty(self, system_prompt):
        from crm_assistant import AgentRequestBuilder

        request = AgentRequestBuilder().build("anthropic", None, "hi", system_prompt)
        assert request.system_prompt is None

    def test_no_tool_servers_no_tools(self, tool_source):
        """Test tool source is not consulted without tool servers."""
        from crm_assistant import AgentRequestBuilder

        request = AgentRequestBuilder(tool_source).build("openai", "gpt-4o", "hi", "", [])
        assert request.tools == []
        tool_source.tools.assert_not_called()

    def test_tools_concatenated_in_order(self, tool_source, browser_tools, search_tools):
        """Test tools of a then b keep their order."""
        from crm_assistant import AgentRequestBuilder

        builder = AgentRequestBuilder(tool_source)

        request = builder.build("openai", "gpt-4o", "hi", "", ["puppeteer", "search"])
        assert request.tools == browser_tools + search_tools

        request = builder.build("openai", "gpt-4o", "hi", "", ["search", "puppeteer"])
        assert request.tools == search_tools + browser_tools

    def test_tools_without_source_raise(self):
        from crm_assistant import AgentRequestBuilder

        with pytest.raises(ValueError):
            AgentRequestBuilder().build("openai", "gpt-4o", "hi", "", ["puppeteer"])

    def test_requests_are_independent(self, tool_source):
        """Test each build returns a fresh tool list."""
        from crm_assistant import AgentRequestBuilder

        builder = AgentRequestBuilder(tool_source)
        first = builder.build("anthropic", None, "a", "", ["search"])
        first.tools.clear()
        second = builder.build("anthropic", None, "b", "", ["search"])
        assert len(second.tools) == 1


class TestCatalog:
    """Tests for the model catalog helpers."""

    def test_list_models_is_a_copy(self):
        from crm_assistant.catalog import Provider, list_models, MODELS

        models = list_models(Provider.OPENAI)
        models.append("gpt-x")
        assert "gpt-x" not in MODELS[Provider.OPENAI]

    def test_resolve_provider(self):
        from crm_assistant.catalog import Provider, resolve_provider

        assert resolve_provider("openai") is Provider.OPENAI
        assert resolve_provider("nope") is Provider.ANTHROPIC
