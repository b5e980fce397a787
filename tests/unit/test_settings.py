"""
Unit tests for settings configuration.
"""
import pytest
import os
from unittest.mock import patch


class TestSettings:
    """Tests for Settings class."""

    def test_settings_import(self):
        """Test settings can be imported."""
        from crm_assistant.config import settings
        assert settings is not None

    def test_settings_singleton(self):
        """Test settings is a module-level singleton."""
        from crm_assistant.config import settings
        from crm_assistant.config import settings as again
        assert settings is again

    def test_default_model_settings(self):
        """Test default model settings."""
        from crm_assistant.config import ModelSettings

        model = ModelSettings()
        assert model.provider == "anthropic"
        assert model.model == "claude-3-7-sonnet-latest"
        assert model.max_retries == 3
        assert model.max_tool_steps == 5

    def test_default_tool_servers(self):
        from crm_assistant.config import ToolSettings

        tools = ToolSettings()
        assert "puppeteer" in tools.servers
        assert tools.servers["puppeteer"]["url"].startswith("http")

    def test_default_storage(self):
        from crm_assistant.config import StorageSettings
        assert StorageSettings().directory == "storage/app/ai_assistant"

    def test_to_dict_hides_secrets(self, isolated_env):
        """Test API keys and tool headers are not exported."""
        from crm_assistant.config import Settings

        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": "sk-secret"}):
            settings = Settings()
        settings.tools.servers["puppeteer"]["headers"] = {"Authorization": "Bearer x"}
        d = settings.to_dict()

        assert set(d) == {"model", "tools", "storage", "log"}
        assert "anthropic_api_key" not in d["model"]
        assert "sk-secret" not in str(d)
        assert "Bearer" not in str(d)


class TestEnvLoading:
    """Tests for environment variable loading."""

    def test_vendor_api_keys(self, isolated_env):
        from crm_assistant.config import Settings

        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": "a-key", "OPENAI_API_KEY": "o-key"}):
            settings = Settings()
        assert settings.model.anthropic_api_key == "a-key"
        assert settings.model.openai_api_key == "o-key"

    def test_prefixed_key_wins(self, isolated_env):
        from crm_assistant.config import Settings

        env = {"ANTHROPIC_API_KEY": "vendor", "CRM_ASSISTANT_ANTHROPIC_API_KEY": "prefixed"}
        with patch.dict(os.environ, env):
            settings = Settings()
        assert settings.model.anthropic_api_key == "prefixed"

    def test_provider_and_model(self, isolated_env):
        from crm_assistant.config import Settings

        env = {"CRM_ASSISTANT_PROVIDER": "openai", "CRM_ASSISTANT_MODEL": "gpt-4o-mini",
               "CRM_ASSISTANT_MAX_RETRIES": "5"}
        with patch.dict(os.environ, env):
            settings = Settings()
        assert settings.model.provider == "openai"
        assert settings.model.model == "gpt-4o-mini"
        assert settings.model.max_retries == 5

    def test_log_settings(self, isolated_env):
        from crm_assistant.config import Settings

        with patch.dict(os.environ, {"CRM_ASSISTANT_LOG_LEVEL": "debug", "CRM_ASSISTANT_LOG_JSON": "yes"}):
            settings = Settings()
        assert settings.log.level == "DEBUG"
        assert settings.log.json_format is True

    def test_puppeteer_url(self, isolated_env):
        from crm_assistant.config import Settings

        with patch.dict(os.environ, {"CRM_ASSISTANT_PUPPETEER_URL": "http://browser:9000/mcp"}):
            settings = Settings()
        assert settings.tools.servers["puppeteer"]["url"] == "http://browser:9000/mcp"


class TestYamlLoading:
    """Tests for YAML config files."""

    def _write_config(self, path):
        path.write_text(
            "model:\n"
            "  provider: openai\n"
            "  model: gpt-4-turbo\n"
            "tools:\n"
            "  servers:\n"
            "    search:\n"
            "      url: http://search.local/mcp\n"
            "storage:\n"
            "  directory: /tmp/answers\n",
            encoding="utf-8",
        )

    def test_config_in_cwd(self, isolated_env):
        from crm_assistant.config import Settings

        self._write_config(isolated_env / "config.yaml")
        settings = Settings()

        assert settings.config_file == isolated_env / "config.yaml"
        assert settings.model.provider == "openai"
        assert settings.model.model == "gpt-4-turbo"
        assert settings.tools.servers["search"]["url"] == "http://search.local/mcp"
        assert "puppeteer" in settings.tools.servers
        assert settings.storage.directory == "/tmp/answers"

    def test_explicit_config_file(self, isolated_env):
        from crm_assistant.config import Settings

        path = isolated_env / "custom.yml"
        self._write_config(path)
        settings = Settings(config_file=path)
        assert settings.model.provider == "openai"

    def test_env_overrides_yaml(self, isolated_env):
        from crm_assistant.config import Settings

        self._write_config(isolated_env / "config.yaml")
        with patch.dict(os.environ, {"CRM_ASSISTANT_PROVIDER": "anthropic"}):
            settings = Settings()
        assert settings.model.provider == "anthropic"
        assert settings.model.model == "gpt-4-turbo"

    def test_invalid_yaml_is_ignored(self, isolated_env):
        from crm_assistant.config import Settings

        (isolated_env / "config.yaml").write_text("model: [unclosed\n", encoding="utf-8")
        settings = Settings()
        assert settings.model.provider == "anthropic"

    def test_scalar_section_is_skipped(self, isolated_env, capsys):
        from crm_assistant.config import Settings

        (isolated_env / "config.yaml").write_text(
            "model: claude-3-opus-latest\n"
            "storage:\n"
            "  directory: /tmp/answers\n",
            encoding="utf-8",
        )
        settings = Settings()

        assert settings.model.model == "claude-3-7-sonnet-latest"
        assert settings.storage.directory == "/tmp/answers"
        assert "section=model" in capsys.readouterr().err

    def test_yaml_values_take_field_types(self, isolated_env):
        from crm_assistant.config import Settings

        (isolated_env / "config.yaml").write_text(
            "model:\n"
            "  max_retries: '3'\n"
            "  timeout: 30\n"
            "log:\n"
            "  json_format: 'yes'\n",
            encoding="utf-8",
        )
        settings = Settings()

        assert settings.model.max_retries == 3
        assert settings.model.timeout == 30.0
        assert isinstance(settings.model.timeout, float)
        assert settings.log.json_format is True

    def test_unconvertible_value_is_skipped(self, isolated_env, capsys):
        from crm_assistant.config import Settings

        (isolated_env / "config.yaml").write_text(
            "model:\n"
            "  max_retries: lots\n"
            "  max_tool_steps: 2\n",
            encoding="utf-8",
        )
        settings = Settings()

        assert settings.model.max_retries == 3
        assert settings.model.max_tool_steps == 2
        assert "model.max_retries" in capsys.readouterr().err

    def test_reload(self, isolated_env):
        from crm_assistant.config import Settings

        settings = Settings()
        settings.model.provider = "openai"
        settings.reload()
        assert settings.model.provider == "anthropic"

