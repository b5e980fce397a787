"""
Unified configuration management for the CRM assistant.

Supports loading from:
- Environment variables (.env is loaded by the CLI)
- YAML config files (config.yaml)
- Programmatic overrides

Priority (highest to lowest):
1. Programmatic overrides
2. Environment variables
3. YAML config files
4. Default values

Usage:
    from crm_assistant.config import settings

    # Access settings
    settings.model.provider
    settings.tools.servers["puppeteer"]["url"]

    # Override at runtime
    settings.model.model = "gpt-4o"

    # Reload from files
    settings.reload()
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from crm_assistant.logging import get_logger

logger = get_logger("config")


# =============================================================================
# Configuration Dataclasses
# =============================================================================

@dataclass
class ModelSettings:
    """AI provider configuration."""
    provider: str = "anthropic"
    model: str = "claude-3-7-sonnet-latest"
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    anthropic_base_url: Optional[str] = None
    openai_base_url: Optional[str] = None
    timeout: float = 120.0
    max_retries: int = 3
    retry_base_delay: float = 1.0
    max_tool_steps: int = 5


def _default_tool_servers() -> dict[str, dict[str, Any]]:
    return {
        "puppeteer": {
            "url": "http://localhost:3001/mcp",
            "headers": {},
            "timeout": 60.0,
        },
    }


@dataclass
class ToolSettings:
    """Remote tool server configuration, keyed by server id."""
    servers: dict[str, dict[str, Any]] = field(default_factory=_default_tool_servers)


@dataclass
class StorageSettings:
    """Where saved responses go."""
    directory: str = "storage/app/ai_assistant"


@dataclass
class LogSettings:
    """Logging configuration."""
    level: str = "WARN"
    file_path: Optional[str] = None
    json_format: bool = False


def _as_bool(val: str) -> bool:
    return val.lower() in ("true", "1", "yes")


@dataclass
class Settings:
    """
    Main settings container.

    Provides unified access to all configuration.
    """
    model: ModelSettings = field(default_factory=ModelSettings)
    tools: ToolSettings = field(default_factory=ToolSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    log: LogSettings = field(default_factory=LogSettings)

    config_file: Optional[Path] = None
    _env_prefix: str = "CRM_ASSISTANT_"

    def __post_init__(self):
        """Load configuration after initialization."""
        self._load_from_yaml()
        self._load_from_env()

    def _load_from_env(self):
        """Load settings from environment variables."""
        prefix = self._env_prefix

        # Vendor SDK conventions first, prefixed variables win
        if val := os.getenv("ANTHROPIC_API_KEY"):
            self.model.anthropic_api_key = val
        if val := os.getenv("OPENAI_API_KEY"):
            self.model.openai_api_key = val

        # Model settings
        if val := os.getenv(f"{prefix}PROVIDER"):
            self.model.provider = val
        if val := os.getenv(f"{prefix}MODEL"):
            self.model.model = val
        if val := os.getenv(f"{prefix}ANTHROPIC_API_KEY"):
            self.model.anthropic_api_key = val
        if val := os.getenv(f"{prefix}OPENAI_API_KEY"):
            self.model.openai_api_key = val
        if val := os.getenv(f"{prefix}ANTHROPIC_BASE_URL"):
            self.model.anthropic_base_url = val
        if val := os.getenv(f"{prefix}OPENAI_BASE_URL"):
            self.model.openai_base_url = val
        if val := os.getenv(f"{prefix}TIMEOUT"):
            self.model.timeout = float(val)
        if val := os.getenv(f"{prefix}MAX_RETRIES"):
            self.model.max_retries = int(val)
        if val := os.getenv(f"{prefix}MAX_TOOL_STEPS"):
            self.model.max_tool_steps = int(val)

        # Tool settings
        if val := os.getenv(f"{prefix}PUPPETEER_URL"):
            self.tools.servers.setdefault("puppeteer", {})["url"] = val

        # Storage settings
        if val := os.getenv(f"{prefix}STORAGE_DIR"):
            self.storage.directory = val

        # Log settings
        if val := os.getenv(f"{prefix}LOG_LEVEL"):
            self.log.level = val.upper()
        if val := os.getenv(f"{prefix}LOG_FILE"):
            self.log.file_path = val
        if val := os.getenv(f"{prefix}LOG_JSON"):
            self.log.json_format = _as_bool(val)

    def _load_from_yaml(self):
        """Load settings from the explicit config file or the first one found."""
        if self.config_file is not None:
            self._apply_yaml_config(Path(self.config_file))
            return

        search_paths = [
            Path.cwd() / "config.yaml",
            Path.cwd() / "config.yml",
            Path.home() / ".crm_assistant" / "config.yaml",
        ]

        for config_path in search_paths:
            if config_path.exists():
                self.config_file = config_path
                self._apply_yaml_config(config_path)
                break

    def _apply_yaml_config(self, path: Path):
        """Apply config from YAML file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warn("Failed to load config", path=str(path), error=str(e))
            return
        if not isinstance(data, dict):
            logger.warn("Config is not a mapping, ignored", path=str(path))
            return

        for name in ("model", "storage", "log"):
            if values := data.get(name):
                self._apply_section(name, values)

        tools = data.get("tools") or {}
        servers = (tools.get("servers") if isinstance(tools, dict) else tools) or {}
        if not isinstance(servers, dict):
            logger.warn("Config section is not a mapping, ignored", section="tools.servers")
            return
        for server_id, server in servers.items():
            if not isinstance(server or {}, dict):
                logger.warn("Tool server config ignored", server_id=server_id)
                continue
            self.tools.servers[server_id] = dict(server or {})

    def _apply_section(self, name: str, values: Any):
        """Copy known keys of a YAML section, converted to the field's type."""
        if not isinstance(values, dict):
            logger.warn("Config section is not a mapping, ignored", section=name)
            return
        section = getattr(self, name)
        for key, val in values.items():
            if not hasattr(section, key):
                continue
            current = getattr(section, key)
            try:
                if isinstance(current, bool):
                    val = _as_bool(str(val))
                elif isinstance(current, (int, float)):
                    val = type(current)(val)
                elif isinstance(current, str):
                    val = str(val)
            except (TypeError, ValueError):
                logger.warn("Invalid config value, ignored", key=f"{name}.{key}", value=val)
                continue
            setattr(section, key, val)

    def reload(self):
        """Reload configuration from all sources."""
        self.model = ModelSettings()
        self.tools = ToolSettings()
        self.storage = StorageSettings()
        self.log = LogSettings()

        self._load_from_yaml()
        self._load_from_env()

    def to_dict(self) -> dict:
        """Convert settings to dictionary."""
        return {
            "model": {
                "provider": self.model.provider,
                "model": self.model.model,
                "anthropic_base_url": self.model.anthropic_base_url,
                "openai_base_url": self.model.openai_base_url,
                "timeout": self.model.timeout,
                "max_retries": self.model.max_retries,
                "max_tool_steps": self.model.max_tool_steps,
                # API keys excluded
            },
            "tools": {
                "servers": {
                    server_id: {"url": server.get("url"), "timeout": server.get("timeout")}
                    for server_id, server in self.tools.servers.items()
                },
            },
            "storage": {
                "directory": self.storage.directory,
            },
            "log": {
                "level": self.log.level,
                "file_path": self.log.file_path,
                "json_format": self.log.json_format,
            },
        }

    def __repr__(self) -> str:
        return f"Settings(config_file={self.config_file})"


# =============================================================================
# Global Settings Instance
# =============================================================================

settings = Settings()

