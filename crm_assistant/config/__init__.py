"""Configuration and prompts for the CRM assistant."""

from crm_assistant.config.prompts import get_system_prompt
from crm_assistant.config.settings import (
    LogSettings,
    ModelSettings,
    Settings,
    StorageSettings,
    ToolSettings,
    settings,
)

__all__ = [
    "LogSettings",
    "ModelSettings",
    "Settings",
    "StorageSettings",
    "ToolSettings",
    "get_system_prompt",
    "settings",
]
