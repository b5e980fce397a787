"""Remote tool servers."""

from crm_assistant.tools.registry import ToolDefinition, ToolRegistry, ToolResult

__all__ = ["ToolDefinition", "ToolRegistry", "ToolResult"]
