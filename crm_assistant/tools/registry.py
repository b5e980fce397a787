"""Registry of remote tool servers speaking MCP-style JSON-RPC over HTTP."""

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from crm_assistant import __version__
from crm_assistant.exceptions import ToolServerError, UnknownToolServerError
from crm_assistant.logging import get_logger

logger = get_logger("tools")

PROTOCOL_VERSION = "2025-03-26"
SESSION_HEADER = "Mcp-Session-Id"


@dataclass
class ToolDefinition:
    """A callable tool declared by a tool server."""

    server_id: str
    name: str
    description: str = ""
    input_schema: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )

    def to_anthropic(self) -> dict[str, Any]:
        """Render as an Anthropic Messages API tool."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema,
        }

    def to_openai(self) -> dict[str, Any]:
        """Render as an OpenAI Chat Completions function tool."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_schema,
            },
        }


@dataclass
class ToolResult:
    """Flattened output of a tool call."""

    text: str
    is_error: bool = False


def _content_to_text(content: list[dict[str, Any]]) -> str:
    parts = []
    for item in content:
        if item.get("type") == "text":
            parts.append(item.get("text", ""))
        elif item.get("type") == "resource":
            resource = item.get("resource", {})
            parts.append(resource.get("text") or f"[resource {resource.get('uri', '')}]")
        else:
            parts.append(f"[{item.get('type', 'unknown')} content omitted]")
    return "\n".join(parts)


class ToolServerSession:
    """
    JSON-RPC session with a single tool server.

    The session is initialized lazily on the first request. Responses may be
    plain JSON or a server-sent event stream carrying the JSON-RPC message.

    Args:
        server_id: Registry id of the server.
        url: Endpoint that accepts JSON-RPC POSTs.
        headers: Extra headers, e.g. authorization.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        server_id: str,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.server_id = server_id
        self.url = url
        self._client = httpx.Client(
            headers={"Accept": "application/json, text/event-stream", **(headers or {})},
            timeout=timeout,
            transport=transport,
        )
        self._session_id: str | None = None
        self._initialized = False
        self._next_id = 0

    def _post(self, payload: dict[str, Any]) -> httpx.Response:
        headers = {SESSION_HEADER: self._session_id} if self._session_id else {}
        try:
            response = self._client.post(self.url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ToolServerError(
                f"Tool server request failed: {e}",
                server_id=self.server_id,
                method=payload.get("method"),
            ) from e
        if session_id := response.headers.get(SESSION_HEADER):
            self._session_id = session_id
        return response

    def _parse_message(self, response: httpx.Response, request_id: int) -> dict[str, Any]:
        content_type = response.headers.get("content-type", "")
        if content_type.startswith("text/event-stream"):
            for line in response.text.splitlines():
                if not line.startswith("data:"):
                    continue
                try:
                    message = json.loads(line[len("data:"):].strip())
                except ValueError as e:
                    raise ToolServerError(
                        "Tool server sent invalid event data", server_id=self.server_id
                    ) from e
                if message.get("id") == request_id:
                    return message
            raise ToolServerError(
                "No response in event stream", server_id=self.server_id, id=request_id
            )
        try:
            return response.json()
        except ValueError as e:
            raise ToolServerError(
                "Tool server returned invalid JSON", server_id=self.server_id
            ) from e

    def _rpc(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        self._next_id += 1
        request_id = self._next_id
        payload: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
        if params is not None:
            payload["params"] = params

        message = self._parse_message(self._post(payload), request_id)
        if error := message.get("error"):
            raise ToolServerError(
                error.get("message", "Tool server error"),
                server_id=self.server_id,
                method=method,
                code=error.get("code"),
            )
        return message.get("result") or {}

    def initialize(self) -> None:
        """Perform the protocol handshake once per session."""
        if self._initialized:
            return
        self._rpc("initialize", {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {},
            "clientInfo": {"name": "crm-assistant", "version": __version__},
        })
        self._post({"jsonrpc": "2.0", "method": "notifications/initialized"})
        self._initialized = True
        logger.debug("Tool server initialized", server_id=self.server_id)

    def list_tools(self) -> list[ToolDefinition]:
        """Fetch every tool the server declares, following pagination cursors."""
        self.initialize()
        tools: list[ToolDefinition] = []
        cursor = None
        while True:
            result = self._rpc("tools/list", {"cursor": cursor} if cursor else None)
            for tool in result.get("tools", []):
                tools.append(ToolDefinition(
                    server_id=self.server_id,
                    name=tool["name"],
                    description=tool.get("description", ""),
                    input_schema=tool.get("inputSchema") or {"type": "object", "properties": {}},
                ))
            cursor = result.get("nextCursor")
            if not cursor:
                return tools

    def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        self.initialize()
        result = self._rpc("tools/call", {"name": name, "arguments": arguments})
        return ToolResult(
            text=_content_to_text(result.get("content", [])),
            is_error=bool(result.get("isError")),
        )

    def close(self) -> None:
        self._client.close()


class ToolRegistry:
    """
    Resolves tool server ids to their tool definitions and executes calls.

    Args:
        servers: Mapping of server id to ``{url, headers, timeout}``.
            Defaults to ``settings.tools.servers``.
        transport: Optional httpx transport shared by all sessions.

    Example:
        >>> with ToolRegistry() as registry:
        ...     tools = registry.tools("puppeteer")
    """

    def __init__(
        self,
        servers: dict[str, dict[str, Any]] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        if servers is None:
            from crm_assistant.config import settings
            servers = settings.tools.servers
        self.servers = servers
        self._transport = transport
        self._sessions: dict[str, ToolServerSession] = {}
        self._tools: dict[str, list[ToolDefinition]] = {}

    def _session(self, server_id: str) -> ToolServerSession:
        if server_id not in self._sessions:
            server = self.servers.get(server_id)
            if not server or not server.get("url"):
                raise UnknownToolServerError("Unknown tool server", server_id=server_id)
            self._sessions[server_id] = ToolServerSession(
                server_id,
                server["url"],
                headers=server.get("headers"),
                timeout=float(server.get("timeout", 30.0)),
                transport=self._transport,
            )
        return self._sessions[server_id]

    def tools(self, server_id: str) -> list[ToolDefinition]:
        """Return the tools of a server, fetched once per registry."""
        if server_id not in self._tools:
            self._tools[server_id] = self._session(server_id).list_tools()
            logger.info(
                "Loaded tools", server_id=server_id, count=len(self._tools[server_id])
            )
        return list(self._tools[server_id])

    def call_tool(self, server_id: str, name: str, arguments: dict[str, Any]) -> ToolResult:
        logger.tool(server_id, name)
        result = self._session(server_id).call_tool(name, arguments)
        if result.is_error:
            logger.warn("Tool reported an error", server_id=server_id, tool=name)
        return result

    def close(self) -> None:
        for session in self._sessions.values():
            session.close()
        self._sessions.clear()

    def __enter__(self) -> "ToolRegistry":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
