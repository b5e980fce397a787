"""
Structured logging for the CRM assistant.

Log entries are rendered as coloured console lines on stderr, keeping stdout
free for menus and model output, and can optionally be appended to a file as
JSON lines.

Usage:
    from crm_assistant.logging import get_logger

    logger = get_logger("agent")
    logger.info("Request built", provider="anthropic")
    logger.request("anthropic", "claude-3-7-sonnet-latest", tools=2)
    logger.tool("puppeteer", "puppeteer_navigate")
    logger.result("Response received", output_tokens=512)
"""

import json
import sys
import time
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log severity levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


@dataclass
class LogEntry:
    """Structured log entry."""
    ts: float           # Unix timestamp
    module: str         # Module name
    level: str          # Log level
    msg: str            # Message
    tag: Optional[str] = None      # Semantic tag (REQUEST/TOOL/RESULT)
    details: Optional[dict] = None  # Additional data

    def to_json(self) -> str:
        """Convert to JSON string, omitting None fields."""
        data = {k: v for k, v in asdict(self).items() if v is not None}
        return json.dumps(data, ensure_ascii=False, default=str)

    def to_console(self) -> str:
        """Format for console output with colors."""
        colors = {
            "DEBUG": "\033[90m",    # Gray
            "INFO": "\033[97m",     # White
            "WARN": "\033[93m",     # Yellow
            "ERROR": "\033[91m",    # Red
        }
        reset = "\033[0m"

        color = colors.get(self.level, "")
        timestamp = time.strftime("%H:%M:%S", time.localtime(self.ts))
        details_str = ""
        if self.details:
            details_str = " " + " ".join(f"{k}={v}" for k, v in self.details.items())

        if self.tag == "REQUEST":
            return f"{color}[{timestamp}] -> {self.msg}{details_str}{reset}"
        elif self.tag == "TOOL":
            return f"{color}[{timestamp}] ~ {self.msg}{details_str}{reset}"
        elif self.tag == "RESULT":
            return f"{color}[{timestamp}] <- {self.msg}{details_str}{reset}"
        else:
            return f"{color}[{timestamp}] [{self.level}] [{self.module}] {self.msg}{details_str}{reset}"


class StructuredLogger:
    """
    Structured logger with console and JSON file output.

    Args:
        module: Module name for identification
        min_level: Minimum level to log (default: INFO)
        file_path: Optional file that receives every entry as a JSON line
        json_format: Print JSON instead of coloured lines to the console
    """

    _LEVEL_ORDER = {
        LogLevel.DEBUG: 0,
        LogLevel.INFO: 1,
        LogLevel.WARN: 2,
        LogLevel.ERROR: 3,
    }

    def __init__(
        self,
        module: str,
        min_level: LogLevel = LogLevel.INFO,
        file_path: Optional[str] = None,
        json_format: bool = False,
    ):
        self.module = module
        self.min_level = min_level
        self.file_path = file_path
        self.json_format = json_format

    def _should_log(self, level: LogLevel) -> bool:
        """Check if level meets minimum threshold."""
        return self._LEVEL_ORDER[level] >= self._LEVEL_ORDER[self.min_level]

    def log(
        self,
        level: LogLevel,
        msg: str,
        tag: Optional[str] = None,
        **extra
    ) -> Optional[LogEntry]:
        """
        Log a message with optional extra fields.

        Args:
            level: Log level
            msg: Log message
            tag: Optional semantic tag
            **extra: Additional fields to include

        Returns:
            The emitted entry, or None if it was filtered out.
        """
        if not self._should_log(level):
            return None

        entry = LogEntry(
            ts=time.time(),
            module=self.module,
            level=level.value,
            msg=msg,
            tag=tag,
            details=extra if extra else None
        )

        line = entry.to_json() if self.json_format else entry.to_console()
        print(line, file=sys.stderr)

        if self.file_path:
            with open(self.file_path, "a", encoding="utf-8") as f:
                f.write(entry.to_json() + "\n")

        return entry

    # ========== Standard Levels ==========

    def debug(self, msg: str, **extra) -> Optional[LogEntry]:
        """Log debug message."""
        return self.log(LogLevel.DEBUG, msg, **extra)

    def info(self, msg: str, **extra) -> Optional[LogEntry]:
        """Log info message."""
        return self.log(LogLevel.INFO, msg, **extra)

    def warn(self, msg: str, **extra) -> Optional[LogEntry]:
        """Log warning message."""
        return self.log(LogLevel.WARN, msg, **extra)

    def error(self, msg: str, **extra) -> Optional[LogEntry]:
        """Log error message."""
        return self.log(LogLevel.ERROR, msg, **extra)

    # ========== Assistant-Specific Methods ==========

    def request(self, provider: str, model: str, **extra) -> Optional[LogEntry]:
        """Log an outgoing model request."""
        return self.log(LogLevel.INFO, f"{provider}/{model}", tag="REQUEST", **extra)

    def tool(self, server_id: str, name: str, **extra) -> Optional[LogEntry]:
        """Log a tool execution."""
        return self.log(LogLevel.INFO, f"{server_id}.{name}", tag="TOOL", **extra)

    def result(self, msg: str, **extra) -> Optional[LogEntry]:
        """Log a model result."""
        return self.log(LogLevel.INFO, msg, tag="RESULT", **extra)


# ========== Logger Factory ==========

_loggers: dict[str, StructuredLogger] = {}
_defaults: dict = {
    "min_level": LogLevel.INFO,
    "file_path": None,
    "json_format": False,
}


def configure_logging(
    level: str = "INFO",
    file_path: Optional[str] = None,
    json_format: bool = False,
) -> None:
    """
    Apply log settings to all existing and future loggers.

    Args:
        level: Level name (DEBUG, INFO, WARN, ERROR); WARNING is accepted too,
            anything else falls back to INFO with a warning
        file_path: Optional JSON-lines log file
        json_format: Print JSON to the console
    """
    name = level.upper()
    if name == "WARNING":
        name = "WARN"
    try:
        min_level = LogLevel(name)
    except ValueError:
        min_level = None
    _defaults["min_level"] = min_level or LogLevel.INFO
    _defaults["file_path"] = file_path
    _defaults["json_format"] = json_format
    for logger in _loggers.values():
        logger.min_level = _defaults["min_level"]
        logger.file_path = file_path
        logger.json_format = json_format
    if min_level is None:
        get_logger("logging").warn("Unknown log level, using INFO", level=level)


def get_logger(module: str) -> StructuredLogger:
    """
    Get or create a logger for the given module.

    Args:
        module: Module name

    Returns:
        StructuredLogger instance
    """
    if module not in _loggers:
        _loggers[module] = StructuredLogger(module, **_defaults)
    return _loggers[module]
