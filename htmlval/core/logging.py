"""
Channel-Aware Structured Logging for HTMLVal.

Every logger belongs to one channel:
- PIPELINE: pass start/end, timing
- LEXER: raw-text scanning (doctype, tag balance)
- TREE: document tree construction
- RULES: rule table loading, per-element checks
- DOCUMENT: document skeleton checks
- SYSTEM: input handling, errors

Levels are cumulative: SILENT (0) < INFO (1) < VERBOSE (2) < DEBUG (3).
Errors and warnings are emitted at any level except SILENT.

Environment:
- HTMLVAL_LOG_LEVEL: silent/info/verbose/debug (default info)
- HTMLVAL_LOG_FORMAT: console/json (default console)
- HTMLVAL_LOG_CHANNELS: comma-separated channel filter (default all)

Log output goes to stderr so that reports written to stdout stay clean.
"""

import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Iterable, Optional, Union

import structlog


class LogLevel(IntEnum):
    """Log verbosity levels."""
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Parse a level name; unknown names (and stdlib warning/error) mean INFO."""
        try:
            return cls[s.upper()]
        except KeyError:
            return cls.INFO

    def stdlib_level(self) -> int:
        if self == LogLevel.SILENT:
            return logging.CRITICAL + 10
        if self == LogLevel.INFO:
            return logging.INFO
        return logging.DEBUG


class LogChannel(str, Enum):
    """Semantic log channels."""
    PIPELINE = "PIPELINE"
    LEXER = "LEXER"
    TREE = "TREE"
    RULES = "RULES"
    DOCUMENT = "DOCUMENT"
    SYSTEM = "SYSTEM"

    @classmethod
    def all(cls) -> list["LogChannel"]:
        return list(cls)

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        try:
            return cls(s.strip().upper())
        except ValueError:
            return None


_request_context: ContextVar[dict] = ContextVar("htmlval_log_context", default={})

_config: dict[str, Any] = {
    "level": LogLevel.INFO,
    "format": "console",
    "channels": set(LogChannel.all()),
    "configured": False,
}


def _channel_set(channels: Iterable[Union[LogChannel, str]]) -> set[LogChannel]:
    """Channels by enum or name; unknown names are dropped."""
    result: set[LogChannel] = set()
    for ch in channels:
        parsed = ch if isinstance(ch, LogChannel) else LogChannel.from_string(ch)
        if parsed is not None:
            result.add(parsed)
    return result


def _renderer(format: str):
    if format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: Optional[str] = None,
    channels: Optional[list[Union[LogChannel, str]]] = None,
    force: bool = False,
) -> None:
    """
    Configure the logging system.

    Arguments left as None fall back to the HTMLVAL_LOG_* environment
    variables. Only the first call takes effect unless ``force`` is set.
    """
    if _config["configured"] and not force:
        return

    if level is None:
        level = os.environ.get("HTMLVAL_LOG_LEVEL", "info")
    if isinstance(level, str):
        level = LogLevel.from_string(level)

    if format is None:
        format = os.environ.get("HTMLVAL_LOG_FORMAT", "console")

    if channels is None:
        selected = _channel_set(os.environ.get("HTMLVAL_LOG_CHANNELS", "").split(","))
        selected = selected or set(LogChannel.all())
    else:
        selected = _channel_set(channels)

    _config.update(level=level, format=format, channels=selected)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level.stdlib_level(),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_renderer(format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _config["configured"] = True


# =============================================================================
# Channel Logger
# =============================================================================

class ChannelLogger:
    """
    A structlog logger bound to one channel.

    info/verbose/debug are filtered by level and channel; error and
    warning only by SILENT.
    """

    def __init__(
        self,
        channel: LogChannel,
        name: Optional[str] = None,
        pass_name: Optional[str] = None,
    ):
        self.channel = channel
        self.name = name or f"htmlval.{channel.value.lower()}"
        self.pass_name = pass_name
        self._logger = structlog.get_logger(self.name)

    def _should_log(self, msg_level: LogLevel) -> bool:
        return self.channel in _config["channels"] and _config["level"] >= msg_level

    def _emit(self, method: str, event: str, fields: dict) -> None:
        data = {"channel": self.channel.value, **fields}
        if self.pass_name:
            data["pass"] = self.pass_name
        data.update(_request_context.get())
        getattr(self._logger, method)(event, **data)

    def info(self, event: str, **kwargs) -> None:
        """Key milestones."""
        if self._should_log(LogLevel.INFO):
            self._emit("info", event, kwargs)

    def verbose(self, event: str, **kwargs) -> None:
        """Per-pass detail."""
        if self._should_log(LogLevel.VERBOSE):
            self._emit("debug", event, kwargs)

    def debug(self, event: str, **kwargs) -> None:
        if self._should_log(LogLevel.DEBUG):
            self._emit("debug", event, kwargs)

    def error(self, event: str, **kwargs) -> None:
        if _config["level"] != LogLevel.SILENT:
            self._emit("error", event, kwargs)

    def warning(self, event: str, **kwargs) -> None:
        if _config["level"] != LogLevel.SILENT:
            self._emit("warning", event, kwargs)


# Pass name prefix -> channel
_PASS_CHANNELS = {
    "p00": LogChannel.LEXER,
    "p10": LogChannel.LEXER,
    "p20": LogChannel.TREE,
    "p30": LogChannel.DOCUMENT,
    "p40": LogChannel.RULES,
    "p50": LogChannel.DOCUMENT,
}


def get_logger(channel: Union[LogChannel, str] = LogChannel.SYSTEM) -> ChannelLogger:
    """Get a channel-specific logger."""
    configure_logging()
    if isinstance(channel, str) and not isinstance(channel, LogChannel):
        channel = LogChannel.from_string(channel) or LogChannel.SYSTEM
    return ChannelLogger(channel=channel)


def get_pass_logger(pass_name: str, channel: Optional[LogChannel] = None) -> ChannelLogger:
    """
    Get a logger for a pipeline pass.

    The channel follows the pass-number prefix (``p10_tag_balance`` logs
    on LEXER) unless given explicitly.
    """
    configure_logging()
    if channel is None:
        channel = _PASS_CHANNELS.get(pass_name[:3], LogChannel.PIPELINE)
    return ChannelLogger(channel=channel, name=f"htmlval.{pass_name}", pass_name=pass_name)


def bind_request_context(**kwargs) -> None:
    """Bind fields that every log message of the current run carries."""
    _request_context.set({**_request_context.get(), **kwargs})


def clear_request_context() -> None:
    _request_context.set({})


class ValidationLogger:
    """
    Run-scoped logger used by the engine.

    Binds the request ID for all log messages and times each pass.
    """

    def __init__(self, request_id: str):
        self.request_id = request_id
        self._pipeline_log = get_logger(LogChannel.PIPELINE)
        self._started = datetime.now()
        self._pass_started: dict[str, datetime] = {}

        bind_request_context(request_id=request_id)

    @staticmethod
    def _elapsed_ms(since: datetime) -> float:
        return round((datetime.now() - since).total_seconds() * 1000, 2)

    def pass_start(self, pass_name: str) -> None:
        self._pass_started[pass_name] = datetime.now()
        self._pipeline_log.debug("pass_started", pass_name=pass_name)

    def pass_end(self, pass_name: str, **metrics: Any) -> None:
        started = self._pass_started.get(pass_name, datetime.now())
        self._pipeline_log.verbose(
            "pass_completed",
            pass_name=pass_name,
            duration_ms=self._elapsed_ms(started),
            **metrics,
        )

    def pass_error(self, pass_name: str, error: Exception) -> None:
        self._pipeline_log.error(
            "pass_failed",
            pass_name=pass_name,
            error=str(error),
            error_type=type(error).__name__,
        )

    def validation_complete(self, status: str, **metrics: Any) -> None:
        """Log run completion with summary, then drop the request context."""
        self._pipeline_log.info(
            "validation_complete",
            status=status,
            total_duration_ms=self._elapsed_ms(self._started),
            **metrics,
        )
        clear_request_context()


def get_current_config() -> dict:
    """Get the current logging configuration (for testing/debugging)."""
    return {
        "level": _config["level"].name,
        "format": _config["format"],
        "channels": [ch.value for ch in LogChannel if ch in _config["channels"]],
    }
