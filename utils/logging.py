"""
Logging Configuration Module

Console logging for development and one-line JSON records for production.
Agent turns and outbound API calls carry structured fields (agent, goal,
response id, duration) so a single conversation can be followed by its
response ids.

Usage:
    from utils.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Routing turn", extra={"goal": goal})
    logger.error("Generation failed", exc_info=True)
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional
from config.settings import settings


# Record attributes copied into JSON output when a caller passes them via extra=
STRUCTURED_FIELDS = (
    "agent",
    "response_id",
    "status",
    "goal",
    "service",
    "endpoint",
    "duration_ms",
    "details",
)

NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "asyncio",
    "google_genai",
    "langchain_google_genai",
)


# =============================================================================
# Formatters
# =============================================================================

class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        logging.DEBUG: "\033[36m",      # Cyan
        logging.INFO: "\033[32m",       # Green
        logging.WARNING: "\033[33m",    # Yellow
        logging.ERROR: "\033[31m",      # Red
        logging.CRITICAL: "\033[1;31m", # Bold Red
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, "")
        record.levelname = f"{color}{record.levelname:8}{self.RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record, for log aggregators.

    Structured fields passed through ``extra`` are emitted at the top level.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        for field in STRUCTURED_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


# =============================================================================
# Setup
# =============================================================================

def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None
) -> None:
    """
    Configure the root logger once at startup.

    Args:
        level: Log level name. Defaults to DEBUG when settings.DEBUG, else INFO.
        json_format: Emit JSON records. Defaults to settings.LOG_JSON.
    """
    if level is None:
        level = "DEBUG" if settings.DEBUG else "INFO"
    if json_format is None:
        json_format = settings.LOG_JSON

    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ColoredFormatter(
            fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
            datefmt="%H:%M:%S"
        ))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, typically ``get_logger(__name__)``."""
    return logging.getLogger(name)


# =============================================================================
# Convenience Functions
# =============================================================================

def log_api_call(
    service: str,
    endpoint: str,
    success: bool,
    duration_ms: Optional[float] = None,
    error: Optional[str] = None
) -> None:
    """
    Log an outbound call (Gemini, web-features download).

    Args:
        service: Name of the service (e.g., "Gemini", "web-features")
        endpoint: Model name or URL
        success: Whether the call succeeded
        duration_ms: Call duration in milliseconds
        error: Error message if failed
    """
    logger = get_logger("api")

    msg = f"{'✅' if success else '❌'} {service} | {endpoint}"
    if duration_ms is not None:
        msg += f" | {duration_ms:.0f}ms"

    extra = {
        "service": service,
        "endpoint": endpoint,
        "duration_ms": round(duration_ms) if duration_ms is not None else None,
    }
    if success:
        logger.info(msg, extra=extra)
    else:
        logger.error(f"{msg} | Error: {error}", extra={**extra, "details": error})


def log_agent_turn(
    agent: str,
    response_id: str,
    status: str,
    goal: Optional[str],
    details: Optional[str] = None
) -> None:
    """
    Log the outcome of one agent turn.

    Args:
        agent: Agent name (e.g., "OnboardingAgent")
        response_id: Id of the AgentResponse returned to the caller
        status: Response status (AWAITING_INPUT, COMPLETE, ...)
        goal: Goal carried by the returned context
        details: Free-form summary (state reached, fields changed, error type)
    """
    logger = get_logger("agent")

    msg = f"{'🔁' if status == 'ERROR' else '🤖'} {agent} | {status} | goal={goal} | {response_id}"
    if details:
        msg += f" | {details}"

    extra = {
        "agent": agent,
        "response_id": response_id,
        "status": status,
        "goal": goal,
        "details": details,
    }
    if status == "ERROR":
        logger.warning(msg, extra=extra)
    else:
        logger.info(msg, extra=extra)
