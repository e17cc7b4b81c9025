"""
Utilities Module

Provides shared utilities across the application:
- Logging configuration
- Custom exceptions
"""

from .logging import get_logger, setup_logging, log_api_call, log_agent_turn
from .exceptions import (
    AirlaneError,
    MalformedModelOutput,
    IncompleteArtifact,
    MissingArtifact,
    AgentRouterError,
    AIServiceError,
    GenerationTimeout,
    ServiceUnavailable,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_agent_turn",
    "AirlaneError",
    "MalformedModelOutput",
    "IncompleteArtifact",
    "MissingArtifact",
    "AgentRouterError",
    "AIServiceError",
    "GenerationTimeout",
    "ServiceUnavailable",
]
