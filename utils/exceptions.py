"""
Custom Exceptions Module

Defines application-specific exceptions for clearer error handling.
All exceptions inherit from a base AirlaneError for easy catching.

Usage:
    from utils.exceptions import MalformedModelOutput, IncompleteArtifact
    
    try:
        data = parse_model_json(raw_text)
    except MalformedModelOutput as e:
        logger.error(f"Parsing failed: {e}")
"""

from typing import Optional, Dict, Any


class AirlaneError(Exception):
    """
    Base exception for all Airlane application errors.
    
    Attributes:
        message: Human-readable error message
        details: Additional error details (optional)
        status_code: HTTP status code to return (optional)
    """
    
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


# =============================================================================
# Model Output Exceptions
# =============================================================================

class MalformedModelOutput(AirlaneError):
    """
    Raised when a generation reply cannot be turned into the expected JSON.
    
    Common causes:
        - No '{' ... '}' span in the reply
        - Invalid JSON between the outermost braces
        - A reply that breaks the agent's contract (unknown ui tag or state)
    """
    
    def __init__(
        self,
        message: str = "Model output could not be parsed",
        raw_text: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"raw_preview": raw_text[:120] if raw_text else None, **(details or {})},
            status_code=502
        )


class IncompleteArtifact(AirlaneError):
    """
    Raised when parsed code output lacks one of html, css or js as a string.
    
    Empty strings are valid; missing keys and non-string values are not.
    """
    
    def __init__(
        self,
        message: str = "Generated code is missing required fields",
        missing: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"missing": missing or [], **(details or {})},
            status_code=502
        )


# =============================================================================
# Routing Exceptions
# =============================================================================

class MissingArtifact(AirlaneError):
    """
    Raised when an edit is requested but the caller supplied no generated code.
    
    This is a caller precondition violation and is reported as an internal error.
    """
    
    def __init__(
        self,
        message: str = "Cannot edit code when 'generatedCode' is not provided.",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details=details,
            status_code=500
        )


class AgentRouterError(AirlaneError):
    """
    Raised when a dispatched agent lets an unexpected exception escape.
    
    The original cause is chained; the payload stays generic.
    """
    
    def __init__(
        self,
        message: str = "An internal server error occurred in the agent router.",
        agent: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"agent": agent, **(details or {})},
            status_code=500
        )


# =============================================================================
# External Service Exceptions
# =============================================================================

class AIServiceError(AirlaneError):
    """
    Raised when the generation service call fails.
    
    Common causes:
        - Gemini API error
        - Missing or invalid API key
        - Rate limit exceeded
    """
    
    def __init__(
        self,
        message: str = "AI service error",
        service: str = "gemini",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"service": service, **(details or {})},
            status_code=502
        )


class GenerationTimeout(AIServiceError):
    """Raised when a generation call exceeds its deadline."""
    
    def __init__(
        self,
        timeout_seconds: float,
        service: str = "gemini"
    ):
        super().__init__(
            message=f"Generation call exceeded {timeout_seconds:.0f}s deadline",
            service=service,
            details={"timeout_seconds": timeout_seconds}
        )
        self.status_code = 504


class ServiceUnavailable(AirlaneError):
    """
    Raised when the baseline capability dataset cannot be loaded.
    
    Never reaches the caller: the capability filter degrades to an empty set.
    """
    
    def __init__(
        self,
        message: str = "Baseline capability dataset unavailable",
        source: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"source": source, **(details or {})},
            status_code=503
        )
