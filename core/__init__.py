"""
Core Module

Shared dependency providers for the API layer.
"""

from .dependencies import get_agent_router, get_initialized_services

__all__ = ["get_agent_router", "get_initialized_services"]
