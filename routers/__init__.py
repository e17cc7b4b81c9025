"""
Routers Module

API routers for the Airlane application.
"""

from .airlane import router as airlane_router

__all__ = ["airlane_router"]
