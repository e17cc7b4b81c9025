"""
FastAPI Dependencies Module

Provides dependency injection for services and shared state.
All service instances are singletons to reuse connections/resources.

Usage:
    from core.dependencies import get_agent_router
    
    @router.post("/api/airlane")
    async def turn(
        agent_router: AgentRouter = Depends(get_agent_router)
    ):
        ...
"""

from typing import Dict

from config.settings import settings
from utils.logging import get_logger

# Lazy imports to avoid circular dependencies
_text_client = None
_agent_router = None

logger = get_logger(__name__)


# =============================================================================
# Service Initialization
# =============================================================================

def _initialize_services() -> None:
    """
    Initialize all service singletons.
    
    Called lazily on first access to any service.
    Logs warnings if required API keys are missing.
    """
    global _text_client, _agent_router
    
    from services.ai.baseline import get_baseline_cache
    from services.ai.llm_client import GeminiTextClient
    from services.ai.router import AgentRouter
    
    if not settings.GOOGLE_API_KEY:
        logger.warning("GOOGLE_API_KEY not configured - only the fixed greeting turn will work")
    
    _text_client = GeminiTextClient()
    _agent_router = AgentRouter.from_client(_text_client, baseline_cache=get_baseline_cache())
    
    logger.info("Services initialized successfully")


def _ensure_initialized() -> None:
    """Ensure services are initialized."""
    if _agent_router is None:
        _initialize_services()


# =============================================================================
# Service Providers
# =============================================================================

def get_agent_router():
    """
    Get AgentRouter singleton.
    
    Returns:
        AgentRouter: Router wired to the shared client and baseline cache
    """
    _ensure_initialized()
    return _agent_router


def get_initialized_services() -> Dict[str, bool]:
    """Report which lazy singletons exist, for the health endpoint."""
    from services.ai.baseline import get_baseline_cache
    
    return {
        "text_client": _text_client is not None,
        "agent_router": _agent_router is not None,
        "baseline_cache_loaded": get_baseline_cache().is_loaded,
    }
