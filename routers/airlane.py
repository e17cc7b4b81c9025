"""
Airlane Router

HTTP shim over the agent router. The request carries everything the turn
needs; nothing is stored server-side between calls.

Endpoints:
    POST /api/airlane - Run one conversation turn
    POST /api/airlane/preview - Assemble an artifact into a standalone page
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional

from core.dependencies import get_agent_router
from services.ai.models import ConversationContext, GeneratedCode
from services.ai.router import AgentRouter
from utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/airlane", tags=["Agent Router"])


# =============================================================================
# Pydantic Models
# =============================================================================

class TurnRequest(BaseModel):
    """One conversation turn as sent by the client."""
    model_config = ConfigDict(populate_by_name=True)
    
    prompt: str = ""
    context: Optional[ConversationContext] = None
    generated_code: Optional[GeneratedCode] = Field(default=None, alias="generatedCode")


# =============================================================================
# Endpoints
# =============================================================================

@router.post(
    "",
    summary="Run a conversation turn",
    description="Dispatch the prompt to the agent selected by context.goal"
)
async def run_turn(
    request: TurnRequest,
    agent_router: AgentRouter = Depends(get_agent_router)
) -> Dict[str, Any]:
    """
    Route one turn and return the AgentResponse.
    
    Router-level failures (MissingArtifact, AgentRouterError) propagate to
    the application's AirlaneError handler and become a 500 payload.
    """
    logger.debug(
        f"Turn received (goal={request.context.goal if request.context else None}, "
        f"has_code={request.generated_code is not None})"
    )
    response = await agent_router.route(
        request.prompt,
        request.context,
        request.generated_code,
    )
    return response.to_dict()


@router.post(
    "/preview",
    response_class=HTMLResponse,
    summary="Preview generated code",
)
async def preview(code: GeneratedCode) -> HTMLResponse:
    """Wrap html/css/js into one document for an iframe srcdoc."""
    return HTMLResponse(content=code.to_document())
