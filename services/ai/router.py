"""
Agent Router

Dispatches each turn to exactly one agent based on ``context.goal``. The goal
is mapped to an explicit Phase through a single table; anything the table
does not know falls back to onboarding.

    goal                              phase            precondition
    --------------------------------  ---------------  -------------------
    edit_code                         EDITING          generated code given
    generate_landing_page             CODE_GENERATION  -
    onboard_user / null / completed   ONBOARDING       -
    anything else                     ONBOARDING       -

Usage:
    from services.ai.router import handle_turn
    
    response = await handle_turn("Galaxy Brew Coffee", context)
"""

from enum import Enum
from typing import Dict, Optional

from services.ai.agents import CodeGenerationAgent, EditingAgent, OnboardingAgent
from services.ai.baseline import BaselineCssCache
from services.ai.llm_client import TextGenerator
from services.ai.models import AgentResponse, ConversationContext, GeneratedCode, Goal
from utils.exceptions import AgentRouterError, MissingArtifact
from utils.logging import get_logger

logger = get_logger(__name__)


class Phase(str, Enum):
    """Which agent owns the turn."""
    ONBOARDING = "onboarding"
    CODE_GENERATION = "code_generation"
    EDITING = "editing"


PHASE_BY_GOAL: Dict[Optional[str], Phase] = {
    None: Phase.ONBOARDING,
    Goal.ONBOARD_USER.value: Phase.ONBOARDING,
    Goal.COMPLETED.value: Phase.ONBOARDING,
    Goal.GENERATE_LANDING_PAGE.value: Phase.CODE_GENERATION,
    Goal.EDIT_CODE.value: Phase.EDITING,
}


def resolve_phase(context: Optional[ConversationContext]) -> Phase:
    """Derive the phase for a turn; unrecognized goals resolve to onboarding."""
    goal = context.goal if context is not None else None
    phase = PHASE_BY_GOAL.get(goal)
    if phase is None:
        logger.warning(f"Unrecognized goal {goal!r} - falling back to onboarding")
        return Phase.ONBOARDING
    return phase


class AgentRouter:
    """
    Stateless dispatcher over the three agents.
    
    Agents translate their own failures into responses. Anything that still
    escapes is wrapped in AgentRouterError, the generic internal error.
    """
    
    def __init__(
        self,
        onboarding_agent: OnboardingAgent,
        code_generation_agent: CodeGenerationAgent,
        editing_agent: EditingAgent,
    ):
        self.onboarding_agent = onboarding_agent
        self.code_generation_agent = code_generation_agent
        self.editing_agent = editing_agent
    
    @classmethod
    def from_client(
        cls,
        llm: TextGenerator,
        baseline_cache: Optional[BaselineCssCache] = None
    ) -> "AgentRouter":
        """Build a router whose agents share one text generator."""
        return cls(
            onboarding_agent=OnboardingAgent(llm),
            code_generation_agent=CodeGenerationAgent(llm, baseline_cache=baseline_cache),
            editing_agent=EditingAgent(llm),
        )
    
    async def route(
        self,
        prompt: str,
        context: Optional[ConversationContext],
        generated_code: Optional[GeneratedCode] = None
    ) -> AgentResponse:
        """
        Dispatch one turn.
        
        Args:
            prompt: The user's message (may be empty on turn 0)
            context: Context returned by the previous turn, or None
            generated_code: Current artifact; required when goal is edit_code
            
        Returns:
            AgentResponse from the selected agent
            
        Raises:
            MissingArtifact: goal is edit_code but no artifact was supplied
            AgentRouterError: an agent raised instead of returning a response
        """
        phase = resolve_phase(context)
        
        if phase is Phase.EDITING and generated_code is None:
            logger.error("Goal is 'edit_code' but no generated code was supplied")
            raise MissingArtifact()
        
        agent_name = {
            Phase.EDITING: EditingAgent.name,
            Phase.CODE_GENERATION: CodeGenerationAgent.name,
            Phase.ONBOARDING: OnboardingAgent.name,
        }[phase]
        logger.info(f"Phase is {phase.value}. Delegating to {agent_name}.")
        
        try:
            if phase is Phase.EDITING:
                return await self.editing_agent.execute(prompt, context, generated_code)
            if phase is Phase.CODE_GENERATION:
                return await self.code_generation_agent.execute(context)
            return await self.onboarding_agent.execute(prompt, context)
        except Exception as e:
            logger.error(f"{agent_name} raised past its own error handling: {e}", exc_info=True)
            raise AgentRouterError(agent=agent_name) from e


async def handle_turn(
    prompt: str,
    context: Optional[ConversationContext],
    generated_code: Optional[GeneratedCode] = None
) -> AgentResponse:
    """
    Entry point for one turn, using the process-wide router.
    
    Stateless between calls: all continuity comes from the context the
    caller persisted from the previous response.
    """
    from core.dependencies import get_agent_router
    
    return await get_agent_router().route(prompt, context, generated_code)
