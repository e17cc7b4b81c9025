"""
Editing Agent

Applies a plain-language change request to an existing artifact. Both
successful and failed attempts are recorded in history so the edit
conversation keeps its thread; the goal stays ``edit_code`` either way.
"""

from config.constants import RESPONSE_ID_EDIT, RESPONSE_ID_EDIT_ERROR
from services.ai.llm_client import TextGenerator
from services.ai.models.artifact import CODE_FIELDS
from services.ai.models import (
    AgentResponse,
    ConversationContext,
    GeneratedCode,
    GenerationCompleteAction,
    Goal,
    RequestUserInputAction,
    ResponseStatus,
    Speaker,
    new_response_id,
)
from services.ai.prompts.editing_prompts import (
    EDIT_CONFIRMATION_SPEECH,
    EDIT_FAILED_SPEECH,
    build_editing_prompt,
)
from services.ai.response_parser import parse_model_json
from utils.logging import get_logger, log_agent_turn

logger = get_logger(__name__)


class EditingAgent:
    """Minimal-diff editor for a GeneratedCode artifact."""
    
    name = "EditingAgent"
    
    def __init__(self, llm: TextGenerator):
        self.llm = llm
    
    async def execute(
        self,
        prompt: str,
        context: ConversationContext,
        current_code: GeneratedCode
    ) -> AgentResponse:
        """
        Execute a code modification request.
        
        Args:
            prompt: The user's edit request
            context: The current conversation context
            current_code: The artifact to modify (the router guarantees it is present)
            
        Returns:
            AgentResponse: COMPLETE with the full updated artifact, or
            AWAITING_INPUT asking the user to rephrase.
        """
        logger.info(f"Edit request: {prompt[:80]!r}")
        
        try:
            raw_text = await self.llm.generate(build_editing_prompt(prompt, current_code))
            modified_code = GeneratedCode.from_model_output(parse_model_json(raw_text))
        except Exception as e:
            logger.error(f"Code edit failed: {e}", exc_info=True)
            failed_context = context.with_history(
                (Speaker.USER, prompt),
                (Speaker.AGENT, EDIT_FAILED_SPEECH),
            )
            response = AgentResponse(
                id=new_response_id(RESPONSE_ID_EDIT_ERROR),
                status=ResponseStatus.AWAITING_INPUT,
                speech=EDIT_FAILED_SPEECH,
                ui=None,
                action=RequestUserInputAction(),
                context=failed_context,
            )
            log_agent_turn(self.name, response.id, response.status.value, failed_context.goal,
                           details=type(e).__name__)
            return response
        
        updated_context = context.with_history(
            (Speaker.USER, prompt),
            (Speaker.AGENT, EDIT_CONFIRMATION_SPEECH),
            goal=Goal.EDIT_CODE.value,
        )
        response = AgentResponse(
            id=new_response_id(RESPONSE_ID_EDIT),
            status=ResponseStatus.COMPLETE,
            speech=EDIT_CONFIRMATION_SPEECH,
            ui=None,
            action=GenerationCompleteAction(payload=modified_code),
            context=updated_context,
        )
        changed = [
            name for name in CODE_FIELDS
            if getattr(modified_code, name) != getattr(current_code, name)
        ]
        log_agent_turn(self.name, response.id, response.status.value, updated_context.goal,
                       details=f"changed={','.join(changed) or 'none'}")
        return response
