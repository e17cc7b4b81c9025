"""
Onboarding Agent

Runs the five-state interview (GREETING -> CORE_INFO -> DEEP_DIVE -> BRANDING
-> FINALIZING) that fills ``collected_info``. Each turn asks the model for
``{speech, ui, updated_data, next_state}``; the model owns the transition
decision and the agent only enforces the reply contract.

Handoff to code generation happens through the returned context alone:
reaching FINALIZING sets ``goal`` to ``generate_landing_page``.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from config.constants import (
    ONBOARDING_HISTORY_WINDOW,
    RESPONSE_ID_ONBOARDING,
    RESPONSE_ID_ONBOARDING_COMPLETE,
    RESPONSE_ID_ONBOARDING_ERROR,
    RESPONSE_ID_ONBOARDING_INIT,
)
from services.ai.llm_client import TextGenerator
from services.ai.models import (
    AgentResponse,
    ConversationContext,
    DelegateAction,
    Goal,
    KeyValueDisplayUI,
    OnboardingState,
    RequestUserInputAction,
    ResponseStatus,
    Speaker,
    TextInputUI,
    UIComponent,
    new_response_id,
)
from services.ai.prompts.onboarding_prompts import (
    HANDOFF_SPEECH,
    RETRY_SPEECH,
    WELCOME_INPUT_PROPS,
    WELCOME_SPEECH,
    build_onboarding_prompt,
)
from services.ai.response_parser import parse_model_json
from utils.exceptions import MalformedModelOutput
from utils.logging import get_logger, log_agent_turn

logger = get_logger(__name__)


class OnboardingReply(BaseModel):
    """Contract for one interview reply from the model."""
    speech: str
    ui: Optional[UIComponent] = None
    updated_data: Dict[str, Any] = Field(default_factory=dict)
    next_state: OnboardingState

    @field_validator("updated_data", mode="before")
    @classmethod
    def _empty_when_null(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def from_model_output(cls, data: Dict[str, Any]) -> "OnboardingReply":
        """
        Validate a parsed reply.
        
        Raises:
            MalformedModelOutput: On a missing key, unknown ui tag or unknown state
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise MalformedModelOutput(
                message=f"Interview reply broke the contract in: {', '.join(fields) or 'root'}",
                details={"fields": fields},
            ) from e


class OnboardingAgent:
    """
    Interview agent that collects the business brief.
    
    Attributes:
        llm: Text generator used for every turn after turn 0
    """
    
    name = "OnboardingAgent"
    
    def __init__(self, llm: TextGenerator):
        self.llm = llm
    
    async def execute(
        self,
        prompt: str,
        context: Optional[ConversationContext]
    ) -> AgentResponse:
        """
        Run one interview turn.
        
        Args:
            prompt: The user's latest message
            context: Context from the previous turn, or None on first contact
            
        Returns:
            AgentResponse: AWAITING_INPUT for another question, PROCESSING on
            handoff. Failures return the incoming context untouched.
        """
        if context is None:
            logger.info("No context supplied - starting a new conversation")
            return self.initiate_conversation()
        
        current_state = context.onboarding_state or OnboardingState.GREETING
        logger.info(
            f"Interview turn in state {current_state.value} "
            f"(history={len(context.history)}, collected={sorted(context.collected_info)})"
        )
        
        try:
            return await self._converse(prompt, context, current_state)
        except Exception as e:
            logger.error(f"Interview turn failed in state {current_state.value}: {e}", exc_info=True)
            response = AgentResponse(
                id=new_response_id(RESPONSE_ID_ONBOARDING_ERROR),
                status=ResponseStatus.AWAITING_INPUT,
                speech=RETRY_SPEECH,
                ui=None,
                action=RequestUserInputAction(),
                context=context,
            )
            log_agent_turn(self.name, response.id, response.status.value, context.goal,
                           details=f"recovered from {type(e).__name__}")
            return response
    
    def initiate_conversation(self) -> AgentResponse:
        """Deterministic turn 0: fixed greeting, no model call."""
        context = ConversationContext(
            history=[(Speaker.AGENT, WELCOME_SPEECH)],
            collected_info={},
            goal=Goal.ONBOARD_USER.value,
            onboarding_state=OnboardingState.GREETING,
        )
        response = AgentResponse(
            id=new_response_id(RESPONSE_ID_ONBOARDING_INIT),
            status=ResponseStatus.AWAITING_INPUT,
            speech=WELCOME_SPEECH,
            ui=TextInputUI.model_validate({"type": "TEXT_INPUT", "props": WELCOME_INPUT_PROPS}),
            action=RequestUserInputAction(),
            context=context,
        )
        log_agent_turn(self.name, response.id, response.status.value, context.goal, details="turn 0")
        return response
    
    async def _converse(
        self,
        prompt: str,
        context: ConversationContext,
        current_state: OnboardingState
    ) -> AgentResponse:
        user_entry = (Speaker.USER, prompt)
        window = [*context.recent_history(ONBOARDING_HISTORY_WINDOW - 1), user_entry]
        
        raw_text = await self.llm.generate(
            build_onboarding_prompt(current_state, context.collected_info, window)
        )
        reply = OnboardingReply.from_model_output(parse_model_json(raw_text))
        
        updated_context = context.with_history(
            user_entry,
            (Speaker.AGENT, reply.speech),
            collected_info=context.merge_collected_info(reply.updated_data),
            goal=Goal.ONBOARD_USER.value,
            onboarding_state=reply.next_state,
        )
        logger.info(f"State transition: {current_state.value} -> {reply.next_state.value}")
        
        if reply.next_state.is_terminal:
            return self._complete_interview(updated_context)
        
        response = AgentResponse(
            id=new_response_id(RESPONSE_ID_ONBOARDING),
            status=ResponseStatus.AWAITING_INPUT,
            speech=reply.speech,
            ui=reply.ui,
            action=RequestUserInputAction(),
            context=updated_context,
        )
        log_agent_turn(self.name, response.id, response.status.value, updated_context.goal,
                       details=f"state={reply.next_state.value}")
        return response
    
    def _complete_interview(self, context: ConversationContext) -> AgentResponse:
        """Hand the brief to code generation by switching the goal."""
        handoff_context = context.with_history(
            (Speaker.AGENT, HANDOFF_SPEECH),
            goal=Goal.GENERATE_LANDING_PAGE.value,
            onboarding_state=OnboardingState.FINALIZING,
        )
        summary = KeyValueDisplayUI.model_validate({
            "type": "KEY_VALUE_DISPLAY",
            "props": {
                "title": "Brief Complete!",
                "items": [
                    {"key": "Project Name", "value": context.collected_info.get("business_name") or "N/A"},
                    {"key": "Status", "value": "Generating your website..."},
                ],
            },
        })
        response = AgentResponse(
            id=new_response_id(RESPONSE_ID_ONBOARDING_COMPLETE),
            status=ResponseStatus.PROCESSING,
            speech=HANDOFF_SPEECH,
            ui=summary,
            action=DelegateAction(),
            context=handoff_context,
        )
        log_agent_turn(self.name, response.id, response.status.value, handoff_context.goal,
                       details="interview complete, delegating")
        return response
