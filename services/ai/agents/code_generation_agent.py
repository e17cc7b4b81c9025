"""
Code Generation Agent

One-shot transformation of a completed brief into html/css/js. The prompt is
constrained by the Baseline CSS property set; a failed generation resets the
goal to onboarding so the retry re-enters through the router.
"""

from typing import Optional

from config.constants import RESPONSE_ID_CODEGEN, RESPONSE_ID_CODEGEN_ERROR
from services.ai.baseline import BaselineCssCache, get_baseline_cache
from services.ai.llm_client import TextGenerator
from services.ai.models import (
    AgentResponse,
    ButtonGroupUI,
    ConversationContext,
    GeneratedCode,
    GenerationCompleteAction,
    Goal,
    KeyValueDisplayUI,
    ResponseStatus,
    new_response_id,
)
from services.ai.prompts.generation_prompts import (
    GENERATION_COMPLETE_SPEECH,
    GENERATION_FAILED_SPEECH,
    RETRY_GENERATION_PAYLOAD,
    build_generation_prompt,
)
from services.ai.response_parser import parse_model_json
from utils.logging import get_logger, log_agent_turn

logger = get_logger(__name__)


class CodeGenerationAgent:
    """
    Builds the landing page from ``collected_info``.
    
    The brief is assumed complete; no further questions are asked.
    """
    
    name = "CodeGenerationAgent"
    
    def __init__(self, llm: TextGenerator, baseline_cache: Optional[BaselineCssCache] = None):
        self.llm = llm
        self.baseline_cache = baseline_cache or get_baseline_cache()
    
    async def execute(self, context: ConversationContext) -> AgentResponse:
        """
        Generate the artifact for the brief in ``context``.
        
        Returns:
            AgentResponse: COMPLETE with GENERATION_COMPLETE on success,
            ERROR with a retry button (goal reset to onboard_user) on failure.
        """
        brief = context.collected_info
        
        try:
            baseline_properties = await self.baseline_cache.get_properties()
            logger.info(
                f"Generating landing page for {brief.get('business_name') or 'unnamed project'} "
                f"with {len(baseline_properties)} Baseline CSS properties"
            )
            raw_text = await self.llm.generate(
                build_generation_prompt(brief, baseline_properties)
            )
            code = GeneratedCode.from_model_output(parse_model_json(raw_text))
        except Exception as e:
            logger.error(f"Code generation failed: {e}", exc_info=True)
            return self._failure_response(context, e)
        
        summary = KeyValueDisplayUI.model_validate({
            "type": "KEY_VALUE_DISPLAY",
            "props": {
                "title": "Generation Complete!",
                "items": [
                    {"key": "Project", "value": brief.get("business_name") or "N/A"},
                    {"key": "Style", "value": brief.get("style_preference") or "N/A"},
                    {"key": "Status", "value": "Live Preview Ready"},
                ],
            },
        })
        completed_context = context.model_copy(update={"goal": Goal.COMPLETED.value})
        response = AgentResponse(
            id=new_response_id(RESPONSE_ID_CODEGEN),
            status=ResponseStatus.COMPLETE,
            speech=GENERATION_COMPLETE_SPEECH,
            ui=summary,
            action=GenerationCompleteAction(payload=code),
            context=completed_context,
        )
        log_agent_turn(
            self.name, response.id, response.status.value, completed_context.goal,
            details=f"html={len(code.html)} css={len(code.css)} js={len(code.js)} chars",
        )
        return response
    
    def _failure_response(self, context: ConversationContext, error: Exception) -> AgentResponse:
        retry_context = context.model_copy(update={"goal": Goal.ONBOARD_USER.value})
        response = AgentResponse(
            id=new_response_id(RESPONSE_ID_CODEGEN_ERROR),
            status=ResponseStatus.ERROR,
            speech=GENERATION_FAILED_SPEECH,
            ui=ButtonGroupUI.model_validate({
                "type": "BUTTON_GROUP",
                "props": {"buttons": [
                    {"text": "Retry Generation", "payload": RETRY_GENERATION_PAYLOAD},
                ]},
            }),
            action=None,
            context=retry_context,
        )
        log_agent_turn(self.name, response.id, response.status.value, retry_context.goal,
                       details=type(error).__name__)
        return response
