"""
Unit Tests for the Onboarding Agent

Covers the deterministic first turn, the per-turn reply contract, the
FINALIZING handoff and the failure path that leaves context untouched.
"""

import json
import pytest

from services.ai.agents import OnboardingAgent
from services.ai.models import (
    ConversationContext,
    Goal,
    OnboardingState,
    ResponseStatus,
    Speaker,
)
from services.ai.prompts.onboarding_prompts import HANDOFF_SPEECH, WELCOME_SPEECH
from utils.exceptions import AIServiceError, GenerationTimeout


def _reply(**overrides):
    data = {
        "speech": "Cold brew, amazing! Who usually buys from you?",
        "ui": {"type": "TEXT_AREA_INPUT", "props": {"title": "Your Audience"}},
        "updated_data": {"business_description": "Cold brew subscription"},
        "next_state": "CORE_INFO",
    }
    data.update(overrides)
    return json.dumps(data)


# =============================================================================
# Turn 0
# =============================================================================

class TestFirstTurn:
    """Null context starts the conversation without the model."""
    
    @pytest.mark.asyncio
    async def test_greeting_is_deterministic(self, make_llm):
        llm = make_llm()
        agent = OnboardingAgent(llm)
        
        response = await agent.execute("", None)
        
        assert llm.prompts == []
        assert response.status is ResponseStatus.AWAITING_INPUT
        assert response.speech == WELCOME_SPEECH
        assert response.ui.type == "TEXT_INPUT"
        assert response.action.type == "REQUEST_USER_INPUT"
        assert response.context.goal == Goal.ONBOARD_USER.value
        assert response.context.onboarding_state is OnboardingState.GREETING
        assert response.context.history == [(Speaker.AGENT, WELCOME_SPEECH)]
        assert response.context.collected_info == {}
    
    @pytest.mark.asyncio
    async def test_prompt_is_ignored_on_first_turn(self, make_llm):
        agent = OnboardingAgent(make_llm())
        
        first = await agent.execute("Hello there", None)
        second = await agent.execute("", None)
        
        assert first.context == second.context
        assert first.id != second.id


# =============================================================================
# Interview Turns
# =============================================================================

class TestInterviewTurn:
    """Successful turns follow the model's decision."""
    
    @pytest.mark.asyncio
    async def test_follow_up_merges_data_and_extends_history(self, make_llm, interview_context):
        llm = make_llm(replies=[_reply()])
        agent = OnboardingAgent(llm)
        
        response = await agent.execute("We sell cold brew subscriptions", interview_context)
        
        assert response.status is ResponseStatus.AWAITING_INPUT
        assert response.action.type == "REQUEST_USER_INPUT"
        assert response.ui.type == "TEXT_AREA_INPUT"
        assert response.context.collected_info == {
            "business_name": "Galaxy Brew Coffee",
            "business_description": "Cold brew subscription",
        }
        assert response.context.history[-2:] == [
            (Speaker.USER, "We sell cold brew subscriptions"),
            (Speaker.AGENT, "Cold brew, amazing! Who usually buys from you?"),
        ]
        assert response.context.onboarding_state is OnboardingState.CORE_INFO
        assert response.context.goal == Goal.ONBOARD_USER.value
    
    @pytest.mark.asyncio
    async def test_advances_to_state_chosen_by_model(self, make_llm, interview_context):
        agent = OnboardingAgent(make_llm(replies=[_reply(next_state="DEEP_DIVE")]))
        
        response = await agent.execute("Remote workers", interview_context)
        
        assert response.context.onboarding_state is OnboardingState.DEEP_DIVE
    
    @pytest.mark.asyncio
    async def test_later_values_overwrite_earlier(self, make_llm, interview_context):
        agent = OnboardingAgent(make_llm(replies=[
            _reply(updated_data={"business_name": "Galaxy Brew Co."}),
        ]))
        
        response = await agent.execute("Actually it's Galaxy Brew Co.", interview_context)
        
        assert response.context.collected_info["business_name"] == "Galaxy Brew Co."
    
    @pytest.mark.asyncio
    async def test_null_ui_and_data_are_accepted(self, make_llm, interview_context):
        agent = OnboardingAgent(make_llm(replies=[_reply(ui=None, updated_data=None)]))
        
        response = await agent.execute("Not sure", interview_context)
        
        assert response.status is ResponseStatus.AWAITING_INPUT
        assert response.ui is None
        assert response.context.collected_info == interview_context.collected_info
    
    @pytest.mark.asyncio
    async def test_prompt_carries_state_data_and_recent_history(self, make_llm):
        history = [(Speaker.AGENT if i % 2 else Speaker.USER, f"message {i}") for i in range(10)]
        context = ConversationContext(
            history=history,
            collected_info={"business_name": "Galaxy Brew Coffee"},
            goal=Goal.ONBOARD_USER.value,
            onboarding_state=OnboardingState.BRANDING,
        )
        llm = make_llm(replies=[_reply(next_state="BRANDING")])
        
        await OnboardingAgent(llm).execute("latest answer", context)
        
        prompt = llm.prompts[0]
        assert "Current State: BRANDING" in prompt
        assert "Galaxy Brew Coffee" in prompt
        assert "latest answer" in prompt
        assert "message 5" in prompt
        assert "message 9" in prompt
        assert "message 4" not in prompt
    
    @pytest.mark.asyncio
    async def test_missing_state_defaults_to_greeting(self, make_llm):
        context = ConversationContext(history=[(Speaker.AGENT, "Hi!")], goal=None)
        llm = make_llm(replies=[_reply()])
        
        response = await OnboardingAgent(llm).execute("Galaxy Brew", context)
        
        assert "Current State: GREETING" in llm.prompts[0]
        assert response.context.goal == Goal.ONBOARD_USER.value
    
    @pytest.mark.asyncio
    async def test_input_context_is_not_mutated(self, make_llm, interview_context):
        before = interview_context.model_dump_json()
        agent = OnboardingAgent(make_llm(replies=[_reply()]))
        
        await agent.execute("We sell cold brew", interview_context)
        
        assert interview_context.model_dump_json() == before


# =============================================================================
# Handoff
# =============================================================================

class TestFinalizing:
    """Reaching FINALIZING hands the brief to code generation."""
    
    @pytest.mark.asyncio
    async def test_handoff_response(self, make_llm, interview_context):
        agent = OnboardingAgent(make_llm(replies=[
            _reply(speech="Perfect, that's everything!", next_state="FINALIZING",
                   updated_data={"brand_colors": ["#1B1464"]}),
        ]))
        
        response = await agent.execute("Navy blue please, and let's build it", interview_context)
        
        assert response.status is ResponseStatus.PROCESSING
        assert response.action.type == "DELEGATE"
        assert response.context.goal == Goal.GENERATE_LANDING_PAGE.value
        assert response.context.onboarding_state is OnboardingState.FINALIZING
        assert response.context.collected_info["brand_colors"] == ["#1B1464"]
        assert response.speech == HANDOFF_SPEECH
        assert response.ui.type == "KEY_VALUE_DISPLAY"
        assert response.ui.props.items[0].value == "Galaxy Brew Coffee"
        assert response.context.history[-3:] == [
            (Speaker.USER, "Navy blue please, and let's build it"),
            (Speaker.AGENT, "Perfect, that's everything!"),
            (Speaker.AGENT, HANDOFF_SPEECH),
        ]
    
    @pytest.mark.asyncio
    async def test_early_exit_from_any_state(self, make_llm):
        """The user may stop answering at any point; the model signals it."""
        context = ConversationContext(
            history=[(Speaker.AGENT, "Hi!")],
            goal=Goal.ONBOARD_USER.value,
            onboarding_state=OnboardingState.GREETING,
        )
        agent = OnboardingAgent(make_llm(replies=[
            _reply(next_state="FINALIZING", updated_data={"business_name": "Rush Job"}),
        ]))
        
        response = await agent.execute("Rush Job. No more questions, just build it.", context)
        
        assert response.status is ResponseStatus.PROCESSING
        assert response.context.goal == Goal.GENERATE_LANDING_PAGE.value


# =============================================================================
# Failure Path
# =============================================================================

class TestFailedTurn:
    """Failures return the incoming context untouched."""
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        AIServiceError(message="quota exceeded"),
        GenerationTimeout(90),
        RuntimeError("socket closed"),
    ])
    async def test_generation_error(self, make_llm, interview_context, error):
        before = interview_context.model_dump_json()
        agent = OnboardingAgent(make_llm(error=error))
        
        response = await agent.execute("We sell cold brew", interview_context)
        
        assert response.status is ResponseStatus.AWAITING_INPUT
        assert response.ui is None
        assert response.speech
        assert response.context is interview_context
        assert response.context.model_dump_json() == before
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [
        "Sorry, I can't help with that.",
        '{"speech": "hi", "next_state": }',
        _reply(next_state="SMALL_TALK"),
        _reply(ui={"type": "SLIDER", "props": {}}),
        json.dumps({"ui": None, "updated_data": {}, "next_state": "CORE_INFO"}),
        _reply(updated_data=["not", "a", "mapping"]),
    ])
    async def test_contract_violation(self, make_llm, interview_context, raw):
        before = interview_context.model_dump_json()
        agent = OnboardingAgent(make_llm(replies=[raw]))
        
        response = await agent.execute("We sell cold brew", interview_context)
        
        assert response.status is ResponseStatus.AWAITING_INPUT
        assert response.ui is None
        assert response.context.model_dump_json() == before
    
    @pytest.mark.asyncio
    async def test_error_responses_get_distinct_ids(self, make_llm, interview_context):
        agent = OnboardingAgent(make_llm(error=RuntimeError("down")))
        
        first = await agent.execute("a", interview_context)
        second = await agent.execute("a", interview_context)
        
        assert first.id != second.id
