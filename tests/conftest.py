"""
Test Configuration

Pytest configuration and shared fixtures for all tests.
"""

import json
import pytest
from typing import AsyncGenerator, List, Optional
from httpx import AsyncClient, ASGITransport

from services.ai.baseline import BaselineCssCache
from services.ai.models import ConversationContext, GeneratedCode, Goal, OnboardingState, Speaker


class StubTextGenerator:
    """Text generator double: returns queued replies or raises a fixed error."""
    
    def __init__(self, replies: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.replies = list(replies or [])
        self.error = error
        self.prompts: List[str] = []
    
    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0)


@pytest.fixture
def make_llm():
    """Factory for StubTextGenerator instances."""
    return StubTextGenerator


@pytest.fixture
def web_features_file(tmp_path):
    """Small web-features dataset in the current layout."""
    data = {
        "features": {
            "grid": {
                "status": {"baseline": "high"},
                "compat_features": [
                    "css.properties.grid-template-columns",
                    "css.properties.grid-template-columns.subgrid",
                    "css.properties.gap",
                ],
            },
            "flexbox": {
                "status": {"baseline": "high"},
                "compat_features": ["css.properties.display.flex", "css.properties.flex-wrap"],
            },
            "anchor-positioning": {
                "status": {"baseline": False},
                "compat_features": ["css.properties.anchor-name"],
            },
            "dialog": {
                "status": {"baseline": "low"},
                "compat_features": ["html.elements.dialog"],
            },
        },
        "groups": {},
    }
    path = tmp_path / "web-features.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def baseline_cache(web_features_file):
    """Baseline cache backed by the sample dataset."""
    return BaselineCssCache(path=str(web_features_file))


@pytest.fixture
def empty_baseline_cache(tmp_path):
    """Baseline cache pointing at a file that does not exist."""
    return BaselineCssCache(path=str(tmp_path / "missing.json"))


@pytest.fixture
def sample_brief():
    """Completed brief as produced by the interview."""
    return {
        "business_name": "Galaxy Brew Coffee",
        "business_description": "Single-origin cold brew delivered weekly",
        "business_story": "Started by two astronomers who loved late-night coffee",
        "target_audience": "Remote workers and night owls",
        "key_features": ["Weekly delivery", "Cold brew", "Compostable packaging"],
        "style_preference": "Playful & Vibrant",
        "brand_colors": ["#1B1464", "#F7B731"],
        "contact_info": "hello@galaxybrew.example",
    }


@pytest.fixture
def interview_context():
    """Context in the middle of the interview."""
    return ConversationContext(
        history=[
            (Speaker.AGENT, "Hello! What is the name of your business?"),
            (Speaker.USER, "Galaxy Brew Coffee"),
            (Speaker.AGENT, "Love it! What do you sell?"),
        ],
        collected_info={"business_name": "Galaxy Brew Coffee"},
        goal=Goal.ONBOARD_USER.value,
        onboarding_state=OnboardingState.CORE_INFO,
    )


@pytest.fixture
def generation_context(sample_brief):
    """Context right after the interview handed off."""
    return ConversationContext(
        history=[(Speaker.AGENT, "Amazing! Building your page now...")],
        collected_info=sample_brief,
        goal=Goal.GENERATE_LANDING_PAGE.value,
        onboarding_state=OnboardingState.FINALIZING,
    )


@pytest.fixture
def edit_context(sample_brief):
    """Context of a conversation in edit mode."""
    return ConversationContext(
        history=[(Speaker.AGENT, "Here is the live preview!")],
        collected_info=sample_brief,
        goal=Goal.EDIT_CODE.value,
        onboarding_state=OnboardingState.FINALIZING,
    )


@pytest.fixture
def sample_code():
    """Minimal artifact."""
    return GeneratedCode(html="<p>A</p>", css="p{color:red}", js="")


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Get async test client for API testing."""
    from main import app
    
    transport = ASGITransport(app=app)
    
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    
    app.dependency_overrides.clear()
