"""
Prompts Package

LLM prompt engineering for the interview, generation and editing agents.
"""

from services.ai.prompts.onboarding_prompts import (
    ONBOARDING_SYSTEM_PROMPT,
    build_onboarding_prompt,
)
from services.ai.prompts.generation_prompts import build_generation_prompt
from services.ai.prompts.editing_prompts import build_editing_prompt

__all__ = [
    'ONBOARDING_SYSTEM_PROMPT',
    'build_onboarding_prompt',
    'build_generation_prompt',
    'build_editing_prompt',
]
