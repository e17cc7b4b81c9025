"""
Agents Package

The three conversation agents dispatched by the router.
"""

from services.ai.agents.onboarding_agent import OnboardingAgent, OnboardingReply
from services.ai.agents.code_generation_agent import CodeGenerationAgent
from services.ai.agents.editing_agent import EditingAgent

__all__ = [
    'OnboardingAgent',
    'OnboardingReply',
    'CodeGenerationAgent',
    'EditingAgent',
]
