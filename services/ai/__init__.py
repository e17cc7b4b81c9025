# AI services module

from .llm_client import GeminiTextClient, TextGenerator
from .response_parser import parse_model_json
from .baseline import BaselineCssCache, get_baseline_cache
from .agents import OnboardingAgent, CodeGenerationAgent, EditingAgent
from .router import AgentRouter, Phase, resolve_phase, handle_turn

__all__ = [
    "GeminiTextClient",
    "TextGenerator",
    "parse_model_json",
    "BaselineCssCache",
    "get_baseline_cache",
    "OnboardingAgent",
    "CodeGenerationAgent",
    "EditingAgent",
    "AgentRouter",
    "Phase",
    "resolve_phase",
    "handle_turn",
]
