"""
Models Package

Response contract shared by the router and every agent.
"""

from services.ai.models.context import (
    ConversationContext,
    Goal,
    HistoryEntry,
    OnboardingState,
    Speaker,
)
from services.ai.models.artifact import GeneratedCode
from services.ai.models.ui import (
    AgentAction,
    ButtonGroupUI,
    ColorPickerUI,
    DelegateAction,
    GenerationCompleteAction,
    KeyValueDisplayUI,
    LoadingUI,
    MultiSelectUI,
    RequestUserInputAction,
    TextAreaInputUI,
    TextInputUI,
    UIComponent,
)
from services.ai.models.response import AgentResponse, ResponseStatus, new_response_id

__all__ = [
    'ConversationContext',
    'Goal',
    'HistoryEntry',
    'OnboardingState',
    'Speaker',
    'GeneratedCode',
    'AgentAction',
    'ButtonGroupUI',
    'ColorPickerUI',
    'DelegateAction',
    'GenerationCompleteAction',
    'KeyValueDisplayUI',
    'LoadingUI',
    'MultiSelectUI',
    'RequestUserInputAction',
    'TextAreaInputUI',
    'TextInputUI',
    'UIComponent',
    'AgentResponse',
    'ResponseStatus',
    'new_response_id',
]
