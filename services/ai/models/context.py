"""
Conversation Context Model

The context is the baton passed across every turn. The core never stores it;
the caller persists the returned context and sends it back on the next turn.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


class Speaker(str, Enum):
    """Author of a history entry."""
    USER = "user"
    AGENT = "agent"


class Goal(str, Enum):
    """Known values of ConversationContext.goal."""
    ONBOARD_USER = "onboard_user"
    GENERATE_LANDING_PAGE = "generate_landing_page"
    EDIT_CODE = "edit_code"
    COMPLETED = "completed"


class OnboardingState(str, Enum):
    """Interview states, in order. FINALIZING is terminal."""
    GREETING = "GREETING"
    CORE_INFO = "CORE_INFO"
    DEEP_DIVE = "DEEP_DIVE"
    BRANDING = "BRANDING"
    FINALIZING = "FINALIZING"

    @property
    def is_terminal(self) -> bool:
        return self is OnboardingState.FINALIZING


HistoryEntry = Tuple[Speaker, str]


class ConversationContext(BaseModel):
    """
    State threaded through every turn.
    
    Attributes:
        history: Chronological (speaker, message) pairs, append-only
        collected_info: Brief fields extracted so far (shallow-merged)
        goal: Routing key; unknown strings are kept and routed to onboarding
        onboarding_state: Interview progress while goal is onboard_user
    """
    history: List[HistoryEntry] = Field(default_factory=list)
    collected_info: Dict[str, Any] = Field(default_factory=dict)
    goal: Optional[str] = None
    onboarding_state: Optional[OnboardingState] = None

    def with_history(self, *entries: HistoryEntry, **updates: Any) -> "ConversationContext":
        """Return a copy with entries appended to history and fields replaced."""
        return self.model_copy(
            update={"history": [*self.history, *entries], **updates}
        )

    def merge_collected_info(self, updated_data: Dict[str, Any]) -> Dict[str, Any]:
        """Shallow merge; later values for the same key win."""
        return {**self.collected_info, **updated_data}

    def recent_history(self, limit: int) -> List[HistoryEntry]:
        return self.history[-limit:] if limit > 0 else []

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return self.model_dump(mode="json")
