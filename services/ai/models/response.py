"""
Response Model

Data structure for agent responses.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from services.ai.models.context import ConversationContext
from services.ai.models.ui import AgentAction, UIComponent


class ResponseStatus(str, Enum):
    """
    Turn outcome.
    
    PROCESSING only appears on the onboarding handoff (and on the caller's own
    placeholder). ERROR ends the turn, never the conversation.
    """
    AWAITING_INPUT = "AWAITING_INPUT"
    PROCESSING = "PROCESSING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"


def new_response_id(prefix: str) -> str:
    """Unique id per response, so the presentation layer never reuses stale UI."""
    return f"{prefix}-{uuid.uuid4().hex}"


@dataclass
class AgentResponse:
    """
    Response from any agent for a single turn.
    
    Contains the message to show, the next input affordance, an optional
    instruction for the orchestrating layer, and the context to persist.
    """
    id: str
    status: ResponseStatus
    context: ConversationContext
    speech: Optional[str] = None
    ui: Optional[UIComponent] = None
    action: Optional[AgentAction] = None
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'status': self.status.value,
            'speech': self.speech,
            'ui': self.ui.model_dump(mode="json", by_alias=True) if self.ui else None,
            'action': self.action.model_dump(mode="json", by_alias=True) if self.action else None,
            'context': self.context.to_dict(),
        }
