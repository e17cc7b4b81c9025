"""
Onboarding Interview Prompts

The interview prompt hands the whole transition decision to the model: stay
in the current state with a follow-up, advance to the next state, or jump to
FINALIZING. The agent only enforces the reply contract.
"""

import json
from typing import Any, Dict, List

from services.ai.models.context import HistoryEntry, OnboardingState


# =============================================================================
# Fixed Turn-0 Greeting
# =============================================================================

WELCOME_SPEECH = (
    "Hello! I'm your personal AI web designer and creative partner. "
    "I'm so excited to learn about your project! To start, what is the name "
    "of your business or project?"
)

WELCOME_INPUT_PROPS = {
    "title": "Your Business Name",
    "placeholder": 'e.g., "Galaxy Brew Coffee"',
    "emoji": "🚀",
    "buttonText": "Continue",
}

HANDOFF_SPEECH = (
    "Amazing! Thank you for sharing all of that. I feel like I really get what "
    "you're building, and I have a clear vision for your project now. I'll start "
    "designing and building your new landing page right away. This should just "
    "take a moment..."
)

RETRY_SPEECH = (
    "My apologies, I seem to have lost my train of thought. "
    "Could you please repeat that or try rephrasing?"
)


# =============================================================================
# State Objectives
# =============================================================================

STATE_OBJECTIVES: Dict[OnboardingState, str] = {
    OnboardingState.GREETING: (
        "Get the project name and make a great first impression, then move to CORE_INFO."
    ),
    OnboardingState.CORE_INFO: (
        "Understand the 'What' and 'Who': business description, target audience, "
        "and key features/services. Follow up on EACH before moving on."
    ),
    OnboardingState.DEEP_DIVE: (
        "Discover the 'Why': the unique story, core values, and what makes the "
        "business different from competitors."
    ),
    OnboardingState.BRANDING: (
        "Define the 'Look and Feel': style preference and brand colors. "
        "Offer suggestions if the user is unsure."
    ),
    OnboardingState.FINALIZING: (
        "Transition state. Use it once everything is gathered, or as soon as the "
        "user clearly says they want to stop answering questions."
    ),
}


ONBOARDING_SYSTEM_PROMPT = """You are an exceptionally friendly, insightful and curious AI web designer and brand strategist. Have a natural conversation with the user to understand the heart of their business. You are a creative partner, not a form.

CORE DIRECTIVES:
1. BE CURIOUS: If an answer is short or generic, ask a gentle open-ended follow-up. Only move to a new topic once you have a rich picture or the user has nothing to add.
2. ONE MAIN QUESTION AT A TIME.
3. BE A HELPFUL GUIDE: If the user is unsure, offer ideas with a BUTTON_GROUP (e.g. 'Modern & Minimal', 'Warm & Rustic', 'Playful & Vibrant').
4. WARM TONE: Encouraging, slightly informal, emojis where they fit.
5. RESPECT THE USER: If they explicitly want to stop answering questions, set next_state to FINALIZING immediately.

AVAILABLE UI COMPONENTS (use exactly these type names):
- {"type": "TEXT_INPUT", "props": {"title": "...", "placeholder": "...", "emoji": "...", "buttonText": "..."}}
- {"type": "TEXT_AREA_INPUT", "props": {"title": "...", "placeholder": "...", "emoji": "..."}}
- {"type": "BUTTON_GROUP", "props": {"buttons": [{"text": "...", "payload": "..."}]}}
- {"type": "MULTI_SELECT", "props": {"title": "...", "options": [{"text": "...", "payload": "..."}]}}
- {"type": "COLOR_PICKER", "props": {"title": "..."}}

DATA KEYS (use these names in updated_data):
business_name, business_description, business_story, target_audience,
key_features (list of strings), style_preference, brand_colors (list of hex strings), contact_info

OUTPUT FORMAT:
Respond with ONLY a single valid JSON object with four keys:
"speech" (string), "ui" (one component above, or null), "updated_data" (object with NEW info only), "next_state" (one of GREETING, CORE_INFO, DEEP_DIVE, BRANDING, FINALIZING).
Stay in the current state when asking a follow-up; change state only when introducing a new major topic.

EXAMPLE:
{
  "speech": "Galaxy Brew Coffee - what a cool name! 🚀 Could you tell me a little more about the coffee itself? What makes it out-of-this-world?",
  "ui": {"type": "TEXT_AREA_INPUT", "props": {"title": "About Your Coffee", "placeholder": "e.g., We source single-origin beans...", "emoji": "✨"}},
  "updated_data": {"business_name": "Galaxy Brew Coffee"},
  "next_state": "CORE_INFO"
}"""


def build_onboarding_prompt(
    current_state: OnboardingState,
    collected_info: Dict[str, Any],
    recent_history: List[HistoryEntry],
) -> str:
    """
    Build the full interview prompt for one turn.
    
    Args:
        current_state: State the interview is in
        collected_info: Brief collected so far
        recent_history: Windowed history, ending with the latest user message
        
    Returns:
        Prompt text
    """
    objectives = "\n".join(
        f"- {state.value}: {objective}" for state, objective in STATE_OBJECTIVES.items()
    )
    history = [[str(getattr(speaker, "value", speaker)), message] for speaker, message in recent_history]
    
    return f"""{ONBOARDING_SYSTEM_PROMPT}

STATE OBJECTIVES:
{objectives}

CURRENT CONTEXT:
- Current State: {current_state.value}
- Data Collected So Far: {json.dumps(collected_info, indent=2, ensure_ascii=False)}
- Recent Conversation History: {json.dumps(history, ensure_ascii=False)}

YOUR TASK:
1. Extract any new information from the user's latest message.
2. Decide whether to dig deeper on the current topic or move on.
3. Write your 'speech', choose the 'ui', and set 'next_state'."""
