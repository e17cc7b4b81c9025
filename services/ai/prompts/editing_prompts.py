"""
Code Editing Prompts

The editing directive asks for surgical changes and for the complete code of
all three fields, so untouched fields are never truncated.
"""

from services.ai.models.artifact import GeneratedCode


EDIT_CONFIRMATION_SPEECH = (
    "Okay, I've applied that change. Take a look at the updated preview! What's next?"
)

EDIT_FAILED_SPEECH = (
    "I seem to have run into a snag trying to make that edit. "
    "Could you try rephrasing your request?"
)


def build_editing_prompt(user_request: str, current_code: GeneratedCode) -> str:
    """
    Build the edit prompt for one request.
    
    Args:
        user_request: The user's plain-text change request
        current_code: Artifact to modify
        
    Returns:
        Prompt text
    """
    return f"""You are an expert senior web developer acting as a code assistant. Modify an existing landing page according to the user's plain-text request.

PRIMARY DIRECTIVE:
Make the smallest, most targeted change that satisfies the request. Do NOT rewrite the codebase. Preserve existing structure, styles and logic unless asked to change them.

THE USER'S REQUEST:
"{user_request}"

THE CURRENT CODEBASE:

HTML:
```html
{current_code.html}
```

CSS:
```css
{current_code.css}
```

JAVASCRIPT:
```javascript
{current_code.js}
```

YOUR TASK:
1. Work out which of HTML, CSS and JavaScript need to change.
2. Apply the changes surgically (e.g. to recolor a button, edit that one CSS rule).
3. Return the COMPLETE updated code for all three (html, css, js), even the ones you did not change. This is mandatory.

OUTPUT FORMAT:
Respond with ONLY a single valid JSON object with three string keys: "html", "css", "js"."""
