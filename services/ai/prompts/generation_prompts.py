"""
Code Generation Prompts

Turns a completed brief and the Baseline CSS property list into a single
generation prompt that must come back as {"html", "css", "js"}.
"""

from typing import Any, Dict, Iterable


GENERATION_COMPLETE_SPEECH = (
    "Voila! I've designed and built a unique, modern landing page based on our "
    "conversation. Here is the live preview!"
)

GENERATION_FAILED_SPEECH = (
    "I'm so sorry, my creative circuits got tangled while building your site. "
    "Would you like to try generating it again?"
)

RETRY_GENERATION_PAYLOAD = "retry_generation"


def _join(value: Any, default: str) -> str:
    """Briefs store lists or plain strings depending on how the user answered."""
    if not value:
        return default
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def build_generation_prompt(brief: Dict[str, Any], baseline_properties: Iterable[str]) -> str:
    """
    Build the one-shot landing page generation prompt.
    
    Args:
        brief: collected_info from the interview
        baseline_properties: Permitted CSS property names (may be empty)
        
    Returns:
        Prompt text
    """
    permitted = ", ".join(sorted(baseline_properties))
    if permitted:
        css_rule = (
            "1. BASELINE-FIRST CSS: Build the entire visual experience with properties "
            "from the PERMITTED BASELINE CSS PROPERTIES list below."
        )
        permitted_block = f"\nPERMITTED BASELINE CSS PROPERTIES:\n{permitted}\n"
    else:
        css_rule = "1. COMPATIBLE CSS: Prefer widely supported CSS properties."
        permitted_block = ""
    
    style = brief.get("style_preference") or "modern"
    
    return f"""You are a world-class senior web developer and UI/UX designer. Generate a complete, single-page landing page (HTML, CSS, JS) from the client brief below.

THE CLIENT BRIEF:
- Business Name: {brief.get("business_name") or "N/A"}
- Core Business: {brief.get("business_description") or "N/A"}
- Unique Story/Values: {brief.get("business_story") or "N/A"}
- Target Audience: {brief.get("target_audience") or "N/A"}
- Key Features to Highlight: {_join(brief.get("key_features"), "Not specified")}
- Desired Vibe/Style: {style}
- Brand Colors: {_join(brief.get("brand_colors"), "Designer's choice")}
- Contact Info: {_join(brief.get("contact_info"), "N/A")}

TECHNICAL REQUIREMENTS (MANDATORY):
{css_rule}
2. MODERN & RESPONSIVE: Mobile-first, CSS Grid and Flexbox, exceptional on every screen size.
3. NO FRAMEWORKS: No CSS frameworks (Bootstrap, Tailwind) and no JS libraries (jQuery, React). Vanilla HTML, CSS and JavaScript only.
4. AESTHETICS: Clean and professional, reflecting the "{style}" style, with a cohesive palette and readable web fonts.
5. SUBTLE INTERACTIVITY: Tasteful vanilla JS micro-interactions such as scroll fade-ins or smooth scrolling.
6. STRUCTURE: Semantic HTML (<header>, <nav>, <main>, <section>, <footer>) with hero, features, about and call-to-action sections.
7. OUTPUT FORMAT: Respond with ONLY a single valid JSON object with three string keys: "html", "css", "js". The "html" value is the body content only.
{permitted_block}
Now generate the code."""
