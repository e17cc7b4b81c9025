"""
Model Reply Parser

Generative models wrap JSON in prose or markdown fences. The parser keeps
everything from the first '{' to the last '}' and parses that; nothing else
is repaired.
"""

import json
from typing import Any, Dict

from utils.logging import get_logger
from utils.exceptions import MalformedModelOutput

logger = get_logger(__name__)


def parse_model_json(raw_text: str) -> Dict[str, Any]:
    """
    Extract the JSON object embedded in a model reply.
    
    Args:
        raw_text: Raw completion text
        
    Returns:
        dict: The parsed object
        
    Raises:
        MalformedModelOutput: If no brace span exists or it is not valid JSON
    """
    if not isinstance(raw_text, str):
        raise MalformedModelOutput(message="Model reply was not text")
    
    start = raw_text.find('{')
    end = raw_text.rfind('}')
    if start == -1 or end < start:
        logger.warning(f"No JSON object in model reply: {raw_text[:100]!r}")
        raise MalformedModelOutput(
            message="No JSON object found in model reply",
            raw_text=raw_text,
        )
    
    candidate = raw_text[start:end + 1]
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON in model reply at pos {e.pos}: {e.msg}")
        raise MalformedModelOutput(
            message=f"Invalid JSON in model reply: {e.msg}",
            raw_text=raw_text,
            details={"position": e.pos},
        ) from e
