"""
Generated Code Model

The website artifact. The three fields are always replaced together.
"""

from typing import Any, Dict

from pydantic import BaseModel, StrictStr

from utils.exceptions import IncompleteArtifact

CODE_FIELDS = ("html", "css", "js")

PREVIEW_TEMPLATE = (
    '<!DOCTYPE html><html lang="en"><head><meta charset="UTF-8">'
    '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
    '<title>Preview</title><style>{css}</style></head>'
    '<body>{html}<script>{js}</script></body></html>'
)


class GeneratedCode(BaseModel):
    """Single-page website as raw html, css and js text."""
    html: StrictStr
    css: StrictStr
    js: StrictStr

    @classmethod
    def from_model_output(cls, data: Dict[str, Any]) -> "GeneratedCode":
        """
        Build an artifact from a parsed model reply.
        
        Presence as a string is the validity test, so empty strings pass.
        
        Raises:
            IncompleteArtifact: If any field is missing or not a string
        """
        missing = [
            name for name in CODE_FIELDS
            if not isinstance(data.get(name), str)
        ]
        if missing:
            raise IncompleteArtifact(
                message=f"Model reply is missing code fields: {', '.join(missing)}",
                missing=missing,
            )
        return cls(html=data["html"], css=data["css"], js=data["js"])

    def to_document(self) -> str:
        """Assemble a standalone HTML document for previewing."""
        return PREVIEW_TEMPLATE.format(css=self.css, html=self.html, js=self.js)
