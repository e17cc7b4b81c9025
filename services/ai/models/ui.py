"""
UI and Action Models

Closed tagged unions for the affordance shown after a turn (``ui``) and the
instruction to the orchestrating layer (``action``). Unknown tags are rejected.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from services.ai.models.artifact import GeneratedCode


# =============================================================================
# Props
# =============================================================================

class _Props(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ChoiceOption(_Props):
    text: str
    payload: Any = None


class KeyValueItem(_Props):
    key: str
    value: Any = None


class InputProps(_Props):
    """Props shared by TEXT_INPUT and TEXT_AREA_INPUT."""
    title: Optional[str] = None
    placeholder: Optional[str] = None
    emoji: Optional[str] = None
    button_text: Optional[str] = Field(default=None, alias="buttonText")


class ButtonGroupProps(_Props):
    buttons: List[ChoiceOption]


class MultiSelectProps(_Props):
    title: Optional[str] = None
    options: List[ChoiceOption]


class ColorPickerProps(_Props):
    title: Optional[str] = None


class KeyValueDisplayProps(_Props):
    title: Optional[str] = None
    items: List[KeyValueItem] = Field(default_factory=list)


# =============================================================================
# UI Components
# =============================================================================

class TextInputUI(BaseModel):
    type: Literal["TEXT_INPUT"] = "TEXT_INPUT"
    props: InputProps = Field(default_factory=InputProps)


class TextAreaInputUI(BaseModel):
    type: Literal["TEXT_AREA_INPUT"] = "TEXT_AREA_INPUT"
    props: InputProps = Field(default_factory=InputProps)


class ButtonGroupUI(BaseModel):
    type: Literal["BUTTON_GROUP"] = "BUTTON_GROUP"
    props: ButtonGroupProps


class MultiSelectUI(BaseModel):
    type: Literal["MULTI_SELECT"] = "MULTI_SELECT"
    props: MultiSelectProps


class ColorPickerUI(BaseModel):
    type: Literal["COLOR_PICKER"] = "COLOR_PICKER"
    props: ColorPickerProps = Field(default_factory=ColorPickerProps)


class KeyValueDisplayUI(BaseModel):
    type: Literal["KEY_VALUE_DISPLAY"] = "KEY_VALUE_DISPLAY"
    props: KeyValueDisplayProps = Field(default_factory=KeyValueDisplayProps)


class LoadingUI(BaseModel):
    type: Literal["LOADING"] = "LOADING"
    props: Dict[str, Any] = Field(default_factory=dict)


UIComponent = Annotated[
    Union[
        TextInputUI,
        TextAreaInputUI,
        ButtonGroupUI,
        MultiSelectUI,
        ColorPickerUI,
        KeyValueDisplayUI,
        LoadingUI,
    ],
    Field(discriminator="type"),
]


# =============================================================================
# Actions
# =============================================================================

class RequestUserInputAction(BaseModel):
    type: Literal["REQUEST_USER_INPUT"] = "REQUEST_USER_INPUT"


class DelegateAction(BaseModel):
    type: Literal["DELEGATE"] = "DELEGATE"


class GenerationCompleteAction(BaseModel):
    type: Literal["GENERATION_COMPLETE"] = "GENERATION_COMPLETE"
    payload: GeneratedCode


AgentAction = Annotated[
    Union[RequestUserInputAction, DelegateAction, GenerationCompleteAction],
    Field(discriminator="type"),
]
