"""Console DTOs."""

from pydantic import BaseModel, Field, field_validator

from pipeline_console.domain.entities.configuration import FieldDescriptor
from pipeline_console.domain.entities.stage import Stage, StageSpec
from pipeline_console.domain.entities.transcript import Sender
from pipeline_console.domain.entities.view_state import View, ViewState


class FieldUpdate(BaseModel):
    """Replacement value for one configuration field. Empty is allowed."""

    value: str = Field(..., max_length=10_000)


class SettingsResponse(BaseModel):
    """Current configuration record and how to present each field."""

    values: dict[str, str]
    fields: list[FieldDescriptor]


class StageInfo(BaseModel):
    """Registry row as shown to the operator."""

    stage: Stage
    ordinal: int
    title: str
    endpoint: str
    required_fields: list[str]
    action_label: str
    guide: str
    steps: list[str]

    @classmethod
    def from_spec(cls, spec: StageSpec) -> "StageInfo":
        return cls(
            stage=spec.stage,
            ordinal=spec.stage.ordinal,
            title=spec.title,
            endpoint=spec.endpoint,
            required_fields=list(spec.required_fields),
            action_label=spec.action_label,
            guide=spec.guide,
            steps=list(spec.steps),
        )


class ViewResponse(BaseModel):
    """View flags for the rendering layer."""

    active_stage: Stage
    view: View
    logs_visible: bool
    chat_visible: bool
    last_run_missing: bool
    busy: bool
    highlighted_fields: list[str]

    @classmethod
    def from_state(cls, state: ViewState, highlighted_fields: list[str]) -> "ViewResponse":
        return cls(
            active_stage=state.active_stage,
            view=state.view,
            logs_visible=state.logs_visible,
            chat_visible=state.chat_visible,
            last_run_missing=state.last_run_missing,
            busy=state.busy,
            highlighted_fields=highlighted_fields,
        )


class RunResult(BaseModel):
    """Outcome of one run of the active stage."""

    stage: Stage
    view: View
    missing_fields: list[str] = []
    log: list[str]


class QuestionRequest(BaseModel):
    """Operator question for the Ask stage."""

    question: str = Field(..., min_length=1, max_length=100_000)

    @field_validator("question")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("question must not be blank")
        return value


class ChatTurn(BaseModel):
    """One transcript turn with its parity-derived sender."""

    index: int
    sender: Sender
    content: str


class ChatResponse(BaseModel):
    """Full conversation transcript."""

    turns: list[ChatTurn]


class ConsoleSnapshot(BaseModel):
    """Everything the rendering layer needs to draw the console."""

    view: ViewResponse
    log: list[str]
    transcript: list[ChatTurn]
