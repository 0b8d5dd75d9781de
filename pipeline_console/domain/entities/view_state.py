"""UI-facing view state of the console."""

from enum import Enum

from pydantic import BaseModel

from pipeline_console.domain.entities.stage import Stage


class View(str, Enum):
    """Which panel the rendering layer shows below the stage selector."""

    LOGS = "logs"
    CHAT = "chat"


class ViewState(BaseModel):
    """Snapshot of the stage selector state."""

    active_stage: Stage = Stage.PARSE
    view: View = View.LOGS
    logs_visible: bool = False  # False until the first run of the selected stage
    last_run_missing: bool = False
    busy: bool = False  # A run or question is in flight

    @property
    def chat_visible(self) -> bool:
        return self.active_stage is Stage.ASK and self.view is View.CHAT
