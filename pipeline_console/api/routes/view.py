"""View API - one snapshot for the rendering layer."""

from fastapi import APIRouter, Depends

from pipeline_console.api.dependencies import get_console
from pipeline_console.application.console.dto import ConsoleSnapshot, ViewResponse
from pipeline_console.application.console.use_case import ConsoleUseCase
from pipeline_console.domain.entities.stage import required_fields

router = APIRouter(prefix="/view", tags=["view"])


@router.get("", response_model=ConsoleSnapshot)
async def get_view(console: ConsoleUseCase = Depends(get_console)) -> ConsoleSnapshot:
    """View flags, latest run log and transcript."""
    state = console.view_state()
    return ConsoleSnapshot(
        view=ViewResponse.from_state(state, list(required_fields(state.active_stage))),
        log=console.log_entries(),
        transcript=console.transcript(),
    )
