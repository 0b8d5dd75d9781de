"""Stages API - registry, stage selection and runs."""

from fastapi import APIRouter, Depends, HTTPException, Request

from pipeline_console.api.dependencies import get_console, limiter, rate_limit
from pipeline_console.application.console.dto import RunResult, StageInfo, ViewResponse
from pipeline_console.application.console.use_case import ConsoleBusyError, ConsoleUseCase
from pipeline_console.domain.entities.stage import (
    STAGE_REGISTRY,
    Stage,
    UnknownStageError,
    required_fields,
)

router = APIRouter(prefix="/stages", tags=["stages"])


def _resolve_stage(stage: str) -> Stage:
    try:
        return Stage.from_value(int(stage) if stage.isdecimal() and stage.isascii() else stage)
    except UnknownStageError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.get("", response_model=list[StageInfo])
async def list_stages() -> list[StageInfo]:
    """Registry rows in pipeline order."""
    return [StageInfo.from_spec(STAGE_REGISTRY[stage]) for stage in Stage]


@router.post("/{stage}/select", response_model=ViewResponse)
async def select_stage(
    stage: str,
    console: ConsoleUseCase = Depends(get_console),
) -> ViewResponse:
    """Make a stage active (by name or ordinal)."""
    resolved = _resolve_stage(stage)
    state = console.select_stage(resolved)
    return ViewResponse.from_state(state, list(required_fields(resolved)))


@router.post("/run", response_model=RunResult)
@limiter.limit(rate_limit)
async def run_stage(
    request: Request,
    console: ConsoleUseCase = Depends(get_console),
) -> RunResult:
    """Validate and dispatch the active stage; waits for the outcome."""
    try:
        return await console.run()
    except ConsoleBusyError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
