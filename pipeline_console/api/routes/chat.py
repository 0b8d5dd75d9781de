"""Chat API - the Ask stage conversation."""

from fastapi import APIRouter, Depends, HTTPException, Request

from pipeline_console.api.dependencies import get_console, limiter, rate_limit
from pipeline_console.application.console.dto import ChatResponse, QuestionRequest
from pipeline_console.application.console.use_case import ConsoleError, ConsoleUseCase

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("", response_model=ChatResponse)
async def get_transcript(console: ConsoleUseCase = Depends(get_console)) -> ChatResponse:
    """Return the transcript with sender labels."""
    return ChatResponse(turns=console.transcript())


@router.post("", response_model=ChatResponse)
@limiter.limit(rate_limit)
async def ask(
    request: Request,
    question_request: QuestionRequest,
    console: ConsoleUseCase = Depends(get_console),
) -> ChatResponse:
    """Send a question; errors from the service come back as an assistant turn."""
    try:
        turns = await console.ask(question_request.question)
    except ConsoleError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return ChatResponse(turns=turns)
