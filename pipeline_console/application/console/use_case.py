"""Console use case - stage selection, validation gate and dispatch."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from structlog.contextvars import bound_contextvars

from pipeline_console.application.console.dto import ChatTurn, RunResult
from pipeline_console.domain.entities.configuration import ConfigurationStore
from pipeline_console.domain.entities.execution_log import (
    START_NOTICE,
    ExecutionLog,
    error_notice,
    missing_field_notice,
    success_notice,
)
from pipeline_console.domain.entities.stage import Stage, get_spec, project
from pipeline_console.domain.entities.transcript import ConversationTranscript
from pipeline_console.domain.entities.view_state import View, ViewState
from pipeline_console.domain.ports.gateway import CallError, CallResult, GatewayPort, StructuredPayload
from pipeline_console.domain.services.validation import missing_fields

logger = logging.getLogger(__name__)


class ConsoleError(Exception):
    """Base class for operator actions the console refuses."""


class ConsoleBusyError(ConsoleError):
    """A run or question is already in flight."""


class ChatUnavailableError(ConsoleError):
    """A question was submitted while the chat view is not active."""


def answer_text(result: CallResult) -> str:
    """Extract the assistant answer from an /ask result."""
    if isinstance(result, StructuredPayload) and isinstance(result.value, dict):
        if "response" in result.value:
            return str(result.value["response"])
    return result.as_text()


class ConsoleUseCase:
    """Orchestrates Parse → Document → Embed → Ask, one stage at a time.

    Owns the view state, execution log and transcript; reads the
    configuration store. run() is the only transition into the chat view.
    """

    def __init__(
        self,
        store: ConfigurationStore,
        gateway: GatewayPort,
        log: ExecutionLog | None = None,
        transcript: ConversationTranscript | None = None,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._log = log or ExecutionLog()
        self._transcript = transcript or ConversationTranscript()
        self._state = ViewState()
        self._lock = asyncio.Lock()

    @property
    def store(self) -> ConfigurationStore:
        return self._store

    def view_state(self) -> ViewState:
        return self._state.model_copy()

    def log_entries(self) -> list[str]:
        return self._log.entries()

    def transcript(self) -> list[ChatTurn]:
        return [
            ChatTurn(index=i, sender=sender, content=turn)
            for i, (sender, turn) in enumerate(self._transcript.labelled())
        ]

    @asynccontextmanager
    async def _exclusive(self) -> AsyncIterator[None]:
        # Fail fast instead of queueing: the transcript parity breaks under concurrent appends
        if self._lock.locked():
            raise ConsoleBusyError("Another stage run or question is still in progress")
        async with self._lock:
            self._state.busy = True
            try:
                yield
            finally:
                self._state.busy = False

    def select_stage(self, stage: Stage) -> ViewState:
        """Make a stage active. Never opens the chat view; may close it."""
        self._state.active_stage = stage
        self._state.logs_visible = False
        if stage is not Stage.ASK or missing_fields(Stage.ASK, self._store.get()):
            self._state.view = View.LOGS
        logger.debug("Stage selected: %s (view=%s)", stage.value, self._state.view.value)
        return self.view_state()

    async def run(self, cancel: asyncio.Event | None = None) -> RunResult:
        """Validate the active stage and dispatch it, or open the chat for Ask."""
        async with self._exclusive():
            stage = self._state.active_stage
            config = self._store.get()
            self._log.reset()
            self._state.logs_visible = True

            missing = missing_fields(stage, config)
            self._state.last_run_missing = bool(missing)
            if missing:
                for name in missing:
                    self._log.append(missing_field_notice(name))
                self._state.view = View.LOGS
                logger.info("Stage %s blocked, missing fields: %s", stage.value, ", ".join(missing))
                return self._run_result(stage, missing)

            if stage is Stage.ASK:
                self._state.view = View.CHAT
                logger.info("Chat opened")
                return self._run_result(stage)

            self._state.view = View.LOGS
            self._log.append(START_NOTICE)
            spec = get_spec(stage)
            with bound_contextvars(stage=stage.value, endpoint=spec.endpoint):
                logger.info("Dispatching stage %s to /%s", stage.value, spec.endpoint)
                try:
                    result = await self._gateway.invoke(spec.endpoint, project(stage, config), cancel=cancel)
                    notice = success_notice(result.as_text())
                except CallError as e:
                    logger.warning("Stage %s failed: %s", stage.value, e.message)
                    notice = error_notice(e.message)
                except asyncio.CancelledError:
                    self._log.append(error_notice("request cancelled"))
                    raise
                except Exception as e:
                    logger.exception("Stage %s failed unexpectedly", stage.value)
                    notice = error_notice(str(e) or type(e).__name__)
                self._log.append(notice)
            return self._run_result(stage)

    async def ask(self, question: str, cancel: asyncio.Event | None = None) -> list[ChatTurn]:
        """Send a question to /ask and append it and the answer to the transcript.

        Failures become an inline assistant turn, never an exception.
        """
        if not question.strip():
            raise ValueError("Question must not be empty")
        if not self._state.chat_visible:
            raise ChatUnavailableError("Run the Ask stage to open the chat first")

        async with self._exclusive():
            self._transcript.append(question)
            body = project(Stage.ASK, self._store.get(), {"user_question": question})
            endpoint = get_spec(Stage.ASK).endpoint
            # Every operator turn gets exactly one assistant turn, whatever happens
            with bound_contextvars(stage=Stage.ASK.value, endpoint=endpoint):
                try:
                    result = await self._gateway.invoke(endpoint, body, cancel=cancel)
                    reply = answer_text(result)
                except CallError as e:
                    logger.warning("Question failed: %s", e.message)
                    reply = f"Error: {e.message}"
                except asyncio.CancelledError:
                    self._transcript.append("Error: request cancelled")
                    raise
                except Exception as e:
                    logger.exception("Question failed unexpectedly")
                    reply = f"Error: {str(e) or type(e).__name__}"
                self._transcript.append(reply)
        return self.transcript()

    def _run_result(self, stage: Stage, missing: list[str] | None = None) -> RunResult:
        return RunResult(
            stage=stage,
            view=self._state.view,
            missing_fields=missing or [],
            log=self._log.entries(),
        )
