"""Orchestrator - State machine behind the smart commit flow.

    IDLE -> SUMMARIZING -> DRAFT_READY -> GENERATING -> REFINED | REFINE_FAILED

Presentation code never touches pipeline data directly. It dispatches
intents (fetch, refine, edit, compose, close) and renders the immutable
DraftState values this class publishes. Blocking work (git, HTTP) runs
through `run_in_background`, a daemon thread by default.
"""

import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional

from smartcommit.git.runner import is_environment_error
from smartcommit.keystore import KeyStore
from smartcommit.llm.base import LLMClient, GenerateResult, Ok, AuthError, UpstreamError
from smartcommit.prompts.builder import build_refine_prompt, first_line
from smartcommit.summary.summarizer import DiffSummary, summarize

logger = logging.getLogger(__name__)


class State(Enum):
    IDLE = "idle"
    SUMMARIZING = "summarizing"
    DRAFT_READY = "draft_ready"
    GENERATING = "generating"
    REFINED = "refined"
    REFINE_FAILED = "refine_failed"
    CLOSED = "closed"


# States in which a draft exists and can be refined, edited or copied
DRAFT_STATES = (State.DRAFT_READY, State.REFINED, State.REFINE_FAILED)


class NoticeLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    text: str


@dataclass(frozen=True)
class DraftState:
    """Snapshot of the flow. A new value is published on every change."""
    state: State = State.IDLE
    model: str = ""
    summary: Optional[DiffSummary] = None
    diff_text: str = ""
    branch: Optional[str] = None
    busy: bool = False
    error: Optional[GenerateResult] = None
    notice: Optional[Notice] = None
    # Draft body without an appended diff; the context sent with a refine request
    summary_body: str = ""

    @property
    def has_draft(self) -> bool:
        return self.state in DRAFT_STATES and self.summary is not None


NO_CHANGES = "No local changes detected."
NOT_A_REPOSITORY = "Git not available or project is not a repository."


def aggregate_diff(staged: str, unstaged: str) -> str:
    """Join staged and unstaged diffs under section markers."""
    parts = []
    if staged.strip():
        parts.append(f"# STAGED\n{staged}\n")
    if unstaged.strip():
        parts.append(f"# UNSTAGED\n{unstaged}")
    return "\n".join(parts).strip()


def _start_thread(target: Callable[[], None]) -> threading.Thread:
    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread


class Orchestrator:
    """Sequences diff collection, summarizing and optional refinement."""

    def __init__(
        self,
        runner,
        client: LLMClient,
        key_store: KeyStore,
        models: list[str],
        model: Optional[str] = None,
        max_subject_length: int = 72,
        include_diff_in_body: bool = False,
        run_in_background: Callable[[Callable[[], None]], Any] = _start_thread,
    ):
        if not models:
            raise ValueError("At least one model id is required")
        self.runner = runner
        self.client = client
        self.key_store = key_store
        self.models = list(models)
        self.max_subject_length = max_subject_length
        self.include_diff_in_body = include_diff_in_body
        self._run_in_background = run_in_background
        self._lock = threading.Lock()
        self._listeners: list[Callable[[DraftState], None]] = []
        self._state = DraftState(model=model if model in self.models else self.models[0])

    @property
    def state(self) -> DraftState:
        with self._lock:
            return self._state

    def subscribe(self, listener: Callable[[DraftState], None]) -> None:
        self._listeners.append(listener)

    def _publish(self, new_state: DraftState) -> None:
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener failed")

    def _transition(self, **changes) -> Optional[DraftState]:
        """Apply changes unless closed. Returns the new state, or None if dropped."""
        with self._lock:
            if self._state.state is State.CLOSED:
                logger.debug("Dropping update after close: %s", changes.get('state'))
                return None
            self._state = replace(self._state, **changes)
            new_state = self._state
        self._publish(new_state)
        return new_state

    # -- intents -----------------------------------------------------------

    def fetch(self):
        """Collect the working tree diff and build a fresh draft.

        Returns the background task handle, or None if the request was
        rejected (already busy or closed).
        """
        with self._lock:
            if self._state.busy or self._state.state in (State.SUMMARIZING, State.CLOSED):
                return None
            self._state = replace(self._state, state=State.SUMMARIZING, busy=True, error=None, notice=None)
            new_state = self._state
        self._publish(new_state)
        return self._run_in_background(self._collect)

    def refine(self, details: Optional[str] = None):
        """Ask the model for a better subject line.

        At most one request runs at a time: while GENERATING further calls
        are rejected and return None.
        """
        with self._lock:
            current = self._state
            if current.busy or not current.has_draft:
                return None
            self._state = replace(current, state=State.GENERATING, busy=True, error=None, notice=None)
            new_state = self._state
        self._publish(new_state)

        base = current.summary
        extra = details.strip() if details and details.strip() else ""
        context = "\n\n".join(filter(None, [current.summary_body or base.body, extra]))
        prompt = build_refine_prompt(current.diff_text, context, self.max_subject_length)
        return self._run_in_background(lambda: self._generate(base, current.model, prompt))

    def edit(self, subject: Optional[str] = None, body: Optional[str] = None) -> bool:
        """Replace draft text typed by the user. Rejected while busy."""
        with self._lock:
            current = self._state
            if current.busy or not current.has_draft:
                return False
            summary = DiffSummary(
                subject=current.summary.subject if subject is None else subject,
                body=current.summary.body if body is None else body,
            )
            self._state = replace(current, summary=summary, summary_body=current.summary_body if body is None else body)
            new_state = self._state
        self._publish(new_state)
        return True

    def select_model(self, model: str) -> None:
        if model not in self.models:
            raise ValueError(f"Unknown model '{model}'. Available: {', '.join(self.models)}")
        self._transition(model=model)

    def compose(self) -> Optional[str]:
        """The message to copy: subject, blank line, body. Never changes state."""
        current = self.state
        if not current.has_draft:
            return None
        return current.summary.compose()

    def close(self) -> None:
        """Dispose the flow. Late background results are discarded."""
        with self._lock:
            self._state = replace(self._state, state=State.CLOSED, busy=False)
            new_state = self._state
        self._publish(new_state)

    # -- background work ---------------------------------------------------

    def _collect(self) -> None:
        try:
            branch_out, _ = self.runner.current_branch()
            unstaged, unstaged_err = self.runner.unstaged_diff()
            staged, staged_err = self.runner.staged_diff()
        except Exception as e:
            logger.exception("Diff collection failed")
            self._transition(state=State.IDLE, busy=False, notice=Notice(NoticeLevel.ERROR, f"Could not read changes: {e}"))
            return

        if is_environment_error(unstaged_err) and is_environment_error(staged_err):
            logger.debug("git unavailable: %s", (staged_err + "\n" + unstaged_err).strip())
            self._transition(state=State.IDLE, busy=False, notice=Notice(NoticeLevel.WARNING, NOT_A_REPOSITORY))
            return

        diff_text = aggregate_diff(staged, unstaged)
        if not diff_text:
            self._transition(state=State.IDLE, busy=False, summary=None, diff_text="", notice=Notice(NoticeLevel.INFO, NO_CHANGES))
            return

        branch = branch_out.strip() or None
        summary = summarize(diff_text, branch)
        summary_body = summary.body
        if self.include_diff_in_body:
            summary = DiffSummary(
                subject=summary.subject,
                body=f"{summary.body}\n\nUnified diff (staged + unstaged):\n{diff_text}",
            )
        logger.debug("Draft ready: %s", summary.subject)
        self._transition(
            state=State.DRAFT_READY, busy=False, summary=summary, summary_body=summary_body, diff_text=diff_text, branch=branch,
        )

    def _generate(self, base: DiffSummary, model: str, prompt: str) -> None:
        try:
            api_key = self.key_store.get()
        except Exception as e:
            logger.exception("Key store read failed")
            result: GenerateResult = AuthError(f"Could not read API key: {e}")
        else:
            try:
                result = self.client.generate(api_key, model, prompt)
            except Exception as e:
                logger.exception("Generation failed unexpectedly")
                result = UpstreamError(status=0, body=str(e))
        self._finish_refine(base, result)

    def _finish_refine(self, base: DiffSummary, result: GenerateResult) -> None:
        if isinstance(result, Ok):
            subject = first_line(result.text)
            summary = base.with_subject(subject) if subject else base
            self._transition(state=State.REFINED, busy=False, summary=summary, error=None)
            return

        message = result.message
        logger.debug("Refinement failed: %s", message)
        self._transition(
            state=State.REFINE_FAILED,
            busy=False,
            error=result,
            notice=Notice(NoticeLevel.ERROR, f"Failed to generate: {message}"),
        )
