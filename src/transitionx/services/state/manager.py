"""State history manager: live state, named transitions, undo and redo."""

import functools
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from transitionx.core.config import Config, get_config
from transitionx.core.exceptions import NoHistoryError, NoRedoError
from transitionx.services.state.history import StateHistory
from transitionx.services.state.transition_manager import (
    TransitionInvoker,
    TransitionRegistry,
)
from transitionx.services.state.types import (
    Capabilities,
    Snapshot,
    SnapshotMode,
    State,
    TransitionFn,
)
from transitionx.utils.logging import LogContext, get_logger, log_with_context

logger = get_logger(__name__)


class StateHistoryManager:
    """Holds a mutable state dict and applies named transitions to it.

    History is explicit: ``save`` snapshots the current state, ``rollback``
    and ``redo`` walk the undo and redo stacks. Transitions mutate the live
    state in place and are never recorded automatically.

    The live dict is the same object for the manager's whole lifetime.
    Restoring a snapshot replaces its contents, so references held by
    transitions and wrapped procedures stay current.

    Diagnostics go to ``sink`` at INFO level and only when ``debug`` is set.
    """

    def __init__(
        self,
        initial_state: Mapping[str, Any] | None = None,
        transitions: Mapping[str, TransitionFn] | None = None,
        debug: bool = False,
        *,
        snapshot_mode: SnapshotMode = SnapshotMode.SHALLOW,
        sink: logging.Logger | None = None,
    ):
        """
        Args:
            initial_state: Starting state, copied one level deep
            transitions: Mapping of name to fn(state, *args, **kwargs)
            debug: Emit diagnostic log lines for every operation
            snapshot_mode: Copy strategy for history snapshots
            sink: Logger receiving diagnostics, defaults to this module's logger
        """
        self._state: State = dict(initial_state or {})
        self._transitions = TransitionRegistry(transitions)
        self._history = StateHistory(snapshot_mode)
        self.debug = debug
        self._sink = sink or logger

    @classmethod
    def from_config(
        cls,
        initial_state: Mapping[str, Any] | None = None,
        transitions: Mapping[str, TransitionFn] | None = None,
        config: Config | None = None,
        **kwargs: Any,
    ) -> "StateHistoryManager":
        """Build a manager whose debug flag and snapshot mode come from configuration.

        Args:
            initial_state: Starting state
            transitions: Transition mapping
            config: Configuration to read, defaults to the global configuration
            **kwargs: Passed through to the constructor (e.g. sink)
        """
        history_config = (config or get_config()).history
        return cls(
            initial_state,
            transitions,
            debug=history_config.HISTORY_DEBUG,
            snapshot_mode=SnapshotMode(history_config.HISTORY_SNAPSHOT_MODE),
            **kwargs,
        )

    def _log(self, message: str, level: int = logging.INFO, **context: Any) -> None:
        if self.debug:
            log_with_context(self._sink, level, f"[TransitionX] {message}", **context)

    def _restore(self, snapshot: Snapshot) -> None:
        self._state.clear()
        self._state.update(snapshot)

    @property
    def state(self) -> State:
        """The live state dict."""
        return self._state

    @property
    def snapshot_mode(self) -> SnapshotMode:
        return self._history.snapshot_mode

    @property
    def transition_names(self) -> list[str]:
        return self._transitions.names()

    @property
    def can_rollback(self) -> bool:
        return self._history.can_step_back

    @property
    def can_redo(self) -> bool:
        return self._history.can_step_forward

    @property
    def history_depth(self) -> int:
        return self._history.undo_depth

    @property
    def redo_depth(self) -> int:
        return self._history.redo_depth

    def snapshot(self) -> Snapshot:
        """Return a copy of the current state, detached like a history entry."""
        return self._history.take_snapshot(self._state)

    def save(self) -> None:
        """Push a snapshot of the current state and discard the redo stack."""
        snapshot = self._history.push(self._state)
        self._log("State saved to history", state=snapshot)

    def rollback(self) -> None:
        """Restore the most recently saved state.

        The state being replaced is pushed onto the redo stack.

        Raises:
            NoHistoryError: If nothing has been saved
        """
        self._log("Rolling back", state=dict(self._state))
        try:
            previous = self._history.step_back(self._state)
        except NoHistoryError as e:
            self._log(str(e), level=logging.ERROR)
            raise
        self._restore(previous)
        self._log("State rolled back to previous state", state=dict(self._state))

    def redo(self) -> None:
        """Restore the most recently rolled-back state.

        The state being replaced is pushed back onto the undo stack.

        Raises:
            NoRedoError: If there is nothing to redo
        """
        try:
            following = self._history.step_forward(self._state)
        except NoRedoError as e:
            self._log(str(e), level=logging.ERROR)
            raise
        self._restore(following)
        self._log("State redone to next state", state=dict(self._state))

    def clear_history(self) -> None:
        """Drop both history stacks. The current state is left alone."""
        self._history.clear()
        self._log("History cleared")

    def get_statistics(self) -> dict[str, Any]:
        """Get history counters plus the number of registered transitions."""
        stats = self._history.get_statistics()
        stats["transitions"] = len(self._transitions)
        return stats

    def create_transition(self) -> TransitionInvoker:
        """Return an invoker that runs registered transitions on the live state.

        ``await invoke("name", *args)`` runs the named transition. An
        unregistered name raises UnknownTransitionError at call time.
        """
        return TransitionInvoker(self._transitions, self._state, self._log)

    def wrap(self, procedure: Callable[..., Any]) -> Callable[..., Awaitable[Any]]:
        """Adapt a procedure to receive this manager's capabilities.

        The returned coroutine function calls ``procedure(capabilities, *args,
        **kwargs)`` with a fresh Capabilities bundle per call, awaiting the
        result when it is awaitable. Exceptions propagate unchanged.
        """
        name = getattr(procedure, "__name__", None) or "anonymous"

        @functools.wraps(procedure)
        async def wrapped(*args: Any, **kwargs: Any) -> Any:
            with LogContext():
                self._log("Executing wrapped function", function_name=name)
                capabilities = Capabilities(
                    state=self._state,
                    transition=self.create_transition(),
                    save=self.save,
                    rollback=self.rollback,
                    redo=self.redo,
                )
                try:
                    result = procedure(capabilities, *args, **kwargs)
                    if inspect.isawaitable(result):
                        result = await result
                except Exception as e:
                    self._log(f"Error in wrapped function: {e}", level=logging.ERROR)
                    raise
                return result

        return wrapped
