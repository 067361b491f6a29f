"""Type definitions for state management."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

# Type aliases for clarity
State = dict[str, Any]
Snapshot = dict[str, Any]
TransitionFn = Callable[..., Awaitable[Any] | None]
TransitionInvokerFn = Callable[..., Awaitable[None]]
HistoryOperation = Callable[[], None]
LogSink = Callable[..., None]


class SnapshotMode(Enum):
    """How history snapshots are copied from the live state."""

    SHALLOW = "shallow"
    DEEP = "deep"


@dataclass(frozen=True)
class Capabilities:
    """Bundle handed to a wrapped procedure.

    Attributes:
        state: The manager's live state dict
        transition: Invoker bound to the manager, created per wrapped call
        save: Bound StateHistoryManager.save
        rollback: Bound StateHistoryManager.rollback
        redo: Bound StateHistoryManager.redo
    """

    state: State
    transition: TransitionInvokerFn
    save: HistoryOperation
    rollback: HistoryOperation
    redo: HistoryOperation
