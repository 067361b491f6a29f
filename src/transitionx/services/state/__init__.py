"""State management components for TransitionX."""

from .history import StateHistory, take_snapshot
from .manager import StateHistoryManager
from .transition_manager import TransitionInvoker, TransitionRegistry
from .types import Capabilities, SnapshotMode, State

__all__ = [
    "Capabilities",
    "SnapshotMode",
    "State",
    "StateHistory",
    "StateHistoryManager",
    "TransitionInvoker",
    "TransitionRegistry",
    "take_snapshot",
]
