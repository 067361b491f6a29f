"""Undo/redo snapshot stacks."""

import copy
from typing import Any

from transitionx.core.exceptions import NoHistoryError, NoRedoError
from transitionx.services.state.types import Snapshot, SnapshotMode, State


def take_snapshot(state: State, mode: SnapshotMode = SnapshotMode.SHALLOW) -> Snapshot:
    """Copy a state dict for storage in history.

    SHALLOW copies only the top level, so nested mutable values stay shared
    with the live state. DEEP detaches them as well.
    """
    if mode is SnapshotMode.DEEP:
        return copy.deepcopy(state)
    return dict(state)


class StateHistory:
    """Holds the undo and redo stacks of state snapshots.

    This class is responsible ONLY for:
    - Copying states into snapshots
    - Moving snapshots between the two stacks
    - Counting history operations

    It never touches the live state; callers restore what it returns.
    """

    def __init__(self, snapshot_mode: SnapshotMode = SnapshotMode.SHALLOW):
        """Initialize empty undo and redo stacks.

        Args:
            snapshot_mode: Copy strategy used for every stored snapshot
        """
        self.snapshot_mode = snapshot_mode
        self._undo_stack: list[Snapshot] = []
        self._redo_stack: list[Snapshot] = []
        self._counts = {"saves": 0, "rollbacks": 0, "redos": 0}

    def take_snapshot(self, state: State) -> Snapshot:
        """Copy a state using this history's snapshot mode."""
        return take_snapshot(state, self.snapshot_mode)

    def push(self, state: State) -> Snapshot:
        """Store a snapshot of state on the undo stack and drop the redo stack.

        Args:
            state: State to snapshot

        Returns:
            The stored snapshot
        """
        snapshot = self.take_snapshot(state)
        self._undo_stack.append(snapshot)
        self._redo_stack.clear()
        self._counts["saves"] += 1
        return snapshot

    def step_back(self, current: State) -> Snapshot:
        """Pop the latest undo snapshot, parking current on the redo stack.

        Args:
            current: The live state before rolling back

        Returns:
            Snapshot to restore

        Raises:
            NoHistoryError: If the undo stack is empty
        """
        if not self._undo_stack:
            raise NoHistoryError()

        previous = self._undo_stack.pop()
        self._redo_stack.append(self.take_snapshot(current))
        self._counts["rollbacks"] += 1
        return previous

    def step_forward(self, current: State) -> Snapshot:
        """Pop the latest redo snapshot, parking current on the undo stack.

        Args:
            current: The live state before redoing

        Returns:
            Snapshot to restore

        Raises:
            NoRedoError: If the redo stack is empty
        """
        if not self._redo_stack:
            raise NoRedoError()

        following = self._redo_stack.pop()
        self._undo_stack.append(self.take_snapshot(current))
        self._counts["redos"] += 1
        return following

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    @property
    def can_step_back(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_step_forward(self) -> bool:
        return bool(self._redo_stack)

    def get_statistics(self) -> dict[str, Any]:
        """Get history operation counts and current stack depths."""
        return {
            "saves": self._counts["saves"],
            "rollbacks": self._counts["rollbacks"],
            "redos": self._counts["redos"],
            "undo_depth": len(self._undo_stack),
            "redo_depth": len(self._redo_stack),
            "snapshot_mode": self.snapshot_mode.value,
        }

    def clear(self) -> None:
        """Drop both stacks. Operation counts are kept."""
        self._undo_stack.clear()
        self._redo_stack.clear()
