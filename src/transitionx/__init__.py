"""TransitionX: in-process state transitions with undo and redo history."""

from transitionx.core.config import Config, configure_logging, get_config, reload_config
from transitionx.core.exceptions import (
    ConfigurationError,
    HistoryError,
    NoHistoryError,
    NoRedoError,
    TransitionXException,
    UnknownTransitionError,
)
from transitionx.services.state import (
    Capabilities,
    SnapshotMode,
    StateHistoryManager,
)
from transitionx.utils.logging import get_logger, setup_logging

__version__ = "1.0.0"

__all__ = [
    "Capabilities",
    "Config",
    "ConfigurationError",
    "HistoryError",
    "NoHistoryError",
    "NoRedoError",
    "SnapshotMode",
    "StateHistoryManager",
    "TransitionXException",
    "UnknownTransitionError",
    "configure_logging",
    "get_config",
    "get_logger",
    "reload_config",
    "setup_logging",
]
