"""
Custom exception classes for TransitionX.

Every error the manager raises derives from TransitionXException so callers
can catch library failures without catching their own transition errors.
"""


class TransitionXException(Exception):
    """Base exception for all TransitionX custom exceptions."""

    pass


class HistoryError(TransitionXException):
    """Exception raised for undo/redo history failures."""

    pass


class NoHistoryError(HistoryError):
    """Exception raised when rolling back with an empty undo stack."""

    def __init__(self, message: str = "No saved state to rollback to."):
        super().__init__(message)


class NoRedoError(HistoryError):
    """Exception raised when redoing with an empty redo stack."""

    def __init__(self, message: str = "No state to redo."):
        super().__init__(message)


class UnknownTransitionError(TransitionXException, KeyError):
    """Exception raised when a transition name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Transition "{name}" is not defined.')

    def __str__(self) -> str:
        # KeyError repr-quotes its argument
        return str(self.args[0])


class ConfigurationError(TransitionXException):
    """Exception raised for configuration errors."""

    pass
