"""
Error Types

Exceptions raised by questree. Canceling a questionnaire is not an error and
is reported through result objects instead.
"""

from typing import Optional


class QuestreeError(Exception):
    """Base class for questree errors."""
    pass


class ValidationError(QuestreeError):
    """
    Raised when a raw answer does not satisfy the constraints of its entry.

    This error is recoverable: the view shows the message and asks again.
    """

    def __init__(self, message: str, entry_id: Optional[str] = None):
        self.entry_id = entry_id
        super().__init__(message)


class PersistenceError(QuestreeError):
    """
    Raised when the answer log can't be read or written.

    This error aborts the running session.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        line_no: Optional[int] = None,
    ):
        self.path = path
        self.line_no = line_no
        if path is not None and line_no is not None:
            message = f"{path}:{line_no}: {message}"
        elif path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class DefinitionError(QuestreeError):
    """Raised when a questionnaire definition is malformed."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
