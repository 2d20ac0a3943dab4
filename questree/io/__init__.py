"""
Views for questionnaire sessions.
"""

from .base_io import (
    BaseQuestionnaireView,
    MsgLevel,
    ProceedScreenResult,
    QuestionScreenResult,
)
from .cli_io import CLIQuestionnaireView

__all__ = [
    "BaseQuestionnaireView",
    "MsgLevel",
    "ProceedScreenResult",
    "QuestionScreenResult",
    "CLIQuestionnaireView",
]
