"""
Base View

Abstract interface between the questionnaire controller and whatever shows
the questions to the user (terminal, GUI, scripted test doubles).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..answers import QuestionAnswerInput
from ..entries import QuestionEntry


class MsgLevel(Enum):
    """Severity of a message shown to the user."""
    NORMAL = "normal"
    URGENT = "urgent"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ProceedScreenResult:
    """Outcome of a yes/no prompt: canceled, or the decision."""
    canceled: bool = False
    proceed: bool = False

    @classmethod
    def cancel(cls) -> "ProceedScreenResult":
        return cls(canceled=True)

    @classmethod
    def proceeded(cls, proceed: bool) -> "ProceedScreenResult":
        return cls(proceed=proceed)


@dataclass(frozen=True)
class QuestionScreenResult:
    """Outcome of a question prompt: canceled, or the validated answer."""
    canceled: bool = False
    answer: Optional[QuestionAnswerInput] = None

    @classmethod
    def cancel(cls) -> "QuestionScreenResult":
        return cls(canceled=True)

    @classmethod
    def proceeded(cls, answer: QuestionAnswerInput) -> "QuestionScreenResult":
        return cls(answer=answer)


class BaseQuestionnaireView(ABC):
    """
    Abstract base class for questionnaire views.

    A view shows one screen at a time and blocks until the user is done with
    it. Validation of raw input happens in the view, which asks again until
    the input is valid or the user cancels.

    ``fast_forward`` asks the view to accept preferred answers without
    prompting while they are available.
    """

    fast_forward: bool = False

    @abstractmethod
    def show_proceed_screen(
        self,
        block_id: str,
        text: str,
        help_text: Optional[str],
        total_positions: int,
        current_position: int,
        preferred: Optional[bool] = None,
    ) -> ProceedScreenResult:
        """
        Ask a yes/no question guarding a block.

        Parameters
        ----------
        block_id : str
            Id of the block the prompt belongs to
        text : str
            The prompt
        help_text : str, optional
            Additional explanation
        total_positions : int
            Number of positions in the questionnaire
        current_position : int
            Position of the block, 0 if it has none
        preferred : bool, optional
            Decision offered as default

        Returns
        -------
        ProceedScreenResult
            The decision, or canceled
        """
        pass

    @abstractmethod
    def show_question_screen(
        self,
        question: QuestionEntry,
        total_positions: int,
        preferred: Optional[QuestionAnswerInput] = None,
    ) -> QuestionScreenResult:
        """
        Ask a question and return the validated answer.

        Parameters
        ----------
        question : QuestionEntry
            The question, its entry type validates the input
        total_positions : int
            Number of positions in the questionnaire
        preferred : QuestionAnswerInput, optional
            Answer offered as default. ``EMPTY_ANSWER`` (compared by
            identity) means replay data stopped matching and fast-forward
            should end. A replayed answer without value is a skipped answer
            and can be accepted like any other.

        Returns
        -------
        QuestionScreenResult
            The answer, or canceled
        """
        pass

    @abstractmethod
    def show_message(self, text: str, level: MsgLevel = MsgLevel.NORMAL) -> None:
        """Show a message, no answer expected."""
        pass

    @abstractmethod
    def print_title(self, text: str) -> None:
        """Show the questionnaire title. Called once when a session starts."""
        pass
