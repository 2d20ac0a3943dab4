"""
Scripted view used by the tests in place of a terminal.
"""

from typing import List, Optional

from questree.answers import EMPTY_ANSWER, QuestionAnswerInput
from questree.entries import QuestionEntry
from questree.errors import ValidationError
from questree.io.base_io import (
    BaseQuestionnaireView,
    MsgLevel,
    ProceedScreenResult,
    QuestionScreenResult,
)

CANCEL = object()


class ScriptedView(BaseQuestionnaireView):
    """
    Answers prompts from two scripts.

    ``decisions`` feeds proceed screens (True, False or CANCEL),
    ``inputs`` feeds question screens with raw text
    or CANCEL. An empty input keeps a preferred answer, EMPTY_ANSWER ends
    fast-forward. Every call is recorded so tests can check what was asked.
    """

    def __init__(self, decisions: Optional[list] = None, inputs: Optional[list] = None, fast_forward: bool = False):
        self.decisions = list(decisions or [])
        self.inputs = list(inputs or [])
        self.fast_forward = fast_forward
        self.titles: List[str] = []
        self.proceed_calls: list = []
        self.question_calls: list = []
        self.messages: list = []

    def print_title(self, text):
        self.titles.append(text)

    def show_message(self, text, level=MsgLevel.NORMAL):
        self.messages.append((text, level))

    def show_proceed_screen(self, block_id, text, help_text, total_positions, current_position, preferred=None):
        self.proceed_calls.append((block_id, current_position, preferred))
        if self.fast_forward and preferred is not None:
            return ProceedScreenResult.proceeded(preferred)
        if not self.decisions:
            raise AssertionError(f"No decision scripted for '{block_id}': {text}")
        decision = self.decisions.pop(0)
        if decision is CANCEL:
            return ProceedScreenResult.cancel()
        return ProceedScreenResult.proceeded(decision)

    def show_question_screen(self, question: QuestionEntry, total_positions, preferred: Optional[QuestionAnswerInput] = None):
        self.question_calls.append((question.id, question.query_text, question.position, preferred))
        if preferred is EMPTY_ANSWER:
            self.fast_forward = False
        has_preferred = preferred is not None and preferred is not EMPTY_ANSWER
        if self.fast_forward and has_preferred:
            return QuestionScreenResult.proceeded(preferred)

        while True:
            if not self.inputs:
                raise AssertionError(f"No input scripted for '{question.id}': {question.query_text}")
            raw = self.inputs.pop(0)
            if raw is CANCEL:
                return QuestionScreenResult.cancel()
            if has_preferred and not raw.strip():
                return QuestionScreenResult.proceeded(preferred)
            try:
                return QuestionScreenResult.proceeded(question.validate(raw))
            except ValidationError as e:
                self.messages.append((str(e), MsgLevel.URGENT))
