"""
CLI View

Line oriented terminal view using standard input/output. Yes/no prompts
become [y/n] questions, validation errors are printed and the question is
asked again.
"""

import logging
from typing import Callable, Optional

from ..answers import EMPTY_ANSWER, QuestionAnswerInput
from ..entries import BoolEntry, OptionEntry, QuestionEntry
from ..errors import ValidationError
from .base_io import BaseQuestionnaireView, MsgLevel, ProceedScreenResult, QuestionScreenResult

logger = logging.getLogger(__name__)

CANCEL_WORDS = ("q", "quit", "cancel")

_PREFIXES = {
    MsgLevel.NORMAL: "",
    MsgLevel.URGENT: "[!] ",
    MsgLevel.CRITICAL: "[ERROR] ",
}


class CLIQuestionnaireView(BaseQuestionnaireView):
    """
    CLI implementation of the questionnaire view.

    Closing the input (EOF) cancels the current screen, and so does one of
    ``CANCEL_WORDS`` when it is not a valid answer to the prompt.
    An empty input takes the preferred answer if there is one.
    """

    def __init__(
        self,
        fast_forward: bool = False,
        show_help: bool = True,
        input_func: Optional[Callable[[str], str]] = None,
        output: Optional[Callable[..., None]] = None,
    ):
        self.fast_forward = fast_forward
        self.show_help = show_help
        self._input = input_func or input
        self._print = output or print

    def _read(self, prompt: str) -> Optional[str]:
        try:
            return self._input(prompt)
        except EOFError:
            logger.info("Input closed, canceling the current screen")
            return None

    @staticmethod
    def _progress(total_positions: int, current_position: int) -> str:
        if total_positions > 0 and current_position > 0:
            return f"[{current_position}/{total_positions}] "
        return ""

    def _show_help(self, help_text: Optional[str]) -> None:
        if help_text and self.show_help:
            self._print(f"  ({help_text})")

    def print_title(self, text: str) -> None:
        self._print("=" * 60)
        self._print(text)
        self._print("=" * 60)

    def show_message(self, text: str, level: MsgLevel = MsgLevel.NORMAL) -> None:
        self._print(f"{_PREFIXES[level]}{text}")

    def show_proceed_screen(
        self,
        block_id: str,
        text: str,
        help_text: Optional[str],
        total_positions: int,
        current_position: int,
        preferred: Optional[bool] = None,
    ) -> ProceedScreenResult:
        progress = self._progress(total_positions, current_position)
        if self.fast_forward and preferred is not None:
            self._print(f"{progress}{text} {'y' if preferred else 'n'}")
            return ProceedScreenResult.proceeded(preferred)

        self._print()
        self._print(f"{progress}{text}")
        self._show_help(help_text)

        if preferred is None:
            hint = "[y/n]"
        else:
            hint = "[Y/n]" if preferred else "[y/N]"
        entry = BoolEntry(default_value=preferred)
        while True:
            raw = self._read(f"{hint}: ")
            if raw is None:
                return ProceedScreenResult.cancel()
            try:
                answer = entry.validate(raw)
            except ValidationError as e:
                if raw.strip().lower() in CANCEL_WORDS:
                    return ProceedScreenResult.cancel()
                self.show_message(str(e), MsgLevel.URGENT)
                continue
            return ProceedScreenResult.proceeded(answer.value)

    def show_question_screen(
        self,
        question: QuestionEntry,
        total_positions: int,
        preferred: Optional[QuestionAnswerInput] = None,
    ) -> QuestionScreenResult:
        if preferred is EMPTY_ANSWER and self.fast_forward:
            logger.info(f"Replay stopped matching at '{question.id}', leaving fast-forward mode")
            self.fast_forward = False

        progress = self._progress(total_positions, question.position or 0)
        has_preferred = preferred is not None and preferred is not EMPTY_ANSWER
        if self.fast_forward and has_preferred:
            self._print(f"{progress}{question.query_text} {preferred.display()}")
            return QuestionScreenResult.proceeded(preferred)

        self._print()
        self._print(f"{progress}{question.query_text}")
        self._show_help(question.help_text)
        if isinstance(question.entry_type, OptionEntry):
            for i, option in enumerate(question.entry_type.options):
                self._print(f"  {i}) {option}")
        if has_preferred and not preferred.is_empty:
            self._print(f"  (press enter to keep: {preferred.display()})")

        while True:
            raw = self._read("> ")
            if raw is None:
                return QuestionScreenResult.cancel()
            if has_preferred and not raw.strip():
                return QuestionScreenResult.proceeded(preferred)
            try:
                answer = question.validate(raw)
            except ValidationError as e:
                if raw.strip().lower() in CANCEL_WORDS:
                    return QuestionScreenResult.cancel()
                self.show_message(str(e), MsgLevel.URGENT)
                continue
            return QuestionScreenResult.proceeded(answer)
