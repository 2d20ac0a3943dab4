"""
Questionnaire Controller

Walks the question tree of a questionnaire:

1. Asks the start prompt of a block and enters it on "yes"
2. Asks every entry of the block in order (questions, nested blocks,
   repeated questions)
3. Asks the end prompt, if the block has one, and loops over the entries
   again when the block allows it
4. Stores every confirmed answer through the persistence backend

Answers of an earlier session are offered as preferred answers while they
match the walk, so an interrupted session can be fast-forwarded.

Canceling is a normal result, not an exception. Errors raised by the view or
the persistence backend end the run and propagate to the caller.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Union

from .answers import (
    AnswerEntry,
    AnswerKind,
    BlockAnswer,
    EMPTY_ANSWER,
    QuestionAnswer,
    QuestionAnswerInput,
    RepeatedQuestionAnswers,
)
from .config import ControllerConfig
from .entries import QuestionEntry, RepeatedQuestionEntry, SubBlock
from .io.base_io import BaseQuestionnaireView, MsgLevel
from .persistence import QuestionnairePersistence
from .questionnaire import Questionnaire
from .replay import ReplayResolver

logger = logging.getLogger(__name__)


class QuestionnaireStatus(Enum):
    """Final status of a questionnaire run."""
    FINISHED = "Finished"
    CANCELED = "Canceled"


@dataclass
class QuestionnaireResult:
    """Result of a questionnaire run, the answers are set when it finished."""
    status: QuestionnaireStatus
    answers: Optional[BlockAnswer] = None

    @classmethod
    def finished(cls, answers: BlockAnswer) -> "QuestionnaireResult":
        return cls(status=QuestionnaireStatus.FINISHED, answers=answers)

    @classmethod
    def canceled(cls) -> "QuestionnaireResult":
        return cls(status=QuestionnaireStatus.CANCELED)

    @property
    def is_finished(self) -> bool:
        return self.status is QuestionnaireStatus.FINISHED

    @property
    def is_canceled(self) -> bool:
        return self.status is QuestionnaireStatus.CANCELED

    def to_dict(self) -> Union[Dict[str, Any], str]:
        if self.is_canceled:
            return QuestionnaireStatus.CANCELED.value
        return {QuestionnaireStatus.FINISHED.value: self.answers.to_dict()}

    @classmethod
    def from_dict(cls, d: Union[Dict[str, Any], str]) -> "QuestionnaireResult":
        if d == QuestionnaireStatus.CANCELED.value:
            return cls.canceled()
        return cls.finished(BlockAnswer.from_dict(d[QuestionnaireStatus.FINISHED.value]))


@dataclass
class ControllerResult:
    """Result of a single step of the walk: canceled, or an answer entry."""
    canceled: bool = False
    entry: Optional[AnswerEntry] = None

    @classmethod
    def cancel(cls) -> "ControllerResult":
        return cls(canceled=True)

    @classmethod
    def finished(cls, entry: AnswerEntry) -> "ControllerResult":
        return cls(entry=entry)


class QuestionnaireController:
    """
    Runs a questionnaire against a view and a persistence backend.

    A controller is single use: ``run`` may be called once.
    """

    def __init__(
        self,
        questionnaire: Questionnaire,
        view: BaseQuestionnaireView,
        persistence: QuestionnairePersistence,
        config: Optional[ControllerConfig] = None,
    ):
        self.questionnaire = questionnaire
        self.view = view
        self.persistence = persistence
        self.config = config or ControllerConfig()
        self.resolver = ReplayResolver(persistence)
        self._has_run = False
        self._marker_stored = False

    @property
    def total_positions(self) -> int:
        return self.questionnaire.pos_count

    def run(self) -> QuestionnaireResult:
        """
        Run the questionnaire from its init block.

        Returns
        -------
        QuestionnaireResult
            Finished with the answers of the init block, or canceled
        """
        if self._has_run:
            raise RuntimeError("A questionnaire controller can only run once")
        self._has_run = True

        self.view.print_title(self.questionnaire.title)
        result = self.run_block(self.questionnaire.init_block, is_init=True)
        if result.canceled:
            logger.info("Questionnaire was canceled")
            return QuestionnaireResult.canceled()
        if not isinstance(result.entry, BlockAnswer):
            raise RuntimeError(f"Received wrong result for the init block: {type(result.entry).__name__}")
        logger.info("Questionnaire finished")
        return QuestionnaireResult.finished(result.entry)

    def run_block(self, block: SubBlock, is_init: bool = False) -> ControllerResult:
        """Ask the start prompt of a block and enter it on "yes"."""
        preferred = self.resolver.preferred_block_continuation(block.id)
        if is_init and self.config.resume_enters_root and self.resolver.has_replay_data:
            preferred = True

        decision = self.view.show_proceed_screen(
            block.id,
            block.start_text,
            block.help_text,
            self.total_positions,
            block.position or 0,
            preferred,
        )
        if decision.canceled:
            return ControllerResult.cancel()
        if not decision.proceed:
            if is_init:
                return ControllerResult.cancel()
            logger.debug(f"Block '{block.id}' declined")
            return ControllerResult.finished(BlockAnswer(id=block.id))
        return self.enter_block(block, is_init)

    def enter_block(self, block: SubBlock, is_init: bool = False) -> ControllerResult:
        """Run the entries of an entered block, once or in a loop."""
        logger.debug(f"Entering block '{block.id}'")
        block_answer = BlockAnswer(id=block.id)
        while True:
            iteration = []
            for entry in block.entries:
                if isinstance(entry, SubBlock):
                    result = self.run_block(entry)
                elif isinstance(entry, RepeatedQuestionEntry):
                    result = self.run_repeated_question(entry)
                else:
                    result = self.run_question(entry)
                if result.canceled:
                    return result
                iteration.append(result.entry)
            block_answer.iterations.append(iteration)

            if block.end_text is None:
                break

            if is_init:
                # replay ids never carry the init block prefix
                preferred = None
                current = self.total_positions
                if self.config.store_completion_marker:
                    self._store_completion_marker()
            else:
                preferred = self.resolver.preferred_block_continuation(block.id)
                current = block.position or 0

            decision = self.view.show_proceed_screen(
                block.id,
                block.end_text,
                block.help_text,
                self.total_positions,
                current,
                preferred,
            )
            if decision.canceled:
                # keep what was collected so far
                logger.debug(f"End prompt of block '{block.id}' canceled, leaving the block")
                break
            if not decision.proceed:
                if is_init:
                    return ControllerResult.cancel()
                break
            if not block.loop_over_entries:
                break

        logger.debug(f"Leaving block '{block.id}' after {len(block_answer.iterations)} iteration(s)")
        return ControllerResult.finished(block_answer)

    def run_question(self, question: QuestionEntry) -> ControllerResult:
        """Ask a single question and store the answer."""
        preferred = self.resolver.preferred_answer(question.id)
        result = self.view.show_question_screen(question, self.total_positions, preferred)
        if result.canceled:
            return ControllerResult.cancel()
        self.persistence.store_question_answer(question, result.answer)
        return ControllerResult.finished(QuestionAnswer(id=question.id, answer=result.answer))

    def run_repeated_question(self, repeated: RepeatedQuestionEntry) -> ControllerResult:
        """
        Ask a repeated question until the user gives an empty answer.

        An empty answer is refused while fewer than ``min_count`` answers
        were given. After ``max_count`` answers (if set) the loop ends.
        The entry type's default value is not offered, since an empty
        input has to end the list.
        """
        entry_type = repeated.entry_type
        if getattr(entry_type, "default_value", None) is not None:
            entry_type = replace(entry_type, default_value=None)
        answers = []
        iteration = 0
        had_preferred = False
        while True:
            iteration += 1
            if repeated.max_count > 0 and iteration > repeated.max_count:
                self.view.show_message(
                    "Reached maximum number of input entries. Go on with the next topic ...",
                    MsgLevel.NORMAL,
                )
                break

            question = QuestionEntry(
                id=repeated.id,
                query_text=repeated.query_text_for(iteration),
                entry_type=entry_type,
                help_text=repeated.help_text,
                required=False,
                position=repeated.position,
            )
            preferred = self.resolver.preferred_answer(repeated.id)
            if preferred is not None:
                had_preferred = True
            elif had_preferred:
                # replay data ran out, stop offering the last value
                preferred = EMPTY_ANSWER

            result = self.view.show_question_screen(question, self.total_positions, preferred)
            if result.canceled:
                return ControllerResult.cancel()

            answer = result.answer
            if answer.is_empty:
                if iteration <= repeated.min_count:
                    self.view.show_message(
                        f"Input is needed. Minimal number of elements ({repeated.min_count}) isn't reached yet.",
                        MsgLevel.CRITICAL,
                    )
                    iteration -= 1
                    continue
                break

            self.persistence.store_question_answer(question, answer)
            answers.append(answer)

        return ControllerResult.finished(RepeatedQuestionAnswers(id=repeated.id, answers=answers))

    def _store_completion_marker(self) -> None:
        marker_id = self.config.completion_marker_id
        # a replayed log contains the marker of its own session
        if self.persistence.next_answer_id() == marker_id:
            self.persistence.next_answer()
        # a looping root passes the end prompt more than once
        if self._marker_stored:
            return
        marker = QuestionEntry(id=marker_id, query_text="questionnaire completed")
        self.persistence.store_question_answer(marker, QuestionAnswerInput(AnswerKind.STRING, "done"))
        self._marker_stored = True
