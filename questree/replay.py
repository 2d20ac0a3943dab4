"""
Replay Resolver

Decides which answer of an earlier session is offered as the preferred
(default) answer for the current prompt. While the replayed answers match the
walk through the tree, a view in fast-forward mode can accept them without
asking.
"""

import logging
from enum import Enum
from typing import Optional

from .answers import EMPTY_ANSWER, QuestionAnswerInput
from .persistence import QuestionnairePersistence

logger = logging.getLogger(__name__)


class BlockReplay(Enum):
    """Where the next replay answer belongs, seen from a block."""
    NO_MORE_ANSWERS = "no_more_answers"
    NEXT_HAS_OTHER_ID = "next_has_other_id"
    EXISTS = "exists"


class ReplayResolver:
    """Preferred answers from the replay cursor of a persistence backend."""

    def __init__(self, persistence: QuestionnairePersistence):
        self.persistence = persistence

    def preferred_answer(self, question_id: str) -> Optional[QuestionAnswerInput]:
        """
        Preferred answer for a question.

        Returns
        -------
        QuestionAnswerInput or None
            The replayed answer when the next replay entry belongs to
            ``question_id`` (the entry is consumed). ``EMPTY_ANSWER`` when the
            next entry belongs to another question; nothing is consumed so
            later questions can still match. None when no replay data is left.
        """
        next_id = self.persistence.next_answer_id()
        if next_id is None:
            return None
        if next_id != question_id:
            logger.debug(f"Replay mismatch at '{question_id}', next recorded id is '{next_id}'")
            return EMPTY_ANSWER
        recorded = self.persistence.next_answer()
        return recorded.answer if recorded is not None else None

    def block_replay(self, block_id: str) -> BlockReplay:
        """Classify the next replay entry by the ``"{block_id}_"`` id prefix."""
        next_id = self.persistence.next_answer_id()
        if next_id is None:
            return BlockReplay.NO_MORE_ANSWERS
        if next_id.startswith(f"{block_id}_"):
            return BlockReplay.EXISTS
        return BlockReplay.NEXT_HAS_OTHER_ID

    def preferred_block_continuation(self, block_id: str) -> Optional[bool]:
        """
        Preferred decision for entering or repeating a block.

        True when more replay data lives inside the block, False when it moved
        on to another part of the tree, None without replay data.
        """
        state = self.block_replay(block_id)
        if state is BlockReplay.EXISTS:
            return True
        if state is BlockReplay.NEXT_HAS_OTHER_ID:
            return False
        return None

    @property
    def has_replay_data(self) -> bool:
        return self.persistence.next_answer_id() is not None
