"""
Answer Persistence

Stores confirmed answers while a questionnaire runs and provides the answers
of an earlier session as a replay cursor.

The answer log holds one answer per line, appended in traversal order:

    id01={"String":"Homer"}
    id03_01_01={"Int":5}
    id04_04_02={"Option":null}

The text before the first ``=`` is the question id, the rest is the JSON
encoded answer. Logs can be concatenated to resume a session.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from pathlib import Path
from typing import Deque, Iterable, List, Optional

from .answers import QuestionAnswer, QuestionAnswerInput
from .entries import QuestionEntry
from .errors import PersistenceError

logger = logging.getLogger(__name__)


def format_log_line(question_id: str, answer: QuestionAnswerInput) -> str:
    return f"{question_id}={answer.to_json()}\n"


def parse_log_line(line: str) -> QuestionAnswer:
    """
    Parse one line of an answer log.

    Raises
    ------
    ValueError
        If the line has no ``=`` separator or the answer isn't valid JSON
        of a known answer kind.
    """
    question_id, sep, payload = line.rstrip("\r\n").partition("=")
    if not sep:
        raise ValueError("missing '=' between id and answer")
    return QuestionAnswer(id=question_id, answer=QuestionAnswerInput.from_json(payload))


def read_answer_log(path: str) -> List[QuestionAnswer]:
    """Read all answers of a log file. Blank lines are skipped."""
    answers = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    answers.append(parse_log_line(line))
                except ValueError as e:
                    raise PersistenceError(f"malformed answer line ({e})", path=path, line_no=line_no)
    except OSError as e:
        raise PersistenceError(f"can't read answer log: {e}", path=path)
    return answers


class QuestionnairePersistence(ABC):
    """
    Abstract base class for answer persistence.

    Subclasses decide where answers go. The replay cursor over previously
    given answers is shared by all implementations.
    """

    def __init__(self):
        self._pending: Deque[QuestionAnswer] = deque()

    @abstractmethod
    def store_question_answer(self, question: QuestionEntry, answer: QuestionAnswerInput) -> None:
        """
        Store a confirmed answer. Called once per answer, never batched.

        Raises
        ------
        PersistenceError
            If the answer can't be stored
        """
        pass

    @abstractmethod
    def load(self, source: Optional[str] = None) -> None:
        """
        Fill the replay cursor from the log of an earlier session.

        Raises
        ------
        PersistenceError
            If the source can't be read
        """
        pass

    def import_answers(self, answers: Iterable[QuestionAnswer]) -> None:
        """Append answers to the replay cursor."""
        self._pending.extend(answers)

    def next_answer_id(self) -> Optional[str]:
        """Id of the next replay answer without consuming it."""
        if not self._pending:
            return None
        return self._pending[0].id

    def next_answer(self) -> Optional[QuestionAnswer]:
        """Consume and return the next replay answer."""
        if not self._pending:
            return None
        return self._pending.popleft()

    @property
    def has_pending_answers(self) -> bool:
        return bool(self._pending)


class MemoryPersistence(QuestionnairePersistence):
    """Keeps stored answers in memory. Used for tests and imported data."""

    def __init__(self, answers: Optional[Iterable[QuestionAnswer]] = None):
        super().__init__()
        self.stored: List[QuestionAnswer] = []
        if answers is not None:
            self.import_answers(answers)

    def store_question_answer(self, question: QuestionEntry, answer: QuestionAnswerInput) -> None:
        self.stored.append(QuestionAnswer(id=question.id, answer=answer))

    def load(self, source: Optional[str] = None) -> None:
        if source is None:
            return
        self.import_answers(read_answer_log(source))

    def dump_log(self) -> str:
        """The stored answers in answer log format."""
        return "".join(format_log_line(a.id, a.answer) for a in self.stored)


class FileQuestionnairePersistence(QuestionnairePersistence):
    """
    Appends answers to a log file.

    The file is opened in append mode for every answer, so an interrupted
    session leaves a log with everything answered so far.
    """

    def __init__(self, path: str):
        super().__init__()
        self.path = str(path)

    def store_question_answer(self, question: QuestionEntry, answer: QuestionAnswerInput) -> None:
        line = format_log_line(question.id, answer)
        try:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            raise PersistenceError(f"can't write answer: {e}", path=self.path)
        logger.debug(f"Stored answer for '{question.id}'")

    def load(self, source: Optional[str] = None) -> None:
        path = source if source is not None else self.path
        answers = read_answer_log(path)
        self.import_answers(answers)
        logger.info(f"Loaded {len(answers)} answers from {path}")

    def exists(self) -> bool:
        return Path(self.path).is_file()

    def remove(self) -> None:
        """Delete the log file if it exists."""
        p = Path(self.path)
        if p.is_file():
            try:
                p.unlink()
            except OSError as e:
                raise PersistenceError(f"can't remove answer log: {e}", path=self.path)
            logger.info(f"Removed answer log {self.path}")
