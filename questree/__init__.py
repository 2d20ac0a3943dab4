"""
questree - Interactive Tree Shaped Questionnaires

This package runs questionnaires made of questions, repeated questions and
nested blocks. Blocks are entered on a yes/no prompt and can loop over their
entries, so a session walks a tree. Every confirmed answer is written to an
append-only log, which lets an interrupted session be resumed and replayed.

Main Components:
    - entries: question, block and input type definitions with validation
    - questionnaire: the questionnaire root and position numbering
    - controller: walks the tree and collects the answer tree
    - replay: offers answers of an earlier session as preferred answers
    - persistence: answer log backends (file, memory)
    - io: views (CLI) used by the controller to talk to the user
    - runner: session setup, resume prompt and fast-forward
    - checks: structural checks of a questionnaire definition

Example:
    >>> from questree import Questionnaire, QuestionEntry, IntEntry, QuestionnaireRunner
    >>>
    >>> q = Questionnaire.create(
    ...     "id00",
    ...     "Do you want to answer a few questions?",
    ...     [
    ...         QuestionEntry(id="id01", query_text="What's your name?"),
    ...         QuestionEntry(id="id02", query_text="How old are you?",
    ...                       entry_type=IntEntry(min=0, max=150)),
    ...     ],
    ... )
    >>> result = QuestionnaireRunner(q).run()
    >>> result.is_finished
"""

from .answers import (
    AnswerKind,
    QuestionAnswerInput,
    QuestionAnswer,
    RepeatedQuestionAnswers,
    BlockAnswer,
    EMPTY_ANSWER,
)
from .entries import (
    StringEntry,
    IntEntry,
    FloatEntry,
    BoolEntry,
    OptionEntry,
    ProceedQueryEntry,
    InfoTextEntry,
    QuestionEntry,
    RepeatedQuestionEntry,
    SubBlock,
)
from .errors import QuestreeError, ValidationError, PersistenceError, DefinitionError
from .questionnaire import Questionnaire
from .positions import assign_positions
from .config import ControllerConfig, RunnerConfig
from .controller import (
    QuestionnaireController,
    QuestionnaireResult,
    QuestionnaireStatus,
    ControllerResult,
)
from .replay import ReplayResolver, BlockReplay
from .persistence import (
    QuestionnairePersistence,
    MemoryPersistence,
    FileQuestionnairePersistence,
    read_answer_log,
)
from .io import BaseQuestionnaireView, CLIQuestionnaireView, MsgLevel
from .runner import QuestionnaireRunner
from .definition import load_questionnaire, save_questionnaire
from .checks import check_questionnaire, outline

__version__ = "0.1.0"

__all__ = [
    "AnswerKind",
    "QuestionAnswerInput",
    "QuestionAnswer",
    "RepeatedQuestionAnswers",
    "BlockAnswer",
    "EMPTY_ANSWER",
    "StringEntry",
    "IntEntry",
    "FloatEntry",
    "BoolEntry",
    "OptionEntry",
    "ProceedQueryEntry",
    "InfoTextEntry",
    "QuestionEntry",
    "RepeatedQuestionEntry",
    "SubBlock",
    "QuestreeError",
    "ValidationError",
    "PersistenceError",
    "DefinitionError",
    "Questionnaire",
    "assign_positions",
    "ControllerConfig",
    "RunnerConfig",
    "QuestionnaireController",
    "QuestionnaireResult",
    "QuestionnaireStatus",
    "ControllerResult",
    "ReplayResolver",
    "BlockReplay",
    "QuestionnairePersistence",
    "MemoryPersistence",
    "FileQuestionnairePersistence",
    "read_answer_log",
    "BaseQuestionnaireView",
    "CLIQuestionnaireView",
    "MsgLevel",
    "QuestionnaireRunner",
    "load_questionnaire",
    "save_questionnaire",
    "check_questionnaire",
    "outline",
]
