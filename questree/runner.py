"""
Questionnaire Runner

Sets up a questionnaire session: picks the persistence backend, offers to
resume from a log left by an interrupted session, and runs the controller.
"""

import logging
from typing import Iterable, Optional

from .answers import QuestionAnswer
from .config import RunnerConfig
from .controller import QuestionnaireController, QuestionnaireResult
from .io.base_io import BaseQuestionnaireView
from .io.cli_io import CLIQuestionnaireView
from .persistence import FileQuestionnairePersistence, QuestionnairePersistence
from .questionnaire import Questionnaire

logger = logging.getLogger(__name__)

RESUME_BLOCK_ID = "00"
RESUME_PROMPT = (
    "Found persistence file, for a questionnaire. "
    "Do you want to load it to proceed where you stopped last time?"
)


class QuestionnaireRunner:
    """
    Runs one questionnaire session.

    Parameters
    ----------
    questionnaire : Questionnaire
        The questionnaire to run
    config : RunnerConfig, optional
        Session settings, defaults to ``RunnerConfig()``
    imported_data : iterable of QuestionAnswer, optional
        Answers to replay. When given, no persistence file is offered.
    view : BaseQuestionnaireView, optional
        Defaults to a CLI view
    persistence : QuestionnairePersistence, optional
        Defaults to a file backend at ``config.persistence_file``
    """

    def __init__(
        self,
        questionnaire: Questionnaire,
        config: Optional[RunnerConfig] = None,
        imported_data: Optional[Iterable[QuestionAnswer]] = None,
        view: Optional[BaseQuestionnaireView] = None,
        persistence: Optional[QuestionnairePersistence] = None,
    ):
        self.config = config or RunnerConfig()
        self.questionnaire = questionnaire
        self.questionnaire.title = self.config.resolve_title(questionnaire.title)
        self.imported_data = list(imported_data) if imported_data is not None else None
        self.view = view or CLIQuestionnaireView()
        self.persistence = persistence or FileQuestionnairePersistence(self.config.persistence_file)

    def _resume_from_file(self) -> Optional[bool]:
        """Offer to load a left over log. Returns None if the prompt was canceled."""
        persistence = self.persistence
        if not isinstance(persistence, FileQuestionnairePersistence) or not persistence.exists():
            return False

        logger.info(f"Found answer log {persistence.path}")
        decision = self.view.show_proceed_screen(RESUME_BLOCK_ID, RESUME_PROMPT, None, 0, 0, None)
        if decision.canceled:
            return None
        if decision.proceed:
            persistence.load()
        else:
            logger.info("Starting a fresh session, discarding the old answer log")
        # replayed answers are written again once they are confirmed
        persistence.remove()
        return decision.proceed

    def run(self) -> QuestionnaireResult:
        """
        Run the session.

        Returns
        -------
        QuestionnaireResult
            Finished with all answers, or canceled

        Raises
        ------
        PersistenceError
            If the answer log can't be read or written
        """
        if self.imported_data is not None:
            logger.info(f"Importing {len(self.imported_data)} answers")
            self.persistence.import_answers(self.imported_data)
        elif self._resume_from_file() is None:
            return QuestionnaireResult.canceled()

        self.view.fast_forward = self.config.autofill
        controller = QuestionnaireController(
            self.questionnaire,
            self.view,
            self.persistence,
            config=self.config.controller,
        )
        result = controller.run()
        logger.info(f"Session ended: {result.status.value}")
        return result
