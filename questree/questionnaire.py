"""
Questionnaire

The root of a question tree. A questionnaire always has an init block that is
entered when a session starts; its positions are assigned on construction.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .entries import QuestionnaireEntry, SubBlock
from .positions import assign_positions

DEFAULT_TITLE = "A short questionnaire"


@dataclass
class Questionnaire:
    """A question tree ready to be run."""
    title: str
    init_block: SubBlock
    pos_count: int = 0

    def __post_init__(self):
        self.renumber()

    def renumber(self) -> int:
        """Assign positions to all entries and update ``pos_count``."""
        self.pos_count = assign_positions(self.init_block.entries) - 1
        return self.pos_count

    @classmethod
    def create(
        cls,
        id: str,
        start_text: str,
        entries: List[QuestionnaireEntry],
        title: str = DEFAULT_TITLE,
        end_text: Optional[str] = None,
        help_text: Optional[str] = None,
        loop_over_entries: bool = False,
    ) -> "Questionnaire":
        """
        Build a questionnaire from the parts of its init block.

        Examples
        --------
        >>> from questree import QuestionEntry
        >>> q = Questionnaire.create(
        ...     id="id00",
        ...     start_text="Do you want to start?",
        ...     entries=[QuestionEntry(id="id01", query_text="What's your name?")],
        ... )
        >>> q.pos_count
        1
        """
        init_block = SubBlock(
            id=id,
            start_text=start_text,
            end_text=end_text,
            help_text=help_text,
            entries=list(entries),
            loop_over_entries=loop_over_entries,
        )
        return cls(title=title, init_block=init_block)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "init_block": self.init_block.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Questionnaire":
        return cls(
            title=d.get("title", DEFAULT_TITLE),
            init_block=SubBlock.from_dict(d["init_block"]),
        )
