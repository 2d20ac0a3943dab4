"""
Answer Model

Answer values produced by the views and the answer tree built by the
controller. The JSON shapes mirror the persisted answer log:

    {"String": "x"}, {"Int": 5}, {"Float": 1.5}, {"Bool": true},
    {"Option": "label"}, {"String": null} (skipped) and "None" (info entries)
"""

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Union

# Int answers are 32 bit signed integers
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


class AnswerKind(Enum):
    """Kind of an answer value. The values are the JSON tags."""
    STRING = "String"
    INT = "Int"
    FLOAT = "Float"
    BOOL = "Bool"
    OPTION = "Option"
    NONE = "None"


@dataclass(frozen=True)
class QuestionAnswerInput:
    """
    A typed answer to a single question.

    ``value`` is None when no input was given for a question that doesn't
    require one. That is different from any present value, including empty
    strings, zero and False.
    """
    kind: AnswerKind
    value: Optional[Any] = None

    @property
    def is_empty(self) -> bool:
        return self.value is None

    def to_dict(self) -> Union[Dict[str, Any], str]:
        if self.kind is AnswerKind.NONE:
            return AnswerKind.NONE.value
        return {self.kind.value: self.value}

    @classmethod
    def from_dict(cls, d: Union[Dict[str, Any], str]) -> "QuestionAnswerInput":
        if d == AnswerKind.NONE.value:
            return cls(AnswerKind.NONE)
        if not isinstance(d, dict) or len(d) != 1:
            raise ValueError(f"Expected a single-key answer object, got: {d!r}")

        tag, value = next(iter(d.items()))
        try:
            kind = AnswerKind(tag)
        except ValueError:
            raise ValueError(f"Unknown answer kind: {tag!r}")
        if kind is AnswerKind.NONE:
            raise ValueError("The 'None' answer kind carries no value")
        if value is None:
            return cls(kind)

        if kind is AnswerKind.INT:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Int answer expects an integer, got: {value!r}")
            if not INT_MIN <= value <= INT_MAX:
                raise ValueError(f"Int answer out of the 32 bit range: {value!r}")
        elif kind is AnswerKind.FLOAT:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Float answer expects a number, got: {value!r}")
            value = float(value)
            if not math.isfinite(value):
                raise ValueError(f"Float answer must be finite, got: {value!r}")
        elif kind is AnswerKind.BOOL:
            if not isinstance(value, bool):
                raise ValueError(f"Bool answer expects true/false, got: {value!r}")
        elif not isinstance(value, str):
            raise ValueError(f"{kind.value} answer expects a string, got: {value!r}")
        return cls(kind, value)

    def to_json(self) -> str:
        """Compact JSON, as written to the answer log."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False, allow_nan=False)

    @classmethod
    def from_json(cls, text: str) -> "QuestionAnswerInput":
        return cls.from_dict(json.loads(text))

    def display(self) -> str:
        """Human readable value, empty string when skipped."""
        if self.value is None:
            return ""
        if self.kind is AnswerKind.BOOL:
            return "yes" if self.value else "no"
        return str(self.value)


# Offered as preferred answer when replay data stops matching the current node.
EMPTY_ANSWER = QuestionAnswerInput(AnswerKind.STRING)


@dataclass
class QuestionAnswer:
    """Answer to a single question."""
    TAG: ClassVar[str] = "Question"

    id: str
    answer: QuestionAnswerInput

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "answer": self.answer.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "QuestionAnswer":
        return cls(
            id=d["id"],
            answer=QuestionAnswerInput.from_dict(d["answer"]),
        )


@dataclass
class RepeatedQuestionAnswers:
    """All answers given to a repeated question, in input order."""
    TAG: ClassVar[str] = "RepeatedQuestion"

    id: str
    answers: List[QuestionAnswerInput] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "answers": [a.to_dict() for a in self.answers],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RepeatedQuestionAnswers":
        return cls(
            id=d["id"],
            answers=[QuestionAnswerInput.from_dict(a) for a in d.get("answers", [])],
        )


@dataclass
class BlockAnswer:
    """
    Answers collected in a block.

    ``iterations`` holds one list of answers per pass through the block body.
    An empty list means the block was declined at its start prompt.
    """
    TAG: ClassVar[str] = "Block"

    id: str
    iterations: List[List["AnswerEntry"]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "iterations": [
                [answer_entry_to_dict(e) for e in iteration]
                for iteration in self.iterations
            ],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BlockAnswer":
        return cls(
            id=d["id"],
            iterations=[
                [answer_entry_from_dict(e) for e in iteration]
                for iteration in d.get("iterations", [])
            ],
        )

    def iter_answers(self) -> Iterator[Tuple[str, QuestionAnswerInput]]:
        """Yield ``(question_id, answer)`` pairs in traversal order."""
        for iteration in self.iterations:
            for entry in iteration:
                if isinstance(entry, BlockAnswer):
                    yield from entry.iter_answers()
                elif isinstance(entry, RepeatedQuestionAnswers):
                    for a in entry.answers:
                        yield entry.id, a
                else:
                    yield entry.id, entry.answer


AnswerEntry = Union[BlockAnswer, QuestionAnswer, RepeatedQuestionAnswers]

_ANSWER_TYPES = {
    BlockAnswer.TAG: BlockAnswer,
    QuestionAnswer.TAG: QuestionAnswer,
    RepeatedQuestionAnswers.TAG: RepeatedQuestionAnswers,
}


def answer_entry_to_dict(entry: AnswerEntry) -> Dict[str, Any]:
    return {entry.TAG: entry.to_dict()}


def answer_entry_from_dict(d: Dict[str, Any]) -> AnswerEntry:
    if not isinstance(d, dict) or len(d) != 1:
        raise ValueError(f"Expected a single-key answer entry, got: {d!r}")
    tag, payload = next(iter(d.items()))
    if tag not in _ANSWER_TYPES:
        raise ValueError(f"Unknown answer entry: {tag!r}")
    return _ANSWER_TYPES[tag].from_dict(payload)
