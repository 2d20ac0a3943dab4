"""
Questionnaire Entries

Typed answer constraints and the nodes of the question tree.

Every constraint type validates raw user input with the same rules for
empty input:

- a configured default value is used when the input is empty
- otherwise a required question fails with "Input is needed"
- otherwise the answer is skipped (an answer without value)
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .answers import INT_MAX, INT_MIN, AnswerKind, QuestionAnswerInput
from .errors import ValidationError

INPUT_NEEDED_MSG = "No default value is set. Input is needed."

_INT_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
_INDEX_PATTERN = re.compile(r"\d+", re.ASCII)
_TRUE_WORDS = ("y", "yes", "true")
_FALSE_WORDS = ("n", "no", "false")


def _empty_input(kind: AnswerKind, default: Optional[Any], required: bool) -> QuestionAnswerInput:
    if default is not None:
        return QuestionAnswerInput(kind, default)
    if required:
        raise ValidationError(INPUT_NEEDED_MSG)
    return QuestionAnswerInput(kind)


Number = Union[int, float]


def _check_range(value: Number, min_value: Optional[Number], max_value: Optional[Number]) -> None:
    if min_value is not None and value < min_value:
        raise ValidationError(f"Input is smaller than the allowed minimum of {min_value}.")
    if max_value is not None and value > max_value:
        raise ValidationError(f"Input is bigger than the allowed maximum of {max_value}.")


def _parse_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise ValidationError("Input can not be cast into a bool value. Use 'y' or 'n'.")


@dataclass
class StringEntry:
    """Free text answer with optional length and pattern constraints."""
    default_value: Optional[str] = None
    regexp: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None

    kind = AnswerKind.STRING

    def validate(self, raw_input: str, required: bool = True) -> QuestionAnswerInput:
        text = raw_input.strip()
        if not text:
            return _empty_input(self.kind, self.default_value, required)
        if self.min_length is not None and len(text) < self.min_length:
            raise ValidationError(f"Input is shorter than {self.min_length} characters.")
        if self.max_length is not None and len(text) > self.max_length:
            raise ValidationError(f"Input is longer than {self.max_length} characters.")
        # unanchored search, the pattern itself decides about anchoring
        if self.regexp is not None and re.search(self.regexp, text) is None:
            raise ValidationError(f"Input doesn't match the expected format: {self.regexp}")
        return QuestionAnswerInput(self.kind, text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "string",
            "default_value": self.default_value,
            "regexp": self.regexp,
            "min_length": self.min_length,
            "max_length": self.max_length,
        }


@dataclass
class IntEntry:
    """Integer answer with optional bounds."""
    default_value: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None

    kind = AnswerKind.INT

    def validate(self, raw_input: str, required: bool = True) -> QuestionAnswerInput:
        text = raw_input.strip()
        if not text:
            return _empty_input(self.kind, self.default_value, required)
        if not _INT_PATTERN.fullmatch(text):
            raise ValidationError("Input can not be cast into an int value.")
        value = int(text)
        if not INT_MIN <= value <= INT_MAX:
            raise ValidationError("Input can not be cast into an int value.")
        _check_range(value, self.min, self.max)
        return QuestionAnswerInput(self.kind, value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "int",
            "default_value": self.default_value,
            "min": self.min,
            "max": self.max,
        }


@dataclass
class FloatEntry:
    """Floating point answer with optional bounds."""
    default_value: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None

    kind = AnswerKind.FLOAT

    def validate(self, raw_input: str, required: bool = True) -> QuestionAnswerInput:
        text = raw_input.strip()
        if not text:
            return _empty_input(self.kind, self.default_value, required)
        try:
            value = float(text)
        except ValueError:
            raise ValidationError("Input can not be cast into a float value.")
        if "_" in text or not math.isfinite(value):
            raise ValidationError("Input can not be cast into a float value.")
        _check_range(value, self.min, self.max)
        return QuestionAnswerInput(self.kind, value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "float",
            "default_value": self.default_value,
            "min": self.min,
            "max": self.max,
        }


@dataclass
class BoolEntry:
    """Yes/no answer."""
    default_value: Optional[bool] = None

    kind = AnswerKind.BOOL

    def validate(self, raw_input: str, required: bool = True) -> QuestionAnswerInput:
        text = raw_input.strip()
        if not text:
            return _empty_input(self.kind, self.default_value, required)
        return QuestionAnswerInput(self.kind, _parse_bool(text))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "bool",
            "default_value": self.default_value,
        }


@dataclass
class OptionEntry:
    """
    Choice from a fixed list of options.

    The input is the zero-based index of the option, the answer is the
    option label. ``default_value`` is an index as well.
    """
    options: List[str] = field(default_factory=list)
    default_value: Optional[int] = None

    kind = AnswerKind.OPTION

    def validate(self, raw_input: str, required: bool = True) -> QuestionAnswerInput:
        text = raw_input.strip()
        if not text:
            if self.default_value is None:
                return _empty_input(self.kind, None, required)
            if not 0 <= self.default_value < len(self.options):
                raise ValidationError("Default value index is bigger than the options list.")
            return QuestionAnswerInput(self.kind, self.options[self.default_value])
        if not _INDEX_PATTERN.fullmatch(text):
            raise ValidationError("Input can't be cast into an option index.")
        index = int(text)
        if index >= len(self.options):
            raise ValidationError(f"Option index {index} is out of range (0-{len(self.options) - 1}).")
        return QuestionAnswerInput(self.kind, self.options[index])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "option",
            "options": list(self.options),
            "default_value": self.default_value,
        }


@dataclass
class ProceedQueryEntry:
    """Yes/no decision used to gate parts of a questionnaire."""
    marker: int = 0

    kind = AnswerKind.BOOL

    def validate(self, raw_input: str, required: bool = True) -> QuestionAnswerInput:
        text = raw_input.strip()
        if not text:
            return _empty_input(self.kind, None, required)
        return QuestionAnswerInput(self.kind, _parse_bool(text))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "proceed", "marker": self.marker}


@dataclass
class InfoTextEntry:
    """Plain information, the user only acknowledges it."""

    kind = AnswerKind.NONE

    def validate(self, raw_input: str, required: bool = True) -> QuestionAnswerInput:
        return QuestionAnswerInput(self.kind)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "info"}


EntryType = Union[
    StringEntry,
    IntEntry,
    FloatEntry,
    BoolEntry,
    OptionEntry,
    ProceedQueryEntry,
    InfoTextEntry,
]


def entry_type_from_dict(d: Dict[str, Any]) -> EntryType:
    """Create an entry type from its ``to_dict`` representation."""
    entry_type = d.get("type")
    if entry_type == "string":
        return StringEntry(
            default_value=d.get("default_value"),
            regexp=d.get("regexp"),
            min_length=d.get("min_length"),
            max_length=d.get("max_length"),
        )
    if entry_type == "int":
        return IntEntry(
            default_value=d.get("default_value"),
            min=d.get("min"),
            max=d.get("max"),
        )
    if entry_type == "float":
        return FloatEntry(
            default_value=d.get("default_value"),
            min=d.get("min"),
            max=d.get("max"),
        )
    if entry_type == "bool":
        return BoolEntry(default_value=d.get("default_value"))
    if entry_type == "option":
        return OptionEntry(
            options=list(d.get("options", [])),
            default_value=d.get("default_value"),
        )
    if entry_type == "proceed":
        return ProceedQueryEntry(marker=d.get("marker", 0))
    if entry_type == "info":
        return InfoTextEntry()
    raise ValueError(f"Unknown entry type: {entry_type!r}")


@dataclass
class QuestionEntry:
    """A single question of the questionnaire."""
    id: str
    query_text: str
    entry_type: EntryType = field(default_factory=StringEntry)
    help_text: Optional[str] = None
    required: bool = True
    position: Optional[int] = None

    def validate(self, raw_input: str) -> QuestionAnswerInput:
        try:
            return self.entry_type.validate(raw_input, self.required)
        except ValidationError as e:
            if e.entry_id is None:
                e.entry_id = self.id
            raise

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "question",
            "id": self.id,
            "query_text": self.query_text,
            "help_text": self.help_text,
            "required": self.required,
            "entry_type": self.entry_type.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "QuestionEntry":
        return cls(
            id=d["id"],
            query_text=d["query_text"],
            entry_type=entry_type_from_dict(d.get("entry_type", {"type": "string"})),
            help_text=d.get("help_text"),
            required=d.get("required", True),
        )


@dataclass
class RepeatedQuestionEntry:
    """
    A question asked up to ``max_count`` times (0 means unbounded).

    Iterations after the first use ``secondary_query_text`` when it is set.
    An empty answer ends the repetition once ``min_count`` answers exist.
    """
    id: str
    query_text: str
    entry_type: EntryType = field(default_factory=StringEntry)
    secondary_query_text: Optional[str] = None
    help_text: Optional[str] = None
    required: bool = True
    min_count: int = 0
    max_count: int = 0
    position: Optional[int] = None

    def query_text_for(self, iteration: int) -> str:
        if iteration <= 1 or self.secondary_query_text is None:
            return self.query_text
        return self.secondary_query_text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "repeated",
            "id": self.id,
            "query_text": self.query_text,
            "secondary_query_text": self.secondary_query_text,
            "help_text": self.help_text,
            "required": self.required,
            "min_count": self.min_count,
            "max_count": self.max_count,
            "entry_type": self.entry_type.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RepeatedQuestionEntry":
        return cls(
            id=d["id"],
            query_text=d["query_text"],
            entry_type=entry_type_from_dict(d.get("entry_type", {"type": "string"})),
            secondary_query_text=d.get("secondary_query_text"),
            help_text=d.get("help_text"),
            required=d.get("required", True),
            min_count=d.get("min_count", 0),
            max_count=d.get("max_count", 0),
        )


@dataclass
class SubBlock:
    """
    A group of entries guarded by a start prompt.

    With an ``end_text`` the user is asked at the end of each pass whether to
    continue; the entries run again only when ``loop_over_entries`` is set.
    Without an ``end_text`` the block runs at most once.
    """
    id: str
    start_text: str
    end_text: Optional[str] = None
    help_text: Optional[str] = None
    entries: List["QuestionnaireEntry"] = field(default_factory=list)
    loop_over_entries: bool = False
    position: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "block",
            "id": self.id,
            "start_text": self.start_text,
            "end_text": self.end_text,
            "help_text": self.help_text,
            "loop_over_entries": self.loop_over_entries,
            "entries": [e.to_dict() for e in self.entries],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SubBlock":
        return cls(
            id=d["id"],
            start_text=d.get("start_text", ""),
            end_text=d.get("end_text"),
            help_text=d.get("help_text"),
            entries=[entry_from_dict(e) for e in d.get("entries", [])],
            loop_over_entries=d.get("loop_over_entries", False),
        )


QuestionnaireEntry = Union[QuestionEntry, SubBlock, RepeatedQuestionEntry]

_ENTRY_KINDS = {
    "question": QuestionEntry,
    "block": SubBlock,
    "repeated": RepeatedQuestionEntry,
}


def entry_from_dict(d: Dict[str, Any]) -> QuestionnaireEntry:
    kind = d.get("kind", "question")
    if kind not in _ENTRY_KINDS:
        raise ValueError(f"Unknown entry kind: {kind!r}")
    return _ENTRY_KINDS[kind].from_dict(d)
