"""
Position Assignment

Numbers the entries of a questionnaire for progress display ("question N of
M"). The walk is depth-first pre-order: a block takes the next number for its
start prompt before its children continue the same counter.
"""

from typing import Iterator, List, Tuple

from .entries import QuestionnaireEntry, SubBlock


def assign_positions(entries: List[QuestionnaireEntry], start: int = 1) -> int:
    """
    Assign positions to ``entries`` and everything nested in them.

    Parameters
    ----------
    entries : list
        Entries of the root block
    start : int
        First position to hand out

    Returns
    -------
    int
        The next unused position. ``result - start`` entries were numbered.
    """
    counter = start
    for entry in entries:
        entry.position = counter
        counter += 1
        if isinstance(entry, SubBlock):
            counter = assign_positions(entry.entries, counter)
    return counter


def iter_positions(entries: List[QuestionnaireEntry]) -> Iterator[Tuple[str, int]]:
    """Yield ``(id, position)`` for every numbered entry in pre-order."""
    for entry in entries:
        if entry.position is not None:
            yield entry.id, entry.position
        if isinstance(entry, SubBlock):
            yield from iter_positions(entry.entries)
