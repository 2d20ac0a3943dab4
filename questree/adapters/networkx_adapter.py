"""
NetworkX Adapter

Converts the question tree of a questionnaire to a ``networkx.DiGraph``.
Nodes are keyed by entry id, edges point from a block to its entries and
carry the order of the entry inside the block.
"""

from typing import List

import networkx as nx

from ..entries import QuestionnaireEntry, RepeatedQuestionEntry, SubBlock
from ..questionnaire import Questionnaire


def _entry_kind(entry: QuestionnaireEntry) -> str:
    if isinstance(entry, SubBlock):
        return "block"
    if isinstance(entry, RepeatedQuestionEntry):
        return "repeated"
    return "question"


def _entry_text(entry: QuestionnaireEntry) -> str:
    if isinstance(entry, SubBlock):
        return entry.start_text
    return entry.query_text


def _add_entries(G: nx.DiGraph, parent_id: str, entries: List[QuestionnaireEntry]) -> None:
    for order, entry in enumerate(entries):
        G.add_node(
            entry.id,
            kind=_entry_kind(entry),
            position=entry.position,
            text=_entry_text(entry),
        )
        G.add_edge(parent_id, entry.id, order=order)
        if isinstance(entry, SubBlock):
            _add_entries(G, entry.id, entry.entries)


def to_networkx_graph(questionnaire: Questionnaire) -> nx.DiGraph:
    """
    Build a directed graph of the question tree.

    Reused ids collapse into one node, so a questionnaire with duplicate ids
    doesn't produce an arborescence.

    Parameters
    ----------
    questionnaire : Questionnaire
        The questionnaire to convert

    Returns
    -------
    nx.DiGraph
        Graph rooted at the init block. The graph attribute ``root`` holds
        the init block id.
    """
    root = questionnaire.init_block
    G = nx.DiGraph(
        title=questionnaire.title,
        pos_count=questionnaire.pos_count,
        root=root.id,
    )
    G.add_node(root.id, kind="block", position=None, text=root.start_text)
    _add_entries(G, root.id, root.entries)
    return G
