"""
Structural Checks

Finds problems in a questionnaire definition before it is run.
"""

from collections import Counter
from typing import Iterator, List

import networkx as nx

from .adapters.networkx_adapter import to_networkx_graph
from .entries import QuestionnaireEntry, SubBlock
from .positions import iter_positions
from .questionnaire import Questionnaire


def _iter_ids(entries: List[QuestionnaireEntry]) -> Iterator[str]:
    for entry in entries:
        yield entry.id
        if isinstance(entry, SubBlock):
            yield from _iter_ids(entry.entries)


def _check_block_prefixes(block: SubBlock, errors: List[str]) -> None:
    prefix = f"{block.id}_"
    for entry in block.entries:
        if not entry.id.startswith(prefix):
            errors.append(
                f"Entry '{entry.id}' in block '{block.id}' doesn't start with '{prefix}', "
                f"replayed answers can't be matched to the block"
            )
        if isinstance(entry, SubBlock):
            _check_block_prefixes(entry, errors)


def check_questionnaire(questionnaire: Questionnaire) -> List[str]:
    """
    Check a questionnaire for structural problems.

    Checks
    ------
    - every id is used once
    - positions run from 1 to ``pos_count`` without gaps
    - entries of nested blocks carry the ``"{block_id}_"`` id prefix, which
      resuming a session relies on
    - the entries form a tree

    Returns
    -------
    List[str]
        Problem descriptions (empty if the questionnaire is fine)
    """
    errors = []
    root = questionnaire.init_block

    counts = Counter([root.id, *_iter_ids(root.entries)])
    for entry_id, count in counts.items():
        if count > 1:
            errors.append(f"Id '{entry_id}' is used {count} times")

    positions = sorted(position for _, position in iter_positions(root.entries))
    if positions != list(range(1, questionnaire.pos_count + 1)):
        errors.append(f"Positions don't run from 1 to {questionnaire.pos_count} without gaps")

    for entry in root.entries:
        if isinstance(entry, SubBlock):
            _check_block_prefixes(entry, errors)

    G = to_networkx_graph(questionnaire)
    if not nx.is_arborescence(G):
        errors.append("Entries don't form a tree")

    return errors


def outline(questionnaire: Questionnaire) -> List[str]:
    """One line per entry, indented by depth, in the order they are asked."""
    G = to_networkx_graph(questionnaire)
    root = G.graph["root"]
    depths = nx.shortest_path_length(G, root)
    lines = []
    for node in nx.dfs_preorder_nodes(G, root):
        data = G.nodes[node]
        position = data["position"] if data["position"] is not None else "-"
        indent = "  " * depths[node]
        lines.append(f"{indent}{position:>3} [{data['kind']}] {node}: {data['text']}")
    return lines
