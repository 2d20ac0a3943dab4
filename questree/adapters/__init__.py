"""
Adapters for converting questionnaires to other representations.
"""

from .networkx_adapter import to_networkx_graph

__all__ = [
    "to_networkx_graph",
]
