from string import ascii_uppercase
from typing import Dict, List, Optional, Sequence

from htstree._nodes import ROOT_LABEL, level_name

__all__ = ["hier_name", "build_labels"]


def _letters(k: int) -> List[str]:
    """First ``k`` letter codes: A .. Z, then AA, AB, ..."""
    out = []
    for i in range(1, k + 1):
        code = ""
        while i > 0:
            i, r = divmod(i - 1, 26)
            code = ascii_uppercase[r] + code
        out.append(code)
    return out


def hier_name(nodes: List[List[int]]) -> Dict[str, List[str]]:
    """Default labels of a hierarchy.

    Level 1 nodes are named ``A, B, ...``; every deeper node appends a letter to its
    parent's label, counting from ``A`` within each parent, e.g. for ``[[2], [3, 2]]``::

        {"Level 0": ["Total"], "Level 1": ["A", "B"], "Level 2": ["AA", "AB", "AC", "BA", "BB"]}

    :param nodes: validated branching specification.
    :return: labels per level.
    """
    labels = {level_name(0): [ROOT_LABEL], level_name(1): _letters(nodes[0][0])}
    for i in range(1, len(nodes)):
        parents = labels[level_name(i)]
        labels[level_name(i + 1)] = [
            parent + letter
            for parent, count in zip(parents, nodes[i])
            for letter in _letters(count)
        ]
    return labels


def build_labels(nodes: List[List[int]], bnames: Optional[Sequence[str]] = None) -> Dict[str, List[str]]:
    """Labels for an explicit hierarchy, keeping the bottom names when they are known."""
    labels = hier_name(nodes)
    if bnames is not None:
        labels[level_name(len(nodes))] = [str(name) for name in bnames]
    return labels
