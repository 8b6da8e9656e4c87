from dataclasses import dataclass
from typing import Dict, List

import numpy as np
import pandas as pd

from htstree._errors import StructureError
from htstree._nodes import ROOT_LABEL, level_name

__all__ = ["InferredTree", "infer_tree"]


@dataclass(frozen=True)
class InferredTree:
    """Node structure read from the bottom names.

    Attributes:
        nodes: child counts per level, excluding the bottom level.
        labels: node labels per level, ``"Level 0"`` is the root.
        index: original column position of every bottom series, in hierarchy order.
    """

    nodes: List[List[int]]
    labels: Dict[str, List[str]]
    index: np.ndarray


def _check_tree(token: pd.DataFrame) -> None:
    bottom = token.iloc[:, -1]
    duplicated = bottom[bottom.duplicated()].unique().tolist()
    if duplicated:
        raise StructureError(
            f"{len(duplicated)} bottom series share their hierarchical path with another series: "
            f"{duplicated[:5]}"
        )
    for j in range(1, token.shape[1]):
        parents = token.iloc[:, [j - 1, j]].drop_duplicates().groupby(token.columns[j]).size()
        orphans = parents[parents > 1].index.tolist()
        if orphans:
            raise StructureError(
                f"nodes {orphans[:5]} of {token.columns[j]} belong to more than one parent"
            )


def infer_tree(token: pd.DataFrame) -> InferredTree:
    """Derive the node structure, labels and bottom ordering from a token table.

    Nodes of a level keep the order in which they first appear among the bottom names,
    grouped under their parent. For already grouped names this is the order of the names.

    :param token: token table built by :func:`htstree.tokenize`, one row per bottom series
        and one column per level.
    :return: :class:`InferredTree`.
    """
    _check_tree(token)
    n_levels = token.shape[1]
    labels: Dict[str, List[str]] = {level_name(0): [ROOT_LABEL]}
    labels[level_name(1)] = pd.unique(token.iloc[:, 0]).tolist()
    nodes: List[List[int]] = [[len(labels[level_name(1)])]]

    for j in range(1, n_levels):
        parent_col, child_col = token.columns[j - 1], token.columns[j]
        rank = {tok: r for r, tok in enumerate(labels[level_name(j)])}
        pairs = token.loc[:, [parent_col, child_col]].drop_duplicates()
        pairs = pairs.assign(_rank=pairs[parent_col].map(rank)).sort_values("_rank", kind="stable")
        labels[level_name(j + 1)] = pairs[child_col].tolist()
        nodes.append(pairs.groupby("_rank", sort=True).size().tolist())

    bottom = labels[level_name(n_levels)]
    index = pd.Index(token.iloc[:, -1]).get_indexer(bottom)
    return InferredTree(nodes=nodes, labels=labels, index=np.asarray(index, dtype=int))
