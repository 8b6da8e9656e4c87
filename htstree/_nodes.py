from numbers import Integral
from typing import List, Mapping, Optional, Sequence, Union

from htstree._errors import InputTypeError, StructureError

__all__ = ["validate_nodes", "level_sizes", "level_name", "ROOT_LABEL", "LEVEL_PREFIX"]

ROOT_LABEL = "Total"
LEVEL_PREFIX = "Level"

NodesLike = Union[Sequence[Union[int, Sequence[int]]], Mapping[str, Sequence[int]]]


def _normalize_level(level, level_idx: int) -> List[int]:
    if isinstance(level, Integral) and not isinstance(level, bool):
        level = [level]
    if isinstance(level, (str, bytes)) or not hasattr(level, "__iter__"):
        raise InputTypeError(
            f"level {level_idx + 1} of nodes must be a list of child counts, got {type(level).__name__}"
        )
    counts = list(level)
    if len(counts) == 0:
        raise StructureError(f"level {level_idx + 1} of nodes is empty")
    for count in counts:
        if isinstance(count, bool) or not isinstance(count, Integral) or count < 1:
            raise StructureError(
                f"child counts must be positive integers, got {count!r} at level {level_idx + 1}"
            )
    return [int(c) for c in counts]


def _levels_from_mapping(nodes: Mapping) -> list:
    expected = [level_name(i + 1) for i in range(len(nodes))]
    if set(nodes.keys()) != set(expected):
        raise StructureError(
            f"nodes keys must be {expected}, got {list(nodes.keys())}"
        )
    return [nodes[key] for key in expected]


def validate_nodes(nodes: Optional[NodesLike], n_bottom: Optional[int] = None) -> List[List[int]]:
    """Check that a branching specification describes a tree over ``n_bottom`` series.

    :param nodes: child counts of every node, level by level, excluding the bottom level,
        e.g. ``[[2], [3, 2]]``. A bare integer stands for a level with a single node,
        so ``[2, [3, 2]]`` is accepted too. A mapping keyed "Level 1" .. "Level K",
        as returned by :attr:`Hts.nodes`, is read in level order. ``None`` means a two-level hierarchy.
    :param n_bottom: number of bottom-level series. If None, it is taken from the last level.
    :return: the normalised branching specification.
    """
    if nodes is None:
        if n_bottom is None:
            raise StructureError("either nodes or the number of bottom series must be given")
        return [[n_bottom]]
    if isinstance(nodes, Mapping):
        nodes = _levels_from_mapping(nodes)
    if isinstance(nodes, (str, bytes)) or not isinstance(nodes, Sequence):
        raise InputTypeError(f"nodes must be a list, got {type(nodes).__name__}")
    if len(nodes) == 0:
        raise StructureError("nodes must contain at least one level")
    levels = [_normalize_level(level, i) for i, level in enumerate(nodes)]
    if n_bottom is None:
        n_bottom = sum(levels[-1])

    if len(levels[0]) != 1:
        raise StructureError(
            f"root node cannot be empty: the first level must hold exactly one entry, got {len(levels[0])}"
        )
    if sum(levels[-1]) != n_bottom:
        raise StructureError(
            f"terminal node count mismatch: nodes imply {sum(levels[-1])} bottom series, "
            f"{n_bottom} given"
        )
    for i in range(len(levels) - 1):
        if sum(levels[i]) != len(levels[i + 1]):
            raise StructureError(
                f"level {i} and level {i + 1} do not reconcile: nodes at level {i} have "
                f"{sum(levels[i])} children in total, but level {i + 1} lists {len(levels[i + 1])} nodes"
            )
    return levels


def level_sizes(nodes: List[List[int]]) -> List[int]:
    """Number of nodes at each level, from the root down to the bottom."""
    return [1] + [sum(level) for level in nodes]


def level_name(level: int) -> str:
    return f"{LEVEL_PREFIX} {level}"
