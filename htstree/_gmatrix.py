import numpy as np
from numpy import ndarray
from scipy.sparse import csr_matrix

from htstree._nodes import NodesLike, level_sizes, validate_nodes

__all__ = ["gmatrix", "inv_s", "mnodes", "smatrix"]


def gmatrix(nodes: NodesLike) -> ndarray:
    """Group matrix of a hierarchy.

    Row ``k`` gives, for each bottom series, the 1-based index of its ancestor at level ``k``.
    Row 0 is all ones and the last row is ``1..n``.

        >>> gmatrix([[2], [3, 2]])
        array([[1, 1, 1, 1, 1],
               [1, 1, 1, 2, 2],
               [1, 2, 3, 4, 5]])

    :param nodes: branching specification, e.g. ``[[2], [3, 2]]``.
    :return: integer array of shape (number of levels, number of bottom series).
    """
    nodes = validate_nodes(nodes)
    n_levels = len(nodes)
    n = sum(nodes[-1])
    gmat = np.empty((n_levels + 1, n), dtype=int)
    gmat[n_levels, :] = np.arange(1, n + 1)
    # bottom series under each node of the current level
    repcount = np.array(nodes[-1])
    for level in range(n_levels - 1, -1, -1):
        gmat[level, :] = np.repeat(np.arange(1, len(nodes[level]) + 1), repcount)
        if level > 0:
            parent = np.repeat(np.arange(len(nodes[level - 1])), nodes[level - 1])
            repcount = np.bincount(parent, weights=repcount).astype(int)
    return gmat


def mnodes(nodes: NodesLike) -> list:
    """Number of nodes at each level, root and bottom included."""
    return level_sizes(validate_nodes(nodes))


def inv_s(nodes: NodesLike) -> ndarray:
    """Inverse of the row sums of the summing matrix.

    One entry per node, ordered level by level from the root: one over the number of
    bottom series beneath the node.

    :param nodes: branching specification.
    :return: float array of length ``sum(mnodes(nodes))``.
    """
    gmat = gmatrix(nodes)
    counts = [np.unique(row, return_counts=True)[1] for row in gmat]
    return 1.0 / np.concatenate(counts).astype(float)


def smatrix(nodes: NodesLike) -> csr_matrix:
    """Summing matrix of a hierarchy.

    :param nodes: branching specification.
    :return: sparse 0/1 matrix of shape (total number of nodes, number of bottom series),
        rows ordered as in :func:`inv_s`.
    """
    gmat = gmatrix(nodes)
    n_levels, n = gmat.shape
    offsets = np.cumsum([0] + [row.max() for row in gmat[:-1]])
    rows = (gmat - 1 + offsets.reshape((-1, 1))).reshape(-1)
    cols = np.tile(np.arange(n), n_levels)
    return csr_matrix(
        (np.ones(len(rows), dtype="int"), (rows, cols)),
        shape=(int(offsets[-1] + gmat[-1].max()), n),
    )
