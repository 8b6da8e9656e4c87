from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd
from numpy import ndarray
from pandas import DataFrame
from scipy.sparse import csr_matrix

from htstree._errors import FormatError, InputTypeError, StructureError
from htstree._gmatrix import gmatrix, inv_s, smatrix
from htstree._infer import infer_tree
from htstree._labels import build_labels
from htstree._nodes import ROOT_LABEL, level_name, level_sizes, validate_nodes
from htstree._tokenize import Explicit, InferenceMode, select_mode, tokenize

__all__ = ["Hts", "hts", "get_nodes", "is_hts"]

logger = logging.getLogger(__name__)


def _as_frame(y: Union[DataFrame, ndarray]) -> DataFrame:
    if isinstance(y, pd.Series):
        raise InputTypeError("y must be a multivariate time series, got a pandas.Series")
    if not isinstance(y, DataFrame):
        y = np.asarray(y)
        if y.ndim != 2:
            raise InputTypeError(f"y must be a multivariate time series of shape (T, n), got {y.ndim}-d input")
        y = DataFrame(y)
    if not all(pd.api.types.is_numeric_dtype(t) for t in y.dtypes):
        raise InputTypeError("all bottom-level series must be numeric")
    return y


def _bottom_names(y: DataFrame, bnames: Optional[Sequence[str]]) -> Optional[List[str]]:
    if bnames is None:
        if isinstance(y.columns, pd.RangeIndex):
            return None
        bnames = y.columns
    names = [str(name) for name in bnames]
    if len(names) != y.shape[1]:
        raise FormatError(f"{len(names)} bottom names given for {y.shape[1]} bottom series")
    if len(set(names)) != len(names):
        duplicated = pd.Index(names)[pd.Index(names).duplicated()].unique().tolist()
        raise FormatError(f"bottom names must be unique, duplicated: {duplicated[:5]}")
    return names


class Hts:
    """Hierarchical time series: bottom-level series together with the tree they sum up through.

    Build it with :func:`hts`. The object does not change after construction, every attribute
    returns a copy.
    """

    def __init__(self,
                 bts: DataFrame,
                 nodes: List[List[int]],
                 labels: Dict[str, List[str]],
                 index: ndarray,
                 mode: InferenceMode):
        """Initialize a Hts object from its parts directly. Use :func:`hts` unless the parts
        are known to be consistent.

        :param bts: bottom-level series of shape (T, n), columns in hierarchy order.
        :param nodes: validated branching specification.
        :param labels: labels per level, ``"Level 0"`` first.
        :param index: original column position of each bottom series.
        :param mode: how the hierarchy was obtained.
        """
        self._bts = bts
        self._nodes = nodes
        self._labels = labels
        self._index = index
        self._mode = mode

    @classmethod
    def new(cls,
            y: Union[DataFrame, ndarray],
            nodes: Optional[Sequence] = None,
            bnames: Optional[Sequence[str]] = None,
            characters: Optional[Union[int, Sequence[int]]] = None,
            separator: Optional[str] = None) -> Hts:
        """Construct a hierarchical time series from its bottom-level series.

        :param y: bottom-level series of shape (T, n), n >= 2. The index of a DataFrame is kept
            as time index and its columns are used as bottom names.
        :param nodes: child counts of the nodes of each level except the bottom one, e.g.
            ``[[2], [3, 2]]``: two nodes at level 1 with three and two bottom series. Defaults to
            a two-level hierarchy (total and bottom).
        :param bnames: names of the bottom series, default to the columns of ``y``.
        :param characters: segment widths of the bottom names. For instance "VICMelb" with
            ``[3, 4]`` gives state "VIC" and city "VICMelb". All names must have the same length.
        :param separator: separator of the segments of the bottom names, e.g. ``"_"`` for
            "VIC_Melb". Names may have different lengths.
        :return: Hts object. When ``characters`` or ``separator`` is given, nodes and labels are
            inferred from the names and the columns of ``y`` are reordered to follow the tree.

        **Examples**

            >>> import numpy as np
            >>> x = hts(np.random.random((100, 5)), nodes=[[2], [3, 2]])
            >>> x.labels["Level 2"]
            ['AA', 'AB', 'AC', 'BA', 'BB']
        """
        y = _as_frame(y)
        n = y.shape[1]
        if n <= 1:
            raise StructureError(f"y must be a multivariate time series, got {n} bottom series")
        names = _bottom_names(y, bnames)
        mode = select_mode(nodes, characters, separator)

        if isinstance(mode, Explicit):
            logger.info("Since characters and separator are not specified, the default labelling system is used.")
            nodes = validate_nodes(mode.nodes, n)
            labels = build_labels(nodes, names)
            index = np.arange(n)
        else:
            if names is None:
                raise FormatError("bottom names are required to infer the hierarchy from characters or separator")
            tree = infer_tree(tokenize(names, mode))
            nodes, labels, index = tree.nodes, tree.labels, tree.index
        bts = y.iloc[:, index].copy()
        bts.columns = pd.Index(labels[level_name(len(nodes))])
        return cls(bts, nodes, labels, index, mode)

    @property
    def bts(self) -> DataFrame:
        """bottom-level series, columns in hierarchy order"""
        return self._bts.copy()

    @property
    def nodes(self) -> Dict[str, List[int]]:
        """child counts per level, keyed "Level 1" .. "Level K" """
        return {level_name(i + 1): list(level) for i, level in enumerate(self._nodes)}

    @property
    def labels(self) -> Dict[str, List[str]]:
        """node labels per level, keyed "Level 0" .. "Level K" """
        return {key: list(value) for key, value in self._labels.items()}

    @property
    def index(self) -> ndarray:
        """original column position of each bottom series"""
        return self._index.copy()

    @property
    def mode(self) -> InferenceMode:
        return self._mode

    @property
    def n_bottom(self) -> int:
        return self._bts.shape[1]

    @property
    def n_levels(self) -> int:
        """number of levels, root and bottom included"""
        return len(self._nodes) + 1

    def __len__(self) -> int:
        return self._bts.shape[0]

    def mnodes(self) -> List[int]:
        """number of nodes at each level"""
        return level_sizes(self._nodes)

    def gmatrix(self) -> DataFrame:
        """group matrix, rows "Level 0" .. "Level K", columns the bottom series"""
        return DataFrame(
            gmatrix(self._nodes),
            index=[level_name(i) for i in range(self.n_levels)],
            columns=self._bts.columns,
        )

    def smatrix(self) -> csr_matrix:
        return smatrix(self._nodes)

    def inv_s(self) -> ndarray:
        return inv_s(self._nodes)

    def _node_level(self) -> ndarray:
        return np.repeat(np.arange(self.n_levels), self.mnodes())

    def aggregate_ts(self, levels: Union[int, List[int], None] = None) -> DataFrame:
        """Aggregate bottom-level time series.

        :param levels: which levels you want, all levels if None.
        :return: series of the requested levels, one column per node labelled as in
            :attr:`labels`.
        """
        s = self.smatrix()
        node_level = self._node_level()
        if levels is None:
            mask = np.ones(len(node_level), dtype=bool)
        elif isinstance(levels, int):
            mask = node_level == levels
        else:
            mask = np.isin(node_level, levels)
        names = np.concatenate([self._labels[level_name(i)] for i in range(self.n_levels)])
        return DataFrame(
            s[np.flatnonzero(mask), :].dot(self._bts.values.T).T,
            index=self._bts.index,
            columns=names[mask],
        )

    def top_series(self) -> pd.Series:
        """the top-level series, sum of all bottom-level series"""
        return self._bts.sum(axis=1).rename(ROOT_LABEL)

    def summary(self) -> str:
        mn = self.mnodes()
        lines = [
            "Hierarchical Time Series",
            f"{len(mn)} Levels",
            "Number of nodes at each level: " + " ".join(str(i) for i in mn),
            f"Total number of series: {sum(mn)}",
            f"Number of observations per series: {len(self)}",
            "Top level series:",
            self.top_series().to_string(),
        ]
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.summary()

    def __repr__(self) -> str:
        return f"Hts(n_bottom={self.n_bottom}, nodes={self._nodes}, T={len(self)})"


def hts(y: Union[DataFrame, ndarray],
        nodes: Optional[Sequence] = None,
        bnames: Optional[Sequence[str]] = None,
        characters: Optional[Union[int, Sequence[int]]] = None,
        separator: Optional[str] = None) -> Hts:
    """Create a hierarchical time series, see :meth:`Hts.new`."""
    return Hts.new(y, nodes=nodes, bnames=bnames, characters=characters, separator=separator)


def is_hts(x) -> bool:
    return isinstance(x, Hts)


def get_nodes(x: Hts) -> Dict[str, List[int]]:
    """Get the nodes of a hierarchical time series.

    :param x: Hts object.
    :return: child counts per level.
    """
    if not is_hts(x):
        raise InputTypeError(f"x must be an Hts object, got {type(x).__name__}")
    return x.nodes
