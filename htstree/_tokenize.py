import warnings
from dataclasses import dataclass
from numbers import Integral
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from htstree._errors import FormatError, InputTypeError
from htstree._nodes import level_name

__all__ = [
    "Explicit",
    "FixedWidth",
    "Separated",
    "InferenceMode",
    "select_mode",
    "tokenize",
    "tokenize_fixed",
    "tokenize_separated",
]


@dataclass(frozen=True)
class Explicit:
    """Hierarchy given directly as child counts per level."""

    nodes: Optional[Tuple] = None


@dataclass(frozen=True)
class FixedWidth:
    """Hierarchy read from fixed-width segments of the bottom names.

    ``FixedWidth((3, 4))`` reads "VICMelb" as state "VIC" and city "VICMelb".
    """

    characters: Tuple[int, ...]


@dataclass(frozen=True)
class Separated:
    """Hierarchy read from bottom names split at a separator, e.g. "VIC_Melb"."""

    separator: str


InferenceMode = Union[Explicit, FixedWidth, Separated]


def _as_tuple(x):
    if x is None:
        return None
    if isinstance(x, (list, tuple)):
        return tuple(_as_tuple(i) if isinstance(i, (list, tuple, np.ndarray)) else i for i in x)
    if isinstance(x, np.ndarray):
        return tuple(x.tolist())
    return x


def select_mode(nodes=None,
                characters: Optional[Union[int, Sequence[int]]] = None,
                separator: Optional[str] = None) -> InferenceMode:
    """Pick the way the hierarchy is built from the arguments the caller supplied.

    :param nodes: explicit branching specification.
    :param characters: segment widths of the bottom names.
    :param separator: separator inside the bottom names.
    :return: one of :class:`Explicit`, :class:`FixedWidth` or :class:`Separated`.
    """
    if characters is not None and separator is not None:
        raise FormatError("characters and separator are mutually exclusive, specify only one of them")
    if nodes is not None and (characters is not None or separator is not None):
        raise FormatError("nodes cannot be combined with characters or separator, "
                          "the node structure is inferred from the bottom names")
    if characters is not None:
        if isinstance(characters, Integral):
            characters = [characters]
        return FixedWidth(tuple(_as_tuple(list(characters))))
    if separator is not None:
        return Separated(separator)
    return Explicit(_as_tuple(nodes))


def _token_table(columns: List[List[str]]) -> pd.DataFrame:
    return pd.DataFrame({level_name(j + 1): col for j, col in enumerate(columns)})


def tokenize_fixed(bnames: Sequence[str], characters: Sequence[int]) -> pd.DataFrame:
    """Split bottom names into cumulative prefixes of fixed widths.

    :param bnames: names of the bottom-level series, all of the same length.
    :param characters: width of the segment of every level, e.g. ``[1, 2, 1]`` for "A10A".
    :return: token table, one row per name and one column per level. Column ``j`` holds the
        first ``sum(characters[:j + 1])`` characters of each name.
    """
    widths = list(characters)
    if len(widths) == 0:
        raise FormatError("characters must contain at least one segment width")
    for w in widths:
        if isinstance(w, bool) or not isinstance(w, Integral) or w < 1:
            raise FormatError(f"segment widths must be positive integers, got {w!r}")
    lengths = {len(name) for name in bnames}
    if len(lengths) != 1:
        raise FormatError(f"the bottom names must be of the same length, got lengths {sorted(lengths)}")
    length = lengths.pop()
    total = sum(widths)
    ends = np.cumsum(widths)
    if total != length:
        warnings.warn(
            f"characters {widths} cover {total} characters but the bottom names have {length}, "
            f"the deepest segment is adjusted to the end of the names",
            UserWarning,
            stacklevel=2,
        )
        ends[-1] = length
        ends = np.minimum(ends, length)
    return _token_table([[name[:end] for name in bnames] for end in ends.tolist()])


def tokenize_separated(bnames: Sequence[str], separator: str) -> pd.DataFrame:
    """Split bottom names at a separator.

    Column ``z`` of the result joins the first ``z + 1`` parts of a name back with the
    separator, so the deepest column holds the full names. Names may have different lengths.

    :param bnames: names of the bottom-level series.
    :param separator: separator between segments, e.g. ``"_"``.
    :return: token table, one row per name and one column per level.
    """
    if not isinstance(separator, str) or separator == "":
        raise FormatError(f"separator must be a non-empty string, got {separator!r}")
    missing = [name for name in bnames if separator not in name]
    if missing:
        raise FormatError(
            f"{len(missing)} bottom name(s) do not contain the separator {separator!r}: {missing[:5]}"
        )
    occurrences = {name.count(separator) for name in bnames}
    if len(occurrences) > 1:
        raise FormatError(
            f"the bottom names do not include the separator {separator!r} the same number of times, "
            f"found {sorted(occurrences)} occurrences"
        )
    parts = [name.split(separator) for name in bnames]
    depth = occurrences.pop() + 1
    return _token_table([[separator.join(p[:z + 1]) for p in parts] for z in range(depth)])


def tokenize(bnames: Sequence[str], mode: Union[FixedWidth, Separated]) -> pd.DataFrame:
    """Build the token table of the bottom names for an inference mode."""
    if isinstance(mode, FixedWidth):
        return tokenize_fixed(bnames, mode.characters)
    if isinstance(mode, Separated):
        return tokenize_separated(bnames, mode.separator)
    raise InputTypeError(f"names cannot be tokenized in {type(mode).__name__} mode")
