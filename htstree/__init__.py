# Version of the htstree package
__version__ = "0.1.0"

__all__ = [
    "Hts",
    "hts",
    "get_nodes",
    "is_hts",
    "validate_nodes",
    "level_sizes",
    "Explicit",
    "FixedWidth",
    "Separated",
    "select_mode",
    "tokenize",
    "tokenize_fixed",
    "tokenize_separated",
    "InferredTree",
    "infer_tree",
    "hier_name",
    "build_labels",
    "gmatrix",
    "inv_s",
    "mnodes",
    "smatrix",
    "HtsError",
    "InputTypeError",
    "StructureError",
    "FormatError",
]

from htstree._errors import HtsError, InputTypeError, StructureError, FormatError

from htstree._nodes import validate_nodes, level_sizes

from htstree._tokenize import (
    Explicit,
    FixedWidth,
    Separated,
    select_mode,
    tokenize,
    tokenize_fixed,
    tokenize_separated,
)

from htstree._infer import InferredTree, infer_tree

from htstree._labels import hier_name, build_labels

from htstree._gmatrix import gmatrix, inv_s, mnodes, smatrix

from htstree._hts import Hts, hts, get_nodes, is_hts
