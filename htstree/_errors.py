__all__ = ["HtsError", "InputTypeError", "StructureError", "FormatError"]


class HtsError(Exception):
    """Base class for errors raised while building a hierarchical time series."""


class InputTypeError(HtsError, TypeError):
    """Input has the wrong container type, e.g. a univariate series or a non-Hts object."""


class StructureError(HtsError, ValueError):
    """The hierarchy is internally inconsistent.

    Raised when the root has more than one node, the node counts of two adjacent
    levels do not reconcile, the number of terminal nodes differs from the
    number of bottom series, or two bottom series share one hierarchical path.
    """


class FormatError(StructureError):
    """Bottom-level names cannot be split with the requested segmentation."""
