"""
Error types raised by the HDC-EMG engine.

Precondition violations use the built-in ``ValueError`` and ``IndexError``.
The two classes below mark the cases that deserve their own name:
incompatible hypervectors and states that the algorithms consider impossible.
"""


class DimensionMismatchError(ValueError):
    """Two hypervectors with different dimension or representation were combined."""


class UnreachableStateError(RuntimeError):
    """
    An algorithm reached a branch that cannot happen on valid input.

    Raised when amplitude binning finds no bin after clamping, or when two
    adjacent labels compare neither equal nor unequal. Either case points to
    a logic defect and must abort the run.
    """
