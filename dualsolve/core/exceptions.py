"""
Exception hierarchy for dualsolve.

Every error raised by this package derives from DualSolveError. Errors that
describe bad input also derive from the matching builtin, so code catching
ValueError keeps working.

Shape and numerical failures raised by NumPy, SciPy or SymPy (non-square
matrices, non-positive-definite input, singular pivots) are not wrapped.
"""

from typing import Any, Optional


class DualSolveError(Exception):
    """Base exception for all dualsolve errors."""
    pass


class DerivativeSizeError(DualSolveError, ValueError):
    """
    Derivative vectors that must share a length do not.

    Attributes:
        matrix_name: Name of the matrix holding the offending entry, if any
        index: Index of the offending entry, if known
        size: Length of the offending derivative vector
        expected_size: Length established by an earlier entry
    """

    def __init__(
        self,
        message: str,
        matrix_name: Optional[str] = None,
        index: Optional[tuple[int, ...]] = None,
        size: Optional[int] = None,
        expected_size: Optional[int] = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.index = index
        self.size = size
        self.expected_size = expected_size


class VariableCountError(DualSolveError, ValueError):
    """
    A and b track derivatives for a different number of variables.

    Attributes:
        num_variables_a: Variables tracked by A
        num_variables_b: Variables tracked by b
    """

    def __init__(self, num_variables_a: int, num_variables_b: int):
        super().__init__(
            f"A contains derivatives for {num_variables_a} variables, while "
            f"b contains derivatives for {num_variables_b} variables"
        )
        self.num_variables_a = num_variables_a
        self.num_variables_b = num_variables_b


class UnsupportedAlgorithmError(DualSolveError, NotImplementedError):
    """The requested factorization is not available for this scalar category."""

    def __init__(self, algorithm: Any, category: Any):
        super().__init__(
            f"{algorithm.name} factorization is not supported for "
            f"{category.name.lower()} matrices"
        )
        self.algorithm = algorithm
        self.category = category
