"""
Dualsolve: differentiable dense linear solves.

Solves A x = b where the entries of A and b are plain numbers, dual numbers
carrying first-order derivatives, or exact SymPy expressions:
- Scalar-category classification and value extraction
- Factorization selection (Cholesky, robust Cholesky, pivoted LU/QR)
- Derivative propagation reusing a single factorization
- Consistency checks on derivative sizes
"""

import logging

__version__ = "0.1.0"

from dualsolve.core.category import Algorithm, ScalarCategory, scalar_category, extract_values
from dualsolve.core.dual import Dual, DualMatrix
from dualsolve.core.exceptions import (
    DualSolveError,
    DerivativeSizeError,
    VariableCountError,
    UnsupportedAlgorithmError,
)
from dualsolve.solvers.factory import get_linear_solver
from dualsolve.solvers.linear_solve import linear_solve

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Algorithm",
    "ScalarCategory",
    "scalar_category",
    "extract_values",
    "Dual",
    "DualMatrix",
    "DualSolveError",
    "DerivativeSizeError",
    "VariableCountError",
    "UnsupportedAlgorithmError",
    "get_linear_solver",
    "linear_solve",
]
