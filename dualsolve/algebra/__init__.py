"""Factorization backends."""

from dualsolve.algebra.base import Factorization
from dualsolve.algebra.dense import (
    DenseFactorization,
    CholeskyFactorization,
    RobustCholeskyFactorization,
    PivotedLUFactorization,
    PivotedQRFactorization,
)
from dualsolve.algebra.symbolic import (
    SymbolicFactorization,
    SymbolicCholeskyFactorization,
    SymbolicLUFactorization,
)

__all__ = [
    "Factorization",
    "DenseFactorization",
    "CholeskyFactorization",
    "RobustCholeskyFactorization",
    "PivotedLUFactorization",
    "PivotedQRFactorization",
    "SymbolicFactorization",
    "SymbolicCholeskyFactorization",
    "SymbolicLUFactorization",
]
