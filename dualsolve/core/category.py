"""Scalar categories, factorization tags and value extraction."""

from enum import Enum, auto
from typing import Any, Union

import numpy as np
import sympy as sp
from numpy.typing import NDArray

from dualsolve.core.dual import DualMatrix


class ScalarCategory(Enum):
    """Numeric domain of a matrix's entries."""
    NUMERIC = auto()    # plain floats
    DUAL = auto()       # value + first-order derivatives
    SYMBOLIC = auto()   # exact expressions over named variables


class Algorithm(Enum):
    """Dense factorization used to solve A x = b."""
    CHOLESKY = auto()         # LL^T, symmetric positive definite
    ROBUST_CHOLESKY = auto()  # LDL^T with symmetric pivoting
    PIVOTED_LU = auto()       # LU with partial (row) pivoting
    PIVOTED_QR = auto()       # Householder QR with column pivoting

    @classmethod
    def coerce(cls, tag: Union["Algorithm", str]) -> "Algorithm":
        """Accept an Algorithm or its case-insensitive member name."""
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            try:
                return cls[tag.strip().upper()]
            except KeyError:
                pass
        valid = ", ".join(member.name.lower() for member in cls)
        raise ValueError(f"Unknown algorithm {tag!r}; expected one of: {valid}")


def scalar_category(M: Any) -> ScalarCategory:
    """
    Classify a matrix by its container type.

    Entries are never inspected: duals must be wrapped in DualMatrix and
    expressions in sympy.Matrix.

    Args:
        M: DualMatrix, sympy matrix, or numeric ndarray

    Returns:
        Scalar category of M
    """
    if isinstance(M, DualMatrix):
        return ScalarCategory.DUAL
    if isinstance(M, sp.MatrixBase):
        return ScalarCategory.SYMBOLIC
    if isinstance(M, np.ndarray):
        if M.dtype.kind in "biuf":
            return ScalarCategory.NUMERIC
        raise TypeError(
            f"Cannot classify ndarray of dtype {M.dtype}; wrap dual entries "
            "in DualMatrix and symbolic entries in sympy.Matrix"
        )
    raise TypeError(
        f"Unsupported matrix type {type(M).__name__}; expected numpy.ndarray, "
        "DualMatrix or sympy.Matrix"
    )


def extract_values(M: Any) -> NDArray:
    """
    Strip derivative information, returning the plain float matrix.

    Symbolic matrices have no numeric value and raise TypeError.
    """
    category = scalar_category(M)
    if category == ScalarCategory.NUMERIC:
        return np.asarray(M, dtype=float)
    if category == ScalarCategory.DUAL:
        return M.values
    raise TypeError("Symbolic matrices have no numeric value to extract")
