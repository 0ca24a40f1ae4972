"""Exact factorizations of symbolic matrices using SymPy."""

import sympy as sp

from dualsolve.algebra.base import Factorization
from dualsolve.core.category import Algorithm, ScalarCategory


def _square(A: sp.MatrixBase) -> sp.Matrix:
    A = sp.Matrix(A)
    if not A.is_square:
        raise sp.NonSquareMatrixError(f"expected square matrix, got shape {A.shape}")
    return A


class SymbolicFactorization(Factorization):
    """Factorization carried out with exact symbolic cancellation."""

    scalar_category = ScalarCategory.SYMBOLIC

    def __init__(self, A: sp.MatrixBase) -> None:
        super().__init__(_square(A))


class SymbolicCholeskyFactorization(SymbolicFactorization):
    """
    A = L L^T without conjugation, so symbols are treated as real.

    The diagonal of L contains square roots of exact pivots; no numeric
    rounding takes place.
    """

    algorithm = Algorithm.CHOLESKY

    def __init__(self, A: sp.MatrixBase) -> None:
        super().__init__(A)
        self._L = self._matrix.cholesky(hermitian=False)

    def solve(self, rhs: sp.MatrixBase) -> sp.Matrix:
        y = self._L.lower_triangular_solve(sp.Matrix(rhs))
        return self._L.T.upper_triangular_solve(y)


class SymbolicLUFactorization(SymbolicFactorization):
    """P A = L U; rows are swapped only when a pivot is identically zero."""

    algorithm = Algorithm.PIVOTED_LU

    def __init__(self, A: sp.MatrixBase) -> None:
        super().__init__(A)
        self._L, self._U, self._swaps = self._matrix.LUdecomposition()

    def solve(self, rhs: sp.MatrixBase) -> sp.Matrix:
        permuted = sp.Matrix(rhs).permute_rows(self._swaps, direction="forward")
        y = self._L.lower_triangular_solve(permuted)
        return self._U.upper_triangular_solve(y)


SYMBOLIC_FACTORIZATIONS: dict[Algorithm, type[SymbolicFactorization]] = {
    Algorithm.CHOLESKY: SymbolicCholeskyFactorization,
    Algorithm.PIVOTED_LU: SymbolicLUFactorization,
}
