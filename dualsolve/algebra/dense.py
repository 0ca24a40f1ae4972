"""Dense numeric factorizations using NumPy/SciPy."""

import numpy as np
import scipy.linalg
from numpy.typing import ArrayLike, NDArray

from dualsolve.algebra.base import Factorization
from dualsolve.core.category import Algorithm, ScalarCategory


def _square(A: ArrayLike) -> NDArray:
    A = np.asarray(A, dtype=float)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"expected square matrix, got shape {A.shape}")
    return A


class DenseFactorization(Factorization):
    """Factorization of a plain float matrix."""

    scalar_category = ScalarCategory.NUMERIC

    def __init__(self, A: ArrayLike) -> None:
        super().__init__(_square(A))


class CholeskyFactorization(DenseFactorization):
    """A = L L^T for symmetric positive definite A (lower triangle is read)."""

    algorithm = Algorithm.CHOLESKY

    def __init__(self, A: ArrayLike) -> None:
        super().__init__(A)
        self._factor = scipy.linalg.cho_factor(self._matrix, lower=True)

    def solve(self, rhs: ArrayLike) -> NDArray:
        return scipy.linalg.cho_solve(self._factor, np.asarray(rhs, dtype=float))


class RobustCholeskyFactorization(DenseFactorization):
    """
    Symmetric indefinite A = P^T L D L^T P with Bunch-Kaufman pivoting.

    D is block diagonal with 1x1 and 2x2 blocks, so indefinite and
    semidefinite-but-nonsingular matrices that defeat plain Cholesky are
    handled.
    """

    algorithm = Algorithm.ROBUST_CHOLESKY

    def __init__(self, A: ArrayLike) -> None:
        super().__init__(A)
        lu, d, perm = scipy.linalg.ldl(self._matrix, lower=True)
        self._L = lu[perm]   # unit lower triangular after row permutation
        self._D = d
        self._perm = perm

    def solve(self, rhs: ArrayLike) -> NDArray:
        rhs = np.asarray(rhs, dtype=float)
        y = scipy.linalg.solve_triangular(
            self._L, rhs[self._perm], lower=True, unit_diagonal=True
        )
        z = scipy.linalg.solve(self._D, y, assume_a="sym")
        w = scipy.linalg.solve_triangular(
            self._L.T, z, lower=False, unit_diagonal=True
        )
        x = np.empty_like(w)
        x[self._perm] = w
        return x


class PivotedLUFactorization(DenseFactorization):
    """P A = L U with partial row pivoting."""

    algorithm = Algorithm.PIVOTED_LU

    def __init__(self, A: ArrayLike) -> None:
        super().__init__(A)
        self._factor = scipy.linalg.lu_factor(self._matrix)

    def solve(self, rhs: ArrayLike) -> NDArray:
        return scipy.linalg.lu_solve(self._factor, np.asarray(rhs, dtype=float))


class PivotedQRFactorization(DenseFactorization):
    """A P = Q R with column pivoting (Householder)."""

    algorithm = Algorithm.PIVOTED_QR

    def __init__(self, A: ArrayLike) -> None:
        super().__init__(A)
        self._Q, self._R, self._piv = scipy.linalg.qr(self._matrix, pivoting=True)

    def solve(self, rhs: ArrayLike) -> NDArray:
        rhs = np.asarray(rhs, dtype=float)
        z = scipy.linalg.solve_triangular(self._R, self._Q.T @ rhs, lower=False)
        x = np.empty_like(z)
        x[self._piv] = z
        return x


DENSE_FACTORIZATIONS: dict[Algorithm, type[DenseFactorization]] = {
    Algorithm.CHOLESKY: CholeskyFactorization,
    Algorithm.ROBUST_CHOLESKY: RobustCholeskyFactorization,
    Algorithm.PIVOTED_LU: PivotedLUFactorization,
    Algorithm.PIVOTED_QR: PivotedQRFactorization,
}
