"""Linear solves that propagate first-order derivatives."""

import logging
from typing import Any, Union

import numpy as np
import sympy as sp
from numpy.typing import NDArray

from dualsolve.core.category import Algorithm, ScalarCategory, extract_values
from dualsolve.core.dual import Dual, DualMatrix
from dualsolve.core.plan import SolvePlan, deduce_plan
from dualsolve.solvers.factory import get_linear_solver

logger = logging.getLogger(__name__)


def linear_solve(
    algorithm: Union[Algorithm, str],
    A: Any,
    b: Any,
) -> Any:
    """
    Solve A x = b, carrying derivatives of A and b through to x.

    Differentiating A x = b gives

        A dx + dA x = db   =>   dx = A^{-1} (db - dA x)

    so one factorization of the value of A serves the value solve and one
    extra solve per tracked variable.

    Result category:
        numeric, numeric   -> float ndarray
        symbolic, symbolic -> sympy.Matrix (exact, expanded)
        anything with dual -> DualMatrix (numeric operands count as duals
                              with empty derivatives)

    Args:
        algorithm: Algorithm tag or its name
        A: Square matrix (n, n)
        b: Right-hand side (n,) or (n, m)

    Returns:
        Solution x with the shape of b

    Raises:
        DerivativeSizeError: Derivative lengths differ within A or within b
        VariableCountError: A and b track a different number of variables
        UnsupportedAlgorithmError: Algorithm unavailable for symbolic input
    """
    algorithm = Algorithm.coerce(algorithm)
    plan = deduce_plan(A, b)
    logger.debug("Solve plan: %s", plan)

    if plan.result_category == ScalarCategory.NUMERIC:
        return _solve_numeric(algorithm, A, b)
    if plan.result_category == ScalarCategory.SYMBOLIC:
        return _solve_symbolic(algorithm, A, b)
    return _solve_dual(algorithm, A, b, plan)


def _solve_numeric(algorithm: Algorithm, A: NDArray, b: NDArray) -> NDArray:
    return get_linear_solver(algorithm, A).solve(b)


def _solve_symbolic(
    algorithm: Algorithm, A: sp.MatrixBase, b: sp.MatrixBase
) -> sp.Matrix:
    x = get_linear_solver(algorithm, A).solve(b)
    return x.applyfunc(lambda entry: sp.expand(sp.cancel(entry)))


def _solve_dual(algorithm: Algorithm, A: Any, b: Any, plan: SolvePlan) -> DualMatrix:
    factorization = get_linear_solver(algorithm, A)
    x_val = factorization.solve(extract_values(b))

    k = plan.num_variables
    if k == 0:
        return DualMatrix.from_values(x_val)

    dA = _derivative_tensor(A, k)
    db = _derivative_tensor(b, k)

    # Same factorization for every tracked variable
    logger.debug("Propagating derivatives for %d variables", k)
    dx = np.empty((k,) + x_val.shape)
    for t in range(k):
        dx[t] = factorization.solve(db[t] - dA[t] @ x_val)

    return _assemble(x_val, dx)


def _derivative_tensor(M: Any, num_variables: int) -> NDArray:
    """(k, *shape) derivatives of M; zeros for numeric operands."""
    if isinstance(M, DualMatrix):
        return M.derivative_tensor(num_variables)
    return np.zeros((num_variables,) + np.shape(M))


def _assemble(x_val: NDArray, dx: NDArray) -> DualMatrix:
    entries = np.empty(x_val.shape, dtype=object)
    for index in np.ndindex(x_val.shape):
        entries[index] = Dual(x_val[index], dx[(slice(None),) + index])
    return DualMatrix(entries)
