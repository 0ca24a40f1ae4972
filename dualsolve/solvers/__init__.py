"""Factorization selection and differentiable linear solves."""

from dualsolve.solvers.factory import get_linear_solver
from dualsolve.solvers.linear_solve import linear_solve

__all__ = [
    "get_linear_solver",
    "linear_solve",
]
