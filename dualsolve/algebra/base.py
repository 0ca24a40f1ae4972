"""Factorization interface shared by the numeric and symbolic backends."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from dualsolve.core.category import Algorithm, ScalarCategory


class Factorization(ABC):
    """
    A decomposition of one square matrix that solves A x = rhs for any rhs
    without refactoring.

    Built per solve call and never shared between calls.
    """

    algorithm: ClassVar[Algorithm]
    scalar_category: ClassVar[ScalarCategory]

    def __init__(self, matrix: Any) -> None:
        self._matrix = matrix

    @property
    def matrix(self) -> Any:
        """The matrix that was factorized."""
        return self._matrix

    @property
    def shape(self) -> tuple[int, int]:
        return tuple(self._matrix.shape)

    def __repr__(self) -> str:
        rows, cols = self.shape
        return f"{type(self).__name__}({rows}x{cols})"

    @abstractmethod
    def solve(self, rhs: Any) -> Any:
        """
        Solve A x = rhs using the stored decomposition.

        Args:
            rhs: Right-hand side vector or matrix with A.shape[0] rows

        Returns:
            Solution x with the shape of rhs
        """
        ...
