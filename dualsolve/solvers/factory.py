"""Factorization selection by algorithm tag and scalar category."""

import logging
from typing import Any, Union

from dualsolve.algebra.base import Factorization
from dualsolve.algebra.dense import DENSE_FACTORIZATIONS
from dualsolve.algebra.symbolic import SYMBOLIC_FACTORIZATIONS
from dualsolve.core.category import (
    Algorithm,
    ScalarCategory,
    extract_values,
    scalar_category,
)
from dualsolve.core.exceptions import UnsupportedAlgorithmError

logger = logging.getLogger(__name__)


def get_linear_solver(
    algorithm: Union[Algorithm, str],
    A: Any,
) -> Factorization:
    """
    Build the factorization of A for the requested algorithm.

    Numeric matrices are factorized as given. Dual matrices are factorized
    through their values, so the result always works over plain floats no
    matter how many variables A tracks. Symbolic matrices are factorized
    exactly; only Cholesky and pivoted LU are available for them.

    Args:
        algorithm: Algorithm tag or its name
        A: Square matrix of any scalar category

    Returns:
        Factorization with the same shape as A
    """
    algorithm = Algorithm.coerce(algorithm)
    category = scalar_category(A)

    if category == ScalarCategory.SYMBOLIC:
        factorization_type = SYMBOLIC_FACTORIZATIONS.get(algorithm)
        if factorization_type is None:
            raise UnsupportedAlgorithmError(algorithm, category)
        matrix = A
    else:
        factorization_type = DENSE_FACTORIZATIONS[algorithm]
        matrix = extract_values(A)

    factorization = factorization_type(matrix)
    logger.debug(
        "Built %r for %s matrix", factorization, category.name.lower()
    )
    return factorization
