"""Derivative consistency checks and solve-plan deduction."""

from dataclasses import dataclass
from typing import Any

import numpy as np

from dualsolve.core.category import ScalarCategory, scalar_category
from dualsolve.core.exceptions import DerivativeSizeError, VariableCountError


@dataclass(frozen=True)
class SolvePlan:
    """What a single linear solve has to compute."""

    a_category: ScalarCategory
    b_category: ScalarCategory
    result_category: ScalarCategory

    # Derivative propagation
    num_variables: int   # k: tracked variables shared by A and b
    num_solves: int      # 1 value solve + k derivative solves


def num_derivatives(M: Any, name: str) -> int:
    """
    Number of variables M tracks derivatives for.

    Every non-empty derivative vector in a dual matrix must have the same
    length; empty vectors are exempt. Numeric and symbolic matrices track
    none.

    Args:
        M: Matrix of any scalar category
        name: Name used in error messages ("A", "b")

    Returns:
        Common derivative length, 0 if every vector is empty
    """
    if scalar_category(M) != ScalarCategory.DUAL:
        return 0

    expected = 0
    for index in np.ndindex(M.shape):
        size = M[index].num_derivatives
        if size == 0:
            continue
        if expected == 0:
            expected = size
        elif size != expected:
            location = ", ".join(str(i) for i in index)
            raise DerivativeSizeError(
                f"{name}[{location}] has size {size}, while another entry "
                f"has size {expected}",
                matrix_name=name,
                index=index,
                size=size,
                expected_size=expected,
            )
    return expected


def check_num_variables(num_variables_a: int, num_variables_b: int) -> int:
    """Combine the variable counts of A and b, rejecting a mismatch."""
    if num_variables_a and num_variables_b and num_variables_a != num_variables_b:
        raise VariableCountError(num_variables_a, num_variables_b)
    return max(num_variables_a, num_variables_b)


def deduce_plan(A: Any, b: Any) -> SolvePlan:
    """
    Classify A and b and validate their derivatives.

    Runs before any factorization so inconsistent input fails early.

    Args:
        A: Square system matrix
        b: Right-hand side

    Returns:
        Plan describing the result category and number of solves
    """
    a_category = scalar_category(A)
    b_category = scalar_category(b)

    symbolic = (a_category == ScalarCategory.SYMBOLIC, b_category == ScalarCategory.SYMBOLIC)
    if all(symbolic):
        return SolvePlan(
            a_category=a_category,
            b_category=b_category,
            result_category=ScalarCategory.SYMBOLIC,
            num_variables=0,
            num_solves=1,
        )
    if any(symbolic):
        raise TypeError(
            "Cannot solve with a symbolic operand and a "
            f"{(b_category if symbolic[0] else a_category).name.lower()} one; "
            "both A and b must be symbolic"
        )

    if a_category == b_category == ScalarCategory.NUMERIC:
        return SolvePlan(
            a_category=a_category,
            b_category=b_category,
            result_category=ScalarCategory.NUMERIC,
            num_variables=0,
            num_solves=1,
        )

    num_variables = check_num_variables(
        num_derivatives(A, "A"), num_derivatives(b, "b")
    )
    return SolvePlan(
        a_category=a_category,
        b_category=b_category,
        result_category=ScalarCategory.DUAL,
        num_variables=num_variables,
        num_solves=1 + num_variables,
    )
