"""Tests for scalar categories, value extraction and solve planning."""

import numpy as np
import pytest
import sympy as sp

from dualsolve import Algorithm, Dual, DualMatrix, ScalarCategory, extract_values, scalar_category
from dualsolve.core.plan import check_num_variables, deduce_plan, num_derivatives
from dualsolve.core.exceptions import DerivativeSizeError, VariableCountError


def test_scalar_category():
    assert scalar_category(np.eye(2)) == ScalarCategory.NUMERIC
    assert scalar_category(np.eye(2, dtype=int)) == ScalarCategory.NUMERIC
    assert scalar_category(DualMatrix.from_values(np.eye(2))) == ScalarCategory.DUAL
    assert scalar_category(sp.eye(2)) == ScalarCategory.SYMBOLIC
    assert scalar_category(sp.ImmutableMatrix([[1]])) == ScalarCategory.SYMBOLIC


def test_scalar_category_rejects_object_arrays():
    entries = np.array([Dual(1.0), Dual(2.0)], dtype=object)
    with pytest.raises(TypeError, match="wrap dual entries in DualMatrix"):
        scalar_category(entries)


def test_scalar_category_rejects_other_types():
    with pytest.raises(TypeError, match="Unsupported matrix type list"):
        scalar_category([[1.0]])


def test_extract_values():
    A = np.array([[1, 2], [3, 4]])
    assert extract_values(A).dtype == np.float64
    assert np.allclose(extract_values(A), A)

    D = DualMatrix.from_gradient([1.0, 2.0], [[1.0], [2.0]])
    assert np.allclose(extract_values(D), [1.0, 2.0])

    with pytest.raises(TypeError, match="no numeric value"):
        extract_values(sp.eye(2))


def test_algorithm_coerce():
    assert Algorithm.coerce(Algorithm.PIVOTED_QR) is Algorithm.PIVOTED_QR
    assert Algorithm.coerce("robust_cholesky") is Algorithm.ROBUST_CHOLESKY
    assert Algorithm.coerce(" Cholesky ") is Algorithm.CHOLESKY
    with pytest.raises(ValueError, match="expected one of"):
        Algorithm.coerce(3)


def test_num_derivatives():
    assert num_derivatives(np.eye(2), "A") == 0
    assert num_derivatives(sp.eye(2), "A") == 0
    assert num_derivatives(DualMatrix.from_values([1.0, 2.0]), "b") == 0

    M = DualMatrix([Dual(1.0), Dual(2.0, [1.0, 2.0]), Dual(3.0, [0.0, 1.0])])
    assert num_derivatives(M, "b") == 2


def test_num_derivatives_mismatch_message():
    M = DualMatrix([[Dual(1.0, [1, 2, 3]), Dual(2.0, [1, 2])], [Dual(3.0), Dual(4.0)]])

    with pytest.raises(DerivativeSizeError) as excinfo:
        num_derivatives(M, "A")

    assert str(excinfo.value) == "A[0, 1] has size 2, while another entry has size 3"
    assert excinfo.value.size == 2
    assert excinfo.value.expected_size == 3


def test_check_num_variables():
    assert check_num_variables(0, 0) == 0
    assert check_num_variables(3, 0) == 3
    assert check_num_variables(0, 4) == 4
    assert check_num_variables(2, 2) == 2
    with pytest.raises(VariableCountError) as excinfo:
        check_num_variables(3, 4)
    assert excinfo.value.num_variables_a == 3
    assert excinfo.value.num_variables_b == 4


def test_plan_numeric():
    plan = deduce_plan(np.eye(2), np.ones(2))
    assert plan.result_category == ScalarCategory.NUMERIC
    assert plan.num_variables == 0
    assert plan.num_solves == 1


def test_plan_symbolic():
    plan = deduce_plan(sp.eye(2), sp.Matrix(sp.symbols("u v")))
    assert plan.result_category == ScalarCategory.SYMBOLIC
    assert plan.num_solves == 1


def test_plan_dual_counts_solves():
    A = DualMatrix.from_gradient(np.eye(2), np.ones((4, 3)))
    plan = deduce_plan(A, np.ones(2))

    assert plan.a_category == ScalarCategory.DUAL
    assert plan.b_category == ScalarCategory.NUMERIC
    assert plan.result_category == ScalarCategory.DUAL
    assert plan.num_variables == 3
    assert plan.num_solves == 4


def test_plan_dual_without_derivatives():
    plan = deduce_plan(np.eye(2), DualMatrix.from_values([1.0, 2.0]))
    assert plan.result_category == ScalarCategory.DUAL
    assert plan.num_variables == 0
    assert plan.num_solves == 1


def test_plan_rejects_symbolic_with_dual():
    with pytest.raises(TypeError, match="symbolic operand and a dual one"):
        deduce_plan(sp.eye(2), DualMatrix.from_values([1.0, 2.0]))


def test_plan_checks_A_before_b():
    A = DualMatrix([[Dual(1.0, [1, 2, 3]), Dual(0.0, [1])], [Dual(0.0), Dual(1.0)]])
    b = DualMatrix([Dual(1.0, [1]), Dual(1.0, [1, 2])])
    with pytest.raises(DerivativeSizeError, match=r"^A\[0, 1\]"):
        deduce_plan(A, b)
