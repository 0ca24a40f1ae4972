"""Scalar types, categories and solve planning."""

from dualsolve.core.category import Algorithm, ScalarCategory, scalar_category, extract_values
from dualsolve.core.dual import Dual, DualMatrix
from dualsolve.core.plan import SolvePlan, deduce_plan, num_derivatives, check_num_variables

__all__ = [
    "Algorithm",
    "ScalarCategory",
    "scalar_category",
    "extract_values",
    "Dual",
    "DualMatrix",
    "SolvePlan",
    "deduce_plan",
    "num_derivatives",
    "check_num_variables",
]
