"""
Echelon - Exact Linear Systems over Any Field
==============================================

Row reduction to (strict) row-echelon form plus a full description of the
solution set: none, exactly one, or an affine family with free parameters.

Quick start:
    import echelon

    # Solve Ax = b exactly (rationals by default)
    result = echelon.solve([[1, 2, 3]], [4])
    result.kind               # "many"
    result.offset             # particular solution
    result.parameter_matrix   # one column per free variable

    # Work on an augmented matrix directly
    m = echelon.Matrix.from_rows([[1, 0, 3], [0, 1, -1]])
    echelon.is_exact_solution_form(m)   # True

    # Other fields
    from echelon.field import PrimeField, RealField
    echelon.solve(A, b, field=PrimeField(7))

License: MIT
"""

__version__ = "0.1.0"

from echelon.field import Field, RationalField, RealField, PrimeField, ModInt
from echelon.matrix import Matrix
from echelon.forms import is_echelon, is_strict_echelon, is_exact_solution_form
from echelon.reduce import (
    reduce_to_echelon,
    reduce_to_strict_echelon,
    reduce_to_reduced_echelon,
)
from echelon.solver import (
    NoSolution, ExactSolution, ManySolutions,
    solve, solve_linear_system, satisfies,
)
from echelon.detector import detect_system

__all__ = [
    "Field", "RationalField", "RealField", "PrimeField", "ModInt",
    "Matrix",
    "is_echelon", "is_strict_echelon", "is_exact_solution_form",
    "reduce_to_echelon", "reduce_to_strict_echelon", "reduce_to_reduced_echelon",
    "NoSolution", "ExactSolution", "ManySolutions",
    "solve", "solve_linear_system", "satisfies",
    "detect_system",
]
