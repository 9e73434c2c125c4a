"""
Echelon Detector: Structure report for an augmented system.

Analyzes [A | b] without touching the caller's data and returns a report:
  - Shape, variable count, density
  - Which canonical forms the input already satisfies
  - Rank, pivot and free variables, and the kind of solution set

Usage:
    import echelon
    report = echelon.detect_system(augmented)
    print(report["kind"], report["free_variables"])
"""

from echelon.forms import (
    is_echelon,
    is_exact_solution_form,
    is_strict_echelon,
    pivot_columns,
)
from echelon.matrix import Matrix
from echelon.reduce import reduce_to_strict_echelon


def detect_system(A, field=None):
    """
    Analyze an augmented system and describe its solution structure.

    Parameters
    ----------
    A : Matrix, numpy.ndarray, scipy.sparse matrix or nested list
        Augmented matrix; the last column is the right-hand side.
    field : echelon.field.Field, optional
        Field to interpret non-Matrix input in. Defaults to rationals.

    Returns
    -------
    dict
        Structure report with shape, density, form flags, rank and kind.
    """
    matrix = Matrix.from_array(A, field=field)
    m, n = matrix.shape
    if n == 0:
        raise ValueError("Augmented matrix needs at least the right-hand side column")

    is_zero = matrix.field.is_zero
    nnz = sum(1 for cell in matrix.cells.flat if not is_zero(cell))
    total = m * n
    density = nnz / total if total > 0 else 0

    report = {
        "shape": (m, n),
        "num_variables": n - 1,
        "field": matrix.field.name,
        "nnz": nnz,
        "density": round(density, 6),
        "is_echelon": is_echelon(matrix),
        "is_strict_echelon": is_strict_echelon(matrix),
        "is_exact_solution_form": is_exact_solution_form(matrix),
    }

    # Structure of the solution set comes from a reduced copy
    reduced = matrix.copy()
    reduce_to_strict_echelon(reduced)
    pivots = pivot_columns(reduced)
    consistent = (n - 1) not in pivots
    coefficient_pivots = [c for c in pivots if c < n - 1]
    free_variables = [c for c in range(n - 1) if c not in coefficient_pivots]

    if not consistent:
        kind = "none"
    elif free_variables:
        kind = "many"
    else:
        kind = "exact"

    report["rank"] = len(coefficient_pivots)
    report["pivot_columns"] = coefficient_pivots
    report["free_variables"] = free_variables
    report["consistent"] = consistent
    report["kind"] = kind

    return report
