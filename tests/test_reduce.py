"""Tests for the row-echelon reducer."""
from fractions import Fraction
import random

import pytest

from echelon import (
    Matrix,
    is_echelon,
    is_strict_echelon,
    is_exact_solution_form,
    reduce_to_echelon,
    reduce_to_strict_echelon,
    reduce_to_reduced_echelon,
)
from echelon.field import REAL, RealField, PrimeField
from echelon.reduce import add_multiplied_row, multiply_row, normalize_pivots


def _random_matrix(rng, rows, columns, low=-3, high=3):
    return Matrix.from_rows(
        [[rng.randint(low, high) for _ in range(columns)] for _ in range(rows)]
    )


# ============================================================
# Row primitives
# ============================================================

def test_multiply_row():
    m = Matrix.from_rows([[1, 2], [3, 4]])
    multiply_row(m, 1, Fraction(1, 2))
    assert m.tolist() == [[1, 2], [Fraction(3, 2), 2]]


def test_add_multiplied_row():
    m = Matrix.from_rows([[1, 2], [3, 4]])
    add_multiplied_row(m, 0, -3, 1)
    assert m.tolist() == [[1, 2], [0, -2]]


# ============================================================
# reduce_to_echelon
# ============================================================

def test_echelon_worked_example():
    m = Matrix.from_rows([[-3, 2, 0], [3, -2, 0], [1, 1, 1]])
    reduce_to_echelon(m)
    assert m.tolist() == [[-3, 2, 0], [0, Fraction(5, 3), 1], [0, 0, 0]]
    assert is_echelon(m)


def test_echelon_picks_leftmost_column_not_largest():
    m = Matrix.from_rows([[0, 5], [1, 100], [2, 0]])
    reduce_to_echelon(m)
    # row [1, 100] is the first nonzero in column 0
    assert m.row(0).tolist() == [[1, 100]]


def test_echelon_never_permutes_columns():
    m = Matrix.from_rows([[0, 0, 1], [0, 2, 0]])
    reduce_to_echelon(m)
    assert m.tolist() == [[0, 2, 0], [0, 0, 1]]


def test_echelon_zero_rows_sink():
    m = Matrix.from_rows([[0, 0, 0], [1, 2, 3], [0, 0, 0], [2, 4, 7]])
    reduce_to_echelon(m)
    assert m.tolist() == [[1, 2, 3], [0, 0, 1], [0, 0, 0], [0, 0, 0]]


def test_echelon_trivial_shapes():
    single = Matrix.from_rows([[0, 3, 1]])
    reduce_to_echelon(single)
    assert single.tolist() == [[0, 3, 1]]

    zero = Matrix(3, 3)
    reduce_to_echelon(zero)
    assert zero == Matrix(3, 3)

    reduce_to_echelon(Matrix(0, 0))


def test_echelon_random_matrices():
    rng = random.Random(7)
    for _ in range(50):
        m = _random_matrix(rng, rng.randint(1, 5), rng.randint(1, 6))
        reduce_to_echelon(m)
        assert is_echelon(m)


# ============================================================
# reduce_to_strict_echelon
# ============================================================

def test_strict_worked_example():
    m = Matrix.from_rows([[-3, 2, 0], [3, -2, 0], [1, 1, 1]])
    reduce_to_strict_echelon(m)
    assert m.tolist() == [[-3, 0, Fraction(-6, 5)], [0, Fraction(5, 3), 1], [0, 0, 0]]
    assert is_strict_echelon(m)


def test_strict_clears_above_pivots():
    m = Matrix.from_rows([[0, 0, 0], [1, 2, 3], [0, 0, 0], [2, 4, 7]])
    reduce_to_strict_echelon(m)
    assert m.tolist() == [[1, 2, 0], [0, 0, 1], [0, 0, 0], [0, 0, 0]]


def test_strict_is_idempotent():
    rng = random.Random(11)
    for _ in range(30):
        m = _random_matrix(rng, rng.randint(1, 5), rng.randint(1, 6))
        reduce_to_strict_echelon(m)
        once = m.copy()
        reduce_to_strict_echelon(m)
        assert m == once


def test_strict_random_matrices():
    rng = random.Random(3)
    for _ in range(50):
        m = _random_matrix(rng, rng.randint(1, 6), rng.randint(1, 6))
        reduce_to_strict_echelon(m)
        assert is_echelon(m)
        assert is_strict_echelon(m)


def test_strict_each_pivot_column_has_one_nonzero():
    rng = random.Random(5)
    m = _random_matrix(rng, 4, 6)
    reduce_to_strict_echelon(m)
    for row in range(m.rows):
        pivot = next((c for c in range(m.columns) if m[row, c] != 0), None)
        if pivot is None:
            continue
        assert sum(1 for r in range(m.rows) if m[r, pivot] != 0) == 1


def test_strict_prime_field():
    gf7 = PrimeField(7)
    m = Matrix.from_rows([[3, 5, 1, 2], [6, 3, 4, 0], [1, 1, 1, 1]], field=gf7)
    reduce_to_strict_echelon(m)
    assert is_strict_echelon(m)


def test_strict_real_field_drops_residue():
    m = Matrix.from_rows([[0.1, 0.2, 0.3], [0.3, 0.6, 0.9]], field=REAL)
    reduce_to_strict_echelon(m)
    assert m[1, 0] == 0.0
    assert is_strict_echelon(m)
    assert all(REAL.is_zero(cell) for cell in m.row(1).cells.flat)


def test_add_multiplied_row_snaps_cancellation_at_scale():
    a, b, k = 813187.2997951219, 525770.9676661419, 5.843612006039698
    m = Matrix.from_rows([[a, b, 1.0], [k * a, k * b, k + 1.0]], field=REAL)
    add_multiplied_row(m, 0, -(m[1, 0] / m[0, 0]), 1)
    assert m[1, 0] == 0.0
    assert m[1, 1] == 0.0
    assert abs(m[1, 2] - 1.0) < 1e-6


def test_add_multiplied_row_keeps_small_exact_values():
    tiny = Fraction(1, 10 ** 15)
    m = Matrix.from_rows([[1, tiny], [-1, 0]])
    add_multiplied_row(m, 0, 1, 1)
    assert m.tolist() == [[1, tiny], [0, tiny]]


@pytest.mark.parametrize("field", [REAL, RealField(tolerance=0.0)])
def test_strict_real_field_large_coefficients(field):
    m = Matrix.from_rows(
        [[-43632.431120059235, 1.0, 1.0], [51160.84083144477, 2.0, 2.0]],
        field=field,
    )
    reduce_to_strict_echelon(m)
    assert is_strict_echelon(m)
    assert m[1, 0] == 0.0
    assert m[0, 1] == 0.0


def test_real_field_rejects_negative_rtol():
    with pytest.raises(ValueError):
        RealField(rtol=-1e-9)


# ============================================================
# Normalization
# ============================================================

def test_normalize_pivots():
    m = Matrix.from_rows([[2, 4, 6], [0, 0, 0], [0, 3, 9]])
    normalize_pivots(m)
    assert m.tolist() == [[1, 2, 3], [0, 0, 0], [0, 1, 3]]


def test_reduced_echelon_of_unique_system():
    # 2x + y = 5, x + 3y = 10  ->  x = 1, y = 3
    m = Matrix.from_rows([[2, 1, 5], [1, 3, 10]])
    reduce_to_reduced_echelon(m)
    assert is_exact_solution_form(m)
    assert m.column(2).tolist() == [[1], [3]]


def test_reduced_echelon_of_three_by_three():
    m = Matrix.from_rows([
        [2, 1, -1, 8],
        [-3, -1, 2, -11],
        [-2, 1, 2, -3],
    ])
    reduce_to_reduced_echelon(m)
    assert is_exact_solution_form(m)
    assert m.column(3).tolist() == [[2], [3], [-1]]


def test_reduced_echelon_of_singular_system_is_not_exact():
    m = Matrix.from_rows([[1, 2, 3], [2, 4, 6]])
    reduce_to_reduced_echelon(m)
    assert is_strict_echelon(m)
    assert not is_exact_solution_form(m)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
