"""
Echelon Arithmetic: Elementwise addition and matrix products.

Works on any field: sums are accumulated from the field's zero with the
element type's own + and *, so rationals stay exact and ModInt stays in
its residue class.
"""

import numpy as np

from echelon.matrix import Matrix


def add(a, b):
    """Elementwise sum of two equally shaped matrices."""
    if a.shape != b.shape:
        raise ValueError(f"Cannot add {a.shape} and {b.shape} matrices")
    a._check_same_field(b)
    return Matrix._from_cells(a.cells + b.cells, a.field)


def scale_columns(matrix, coefficient_row):
    """Multiply every ``matrix[i, j]`` by ``coefficient_row[0, j]``, in place."""
    if coefficient_row.rows != 1:
        raise ValueError(f"Coefficient row must have 1 row, got {coefficient_row.rows}")
    if coefficient_row.columns != matrix.columns:
        raise ValueError(
            f"Coefficient row has {coefficient_row.columns} columns, "
            f"matrix has {matrix.columns}"
        )
    matrix.cells = matrix.cells * coefficient_row.cells


def row_sums(matrix):
    """Collapse ``matrix`` in place into the single column of its row sums."""
    if matrix.columns == 0:
        raise ValueError("Cannot sum the rows of a matrix with no columns")
    sums = np.empty((matrix.rows, 1), dtype=object)
    for i in range(matrix.rows):
        total = matrix.cells[i, 0]
        for j in range(1, matrix.columns):
            total = total + matrix.cells[i, j]
        sums[i, 0] = total
    matrix.cells = sums


def multiply(a, b):
    """
    Matrix product ``a @ b``.

    Each result column is built by scaling a copy of ``a`` with one row of
    ``b`` transposed and summing across.

    Parameters
    ----------
    a : Matrix
        Shape (m, k).
    b : Matrix
        Shape (k, n).

    Returns
    -------
    Matrix
        Shape (m, n).
    """
    if a.columns != b.rows:
        raise ValueError(f"Cannot multiply {a.shape} by {b.shape}: inner sizes differ")
    a._check_same_field(b)

    product = Matrix(a.rows, 0, field=a.field)
    if a.columns == 0:
        product.add_columns(b.columns)
        return product

    b_t = b.copy()
    b_t.transpose()
    for column in range(b_t.rows):
        scaled = a.copy()
        scale_columns(scaled, b_t.row(column))
        row_sums(scaled)
        product.attach_to_the_right(scaled)
    return product
