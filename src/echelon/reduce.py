"""
Echelon Reducer: In-place Gaussian elimination over any field.

Algorithm (reduce_to_echelon):
  1. Find the leftmost column holding a nonzero cell at or below the
     first unfinished row (columns outer, rows inner)
  2. Swap that row up into the first unfinished position
  3. Add -(cell / pivot) x pivot row to every row below it
  4. Repeat until fewer than two unfinished rows remain or no pivot exists

reduce_to_strict_echelon then back-eliminates each pivot column out of
the rows above it, so every pivot column is nonzero in exactly one row.

Pivots are never chosen by magnitude and columns are never permuted:
variable order is preserved and exact fields stay exact.
"""

from echelon.forms import is_echelon, is_strict_echelon, pivot_column


def multiply_row(matrix, row, factor):
    """Scale ``row`` by ``factor`` in place."""
    matrix.cells[row] = matrix.cells[row] * factor


def add_multiplied_row(matrix, origin_row, factor, target_row):
    """
    Add ``factor`` times ``origin_row`` onto ``target_row`` in place.

    Cells where the update cancels down to rounding residue, judged
    against the size of the two terms, are stored as the field's zero.
    """
    field = matrix.field
    before = matrix.cells[target_row]
    addend = matrix.cells[origin_row] * factor
    updated = before + addend
    updated[field.cancelled(before, addend)] = field.zero
    matrix.cells[target_row] = updated


def _eliminate(matrix, pivot_row, pivot_col, target_row):
    """Zero ``matrix[target_row, pivot_col]`` using the pivot row."""
    field = matrix.field
    target_cell = matrix.cells[target_row, pivot_col]
    if not field.is_zero(target_cell):
        factor = -(target_cell / matrix.cells[pivot_row, pivot_col])
        add_multiplied_row(matrix, pivot_row, factor, target_row)
    # the pivot column is zero by construction
    matrix.cells[target_row, pivot_col] = field.zero


def _find_pivot(matrix, first_row):
    """First nonzero (row, column) at or below ``first_row``, scanning by column."""
    is_zero = matrix.field.is_zero
    for column in range(matrix.columns):
        for row in range(first_row, matrix.rows):
            if not is_zero(matrix.cells[row, column]):
                return row, column
    return None


def reduce_to_echelon(matrix):
    """
    Bring ``matrix`` into row-echelon form, in place.

    Parameters
    ----------
    matrix : Matrix
        Mutated. Row order changes; column order never does.
    """
    finished_rows = 0
    while finished_rows < matrix.rows - 1:
        pivot = _find_pivot(matrix, finished_rows)
        if pivot is None:
            break
        pivot_row, pivot_col = pivot

        matrix.swap_rows(finished_rows, pivot_row)
        pivot_row = finished_rows

        for target_row in range(pivot_row + 1, matrix.rows):
            _eliminate(matrix, pivot_row, pivot_col, target_row)

        finished_rows += 1

    assert is_echelon(matrix)


def reduce_to_strict_echelon(matrix):
    """
    Bring ``matrix`` into strict row-echelon form, in place.

    After the echelon pass, rows are visited top to bottom. A column is
    marked used once any visited row is nonzero there. When a row's pivot
    lands on a used column, that column is eliminated from every row
    above using this row, and the mark is reset before the row's own
    nonzero columns are recorded.
    """
    reduce_to_echelon(matrix)

    is_zero = matrix.field.is_zero
    used_columns = [False] * matrix.columns
    for row in range(matrix.rows):
        pivot_col = pivot_column(matrix, row)
        if pivot_col == matrix.columns:
            continue

        if used_columns[pivot_col]:
            for target_row in range(row):
                _eliminate(matrix, row, pivot_col, target_row)
            used_columns[pivot_col] = False

        for column, cell in enumerate(matrix.cells[row]):
            if not is_zero(cell):
                used_columns[column] = True

    assert is_strict_echelon(matrix)


def normalize_pivots(matrix):
    """Scale every nonzero row so that its pivot becomes one."""
    field = matrix.field
    for row in range(matrix.rows):
        pivot_col = pivot_column(matrix, row)
        if pivot_col == matrix.columns:
            continue
        pivot = matrix.cells[row, pivot_col]
        if not field.is_one(pivot):
            multiply_row(matrix, row, field.one / pivot)
        matrix.cells[row, pivot_col] = field.one


def reduce_to_reduced_echelon(matrix):
    """
    Strict reduction followed by pivot normalization, in place.

    A square, uniquely solvable augmented system ends up as ``[I | x]``.
    """
    reduce_to_strict_echelon(matrix)
    normalize_pivots(matrix)
    assert is_strict_echelon(matrix)
