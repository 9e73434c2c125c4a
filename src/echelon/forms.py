"""
Echelon Forms: Read-only predicates for row-echelon shapes.

  - is_echelon               pivot columns strictly increase, zero rows last
  - is_strict_echelon        is_echelon, and no pivot column is nonzero
                             in any earlier row
  - is_exact_solution_form   [I | b] shape of a solved augmented system

Each predicate re-derives pivot columns by counting leading zeros, so it
can be used both as a postcondition and as a standalone diagnostic.
"""


def pivot_column(matrix, row):
    """Column of the first nonzero cell in ``row``; ``matrix.columns`` if none."""
    is_zero = matrix.field.is_zero
    for column, cell in enumerate(matrix.cells[row]):
        if not is_zero(cell):
            return column
    return matrix.columns


def pivot_columns(matrix):
    """Pivot column of every nonzero row, in row order."""
    pivots = []
    for row in range(matrix.rows):
        column = pivot_column(matrix, row)
        if column < matrix.columns:
            pivots.append(column)
    return pivots


def is_echelon(matrix):
    blocked_columns = 0
    for row in range(matrix.rows):
        column = pivot_column(matrix, row)
        if column == matrix.columns:
            # zero row: only zero rows may follow
            blocked_columns = matrix.columns
            continue
        if column < blocked_columns:
            return False
        blocked_columns = column + 1
    return True


def is_strict_echelon(matrix):
    is_zero = matrix.field.is_zero
    blocked_columns = 0
    used_columns = [False] * matrix.columns
    for row in range(matrix.rows):
        column = pivot_column(matrix, row)
        if column == matrix.columns:
            blocked_columns = matrix.columns
            continue
        if column < blocked_columns or used_columns[column]:
            return False
        blocked_columns = column + 1
        for c, cell in enumerate(matrix.cells[row]):
            if not is_zero(cell):
                used_columns[c] = True
    return True


def is_exact_solution_form(matrix):
    """
    Whether ``matrix`` reads as a solved augmented system.

    Row ``i`` must hold one at column ``i`` and zeros in every other
    coefficient column; the last column is free. Rows past the last
    coefficient column must be entirely zero.
    """
    field = matrix.field
    last = matrix.columns - 1
    for row in range(matrix.rows):
        for column, cell in enumerate(matrix.cells[row]):
            if row >= last:
                if not field.is_zero(cell):
                    return False
            elif column == last:
                continue
            elif column == row:
                if not field.is_one(cell):
                    return False
            elif not field.is_zero(cell):
                return False
    return True
