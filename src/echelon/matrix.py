"""
Echelon Matrix: Dense rectangular container over an arbitrary field.

Cells live in a 2-D numpy array of dtype=object, so every entry is a
plain Python value of the matrix's field (Fraction, float, ModInt, ...)
and the elimination code can use whole-row numpy operations without
losing exactness.

Usage:
    from echelon import Matrix
    m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
    m[0, 2] = 7
    m.swap_rows(0, 1)
    A = Matrix.augmented(coefficients, rhs)   # [A | b]
"""

import numpy as np
from scipy import sparse

from echelon.field import RATIONAL, PrimeField


class Matrix:
    """
    Dense matrix whose cells are elements of ``field``.

    Parameters
    ----------
    rows : int
        Number of rows.
    columns : int
        Number of columns.
    field : echelon.field.Field, optional
        Scalar field of the cells. Defaults to exact rationals.

    Notes
    -----
    All structural mutators work in place. Use ``copy()`` before handing a
    matrix to the reducer if the original is still needed.
    """

    def __init__(self, rows, columns, field=None):
        if rows < 0 or columns < 0:
            raise ValueError(f"Matrix shape must be non-negative, got ({rows}, {columns})")
        self.field = field if field is not None else RATIONAL
        self.cells = np.full((rows, columns), self.field.zero, dtype=object)

    # ============================================================
    # Construction
    # ============================================================

    @classmethod
    def _from_cells(cls, cells, field):
        """Wrap an existing object array. No coercion, no copy."""
        m = cls.__new__(cls)
        m.field = field
        m.cells = cells
        return m

    @classmethod
    def from_rows(cls, rows, field=None):
        """Build a matrix from a sequence of equally long rows."""
        field = field if field is not None else RATIONAL
        rows = [list(row) for row in rows]
        n_rows = len(rows)
        n_cols = len(rows[0]) if rows else 0
        cells = np.empty((n_rows, n_cols), dtype=object)
        for i, row in enumerate(rows):
            if len(row) != n_cols:
                raise ValueError(
                    f"Ragged rows: row {i} has {len(row)} cells, expected {n_cols}"
                )
            for j, value in enumerate(row):
                cells[i, j] = field.coerce(value)
        return cls._from_cells(cells, field)

    @classmethod
    def from_array(cls, A, field=None):
        """
        Build a matrix from array-like data.

        Parameters
        ----------
        A : Matrix, numpy.ndarray, scipy.sparse matrix or nested sequence
            A 1-D input becomes a single column.
        field : echelon.field.Field, optional

        Returns
        -------
        Matrix
        """
        if isinstance(A, Matrix):
            if field is None or field == A.field:
                return A.copy()
            return cls.from_rows(A.tolist(), field=field)
        if sparse.issparse(A):
            A = A.toarray()
        if isinstance(A, np.ndarray):
            if A.ndim == 1:
                A = A.reshape(-1, 1)
            if A.ndim != 2:
                raise ValueError(f"Expected a 1-D or 2-D array, got {A.ndim}-D")
            return cls.from_rows(A.astype(object).tolist(), field=field)
        A = list(A)
        if A and not isinstance(A[0], (list, tuple, np.ndarray)):
            A = [[value] for value in A]
        return cls.from_rows(A, field=field)

    @classmethod
    def augmented(cls, A, b, field=None):
        """Build the augmented system ``[A | b]``."""
        coefficients = cls.from_array(A, field=field)
        rhs = cls.from_array(b, field=coefficients.field)
        coefficients.attach_to_the_right(rhs)
        return coefficients

    def copy(self):
        return Matrix._from_cells(self.cells.copy(), self.field)

    # ============================================================
    # Shape and cell access
    # ============================================================

    @property
    def rows(self):
        return self.cells.shape[0]

    @property
    def columns(self):
        return self.cells.shape[1]

    @property
    def shape(self):
        return self.cells.shape

    def _check_index(self, key):
        if not isinstance(key, tuple) or len(key) != 2:
            raise IndexError(f"Matrix index must be a (row, column) pair, got {key!r}")
        row, column = key
        if not 0 <= row < self.rows or not 0 <= column < self.columns:
            raise IndexError(
                f"Cell ({row}, {column}) out of range for {self.rows} x {self.columns} matrix"
            )
        return row, column

    def __getitem__(self, key):
        row, column = self._check_index(key)
        return self.cells[row, column]

    def __setitem__(self, key, value):
        row, column = self._check_index(key)
        self.cells[row, column] = self.field.coerce(value)

    def _check_row(self, row):
        if not 0 <= row < self.rows:
            raise IndexError(f"Row {row} out of range for {self.rows} rows")

    def _check_column(self, column):
        if not 0 <= column < self.columns:
            raise IndexError(f"Column {column} out of range for {self.columns} columns")

    # ============================================================
    # Structural mutation
    # ============================================================

    def add_rows(self, rows):
        """Append ``rows`` zero rows at the bottom."""
        extra = np.full((rows, self.columns), self.field.zero, dtype=object)
        self.cells = np.vstack([self.cells, extra])

    def add_columns(self, columns):
        """Append ``columns`` zero columns on the right."""
        extra = np.full((self.rows, columns), self.field.zero, dtype=object)
        self.cells = np.hstack([self.cells, extra])

    def _check_same_field(self, other):
        if other.field != self.field:
            raise ValueError(f"Field mismatch: {self.field!r} vs {other.field!r}")

    def attach_below(self, other):
        """Concatenate ``other`` underneath. Column counts must match."""
        if other.columns != self.columns:
            raise ValueError(
                f"Cannot attach {other.rows} x {other.columns} below "
                f"{self.rows} x {self.columns}: column counts differ"
            )
        self._check_same_field(other)
        self.cells = np.vstack([self.cells, other.cells])

    def attach_to_the_right(self, other):
        """Concatenate ``other`` on the right. Row counts must match."""
        if other.rows != self.rows:
            raise ValueError(
                f"Cannot attach {other.rows} x {other.columns} right of "
                f"{self.rows} x {self.columns}: row counts differ"
            )
        self._check_same_field(other)
        self.cells = np.hstack([self.cells, other.cells])

    def row(self, row):
        """Row ``row`` as a new 1 x columns matrix."""
        self._check_row(row)
        return Matrix._from_cells(self.cells[row:row + 1, :].copy(), self.field)

    def column(self, column):
        """Column ``column`` as a new rows x 1 matrix."""
        self._check_column(column)
        return Matrix._from_cells(self.cells[:, column:column + 1].copy(), self.field)

    def transpose(self):
        """Transpose in place."""
        self.cells = self.cells.T.copy()

    def swap_rows(self, row_one, row_two):
        self._check_row(row_one)
        self._check_row(row_two)
        if row_one != row_two:
            self.cells[[row_one, row_two]] = self.cells[[row_two, row_one]]

    def swap_columns(self, column_one, column_two):
        self._check_column(column_one)
        self._check_column(column_two)
        if column_one != column_two:
            self.cells[:, [column_one, column_two]] = self.cells[:, [column_two, column_one]]

    # ============================================================
    # Conversion and comparison
    # ============================================================

    def tolist(self):
        return self.cells.tolist()

    def to_numpy(self, dtype=None):
        """Copy of the cells as a numpy array (object dtype unless given)."""
        if dtype is None:
            return self.cells.copy()
        if isinstance(self.field, PrimeField):
            return np.array([[int(c) for c in row] for row in self.tolist()], dtype=dtype)
        return self.cells.astype(dtype)

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return all(a == b for a, b in zip(self.cells.flat, other.cells.flat))

    __hash__ = None

    def __add__(self, other):
        from echelon.arithmetic import add
        return add(self, other)

    def __matmul__(self, other):
        from echelon.arithmetic import multiply
        return multiply(self, other)

    __mul__ = __matmul__

    def __repr__(self):
        body = [[str(cell) for cell in row] for row in self.tolist()]
        return f"Matrix({body}, field={self.field!r})"
