"""
Echelon Solver: Classify and parameterize the solutions of [A | b].

Reduces an augmented matrix to strict row-echelon form and reads off
the whole solution set:
  - NoSolution      some row says 0 = nonzero
  - ExactSolution   every variable is pinned; offset is the solution
  - ManySolutions   x = offset + parameter_matrix @ p for any p

Usage:
    import echelon
    result = echelon.solve(A, b)
    if result.kind == "many":
        x = result.evaluate([1, 0])
"""

from dataclasses import dataclass

from echelon.forms import pivot_column
from echelon.matrix import Matrix
from echelon.reduce import reduce_to_strict_echelon


# ============================================================
# Solution set variants
# ============================================================

@dataclass
class NoSolution:
    """The system is inconsistent."""

    kind = "none"
    is_consistent = False
    num_parameters = 0


@dataclass
class ExactSolution:
    """Exactly one solution.

    Fields
    ------
    offset : Matrix
        The solution as an (n_vars x 1) column.
    """
    offset: Matrix

    kind = "exact"
    is_consistent = True
    num_parameters = 0

    def evaluate(self):
        return self.offset.copy()


@dataclass
class ManySolutions:
    """An affine family of solutions.

    Fields
    ------
    offset : Matrix
        Particular solution (n_vars x 1) with every parameter set to zero.
    parameter_matrix : Matrix
        (n_vars x k) matrix; column j is the direction of parameter j.
    free_variables : tuple of int
        Variable (column) index each parameter stands for.
    """
    offset: Matrix
    parameter_matrix: Matrix
    free_variables: tuple = ()

    kind = "many"
    is_consistent = True

    @property
    def num_parameters(self):
        return self.parameter_matrix.columns

    def evaluate(self, parameters):
        """Solution vector ``offset + parameter_matrix @ parameters``."""
        p = Matrix.from_array(parameters, field=self.offset.field)
        if p.shape != (self.num_parameters, 1):
            raise ValueError(
                f"Expected {self.num_parameters} parameters, got shape {p.shape}"
            )
        return self.offset + self.parameter_matrix @ p


# ============================================================
# Classification
# ============================================================

def solve_linear_system(matrix, verbose=False):
    """
    Solve the augmented system held in ``matrix``.

    Parameters
    ----------
    matrix : Matrix
        Coefficients in the first ``columns - 1`` columns, right-hand side in
        the last. Reduced in place; pass a copy to keep the original.
    verbose : bool
        Print a one-line summary.

    Returns
    -------
    NoSolution, ExactSolution or ManySolutions
    """
    if matrix.columns == 0:
        raise ValueError("Augmented matrix needs at least the right-hand side column")

    reduce_to_strict_echelon(matrix)

    field = matrix.field
    num_vars = matrix.columns - 1
    rhs = num_vars

    for row in range(matrix.rows):
        if pivot_column(matrix, row) == rhs:
            if verbose:
                print(f"  [echelon] {matrix.rows} x {matrix.columns}, "
                      f"row {row} reads 0 = {matrix.cells[row, rhs]}, no solution")
            return NoSolution()

    # Each nonzero row solves for its first involved variable. Strict form
    # guarantees that variable is zero in every other row.
    offset = Matrix(num_vars, 1, field=field)
    solved = []
    for row in range(matrix.rows):
        involved = [c for c in range(num_vars) if not field.is_zero(matrix.cells[row, c])]
        if not involved:
            break
        first = involved[0]
        offset.cells[first, 0] = matrix.cells[row, rhs] / matrix.cells[row, first]
        solved.append((row, first))

    pivots = {column for _, column in solved}
    free_variables = [c for c in range(num_vars) if c not in pivots]

    parameter_matrix = Matrix(num_vars, len(free_variables), field=field)
    for k, free in enumerate(free_variables):
        parameter_matrix.cells[free, k] = field.one
        for row, pivot in solved:
            coefficient = matrix.cells[row, free]
            if not field.is_zero(coefficient):
                parameter_matrix.cells[pivot, k] = -(coefficient / matrix.cells[row, pivot])

    if verbose:
        print(f"  [echelon] {matrix.rows} x {matrix.columns}, "
              f"rank={len(solved)}, free={len(free_variables)}")

    if not free_variables:
        return ExactSolution(offset)
    return ManySolutions(offset, parameter_matrix, tuple(free_variables))


def solve(A, b, field=None, verbose=False):
    """
    Solve Ax = b.

    Parameters
    ----------
    A : Matrix, numpy.ndarray, scipy.sparse matrix or nested list
        Coefficient matrix.
    b : array-like
        Right-hand side (vector or single column).
    field : echelon.field.Field, optional
        Defaults to exact rationals.
    verbose : bool
        Print a one-line summary.

    Returns
    -------
    NoSolution, ExactSolution or ManySolutions
    """
    augmented = Matrix.augmented(A, b, field=field)
    return solve_linear_system(augmented, verbose=verbose)


def satisfies(augmented, vector):
    """Whether ``vector`` solves every equation of the augmented system."""
    field = augmented.field
    num_vars = augmented.columns - 1
    x = Matrix.from_array(vector, field=field)
    if x.shape != (num_vars, 1):
        raise ValueError(f"Expected a vector of {num_vars} values, got shape {x.shape}")
    coefficients = Matrix._from_cells(augmented.cells[:, :num_vars].copy(), field)
    lhs = coefficients @ x
    return all(
        field.equal(lhs.cells[row, 0], augmented.cells[row, num_vars])
        for row in range(augmented.rows)
    )
