"""
Echelon demo: unique, inconsistent and underdetermined systems
===============================================================

Solves a handful of small systems over the rationals and GF(7) and
prints the parameterized solution sets.

Usage:
  pip install -e .
  python examples/solve_families.py
"""

import echelon
from echelon import Matrix
from echelon.field import PrimeField


def show(title, A, b, field=None):
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")
    original = Matrix.augmented(A, b, field=field)
    report = echelon.detect_system(original)
    print(f"  rank={report['rank']}, free variables={report['free_variables']}")

    result = echelon.solve_linear_system(original.copy(), verbose=True)
    if result.kind == "none":
        print("  No solution")
        return
    print(f"  offset: {[str(c) for c in result.offset.cells.flat]}")
    if result.kind == "many":
        for k in range(result.num_parameters):
            direction = result.parameter_matrix.column(k)
            print(f"  p{k}: {[str(c) for c in direction.cells.flat]}")
        sample = result.evaluate([1] * result.num_parameters)
        print(f"  all parameters = 1 -> satisfies: {echelon.satisfies(original, sample)}")
    else:
        print(f"  satisfies: {echelon.satisfies(original, result.offset)}")


if __name__ == "__main__":
    show("Unique: 2x + y - z = 8, -3x - y + 2z = -11, -2x + y + 2z = -3",
         [[2, 1, -1], [-3, -1, 2], [-2, 1, 2]], [8, -11, -3])
    show("Inconsistent: x + y = 1, 2x + 2y = 3",
         [[1, 1], [2, 2]], [1, 3])
    show("One equation: x + 2y + 3z = 4",
         [[1, 2, 3]], [4])
    show("Shared free variable: x + z = 1, y + z = 2",
         [[1, 0, 1], [0, 1, 1]], [1, 2])
    show("GF(7): x + 2y = 3, 3x + y = 4",
         [[1, 2], [3, 1]], [3, 4], field=PrimeField(7))
