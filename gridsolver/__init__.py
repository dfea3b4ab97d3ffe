"""Crossword grid filling by randomized backtracking.

This package exposes the public API surface via:

- ``gridsolver.engine.grid.Grid``: cell layout and entry topology.
- ``gridsolver.data.dictionary.Dictionary`` / ``RankedDictionary``: pattern-indexed word storage.
- ``gridsolver.engine.solver.GridSolver`` / ``RankedGridSolver``: one solving attempt.
- ``gridsolver.engine.runner.solve_with_retries``: repeats attempts until a fill is found.
"""

from .core.models import Cell, Entry, EntryIndex, GridCoord, Pattern, Word
from .data.dictionary import Dictionary, RankedDictionary
from .engine.grid import Grid
from .engine.runner import RunnerConfig, SolveResult, solve_with_retries
from .engine.solver import GridSolver, RankedGridSolver, SolverConfig

__all__ = [
    "Cell",
    "Dictionary",
    "Entry",
    "EntryIndex",
    "Grid",
    "GridCoord",
    "GridSolver",
    "Pattern",
    "RankedDictionary",
    "RankedGridSolver",
    "RunnerConfig",
    "SolveResult",
    "SolverConfig",
    "Word",
    "solve_with_retries",
]

__version__ = "0.1.0"
