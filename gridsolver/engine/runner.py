"""Retry loop around the randomized solver.

A single :meth:`GridSolver.solve` call may fail even when a fill exists, so
callers rebuild the solver from the untouched grid and try again until one
attempt succeeds or the budget runs out.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..core.exceptions import SolveError
from ..core.models import Word
from ..data.dictionary import RankedWordSource, WordSource
from ..utils.logger import get_logger
from .grid import Grid
from .solver import GridSolver, RankedGridSolver, SolverConfig

LOGGER = get_logger(__name__)


@dataclass
class RunnerConfig:
    max_attempts: Optional[int] = 1000
    timeout_seconds: Optional[float] = None
    ranked: bool = False
    solver: SolverConfig = field(default_factory=SolverConfig)


@dataclass
class SolveResult:
    grid: Grid
    attempts: int
    elapsed: float
    fills: int
    placed_words: List[Word]
    average_score: Optional[float] = None
    seed: Optional[int] = None


def make_solver(
    grid: Grid,
    dictionary: Union[WordSource, RankedWordSource],
    config: SolverConfig,
    *,
    ranked: bool = False,
    rng: Optional[random.Random] = None,
) -> GridSolver:
    if ranked:
        return RankedGridSolver(grid, dictionary, config, rng)  # type: ignore[arg-type]
    return GridSolver(grid, dictionary, config, rng)


def solve_with_retries(
    grid: Grid,
    dictionary: Union[WordSource, RankedWordSource],
    config: Optional[RunnerConfig] = None,
) -> SolveResult:
    """Retry fresh solving attempts on ``grid`` until one fills it.

    The ranked search does not shuffle, so it is attempted once. Raises
    :class:`SolveError` when the attempt budget or timeout is exhausted.
    """

    config = config or RunnerConfig()
    if config.max_attempts is not None and config.max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    rng = config.solver.make_rng()
    solver = make_solver(grid, dictionary, config.solver, ranked=config.ranked, rng=rng)
    max_attempts = 1 if config.ranked else config.max_attempts
    start = time.monotonic()
    deadline = start + config.timeout_seconds if config.timeout_seconds is not None else None

    attempt = 0
    fills = 0
    timed_out = False
    while max_attempts is None or attempt < max_attempts:
        if deadline is not None and attempt and time.monotonic() >= deadline:
            timed_out = True
            break
        attempt += 1
        if attempt > 1:
            solver.reset()
        LOGGER.debug("Solving attempt %s", attempt)
        try:
            if isinstance(solver, RankedGridSolver):
                solved = solver.solve_ranked()
            else:
                solved = solver.solve()
        except RecursionError as exc:
            LOGGER.warning("Search exceeded the recursion limit on attempt %s", attempt)
            raise SolveError(
                f"Grid has too many entries to search ({len(grid.entry_indices())})"
            ) from exc
        fills += solver.fill_count
        if not solved:
            LOGGER.debug("Attempt %s failed after %s fills", attempt, solver.fill_count)
            continue

        elapsed = time.monotonic() - start
        LOGGER.info("Grid filled on attempt %s in %.2fs", attempt, elapsed)
        return SolveResult(
            grid=solver.grid,
            attempts=attempt,
            elapsed=elapsed,
            fills=fills,
            placed_words=sorted(solver.placed_words),
            average_score=solver.average_score() if isinstance(solver, RankedGridSolver) else None,
            seed=config.solver.rng_seed,
        )

    if timed_out:
        LOGGER.warning("Timed out after %s attempts (%.1fs)", attempt, config.timeout_seconds)
    else:
        LOGGER.warning("No fill found in %s attempts", attempt)
    raise SolveError(f"Unable to fill grid after {attempt} attempts")
