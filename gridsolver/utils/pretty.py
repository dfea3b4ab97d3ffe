"""Pretty-print helpers for grids and solve results."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, List, Optional

from ..core.constants import BLOCKED_SYMBOL, EMPTY_SYMBOL

if TYPE_CHECKING:
    from ..core.models import Cell
    from ..data.dictionary import RankedWordSource
    from ..engine.grid import Grid
    from ..engine.runner import SolveResult


def cell_symbol(cell: Cell) -> str:
    if cell.is_blocked():
        return BLOCKED_SYMBOL
    return cell.letter or EMPTY_SYMBOL


def format_grid(grid: Grid) -> str:
    width = grid.width
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(grid.rows()):
        row_render = " ".join(f"{cell_symbol(cell):>2}" for cell in row)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(grid: Grid, *, label: str | None = None, stream=None) -> None:
    """Print the grid with row and column headers."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_solution_stats(
    result: SolveResult,
    dictionary: Optional[RankedWordSource] = None,
    *,
    stream=None,
) -> None:
    """Print grid + search and word statistics for a solved grid."""

    stream = stream or sys.stdout
    grid = result.grid
    pretty_print_grid(grid, stream=stream)

    # --- Grid geometry ---
    total_cells = grid.width * grid.height
    blocked_cells = sum(1 for row in grid.rows() for cell in row if cell.is_blocked())
    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {grid.width} x {grid.height} ({total_cells} cells)", file=stream)
    print(f"  Blocked:       {blocked_cells}", file=stream)
    print(f"  Entries:       {len(grid.entry_indices())}", file=stream)
    print(f"  Filled:        {grid.filled_ratio * 100:.0f}%", file=stream)

    # --- Search ---
    print(file=stream)
    print("--- Search ---", file=stream)
    print(f"  Attempts:      {result.attempts}", file=stream)
    print(f"  Fills tried:   {result.fills}", file=stream)
    print(f"  Elapsed:       {result.elapsed:.2f}s", file=stream)

    # --- Words ---
    lengths = [word.size() for word in result.placed_words]
    if lengths:
        length_dist = Counter(lengths)
        print(file=stream)
        print("--- Words ---", file=stream)
        print(f"  Distinct:      {len(lengths)}", file=stream)
        print(f"  Length range:  {min(lengths)}-{max(lengths)} (avg {sum(lengths) / len(lengths):.1f})", file=stream)
        dist_parts = [f"{l}:{c}" for l, c in sorted(length_dist.items())]
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)

    # --- Ranks (requires a ranked dictionary) ---
    if dictionary is not None and result.placed_words:
        scores: List[int] = [dictionary.get_score(word) or 0 for word in result.placed_words]
        print(file=stream)
        print("--- Ranks ---", file=stream)
        print(f"  Average rank:  {sum(scores) / len(scores):.1f}", file=stream)
        print(f"  Lowest rank:   {min(scores)}", file=stream)

    if result.seed is not None:
        print(file=stream)
        print(f"Seed: {result.seed}", file=stream)
