"""Command line interface: fill a grid layout from a word list."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .core.constants import DEFAULT_BRANCHING, DEFAULT_MIN_RANK
from .core.exceptions import DictionaryLoadError, GridLoadError, SolveError
from .data.dictionary import Dictionary, RankedDictionary
from .data.wordlist import load_dictionary, load_ranked_dictionary
from .engine.runner import RunnerConfig, SolveResult, solve_with_retries
from .engine.solver import SolverConfig
from .engine.validator import GridValidator
from .io.layout import load_grid
from .utils.logger import configure_logging, get_logger
from .utils.pretty import print_solution_stats

LOGGER = get_logger(__name__)

EXIT_OK = 0
EXIT_UNSOLVED = 1
EXIT_LOAD_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridsolver",
        description="Fills in empty crossword grids with dictionary words",
    )
    parser.add_argument(
        "-g",
        "--grid",
        type=Path,
        required=True,
        help="Grid layout file ('width,height' header, '#' blocked, '.' empty, letters pre-fill)",
    )
    parser.add_argument(
        "-d",
        "--dict",
        dest="dictionary",
        type=Path,
        required=True,
        help="Word list, one word per line (or 'word;rank' with --ranked)",
    )
    parser.add_argument(
        "-r",
        "--ranked",
        action="store_true",
        help="Treat the word list as ranked and prefer well-ranked words",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=1000,
        help="Give up after this many fresh solving attempts",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Stop starting new attempts after this many seconds",
    )
    parser.add_argument(
        "--branching",
        type=int,
        default=DEFAULT_BRANCHING,
        help="Candidates tried per entry before backtracking",
    )
    parser.add_argument(
        "--min-rank",
        type=int,
        default=DEFAULT_MIN_RANK,
        help="Lowest rank a word may have in a ranked fill",
    )
    parser.add_argument(
        "--unique-words",
        action="store_true",
        help="Forbid using the same word twice in one grid",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--stats", action="store_true", help="Print search statistics")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def build_payload(result: SolveResult) -> Dict[str, Any]:
    payload: Dict[str, Any] = dict(result.grid.to_jsonable())
    payload["attempts"] = result.attempts
    payload["elapsed"] = round(result.elapsed, 4)
    payload["seed"] = result.seed
    if result.average_score is not None:
        payload["average_score"] = result.average_score
    return payload


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.max_attempts < 1:
        parser.error("--max-attempts must be at least 1")
    if args.branching < 1:
        parser.error("--branching must be at least 1")

    dictionary: Union[Dictionary, RankedDictionary]
    try:
        grid = load_grid(args.grid)
        if args.ranked:
            dictionary = load_ranked_dictionary(args.dictionary)
        else:
            dictionary = load_dictionary(args.dictionary)
    except (GridLoadError, DictionaryLoadError) as exc:
        LOGGER.error("%s", exc)
        return EXIT_LOAD_ERROR

    config = RunnerConfig(
        max_attempts=args.max_attempts,
        timeout_seconds=args.timeout,
        ranked=args.ranked,
        solver=SolverConfig(
            max_branching=args.branching,
            min_rank=args.min_rank,
            unique_words=args.unique_words,
            rng_seed=args.seed,
        ),
    )
    try:
        result = solve_with_retries(grid, dictionary, config)
    except SolveError as exc:
        LOGGER.error("%s", exc)
        return EXIT_UNSOLVED

    prefilled = [index for index in grid.entry_indices() if grid.is_entry_filled(index)]
    validation = GridValidator(dictionary).validate(
        result.grid, unique_words=args.unique_words, fixed_entries=prefilled
    )
    if not validation.ok:
        for message in validation.messages:
            LOGGER.error("%s", message)
        return EXIT_UNSOLVED

    if args.stats:
        print_solution_stats(result, dictionary if isinstance(dictionary, RankedDictionary) else None)
    else:
        print(result.grid.render())
    if result.average_score is not None:
        print(f"{result.average_score:.2f}")

    if args.output:
        output_text = json.dumps(build_payload(result), ensure_ascii=False, indent=2)
        args.output.write_text(output_text, encoding="utf-8")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
