"""CLI entrypoint for the crossword grid solver."""

from __future__ import annotations

from gridsolver.cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
