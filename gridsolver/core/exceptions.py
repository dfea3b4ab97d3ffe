"""Custom exception hierarchy for grid filling."""


class GridSolverError(Exception):
    """Base exception for grid solver failures."""


class InvalidLetterError(GridSolverError, ValueError):
    """Raised when a character cannot be normalized into a grid letter."""


class GridLoadError(GridSolverError):
    """Raised when a grid layout is malformed or has impossible dimensions."""


class DictionaryLoadError(GridSolverError):
    """Raised when a word list cannot be read."""


class SolveError(GridSolverError):
    """Raised when the retry budget is spent without filling the grid."""


class ValidationError(GridSolverError):
    """Raised when the filled grid integrity checks fail."""
