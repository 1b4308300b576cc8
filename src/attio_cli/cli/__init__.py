"""Command-line interface of attio-cli."""

from .errors import ExitCode, NoResultsError, UsageError

__all__ = ["ExitCode", "NoResultsError", "UsageError"]
