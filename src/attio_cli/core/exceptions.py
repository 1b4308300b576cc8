"""Common domain-specific exceptions for attio-cli."""

from __future__ import annotations


class AttioCLIError(Exception):
    """Base class for attio-cli domain errors."""

    pass
