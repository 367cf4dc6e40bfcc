"""Error taxonomy shared across layers.

Advisory (AI) failures have no exception type: the gateway absorbs them and
reports an absent value instead.
"""
from __future__ import annotations
from typing import Optional


class PrereqCoachError(Exception):
    """Base class for errors raised by the recommendation core."""


class ValidationError(PrereqCoachError):
    """Malformed input to an operation; raised before any write happens."""


class DataAccessError(PrereqCoachError):
    """The persistence collaborator is unreachable or reported a database error."""

    def __init__(self, operation: str, cause: Optional[Exception] = None):
        self.operation = operation
        self.cause = cause
        detail = f"{operation} failed"
        if cause is not None:
            detail = f"{detail}: {cause}"
        super().__init__(detail)
