"""
Error taxonomy for the combinator library.

- InvalidStateError: a size/cardinality precondition was violated
- IterationError: a sequence could not be advanced or re-opened

Both abort only the call in progress. Nothing here is retried internally.
"""

from typing import Optional

from utils import reason_codes


class CombinatorError(Exception):
    """Base class. Carries a reason code from utils.reason_codes."""

    default_code: str = "E_COMBINATOR"

    def __init__(self, message: str, reason_code: Optional[str] = None):
        super().__init__(message)
        self.reason_code = reason_code or self.default_code
        if not reason_codes.validate_reason_code(self.reason_code):
            raise ValueError(f"Invalid reason code: {self.reason_code}")


class InvalidStateError(CombinatorError, ValueError):
    """Zero or multiple elements where exactly one (or at most one) was required."""

    default_code = reason_codes.E_NOT_SINGLE


class IterationError(CombinatorError, RuntimeError):
    """A cursor was advanced past its end, failed mid-traversal, or could not be re-opened."""

    default_code = reason_codes.E_ADVANCE_FAILED
