"""
Standardized reason codes for combinator errors.

Every CombinatorError carries one of these constants so callers can branch
on the failure without parsing messages.
"""

# Cardinality errors (InvalidStateError)
E_EMPTY = "E_EMPTY"
E_NOT_SINGLE = "E_NOT_SINGLE"
E_TOO_MANY = "E_TOO_MANY"

# Traversal errors (IterationError)
E_EXHAUSTED = "E_EXHAUSTED"
E_ADVANCE_FAILED = "E_ADVANCE_FAILED"
E_REOPEN_FAILED = "E_REOPEN_FAILED"
E_NOT_REPEATABLE = "E_NOT_REPEATABLE"

# All valid reason codes
REASON_CODES = {
    E_EMPTY,
    E_NOT_SINGLE,
    E_TOO_MANY,
    E_EXHAUSTED,
    E_ADVANCE_FAILED,
    E_REOPEN_FAILED,
    E_NOT_REPEATABLE,
}


def validate_reason_code(code: str) -> bool:
    """
    Check if a reason code is valid.

    Valid codes are either in REASON_CODES or prefixed with E_.
    """
    if code in REASON_CODES:
        return True
    if code.startswith("E_"):
        return True
    return False
