# core/exceptions.py

"""Errors raised while compiling patterns and aggregating sizes."""
from typing import List


class PatternSyntaxError(ValueError):
    """A glob pattern could not be compiled.

    Only fatal for the pattern it describes; the run continues with the
    remaining valid patterns.
    """

    def __init__(self, pattern: str, position: int, message: str):
        self.pattern = pattern
        self.position = position
        self.message = message
        super().__init__(f"{message} at position {position} in pattern '{pattern}'")


class AllPatternsInvalidError(Exception):
    """None of the supplied patterns compiled, so there is nothing to match."""

    def __init__(self, errors: List[PatternSyntaxError]):
        self.errors = errors
        super().__init__(f"All {len(errors)} pattern(s) are invalid")


class AggregatorFinalizedError(RuntimeError):
    """record() was called after finalize()."""
    pass
