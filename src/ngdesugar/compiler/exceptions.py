"""Exceptions raised at the ngdesugar API boundary."""

from typing import Optional


class DesugarError(Exception):
    """Base class for errors raised by ngdesugar."""


class InvalidDirectiveNameError(DesugarError, ValueError):
    """Directive name cannot be turned into a class name."""

    def __init__(self, directive_name: str, reason: Optional[str] = None):
        self.directive_name = directive_name
        self.reason = reason or "must start with a cased letter"
        super().__init__(
            f"Invalid directive name {directive_name!r}: {self.reason}"
        )
