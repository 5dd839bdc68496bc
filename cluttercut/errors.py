"""
Exception types for cluttercut.

The engine itself never raises these; they belong to the boundary
(request parsing, rule files).
"""


class CluttercutError(Exception):
    """Base error for the project."""


class InvalidRequestError(CluttercutError, ValueError):
    """A request or rule payload has the wrong shape."""


class RuleFileError(CluttercutError):
    """A rules file is missing or malformed."""
