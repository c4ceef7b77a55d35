"""Exception types raised by policygen."""

from __future__ import annotations


class PolicygenError(Exception):
    """Base class for policygen errors."""


class UsageError(PolicygenError):
    """Raised when the command line does not name exactly one output path."""


__all__ = ["PolicygenError", "UsageError"]
