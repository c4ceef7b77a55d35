"""Anchore policy bundle generator."""

from .bundle import build_default_bundle  # noqa: F401
from .emitter import generate, render  # noqa: F401
from .errors import PolicygenError, UsageError  # noqa: F401
from .linter import LinterIssue, lint_bundle, lint_policy_payload  # noqa: F401
from .models import (  # noqa: F401
    ImageSelector,
    Policy,
    PolicyBundle,
    PolicyMapping,
    PolicyRule,
    RuleAction,
    RuleParam,
    Whitelist,
    WhitelistItem,
)

__all__ = [
    "ImageSelector",
    "LinterIssue",
    "Policy",
    "PolicyBundle",
    "PolicyMapping",
    "PolicyRule",
    "PolicygenError",
    "RuleAction",
    "RuleParam",
    "UsageError",
    "Whitelist",
    "WhitelistItem",
    "build_default_bundle",
    "generate",
    "lint_bundle",
    "lint_policy_payload",
    "render",
]
