"""Typed records for Anchore policy bundles.

Every record is a frozen dataclass whose ``to_payload`` emits plain dicts and
lists in the key order the scanner documents use.  Sequences are normalised
to tuples on construction so a bundle cannot drift after it is authored.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class RuleAction(str, Enum):
    """Outcome a rule produces when its trigger fires."""

    GO = "GO"
    WARN = "WARN"
    STOP = "STOP"


def _freeze(obj: object, field: str, values: Sequence[Any]) -> None:
    object.__setattr__(obj, field, tuple(values))


@dataclass(frozen=True, slots=True)
class RuleParam:
    name: str
    value: str

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True, slots=True)
class PolicyRule:
    """A single gate/trigger check inside a policy."""

    action: RuleAction
    comment: str
    gate: str
    id: str
    trigger: str
    params: Sequence[RuleParam] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "action", RuleAction(self.action))
        _freeze(self, "params", self.params)

    def to_payload(self) -> dict[str, Any]:
        return {
            "action": self.action.value,
            "comment": self.comment,
            "gate": self.gate,
            "id": self.id,
            "params": [param.to_payload() for param in self.params],
            "trigger": self.trigger,
        }


@dataclass(frozen=True, slots=True)
class Policy:
    """Named rule set referenced from mappings by ``id``."""

    comment: str
    id: str
    name: str
    rules: Sequence[PolicyRule]
    version: str = "1_0"

    def __post_init__(self) -> None:
        _freeze(self, "rules", self.rules)

    def to_payload(self) -> dict[str, Any]:
        return {
            "comment": self.comment,
            "id": self.id,
            "name": self.name,
            "rules": [rule.to_payload() for rule in self.rules],
            "version": self.version,
        }


@dataclass(frozen=True, slots=True)
class WhitelistItem:
    """Suppresses one trigger instance, identified by its opaque trigger id."""

    comment: str
    gate: str
    id: str
    trigger_id: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "comment": self.comment,
            "gate": self.gate,
            "id": self.id,
            "trigger_id": self.trigger_id,
        }


@dataclass(frozen=True, slots=True)
class Whitelist:
    comment: str
    id: str
    name: str
    items: Sequence[WhitelistItem]
    version: str = "1_0"

    def __post_init__(self) -> None:
        _freeze(self, "items", self.items)

    def to_payload(self) -> dict[str, Any]:
        return {
            "comment": self.comment,
            "id": self.id,
            "items": [item.to_payload() for item in self.items],
            "name": self.name,
            "version": self.version,
        }


@dataclass(frozen=True, slots=True)
class ImageSelector:
    """Image match pattern; ``type`` is ``"tag"`` for tag wildcards."""

    type: str
    value: str

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type, "value": self.value}


@dataclass(frozen=True, slots=True)
class PolicyMapping:
    """Binds a registry/repository/image pattern to policies and whitelists."""

    comment: str
    id: str
    name: str
    image: ImageSelector
    registry: str
    repository: str
    policy_ids: Sequence[str]
    whitelist_ids: Sequence[str] = ()

    def __post_init__(self) -> None:
        _freeze(self, "policy_ids", self.policy_ids)
        _freeze(self, "whitelist_ids", self.whitelist_ids)

    def to_payload(self) -> dict[str, Any]:
        return {
            "comment": self.comment,
            "id": self.id,
            "image": self.image.to_payload(),
            "name": self.name,
            "policy_ids": list(self.policy_ids),
            "registry": self.registry,
            "repository": self.repository,
            "whitelist_ids": list(self.whitelist_ids),
        }


@dataclass(frozen=True, slots=True)
class PolicyBundle:
    """Top-level policy document consumed by the image scanner."""

    id: str
    name: str
    version: str
    description: str
    mappings: Sequence[PolicyMapping]
    policies: Sequence[Policy]
    whitelists: Sequence[Whitelist] = ()
    blacklisted_images: Sequence[str] = ()
    whitelisted_images: Sequence[str] = ()
    last_updated: int = 0

    def __post_init__(self) -> None:
        for field in (
            "mappings",
            "policies",
            "whitelists",
            "blacklisted_images",
            "whitelisted_images",
        ):
            _freeze(self, field, getattr(self, field))

    def stamped(self, last_updated: int) -> PolicyBundle:
        """Return a copy carrying ``last_updated`` in whole epoch seconds."""

        return replace(self, last_updated=int(last_updated))

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "last_updated": self.last_updated,
            "blacklisted_images": list(self.blacklisted_images),
            "mappings": [mapping.to_payload() for mapping in self.mappings],
            "policies": [policy.to_payload() for policy in self.policies],
            "whitelisted_images": list(self.whitelisted_images),
            "whitelists": [whitelist.to_payload() for whitelist in self.whitelists],
        }


__all__ = [
    "ImageSelector",
    "Policy",
    "PolicyBundle",
    "PolicyMapping",
    "PolicyRule",
    "RuleAction",
    "RuleParam",
    "Whitelist",
    "WhitelistItem",
]
