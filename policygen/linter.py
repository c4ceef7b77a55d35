from __future__ import annotations

import functools
import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import validators

from .models import PolicyBundle

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "policy_bundle.schema.json"


@dataclass(frozen=True, slots=True)
class LinterIssue:
    level: str
    code: str
    msg: str
    path: str


def lint_bundle(bundle: PolicyBundle) -> list[LinterIssue]:
    return lint_policy_payload(bundle.to_payload())


def lint_policy_payload(payload: Mapping[str, Any]) -> list[LinterIssue]:
    """Report shape errors and dangling policy/whitelist references.

    Referential checks only run over entries that look like mappings; shape
    problems are already reported by the schema pass.
    """

    issues = _schema_issues(payload)

    policies = _ensure_sequence(payload.get("policies"))
    whitelists = _ensure_sequence(payload.get("whitelists"))
    if not policies:
        issues.append(
            LinterIssue(
                "error",
                "bundle.no_policies",
                "Bundle must declare at least one policy.",
                "policies",
            )
        )

    policy_ids = _collect_ids(policies, "policies", issues)
    whitelist_ids = _collect_ids(whitelists, "whitelists", issues)

    for index, mapping in enumerate(_ensure_sequence(payload.get("mappings"))):
        if not isinstance(mapping, Mapping):
            continue
        label = mapping.get("name") or mapping.get("id") or f"mappings[{index}]"
        issues.extend(
            _dangling_refs(
                mapping.get("policy_ids"),
                known=policy_ids,
                path=f"mappings[{index}].policy_ids",
                code="mapping.unknown_policy",
                noun="policy",
                label=str(label),
            )
        )
        issues.extend(
            _dangling_refs(
                mapping.get("whitelist_ids"),
                known=whitelist_ids,
                path=f"mappings[{index}].whitelist_ids",
                code="mapping.unknown_whitelist",
                noun="whitelist",
                label=str(label),
            )
        )
    return issues


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=1)
def _bundle_validator() -> Any:
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _schema_issues(payload: Mapping[str, Any]) -> list[LinterIssue]:
    validator = _bundle_validator()
    errors = sorted(
        validator.iter_errors(payload),
        key=lambda err: [str(part) for part in err.absolute_path],
    )
    return [
        LinterIssue("error", "bundle.schema", error.message, _format_path(error.absolute_path))
        for error in errors
    ]


def _collect_ids(entries: Sequence[object], section: str, issues: list[LinterIssue]) -> set[str]:
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            continue
        entry_id = entry.get("id")
        if not isinstance(entry_id, str):
            continue
        if entry_id in seen:
            issues.append(
                LinterIssue(
                    "error",
                    "bundle.duplicate_id",
                    f"Duplicate id '{entry_id}' in {section}.",
                    f"{section}[{index}].id",
                )
            )
        seen.add(entry_id)
    return seen


def _dangling_refs(
    refs: object,
    *,
    known: set[str],
    path: str,
    code: str,
    noun: str,
    label: str,
) -> Iterable[LinterIssue]:
    for index, ref in enumerate(_ensure_sequence(refs)):
        if isinstance(ref, str) and ref in known:
            continue
        yield LinterIssue(
            "error",
            code,
            f"Mapping '{label}' references unknown {noun} id '{ref}'.",
            f"{path}[{index}]",
        )


def _format_path(parts: Iterable[object]) -> str:
    path = ""
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "<root>"


def _ensure_sequence(obj: object | None) -> Sequence[object]:
    if isinstance(obj, list | tuple):
        return obj
    return ()


__all__ = ["LinterIssue", "SCHEMA_PATH", "lint_bundle", "lint_policy_payload"]
