"""The Mojaloop default policy bundle.

Edit the policy inline here.  Rules follow the Docker CIS 1.13.0 image
content checks.  Keep ``PolicyMapping.policy_ids`` and
``PolicyMapping.whitelist_ids`` in sync with the ids declared below, and keep
at least one policy: when the scanner cannot load a bundle it silently falls
back to its own default policy.
"""

from __future__ import annotations

from .models import (
    ImageSelector,
    Policy,
    PolicyBundle,
    PolicyMapping,
    PolicyRule,
    RuleAction,
)

BUNDLE_ID = "mojaloop-default"

CIS_FILE_CHECKS_ID = "f2de1d56-c7f1-4b5a-92e0-135a27feae45"

CIS_FILE_CHECKS = Policy(
    comment="Docker CIS section 4.8 and 4.10 checks.",
    id=CIS_FILE_CHECKS_ID,
    name="CIS File Checks",
    rules=(
        PolicyRule(
            action=RuleAction.WARN,
            comment="section 4.8",
            gate="files",
            id="41b657bb-86e5-43ba-8f35-18edc3a465f9",
            trigger="suid_or_guid_set",
        ),
        PolicyRule(
            action=RuleAction.WARN,
            comment="section 4.10",
            gate="secret_scans",
            id="c0e5e302-764d-4b19-9fbd-5c7b0b558673",
            trigger="content_regex_checks",
        ),
    ),
)

DEFAULT_MAPPING = PolicyMapping(
    comment="default mapping that matches all registry/repo:tag images",
    id="042d5b75-ed9d-4fb7-8d41-ec174102f696",
    name="default",
    image=ImageSelector(type="tag", value="*"),
    registry="*",
    repository="*",
    policy_ids=(CIS_FILE_CHECKS_ID,),
    # No whitelists yet; the RHEL/DEB SUID lists do not apply to alpine images.
    whitelist_ids=(),
)


def build_default_bundle() -> PolicyBundle:
    """Return the unstamped default bundle (``last_updated`` is 0)."""

    return PolicyBundle(
        id=BUNDLE_ID,
        name=BUNDLE_ID,
        version="1_0",
        description=(
            "Mojaloop default Anchore policy, based on the Docker CIS 1.13.0 "
            "image content checks."
        ),
        mappings=(DEFAULT_MAPPING,),
        policies=(CIS_FILE_CHECKS,),
        whitelists=(),
    )


__all__ = ["BUNDLE_ID", "CIS_FILE_CHECKS", "DEFAULT_MAPPING", "build_default_bundle"]
