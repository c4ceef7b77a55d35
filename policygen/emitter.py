"""Stamp, serialise and write policy bundles."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path

from .bundle import build_default_bundle
from .linter import lint_bundle
from .models import PolicyBundle

LOGGER = logging.getLogger(__name__)


def render(bundle: PolicyBundle) -> str:
    """Serialise ``bundle`` as two-space indented JSON in authored key order."""

    return json.dumps(bundle.to_payload(), indent=2, ensure_ascii=False)


def generate(
    output_path: str | Path,
    *,
    bundle: PolicyBundle | None = None,
    clock: Callable[[], float] = time.time,
) -> PolicyBundle:
    """Write the stamped bundle to ``output_path``, replacing any existing file.

    Lint findings are logged and never block the write.  ``OSError`` from the
    write propagates unchanged; parent directories are not created.
    """

    path = Path(output_path)
    source = bundle if bundle is not None else build_default_bundle()
    stamped = source.stamped(int(clock()))
    LOGGER.debug("Stamped bundle %s with last_updated=%d", stamped.id, stamped.last_updated)

    for issue in lint_bundle(stamped):
        LOGGER.warning("%s %s: %s", issue.code, issue.path, issue.msg)

    text = render(stamped)
    path.write_text(text, encoding="utf-8")
    LOGGER.debug("Wrote %d bytes to %s", len(text.encode("utf-8")), path)
    return stamped


__all__ = ["generate", "render"]
