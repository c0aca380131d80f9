# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Version gate deciding whether the installed naive-ui still needs patching.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

UNKNOWN_VERSION = "unknown"


def _components(version: str) -> List[int]:
    # Non-numeric components such as "4-beta" count as zero.
    parts = []
    for piece in version.split("."):
        piece = piece.strip()
        parts.append(int(piece) if piece.isdecimal() else 0)
    return parts


def is_at_least(version: str, threshold: str) -> bool:
    """
    Return True if *version* >= *threshold*.

    Components are compared from the most significant one; a missing
    trailing component counts as zero, so "2.40" equals "2.40.0".
    """
    v1 = _components(version)
    v2 = _components(threshold)
    for i in range(max(len(v1), len(v2))):
        n1 = v1[i] if i < len(v1) else 0
        n2 = v2[i] if i < len(v2) else 0
        if n1 > n2:
            return True
        if n1 < n2:
            return False
    return True


def resolve_version(root: str, package: str = "naive-ui") -> str:
    """
    Resolve the installed version of *package* as seen from *root*.

    Looks for node_modules/<package>/package.json in *root* and each of its
    parents, the way Node resolves bare imports. Any failure yields
    UNKNOWN_VERSION; nothing is raised to the caller.
    """
    try:
        start = Path(root).resolve()
        for directory in (start, *start.parents):
            manifest = directory / "node_modules" / package / "package.json"
            if manifest.is_file():
                break
        else:
            logger.debug(f"{package} not found from {start}")
            return UNKNOWN_VERSION

        data = json.loads(manifest.read_text(encoding="utf-8"))
        version = data.get("version") if isinstance(data, dict) else None
        if not isinstance(version, str) or not version.strip():
            logger.debug(f"No usable version field in {manifest}")
            return UNKNOWN_VERSION
        return version.strip()
    except (OSError, ValueError) as e:
        logger.debug(f"Failed to resolve {package} version: {e}")
        return UNKNOWN_VERSION


def should_skip(version: str, threshold: str) -> bool:
    """Skip only when the version is known and already fixed upstream."""
    return version != UNKNOWN_VERSION and is_at_least(version, threshold)


@dataclass(frozen=True)
class GateDecision:
    """Session-wide outcome of the version gate."""

    version: str
    threshold: str
    skip: bool


def evaluate(root: str, threshold: str, package: str = "naive-ui") -> GateDecision:
    version = resolve_version(root, package)
    decision = GateDecision(
        version=version,
        threshold=threshold,
        skip=should_skip(version, threshold),
    )
    if decision.skip:
        logger.info(f"{package}@{version} >= {threshold}, skip fix")
    elif version == UNKNOWN_VERSION:
        logger.info(f"{package} version unknown, applying fix")
    else:
        logger.info(f"{package}@{version} < {threshold}, applying fix")
    return decision
