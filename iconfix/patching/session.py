# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Immutable per-session context for the patch pipeline.

Everything that is decided once per build (mode, version gate, filters,
overlay) is captured here and passed to every transform call.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .. import config
from .descriptors import Mode
from .filters import FilterSet, Pattern, build_filter_set
from .version_gate import GateDecision, evaluate
from .virtual import VirtualOverlayResolver

logger = logging.getLogger(__name__)


class ApplyCondition(str, Enum):
    """Build modes the pipeline engages in."""

    ALWAYS = "always"
    BUILD = "build"
    SERVE = "serve"

    def allows(self, mode: Mode) -> bool:
        return self is ApplyCondition.ALWAYS or self.value == mode.value


@dataclass(frozen=True)
class SessionContext:
    mode: Mode
    apply: ApplyCondition
    gate: GateDecision
    filters: FilterSet
    overlay: VirtualOverlayResolver

    @property
    def active(self) -> bool:
        """Whether this session engages at all for its build mode."""
        return self.apply.allows(self.mode)

    @property
    def skip(self) -> bool:
        """Whether transforms must leave every file untouched."""
        return self.gate.skip or not self.active


def configure_session(
    root: str,
    mode: Mode,
    *,
    apply: ApplyCondition = ApplyCondition.ALWAYS,
    threshold: str = config.FIXED_VERSION,
    package: str = config.DEPENDENCY_NAME,
    virtual_prefix: str = config.VIRTUAL_PREFIX,
    virtual_dir: str = config.VIRTUAL_DIR,
    build_replaceable: Sequence[Pattern] = config.BUILD_REPLACEABLE_INCLUDE,
    build_export_default: Sequence[Pattern] = config.BUILD_EXPORT_DEFAULT_INCLUDE,
    serve: Sequence[Pattern] = config.SERVE_INCLUDE,
    exclude: Sequence[Pattern] = config.FILTER_EXCLUDE,
) -> SessionContext:
    """
    Build the session context.

    Filter patterns are compiled here, so a malformed pattern aborts
    configuration with FilterConfigError instead of misbehaving per file.
    """
    filters = build_filter_set(
        mode,
        build_replaceable=build_replaceable,
        build_export_default=build_export_default,
        serve=serve,
        exclude=exclude,
    )
    gate = evaluate(root, threshold, package)
    return SessionContext(
        mode=mode,
        apply=apply,
        gate=gate,
        filters=filters,
        overlay=VirtualOverlayResolver(prefix=virtual_prefix, root=virtual_dir),
    )


# Global session instance
_session_instance: Optional[SessionContext] = None


def get_session() -> SessionContext:
    """
    Get or create the global session from iconfix.config.

    Returns:
        SessionContext built on first call
    """
    global _session_instance

    if _session_instance is not None:
        return _session_instance

    mode = Mode.parse(config.ICONFIX_MODE)
    apply = ApplyCondition((config.ICONFIX_APPLY or "always").lower().strip())

    logger.info(f"Configuring icon fix session: mode={mode.value}, apply={apply.value}")
    _session_instance = configure_session(config.PROJECT_ROOT, mode, apply=apply)
    return _session_instance


def reset_session() -> None:
    """Reset the global session instance (useful for testing)."""
    global _session_instance
    _session_instance = None
