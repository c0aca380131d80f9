# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
The transform pipeline: bundler-style resolve/load/transform hooks.

Stages run in a fixed order. The prepend stage adds the helper import that
the later body-rewriting stages reference, so it always runs first.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..config import HELPER_MODULE, HELPER_NAME
from .applier import ApplyReport, apply_descriptor
from .descriptors import Category
from .patch_buffer import PatchBuffer, PositionMap
from .recipes import select_descriptor
from .session import SessionContext

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Host build phase a stage is registered for."""

    PRE = "pre"
    POST = "post"


@dataclass
class PatchResult:
    text: str
    position_map: PositionMap
    map: Dict[str, Any]


def helper_import(session: SessionContext) -> str:
    return f"import {HELPER_NAME} from '{session.overlay.prefix}{HELPER_MODULE}';\n"


def _prepend_stage(session: SessionContext, buffer: PatchBuffer, file_id: str) -> Optional[ApplyReport]:
    if not session.filters.matches_any(file_id):
        return None
    buffer.prepend(helper_import(session))
    return ApplyReport(descriptor="prepend", insertions=1)


def _category_stage(category: Category) -> Callable[[SessionContext, PatchBuffer, str], Optional[ApplyReport]]:
    def stage(session: SessionContext, buffer: PatchBuffer, file_id: str) -> Optional[ApplyReport]:
        if not session.filters.for_category(category).match(file_id):
            return None
        descriptor = select_descriptor(session.mode, category, file_id)
        if descriptor is None:
            return ApplyReport(descriptor=f"{category.value}:none")
        return apply_descriptor(buffer, descriptor, file_id)

    return stage


STAGES = (
    ("prepend", Phase.PRE, _prepend_stage),
    ("replaceable", Phase.POST, _category_stage(Category.REPLACEABLE)),
    ("export-default", Phase.POST, _category_stage(Category.EXPORT_DEFAULT)),
)


def transform(
    session: SessionContext,
    file_id: str,
    code: str,
    phase: Optional[Phase] = None,
) -> Optional[PatchResult]:
    """
    Patch one file.

    Args:
        session: Session context built at configuration time
        file_id: Absolute module path as given by the host tool
        code: Current module text
        phase: Only run stages registered for this phase; all when None

    Returns:
        PatchResult, or None when the file is left unchanged
    """
    if session.skip:
        return None

    buffer = PatchBuffer(code)
    reports: List[ApplyReport] = []
    for name, stage_phase, stage in STAGES:
        if phase is not None and stage_phase is not phase:
            continue
        report = stage(session, buffer, file_id)
        if report is not None:
            reports.append(report)

    if not reports or not buffer.has_changed():
        return None

    logger.debug(f"Patched {file_id}: {', '.join(r.descriptor for r in reports)}")
    return PatchResult(
        text=buffer.to_string(),
        position_map=buffer.position_map(),
        map=buffer.generate_map(source=file_id),
    )


def resolve_id(session: SessionContext, file_id: str) -> Optional[str]:
    if not session.active:
        return None
    return session.overlay.resolve_id(file_id)


def load(session: SessionContext, file_id: str) -> Optional[str]:
    if not session.active:
        return None
    return session.overlay.load(file_id)
