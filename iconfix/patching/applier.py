# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Applies patch descriptors to a PatchBuffer.

Anchors are always searched in the buffer's original text, so every edit is
expressed in original coordinates and the position map stays exact.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .descriptors import InsertAt, Insertion, PatchDescriptor, Replacement
from .patch_buffer import PatchBuffer
from .scanner import find_matching_close

logger = logging.getLogger(__name__)


@dataclass
class ApplyReport:
    """What one descriptor did to one file."""

    descriptor: str
    replacements: int = 0
    insertions: int = 0
    missing_anchors: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.replacements or self.insertions)

    @property
    def partial(self) -> bool:
        """Some edits landed but an insertion did not."""
        return self.changed and bool(self.missing_anchors)


def apply_replacement(buffer: PatchBuffer, replacement: Replacement) -> int:
    """Apply one replacement, returning the number of occurrences replaced."""
    text = buffer.original
    limit = replacement.count if replacement.count > 0 else None
    applied = 0

    if replacement.regex:
        for match in re.finditer(replacement.pattern, text):
            if limit is not None and applied >= limit:
                break
            if match.end() == match.start():
                continue
            buffer.overwrite(match.start(), match.end(), match.expand(replacement.replacement))
            applied += 1
        return applied

    start = text.find(replacement.pattern)
    while start != -1 and (limit is None or applied < limit):
        end = start + len(replacement.pattern)
        buffer.overwrite(start, end, replacement.replacement)
        applied += 1
        start = text.find(replacement.pattern, end)
    return applied


def find_insertion_point(text: str, insertion: Insertion) -> Optional[int]:
    """
    Locate where *insertion* goes in *text*.

    Returns None when the anchor, its closing brace or the inner anchor
    inside the body cannot be found.
    """
    anchor = re.search(insertion.anchor, text)
    if anchor is None:
        return None
    body_start = anchor.end()
    body_end = find_matching_close(text, body_start)
    if body_end is None:
        return None
    body = text[body_start:body_end]
    inner = re.search(insertion.inner_anchor, body)
    if inner is None:
        return None
    if insertion.position is InsertAt.BEFORE:
        return body_start + inner.start()
    return body_start + inner.start() + len(inner.group())


def apply_descriptor(buffer: PatchBuffer, descriptor: PatchDescriptor, file_id: str = "") -> ApplyReport:
    """
    Apply all replacements, then all insertions, of *descriptor*.

    A missing anchor skips only that insertion and the renames tied to it.
    It is reported as a warning, because an unpatched file silently keeps
    the leak. When other edits of the descriptor did land, the file is only
    partially patched and that is logged as an error.
    """
    report = ApplyReport(descriptor=descriptor.name)

    for replacement in descriptor.replacements:
        report.replacements += apply_replacement(buffer, replacement)

    for insertion in descriptor.insertions:
        offset = find_insertion_point(buffer.original, insertion)
        if offset is None:
            report.missing_anchors.append(insertion.anchor)
            logger.warning(
                f"[{descriptor.name}] anchor not found in {file_id or '<text>'}: "
                f"{insertion.anchor} / {insertion.inner_anchor}"
            )
            continue
        for rename in insertion.renames:
            report.replacements += apply_replacement(buffer, rename)
        buffer.append_left(offset, insertion.template)
        report.insertions += 1

    if report.partial:
        logger.error(
            f"[{descriptor.name}] {file_id or '<text>'} is only partially patched, "
            f"{len(report.missing_anchors)} insertion(s) missing"
        )

    logger.debug(
        f"[{descriptor.name}] {file_id}: {report.replacements} replacement(s), "
        f"{report.insertions} insertion(s)"
    )
    return report
