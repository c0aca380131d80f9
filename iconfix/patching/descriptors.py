# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Patch descriptors and the enumerations used to select them.

Descriptors are plain immutable data. The engine in applier.py knows how to
apply them; recipes.py holds the concrete ones.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Mode(str, Enum):
    """Build mode of the host tool."""

    BUILD = "build"
    SERVE = "serve"

    @classmethod
    def parse(cls, value: str) -> "Mode":
        normalized = (value or "").lower().strip()
        if normalized in ("dev", "development"):
            return cls.SERVE
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"Unknown build mode: {value}. "
                f"Supported values: 'build', 'serve'"
            )


class Category(str, Enum):
    """Patch category a file is handled under."""

    REPLACEABLE = "replaceable"
    EXPORT_DEFAULT = "export-default"


class Component(str, Enum):
    """naive-ui components whose default export embeds a shared icon vnode."""

    CHECKBOX = "checkbox"
    BACK_TOP = "back-top"
    RATE = "rate"
    RESULT = "result"


class InsertAt(str, Enum):
    """Where the template goes relative to the secondary anchor match."""

    AFTER = "after"
    BEFORE = "before"


@dataclass(frozen=True)
class Replacement:
    """Replace *pattern* with *replacement* in place.

    Literal patterns are matched verbatim. Regex replacements may use group
    references. ``count`` bounds the occurrences replaced, 0 means all.
    """

    pattern: str
    replacement: str
    regex: bool = False
    count: int = 1


@dataclass(frozen=True)
class Insertion:
    """Insert *template* inside the brace-delimited body opened by *anchor*.

    *anchor* must be a regex whose match ends just after an opening ``{``.
    *inner_anchor* is searched only between that brace and its matching
    close. *renames* are applied only when the insertion point is found,
    since the template declares the names they free up.
    """

    anchor: str
    inner_anchor: str
    template: str
    position: InsertAt = InsertAt.AFTER
    renames: Tuple[Replacement, ...] = ()


@dataclass(frozen=True)
class PatchDescriptor:
    name: str
    replacements: Tuple[Replacement, ...] = ()
    insertions: Tuple[Insertion, ...] = ()
