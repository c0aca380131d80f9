# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Path filters deciding which module identities a patch category applies to.
"""

import fnmatch
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

from .descriptors import Category, Mode

logger = logging.getLogger(__name__)

Pattern = Union[str, "re.Pattern[str]"]

REGEX_PREFIX = "re:"


class FilterConfigError(ValueError):
    """Raised when a filter pattern cannot be compiled."""


def _compile(pattern: Pattern) -> "re.Pattern[str]":
    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str) or not pattern:
        raise FilterConfigError(f"Invalid filter pattern: {pattern!r}")
    try:
        if pattern.startswith(REGEX_PREFIX):
            return re.compile(pattern[len(REGEX_PREFIX):])
        return re.compile(fnmatch.translate(pattern))
    except re.error as e:
        raise FilterConfigError(f"Invalid filter pattern {pattern!r}: {e}") from e


def _normalize(file_id: str) -> str:
    return file_id.replace("\\", "/")


@dataclass(frozen=True)
class Filter:
    """Include/exclude predicate over module identities.

    An empty include list matches every identity that is not excluded.
    Identities starting with a NUL byte are bundler-internal and never match.
    """

    include: Tuple["re.Pattern[str]", ...] = ()
    exclude: Tuple["re.Pattern[str]", ...] = ()

    def match(self, file_id: object) -> bool:
        if not isinstance(file_id, str) or file_id.startswith("\0"):
            return False
        normalized = _normalize(file_id)
        if any(p.search(normalized) for p in self.exclude):
            return False
        if not self.include:
            return True
        return any(p.search(normalized) for p in self.include)

    __call__ = match


def create_filter(include: Iterable[Pattern] = (), exclude: Iterable[Pattern] = ()) -> Filter:
    """Compile pattern lists into a Filter, failing fast on bad syntax."""
    return Filter(
        include=tuple(_compile(p) for p in include),
        exclude=tuple(_compile(p) for p in exclude),
    )


@dataclass(frozen=True)
class FilterSet:
    """The two category filters active for one build mode."""

    replaceable: Filter
    export_default: Filter

    def for_category(self, category: Category) -> Filter:
        if category is Category.REPLACEABLE:
            return self.replaceable
        return self.export_default

    def matches_any(self, file_id: str) -> bool:
        return self.replaceable.match(file_id) or self.export_default.match(file_id)


def _require_include(mode: Mode, build_replaceable, build_export_default, serve) -> None:
    if mode is Mode.BUILD:
        lists = {"build replaceable": build_replaceable, "build export-default": build_export_default}
    else:
        lists = {"serve": serve}
    for label, patterns in lists.items():
        if not patterns:
            raise FilterConfigError(f"Empty {label} include list would match every module")


def build_filter_set(
    mode: Mode,
    *,
    build_replaceable: Sequence[Pattern],
    build_export_default: Sequence[Pattern],
    serve: Sequence[Pattern],
    exclude: Sequence[Pattern] = (),
) -> FilterSet:
    """
    Build the filter pair for *mode*.

    In serve mode both categories collapse onto the pre-bundled aggregate
    file, since the individual module paths no longer exist there. An empty
    include list would match every module, so it is rejected.
    """
    _require_include(mode, build_replaceable, build_export_default, serve)
    if mode is Mode.BUILD:
        filters = FilterSet(
            replaceable=create_filter(build_replaceable, exclude),
            export_default=create_filter(build_export_default, exclude),
        )
    else:
        aggregate = create_filter(serve, exclude)
        filters = FilterSet(replaceable=aggregate, export_default=aggregate)
    logger.debug(
        f"Configured {mode.value} filters: "
        f"{len(filters.replaceable.include)} replaceable, "
        f"{len(filters.export_default.include)} export-default include patterns"
    )
    return filters
