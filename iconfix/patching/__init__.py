# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Patch engine for the naive-ui icon reference leak.
"""

from .descriptors import Category, Component, Mode, PatchDescriptor
from .filters import FilterConfigError
from .pipeline import Phase, PatchResult, load, resolve_id, transform
from .session import ApplyCondition, SessionContext, configure_session, get_session, reset_session

__all__ = [
    "ApplyCondition",
    "Category",
    "Component",
    "FilterConfigError",
    "Mode",
    "PatchDescriptor",
    "PatchResult",
    "Phase",
    "SessionContext",
    "configure_session",
    "get_session",
    "load",
    "reset_session",
    "resolve_id",
    "transform",
]
