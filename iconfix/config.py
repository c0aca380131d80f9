# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Configuration module for the naive-ui icon fix pipeline.

This module centralizes all configuration options for the patch pipeline,
including build mode selection, the version gate, the virtual helper module
and the per-mode path filters.
"""

import os
from pathlib import Path


def _split_env(name: str, default: list) -> list:
    """Read a comma separated pattern list, falling back to *default* when unset or blank."""
    items = [item.strip() for item in os.getenv(name, "").split(",") if item.strip()]
    return items or list(default)


# ============================================================================
# Session Settings
# ============================================================================

ICONFIX_MODE = os.getenv("ICONFIX_MODE", "build")
"""
Build mode of the host tool.
Options: 'build', 'serve' ('dev' is accepted as an alias of 'serve')
- 'build': production build, naive-ui is consumed as individual ES modules
- 'serve': dev server, naive-ui is pre-bundled into one aggregate file
"""

ICONFIX_APPLY = os.getenv("ICONFIX_APPLY", "always")
"""
Which build modes the pipeline engages in.
Options: 'always', 'build', 'serve'
"""

PROJECT_ROOT = os.getenv("ICONFIX_ROOT", os.getcwd())
"""
Front-end project root. naive-ui is resolved from here upwards.
"""

# ============================================================================
# Version Gate
# ============================================================================

DEPENDENCY_NAME = "naive-ui"

FIXED_VERSION = os.getenv("ICONFIX_FIXED_VERSION", "2.40.4")
"""
First naive-ui release that ships the fix upstream.
Installed versions at or above this skip patching entirely.
"""

# ============================================================================
# Virtual Helper Module
# ============================================================================

VIRTUAL_PREFIX = os.getenv("ICONFIX_VIRTUAL_PREFIX", "virtual:fixNaiveuiIcon-path:")
"""
Import prefix served by the overlay resolver instead of node_modules.
"""

VIRTUAL_DIR = os.getenv("ICONFIX_VIRTUAL_DIR", str(Path(__file__).parent / "virtual"))
"""
Directory holding the helper modules behind VIRTUAL_PREFIX.
"""

HELPER_NAME = "fixNaiveuiIconCloneVnode"
HELPER_MODULE = "deepCloneVnode.js"

# ============================================================================
# Path Filters
# ============================================================================

BUILD_REPLACEABLE_INCLUDE = _split_env(
    "ICONFIX_BUILD_REPLACEABLE_INCLUDE",
    [r"re:/naive-ui/es/_internal/icons/replaceable"],
)
"""
Production include patterns for the replaceable icon helper.
Patterns prefixed with 're:' are regular expressions, others are globs.
"""

BUILD_EXPORT_DEFAULT_INCLUDE = _split_env(
    "ICONFIX_BUILD_EXPORT_DEFAULT_INCLUDE",
    [
        r"re:/naive-ui/es/checkbox/src/Checkbox\.mjs",
        r"re:/naive-ui/es/back-top/src/BackTop\.mjs",
        r"re:/naive-ui/es/rate/src/Rate\.mjs",
        r"re:/naive-ui/es/result/src/Result\.mjs",
    ],
)
"""
Production include patterns for components exporting shared icon vnodes.
"""

SERVE_INCLUDE = _split_env(
    "ICONFIX_SERVE_INCLUDE",
    [r"re:/\.vite/deps/naive-ui\.js"],
)
"""
Dev include pattern. The dependency pre-bundler merges naive-ui into one
aggregate file, so both patch categories share this single predicate.
"""

FILTER_EXCLUDE = _split_env("ICONFIX_FILTER_EXCLUDE", [])
"""
Exclude patterns applied to every filter in both modes.
"""

# ============================================================================
# Server Settings
# ============================================================================

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8890"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
