# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Virtual module overlay serving helper code that patched files import.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VirtualOverlayResolver:
    """Maps ``prefix + name`` onto ``root/name``."""

    prefix: str
    root: str

    def __post_init__(self):
        object.__setattr__(self, "root", os.path.abspath(self.root))

    def resolve_id(self, file_id: str) -> Optional[str]:
        """Return the absolute path behind a virtual id, or None if not ours."""
        if not file_id.startswith(self.prefix):
            return None
        relative = file_id[len(self.prefix):].lstrip("/\\")
        return os.path.join(self.root, relative).replace("\\", "/")

    def owns(self, path: str) -> bool:
        candidate = os.path.abspath(path)
        return os.path.commonpath([candidate, self.root]) == self.root

    def load(self, file_id: str) -> Optional[str]:
        """
        Return the text of a resolved overlay file.

        Declines (None) for identities outside the overlay directory and for
        missing files, so the host tool reports its own resolution error.
        """
        try:
            if not self.owns(file_id):
                return None
        except ValueError:
            # Paths on different drives have no common path.
            return None
        if not os.path.isfile(file_id):
            logger.warning(f"Virtual module not found: {file_id}")
            return None
        with open(file_id, "r", encoding="utf-8") as f:
            return f.read()
