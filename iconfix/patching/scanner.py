# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Brace-balance scanner used to delimit a function body without parsing it.

The scan counts delimiters only. It does not know about string, template or
comment literals, so it is correct only when the scanned region has no
delimiter characters inside such literals. The machine-generated naive-ui
output the pipeline targets satisfies this; arbitrary code may not.
"""

from typing import Optional


def find_matching_close(
    text: str,
    start: int,
    open_char: str = "{",
    close_char: str = "}",
) -> Optional[int]:
    """
    Find the end of the block whose opening delimiter precedes *start*.

    Args:
        text: Text to scan
        start: Index just after an already counted opening delimiter
        open_char: Opening delimiter
        close_char: Closing delimiter

    Returns:
        Index just past the closing delimiter that brings depth to zero,
        or None if the text ends first
    """
    depth = 1
    for i in range(max(start, 0), len(text)):
        char = text[i]
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return i + 1
    return None
