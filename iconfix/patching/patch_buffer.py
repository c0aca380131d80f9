# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Non-destructive text editing with position tracking.

All edits are addressed in coordinates of the original text and never
remove unrelated text, so the patched output can always be mapped back
to the original, both as an offset map and as a Source Map v3.
"""

import bisect
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

_BASE64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_NEWLINE = re.compile(r"\n")


def encode_vlq(value: int) -> str:
    """Encode one integer as a Base64 VLQ field."""
    vlq = ((-value) << 1) | 1 if value < 0 else value << 1
    encoded = ""
    while True:
        digit = vlq & 31
        vlq >>= 5
        if vlq:
            digit |= 32
        encoded += _BASE64[digit]
        if not vlq:
            return encoded


def _line_starts(text: str) -> List[int]:
    return [0] + [m.end() for m in _NEWLINE.finditer(text)]


def _locate(line_starts: List[int], offset: int) -> Tuple[int, int]:
    line = bisect.bisect_right(line_starts, offset) - 1
    return line, offset - line_starts[line]


@dataclass(frozen=True)
class Segment:
    """A run of output text and the original range it came from.

    Unchanged runs have equal lengths on both sides. Edited runs are either
    pure insertions (empty original range) or overwrites.
    """

    original_start: int
    original_end: int
    generated_start: int
    generated_end: int
    edited: bool


class PositionMap:
    """Offset mapping between an original text and its patched output."""

    def __init__(self, segments: List[Segment], original_length: int, generated_length: int):
        self.segments = segments
        self.original_length = original_length
        self.generated_length = generated_length

    @property
    def delta(self) -> int:
        """Net number of characters added by the patch."""
        return self.generated_length - self.original_length

    def to_generated(self, offset: int) -> int:
        """
        Map an original offset to the patched text.

        Offsets inside an overwritten range map to the start of its
        replacement. Text inserted at an offset lands before it.
        """
        if offset < 0 or offset > self.original_length:
            raise IndexError(f"Original offset out of range: {offset}")
        for seg in self.segments:
            if seg.original_start == seg.original_end:
                continue
            if seg.original_start <= offset < seg.original_end:
                if seg.edited:
                    return seg.generated_start
                return seg.generated_start + (offset - seg.original_start)
        return self.generated_length

    def to_original(self, offset: int) -> Optional[int]:
        """
        Map a patched offset back to the original text.

        Returns None for characters that were inserted. Characters of an
        overwrite map to the start of the range they replaced.
        """
        if offset < 0 or offset > self.generated_length:
            raise IndexError(f"Generated offset out of range: {offset}")
        if offset == self.generated_length:
            return self.original_length
        for seg in self.segments:
            if seg.generated_start <= offset < seg.generated_end:
                if not seg.edited:
                    return seg.original_start + (offset - seg.generated_start)
                if seg.original_start == seg.original_end:
                    return None
                return seg.original_start
        return None


class PatchBuffer:
    """Collects edits against an original text."""

    def __init__(self, original: str):
        self.original = original
        self._intro: List[str] = []
        # (start, end, content, kind, sequence); kind 0 = insert, 1 = overwrite
        self._edits: List[Tuple[int, int, str, int, int]] = []

    def _check_index(self, index: int) -> None:
        if index < 0 or index > len(self.original):
            raise IndexError(f"Index out of range: {index}")

    def prepend(self, content: str) -> "PatchBuffer":
        """Insert *content* before everything else, including earlier prepends."""
        self._intro.insert(0, content)
        return self

    def append_left(self, index: int, content: str) -> "PatchBuffer":
        """Insert *content* at *index*, after earlier insertions there."""
        self._check_index(index)
        for start, end, _, kind, _ in self._edits:
            if kind == 1 and start < index < end:
                raise ValueError(f"Insertion at {index} falls inside overwritten range {start}:{end}")
        self._edits.append((index, index, content, 0, len(self._edits)))
        return self

    def overwrite(self, start: int, end: int, content: str) -> "PatchBuffer":
        """Replace original[start:end] with *content*."""
        self._check_index(start)
        self._check_index(end)
        if start >= end:
            raise ValueError(f"Cannot overwrite empty range {start}:{end}")
        for s, e, _, kind, _ in self._edits:
            if kind == 1 and s < end and start < e:
                raise ValueError(f"Overwrite {start}:{end} overlaps {s}:{e}")
            if kind == 0 and start < s < end:
                raise ValueError(f"Overwrite {start}:{end} would swallow insertion at {s}")
        self._edits.append((start, end, content, 1, len(self._edits)))
        return self

    def has_changed(self) -> bool:
        return bool(self._intro) or any(content or kind == 1 for _, _, content, kind, _ in self._edits)

    def _chunks(self) -> List[Tuple[int, int, str, bool]]:
        """Ordered (original_start, original_end, text, edited) pieces of the output."""
        chunks = []
        intro = "".join(self._intro)
        if intro:
            chunks.append((0, 0, intro, True))
        pos = 0
        for start, end, content, _, _ in sorted(self._edits, key=lambda e: (e[0], e[3], e[4])):
            if start > pos:
                chunks.append((pos, start, self.original[pos:start], False))
            if content or end > start:
                chunks.append((start, end, content, True))
            pos = max(pos, end)
        if pos < len(self.original):
            chunks.append((pos, len(self.original), self.original[pos:], False))
        return chunks

    def to_string(self) -> str:
        return "".join(text for _, _, text, _ in self._chunks())

    def position_map(self) -> PositionMap:
        segments = []
        generated = 0
        for start, end, text, edited in self._chunks():
            segments.append(Segment(start, end, generated, generated + len(text), edited))
            generated += len(text)
        return PositionMap(segments, len(self.original), generated)

    def generate_map(self, source: str, file: Optional[str] = None) -> Dict[str, Any]:
        """
        Build a Source Map v3 for the patched text.

        Mappings are emitted at the start of every chunk and at every line
        start inside unchanged chunks. Inserted text is left unmapped.
        """
        generated = self.to_string()
        pmap = self.position_map()
        original_lines = _line_starts(self.original)
        generated_lines = _line_starts(generated)
        lines: List[List[Tuple[int, int, int]]] = [[] for _ in generated_lines]

        def add(gen_offset: int, orig_offset: int) -> None:
            gen_line, gen_col = _locate(generated_lines, gen_offset)
            orig_line, orig_col = _locate(original_lines, orig_offset)
            lines[gen_line].append((gen_col, orig_line, orig_col))

        for seg in pmap.segments:
            if seg.generated_start == seg.generated_end:
                continue
            if seg.edited:
                if seg.original_start != seg.original_end:
                    add(seg.generated_start, seg.original_start)
                continue
            add(seg.generated_start, seg.original_start)
            text = generated[seg.generated_start:seg.generated_end]
            for m in _NEWLINE.finditer(text):
                if seg.generated_start + m.end() < seg.generated_end:
                    add(seg.generated_start + m.end(), seg.original_start + m.end())

        encoded_lines = []
        prev_orig_line = 0
        prev_orig_col = 0
        for segments in lines:
            prev_gen_col = 0
            encoded = []
            for gen_col, orig_line, orig_col in segments:
                # Single source, so the source index delta is always 0.
                fields = [
                    gen_col - prev_gen_col,
                    0,
                    orig_line - prev_orig_line,
                    orig_col - prev_orig_col,
                ]
                encoded.append("".join(encode_vlq(f) for f in fields))
                prev_gen_col = gen_col
                prev_orig_line = orig_line
                prev_orig_col = orig_col
            encoded_lines.append(",".join(encoded))

        return {
            "version": 3,
            "file": file or source,
            "sources": [source],
            "sourcesContent": [self.original],
            "names": [],
            "mappings": ";".join(encoded_lines),
        }
