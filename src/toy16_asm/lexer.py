from __future__ import annotations
import re
from bisect import bisect_left
from typing import List, Optional, Sequence, Tuple

ALNUM_RE = re.compile(r"[A-Za-z0-9]+")
WS_RE = re.compile(r"\s*")
NEWLINE_RE = re.compile(r"\n")

def match_alnum(text: str, pos: int):
    """Return (run, end) for the maximal ASCII alphanumeric run at pos, or None."""
    m = ALNUM_RE.match(text, pos)
    if not m:
        return None
    return m.group(0), m.end()

def match_tag(text: str, pos: int, tag: str) -> Optional[int]:
    """Return the position after tag if text[pos:] starts with it, else None."""
    if text.startswith(tag, pos):
        return pos + len(tag)
    return None

def skip_whitespace(text: str, pos: int) -> int:
    return WS_RE.match(text, pos).end()

def newline_offsets(text: str) -> List[int]:
    """Offsets of every '\\n' in text, ascending. Build once per source."""
    return [m.start() for m in NEWLINE_RE.finditer(text)]

def line_col(text: str, pos: int, newlines: Optional[Sequence[int]] = None) -> Tuple[int, int]:
    """1-based (line, col) of a character offset.

    With newlines=newline_offsets(text) the lookup is a binary search, so
    repeated calls over the same text don't rescan it.
    """
    if newlines is None:
        newlines = newline_offsets(text)
    idx = bisect_left(newlines, pos)
    start = newlines[idx - 1] + 1 if idx else 0
    return idx + 1, pos - start + 1
