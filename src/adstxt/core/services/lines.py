"""Line splitting for ads.txt bodies.

Files in the wild mix end-of-line conventions (LF, CRLF and old-style CR),
sometimes inside the same file. A line ends at the first CR or LF; CRLF
counts as a single terminator. The final unterminated fragment is a line too.
"""

from __future__ import annotations

import re
from typing import Iterator

_LINE_END = re.compile(rb"\r\n?|\n")
_BOM = "\ufeff"


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def split_lines(data: bytes) -> Iterator[str]:
    """Yield the logical lines of `data`, decoded as UTF-8.

    Invalid byte sequences are replaced instead of failing the whole file.
    A leading byte-order mark is dropped.
    """

    start = 0
    for match in _LINE_END.finditer(data):
        line = _decode(data[start:match.start()])
        yield line.removeprefix(_BOM) if start == 0 else line
        start = match.end()

    if start < len(data):
        line = _decode(data[start:])
        yield line.removeprefix(_BOM) if start == 0 else line
