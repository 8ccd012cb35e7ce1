"""Utility functions for page selection."""

import re
from typing import Sequence, Union

from ..exceptions import InvalidPageSpec

PageSpec = Union[int, str]

_RANGE_RE = re.compile(r"^(\d+)\s*-\s*(\d+)$", re.ASCII)


def parse_pages(spec: PageSpec) -> Sequence[int]:
    """
    Parse a page specifier into a sequence of page numbers.

    Args:
        spec: A single page number (e.g. 3) or an inclusive range
              string (e.g. "2-5"). Pages are 1-indexed. Whole-number
              floats (e.g. 3.0 from JSON) count as single pages.

    Returns:
        Page numbers (1-indexed), ascending for ranges. Ranges are
        returned lazily so an arbitrarily large range costs no memory.

    Raises:
        InvalidPageSpec: If the range is malformed or start > end
    """
    if isinstance(spec, int) and not isinstance(spec, bool):
        return [spec]

    if isinstance(spec, float) and spec.is_integer():
        return [int(spec)]

    if not isinstance(spec, str):
        raise InvalidPageSpec(f'Invalid page range format: "{spec}"', spec)

    match = _RANGE_RE.match(spec.strip())
    if not match:
        raise InvalidPageSpec(f'Invalid page range format: "{spec}"', spec)

    start = int(match.group(1))
    end = int(match.group(2))
    if start > end:
        raise InvalidPageSpec(f"Invalid range: start > end ({spec})", spec)

    return range(start, end + 1)
