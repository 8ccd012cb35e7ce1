"""Dry-run validation of a join list against source documents."""

import logging
from typing import Any, Optional, Sequence, Union

from ..documents import Source, inventory
from ..exceptions import InvalidPageSpec
from ..models import BlankPage, DocumentInfo, UsageRecord, ValidationResult
from ..utils.page_filter import parse_pages
from .join_list import coerce_join_list

logger = logging.getLogger(__name__)


# Out-of-range pages reported one by one per entry before the rest of the
# range is collapsed into a single diagnostic.
MAX_PAGE_ERRORS = 100


def pdf_index(value: Any) -> Optional[int]:
    """Return ``value`` as a source index, or None if it is not a usable one.

    Whole-number floats are accepted so JSON written by other tools (e.g.
    ``1.0``) round-trips; booleans are not.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value >= 0:
        return value
    return None


def check_join_list(
    documents: Sequence[DocumentInfo],
    join_list: Union[str, Sequence[Any]],
) -> ValidationResult:
    """
    Cross-check a join list against known page counts.

    Every faulty entry is reported in ``errors`` and processing continues
    with the next one. Each valid page reference increments the usage count
    of that page.
    """
    items = coerce_join_list(join_list)
    result = ValidationResult(
        usage=[UsageRecord(file=d.file, total_pages=d.total_pages) for d in documents]
    )

    for i, item in enumerate(items):
        if isinstance(item, BlankPage):
            continue

        pdf = pdf_index(item.pdf)
        if pdf is None:
            result.errors.append(f"Entry #{i}: invalid or missing 'pdf' index")
            continue

        if item.page is None:
            result.errors.append(f"Entry #{i}: missing 'page' value")
            continue

        total = documents[pdf].total_pages if pdf < len(documents) else 0

        try:
            pages = parse_pages(item.page)
        except InvalidPageSpec as e:
            result.errors.append(f"Entry #{i}: {e.message}")
            continue

        overflow = 0
        for page_num in pages:
            if 1 <= page_num <= total:
                result.usage[pdf].add(page_num)
                continue

            # pages are ascending, so everything after page_num is out of range too
            if page_num > total and overflow >= MAX_PAGE_ERRORS and page_num < pages[-1]:
                result.errors.append(
                    f"Entry #{i}: pdf[{pdf}] has no pages {page_num}-{pages[-1]} (max {total})"
                )
                break

            if page_num > total:
                overflow += 1
            result.errors.append(
                f"Entry #{i}: pdf[{pdf}] has no page {page_num} (max {total})"
            )

    logger.debug(f"Checked {len(items)} entries: {len(result.errors)} errors")
    return result


def validate(
    sources: Sequence[Source],
    join_list: Union[str, Sequence[Any]],
) -> ValidationResult:
    """Load the sources and validate ``join_list`` against their page counts."""
    return check_join_list(inventory(sources), join_list)
