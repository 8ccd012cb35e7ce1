"""Decodes join lists from structured and inline notations."""

import json
import logging
import re
from typing import Any, List, Mapping, Sequence, Union

from ..exceptions import InvalidJoinList, InvalidTokenFormat
from ..models import BlankPage, JoinItem, PageReference

logger = logging.getLogger(__name__)

JOIN_FORMATS = ("json", "inline")

_TOKEN_RE = re.compile(r"^(\d+):(\d+(?:-\d+)?)$", re.ASCII)


def decode_join_list(items: Sequence[Any]) -> List[JoinItem]:
    """
    Decode a structured join list (e.g. a parsed JSON array).

    Entries with a truthy ``blank`` become blank pages, every other mapping
    becomes a page reference. Index and page values are not checked here;
    an entry that is not a mapping becomes a reference with neither, so it
    is reported as an invalid index downstream.
    """
    decoded: List[JoinItem] = []
    for i, item in enumerate(items):
        if isinstance(item, (BlankPage, PageReference)):
            decoded.append(item)
        elif not isinstance(item, Mapping):
            logger.debug(f"Join list entry #{i} is a {type(item).__name__}, not an object")
            decoded.append(PageReference(pdf=None))
        elif item.get("blank"):
            decoded.append(BlankPage())
        else:
            decoded.append(PageReference(pdf=item.get("pdf"), page=item.get("page")))
    return decoded


def parse_inline(text: str) -> List[JoinItem]:
    """
    Parse the compact inline notation, e.g. ``"0:1,blank,1:2-4,0:5"``.

    Empty tokens and ``blank`` (any case) insert a blank page.
    """
    decoded: List[JoinItem] = []
    for raw in text.split(","):
        token = raw.strip()
        if not token or token.lower() == "blank":
            decoded.append(BlankPage())
            continue

        match = _TOKEN_RE.match(token)
        if not match:
            raise InvalidTokenFormat(token)

        page = match.group(2)
        decoded.append(PageReference(
            pdf=int(match.group(1)),
            page=page if "-" in page else int(page),
        ))
    return decoded


def coerce_join_list(join_list: Union[str, Sequence[Any]]) -> List[JoinItem]:
    """Accept an inline string, a structured list or already decoded items."""
    if isinstance(join_list, str):
        return parse_inline(join_list)
    return decode_join_list(join_list)


def load_join_list(text: str, fmt: str = "json") -> List[JoinItem]:
    """Decode a join list document in the given encoding ("json" or "inline")."""
    fmt = fmt.lower()
    if fmt == "inline":
        return parse_inline(text)
    if fmt != "json":
        raise InvalidJoinList(
            f"Unknown join list format '{fmt}' (expected one of {', '.join(JOIN_FORMATS)})"
        )

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidJoinList(f"Join list is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise InvalidJoinList("Join list must be a JSON array")

    items = decode_join_list(raw)
    logger.debug(f"Decoded {len(items)} join list entries")
    return items
