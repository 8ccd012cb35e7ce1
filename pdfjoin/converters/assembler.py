"""Builds the output PDF by copying pages in join list order."""

import logging
from typing import Any, List, Optional, Sequence, Tuple, Union

import pymupdf

from ..config import get_config
from ..documents import Source, close_documents, load_documents
from ..exceptions import (
    DocumentIndexOutOfRange,
    InvalidEntry,
    InvalidJoinList,
    InvalidPageSpec,
    MissingPage,
    PageOutOfRange,
)
from ..models import BlankPage, JoinItem
from ..utils.page_filter import parse_pages
from .join_list import coerce_join_list
from .validator import pdf_index

logger = logging.getLogger(__name__)


class PageAssembler:
    """Copies pages from open source documents into a new document."""

    def __init__(self, blank_page_size: Optional[Tuple[float, float]] = None):
        if blank_page_size is None:
            config = get_config()
            blank_page_size = (config.join.blank_page_width, config.join.blank_page_height)
        self.blank_width, self.blank_height = blank_page_size

    def assemble(
        self,
        documents: Sequence[pymupdf.Document],
        items: Sequence[JoinItem],
    ) -> bytes:
        """
        Execute a decoded join list against open documents.

        The build is all-or-nothing: the first faulty entry raises and the
        partially built document is discarded.

        Returns:
            The serialized output PDF
        """
        if not items:
            raise InvalidJoinList("Join list is empty, the output would have no pages")

        out = pymupdf.open()
        try:
            for i, item in enumerate(items):
                self._apply(out, documents, i, item)

            logger.info(
                f"Assembled {out.page_count} pages from "
                f"{len(items)} entries and {len(documents)} documents"
            )
            return out.tobytes(garbage=1, deflate=True)
        finally:
            out.close()

    def _apply(
        self,
        out: pymupdf.Document,
        documents: Sequence[pymupdf.Document],
        index: int,
        item: JoinItem,
    ) -> None:
        if isinstance(item, BlankPage):
            out.new_page(width=self.blank_width, height=self.blank_height)
            return

        pdf = pdf_index(item.pdf)
        if pdf is None:
            raise InvalidEntry("missing or invalid 'pdf' index", index)

        if item.page is None:
            raise MissingPage("missing 'page' value", index)

        if pdf >= len(documents):
            raise DocumentIndexOutOfRange(index, pdf, len(documents))
        src = documents[pdf]
        total_pages = src.page_count

        try:
            pages = parse_pages(item.page)
        except InvalidPageSpec as e:
            e.entry = index
            raise

        for page_num in pages:
            if page_num < 1 or page_num > total_pages:
                raise PageOutOfRange(index, pdf, page_num, total_pages)
            out.insert_pdf(src, from_page=page_num - 1, to_page=page_num - 1)
            logger.debug(f"Entry #{index}: copied page {page_num} of pdf[{pdf}]")


def assemble(
    sources: Sequence[Source],
    join_list: Union[str, Sequence[Any]],
    blank_page_size: Optional[Tuple[float, float]] = None,
) -> bytes:
    """Load the sources and build the joined PDF described by ``join_list``."""
    items = coerce_join_list(join_list)
    documents: List[pymupdf.Document] = load_documents(sources)
    try:
        return PageAssembler(blank_page_size).assemble(documents, items)
    finally:
        close_documents(documents)
