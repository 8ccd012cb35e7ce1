"""Loading of source PDF documents and their page counts."""

import logging
import os
from pathlib import Path
from typing import List, Sequence, Tuple, Union

import pymupdf

from .exceptions import DocumentLoadError
from .models import DocumentInfo

logger = logging.getLogger(__name__)

# A filesystem path, or a (name, data) pair for documents already in memory.
Source = Union[str, os.PathLike, Tuple[str, bytes]]


def source_name(source: Source) -> str:
    if isinstance(source, tuple):
        return source[0]
    return os.fspath(source)


def open_document(source: Source, index: int = 0) -> pymupdf.Document:
    """
    Open one source as a PDF document.

    Raises:
        DocumentLoadError: If the source cannot be read, is not a PDF,
                           or is encrypted
    """
    name = source_name(source)

    if isinstance(source, tuple):
        data = source[1]
    else:
        try:
            data = Path(source).read_bytes()
        except OSError as e:
            raise DocumentLoadError(name, index, e.strerror or str(e)) from e

    try:
        doc = pymupdf.open(stream=data, filetype="pdf")
    except Exception as e:
        raise DocumentLoadError(name, index, "invalid or corrupted PDF file") from e

    if doc.needs_pass:
        doc.close()
        raise DocumentLoadError(name, index, "document is encrypted")

    try:
        page_count = doc.page_count
    except Exception as e:
        doc.close()
        raise DocumentLoadError(name, index, "invalid or corrupted PDF file") from e

    logger.debug(f"Loaded pdf[{index}] '{name}' with {page_count} pages")
    return doc


def load_documents(sources: Sequence[Source]) -> List[pymupdf.Document]:
    """Open all sources in order; nothing stays open if any of them fails."""
    docs: List[pymupdf.Document] = []
    try:
        for index, source in enumerate(sources):
            docs.append(open_document(source, index))
    except DocumentLoadError:
        close_documents(docs)
        raise
    return docs


def close_documents(docs: Sequence[pymupdf.Document]) -> None:
    for doc in docs:
        doc.close()


def inventory(sources: Sequence[Source]) -> List[DocumentInfo]:
    """Return file name and total page count for every source, in input order."""
    docs = load_documents(sources)
    try:
        return [
            DocumentInfo(file=source_name(source), total_pages=doc.page_count)
            for source, doc in zip(sources, docs)
        ]
    finally:
        close_documents(docs)
