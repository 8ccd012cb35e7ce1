"""
pdfjoin - assemble a PDF from pages of several source PDFs, with blank page
insertion and dry-run validation of the join list
"""
__version__ = "0.1.0"

from .converters.assembler import PageAssembler, assemble
from .converters.join_list import decode_join_list, load_join_list, parse_inline
from .converters.validator import check_join_list, validate
from .documents import inventory
from .exceptions import (
    DocumentIndexOutOfRange,
    DocumentLoadError,
    InvalidEntry,
    InvalidJoinList,
    InvalidPageSpec,
    InvalidTokenFormat,
    JoinError,
    MissingPage,
    PageOutOfRange,
)
from .models import BlankPage, DocumentInfo, PageReference, UsageRecord, ValidationResult
from .utils.page_filter import parse_pages
