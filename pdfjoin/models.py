"""Data model for join lists, document inventories and validation results."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .utils.page_filter import PageSpec


@dataclass(frozen=True)
class BlankPage:
    """Join list instruction inserting one blank page."""

    def to_dict(self) -> Dict[str, Any]:
        return {"blank": True}


@dataclass(frozen=True)
class PageReference:
    """Join list instruction copying pages from one source document.

    ``pdf`` keeps the index exactly as supplied; it is checked against the
    source list by the validator and the assembler, not at decode time.
    """

    pdf: Any
    page: Optional[PageSpec] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"pdf": self.pdf}
        if self.page is not None:
            data["page"] = self.page
        return data


JoinItem = Union[BlankPage, PageReference]


@dataclass(frozen=True)
class DocumentInfo:
    """A source document and its total number of pages."""

    file: str
    total_pages: int

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "totalPages": self.total_pages}


@dataclass
class UsageRecord:
    """How many times each page of one source document is referenced."""

    file: str
    total_pages: int
    used_pages: Dict[int, int] = field(default_factory=dict)

    def add(self, page: int) -> None:
        self.used_pages[page] = self.used_pages.get(page, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "totalPages": self.total_pages,
            "usedPages": {str(p): c for p, c in sorted(self.used_pages.items())},
        }


@dataclass
class ValidationResult:
    """Diagnostics collected by a validation run."""

    errors: List[str] = field(default_factory=list)
    usage: List[UsageRecord] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "errors": list(self.errors),
            "usage": [u.to_dict() for u in self.usage],
        }
