"""Exception hierarchy for pdfjoin."""

from typing import Any, Dict, Optional


class JoinError(ValueError):
    """Base exception for all join list and document faults."""

    code = "JOIN_ERROR"

    def __init__(self, message: str, entry: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.entry = entry

    def __str__(self) -> str:
        if self.entry is None:
            return self.message
        return f"Entry #{self.entry}: {self.message}"

    def details(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"code": self.code, "message": str(self)}
        if self.entry is not None:
            data["entry"] = self.entry
        details = self.details()
        if details:
            data["details"] = details
        return data


class DocumentLoadError(JoinError):
    """Raised when a source document cannot be read or parsed as a PDF."""

    code = "DOCUMENT_LOAD_FAILED"

    def __init__(self, source: str, index: int, reason: str):
        super().__init__(f"Failed to load pdf[{index}] '{source}': {reason}")
        self.source = source
        self.index = index
        self.reason = reason

    def details(self) -> Dict[str, Any]:
        return {"source": self.source, "pdf": self.index}


class InvalidPageSpec(JoinError):
    """Raised for a malformed page range or one with start > end."""

    code = "INVALID_PAGE_SPEC"

    def __init__(self, message: str, spec: Any, entry: Optional[int] = None):
        super().__init__(message, entry)
        self.spec = spec


class InvalidTokenFormat(JoinError):
    """Raised for an inline join token that matches no accepted shape."""

    code = "INVALID_TOKEN_FORMAT"

    def __init__(self, token: str):
        super().__init__(
            f'Invalid join token "{token}": expected "pdfIndex:page", '
            f'"pdfIndex:start-end" or "blank"'
        )
        self.token = token


class InvalidJoinList(JoinError):
    """Raised when a join list document cannot be decoded at all."""

    code = "INVALID_JOIN_LIST"


class InvalidEntry(JoinError):
    """Raised when a join list entry has a missing or invalid 'pdf' index."""

    code = "INVALID_ENTRY"


class MissingPage(JoinError):
    """Raised when a page reference entry has no 'page' value."""

    code = "MISSING_PAGE"


class DocumentIndexOutOfRange(JoinError):
    """Raised when an entry references a source document that was not supplied."""

    code = "PDF_INDEX_OUT_OF_RANGE"

    def __init__(self, entry: int, pdf: int, available: int):
        super().__init__(
            f"pdf[{pdf}] does not exist ({available} source documents)", entry
        )
        self.pdf = pdf
        self.available = available

    def details(self) -> Dict[str, Any]:
        return {"pdf": self.pdf, "available": self.available}


class PageOutOfRange(JoinError):
    """Raised when a requested page lies outside a source document."""

    code = "PAGE_OUT_OF_RANGE"

    def __init__(self, entry: int, pdf: int, page: int, total_pages: int):
        super().__init__(
            f"requests page {page} from pdf[{pdf}] which has only {total_pages} pages",
            entry,
        )
        self.pdf = pdf
        self.page = page
        self.total_pages = total_pages

    def details(self) -> Dict[str, Any]:
        return {"pdf": self.pdf, "page": self.page, "total_pages": self.total_pages}
