"""Shared fixtures: small labelled PDFs generated with PyMuPDF."""

import pymupdf
import pytest


def create_test_pdf(num_pages, label="doc"):
    """Create a PDF whose page N carries the text '<label>-p<N>'."""
    doc = pymupdf.open()
    for page_num in range(1, num_pages + 1):
        page = doc.new_page(width=612, height=792)
        page.insert_text(pymupdf.Point(72, 72), f"{label}-p{page_num}", fontsize=12, fontname="helv")
    pdf_bytes = doc.tobytes()
    doc.close()
    return pdf_bytes


def page_texts(pdf_bytes):
    """Return the stripped text of every page, in order."""
    doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")
    try:
        return [doc[i].get_text("text").strip() for i in range(doc.page_count)]
    finally:
        doc.close()


@pytest.fixture
def sources(tmp_path):
    """Two source PDFs on disk with 12 and 7 pages."""
    first = tmp_path / "first.pdf"
    second = tmp_path / "second.pdf"
    first.write_bytes(create_test_pdf(12, "doc0"))
    second.write_bytes(create_test_pdf(7, "doc1"))
    return [str(first), str(second)]


@pytest.fixture
def example_join_list():
    return [
        {"pdf": 0, "page": 1},
        {"blank": True},
        {"pdf": 1, "page": "2-4"},
        {"pdf": 0, "page": 5},
    ]
