"""Tests for building the joined PDF."""

import pymupdf
import pytest

from conftest import create_test_pdf, page_texts
from pdfjoin.converters.assembler import PageAssembler, assemble
from pdfjoin.documents import load_documents
from pdfjoin.exceptions import (
    DocumentIndexOutOfRange,
    DocumentLoadError,
    InvalidEntry,
    InvalidJoinList,
    InvalidPageSpec,
    MissingPage,
    PageOutOfRange,
)
from pdfjoin.models import BlankPage, PageReference


class TestAssemble:
    """Tests for assemble()."""

    def test_example_order(self, sources, example_join_list):
        output = assemble(sources, example_join_list)

        assert isinstance(output, bytes)
        assert page_texts(output) == ["doc0-p1", "", "doc1-p2", "doc1-p3", "doc1-p4", "doc0-p5"]

    def test_inline_join_list(self, sources):
        output = assemble(sources, "1:7,0:12-12")
        assert page_texts(output) == ["doc1-p7", "doc0-p12"]

    def test_pages_can_repeat_in_any_order(self, sources):
        output = assemble(sources, [
            {"pdf": 0, "page": 3},
            {"pdf": 1, "page": 1},
            {"pdf": 0, "page": 3},
            {"pdf": 0, "page": "2-3"},
        ])
        assert page_texts(output) == ["doc0-p3", "doc1-p1", "doc0-p3", "doc0-p2", "doc0-p3"]

    def test_blank_page_size(self, sources):
        output = assemble(sources, [{"blank": True}, {"pdf": 0, "page": 1}], blank_page_size=(200, 300))
        doc = pymupdf.open(stream=output, filetype="pdf")
        try:
            assert doc.page_count == 2
            assert (doc[0].rect.width, doc[0].rect.height) == (200, 300)
        finally:
            doc.close()

    def test_in_memory_sources(self):
        output = assemble([("a.pdf", create_test_pdf(2, "a"))], "0:2,blank,0:1")
        assert page_texts(output) == ["a-p2", "", "a-p1"]

    def test_page_out_of_range_aborts(self, sources):
        with pytest.raises(PageOutOfRange) as exc_info:
            assemble(sources, [
                {"pdf": 0, "page": 1},
                {"pdf": 1, "page": "6-8"},
                {"pdf": 0, "page": 2},
            ])
        error = exc_info.value
        assert (error.entry, error.pdf, error.page, error.total_pages) == (1, 1, 8, 7)
        assert str(error) == "Entry #1: requests page 8 from pdf[1] which has only 7 pages"

    def test_page_zero(self, sources):
        with pytest.raises(PageOutOfRange):
            assemble(sources, [{"pdf": 0, "page": 0}])

    @pytest.mark.parametrize("pdf", [None, -2, "1", True])
    def test_invalid_pdf_index(self, sources, pdf):
        with pytest.raises(InvalidEntry) as exc_info:
            assemble(sources, [{"blank": True}, {"pdf": pdf, "page": 1}])
        assert exc_info.value.entry == 1

    def test_missing_page(self, sources):
        with pytest.raises(MissingPage) as exc_info:
            assemble(sources, [{"pdf": 0}])
        assert exc_info.value.entry == 0

    def test_unknown_pdf_index(self, sources):
        with pytest.raises(DocumentIndexOutOfRange) as exc_info:
            assemble(sources, [{"pdf": 2, "page": 1}])
        assert exc_info.value.pdf == 2
        assert exc_info.value.available == 2

    def test_malformed_page_spec_reports_entry(self, sources):
        with pytest.raises(InvalidPageSpec) as exc_info:
            assemble(sources, [{"pdf": 0, "page": 1}, {"pdf": 0, "page": "4-1"}])
        assert exc_info.value.entry == 1
        assert str(exc_info.value).startswith("Entry #1: Invalid range")

    def test_huge_range_stops_at_first_missing_page(self, sources):
        with pytest.raises(PageOutOfRange) as exc_info:
            assemble(sources, [{"pdf": 0, "page": "1-1000000000000"}])
        assert (exc_info.value.page, exc_info.value.total_pages) == (13, 12)

    @pytest.mark.parametrize("entry", [5, "0:1", [0, 1]])
    def test_non_object_entry(self, sources, entry):
        with pytest.raises(InvalidEntry) as exc_info:
            assemble(sources, [{"pdf": 0, "page": 1}, entry])
        assert exc_info.value.entry == 1

    def test_whole_number_float_index(self, sources):
        output = assemble(sources, [{"pdf": 1.0, "page": 3}])
        assert page_texts(output) == ["doc1-p3"]

    def test_empty_join_list(self, sources):
        with pytest.raises(InvalidJoinList):
            assemble(sources, [])

    def test_load_error(self, sources, tmp_path):
        with pytest.raises(DocumentLoadError):
            assemble([tmp_path / "absent.pdf"] + sources, [{"pdf": 1, "page": 1}])

    def test_error_to_dict(self, sources):
        with pytest.raises(PageOutOfRange) as exc_info:
            assemble(sources, [{"pdf": 0, "page": 99}])
        assert exc_info.value.to_dict() == {
            "code": "PAGE_OUT_OF_RANGE",
            "message": "Entry #0: requests page 99 from pdf[0] which has only 12 pages",
            "entry": 0,
            "details": {"pdf": 0, "page": 99, "total_pages": 12},
        }


class TestPageAssembler:
    """Tests for PageAssembler over open documents."""

    def test_assemble_open_documents(self, sources):
        docs = load_documents(sources)
        try:
            output = PageAssembler((612, 792)).assemble(docs, [
                PageReference(pdf=1, page=1),
                BlankPage(),
            ])
        finally:
            for d in docs:
                d.close()
        assert page_texts(output) == ["doc1-p1", ""]

    def test_blank_size_from_config(self, monkeypatch):
        from pdfjoin.config import reload_config

        monkeypatch.setenv("BLANK_PAGE_WIDTH", "100")
        monkeypatch.setenv("BLANK_PAGE_HEIGHT", "150")
        reload_config()
        try:
            assembler = PageAssembler()
            assert (assembler.blank_width, assembler.blank_height) == (100.0, 150.0)
        finally:
            monkeypatch.undo()
            reload_config()
