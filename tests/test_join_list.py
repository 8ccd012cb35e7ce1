"""Tests for join list decoding."""

import json

import pytest

from pdfjoin.converters.join_list import (
    coerce_join_list,
    decode_join_list,
    load_join_list,
    parse_inline,
)
from pdfjoin.exceptions import InvalidJoinList, InvalidTokenFormat
from pdfjoin.models import BlankPage, PageReference


EXPECTED = [
    PageReference(pdf=0, page=1),
    BlankPage(),
    PageReference(pdf=1, page="2-4"),
    PageReference(pdf=0, page=5),
]


class TestInlineDecoding:
    """Tests for the compact inline notation."""

    def test_example(self):
        assert parse_inline("0:1,blank,1:2-4,0:5") == EXPECTED

    def test_tokens_are_trimmed(self):
        assert parse_inline(" 0:1 , BLANK ,1:2-4,  0:5") == EXPECTED

    def test_empty_token_is_blank(self):
        assert parse_inline("0:1,,0:2") == [
            PageReference(pdf=0, page=1),
            BlankPage(),
            PageReference(pdf=0, page=2),
        ]

    def test_single_page_kept_as_int(self):
        item = parse_inline("3:12")[0]
        assert item.pdf == 3
        assert item.page == 12
        assert isinstance(item.page, int)

    @pytest.mark.parametrize("token", ["0", "a:1", "0:x", "0:1-", "-1:2", "0 : 1", "0:1 - 3"])
    def test_invalid_tokens(self, token):
        with pytest.raises(InvalidTokenFormat) as exc_info:
            parse_inline(f"0:1,{token}")
        message = str(exc_info.value)
        assert f'"{token.strip()}"' in message
        assert "pdfIndex:page" in message
        assert "pdfIndex:start-end" in message
        assert "blank" in message

    @pytest.mark.parametrize("token", ["0:٣", "١:1", "0:1-٣"])
    def test_non_ascii_digits_rejected(self, token):
        with pytest.raises(InvalidTokenFormat):
            parse_inline(token)

    def test_descending_range_is_left_to_validation(self):
        assert parse_inline("0:5-2") == [PageReference(pdf=0, page="5-2")]


class TestStructuredDecoding:
    """Tests for structured (JSON) join lists."""

    def test_example(self):
        items = [
            {"pdf": 0, "page": 1},
            {"blank": True},
            {"pdf": 1, "page": "2-4"},
            {"pdf": 0, "page": 5},
        ]
        assert decode_join_list(items) == EXPECTED

    def test_values_are_not_checked(self):
        items = decode_join_list([{"pdf": -1}, {"page": 3}, {"pdf": "x", "page": [1]}])
        assert items == [
            PageReference(pdf=-1, page=None),
            PageReference(pdf=None, page=3),
            PageReference(pdf="x", page=[1]),
        ]

    def test_falsy_blank_is_page_reference(self):
        assert decode_join_list([{"blank": False, "pdf": 0, "page": 1}]) == [
            PageReference(pdf=0, page=1)
        ]

    @pytest.mark.parametrize("entry", [5, "0:1", [0, 1], None])
    def test_non_mapping_entry_has_no_index(self, entry):
        assert decode_join_list([{"blank": True}, entry]) == [
            BlankPage(),
            PageReference(pdf=None, page=None),
        ]

    def test_decoded_items_pass_through(self):
        assert coerce_join_list(EXPECTED) == EXPECTED

    def test_coerce_inline_string(self):
        assert coerce_join_list("0:1,blank,1:2-4,0:5") == EXPECTED


class TestLoadJoinList:
    """Tests for decoding join list documents."""

    def test_json(self):
        text = json.dumps([item.to_dict() for item in EXPECTED])
        assert load_join_list(text, "json") == EXPECTED

    def test_inline(self):
        assert load_join_list("0:1,blank,1:2-4,0:5\n", "inline") == EXPECTED

    def test_invalid_json(self):
        with pytest.raises(InvalidJoinList):
            load_join_list("[{", "json")

    def test_json_must_be_array(self):
        with pytest.raises(InvalidJoinList):
            load_join_list('{"pdf": 0, "page": 1}', "json")

    def test_unknown_format(self):
        with pytest.raises(InvalidJoinList):
            load_join_list("[]", "yaml")
