"""Tests for initData parsing and data-check-string canonicalization."""

import pytest

from miniapp_gate.init_data import (
    InitDataError, MalformedInput, MissingHashField, MissingTimestamp,
    build_data_check_string, canonicalize, parse,
)


class TestParse:
    def test_simple(self):
        assert parse("a=1&b=2") == {"a": "1", "b": "2"}

    def test_empty_string(self):
        assert parse("") == {}

    def test_percent_decoding(self):
        fields = parse("user=%7B%22id%22%3A1%7D")
        assert fields["user"] == '{"id":1}'

    def test_plus_is_space(self):
        assert parse("name=John+Smith")["name"] == "John Smith"

    def test_encoded_plus_kept(self):
        assert parse("name=a%2Bb")["name"] == "a+b"

    def test_utf8_value(self):
        assert parse("name=%D0%98%D0%B2%D0%B0%D0%BD")["name"] == "Иван"

    def test_empty_value_preserved(self):
        assert parse("a=&b=2") == {"a": "", "b": "2"}

    def test_value_with_equals(self):
        assert parse("a=x=y")["a"] == "x=y"

    def test_duplicate_keys_last_wins(self):
        assert parse("a=1&a=2")["a"] == "2"

    def test_order_irrelevant(self):
        assert parse("a=1&b=2&c=3") == parse("c=3&a=1&b=2")

    def test_hash_only(self):
        assert parse("hash=abc") == {"hash": "abc"}

    @pytest.mark.parametrize("raw", [
        "novalue",
        "a=1&novalue",
        "a=1&&b=2",
        "a=1&",
        "&a=1",
        "=1",
        "a=%zz",
        "a=%4",
        "a=100%",
        "a=%FF%FE",
        "a=\ud800&hash=ff",
        "\udcff=1",
    ])
    def test_malformed(self, raw):
        with pytest.raises(MalformedInput):
            parse(raw)

    def test_not_a_string(self):
        with pytest.raises(MalformedInput):
            parse(None)

    def test_max_length(self):
        parse("a=1234", max_length=6)
        with pytest.raises(MalformedInput, match="too long"):
            parse("a=12345", max_length=6)


class TestCanonicalize:
    def test_sorted_without_hash(self):
        fields = {"b": "2", "hash": "ff", "a": "1", "c": "3"}
        assert canonicalize(fields) == "a=1\nb=2\nc=3"

    def test_missing_hash(self):
        with pytest.raises(MissingHashField):
            canonicalize({"a": "1"})

    def test_hash_only(self):
        assert canonicalize({"hash": "ff"}) == ""

    def test_no_trailing_newline(self):
        assert not canonicalize({"a": "1", "hash": "x"}).endswith("\n")

    def test_codepoint_order(self):
        # Uppercase sorts before lowercase, underscore between them
        fields = {"b": "1", "B": "2", "_": "3", "hash": ""}
        assert canonicalize(fields) == "B=2\n_=3\nb=1"

    def test_decoded_values_used(self):
        fields = parse("user=%7B%22id%22%3A1%7D&auth_date=1&hash=x")
        assert canonicalize(fields) == 'auth_date=1\nuser={"id":1}'

    def test_deterministic(self):
        raw_a = "query_id=Q&auth_date=5&user=u&hash=h"
        raw_b = "hash=h&user=u&auth_date=5&query_id=Q"
        assert canonicalize(parse(raw_a)) == canonicalize(parse(raw_b))

    def test_empty_values_kept(self):
        assert canonicalize({"a": "", "hash": "h"}) == "a="


class TestBuildDataCheckString:
    def test_sorted_order(self):
        assert build_data_check_string({"b": "2", "a": "1"}) == "a=1\nb=2"

    def test_empty(self):
        assert build_data_check_string({}) == ""


class TestErrorCodes:
    def test_codes_distinct(self):
        codes = {MalformedInput.code, MissingHashField.code, MissingTimestamp.code}
        assert len(codes) == 3

    def test_hierarchy(self):
        for cls in (MalformedInput, MissingHashField, MissingTimestamp):
            assert issubclass(cls, InitDataError)
            assert issubclass(cls, ValueError)
