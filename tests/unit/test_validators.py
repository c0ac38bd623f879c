# -*- coding: utf-8 -*-

"""
Unit tests for the string predicate library.
"""

import re
import uuid

import pytest

from reqcheck import validators


class TestComparisonPredicates:
    """Tests for contains, equals and matches."""

    def test_contains(self):
        assert validators.contains("foobar", "oba") is True
        assert validators.contains("foobar", "baz") is False

    def test_equals_compares_canonical_strings(self):
        """
        What it does: Verifies equals() compares string forms.
        Purpose: 123 equals "123" the way a decoded query string would.
        """
        assert validators.equals(123, "123") is True
        assert validators.equals("abc", "abd") is False

    def test_matches_with_modifiers(self):
        assert validators.matches("ABC", "^a", "i") is True
        assert validators.matches("ABC", "^a") is False

    def test_matches_with_compiled_pattern(self):
        assert validators.matches("abc123", re.compile(r"\d+$")) is True


class TestCharacterClassPredicates:
    """Tests for letter/number/case predicates."""

    def test_is_alpha(self):
        assert validators.is_alpha("abcXYZ") is True
        assert validators.is_alpha("abc1") is False

    def test_is_alphanumeric(self):
        assert validators.is_alphanumeric("abc1") is True
        assert validators.is_alphanumeric("abc-1") is False

    def test_is_hexadecimal(self):
        assert validators.is_hexadecimal("deadBEEF") is True
        assert validators.is_hexadecimal("xyz") is False

    def test_case_predicates(self):
        assert validators.is_lowercase("abc") is True
        assert validators.is_lowercase("aBc") is False
        assert validators.is_uppercase("ABC") is True

    def test_is_empty_with_ignore_whitespace(self):
        """
        What it does: Verifies the ignore_whitespace option.
        Purpose: "   " is empty only when whitespace is ignored.
        """
        assert validators.is_empty("") is True
        assert validators.is_empty("   ") is False
        assert validators.is_empty("   ", {"ignore_whitespace": True}) is True

    def test_is_length_range(self):
        assert validators.is_length("abc", {"min": 2, "max": 3}) is True
        assert validators.is_length("abcd", {"min": 2, "max": 3}) is False
        assert validators.is_length("a", {"min": 2}) is False


class TestNumericPredicates:
    """Tests for integer, float and related predicates."""

    def test_is_int(self):
        assert validators.is_int("123") is True
        assert validators.is_int("-5") is True
        assert validators.is_int("12.3") is False
        assert validators.is_int("") is False

    def test_is_int_leading_zeroes_option(self):
        """
        What it does: Verifies allow_leading_zeroes defaults to True.
        Purpose: "0123" only fails when leading zeroes are disallowed.
        """
        assert validators.is_int("0123") is True
        assert validators.is_int("0123", {"allow_leading_zeroes": False}) is False
        assert validators.is_int("123", {"allow_leading_zeroes": False}) is True

    def test_is_int_bounds(self):
        assert validators.is_int("5", {"min": 0, "max": 10}) is True
        assert validators.is_int("-1", {"min": 0}) is False
        assert validators.is_int("10", {"lt": 10}) is False
        assert validators.is_int("11", {"gt": 10}) is True

    def test_is_float(self):
        assert validators.is_float("1.5e3") is True
        assert validators.is_float("-.5") is True
        assert validators.is_float(".") is False
        assert validators.is_float("abc") is False
        assert validators.is_float("2.5", {"max": 2}) is False

    def test_is_decimal(self):
        assert validators.is_decimal("0.5") is True
        assert validators.is_decimal("1e5") is False

    def test_is_numeric(self):
        assert validators.is_numeric("-1.5") is True
        assert validators.is_numeric("-1.5", {"no_symbols": True}) is False

    def test_is_port(self):
        assert validators.is_port("8080") is True
        assert validators.is_port("70000") is False

    def test_is_boolean(self):
        assert validators.is_boolean("true") is True
        assert validators.is_boolean(False) is True
        assert validators.is_boolean("yes") is False

    def test_is_credit_card(self):
        assert validators.is_credit_card("4111 1111 1111 1111") is True
        assert validators.is_credit_card("4111111111111112") is False


class TestFormatPredicates:
    """Tests for email, URL and other format predicates."""

    def test_is_email(self):
        assert validators.is_email("foo@gmail.com") is True
        assert validators.is_email("not_email") is False

    def test_is_in(self):
        assert validators.is_in("b", ["a", "b"]) is True
        assert validators.is_in("c", ["a", "b"]) is False
        assert validators.is_in(1, [1, 2]) is True

    def test_is_ip(self):
        assert validators.is_ip("127.0.0.1") is True
        assert validators.is_ip("127.0.0.1", 6) is False
        assert validators.is_ip("::1", 6) is True
        assert validators.is_ip("999.0.0.1") is False

    def test_is_url(self):
        """
        What it does: Verifies URL protocol and TLD options.
        Purpose: Bare hosts pass unless a protocol is required.
        """
        assert validators.is_url("https://example.com/path?q=1") is True
        assert validators.is_url("example.com") is True
        assert validators.is_url("example.com", {"require_protocol": True}) is False
        assert validators.is_url("http://localhost") is False
        assert validators.is_url("http://localhost", {"require_tld": False}) is True
        assert validators.is_url("not a url") is False
        assert validators.is_url("gopher://example.com") is False

    def test_is_uuid(self):
        value = str(uuid.uuid4())

        assert validators.is_uuid(value) is True
        assert validators.is_uuid(value, 4) is True
        assert validators.is_uuid(value, 3) is False
        assert validators.is_uuid("not-a-uuid") is False

    def test_is_json(self):
        assert validators.is_json('{"a": 1}') is True
        assert validators.is_json("[1, 2]") is True
        assert validators.is_json("1") is False
        assert validators.is_json("{") is False

    def test_is_mongo_id(self):
        assert validators.is_mongo_id("507f1f77bcf86cd799439011") is True
        assert validators.is_mongo_id("507f1f77bcf86cd79943901") is False

    def test_is_base64(self):
        assert validators.is_base64("Zm9vYmFy") is True
        assert validators.is_base64("Zm9vYmE=") is True
        assert validators.is_base64("Zm9vYmFy=") is False

    def test_is_iso8601(self):
        assert validators.is_iso8601("2012-12-12") is True
        assert validators.is_iso8601("2012-12-12T00:00:00.000Z") is True
        assert validators.is_iso8601("2012-13-01") is False

    def test_is_ascii(self):
        assert validators.is_ascii("abc") is True
        assert validators.is_ascii("ábc") is False
