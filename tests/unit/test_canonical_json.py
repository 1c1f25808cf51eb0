"""
Module 01 - Schemas & Canonicalization
File: tests/unit/test_canonical_json.py

Purpose: Unit tests for canonical JSON serialization of structured items.
These tests ensure item digests are stable across runs.
"""

import math
from datetime import datetime, timedelta, timezone
from enum import Enum

import pytest
from pydantic import BaseModel

from hashtree.schemas import (
    CanonicalizationException,
    dumps_canonical,
    format_datetime_canonical,
)


class Color(Enum):
    RED = "red"


class Record(BaseModel):
    name: str
    size: int
    note: str | None = None


class TestDumpsCanonical:

    def test_keys_sorted_without_whitespace(self):
        assert dumps_canonical({"b": 1, "a": {"d": 2, "c": 3}}) == '{"a":{"c":3,"d":2},"b":1}'

    def test_insertion_order_irrelevant(self):
        assert dumps_canonical({"x": 1, "y": 2}) == dumps_canonical({"y": 2, "x": 1})

    def test_none_values_dropped(self):
        assert dumps_canonical({"a": None, "b": 1}) == '{"b":1}'

    def test_enum_and_bytes(self):
        assert dumps_canonical([Color.RED, b"\x01\xff"]) == '["red","01ff"]'

    def test_pydantic_model(self):
        assert dumps_canonical(Record(name="n", size=3)) == '{"name":"n","size":3}'

    def test_non_ascii_kept(self):
        assert dumps_canonical("caffè") == '"caffè"'

    def test_nan_rejected(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"v": [1.0, math.nan]})

        assert exc_info.value.details["path"] == "v[1]"


class TestDatetimes:

    def test_naive_treated_as_utc(self):
        assert format_datetime_canonical(datetime(2026, 1, 27, 21, 35)) == "2026-01-27T21:35:00Z"

    def test_aware_converted_to_utc(self):
        dt = datetime(2026, 1, 27, 23, 35, tzinfo=timezone(timedelta(hours=2)))

        assert format_datetime_canonical(dt) == "2026-01-27T21:35:00Z"

    def test_microseconds_kept(self):
        dt = datetime(2026, 1, 27, 21, 35, 0, 120, tzinfo=timezone.utc)

        assert format_datetime_canonical(dt) == "2026-01-27T21:35:00.000120Z"
