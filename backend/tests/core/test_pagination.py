"""Pagination Codec — pages, offsets and the ?offset= wire form.

Tests cover:
    - offset_limit is PAGE_SIZE * page_offset / PAGE_SIZE
    - next() increments up to MAX_PAGE_OFFSET, prev() saturates at 0
    - to_query/from_query symmetry and strict decoding
"""

import pytest

from blog.core.errors import DecodeError
from blog.core.pagination import (
    MAX_PAGE_OFFSET, OFFSET_PARAM, PAGE_SIZE, OffsetLimit, Page,
)


# ─── offset_limit ────────────────────────────────────────────────

@pytest.mark.parametrize("n", [0, 1, 3, 17, 1000])
def test_offset_limit_scales_by_page_size(n):
    assert Page(n).offset_limit() == OffsetLimit(offset=10 * n, limit=10)


def test_page_size_is_ten():
    assert PAGE_SIZE == 10


def test_page_three_starts_at_row_thirty():
    assert Page(3).offset_limit() == OffsetLimit(offset=30, limit=10)


# ─── next / prev ─────────────────────────────────────────────────

@pytest.mark.parametrize("n", [0, 1, 9, 250])
def test_next_increments(n):
    assert Page(n).next().page_offset == n + 1


@pytest.mark.parametrize("n", [1, 2, 10, 250])
def test_prev_decrements(n):
    assert Page(n).prev().page_offset == n - 1


def test_next_at_maximum_is_noop():
    page = Page(MAX_PAGE_OFFSET)
    assert page.next() == page


def test_prev_at_zero_is_noop():
    page = Page(0)
    assert page.prev() == page
    assert page.prev().page_offset == 0


def test_page_is_immutable_value():
    page = Page(2)
    page.next()
    assert page.page_offset == 2
    assert Page(2) == Page(2)


def test_negative_page_rejected():
    with pytest.raises(ValueError):
        Page(-1)


def test_default_page_is_zero():
    assert Page() == Page(0)


# ─── wire encoding ───────────────────────────────────────────────

def test_to_query_uses_offset_param():
    assert Page(4).to_query() == {"offset": "4"}
    assert OFFSET_PARAM == "offset"


def test_from_query_reads_offset():
    assert Page.from_query("7") == Page(7)


def test_from_query_missing_offset_is_first_page():
    assert Page.from_query(None) == Page(0)


def test_from_query_accepts_leading_zeros():
    assert Page.from_query("007") == Page(7)


def test_from_query_round_trips_to_query():
    assert Page.from_query(Page(12).to_query()[OFFSET_PARAM]) == Page(12)


@pytest.mark.parametrize("raw", ["", "-1", "+1", "1.5", "abc", " 1", "1 ", "0x10", "١"])
def test_decode_rejects_malformed(raw):
    with pytest.raises(DecodeError) as exc:
        Page.decode(raw)
    assert exc.value.field == "offset"
    assert exc.value.http_status == 400


def test_decode_rejects_out_of_range():
    with pytest.raises(DecodeError):
        Page.decode(str(MAX_PAGE_OFFSET + 1))


def test_decode_rejects_huge_digit_strings():
    with pytest.raises(DecodeError):
        Page.decode("9" * 5000)


def test_decode_accepts_maximum():
    page = Page.decode(str(MAX_PAGE_OFFSET))
    assert page.offset_limit().offset <= 2**63 - 1
