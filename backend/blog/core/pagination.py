"""Pagination Codec — logical pages, store offsets, and the query-string wire form.

Invariants:
    - page_offset is never negative; prev() at page 0 returns the same page
    - next() at MAX_PAGE_OFFSET returns the same page
    - offset_limit() == OffsetLimit(PAGE_SIZE * page_offset, PAGE_SIZE)
    - Decoding never clamps: malformed or out-of-range input raises DecodeError
    - Client and server share this module, so encode/decode stay symmetric

Design Decisions:
    - Frozen dataclasses: Page is a value type, next()/prev() return new pages
    - MAX_PAGE_OFFSET keeps the derived offset inside a signed 64-bit SQL parameter
"""

import re
from dataclasses import dataclass

from blog.core.errors import DecodeError

PAGE_SIZE = 10
MAX_PAGE_OFFSET = (2**63 - 1) // PAGE_SIZE

# Query parameter carrying the page on the wire: GET /posts?offset=<n>
OFFSET_PARAM = "offset"

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class OffsetLimit:
    """Store-level window: skip `offset` rows, return at most `limit`."""
    offset: int
    limit: int


@dataclass(frozen=True)
class Page:
    """The Nth page of PAGE_SIZE posts, zero-based."""
    page_offset: int = 0

    def __post_init__(self):
        if not 0 <= self.page_offset <= MAX_PAGE_OFFSET:
            raise ValueError(
                f"page_offset must be in [0, {MAX_PAGE_OFFSET}], got {self.page_offset}",
            )

    def next(self) -> "Page":
        if self.page_offset < MAX_PAGE_OFFSET:
            return Page(self.page_offset + 1)
        return self

    def prev(self) -> "Page":
        if self.page_offset >= 1:
            return Page(self.page_offset - 1)
        return self

    def offset_limit(self) -> OffsetLimit:
        return OffsetLimit(offset=PAGE_SIZE * self.page_offset, limit=PAGE_SIZE)

    def to_query(self) -> dict[str, str]:
        """Encode as HTTP query parameters."""
        return {OFFSET_PARAM: str(self.page_offset)}

    @classmethod
    def from_query(cls, raw: str | None) -> "Page":
        """Decode the offset query parameter. A missing offset means page 0."""
        if raw is None:
            return cls()
        return cls.decode(raw)

    @classmethod
    def decode(cls, raw: str) -> "Page":
        """Decode a single offset value, rejecting anything but plain digits."""
        if not _DIGITS.fullmatch(raw):
            raise DecodeError(
                f"offset must be a non-negative integer, got {raw!r}", OFFSET_PARAM,
            )
        digits = raw.lstrip("0") or "0"
        # length check first: int() refuses very long digit strings
        if len(digits) > len(str(MAX_PAGE_OFFSET)) or int(digits) > MAX_PAGE_OFFSET:
            raise DecodeError(
                f"offset {digits} exceeds maximum page {MAX_PAGE_OFFSET}", OFFSET_PARAM,
            )
        return cls(int(digits))
