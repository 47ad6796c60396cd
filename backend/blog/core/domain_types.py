"""Domain Types — rich types and boundary checks for post fields.

Invariants:
    - PostId wraps the store's 64-bit integer identity
    - A title never contains control characters (Unicode category Cc)
    - A title is at most TITLE_MAX_LENGTH characters

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Titles with control characters are rejected, not stripped: callers see the failure
"""

import unicodedata
from typing import NewType

# ─── Identity Types ──────────────────────────────────────────────

PostId = NewType("PostId", int)

MAX_POST_ID = 2**63 - 1


# ─── Value Bounds ────────────────────────────────────────────────

TITLE_MAX_LENGTH = 200


def find_control_character(value: str) -> int | None:
    """Index of the first control character in value, or None."""
    for index, char in enumerate(value):
        if unicodedata.category(char) == "Cc":
            return index
    return None


def check_title(value: str) -> str:
    """Return value unchanged if it is a valid title, else raise ValueError."""
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(
            f"title exceeds {TITLE_MAX_LENGTH} characters ({len(value)})",
        )
    index = find_control_character(value)
    if index is not None:
        raise ValueError(
            f"title contains control character U+{ord(value[index]):04X} "
            f"at position {index}",
        )
    return value
