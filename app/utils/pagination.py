"""
Pagination helpers for the feed.

Query strings are parsed leniently: anything that is not a positive integer
falls back to the default instead of failing the request.
"""

from typing import Any, Optional

# Largest value a signed 64-bit SQL integer (LIMIT/OFFSET) can hold
MAX_SQL_INTEGER = 2**63 - 1


def parse_positive_int(value: Any, fallback: int, max_value: Optional[int] = None) -> int:
    """
    Parse ``value`` as a positive integer, returning ``fallback`` otherwise.

    Values above ``max_value`` (when given) also fall back.

    Example:
        >>> parse_positive_int("3", 1)
        3
        >>> parse_positive_int("abc", 1)
        1
        >>> parse_positive_int("-5", 10)
        10
        >>> parse_positive_int(None, 10)
        10
        >>> parse_positive_int("500", 1, max_value=100)
        1
    """
    if value is None:
        return fallback
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return fallback
    if parsed <= 0:
        return fallback
    if max_value is not None and parsed > max_value:
        return fallback
    return parsed


def clamp_limit(limit: int, max_limit: int) -> int:
    """
    Cap a page size at ``max_limit``.

    Example:
        >>> clamp_limit(10000, 50)
        50
        >>> clamp_limit(20, 50)
        20
    """
    return min(limit, max_limit)


def max_page_for(limit: int) -> int:
    """
    Highest page whose offset still fits in a SQL integer.

    Example:
        >>> max_page_for(50) == (2**63 - 1) // 50 + 1
        True
    """
    return MAX_SQL_INTEGER // limit + 1


def calculate_offset(page: int, limit: int) -> int:
    """
    Calculate database offset from page number and limit.

    Args:
        page: Page number (1-indexed)
        limit: Number of items per page

    Returns:
        Database offset (0-indexed)

    Example:
        >>> calculate_offset(1, 20)
        0
        >>> calculate_offset(3, 10)
        20
    """
    if page < 1:
        raise ValueError("Page must be >= 1")
    if limit < 1:
        raise ValueError("Limit must be >= 1")

    return (page - 1) * limit
