import math

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 50
# Keeps (page - 1) * MAX_PAGE_LIMIT well inside a signed 64-bit skip
MAX_PAGE = 1_000_000_000


def clamp_page(page: int) -> int:
    return min(MAX_PAGE, max(1, page))


def clamp_limit(limit: int) -> int:
    return min(MAX_PAGE_LIMIT, max(1, limit))


def count_pages(total: int, limit: int) -> int:
    """Number of pages needed for `total` items, never less than one."""
    return max(1, math.ceil(total / limit))


def skip_for(page: int, limit: int) -> int:
    return (page - 1) * limit
