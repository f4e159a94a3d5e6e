from __future__ import annotations

from typing import List, NamedTuple, Sequence, TypeVar

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

T = TypeVar("T")


class PageRange(NamedTuple):
    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.end == -1


# Nothing to paginate; callers render an empty page.
EMPTY_PAGE = PageRange(0, -1)


def _fits_int32(value: int) -> bool:
    return INT32_MIN <= value <= INT32_MAX


def compute_page_range(page_size: int, offset: int, total_count: int) -> PageRange:
    """Inclusive ``(start, end)`` indices of a page, or ``EMPTY_PAGE``.

    Never raises: negative sizes, out-of-range offsets and empty totals all
    collapse into the sentinel. ``page_size == 0`` means "everything", which
    is only meaningful from offset zero.
    """
    if (
        not _fits_int32(page_size)
        or not _fits_int32(offset)
        or offset < 0
        or page_size < 0
        or total_count <= 0
        or total_count > INT32_MAX
        or offset >= total_count
        or (page_size == 0 and offset != 0)
    ):
        return EMPTY_PAGE

    start = offset
    end = start + page_size - 1
    if page_size == 0 or end >= total_count:
        end = total_count - 1
    return PageRange(start, end)


def slice_page(items: Sequence[T], page_size: int, offset: int) -> List[T]:
    page = compute_page_range(page_size, offset, len(items))
    if page.is_empty:
        return []
    return list(items[page.start : page.end + 1])
