"""Pagination rules shared by the notification listings."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    """A clamped ``page``/``limit`` pair."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def clamp_pagination(page: int | None, limit: int | None) -> PageRequest:
    """Clamp ``page`` to ``>= 1`` and ``limit`` to ``1..MAX_PAGE_SIZE``.

    Out-of-range values are corrected instead of rejected; ``None`` selects
    the defaults.
    """

    page = 1 if page is None else max(1, int(page))
    limit = DEFAULT_PAGE_SIZE if limit is None else min(MAX_PAGE_SIZE, max(1, int(limit)))
    return PageRequest(page=page, limit=limit)


__all__ = ["DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "PageRequest", "clamp_pagination"]
