"""Page/limit arithmetic shared by the paged listings."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Page:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> dict:
        return {
            "total": total,
            "page": self.page,
            "limit": self.limit,
            "total_pages": math.ceil(total / self.limit) if total else 0,
        }


def paginate(page: int | None, limit: int | None, default_limit: int, max_limit: int) -> Page:
    """Clamp raw query values into a usable page window."""
    page = max(page or 1, 1)
    limit = min(max(limit or default_limit, 1), max_limit)
    return Page(page=page, limit=limit)


# Upper bound for queries that must see every matching row (listings filtered in memory).
FETCH_ALL_LIMIT = 10_000
