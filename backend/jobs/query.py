"""
Query building for job listings.

Turns raw, unvalidated query-string values into a ``QuerySpec``: the owner
scope, optional filters, a sort key and the page window. Counting and page
fetches both use ``QuerySpec.where()`` so totals always match the pages.
"""

from dataclasses import dataclass
from enum import Enum

from sqlalchemy import ColumnElement

from backend.db.tables import Job

ALL = "all"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
# Largest row offset handed to the database; SQLite rejects offsets past 2**63 - 1
MAX_OFFSET = 2**62


class SortKey(str, Enum):
    LATEST = "latest"
    OLDEST = "oldest"
    A_Z = "a-z"
    Z_A = "z-a"
    DEFAULT = "default"

    @classmethod
    def parse(cls, raw: str | None) -> "SortKey":
        """Map a client value to a sort key; unknown or missing values give DEFAULT."""
        try:
            return cls(raw)
        except ValueError:
            return cls.DEFAULT


SORT_ORDERINGS: dict[SortKey, tuple[ColumnElement, ...]] = {
    SortKey.LATEST: (Job.created_at.desc(),),
    SortKey.OLDEST: (Job.created_at.asc(),),
    SortKey.A_Z: (Job.position.asc(),),
    SortKey.Z_A: (Job.position.desc(),),
    SortKey.DEFAULT: (Job.created_at.asc(),),
}


@dataclass(frozen=True)
class QuerySpec:
    """Normalized filter, sort and page parameters for one listing."""

    owner_id: str
    status: str | None = None
    job_type: str | None = None
    search: str | None = None
    sort: SortKey = SortKey.DEFAULT
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def where(self) -> list[ColumnElement[bool]]:
        """Filter predicate shared by the count and the page fetch."""
        clauses = [Job.created_by == self.owner_id]
        if self.status:
            clauses.append(Job.status == self.status)
        if self.job_type:
            clauses.append(Job.job_type == self.job_type)
        if self.search:
            # autoescape makes % and _ in the term match literally
            clauses.append(Job.position.icontains(self.search, autoescape=True))
        return clauses

    def order_by(self) -> tuple[ColumnElement, ...]:
        # id breaks ties so page boundaries are stable
        return SORT_ORDERINGS[self.sort] + (Job.id.asc(),)


def _filter_value(raw: str | None) -> str | None:
    if raw is None:
        return None
    value = raw.strip()
    if not value or value == ALL:
        return None
    return value


def _positive_int(raw: str | int | None, default: int) -> int:
    """Parse a page/limit value; missing, non-numeric or zero gives ``default``."""
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if value == 0:
        return default
    return max(value, 1)


def build_query_spec(
    owner_id: str,
    *,
    status: str | None = None,
    job_type: str | None = None,
    sort: str | None = None,
    search: str | None = None,
    page: str | int | None = None,
    limit: str | int | None = None,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int | None = None,
) -> QuerySpec:
    """Build a QuerySpec scoped to ``owner_id`` from raw request values.

    Args:
        owner_id: Authenticated caller; never taken from client input
        status: Status filter, ignored when missing or "all"
        job_type: Job type filter, ignored when missing or "all"
        sort: One of latest/oldest/a-z/z-a, anything else sorts oldest first
        search: Case-insensitive substring of the position
        page: 1-based page number
        limit: Page size, capped at ``max_limit`` when given
        default_limit: Page size when ``limit`` is missing or invalid
        max_limit: Upper bound for the page size

    Returns:
        The normalized QuerySpec
    """
    search_term = search.strip() if search else None
    page_size = _positive_int(limit, default_limit)
    if max_limit is not None:
        page_size = min(page_size, max_limit)
    page_size = min(page_size, MAX_OFFSET)
    # Pages past any stored row just come back empty
    page_number = min(_positive_int(page, DEFAULT_PAGE), MAX_OFFSET // page_size + 1)

    return QuerySpec(
        owner_id=owner_id,
        status=_filter_value(status),
        job_type=_filter_value(job_type),
        search=search_term or None,
        sort=SortKey.parse(sort),
        page=page_number,
        limit=page_size,
    )
