"""
Per-user job statistics.

- status breakdown: fixed {pending, interview, declined} counts
- monthly applications: counts for the 6 most recent months with jobs,
  oldest of those first
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date

from backend.auth.tokens import Identity
from backend.db.tables import JOB_STATUSES
from backend.errors import InvalidIdentityError
from backend.jobs.store import JobStore

logger = logging.getLogger(__name__)

MONTHS_SHOWN = 6


@dataclass
class MonthlyCount:
    date: str
    count: int


@dataclass
class StatsSummary:
    default_stats: dict[str, int]
    monthly_applications: list[MonthlyCount] = field(default_factory=list)


def _owner_key(identity: Identity) -> str:
    """Check the caller id is a uuid and return it exactly as stored."""
    try:
        uuid.UUID(identity.user_id)
    except (TypeError, ValueError, AttributeError) as e:
        raise InvalidIdentityError(f"Cannot resolve user id {identity.user_id!r}") from e
    return identity.user_id


def format_month_label(year: int, month: int) -> str:
    """Render a (year, month) pair as e.g. "Jan 2024"."""
    return date(year, month, 1).strftime("%b %Y")


def status_breakdown(store: JobStore, identity: Identity) -> dict[str, int]:
    owner_id = _owner_key(identity)
    counts = dict.fromkeys(JOB_STATUSES, 0)
    for status, count in store.count_by_status(owner_id):
        if status in counts:
            counts[status] = count
        else:
            logger.debug("Dropping unknown status %r (%d jobs) for user %s", status, count, owner_id)
    return counts


def monthly_applications(
    store: JobStore, identity: Identity, months: int = MONTHS_SHOWN
) -> list[MonthlyCount]:
    owner_id = _owner_key(identity)
    rows = store.count_by_month(owner_id, limit=months)
    series = [MonthlyCount(date=format_month_label(y, m), count=count) for y, m, count in rows]
    series.reverse()
    return series


def show_stats(store: JobStore, identity: Identity) -> StatsSummary:
    return StatsSummary(
        default_stats=status_breakdown(store, identity),
        monthly_applications=monthly_applications(store, identity),
    )
