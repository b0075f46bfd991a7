"""
Job records.

- query: filter/sort/page normalization
- store: owner-scoped persistence
- stats: status breakdown and monthly volume
"""

from backend.jobs.query import QuerySpec, SortKey, build_query_spec
from backend.jobs.stats import StatsSummary, show_stats
from backend.jobs.store import JobPage, JobStore, get_job_store

__all__ = [
    "QuerySpec",
    "SortKey",
    "build_query_spec",
    "JobPage",
    "JobStore",
    "get_job_store",
    "StatsSummary",
    "show_stats",
]
