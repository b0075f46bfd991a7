"""
Owner-scoped job storage.

Every method takes the owner id and filters on it; a job that belongs to
someone else looks exactly like a missing one. SQLAlchemy failures surface
as StoreUnavailableError.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any

from fastapi import Depends
from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from backend.db import Job, get_db, store_call
from backend.jobs.query import QuerySpec

logger = logging.getLogger(__name__)


@dataclass
class JobPage:
    jobs: list[Job]
    total_jobs: int
    num_of_pages: int


class JobStore:
    """Job queries and mutations for a single database session."""

    def __init__(self, db: Session):
        self.db = db

    def find_page(self, spec: QuerySpec) -> JobPage:
        """Fetch one page of jobs plus the total count for the same filter."""
        query = self.db.query(Job).filter(*spec.where())

        with store_call("find_page"):
            total_jobs = query.count()
            jobs = query.order_by(*spec.order_by()).offset(spec.skip).limit(spec.limit).all()

        return JobPage(
            jobs=jobs,
            total_jobs=total_jobs,
            num_of_pages=math.ceil(total_jobs / spec.limit),
        )

    def get(self, owner_id: str, job_id: str) -> Job | None:
        with store_call("get"):
            return self.db.query(Job).filter(Job.id == job_id, Job.created_by == owner_id).first()

    def create(self, owner_id: str, fields: dict[str, Any]) -> Job:
        job = Job(**fields, created_by=owner_id)
        with store_call("create"):
            self.db.add(job)
            self.db.commit()
            self.db.refresh(job)
        logger.info("Created job %s for user %s", job.id, owner_id)
        return job

    def update(self, owner_id: str, job_id: str, fields: dict[str, Any]) -> Job | None:
        """Apply ``fields`` to the owner's job; None when it does not exist."""
        job = self.get(owner_id, job_id)
        if job is None:
            return None

        for name, value in fields.items():
            setattr(job, name, value)
        with store_call("update"):
            self.db.commit()
            self.db.refresh(job)
        logger.info("Updated job %s for user %s", job_id, owner_id)
        return job

    def delete(self, owner_id: str, job_id: str) -> bool:
        job = self.get(owner_id, job_id)
        if job is None:
            return False

        with store_call("delete"):
            self.db.delete(job)
            self.db.commit()
        logger.info("Deleted job %s for user %s", job_id, owner_id)
        return True

    def count_by_status(self, owner_id: str) -> list[tuple[str, int]]:
        with store_call("count_by_status"):
            rows = (
                self.db.query(Job.status, func.count(Job.id))
                .filter(Job.created_by == owner_id)
                .group_by(Job.status)
                .all()
            )
        return [(status, count) for status, count in rows]

    def count_by_month(self, owner_id: str, limit: int) -> list[tuple[int, int, int]]:
        """(year, month, count) groups of created_at, newest first."""
        year = extract("year", Job.created_at).label("year")
        month = extract("month", Job.created_at).label("month")
        with store_call("count_by_month"):
            rows = (
                self.db.query(year, month, func.count(Job.id))
                .filter(Job.created_by == owner_id)
                .group_by(year, month)
                .order_by(year.desc(), month.desc())
                .limit(limit)
                .all()
            )
        return [(int(y), int(m), count) for y, m, count in rows]


def get_job_store(db: Session = Depends(get_db)) -> JobStore:
    """FastAPI dependency for a request-scoped JobStore."""
    return JobStore(db)
