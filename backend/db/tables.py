"""Database table models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.db.base import Base

JOB_STATUSES = ("pending", "interview", "declined")
JOB_TYPES = ("full-time", "part-time", "remote", "internship")
DEFAULT_LOCATION = "my city"


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """User account."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(128))
    last_name: Mapped[str] = mapped_column(String(20), default="lastName")
    location: Mapped[str] = mapped_column(String(50), default=DEFAULT_LOCATION)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    jobs: Mapped[list["Job"]] = relationship(back_populates="owner")


class Job(Base):
    """A job application owned by one user."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    company: Mapped[str] = mapped_column(String(50))
    position: Mapped[str] = mapped_column(String(100))
    status: Mapped[str] = mapped_column(String(20), default="pending")  # pending/interview/declined
    job_type: Mapped[str] = mapped_column(String(20), default="full-time")
    job_location: Mapped[str] = mapped_column(String(100), default=DEFAULT_LOCATION)
    created_by: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    owner: Mapped["User"] = relationship(back_populates="jobs")
