"""API request/response schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

JobStatus = Literal["pending", "interview", "declined"]
JobType = Literal["full-time", "part-time", "remote", "internship"]


# Auth schemas
class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateUserRequest(BaseModel):
    email: EmailStr | None = None
    name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, alias="lastName", max_length=20)
    location: str | None = Field(default=None, max_length=50)

    class Config:
        populate_by_name = True


class UserResponse(BaseModel):
    email: str
    name: str
    last_name: str = Field(serialization_alias="lastName")
    location: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


# Job schemas
class JobCreate(BaseModel):
    company: str = Field(..., min_length=1, max_length=50)
    position: str = Field(..., min_length=1, max_length=100)
    status: JobStatus = "pending"
    job_type: JobType = Field(default="full-time", alias="jobType")
    job_location: str = Field(default="my city", alias="jobLocation", max_length=100)

    class Config:
        populate_by_name = True


class JobUpdate(BaseModel):
    # company and position are checked by the route so the error names them
    company: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=100)
    status: JobStatus | None = None
    job_type: JobType | None = Field(default=None, alias="jobType")
    job_location: str | None = Field(default=None, alias="jobLocation", max_length=100)

    class Config:
        populate_by_name = True


class JobResponse(BaseModel):
    id: str
    company: str
    position: str
    status: str
    job_type: str = Field(serialization_alias="jobType")
    job_location: str = Field(serialization_alias="jobLocation")
    created_by: str = Field(serialization_alias="createdBy")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    class Config:
        from_attributes = True


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    total_jobs: int = Field(serialization_alias="totalJobs")
    num_of_pages: int = Field(serialization_alias="numOfPages")


class DeleteResponse(BaseModel):
    msg: str


# Stats schemas
class StatusCounts(BaseModel):
    pending: int = 0
    interview: int = 0
    declined: int = 0


class MonthlyApplication(BaseModel):
    date: str
    count: int

    class Config:
        from_attributes = True


class StatsResponse(BaseModel):
    default_stats: StatusCounts = Field(serialization_alias="defaultStats")
    monthly_applications: list[MonthlyApplication] = Field(serialization_alias="monthlyApplications")
