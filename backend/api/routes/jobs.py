"""Job endpoints."""

from fastapi import APIRouter, Depends, Query, Request

from backend.api.schemas import (
    DeleteResponse,
    JobCreate,
    JobEnvelope,
    JobListResponse,
    JobResponse,
    JobUpdate,
    MonthlyApplication,
    StatsResponse,
    StatusCounts,
)
from backend.auth import Identity, get_current_user, require_writable_user
from backend.errors import BadRequestError, NotFoundError
from backend.jobs import JobStore, build_query_spec, get_job_store, show_stats

router = APIRouter()


@router.get("", response_model=JobListResponse)
def get_all_jobs(
    request: Request,
    status: str | None = None,
    job_type: str | None = Query(None, alias="jobType"),
    sort: str | None = None,
    search: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    user: Identity = Depends(get_current_user),
    store: JobStore = Depends(get_job_store),
):
    """List the caller's jobs with filtering, sorting and pagination."""
    settings = request.app.state.settings
    spec = build_query_spec(
        user.user_id,
        status=status,
        job_type=job_type,
        sort=sort,
        search=search,
        page=page,
        limit=limit,
        default_limit=settings.default_page_limit,
        max_limit=settings.max_page_limit,
    )
    result = store.find_page(spec)

    return JobListResponse(
        jobs=[JobResponse.model_validate(job) for job in result.jobs],
        total_jobs=result.total_jobs,
        num_of_pages=result.num_of_pages,
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    user: Identity = Depends(get_current_user),
    store: JobStore = Depends(get_job_store),
):
    """Status breakdown and recent monthly application counts."""
    summary = show_stats(store, user)
    return StatsResponse(
        default_stats=StatusCounts(**summary.default_stats),
        monthly_applications=[
            MonthlyApplication.model_validate(item) for item in summary.monthly_applications
        ],
    )


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(
    job_id: str,
    user: Identity = Depends(get_current_user),
    store: JobStore = Depends(get_job_store),
):
    job = store.get(user.user_id, job_id)
    if not job:
        raise NotFoundError(f"No job with id {job_id}")
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.post("", response_model=JobEnvelope, status_code=201)
def create_job(
    data: JobCreate,
    user: Identity = Depends(require_writable_user),
    store: JobStore = Depends(get_job_store),
):
    """Create a job owned by the caller."""
    job = store.create(user.user_id, data.model_dump())
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: str,
    data: JobUpdate,
    user: Identity = Depends(require_writable_user),
    store: JobStore = Depends(get_job_store),
):
    """Update one of the caller's jobs. Company and position are required."""
    if not data.company or not data.position:
        raise BadRequestError("Please provide company and position")

    fields = data.model_dump(exclude_unset=True, exclude_none=True)
    job = store.update(user.user_id, job_id, fields)
    if not job:
        raise NotFoundError(f"No job with id {job_id}")
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.delete("/{job_id}", response_model=DeleteResponse)
def delete_job(
    job_id: str,
    user: Identity = Depends(require_writable_user),
    store: JobStore = Depends(get_job_store),
):
    if not store.delete(user.user_id, job_id):
        raise NotFoundError(f"No job with id {job_id}")
    return DeleteResponse(msg="Success! Job removed")
