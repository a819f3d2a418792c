import logging

from fastapi import APIRouter, Depends, status

from jobboard.dependencies import (
    get_current_business,
    get_current_identity,
    get_current_user,
    get_listing_service,
)
from jobboard.schemas import (
    JobCreate,
    JobDetail,
    JobPublicDetail,
    JobResponse,
    JobUpdate,
    MessageResponse,
)
from jobboard.services import ListingService, SessionIdentity

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/create", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    job_data: JobCreate,
    business: SessionIdentity = Depends(get_current_business),
    listings: ListingService = Depends(get_listing_service),
):
    """Post a new listing for the authenticated business. Status starts OPEN."""
    job = listings.create(business.id, job_data.model_dump())
    return JobResponse.model_validate(job)


@router.get("/open", response_model=list[JobPublicDetail])
def list_open_jobs(listings: ListingService = Depends(get_listing_service)):
    """List every listing still accepting candidates."""
    return [JobPublicDetail.model_validate(job) for job in listings.list_open()]


@router.get("/{job_id}", response_model=JobDetail)
def get_job(
    job_id: int,
    identity: SessionIdentity = Depends(get_current_identity),
    listings: ListingService = Depends(get_listing_service),
):
    """Get a listing with its candidates and selected candidate."""
    return JobDetail.model_validate(listings.get(job_id))


@router.get("/{job_id}/public", response_model=JobPublicDetail)
def get_public_job(job_id: int, listings: ListingService = Depends(get_listing_service)):
    return JobPublicDetail.model_validate(listings.get(job_id))


@router.put("/edit/{job_id}", response_model=JobResponse)
def edit_job(
    job_id: int,
    job_data: JobUpdate,
    business: SessionIdentity = Depends(get_current_business),
    listings: ListingService = Depends(get_listing_service),
):
    """Update listing fields. A status write is rejected with 422."""
    fields = job_data.model_dump(exclude_unset=True, exclude_none=True)
    job = listings.edit(job_id, fields, business_id=business.id)
    return JobResponse.model_validate(job)


@router.delete("/delete/{job_id}", response_model=JobResponse)
def delete_job(
    job_id: int,
    business: SessionIdentity = Depends(get_current_business),
    listings: ListingService = Depends(get_listing_service),
):
    """Cancel a listing. Listings are never removed."""
    job = listings.cancel(job_id, business_id=business.id)
    return JobResponse.model_validate(job)


@router.post("/apply/{job_id}", response_model=MessageResponse)
def apply_to_job(
    job_id: int,
    user: SessionIdentity = Depends(get_current_user),
    listings: ListingService = Depends(get_listing_service),
):
    if not listings.apply(job_id, user.id):
        return MessageResponse(message="You have already applied to this job.")
    return MessageResponse(message="You have applied to this job!")


@router.post("/unapply/{job_id}", response_model=MessageResponse)
def unapply_from_job(
    job_id: int,
    user: SessionIdentity = Depends(get_current_user),
    listings: ListingService = Depends(get_listing_service),
):
    listings.unapply(job_id, user.id)
    return MessageResponse(message="You have withdrawn your application for this job.")


@router.post("/approved-candidate/{job_id}/{user_id}", response_model=MessageResponse)
def approve_candidate(
    job_id: int,
    user_id: int,
    business: SessionIdentity = Depends(get_current_business),
    listings: ListingService = Depends(get_listing_service),
):
    """Select a candidate and close the listing."""
    listings.approve(job_id, user_id, business_id=business.id)
    return MessageResponse(message="Candidate approved, the job has been closed.")
