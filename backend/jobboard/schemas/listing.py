from typing import Optional

from jobboard.schemas.business import BusinessPublic
from jobboard.schemas.job import JobFields, JobResponse
from jobboard.schemas.user import CandidateResponse


class JobPublicDetail(JobFields):
    """A listing as shown to anonymous visitors: no candidate information."""
    business: BusinessPublic


class JobDetail(JobResponse):
    """A listing with its business, candidates and selected candidate populated."""
    business: BusinessPublic
    candidates: list[CandidateResponse] = []
    selected_candidate: Optional[CandidateResponse] = None
