from jobboard.models.user import User, UserRole
from jobboard.models.business import Business, BusinessRole
from jobboard.models.job import Job, JobStatus, WorkMode
from jobboard.models.application import JobApplication

__all__ = [
    "User",
    "UserRole",
    "Business",
    "BusinessRole",
    "Job",
    "JobStatus",
    "WorkMode",
    "JobApplication",
]
