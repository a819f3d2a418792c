"""Job listings and candidacies.

Status changes go through the transition table in
``jobboard.core.state_machine`` and are written as a single conditional
UPDATE, so two concurrent requests cannot both move a listing out of a state
it has already left.
"""

import logging

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from jobboard.core.state_machine import allowed_sources, validate_transition
from jobboard.models import Job, JobApplication, JobStatus, User
from jobboard.services.accounts import commit_or_raise
from jobboard.services.errors import (
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Fields only the state machine and the candidacy operations may write
PROTECTED_FIELDS = {"id", "status", "business_id", "selected_candidate_id", "candidates"}


class ListingService:
    def __init__(self, db: Session):
        self.db = db

    def create(self, business_id: int, fields: dict) -> Job:
        fields = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        job = Job(**fields, business_id=business_id, status=JobStatus.OPEN.value)
        self.db.add(job)
        commit_or_raise(self.db, f"create job for business {business_id}")
        self.db.refresh(job)
        logger.info("Business %d created job %d", business_id, job.id)
        return job

    def get(self, job_id: int) -> Job:
        job = (
            self.db.query(Job)
            .options(
                selectinload(Job.business),
                selectinload(Job.candidates),
                selectinload(Job.selected_candidate),
            )
            .filter(Job.id == job_id)
            .first()
        )
        if not job:
            raise NotFoundError("Job not found")
        return job

    def list_open(self) -> list[Job]:
        return (
            self.db.query(Job)
            .options(selectinload(Job.business))
            .filter(Job.status == JobStatus.OPEN.value)
            .order_by(Job.created_at.desc(), Job.id.desc())
            .all()
        )

    def _get_owned(self, job_id: int, business_id: int | None) -> Job:
        job = self.db.get(Job, job_id)
        if not job:
            raise NotFoundError("Job not found")
        if business_id is not None and job.business_id != business_id:
            logger.warning(
                "Business %d tried to modify job %d owned by business %d",
                business_id, job_id, job.business_id,
            )
            raise PermissionDeniedError("This job belongs to another business")
        return job

    def _transition(self, job: Job, next_status: JobStatus, **values) -> None:
        """Move ``job`` to ``next_status`` in one conditional UPDATE."""
        result = self.db.execute(
            update(Job)
            .where(Job.id == job.id, Job.status.in_(allowed_sources(next_status.value)))
            .values(status=next_status.value, **values)
        )
        if result.rowcount == 0:
            self.db.rollback()
            self.db.refresh(job)
            _, message = validate_transition(job.status, next_status.value)
            raise InvalidTransitionError(message)
        commit_or_raise(self.db, f"move job {job.id} to {next_status.value}")
        logger.info("Job %d moved to %s", job.id, next_status.value)

    def edit(self, job_id: int, fields: dict, business_id: int | None = None) -> Job:
        """Merge ``fields`` into the listing. Status cannot be written here."""
        blocked = sorted(PROTECTED_FIELDS & fields.keys())
        if blocked:
            raise ValidationError(f"Cannot edit {', '.join(blocked)} directly")

        job = self._get_owned(job_id, business_id)
        if fields:
            self.db.execute(
                update(Job)
                .where(Job.id == job.id)
                .values(**fields)
            )
            commit_or_raise(self.db, f"edit job {job_id}")
        self.db.refresh(job)
        return job

    def cancel(self, job_id: int, business_id: int | None = None) -> Job:
        """Cancel a listing. Candidates and selection are left untouched."""
        job = self._get_owned(job_id, business_id)
        self._transition(job, JobStatus.CANCELLED)
        self.db.refresh(job)
        return job

    def approve(self, job_id: int, user_id: int, business_id: int | None = None) -> Job:
        """Select ``user_id`` and close the listing.

        Membership in the candidate set is not checked, and approving a
        closed listing again replaces the selected candidate.
        """
        job = self._get_owned(job_id, business_id)
        if not self.db.get(User, user_id):
            raise NotFoundError("User not found")
        self._transition(job, JobStatus.CLOSED, selected_candidate_id=user_id)
        self.db.refresh(job)
        return job

    def apply(self, job_id: int, user_id: int) -> bool:
        """Add the user to the job's candidates. Returns False if already there."""
        if not self.db.get(Job, job_id):
            raise NotFoundError("Job not found")

        existing = (
            self.db.query(JobApplication)
            .filter(JobApplication.job_id == job_id, JobApplication.user_id == user_id)
            .first()
        )
        if existing:
            return False

        self.db.add(JobApplication(job_id=job_id, user_id=user_id))
        try:
            self.db.commit()
        except IntegrityError:
            # Concurrent apply for the same pair already inserted the row
            self.db.rollback()
            if (
                self.db.query(JobApplication)
                .filter(JobApplication.job_id == job_id, JobApplication.user_id == user_id)
                .first()
            ):
                return False
            logger.exception("Failed to apply user %d to job %d", user_id, job_id)
            raise StorageError("Unable to apply to this job. Please try again.")

        logger.info("User %d applied to job %d", user_id, job_id)
        return True

    def unapply(self, job_id: int, user_id: int) -> bool:
        """Remove the user's candidacy. Returns False if there was none."""
        if not self.db.get(Job, job_id):
            raise NotFoundError("Job not found")

        result = self.db.execute(
            delete(JobApplication).where(
                JobApplication.job_id == job_id, JobApplication.user_id == user_id
            )
        )
        commit_or_raise(self.db, f"unapply user {user_id} from job {job_id}")
        if result.rowcount:
            logger.info("User %d withdrew from job %d", user_id, job_id)
        return bool(result.rowcount)
