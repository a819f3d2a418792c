"""Tests for job listings, candidacies and the listing state machine."""

import pytest

from jobboard.models import Job, JobApplication, JobStatus
from jobboard.services import ListingService
from jobboard.services.errors import (
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


JOB_PAYLOAD = {
    "title": "Data Engineer",
    "description": "Pipelines and warehouses",
    "salary": "R$ 10.000",
    "city": "Recife",
    "state": "PE",
    "work_mode": "HYBRID",
}


class TestCreateJob:
    """Tests for POST /api/job/create."""

    def test_create_success(self, client, db, business, business_headers):
        response = client.post("/api/job/create", json=JOB_PAYLOAD, headers=business_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "OPEN"
        assert data["business_id"] == business.id
        assert data["work_mode"] == "HYBRID"
        assert data["candidate_ids"] == []
        assert data["selected_candidate_id"] is None

        assert db.query(Job).count() == 1

    def test_blank_salary_defaults_to_negotiable(self, client, business_headers):
        response = client.post(
            "/api/job/create", json={**JOB_PAYLOAD, "salary": "  "}, headers=business_headers
        )
        assert response.json()["salary"] == "negotiable"

    def test_status_in_payload_is_ignored(self, client, business_headers):
        response = client.post(
            "/api/job/create", json={**JOB_PAYLOAD, "status": "CLOSED"}, headers=business_headers
        )
        assert response.status_code == 201
        assert response.json()["status"] == "OPEN"

    def test_users_cannot_create(self, client, user_headers):
        response = client.post("/api/job/create", json=JOB_PAYLOAD, headers=user_headers)
        assert response.status_code == 403

    def test_requires_authentication(self, client):
        response = client.post("/api/job/create", json=JOB_PAYLOAD)
        assert response.status_code == 401

    def test_missing_title(self, client, business_headers):
        payload = {k: v for k, v in JOB_PAYLOAD.items() if k != "title"}
        response = client.post("/api/job/create", json=payload, headers=business_headers)
        assert response.status_code == 422

    def test_unknown_work_mode(self, client, business_headers):
        response = client.post(
            "/api/job/create", json={**JOB_PAYLOAD, "work_mode": "MARS"}, headers=business_headers
        )
        assert response.status_code == 422


class TestReadJobs:
    """Tests for listing and fetching jobs."""

    def test_open_jobs_excludes_closed_and_cancelled(self, client, db, business, open_job):
        db.add_all([
            Job(title="Closed", business_id=business.id, city="X", state="XX", status="CLOSED"),
            Job(title="Cancelled", business_id=business.id, city="X", state="XX", status="CANCELLED"),
        ])
        db.commit()

        response = client.get("/api/job/open")
        assert response.status_code == 200
        data = response.json()
        assert [job["id"] for job in data] == [open_job.id]
        assert data[0]["business"]["name"] == "Acme Corp"
        assert "candidate_ids" not in data[0]

    def test_get_job_with_candidates(self, client, user, user_headers, open_job):
        client.post(f"/api/job/apply/{open_job.id}", headers=user_headers)

        response = client.get(f"/api/job/{open_job.id}", headers=user_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["candidate_ids"] == [user.id]
        assert data["candidates"][0]["email"] == user.email
        assert "password_hash" not in data["candidates"][0]
        assert data["business"]["id"] == open_job.business_id

    def test_get_job_requires_session(self, client, open_job):
        response = client.get(f"/api/job/{open_job.id}")
        assert response.status_code == 401

    def test_public_job(self, client, open_job):
        response = client.get(f"/api/job/{open_job.id}/public")
        assert response.status_code == 200
        assert response.json()["title"] == "Backend Developer"

    def test_job_not_found(self, client, user_headers):
        response = client.get("/api/job/9999", headers=user_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Job not found"


class TestEditJob:
    """Tests for PUT /api/job/edit/{job_id}."""

    def test_edit_fields(self, client, business_headers, open_job):
        response = client.put(
            f"/api/job/edit/{open_job.id}",
            json={"title": "Senior Backend Developer", "premium": True},
            headers=business_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Senior Backend Developer"
        assert data["premium"] is True
        assert data["city"] == "Sao Paulo"
        assert data["status"] == "OPEN"

    def test_status_cannot_be_edited(self, client, db, business_headers, open_job):
        response = client.put(
            f"/api/job/edit/{open_job.id}",
            json={"status": "CLOSED"},
            headers=business_headers,
        )
        assert response.status_code == 422

        db.refresh(open_job)
        assert open_job.status == "OPEN"

    def test_blank_required_fields_are_rejected(self, client, db, business_headers, open_job):
        response = client.put(
            f"/api/job/edit/{open_job.id}",
            json={"title": "", "city": "  "},
            headers=business_headers,
        )
        assert response.status_code == 422

        db.refresh(open_job)
        assert open_job.title == "Backend Developer"
        assert open_job.city == "Sao Paulo"

    def test_blank_state_is_rejected(self, client, business_headers, open_job):
        response = client.put(
            f"/api/job/edit/{open_job.id}", json={"state": ""}, headers=business_headers
        )
        assert response.status_code == 422

    def test_blank_salary_falls_back_to_negotiable(self, client, business_headers, open_job):
        response = client.put(
            f"/api/job/edit/{open_job.id}", json={"salary": " "}, headers=business_headers
        )
        assert response.status_code == 200
        assert response.json()["salary"] == "negotiable"

    def test_edited_text_is_trimmed(self, client, business_headers, open_job):
        response = client.put(
            f"/api/job/edit/{open_job.id}", json={"city": "  Recife "}, headers=business_headers
        )
        assert response.json()["city"] == "Recife"

    def test_null_field_is_left_unchanged(self, client, business_headers, open_job):
        response = client.put(
            f"/api/job/edit/{open_job.id}",
            json={"title": None, "premium": True},
            headers=business_headers,
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Backend Developer"

    def test_other_business_cannot_edit(self, client, other_business_headers, open_job):
        response = client.put(
            f"/api/job/edit/{open_job.id}",
            json={"title": "Hijacked"},
            headers=other_business_headers,
        )
        assert response.status_code == 403

    def test_edit_missing_job(self, client, business_headers):
        response = client.put("/api/job/edit/9999", json={"title": "x"}, headers=business_headers)
        assert response.status_code == 404


class TestCancelJob:
    """Tests for DELETE /api/job/delete/{job_id}."""

    def test_cancel_open_job(self, client, db, business_headers, open_job):
        response = client.delete(f"/api/job/delete/{open_job.id}", headers=business_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "CANCELLED"

        db.refresh(open_job)
        assert open_job.status == "CANCELLED"
        assert db.query(Job).count() == 1

    def test_cancel_keeps_candidates(self, client, db, user, user_headers, business_headers, open_job):
        client.post(f"/api/job/apply/{open_job.id}", headers=user_headers)
        response = client.delete(f"/api/job/delete/{open_job.id}", headers=business_headers)
        assert response.json()["candidate_ids"] == [user.id]

    def test_cancel_twice_is_allowed(self, client, business_headers, open_job):
        client.delete(f"/api/job/delete/{open_job.id}", headers=business_headers)
        response = client.delete(f"/api/job/delete/{open_job.id}", headers=business_headers)
        assert response.status_code == 200

    def test_cannot_cancel_closed_job(self, client, db, user, business_headers, open_job):
        client.post(f"/api/job/approved-candidate/{open_job.id}/{user.id}", headers=business_headers)

        response = client.delete(f"/api/job/delete/{open_job.id}", headers=business_headers)
        assert response.status_code == 409
        assert "Invalid transition from CLOSED to CANCELLED" in response.json()["detail"]

        db.refresh(open_job)
        assert open_job.status == "CLOSED"

    def test_other_business_cannot_cancel(self, client, db, other_business_headers, open_job):
        response = client.delete(f"/api/job/delete/{open_job.id}", headers=other_business_headers)
        assert response.status_code == 403
        db.refresh(open_job)
        assert open_job.status == "OPEN"


class TestApplyAndUnapply:
    """Tests for POST /api/job/apply and /api/job/unapply."""

    def test_apply(self, client, db, user, user_headers, open_job):
        response = client.post(f"/api/job/apply/{open_job.id}", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "You have applied to this job!"

        application = db.query(JobApplication).one()
        assert application.user_id == user.id
        assert application.job_id == open_job.id

    def test_apply_twice_is_idempotent(self, client, db, user_headers, open_job):
        client.post(f"/api/job/apply/{open_job.id}", headers=user_headers)
        response = client.post(f"/api/job/apply/{open_job.id}", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "You have already applied to this job."
        assert db.query(JobApplication).count() == 1

    def test_several_candidates(self, client, db, user, other_user, user_headers,
                                other_user_headers, open_job):
        client.post(f"/api/job/apply/{open_job.id}", headers=user_headers)
        client.post(f"/api/job/apply/{open_job.id}", headers=other_user_headers)

        db.refresh(open_job)
        assert sorted(open_job.candidate_ids) == sorted([user.id, other_user.id])

    def test_businesses_cannot_apply(self, client, business_headers, open_job):
        response = client.post(f"/api/job/apply/{open_job.id}", headers=business_headers)
        assert response.status_code == 403

    def test_apply_missing_job(self, client, user_headers):
        response = client.post("/api/job/apply/9999", headers=user_headers)
        assert response.status_code == 404

    def test_unapply(self, client, db, user, user_headers, open_job):
        client.post(f"/api/job/apply/{open_job.id}", headers=user_headers)
        response = client.post(f"/api/job/unapply/{open_job.id}", headers=user_headers)
        assert response.status_code == 200
        assert db.query(JobApplication).count() == 0

        profile = client.get("/api/user/profile", headers=user_headers).json()
        assert profile["history_jobs"] == []

    def test_unapply_without_applying(self, client, user_headers, open_job):
        response = client.post(f"/api/job/unapply/{open_job.id}", headers=user_headers)
        assert response.status_code == 200

    def test_unapply_missing_job(self, client, user_headers):
        response = client.post("/api/job/unapply/9999", headers=user_headers)
        assert response.status_code == 404

    def test_unapply_only_removes_own_candidacy(self, client, db, other_user, user_headers,
                                                 other_user_headers, open_job):
        client.post(f"/api/job/apply/{open_job.id}", headers=other_user_headers)
        client.post(f"/api/job/unapply/{open_job.id}", headers=user_headers)

        assert db.query(JobApplication).one().user_id == other_user.id


class TestApproveCandidate:
    """Tests for POST /api/job/approved-candidate/{job_id}/{user_id}."""

    def test_approve_closes_job(self, client, db, user, user_headers, business_headers, open_job):
        client.post(f"/api/job/apply/{open_job.id}", headers=user_headers)

        response = client.post(
            f"/api/job/approved-candidate/{open_job.id}/{user.id}", headers=business_headers
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Candidate approved, the job has been closed."

        db.refresh(open_job)
        assert open_job.status == "CLOSED"
        assert open_job.selected_candidate_id == user.id

    def test_closed_job_leaves_open_list(self, client, user, business_headers, open_job):
        client.post(f"/api/job/approved-candidate/{open_job.id}/{user.id}", headers=business_headers)
        assert client.get("/api/job/open").json() == []

    def test_reapproval_replaces_selected_candidate(self, client, db, user, other_user,
                                                     business_headers, open_job):
        client.post(f"/api/job/approved-candidate/{open_job.id}/{user.id}", headers=business_headers)
        response = client.post(
            f"/api/job/approved-candidate/{open_job.id}/{other_user.id}", headers=business_headers
        )
        assert response.status_code == 200

        db.refresh(open_job)
        assert open_job.status == "CLOSED"
        assert open_job.selected_candidate_id == other_user.id

    def test_cannot_approve_on_cancelled_job(self, client, db, user, business_headers, open_job):
        client.delete(f"/api/job/delete/{open_job.id}", headers=business_headers)

        response = client.post(
            f"/api/job/approved-candidate/{open_job.id}/{user.id}", headers=business_headers
        )
        assert response.status_code == 409

        db.refresh(open_job)
        assert open_job.status == "CANCELLED"
        assert open_job.selected_candidate_id is None

    def test_unknown_user(self, client, business_headers, open_job):
        response = client.post(
            f"/api/job/approved-candidate/{open_job.id}/9999", headers=business_headers
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    def test_other_business_cannot_approve(self, client, user, other_business_headers, open_job):
        response = client.post(
            f"/api/job/approved-candidate/{open_job.id}/{user.id}", headers=other_business_headers
        )
        assert response.status_code == 403

    def test_users_cannot_approve(self, client, user, user_headers, open_job):
        response = client.post(
            f"/api/job/approved-candidate/{open_job.id}/{user.id}", headers=user_headers
        )
        assert response.status_code == 403


class TestListingService:
    """Service-level tests for ListingService."""

    @pytest.fixture
    def listings(self, db):
        return ListingService(db)

    def test_create_ignores_protected_fields(self, listings, business, user):
        job = listings.create(
            business.id,
            {**JOB_PAYLOAD, "status": "CLOSED", "selected_candidate_id": user.id},
        )
        assert job.status == JobStatus.OPEN.value
        assert job.selected_candidate_id is None

    def test_edit_rejects_protected_fields(self, listings, open_job):
        with pytest.raises(ValidationError) as exc:
            listings.edit(open_job.id, {"status": "CLOSED", "title": "x"})
        assert "status" in exc.value.message

    def test_edit_with_no_fields_returns_job(self, listings, open_job):
        assert listings.edit(open_job.id, {}).id == open_job.id

    def test_edit_checks_owner(self, listings, open_job, other_business):
        with pytest.raises(PermissionDeniedError):
            listings.edit(open_job.id, {"title": "x"}, business_id=other_business.id)

    def test_cancel_missing(self, listings):
        with pytest.raises(NotFoundError):
            listings.cancel(9999)

    def test_transition_error_leaves_row_untouched(self, listings, db, user, open_job):
        listings.approve(open_job.id, user.id)
        with pytest.raises(InvalidTransitionError):
            listings.cancel(open_job.id)

        db.refresh(open_job)
        assert open_job.status == "CLOSED"
        assert open_job.selected_candidate_id == user.id

    def test_approve_non_candidate_is_allowed(self, listings, user, open_job):
        job = listings.approve(open_job.id, user.id)
        assert job.status == "CLOSED"
        assert job.selected_candidate_id == user.id
        assert job.candidate_ids == []

    def test_apply_to_closed_job_is_allowed(self, listings, user, other_user, open_job):
        listings.approve(open_job.id, user.id)
        assert listings.apply(open_job.id, other_user.id) is True

    def test_apply_and_unapply_return_values(self, listings, user, open_job):
        assert listings.apply(open_job.id, user.id) is True
        assert listings.apply(open_job.id, user.id) is False
        assert listings.unapply(open_job.id, user.id) is True
        assert listings.unapply(open_job.id, user.id) is False
