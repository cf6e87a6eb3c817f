from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import (
    application_rows, create_admin, create_alumni_with_complete_profile, create_student_with_profile,
    post_job, seed_applications, signup_and_login,
)
from jobboard.core.config import settings
from jobboard.repositories.job_application_repo import JobApplicationRepository

pytestmark = pytest.mark.integration


@pytest.fixture
def job_setup(client: TestClient):
    _, alumni = create_alumni_with_complete_profile(client, "alum@x.com")
    job = post_job(client, alumni)
    return job, alumni


def test_apply_uses_profile_resume(client: TestClient, job_setup) -> None:
    job, _ = job_setup
    _, student = create_student_with_profile(client, "stud@x.com")

    response = client.post("/job/apply-job", json={"job_id": job["id"]}, headers=student)

    assert response.status_code == 201
    application = response.json()["application"]
    assert application["resume_url"] == "https://files.example/resume.pdf"
    assert application["applicant_count"] == 1


def test_second_application_is_rejected_and_listed_once(client: TestClient, job_setup) -> None:
    job, _ = job_setup
    _, student = create_student_with_profile(client, "stud@x.com")

    first = client.post("/job/apply-job", json={"job_id": job["id"]}, headers=student)
    second = client.post("/job/apply-job", json={"job_id": job["id"]}, headers=student)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json() == {"error": "Already applied for this job"}

    applied = client.get("/job/get-applied-jobs", headers=student).json()
    assert applied["count"] == 1
    assert applied["applications"][0]["job_id"] == job["id"]
    assert applied["applications"][0]["job"]["job_title"] == "SDE Intern"
    assert applied["applications"][0]["job"]["company"]["name"] == "Acme"
    assert len(application_rows(job["id"])) == 1


def test_capacity_reached_refuses_without_inserting(client: TestClient, job_setup) -> None:
    job, _ = job_setup
    seed_applications(job["id"], settings.MAX_APPLICATIONS_PER_JOB)
    _, student = create_student_with_profile(client, "late@x.com")

    response = client.post("/job/apply-job", json={"job_id": job["id"]}, headers=student)

    assert response.status_code == 400
    assert response.json()["error"] == "Applications are closed for this job (capacity reached)."
    assert len(application_rows(job["id"])) == settings.MAX_APPLICATIONS_PER_JOB


def test_last_free_slot_is_accepted(client: TestClient, job_setup) -> None:
    job, _ = job_setup
    seed_applications(job["id"], settings.MAX_APPLICATIONS_PER_JOB - 1)
    _, student = create_student_with_profile(client, "last@x.com")

    response = client.post("/job/apply-job", json={"job_id": job["id"]}, headers=student)

    assert response.status_code == 201
    rows = application_rows(job["id"])
    assert len(rows) == settings.MAX_APPLICATIONS_PER_JOB
    assert {count for _, count in rows} == {settings.MAX_APPLICATIONS_PER_JOB}


def test_applicant_count_tracks_apply_and_withdraw(client: TestClient, job_setup) -> None:
    job, _ = job_setup
    first_id, first = create_student_with_profile(client, "s1@x.com")
    second_id, second = create_student_with_profile(client, "s2@x.com")
    _, third = create_student_with_profile(client, "s3@x.com")

    for headers in (first, second, third):
        assert client.post("/job/apply-job", json={"job_id": job["id"]}, headers=headers).status_code == 201
    rows = application_rows(job["id"])
    assert len(rows) == 3
    assert all(count == 3 for _, count in rows)

    assert client.delete(f"/job/withdraw-application/{job['id']}", headers=third).status_code == 200
    rows = application_rows(job["id"])
    assert {user_id for user_id, _ in rows} == {first_id, second_id}
    assert all(count == 2 for _, count in rows)


def test_withdraw_without_application_is_not_found(client: TestClient, job_setup) -> None:
    job, _ = job_setup
    _, student = create_student_with_profile(client, "stud@x.com")

    response = client.delete(f"/job/withdraw-application/{job['id']}", headers=student)

    assert response.status_code == 404


def test_apply_to_missing_job(client: TestClient) -> None:
    _, student = create_student_with_profile(client, "stud@x.com")

    response = client.post("/job/apply-job", json={"job_id": "nope"}, headers=student)

    assert response.status_code == 404


def test_only_students_apply(client: TestClient, job_setup) -> None:
    job, alumni = job_setup

    response = client.post("/job/apply-job", json={"job_id": job["id"]}, headers=alumni)

    assert response.status_code == 403


def test_view_applicants_owner_admin_and_stranger(client: TestClient, job_setup) -> None:
    job, owner = job_setup
    _, student = create_student_with_profile(client, "stud@x.com", name="Ravi")
    client.post("/job/apply-job", json={"job_id": job["id"]}, headers=student)
    _, stranger = create_alumni_with_complete_profile(client, "other@x.com")
    admin = create_admin(client)

    as_owner = client.get(f"/job/view-applicants/{job['id']}", headers=owner)
    assert as_owner.status_code == 200
    applicant = as_owner.json()["applicants"][0]
    assert applicant["email"] == "stud@x.com"
    assert applicant["name"] == "Ravi"
    assert applicant["branch"] == "CSE"
    assert applicant["applicant_count"] == 1

    assert client.get(f"/job/view-applicants/{job['id']}", headers=admin).json()["count"] == 1
    assert client.get(f"/job/view-applicants/{job['id']}", headers=stranger).status_code == 403
    assert client.get(f"/job/view-applicants/{job['id']}", headers=student).status_code == 403


def test_student_dashboard_reflects_applications(client: TestClient, job_setup) -> None:
    job, _ = job_setup
    _, student = signup_and_login(client, "fresh@x.com", "student")

    empty = client.get("/student/dashboard", headers=student).json()
    assert empty["applications_count"] == 0
    assert {"label": "Upload Resume", "to": "/student/profile"} in empty["quick_actions"]

    client.put("/student/profile", headers=student,
               json={"name": "F", "student_id": "S-2", "branch": "ME", "grad_year": 2025})
    client.post("/job/apply-job", json={"job_id": job["id"]}, headers=student)

    dashboard = client.get("/student/dashboard", headers=student).json()
    assert dashboard["applications_count"] == 1
    assert [item["title"] for item in dashboard["timeline"]] == ["Profile created", "First application submitted"]


def test_duplicate_that_slips_past_lookup_is_conflict(client: TestClient, job_setup,
                                                      monkeypatch: pytest.MonkeyPatch) -> None:
    job, _ = job_setup
    student_id, student = create_student_with_profile(client, "stud@x.com")

    async def nothing_found(db, user_id, job_id):
        return None

    # as if a concurrent insert landed between the lookup and this one
    monkeypatch.setattr(JobApplicationRepository, "get_by_user_and_job", staticmethod(nothing_found))

    first = client.post("/job/apply-job", json={"job_id": job["id"]}, headers=student)
    second = client.post("/job/apply-job", json={"job_id": job["id"]}, headers=student)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json() == {"error": "Already applied for this job"}
    assert application_rows(job["id"]) == [(student_id, 1)]
