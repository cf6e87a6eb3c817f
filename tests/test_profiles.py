from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import (
    create_alumni_with_complete_profile, create_student_with_profile, post_job, signup_and_login,
)

pytestmark = pytest.mark.integration


def test_student_profile_create_requires_core_fields(client: TestClient) -> None:
    _, headers = signup_and_login(client, "stud@x.com", "student")

    before = client.get("/student/profile", headers=headers).json()
    assert before["exists"] is False
    assert before["profile"] is None

    missing = client.put("/student/profile", json={"name": "Ravi", "branch": "CSE"}, headers=headers)
    assert missing.status_code == 400
    assert "student_id" in missing.json()["error"]

    created = client.put(
        "/student/profile",
        json={"name": "Ravi", "student_id": "S-1", "branch": "CSE", "grad_year": 2026,
              "work_mode": "remote", "desired_roles": ["backend"]},
        headers=headers,
    )
    assert created.status_code == 200
    assert created.json()["message"] == "Student profile created"

    after = client.get("/student/profile", headers=headers).json()
    assert after["exists"] is True
    assert after["profile"]["preferences"] == {"work_mode": "remote", "desired_roles": ["backend"]}


def test_student_partial_update_merges_preferences(client: TestClient) -> None:
    _, headers = create_student_with_profile(client, "stud@x.com")
    client.put("/student/profile", json={"work_mode": "hybrid"}, headers=headers)

    response = client.put("/student/profile", json={"preferred_locations": ["Pune"], "cgpa": 8.4}, headers=headers)

    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["preferences"] == {"work_mode": "hybrid", "preferred_locations": ["Pune"]}
    assert profile["cgpa"] == 8.4
    assert profile["branch"] == "CSE"


def test_student_rejects_unknown_work_mode(client: TestClient) -> None:
    _, headers = create_student_with_profile(client, "stud@x.com")

    response = client.put("/student/profile", json={"work_mode": "moon"}, headers=headers)

    assert response.status_code == 400


def test_alumni_routes_reject_students(client: TestClient) -> None:
    _, student = signup_and_login(client, "stud@x.com", "student")

    assert client.get("/alumni/profile", headers=student).status_code == 403
    assert client.get("/alumni/dashboard", headers=student).status_code == 403


def test_alumni_profile_completion_steps(client: TestClient) -> None:
    _, headers = signup_and_login(client, "alum@x.com", "alumni", name="Neha")

    fresh = client.get("/alumni/profile", headers=headers).json()
    assert fresh["company"] is None
    assert fresh["completionPercent"] == 0

    response = client.put("/alumni/profile", json={"grad_year": 2010}, headers=headers)
    assert response.json()["completionPercent"] == 25

    response = client.put("/alumni/profile", json={"current_title": "CTO"}, headers=headers)
    assert response.json()["completionPercent"] == 50

    # about is still missing
    response = client.put("/alumni/profile", json={"company_name": "Neha Labs", "website": "https://n.example"},
                          headers=headers)
    assert response.json()["completionPercent"] == 50

    response = client.put("/alumni/profile", json={"about": "Applied AI"}, headers=headers)
    assert response.json()["completionPercent"] == 80

    response = client.put("/alumni/profile", json={"document_url": "https://files.example/n.pdf"}, headers=headers)
    assert response.json()["completionPercent"] == 100


def test_alumni_company_endpoint_creates_then_updates(client: TestClient) -> None:
    _, headers = signup_and_login(client, "alum@x.com", "alumni", name="Neha")

    created = client.post("/alumni/company", json={"company_name": "Neha Labs", "industry": "AI"}, headers=headers)
    assert created.status_code == 200
    assert created.json()["message"] == "Company created"
    assert created.json()["company"]["status"] == "pending"

    updated = client.post("/alumni/company", json={"company_size": "11-50"}, headers=headers)
    assert updated.json()["message"] == "Company updated"
    assert updated.json()["company"]["name"] == "Neha Labs"
    assert updated.json()["company"]["company_size"] == "11-50"

    listing = client.get("/alumni/companies").json()
    assert listing["count"] == 1
    assert listing["companies"][0]["industry"] == "AI"


def test_alumni_dashboard_counts(client: TestClient) -> None:
    _, alumni = create_alumni_with_complete_profile(client, "alum@x.com")
    job = post_job(client, alumni)
    post_job(client, alumni, title="Second")
    _, student = create_student_with_profile(client, "stud@x.com")
    client.post("/job/apply-job", json={"job_id": job["id"]}, headers=student)

    dashboard = client.get("/alumni/dashboard", headers=alumni).json()

    assert dashboard["total_jobs"] == 2
    assert dashboard["total_applications"] == 1
    assert dashboard["recent_applications"] == 1
    assert dashboard["completionPercent"] == 100
    assert {item["job_title"] for item in dashboard["recent_jobs"]} == {"SDE Intern", "Second"}


def test_public_alumni_profile_hides_company_document(client: TestClient) -> None:
    alumni_id, _ = create_alumni_with_complete_profile(client, "alum@x.com")
    _, student = signup_and_login(client, "stud@x.com", "student")

    response = client.get(f"/alumni/profile/{alumni_id}", headers=student)

    assert response.status_code == 200
    body = response.json()
    assert body["profile"]["name"] == "Asha Rao"
    assert body["company"]["name"] == "Acme"
    assert "document_url" not in body["company"]
    assert client.get("/alumni/profile/nobody", headers=student).status_code == 404


def test_public_student_profile_reports_connection(client: TestClient) -> None:
    student_id, student = create_student_with_profile(client, "stud@x.com")
    client.put("/student/profile", json={"phone": "+91 99999 00000"}, headers=student)
    _, alumni = create_alumni_with_complete_profile(client, "alum@x.com")

    before = client.get(f"/student/profile/{student_id}", headers=alumni).json()["profile"]
    assert before["is_connected"] is False
    assert "phone" not in before

    request = client.post("/connections/request", json={"receiver_id": student_id}, headers=alumni).json()
    client.put(f"/connections/{request['connection']['id']}/accept", headers=student)

    after = client.get(f"/student/profile/{student_id}", headers=alumni).json()["profile"]
    assert after["is_connected"] is True
