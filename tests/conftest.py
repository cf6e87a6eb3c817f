from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlparse

# settings are read once at import time, so the environment goes first
_DB_PATH = Path(tempfile.gettempdir()) / f"jobboard-test-{os.getpid()}.sqlite3"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_ANON_KEY"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import select  # noqa: E402

import main  # noqa: E402
from jobboard.core.security import get_password_hash  # noqa: E402
from jobboard.db.database import AsyncSessionLocal  # noqa: E402
from jobboard.models.job_application import JobApplication  # noqa: E402
from jobboard.models.user import User, UserRole, UserStatus  # noqa: E402
from jobboard.repositories.applicant_count_helper import refresh_applicant_count  # noqa: E402
from jobboard.services import notification_service  # noqa: E402

PASSWORD = "secret1"


class FakeNotifier:
    """Records every email instead of talking to SendGrid."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, tuple[Any, ...]]] = []
        self.fail = False

    def _record(self, kind: str, *args: Any) -> int:
        if self.fail:
            raise notification_service.EmailDeliveryError(f"refused {kind}")
        self.sent.append((kind, args))
        return 202

    def send_password_reset_email(self, to_email: str, reset_link: str, expires_minutes: int) -> int:
        return self._record("password_reset", to_email, reset_link, expires_minutes)

    def send_alumni_status_email(self, to_email: str, status: str) -> int:
        return self._record("alumni_status", to_email, status)

    def send_company_approved_email(self, to_email: str) -> int:
        return self._record("company_approved", to_email)

    def send_admin_notification(self, to_email: str, title: str, message: str) -> int:
        return self._record("admin_notification", to_email, title, message)

    def reset_link_params(self) -> dict[str, str]:
        kind, args = self.sent[-1]
        assert kind == "password_reset"
        query = parse_qs(urlparse(args[1]).query)
        return {"token": query["token"][0], "uid": query["uid"][0]}


@pytest.fixture(autouse=True)
def notifier(monkeypatch: pytest.MonkeyPatch) -> FakeNotifier:
    fake = FakeNotifier()
    monkeypatch.setattr(notification_service, "_notification_service_instance", fake)
    return fake


@pytest.fixture
def client() -> TestClient:
    if _DB_PATH.exists():
        _DB_PATH.unlink()
    # startup creates a fresh schema
    with TestClient(main.app) as test_client:
        yield test_client
    if _DB_PATH.exists():
        _DB_PATH.unlink()


def run(coro):
    return asyncio.run(coro)


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register(client: TestClient, email: str, role: str, name: str | None = None,
             password: str = PASSWORD) -> dict[str, Any]:
    response = client.post(
        "/auth/register",
        json={"email": email, "password": password, "role": role, "name": name},
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]


def login(client: TestClient, email: str, password: str = PASSWORD) -> str:
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def signup_and_login(client: TestClient, email: str, role: str, name: str | None = None) -> tuple[str, dict[str, str]]:
    """(user id, auth headers) for a freshly registered account."""
    user = register(client, email, role, name=name)
    return user["id"], auth(login(client, email))


COMPLETE_ALUMNI_PROFILE = {
    "name": "Asha Rao",
    "grad_year": 2015,
    "current_title": "Engineering Manager",
    "company_name": "Acme",
    "website": "https://acme.example",
    "about": "We build rockets.",
    "document_url": "https://files.example/acme.pdf",
}


def create_alumni_with_complete_profile(client: TestClient, email: str) -> tuple[str, dict[str, str]]:
    user_id, headers = signup_and_login(client, email, "alumni", name="Asha Rao")
    response = client.put("/alumni/profile", json=COMPLETE_ALUMNI_PROFILE, headers=headers)
    assert response.status_code == 200, response.text
    assert response.json()["completionPercent"] == 100
    return user_id, headers


def create_student_with_profile(client: TestClient, email: str, name: str = "Ravi") -> tuple[str, dict[str, str]]:
    user_id, headers = signup_and_login(client, email, "student")
    response = client.put(
        "/student/profile",
        json={"name": name, "student_id": "S-1", "branch": "CSE", "grad_year": 2026,
              "resume_url": "https://files.example/resume.pdf"},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return user_id, headers


def post_job(client: TestClient, headers: dict[str, str], title: str = "SDE Intern",
             description: str = "Backend internship") -> dict[str, Any]:
    response = client.post("/job/post-job", json={"job_title": title, "job_description": description},
                           headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["job"]


async def _create_admin(email: str) -> None:
    async with AsyncSessionLocal() as db:
        db.add(User(email=email, password_hash=get_password_hash(PASSWORD), role=UserRole.admin,
                    status=UserStatus.active, is_verified=True))
        await db.commit()


def create_admin(client: TestClient, email: str = "admin@x.com") -> dict[str, str]:
    run(_create_admin(email))
    return auth(login(client, email))


async def _seed_applications(job_id: str, count: int) -> None:
    async with AsyncSessionLocal() as db:
        for i in range(count):
            user = User(email=f"seed{i}@x.com", password_hash="!", role=UserRole.student,
                        status=UserStatus.active)
            db.add(user)
            await db.flush()
            db.add(JobApplication(job_id=job_id, user_id=user.id))
        await db.flush()
        await refresh_applicant_count(db, job_id)
        await db.commit()


def seed_applications(job_id: str, count: int) -> None:
    """Fill a job with applications from throwaway students, bypassing the API."""
    run(_seed_applications(job_id, count))


async def _application_rows(job_id: str) -> list[tuple[str, int]]:
    async with AsyncSessionLocal() as db:
        result = await db.execute(
            select(JobApplication.user_id, JobApplication.applicant_count).where(JobApplication.job_id == job_id)
        )
        return [tuple(row) for row in result.all()]


def application_rows(job_id: str) -> list[tuple[str, int]]:
    return run(_application_rows(job_id))
