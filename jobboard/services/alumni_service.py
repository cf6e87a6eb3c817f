import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.exceptions import NotFoundError, ValidationError
from jobboard.core.validators import InputValidator
from jobboard.models.company import Company, CompanyStatus
from jobboard.models.profile import AlumniProfile
from jobboard.repositories.company_repo import CompanyRepository
from jobboard.repositories.profile_repo import apply_updates, get_alumni_profile
from jobboard.services.auth.identity import Identity
from jobboard.services.dashboard_service import get_alumni_dashboard

logger = logging.getLogger(__name__)

ALUMNI_FIELDS = ("name", "grad_year", "current_title")
# request field -> companies column
COMPANY_FIELDS = {
    "company_name": "name",
    "website": "website",
    "industry": "industry",
    "company_size": "company_size",
    "about": "about",
    "document_url": "document_url",
}


def compute_completion(profile: Optional[AlumniProfile], company: Optional[Company]) -> int:
    """Weighted profile completion used to gate job posting."""
    percent = 0
    if profile is not None:
        if profile.grad_year:
            percent += 25
        if profile.current_title:
            percent += 25
    if company is not None:
        if company.document_url:
            percent += 20
        if company.about and company.name and company.website:
            percent += 30
    return percent


def serialize_alumni_profile(profile: Optional[AlumniProfile]) -> Optional[dict]:
    if profile is None:
        return None
    return {
        "id": profile.id,
        "user_id": profile.user_id,
        "name": profile.name,
        "grad_year": profile.grad_year,
        "current_title": profile.current_title,
        "created_at": profile.created_at,
    }


def serialize_company(company: Optional[Company]) -> Optional[dict]:
    if company is None:
        return None
    return {
        "id": company.id,
        "alumni_id": company.alumni_id,
        "name": company.name,
        "website": company.website,
        "industry": company.industry,
        "company_size": company.company_size,
        "about": company.about,
        "document_url": company.document_url,
        "status": company.status.value if company.status else None,
        "created_at": company.created_at,
    }


async def get_alumni_profile_or_fail(db: AsyncSession, user_id: str) -> AlumniProfile:
    profile = await get_alumni_profile(db, user_id)
    if not profile:
        raise ValidationError("Alumni profile not found. Complete your profile first.")
    return profile


class AlumniService:
    async def get_profile(self, identity: Identity, db: AsyncSession) -> dict:
        profile = await get_alumni_profile(db, identity.id)
        company = await CompanyRepository.get_by_alumni_id(db, profile.id) if profile else None
        return {
            "success": True,
            "profile": serialize_alumni_profile(profile),
            "company": serialize_company(company),
            "completionPercent": compute_completion(profile, company),
        }

    async def upsert_profile(self, identity: Identity, data: dict, db: AsyncSession) -> dict:
        """Partial update of the alumni profile and company; creates either if missing."""
        alumni_update = {k: data[k] for k in ALUMNI_FIELDS if data.get(k) is not None}
        if "name" in alumni_update:
            alumni_update["name"] = InputValidator.clean_text(alumni_update["name"], max_length=255, field="name")
        company_update = {
            column: data[field] for field, column in COMPANY_FIELDS.items() if data.get(field) is not None
        }
        if not alumni_update and not company_update:
            raise ValidationError("No profile fields to update")

        profile = await get_alumni_profile(db, identity.id)
        if profile is None:
            profile = AlumniProfile(
                user_id=identity.id,
                name=alumni_update.get("name") or identity.email.split("@")[0],
            )
            db.add(profile)
        apply_updates(profile, alumni_update)
        await db.flush()

        company = None
        if company_update:
            company = await self._save_company(db, profile, company_update)

        await db.commit()
        if company is None:
            company = await CompanyRepository.get_by_alumni_id(db, profile.id)
        return {
            "success": True,
            "message": "Alumni profile updated",
            "profile": serialize_alumni_profile(profile),
            "company": serialize_company(company),
            "completionPercent": compute_completion(profile, company),
        }

    async def create_or_update_company(self, identity: Identity, data: dict, db: AsyncSession) -> dict:
        profile = await get_alumni_profile_or_fail(db, identity.id)
        company_update = {column: data.get(field) for field, column in COMPANY_FIELDS.items()
                          if field in data}
        existing = await CompanyRepository.get_by_alumni_id(db, profile.id)
        company = await self._save_company(db, profile, company_update)
        await db.commit()
        return {
            "success": True,
            "message": "Company updated" if existing else "Company created",
            "company": serialize_company(company),
        }

    async def _save_company(self, db: AsyncSession, profile: AlumniProfile, company_update: dict) -> Company:
        company = await CompanyRepository.get_by_alumni_id(db, profile.id)
        if company is None:
            company = Company(alumni_id=profile.id, user_id=profile.user_id, status=CompanyStatus.pending)
            db.add(company)
        apply_updates(company, company_update)
        await db.flush()
        return company

    async def list_companies(self, db: AsyncSession) -> dict:
        companies = await CompanyRepository.list_companies(db)
        data = [serialize_company(c) for c in companies]
        return {"success": True, "count": len(data), "companies": data}

    async def get_public_profile(self, user_id: str, db: AsyncSession) -> dict:
        profile = await get_alumni_profile(db, user_id)
        if not profile:
            raise NotFoundError("Profile not found")
        company = await CompanyRepository.get_by_alumni_id(db, profile.id)
        public_company = serialize_company(company)
        if public_company:
            public_company.pop("document_url", None)
        return {
            "success": True,
            "profile": serialize_alumni_profile(profile),
            "company": public_company,
        }

    async def get_dashboard(self, identity: Identity, db: AsyncSession) -> dict:
        profile = await get_alumni_profile_or_fail(db, identity.id)
        company = await CompanyRepository.get_by_alumni_id(db, profile.id)
        stats = await get_alumni_dashboard(db, profile.id)
        stats["completionPercent"] = compute_completion(profile, company)
        return stats
