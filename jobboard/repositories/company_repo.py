from typing import List, Optional

from sqlalchemy.future import select

from jobboard.models.company import Company, CompanyStatus
from jobboard.models.profile import AlumniProfile


class CompanyRepository:
    @staticmethod
    async def get_by_alumni_id(db, alumni_id: str) -> Optional[Company]:
        result = await db.execute(select(Company).where(Company.alumni_id == alumni_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_id(db, company_id: str) -> Optional[Company]:
        result = await db.execute(select(Company).where(Company.id == company_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def create_placeholder(db, profile: AlumniProfile) -> Company:
        """Minimal company so an alumni can post before filling in company details."""
        company = Company(
            alumni_id=profile.id,
            user_id=profile.user_id,
            name=profile.name or "My Company",
            status=CompanyStatus.pending,
        )
        db.add(company)
        await db.flush()
        return company

    @staticmethod
    async def list_companies(db) -> List[Company]:
        result = await db.execute(select(Company).order_by(Company.created_at.desc()))
        return result.scalars().all()
