from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, NoResultFound

from app.exceptions import Duplicate, Missing
from app.orm.waitlist import WaitlistRegistrationORM
from app.schema.waitlist import WaitlistRegistration, WaitlistRegistrationCreate

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class WaitlistRepository:
    def __init__(self, db: "AsyncSession"):
        self.db = db

    async def create(self, data: WaitlistRegistrationCreate) -> WaitlistRegistration:
        """Add a registration to the waitlist"""
        new_entry = WaitlistRegistrationORM(**data.model_dump())
        try:
            async with self.db.begin():
                self.db.add(new_entry)
        except IntegrityError:
            raise Duplicate(f"Waitlist entry already exists for email: {data.email}")
        await self.db.refresh(new_entry)
        return WaitlistRegistration.model_validate(new_entry)

    async def get_by_email(self, email: str) -> WaitlistRegistration:
        """Get a waitlist entry by email"""
        async with self.db.begin():
            stmt = select(WaitlistRegistrationORM).where(WaitlistRegistrationORM.email == email)
            result = await self.db.execute(stmt)
            try:
                entry = result.scalar_one()
            except NoResultFound:
                raise Missing(f"No waitlist entry found for email: {email}")
        return WaitlistRegistration.model_validate(entry)

    async def count(self) -> int:
        async with self.db.begin():
            stmt = select(func.count()).select_from(WaitlistRegistrationORM)
            result = await self.db.execute(stmt)
            return result.scalar_one()


def build_waitlist_repository(db: "AsyncSession") -> WaitlistRepository:
    return WaitlistRepository(db)
