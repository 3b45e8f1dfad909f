import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.exceptions import Duplicate, Missing
from app.orm.user import UserORM
from app.schema.user import User, UserCreate

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class UserRepository:
    """Handles database operations related to User."""

    def __init__(self, db: "AsyncSession"):
        self.db = db

    async def get(self, user_id: str) -> User:
        async with self.db.begin():
            user = await self.db.get(UserORM, user_id)

        if not user:
            raise Missing(f"User with id {user_id} not found")

        return User.model_validate(user)

    async def get_by_username(self, username: str) -> User:
        async with self.db.begin():
            stmt = select(UserORM).where(UserORM.username == username)
            result = await self.db.execute(stmt)
            user = result.scalar_one_or_none()

        if not user:
            raise Missing(f"User with username {username} not found")

        return User.model_validate(user)

    async def create_user(self, user_data: UserCreate) -> User:
        new_user = UserORM(username=user_data.username, password=user_data.password)
        try:
            async with self.db.begin():
                self.db.add(new_user)
        except IntegrityError:
            raise Duplicate(f"Username {user_data.username} is already taken")
        await self.db.refresh(new_user)
        logger.info(f"Created user {new_user.id}")
        return User.model_validate(new_user)


def build_user_repository(db: "AsyncSession") -> UserRepository:
    return UserRepository(db)
