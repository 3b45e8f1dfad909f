from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.orm.waitlist import _new_id
from infrastructure.database import Base


class UserORM(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False)
