"""
ShopAPI Backend — User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table.

The password column only ever holds a bcrypt hash. UserResponse has no
password field, so the hash never leaves the service.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shop_api.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)

    # bcrypt hash ($2b$...), 60 chars
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
