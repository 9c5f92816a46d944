"""
Blog API — User SQLAlchemy Model
==================================

What:  ORM model for the `blog_users` table.
Who:   CredentialStore (signup, login lookup) and Alembic.

Table Design:
    - Integer identity primary key (embedded in bearer tokens as `id`)
    - email: UNIQUE. Signup relies on this constraint to reject duplicates,
      so two concurrent signups for one address cannot both succeed.
    - password: salted hash produced by blogapi.security, never plaintext
    - Both are unbounded VARCHAR: no length limit is placed on input
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from blogapi.database import Base


class User(Base):
    """A registered account. Created on signup; never updated or deleted."""

    __tablename__ = "blog_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(
        String(),
        nullable=False,
        unique=True,
        comment="Login name; compared case-sensitively",
    )

    password: Mapped[str] = mapped_column(
        String(),
        nullable=False,
        comment="Salted password hash",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
