"""User, institution and admin ORM models."""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shiurbank.infrastructure.persistence.database import Base


class User(Base):
    """Registered user. Table: users. Username and email are unique."""

    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    hashed_pwd: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str | None] = mapped_column(String(50), nullable=True)
    fname: Mapped[str] = mapped_column(String(100), nullable=False)
    lname: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )


class Institution(Base):
    __tablename__ = "institutions"

    inst_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class UserInstitution(Base):
    """Association user <-> institution chosen at registration."""

    __tablename__ = "user_institution_assoc"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True
    )
    inst_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("institutions.inst_id", ondelete="CASCADE"), primary_key=True
    )


class Admin(Base):
    """Admin roster: presence of a row grants admin rights."""

    __tablename__ = "admins"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True
    )
