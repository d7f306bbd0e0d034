"""Admin model: operators allowed to mutate content."""

from sqlalchemy import Column, String

from tawjih.models.base import Base, TimestampMixin, UUIDMixin


class Admin(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "admins"

    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
