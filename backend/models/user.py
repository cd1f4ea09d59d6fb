# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""User ORM model."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func

from database import Base
from models.validation import ModelValidationError, is_email


class User(Base):
    __tablename__ = "users"
    unique_columns = ("email", "username")
    reference_columns = {"site_id": "site"}

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # Optional; login accepts either the email or this handle.
    username = Column(String(64), unique=True, nullable=True, index=True)
    first_name = Column(String(128), nullable=True)
    last_name = Column(String(128), nullable=True)
    site_id = Column(
        Integer,
        ForeignKey("sites.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    site = relationship("Site")
    # Deleting a user removes their credentials with it.  The ORM cascade is
    # kept alongside ON DELETE CASCADE because SQLite ignores foreign keys
    # unless PRAGMA foreign_keys is on.
    passports = relationship(
        "Passport",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @validates("email")
    def _validate_email(self, key, value):
        if not value:
            raise ModelValidationError("User", {key: "required"})
        value = value.strip()
        if not is_email(value):
            raise ModelValidationError("User", {key: "email"})
        return value.lower()

    @validates("site_id")
    def _validate_site(self, key, value):
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ModelValidationError("User", {"site": "required"})

    @validates("username")
    def _validate_username(self, key, value):
        if value is None:
            return None
        value = value.strip()
        if not value or "@" in value:
            # An "@" would make the handle indistinguishable from an email at login.
            raise ModelValidationError("User", {key: "username"})
        return value
