# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Passport ORM model – one authentication credential bound to one user.

``protocol`` says which kind of credential the row holds:

* ``local``  – a password, stored as a pbkdf2_sha256 hash in ``password``.
* anything else (``oauth2``, ...) – a third-party identity, described by
  ``provider`` / ``identifier`` / ``access_token``; ``password`` is NULL.

A user owns at most one local passport.  That is enforced by the local
protocol (lookup before create), not by a table constraint, because
third-party passports share the table.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func

from core.config import settings
from core.security import hash_password, verify_password
from database import Base
from models.validation import ModelValidationError, require_text

LOCAL_PROTOCOL = "local"


class Passport(Base):
    __tablename__ = "passports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    protocol = Column(String(32), nullable=False, index=True)
    password = Column(String(255), nullable=True)
    provider = Column(String(64), nullable=True)
    identifier = Column(String(255), nullable=True)
    access_token = Column(Text, nullable=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user = relationship("User", back_populates="passports")

    def __init__(self, **kwargs):
        # Validators only fire on assignment, so always assign protocol.
        kwargs.setdefault("protocol", None)
        super().__init__(**kwargs)
        if self.protocol == LOCAL_PROTOCOL and self.password is None:
            raise ModelValidationError("Passport", {"password": "required"})

    @validates("protocol")
    def _validate_protocol(self, key, value):
        return require_text("Passport", key, value)

    @validates("user_id")
    def _validate_user(self, key, value):
        if value is None:
            raise ModelValidationError("Passport", {"user": "required"})
        return value

    @validates("password")
    def _hash_password(self, key, value):
        """Enforce the length policy and store only the hash."""
        if value is None:
            return None
        if len(value) < settings.password_min_length:
            raise ModelValidationError("Passport", {key: "minLength"})
        return hash_password(value)

    def validate_password(self, plain: str) -> bool:
        """
        Check *plain* against the stored hash.

        A passport without a password never validates.  A stored value that
        is not a recognised hash raises ``ValueError``.
        """
        if not self.password or plain is None:
            return False
        return verify_password(plain, self.password)
