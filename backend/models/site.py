# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""Site ORM model – the tenant a user registers into."""

from typing import Optional

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import Session, validates
from sqlalchemy.sql import func

from database import Base
from models.validation import require_text


class Site(Base):
    __tablename__ = "sites"
    unique_columns = ("domain",)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    # Email domain that members of this site must register with.
    domain = Column(String(255), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    @validates("name")
    def _validate_name(self, key, value):
        return require_text("Site", key, value)

    @validates("domain")
    def _validate_domain(self, key, value):
        return require_text("Site", key, value).strip().lower()


def email_domain(email: str) -> str:
    """Lower-cased part after the last ``@`` (empty when there is none)."""
    _, at, domain = email.rpartition("@")
    return domain.strip().lower() if at else ""


def site_id_same_as_email(db: Session, email: str, site_id) -> Optional[Site]:
    """
    Return the Site identified by *site_id* when *email* belongs to its
    domain, otherwise ``None``.

    *site_id* arrives straight from request parameters, so non-numeric
    values simply do not match.
    """
    try:
        site_pk = int(site_id)
    except (TypeError, ValueError):
        return None

    site = db.get(Site, site_pk)
    if site is None or site.domain != email_domain(email):
        return None
    return site
