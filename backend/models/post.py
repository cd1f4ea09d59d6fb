# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Post ORM model.

Besides the columns, the class declares two conventions read by the posts
router:

* ``owner_attribute`` – the column naming the principal that owns a row;
  only that user may modify or delete it.
* ``sort_by``         – default ordering for listings (oldest first).
"""

from urllib.parse import urlparse

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func

from database import Base
from models.validation import ModelValidationError, require_text


class Post(Base):
    __tablename__ = "posts"

    owner_attribute = "author_id"
    sort_by = ("created_at",)

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    images = Column(String(2048), nullable=True)
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    author = relationship("User")

    def __init__(self, **kwargs):
        kwargs.setdefault("title", None)
        kwargs.setdefault("content", None)
        super().__init__(**kwargs)

    @validates("title", "content")
    def _validate_required(self, key, value):
        return require_text("Post", key, value)

    @validates("images")
    def _validate_images(self, key, value):
        if value is None or value == "":
            return None
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ModelValidationError("Post", {key: "url"})
        return value

    @classmethod
    def default_order(cls):
        """Column expressions for ``query.order_by(*Post.default_order())``."""
        # id breaks ties between rows created within the same clock tick
        return [getattr(cls, name).asc() for name in cls.sort_by] + [cls.id.asc()]

    def is_owned_by(self, user) -> bool:
        return user is not None and getattr(self, self.owner_attribute) == user.id
