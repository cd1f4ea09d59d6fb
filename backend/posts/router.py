# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Post endpoints – public reads, owner-only writes.

Conventions come from the Post model:

* Listings use ``Post.default_order()`` (``sort_by``, oldest first).
* New posts get ``Post.owner_attribute`` set to the caller.
* Update and delete go through ``_own_post``, which loads the row and checks
  ``post.is_owned_by(current_user)``.  Anyone else gets 403.

Model validation failures (blank title/content, bad image URL) become 422
with the offending attributes in ``detail``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_db
from core.logger import get_logger
from core.security import get_current_user
from models.post import Post
from models.user import User
from models.validation import ModelValidationError, create_record
from posts.schemas import PostCreate, PostListResponse, PostResponse, PostUpdate

router = APIRouter(prefix="/posts", tags=["posts"])

log = get_logger("posts")


def _invalid(exc: ModelValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"invalid_attributes": exc.invalid_attributes},
    )


# ---------------------------------------------------------------------------
# Ownership helper
# ---------------------------------------------------------------------------


def _own_post(post_id: int, user: User, db: Session) -> Post:
    """
    Load a Post by ID and verify *user* owns it.

    Raises 404 if the post does not exist, 403 if it belongs to someone else.
    """
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    if not post.is_owned_by(user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return post


# ---------------------------------------------------------------------------
# GET /posts  – list posts
# ---------------------------------------------------------------------------


@router.get("", response_model=PostListResponse)
def list_posts(
    author: Optional[int] = Query(None, description="Only posts by this user id"),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """Return posts in the model's default order, optionally for one author."""
    query = db.query(Post)
    if author is not None:
        query = query.filter(getattr(Post, Post.owner_attribute) == author)
    posts = query.order_by(*Post.default_order()).limit(limit).all()
    return PostListResponse(posts=posts)


# ---------------------------------------------------------------------------
# POST /posts  – create a post owned by the caller
# ---------------------------------------------------------------------------


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    values = body.model_dump()
    values[Post.owner_attribute] = current_user.id
    try:
        post = create_record(db, Post, **values)
    except ModelValidationError as exc:
        raise _invalid(exc)
    db.commit()
    db.refresh(post)
    log.info("post id=%s created by user id=%s", post.id, current_user.id)
    return post


# ---------------------------------------------------------------------------
# GET /posts/{id}
# ---------------------------------------------------------------------------


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, db: Session = Depends(get_db)):
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


# ---------------------------------------------------------------------------
# PUT /posts/{id}  – partial update by the owner
# ---------------------------------------------------------------------------


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    body: PostUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Only fields that are explicitly provided are changed."""
    post = _own_post(post_id, current_user, db)

    try:
        for name, value in body.model_dump(exclude_unset=True).items():
            setattr(post, name, value)
    except ModelValidationError as exc:
        db.rollback()
        raise _invalid(exc)

    db.commit()
    db.refresh(post)
    return post


# ---------------------------------------------------------------------------
# DELETE /posts/{id}
# ---------------------------------------------------------------------------


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Permanently delete a post.  Ownership is verified first."""
    post = _own_post(post_id, current_user, db)
    db.delete(post)
    db.commit()
    log.info("post id=%s deleted by user id=%s", post_id, current_user.id)
