"""
tests/test_models.py -- Attribute validation and conventions of the ORM models.
"""

from __future__ import annotations

import pytest

from models.passport import Passport
from models.post import Post
from models.site import Site, email_domain, site_id_same_as_email
from models.user import User
from models.validation import ModelValidationError, create_record


# ---------------------------------------------------------------------------
# Post
# ---------------------------------------------------------------------------


class TestPost:
    @pytest.mark.parametrize("field", ["title", "content"])
    def test_required_text(self, field):
        values = {"title": "Hello", "content": "World"}
        values[field] = "   "
        with pytest.raises(ModelValidationError) as exc_info:
            Post(**values)
        assert exc_info.value.invalid_attributes == {field: "required"}

    def test_missing_title_is_rejected_before_insert(self):
        with pytest.raises(ModelValidationError) as exc_info:
            Post(content="World")
        assert "title" in exc_info.value.invalid_attributes

    def test_images_must_be_a_url(self):
        with pytest.raises(ModelValidationError) as exc_info:
            Post(title="Hello", content="World", images="not a url")
        assert exc_info.value.invalid_attributes == {"images": "url"}

    def test_images_optional(self):
        assert Post(title="Hello", content="World", images="").images is None
        post = Post(title="Hello", content="World", images="https://cdn.example.com/a.png")
        assert post.images == "https://cdn.example.com/a.png"

    def test_ownership(self, db, registered_user):
        post = create_record(db, Post, title="Hello", content="World", author_id=registered_user.id)
        assert Post.owner_attribute == "author_id"
        assert post.is_owned_by(registered_user)
        assert not post.is_owned_by(None)

    def test_default_order_is_creation_time(self, db, registered_user):
        for title in ("first", "second", "third"):
            create_record(db, Post, title=title, content="body", author_id=registered_user.id)
        db.commit()

        titles = [p.title for p in db.query(Post).order_by(*Post.default_order())]
        assert titles == ["first", "second", "third"]


# ---------------------------------------------------------------------------
# Site
# ---------------------------------------------------------------------------


class TestSite:
    def test_domain_is_normalised(self, db):
        site = create_record(db, Site, name="Acme", domain="  Acme.ORG ")
        assert site.domain == "acme.org"

    def test_domain_unique(self, db, site):
        with pytest.raises(ModelValidationError) as exc_info:
            create_record(db, Site, name="Again", domain="EXAMPLE.com")
        assert exc_info.value.invalid_attributes == {"domain": "unique"}

    @pytest.mark.parametrize(
        "email, expected",
        [
            ("a@example.com", "example.com"),
            ("A@Example.COM", "example.com"),
            ("no-at-sign", ""),
        ],
    )
    def test_email_domain(self, email, expected):
        assert email_domain(email) == expected

    def test_site_id_same_as_email(self, db, site):
        assert site_id_same_as_email(db, "a@example.com", site.id).id == site.id
        assert site_id_same_as_email(db, "a@example.com", str(site.id)).id == site.id
        assert site_id_same_as_email(db, "a@other.org", site.id) is None
        assert site_id_same_as_email(db, "a@example.com", site.id + 1) is None
        assert site_id_same_as_email(db, "a@example.com", "abc") is None
        assert site_id_same_as_email(db, "a@example.com", None) is None


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


class TestUser:
    def test_email_required_and_valid(self, site):
        with pytest.raises(ModelValidationError) as exc_info:
            User(email="", site_id=site.id)
        assert exc_info.value.invalid_attributes == {"email": "required"}

        with pytest.raises(ModelValidationError) as exc_info:
            User(email="nope", site_id=site.id)
        assert exc_info.value.invalid_attributes == {"email": "email"}

    def test_site_reported_as_site(self):
        with pytest.raises(ModelValidationError) as exc_info:
            User(email="a@example.com", site_id=None)
        assert exc_info.value.invalid_attributes == {"site": "required"}

    def test_site_must_exist(self, db, site):
        with pytest.raises(ModelValidationError) as exc_info:
            create_record(db, User, email="a@example.com", site_id=site.id + 50)
        assert exc_info.value.invalid_attributes == {"site": "exists"}
        assert db.query(User).count() == 0

    def test_missing_site_and_taken_email_reported_together(self, db, registered_user, site):
        with pytest.raises(ModelValidationError) as exc_info:
            create_record(db, User, email=registered_user.email, site_id=site.id + 50)
        assert exc_info.value.invalid_attributes == {"site": "exists", "email": "unique"}

    @pytest.mark.parametrize("email", ["a@corp.local", "a@example.test", "a@intranet.localhost"])
    def test_private_network_email(self, site, email):
        assert User(email=email, site_id=site.id).email == email

    def test_username_cannot_look_like_email(self, site):
        with pytest.raises(ModelValidationError) as exc_info:
            User(email="a@example.com", username="a@b", site_id=site.id)
        assert exc_info.value.invalid_attributes == {"username": "username"}

    def test_deleting_user_removes_passports(self, db, registered_user):
        db.delete(registered_user)
        db.commit()
        assert db.query(Passport).count() == 0


# ---------------------------------------------------------------------------
# Passport
# ---------------------------------------------------------------------------


class TestPassport:
    def test_password_is_hashed(self):
        passport = Passport(protocol="local", password="long-enough-pw", user_id=1)
        assert passport.password.startswith("$pbkdf2-sha256$")
        assert passport.validate_password("long-enough-pw")
        assert not passport.validate_password("wrong-password")

    def test_min_length(self):
        with pytest.raises(ModelValidationError) as exc_info:
            Passport(protocol="local", password="short", user_id=1)
        assert exc_info.value.invalid_attributes == {"password": "minLength"}

    def test_local_requires_password(self):
        with pytest.raises(ModelValidationError) as exc_info:
            Passport(protocol="local", user_id=1)
        assert exc_info.value.invalid_attributes == {"password": "required"}

    def test_protocol_required(self):
        with pytest.raises(ModelValidationError) as exc_info:
            Passport(password="long-enough-pw", user_id=1)
        assert exc_info.value.invalid_attributes == {"protocol": "required"}

    def test_third_party_has_no_password(self):
        passport = Passport(protocol="oauth2", provider="github", identifier="1", user_id=1)
        assert passport.password is None
        assert not passport.validate_password("anything")
