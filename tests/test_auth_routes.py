"""
tests/test_auth_routes.py -- HTTP surface of the local protocol.

Verifies the status mapping of the auth router and that flash messages
queued by the protocol reach the response body.
"""

from __future__ import annotations

import pytest

from core.i18n import translate
from models.site import Site
from models.validation import create_record

PASSWORD = "long-enough-pw"


@pytest.fixture()
def site_id(session_factory) -> int:
    session = session_factory()
    try:
        site = create_record(session, Site, name="Example", domain="example.com")
        session.commit()
        return site.id
    finally:
        session.close()


def _register(client, site_id, **overrides):
    body = {
        "email": "new@example.com",
        "password": PASSWORD,
        "username": "newbie",
        "firstName": "New",
        "lastName": "User",
        "site": site_id,
    }
    body.update(overrides)
    return client.post("/auth/local/register", json=body)


def _login(client, identifier="new@example.com", password=PASSWORD):
    return client.post("/auth/local", json={"identifier": identifier, "password": password})


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


class TestRegisterRoute:
    def test_created(self, client, site_id):
        resp = _register(client, site_id)
        assert resp.status_code == 201
        data = resp.json()
        assert data["email"] == "new@example.com"
        assert data["username"] == "newbie"
        assert data["first_name"] == "New"
        assert data["site_id"] == site_id
        assert "password" not in data

    def test_missing_email(self, client, site_id):
        resp = _register(client, site_id, email=None)
        assert resp.status_code == 400
        body = resp.json()
        assert body["detail"] == "missing_field"
        assert body["flash"] == [
            {"type": "error", "message": translate("Error.Passport.Email.Missing")}
        ]

    def test_missing_site(self, client, site_id):
        resp = _register(client, site_id, site=None)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "missing_site"

    def test_site_mismatch(self, client, site_id):
        resp = _register(client, site_id, email="new@other.org")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "site_mismatch"

    def test_duplicate_email_conflicts(self, client, site_id):
        assert _register(client, site_id).status_code == 201
        resp = _register(client, site_id, username="other")
        assert resp.status_code == 409
        assert resp.json()["detail"] == "email_exists"

    def test_weak_password_leaves_no_user(self, client, site_id):
        resp = _register(client, site_id, password="short")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "invalid_password"
        # The email is free again, so a retry with a good password succeeds.
        assert _register(client, site_id).status_code == 201


class TestLoginRoute:
    def test_token_and_me(self, client, site_id):
        _register(client, site_id)
        resp = _login(client)
        assert resp.status_code == 200
        data = resp.json()
        assert data["token_type"] == "bearer"
        assert data["flash"] == []

        me = client.get("/auth/me", headers=_bearer(data["access_token"]))
        assert me.status_code == 200
        assert me.json()["email"] == "new@example.com"
        assert me.json()["last_login"] is not None

    def test_private_network_site(self, client, session_factory):
        session = session_factory()
        try:
            intranet = create_record(session, Site, name="Corp", domain="corp.local")
            session.commit()
            intranet_id = intranet.id
        finally:
            session.close()

        resp = _register(client, intranet_id, email="staff@corp.local", username="staff")
        assert resp.status_code == 201
        assert _login(client, identifier="staff@corp.local").status_code == 200

    def test_login_by_username(self, client, site_id):
        _register(client, site_id)
        assert _login(client, identifier="newbie").status_code == 200

    def test_wrong_password(self, client, site_id):
        _register(client, site_id)
        resp = _login(client, identifier="newbie", password="wrong-password")
        assert resp.status_code == 401
        body = resp.json()
        assert body["detail"] == "wrong_password"
        assert body["flash"] == [
            {"type": "error", "message": translate("Error.Passport.Password.Wrong")}
        ]

    def test_unknown_email(self, client, site_id):
        resp = _login(client, identifier="unknown@example.com")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "email_not_found"

    def test_me_requires_token(self, client):
        assert client.get("/auth/me").status_code == 401
        assert client.get("/auth/me", headers=_bearer("garbage")).status_code == 401


class TestConnectRoute:
    def test_existing_password_kept(self, client, site_id):
        _register(client, site_id)
        token = _login(client).json()["access_token"]

        resp = client.post(
            "/auth/local/connect",
            json={"password": "a-different-password"},
            headers=_bearer(token),
        )
        assert resp.status_code == 200
        assert _login(client).status_code == 200
        assert _login(client, password="a-different-password").status_code == 401

    def test_requires_token(self, client):
        resp = client.post("/auth/local/connect", json={"password": PASSWORD})
        assert resp.status_code == 401
