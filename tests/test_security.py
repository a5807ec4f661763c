"""
Tests for security-critical paths.

Tests:
- Token issue / verify / expiry / tampering
- Password hashing
- Authorization policies (admin, self-or-admin)
- Gate short-circuits before any data access
"""

from datetime import timedelta

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from jose import jwt

from app.core.config import settings
from app.core.deps import (
    check_admin,
    check_self_or_admin,
    require_admin,
    require_authenticated,
    require_self_or_admin,
)
from app.core.exceptions import AccessDeniedError, AuthError
from app.core.security import (
    TokenClaims,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestAccessToken:
    """Tests for create_access_token / decode_access_token"""

    def test_round_trip(self):
        claims = decode_access_token(create_access_token("alice", False))

        assert claims == TokenClaims(username="alice", is_admin=False)

    def test_admin_flag_is_preserved(self):
        assert decode_access_token(create_access_token("root", True)).is_admin is True

    def test_expired_token_is_invalid(self):
        token = create_access_token("alice", False, expires_delta=timedelta(seconds=-1))

        with pytest.raises(AuthError):
            decode_access_token(token)

    def test_token_signed_with_other_secret_is_invalid(self):
        token = jwt.encode({"sub": "alice", "is_admin": True}, "not-the-secret", algorithm="HS256")

        with pytest.raises(AuthError):
            decode_access_token(token)

    def test_tampered_payload_is_invalid(self):
        header, _, signature = create_access_token("alice", False).split(".")
        forged_payload = jwt.encode(
            {"sub": "alice", "is_admin": True}, "x", algorithm="HS256"
        ).split(".")[1]

        with pytest.raises(AuthError):
            decode_access_token(f"{header}.{forged_payload}.{signature}")

    def test_garbage_is_invalid(self):
        with pytest.raises(AuthError):
            decode_access_token("not-a-token")

    def test_missing_claims_are_invalid(self):
        token = jwt.encode({"is_admin": False}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

        with pytest.raises(AuthError):
            decode_access_token(token)

    def test_token_carries_expiry(self):
        payload = jwt.decode(
            create_access_token("alice", False),
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
        assert payload["exp"] - payload["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


class TestPasswordHashing:
    """Tests for bcrypt helpers"""

    def test_hash_and_verify(self):
        hashed = get_password_hash("password1")

        assert hashed != "password1"
        assert hashed.startswith("$2")
        assert verify_password("password1", hashed)
        assert not verify_password("password2", hashed)


class TestAuthorizationPolicies:
    """Tests for check_admin / check_self_or_admin"""

    def test_self_or_admin(self):
        check_self_or_admin(TokenClaims("alice", True), "bob")
        check_self_or_admin(TokenClaims("bob", False), "bob")

        with pytest.raises(AccessDeniedError):
            check_self_or_admin(TokenClaims("alice", False), "bob")

    def test_admin(self):
        check_admin(TokenClaims("alice", True))

        with pytest.raises(AccessDeniedError):
            check_admin(TokenClaims("alice", False))


class TestGate:
    """Route-level gate behavior"""

    def test_missing_token_is_unauthorized(self, client, seed):
        response = client.get("/users")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_invalid_token_is_unauthorized(self, client, seed):
        response = client.get("/users/u1", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    def test_expired_token_is_unauthorized(self, client, seed):
        token = create_access_token("u1", False, expires_delta=timedelta(minutes=-5))

        response = client.get("/users/u1", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_invalid_token_on_public_route_is_ignored(self, client, seed):
        response = client.get("/companies", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 200
        assert len(response.json()["companies"]) == 3

    def test_denied_request_never_reaches_the_data_layer(self, client, seed, u1_headers, monkeypatch):
        from app import crud

        def fail(*args, **kwargs):
            raise AssertionError("data layer reached")

        monkeypatch.setattr(crud.user, "update", fail)

        response = client.patch("/users/u2", json={"firstName": "X"}, headers=u1_headers)

        assert response.status_code == 403

    def test_deny_precedes_body_validation(self, client, seed):
        """An anonymous request with an invalid body is rejected as unauthorized"""
        response = client.patch("/companies/c1", json={"numEmployees": "many"})

        assert response.status_code == 401


captured_requests = []


def capture_request(request: Request):
    captured_requests.append(request)


@pytest.fixture
def gate_client():
    """A bare app with one route per gate, recording the request each gate sees."""
    from main import jobly_error_handler
    from app.core.exceptions import JoblyError

    gate_app = FastAPI()
    gate_app.add_exception_handler(JoblyError, jobly_error_handler)

    @gate_app.get("/whoami", dependencies=[Depends(capture_request), Depends(require_authenticated)])
    def whoami():
        return {"ok": True}

    @gate_app.get("/staff", dependencies=[Depends(capture_request), Depends(require_admin)])
    def staff():
        return {"ok": True}

    @gate_app.get("/accounts/{username}", dependencies=[Depends(capture_request), Depends(require_self_or_admin)])
    def account(username: str):
        return {"ok": True}

    captured_requests.clear()
    yield TestClient(gate_app)
    captured_requests.clear()


def attached_claims():
    return getattr(captured_requests[-1].state, "claims", None)


class TestGateAttachesClaims:
    """request.state.claims is set only on requests the gate allows"""

    def test_authenticated_request_carries_claims(self, gate_client, u1_headers):
        response = gate_client.get("/whoami", headers=u1_headers)

        assert response.status_code == 200
        assert attached_claims() == TokenClaims("u1", False)

    def test_admin_request_carries_claims(self, gate_client, admin_headers):
        response = gate_client.get("/staff", headers=admin_headers)

        assert response.status_code == 200
        assert attached_claims() == TokenClaims("admin", True)

    def test_non_admin_denied_without_claims(self, gate_client, u1_headers):
        response = gate_client.get("/staff", headers=u1_headers)

        assert response.status_code == 403
        assert attached_claims() is None

    def test_self_request_carries_claims(self, gate_client, u1_headers):
        response = gate_client.get("/accounts/u1", headers=u1_headers)

        assert response.status_code == 200
        assert attached_claims() == TokenClaims("u1", False)

    def test_other_account_denied_without_claims(self, gate_client, u1_headers):
        response = gate_client.get("/accounts/u2", headers=u1_headers)

        assert response.status_code == 403
        assert response.json() == {"detail": "Not permitted to act on another user's account"}
        assert attached_claims() is None

    def test_anonymous_denied_without_claims(self, gate_client):
        response = gate_client.get("/accounts/u1")

        assert response.status_code == 401
        assert attached_claims() is None
