import json
from unittest.mock import patch

import httpx
import pytest
from sqlalchemy.exc import OperationalError

from photobooth.domain.staff.repository import StaffRepository
from photobooth.identity import IdentityClient, get_identity_client
from photobooth.main import app
from photobooth.models import UserProfile

from .conftest import STAFF_ID

AUTH_BASE = "https://backend.test/auth/v1"


class FakeAuthApi:
    """Records calls and answers like the hosted auth API"""

    def __init__(self):
        self.requests = []
        self.passwords = {"claire.martin@gmail.com": "Ancien!Mot2passe"}
        self.tokens = {"valid-token": STAFF_ID}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.replace("/auth/v1", "", 1)

        if request.method == "GET" and path == "/user":
            token = request.headers["Authorization"].removeprefix("Bearer ")
            if token not in self.tokens:
                return httpx.Response(401, json={"msg": "invalid JWT"})
            return httpx.Response(200, json={"id": self.tokens[token]})

        if request.method == "POST" and path == "/token":
            body = json.loads(request.content)
            if self.passwords.get(body["email"]) == body["password"]:
                return httpx.Response(200, json={"access_token": "t"})
            return httpx.Response(400, json={"error": "invalid_grant"})

        if request.method == "POST" and path == "/admin/users":
            body = json.loads(request.content)
            if body["email"] in self.passwords:
                return httpx.Response(422, json={"msg": "User already registered"})
            self.passwords[body["email"]] = body["password"]
            return httpx.Response(200, json={"id": "11111111-1111-1111-1111-111111111111", "email": body["email"]})

        if request.method == "PUT" and path.startswith("/admin/users/"):
            return httpx.Response(200, json={"id": path.rsplit("/", 1)[-1]})

        if request.method == "DELETE" and path.startswith("/admin/users/"):
            return httpx.Response(200, json={})

        return httpx.Response(404)


@pytest.fixture
def auth_api(client):
    api = FakeAuthApi()
    app.dependency_overrides[get_identity_client] = lambda: IdentityClient(
        base_url=AUTH_BASE, transport=httpx.MockTransport(api)
    )
    return api


class TestBearerAuthentication:
    def test_valid_token_for_admin_profile(self, client, staff, auth_api):
        response = client.get("/admin/profile", headers={"Authorization": "Bearer valid-token"})

        assert response.status_code == 200
        assert response.json()["email"] == "claire.martin@gmail.com"
        sent = auth_api.requests[0]
        assert sent.headers["apikey"] == "test-service-key"

    def test_rejected_token(self, client, staff, auth_api):
        response = client.get("/admin/profile", headers={"Authorization": "Bearer expired"})
        assert response.status_code == 401

    def test_token_without_admin_profile(self, client, auth_api):
        response = client.get("/admin/profile", headers={"Authorization": "Bearer valid-token"})
        assert response.status_code == 403

    def test_auth_service_unreachable(self, client, staff):
        def unreachable(request):
            raise httpx.ConnectError("connection refused", request=request)

        app.dependency_overrides[get_identity_client] = lambda: IdentityClient(
            base_url=AUTH_BASE, transport=httpx.MockTransport(unreachable)
        )
        response = client.get("/admin/profile", headers={"Authorization": "Bearer valid-token"})
        assert response.status_code == 502


class TestAdminAccounts:
    def test_list_admins_oldest_first(self, admin_client, db):
        db.add(UserProfile(id="later", email="paul.martin@outlook.fr", role="admin"))
        db.add(UserProfile(id="helper", email="eva.petit@gmail.com", role="staff"))
        db.commit()

        body = admin_client.get("/admin/staff").json()

        assert [p["id"] for p in body] == [STAFF_ID, "later"]

    def test_create_admin(self, admin_client, db, auth_api):
        response = admin_client.post(
            "/admin/staff",
            json={"email": "Paul.Martin@outlook.fr", "password": "Photo!Booth2026", "fullName": "Paul Martin"},
        )

        assert response.status_code == 201
        assert response.json()["id"] == "11111111-1111-1111-1111-111111111111"
        assert response.json()["role"] == "admin"
        profile = db.query(UserProfile).filter(UserProfile.email == "paul.martin@outlook.fr").one()
        assert profile.full_name == "Paul Martin"
        sent = auth_api.requests[-1]
        assert sent.headers["Authorization"] == "Bearer test-service-key"

    def test_create_admin_with_weak_password(self, admin_client, auth_api):
        response = admin_client.post(
            "/admin/staff", json={"email": "paul.martin@outlook.fr", "password": "password"}
        )

        assert response.status_code == 422
        assert "password" in response.json()["errors"]
        assert auth_api.requests == []

    def test_create_admin_already_registered(self, admin_client, auth_api):
        auth_api.passwords["paul.martin@outlook.fr"] = "x"
        response = admin_client.post(
            "/admin/staff", json={"email": "paul.martin@outlook.fr", "password": "Photo!Booth2026"}
        )
        assert response.status_code == 409

    def test_reset_password_returns_generated_password(self, admin_client, db, auth_api):
        db.add(UserProfile(id="other", email="paul.martin@outlook.fr", role="admin"))
        db.commit()

        response = admin_client.post("/admin/staff/other/reset-password")

        assert response.status_code == 200
        password = response.json()["password"]
        assert len(password) == 12
        sent = auth_api.requests[-1]
        assert sent.method == "PUT"
        assert sent.url.path.endswith("/admin/users/other")
        assert json.loads(sent.content) == {"password": password}

    def test_delete_admin(self, admin_client, db, auth_api):
        db.add(UserProfile(id="other", email="paul.martin@outlook.fr", role="admin"))
        db.commit()

        response = admin_client.delete("/admin/staff/other")

        assert response.status_code == 200
        assert auth_api.requests[-1].method == "DELETE"
        db.expire_all()
        assert db.query(UserProfile).filter(UserProfile.id == "other").first() is None

    def test_delete_admin_profile_failure_is_reported(self, admin_client, db, auth_api):
        db.add(UserProfile(id="other", email="paul.martin@outlook.fr", role="admin"))
        db.commit()

        failure = OperationalError("DELETE", {}, Exception("database is locked"))
        with patch.object(StaffRepository, "delete_profile", side_effect=failure):
            response = admin_client.delete("/admin/staff/other")

        assert response.status_code == 500
        assert response.json()["detail"] == "Erreur lors de la suppression du profil administrateur"
        assert auth_api.requests[-1].method == "DELETE"
        db.expire_all()
        assert db.query(UserProfile).filter(UserProfile.id == "other").first() is not None

    def test_cannot_delete_self(self, admin_client, auth_api):
        response = admin_client.delete(f"/admin/staff/{STAFF_ID}")
        assert response.status_code == 403
        assert auth_api.requests == []


class TestOwnProfile:
    def test_update_full_name(self, admin_client):
        response = admin_client.patch("/admin/profile", json={"fullName": "Claire Martin-Roux"})
        assert response.json()["full_name"] == "Claire Martin-Roux"

    def test_change_password(self, admin_client, auth_api):
        response = admin_client.post(
            "/admin/profile/password",
            json={
                "currentPassword": "Ancien!Mot2passe",
                "newPassword": "Nouveau!Mot3passe",
                "confirmPassword": "Nouveau!Mot3passe",
            },
        )

        assert response.status_code == 200
        assert auth_api.requests[-1].method == "PUT"

    def test_change_password_with_wrong_current_password(self, admin_client, auth_api):
        response = admin_client.post(
            "/admin/profile/password",
            json={
                "currentPassword": "mauvais",
                "newPassword": "Nouveau!Mot3passe",
                "confirmPassword": "Nouveau!Mot3passe",
            },
        )

        assert response.status_code == 422
        assert "currentPassword" in response.json()["errors"]
        assert all(r.method != "PUT" for r in auth_api.requests)

    def test_change_password_confirmation_mismatch(self, admin_client, auth_api):
        response = admin_client.post(
            "/admin/profile/password",
            json={
                "currentPassword": "Ancien!Mot2passe",
                "newPassword": "Nouveau!Mot3passe",
                "confirmPassword": "Nouveau!Mot4passe",
            },
        )

        assert response.status_code == 422
        assert "confirmPassword" in response.json()["errors"]
        assert auth_api.requests == []
