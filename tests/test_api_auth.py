# =============================================================================
# tests/test_api_auth.py - Registration & Login Endpoint Tests
# =============================================================================

from fastapi.testclient import TestClient

from app.main import app


class TestRegister:
    """POST /api/users"""

    def test_returns_token(self, client):
        response = client.post(
            "/api/users",
            json={"name": "Jane", "email": "jane@example.com", "password": "secret1"},
        )

        assert response.status_code == 200
        assert response.json()["token"]

    def test_duplicate_email(self, client, register):
        register(email="jane@example.com")

        response = client.post(
            "/api/users",
            json={"name": "Other", "email": "JANE@example.com", "password": "secret1"},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [{"msg": "User already exists"}]

    def test_validation_lists_every_field(self, client):
        response = client.post("/api/users", json={"email": "nope", "password": "123"})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_FAILED"
        assert {e["param"] for e in body["errors"]} == {"name", "email", "password"}

    def test_password_not_stored_in_clear(self, client, store, register):
        register(password="secret1")

        user = store.find_one("users", {"email": "jane@example.com"})
        assert user["password"] != "secret1"
        assert user["avatar"].startswith("https://www.gravatar.com/avatar/")


class TestLogin:
    """POST /api/auth"""

    def test_login(self, client, register):
        register(email="jane@example.com", password="secret1")

        response = client.post("/api/auth", json={"email": "jane@example.com", "password": "secret1"})

        assert response.status_code == 200
        assert response.json()["token"]

    def test_wrong_password(self, client, register):
        register(email="jane@example.com", password="secret1")

        response = client.post("/api/auth", json={"email": "jane@example.com", "password": "wrong!"})

        assert response.status_code == 400
        assert response.json()["errors"] == [{"msg": "Invalid Credentials"}]

    def test_unknown_email(self, client):
        response = client.post("/api/auth", json={"email": "ghost@example.com", "password": "secret1"})

        assert response.status_code == 400
        assert response.json()["errors"] == [{"msg": "Invalid Credentials"}]


class TestCurrentUser:
    """GET /api/auth"""

    def test_current_user(self, client, auth_headers):
        response = client.get("/api/auth", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "jane@example.com"
        assert body["name"] == "Jane Doe"
        assert "id" in body
        assert "password" not in body

    def test_legacy_header(self, client, auth_headers):
        token = auth_headers["Authorization"].removeprefix("Bearer ")

        response = client.get("/api/auth", headers={"x-auth-token": token})

        assert response.status_code == 200

    def test_no_token(self, client):
        response = client.get("/api/auth")

        assert response.status_code == 401
        assert response.json()["errors"] == [{"msg": "No token, authorization denied"}]

    def test_bad_token(self, client):
        response = client.get("/api/auth", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_token_from_other_secret(self, client):
        from lib.security import TokenService

        token = TokenService(secret="some-other-secret-value").issue("5f1d7f3e8c9b4a2d1c0e9f8a")

        response = client.get("/api/auth", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_deleted_user(self, client, token_service):
        token = token_service.issue("5f1d7f3e8c9b4a2d1c0e9f8a")

        response = client.get("/api/auth", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 404


class TestUnexpectedErrors:

    def test_internal_error_not_leaked(self, client, auth_headers, store, monkeypatch):
        """Unexpected exceptions become a generic 500."""

        def boom(*args, **kwargs):
            raise RuntimeError("secret internals")

        monkeypatch.setattr(store, "find_by_id", boom)
        safe_client = TestClient(app, raise_server_exceptions=False)

        response = safe_client.get("/api/auth", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"errors": [{"msg": "Server error"}], "code": "INTERNAL_ERROR"}


class TestUserResponseShape:

    def test_only_public_fields(self, client, auth_headers, store, monkeypatch):
        """Fields outside the public user schema never reach the client."""
        full_find_by_id = store.find_by_id

        def find_ignoring_projection(collection, document_id, projection=None):
            return full_find_by_id(collection, document_id)

        monkeypatch.setattr(store, "find_by_id", find_ignoring_projection)

        response = client.get("/api/auth", headers=auth_headers)

        assert response.status_code == 200
        assert set(response.json()) == {"id", "name", "email", "avatar", "date"}
