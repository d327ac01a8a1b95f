"""
Tests for the cookie-session auth endpoints.
"""

from tests.conftest import TEST_PASSWORD, make_user
from modules.auth.models import UserRole


COOKIE = "auth-token"

SIGNUP_FORM = {
    "firstName": "Grace",
    "lastName": "Hopper",
    "email": "grace@example.com",
    "password": "compilers-rule",
}


class TestLogin:
    def test_login_sets_session_cookie(self, client, stored_user):
        response = client.post(
            "/api/auth/login",
            data={"email": stored_user.email, "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "errors": None,
            "user": {
                "id": "user-123",
                "email": "ada@example.com",
                "displayName": "Ada Lovelace",
            },
        }
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{COOKIE}=")
        assert "HttpOnly" in set_cookie
        assert "Path=/" in set_cookie
        assert "samesite=lax" in set_cookie.lower()

    def test_unknown_email(self, client, stored_user):
        response = client.post(
            "/api/auth/login",
            data={"email": "nobody@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 404
        assert response.json()["errors"] == {"email": ["User not found"]}
        assert "set-cookie" not in response.headers

    def test_wrong_password(self, client, stored_user):
        response = client.post(
            "/api/auth/login",
            data={"email": stored_user.email, "password": "not-the-password"},
        )

        assert response.status_code == 401
        assert response.json()["errors"] == {"password": ["Invalid password"]}
        assert "set-cookie" not in response.headers

    def test_malformed_form(self, client):
        response = client.post(
            "/api/auth/login",
            data={"email": "not-an-email", "password": "short"},
        )

        assert response.status_code == 422
        assert response.json()["errors"] == {
            "email": ["Invalid email address"],
            "password": ["Password must be at least 8 characters"],
        }


class TestSignup:
    def test_creates_account_and_session(self, client, fake_users):
        response = client.post("/api/auth/signup", data=SIGNUP_FORM)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["user"]["displayName"] == "Grace Hopper"

        stored = fake_users.get_by_email("grace@example.com")
        assert stored is not None
        assert stored.role == UserRole.USER
        assert stored.password_hash != SIGNUP_FORM["password"]

        me = client.get("/api/auth/me")
        assert me.json()["email"] == "grace@example.com"

    def test_duplicate_email(self, client, stored_user, fake_users):
        response = client.post(
            "/api/auth/signup", data={**SIGNUP_FORM, "email": stored_user.email}
        )

        assert response.status_code == 409
        assert response.json()["errors"] == {
            "email": ["A user with this email already exists"]
        }
        assert fake_users.writes == 0
        assert "set-cookie" not in response.headers

    def test_role_cannot_be_chosen(self, client, fake_users):
        client.post("/api/auth/signup", data={**SIGNUP_FORM, "role": "admin"})

        assert fake_users.get_by_email("grace@example.com").role == UserRole.USER


class TestSession:
    def test_me_anonymous(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json() is None

    def test_me_logged_in(self, logged_in_client):
        data = logged_in_client.get("/api/auth/me").json()

        assert data["id"] == "user-123"
        assert data["first_name"] == "Ada"
        assert "password_hash" not in data

    def test_tampered_cookie(self, client, stored_user):
        client.cookies.set(COOKIE, "not-a-token")

        assert client.get("/api/auth/me").json() is None

    def test_token_for_deleted_user(self, logged_in_client, fake_users):
        fake_users.users.clear()

        assert logged_in_client.get("/api/auth/me").json() is None

    def test_logout_clears_cookie(self, logged_in_client):
        response = logged_in_client.post("/api/auth/logout")

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
        assert "Max-Age=0" in response.headers["set-cookie"]
        assert logged_in_client.get("/api/auth/me").json() is None

    def test_logout_without_session(self, client):
        response = client.post("/api/auth/logout")

        assert response.status_code == 303


class TestProfile:
    def test_update_profile(self, logged_in_client, fake_users):
        response = logged_in_client.post(
            "/api/auth/profile",
            data={
                "firstName": "Augusta",
                "lastName": "King",
                "email": "augusta@example.com",
                "role": "admin",
            },
        )

        assert response.status_code == 200
        assert response.json()["user"]["first_name"] == "Augusta"
        stored = fake_users.users["user-123"]
        assert stored.email == "augusta@example.com"
        assert stored.role == UserRole.USER

    def test_email_taken_by_another_account(self, logged_in_client, fake_users):
        other = make_user(user_id="user-456", email="grace@example.com")
        fake_users.users[other.id] = other

        response = logged_in_client.post(
            "/api/auth/profile",
            data={"firstName": "Ada", "lastName": "Lovelace", "email": other.email},
        )

        assert response.status_code == 409
        assert response.json()["errors"] == {
            "email": ["This email address is already in use by another account."]
        }

    def test_requires_session(self, client, fake_users):
        response = client.post(
            "/api/auth/profile",
            data={"firstName": "Ada", "lastName": "Lovelace", "email": "a@example.com"},
        )

        assert response.status_code == 401
        assert response.json()["errors"] == {
            "_form": ["You must be logged in to update your profile."]
        }
        assert fake_users.writes == 0

    def test_short_names(self, logged_in_client):
        response = logged_in_client.post(
            "/api/auth/profile",
            data={"firstName": "A", "lastName": "L", "email": "ada@example.com"},
        )

        assert response.status_code == 422
        assert response.json()["errors"] == {
            "firstName": ["First name must be at least 2 characters"],
            "lastName": ["Last name must be at least 2 characters"],
        }


class TestDeleteAccount:
    def test_delete_redirects_home(self, logged_in_client, fake_users):
        response = logged_in_client.post("/api/auth/delete")

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert "Max-Age=0" in response.headers["set-cookie"]
        assert fake_users.deleted == ["user-123"]

    def test_delete_requires_session(self, client, fake_users):
        response = client.post("/api/auth/delete")

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHENTICATED"
        assert response.json()["message"] == "You must be logged in to delete an account."
        assert fake_users.deleted == []


class TestMissingSigningSecret:
    def test_me_stays_anonymous(self, client, container, stored_user):
        container.settings.jwt_secret = ""
        client.cookies.set(COOKIE, "some-token")

        response = client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json() is None

    def test_login_fails_without_cookie(self, client, container, stored_user):
        container.settings.jwt_secret = ""

        response = client.post(
            "/api/auth/login",
            data={"email": stored_user.email, "password": TEST_PASSWORD},
        )

        assert response.status_code == 500
        assert response.json()["errors"] == {"_form": ["An unexpected error occurred"]}
        assert "set-cookie" not in response.headers
