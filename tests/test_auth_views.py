"""
Tests for session authentication and role checks.
"""

import pytest


class TestSignup:

    def test_signup_creates_user_and_session(self, client):
        response = client.post("/api/auth/signup", json={
            "username": "newuser",
            "password": "supersecret",
            "email": "new@example.com",
        })

        assert response.status_code == 201
        user = response.get_json()["user"]
        assert user["username"] == "newuser"
        assert user["role"] == "user"
        assert "password" not in user

        me = client.get("/api/auth/me").get_json()["user"]
        assert me["username"] == "newuser"
        assert me["isAuthenticated"] is True

    def test_signup_without_email(self, client):
        response = client.post("/api/auth/signup", json={"username": "noemail", "password": "supersecret"})

        assert response.status_code == 201
        assert response.get_json()["user"]["email"] is None

    def test_duplicate_username(self, client, test_user):
        response = client.post("/api/auth/signup", json={"username": "testuser", "password": "supersecret"})

        assert response.status_code == 400
        assert response.get_json()["message"] == "Username already taken"

    def test_duplicate_email(self, client, test_user):
        response = client.post("/api/auth/signup", json={
            "username": "someoneelse",
            "password": "supersecret",
            "email": "testuser@example.com",
        })

        assert response.status_code == 400
        assert response.get_json()["message"] == "Email already registered"

    @pytest.mark.parametrize("body", [
        {"username": "ab", "password": "supersecret"},
        {"username": "validname", "password": "short"},
        {"username": "validname", "password": "supersecret", "email": "not-an-email"},
        {"password": "supersecret"},
    ])
    def test_signup_validation(self, client, body):
        response = client.post("/api/auth/signup", json=body)

        assert response.status_code == 400
        assert response.get_json()["message"] == "Invalid input"


class TestSignin:

    def test_signin(self, client, test_user):
        response = client.post("/api/auth/signin", json={"username": "testuser", "password": "testpassword123"})

        assert response.status_code == 200
        assert response.get_json()["user"]["id"] == test_user["id"]
        assert client.get("/api/auth/me").get_json()["user"]["username"] == "testuser"

    def test_wrong_password(self, client, test_user):
        response = client.post("/api/auth/signin", json={"username": "testuser", "password": "wrong"})

        assert response.status_code == 401
        assert response.get_json()["message"] == "Incorrect username or password"

    def test_unknown_user(self, client):
        response = client.post("/api/auth/signin", json={"username": "ghost", "password": "whatever"})
        assert response.status_code == 401

    def test_signout(self, logged_in_client):
        response = logged_in_client.post("/api/auth/signout")

        assert response.get_json() == {"success": True}
        assert logged_in_client.get("/api/auth/me").get_json() == {"user": None}


class TestSessionUser:

    def test_me_anonymous(self, client):
        assert client.get("/api/auth/me").get_json() == {"user": None}

    def test_stale_session_is_anonymous(self, app, client):
        with client.session_transaction() as session:
            session["user_id"] = 9999

        assert client.get("/api/auth/me").get_json() == {"user": None}

    def test_can_access_premium_requires_login(self, client):
        response = client.get("/api/auth/can-access-premium")

        assert response.status_code == 401
        assert response.get_json() == {
            "error": "Unauthorized",
            "message": "You must be signed in to access this resource",
        }

    @pytest.mark.parametrize("fixture,expected", [
        ("logged_in_client", False),
        ("premium_client", True),
        ("editor_client", False),
        ("admin_client", True),
    ])
    def test_can_access_premium(self, request, fixture, expected):
        client = request.getfixturevalue(fixture)
        response = client.get("/api/auth/can-access-premium")
        assert response.get_json() == {"canAccessPremium": expected}


class TestRoles:

    def test_role_hierarchy(self, app):
        from tariffsmart.web.db.models import User

        with app.app_context():
            editor = User.register(username="ed", password="password123", role="editor")

            assert editor.has_role("user")
            assert editor.has_role("premium")
            assert editor.has_role("editor")
            assert not editor.has_role("admin")

    def test_unknown_role_ranks_as_anonymous(self, app):
        from tariffsmart.web.db.models import User

        with app.app_context():
            user = User.register(username="odd", password="password123", role="mystery")
            assert not user.has_role("user")
            assert user.has_role("anonymous")

    def test_password_is_hashed(self, app):
        from tariffsmart.web.db.models import User

        with app.app_context():
            user = User.register(username="hashme", password="password123")
            assert user.password != "password123"
            assert user.check_password("password123")
            assert not user.check_password("password124")
