"""
Integration tests for the /auth HTTP API.

Every response is an HTTP 200 envelope; the envelope code carries the outcome.
"""

from admin_auth.adapters import JWTTokenAdapter
from admin_auth.domain.admin import AdminStatus, SysAdmin
from admin_auth.domain.login_log import LoginStatus
from admin_auth.domain.result import ResultCode


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


class TestLoginEndpoint:
    """Test POST /auth/login."""

    def test_login_success(self, client):
        response = client.post("/auth/login", json={"username": "admin", "password": "admin123"})

        assert response.status_code == 200
        body = response.json()
        assert body["code"] == ResultCode.SUCCESS
        assert body["message"] == "Login succeeded"

        data = body["data"]
        assert data["token"]
        assert data["tokenType"] == "Bearer"
        assert data["expiresIn"] == 3600
        assert data["userInfo"]["username"] == "admin"
        assert data["userInfo"]["roles"] == ["super_admin"]
        assert data["userInfo"]["permissions"] == ["*"]
        assert "passwordHash" not in data["userInfo"]

    def test_wrong_password(self, client):
        body = client.post("/auth/login", json={"username": "admin", "password": "wrong"}).json()

        assert body["code"] == ResultCode.LOGIN_FAILED
        assert body["message"] == "Incorrect username or password"
        assert body["data"] is None

    def test_unknown_user(self, client):
        body = client.post("/auth/login", json={"username": "ghost", "password": "whatever"}).json()
        assert body["code"] == ResultCode.LOGIN_FAILED

    def test_disabled_account(self, client, container):
        container.admins.create_admin("frozen", "frozen123", status=AdminStatus.DISABLED)

        body = client.post("/auth/login", json={"username": "frozen", "password": "frozen123"}).json()
        assert body["code"] == ResultCode.ACCOUNT_DISABLED
        assert body["message"] == "Account disabled"

    def test_blank_username_is_rejected(self, client):
        response = client.post("/auth/login", json={"username": "   ", "password": "admin123"})

        assert response.status_code == 200
        assert response.json()["code"] == ResultCode.PARAM_ERROR

    def test_missing_password_is_rejected(self, client):
        body = client.post("/auth/login", json={"username": "admin"}).json()
        assert body["code"] == ResultCode.PARAM_ERROR

    def test_login_attempts_are_logged(self, client, login_token):
        client.post("/auth/login", json={"username": "admin", "password": "wrong"}, headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})
        token = login_token()

        page = client.get("/auth/login-logs", headers=_bearer(token)).json()["data"]
        assert page["total"] == 2

        failed, succeeded = page["records"][1], page["records"][0]
        assert failed["status"] == 0
        assert failed["ipAddress"] == "203.0.113.7"
        assert succeeded["status"] == 1
        assert succeeded["ipAddress"] == "testclient"
        assert succeeded["adminId"] is not None


class TestLogoutEndpoint:
    """Test POST /auth/logout."""

    def test_logout_revokes_token(self, client, container, login_token):
        token = login_token()

        body = client.post("/auth/logout", headers=_bearer(token)).json()
        assert body["code"] == ResultCode.SUCCESS
        assert container.tokens.is_blacklisted(token)

        info = client.get("/auth/info", headers=_bearer(token)).json()
        assert info["code"] == ResultCode.TOKEN_EXPIRED

        logs = client.get("/auth/login-logs", headers=_bearer(token)).json()
        assert logs["code"] == ResultCode.TOKEN_INVALID

    def test_logout_without_token(self, client):
        body = client.post("/auth/logout").json()
        assert body["code"] == ResultCode.SUCCESS

    def test_logout_with_unsigned_token_stores_nothing(self, client, container):
        for i in range(20):
            body = client.post("/auth/logout", headers=_bearer(f"junk{i}")).json()
            assert body["code"] == ResultCode.SUCCESS

        assert container.tokens._store._blacklist == {}


class TestRefreshEndpoint:
    """Test POST /auth/refresh."""

    def test_refresh_success(self, client, login_token):
        token = login_token()

        body = client.post("/auth/refresh", headers=_bearer(token)).json()
        assert body["code"] == ResultCode.SUCCESS
        assert body["message"] == "Refresh succeeded"

        new_token = body["data"]
        assert new_token != token
        assert client.get("/auth/info", headers=_bearer(new_token)).json()["code"] == ResultCode.SUCCESS

        # The old token was rotated out
        again = client.post("/auth/refresh", headers=_bearer(token)).json()
        assert again["code"] == ResultCode.TOKEN_EXPIRED

    def test_refresh_without_token(self, client):
        body = client.post("/auth/refresh").json()
        assert body["code"] == ResultCode.TOKEN_INVALID
        assert body["message"] == "Token invalid"

    def test_refresh_with_wrong_scheme(self, client, login_token):
        token = login_token()
        body = client.post("/auth/refresh", headers={"Authorization": f"Basic {token}"}).json()
        assert body["code"] == ResultCode.TOKEN_INVALID

    def test_refresh_with_forged_token(self, client):
        forged = JWTTokenAdapter(secret="not-the-secret").create_token(SysAdmin(id=1, username="admin"))

        body = client.post("/auth/refresh", headers=_bearer(forged)).json()
        assert body["code"] == ResultCode.TOKEN_INVALID

    def test_refresh_expired_token(self, client):
        expired = JWTTokenAdapter(secret="test-secret-key").create_token(
            SysAdmin(id=1, username="admin"), expires_in=-10,
        )

        body = client.post("/auth/refresh", headers=_bearer(expired)).json()
        assert body["code"] == ResultCode.TOKEN_EXPIRED
        assert body["message"] == "Token expired, please log in again"


class TestInfoEndpoint:
    """Test GET /auth/info."""

    def test_info(self, client, login_token):
        body = client.get("/auth/info", headers=_bearer(login_token())).json()

        assert body["code"] == ResultCode.SUCCESS
        assert body["message"] == "Fetched successfully"
        assert body["data"]["username"] == "admin"
        assert body["data"]["realName"] == "Administrator"
        assert body["data"]["roles"] == ["super_admin"]
        assert body["data"]["permissions"] == ["*"]

    def test_info_without_token(self, client):
        body = client.get("/auth/info").json()
        assert body["code"] == ResultCode.TOKEN_INVALID

    def test_info_after_session_dropped(self, client, container, login_token):
        token = login_token()
        container.tokens.delete_token(token)

        body = client.get("/auth/info", headers=_bearer(token)).json()
        assert body["code"] == ResultCode.TOKEN_EXPIRED
        assert body["message"] == "User info expired, please log in again"


class TestLoginLogEndpoints:
    """Test the /auth/login-logs endpoints."""

    def _seed(self, container):
        for i in range(5):
            container.login_logs.record(f"user{i}", f"10.0.0.{i}", "pytest", status=LoginStatus(i % 2))

    def test_requires_token(self, client):
        assert client.get("/auth/login-logs").json()["code"] == ResultCode.TOKEN_INVALID
        assert client.get("/auth/login-logs/1").json()["code"] == ResultCode.TOKEN_INVALID
        assert client.delete("/auth/login-logs").json()["code"] == ResultCode.TOKEN_INVALID

    def test_requires_live_session(self, client, container, login_token):
        token = login_token()
        container.tokens.delete_token(token)

        assert client.get("/auth/login-logs", headers=_bearer(token)).json()["code"] == ResultCode.TOKEN_EXPIRED

    def test_paging(self, client, container, login_token):
        token = login_token()
        self._seed(container)

        body = client.get("/auth/login-logs", params={"pageNum": 2, "pageSize": 4}, headers=_bearer(token)).json()
        assert body["code"] == ResultCode.SUCCESS
        assert body["message"] == "Query succeeded"

        page = body["data"]
        assert page["total"] == 6
        assert page["pageNum"] == 2
        assert page["pageSize"] == 4
        assert page["pages"] == 2
        assert len(page["records"]) == 2

    def test_filters(self, client, container, login_token):
        token = login_token()
        self._seed(container)

        by_user = client.get("/auth/login-logs", params={"username": "user3"}, headers=_bearer(token)).json()["data"]
        assert [r["username"] for r in by_user["records"]] == ["user3"]

        by_ip = client.get("/auth/login-logs", params={"ipAddress": "10.0.0."}, headers=_bearer(token)).json()["data"]
        assert by_ip["total"] == 5

        failures = client.get("/auth/login-logs", params={"status": 0}, headers=_bearer(token)).json()["data"]
        assert failures["total"] == 3

    def test_invalid_paging(self, client, login_token):
        token = login_token()

        body = client.get("/auth/login-logs", params={"pageSize": 1000}, headers=_bearer(token)).json()
        assert body["code"] == ResultCode.PARAM_ERROR

        body = client.get("/auth/login-logs", params={"pageNum": "abc"}, headers=_bearer(token)).json()
        assert body["code"] == ResultCode.PARAM_ERROR

    def test_inverted_time_range(self, client, login_token):
        body = client.get(
            "/auth/login-logs",
            params={"startTime": "2024-02-01T00:00:00", "endTime": "2024-01-01T00:00:00"},
            headers=_bearer(login_token()),
        ).json()
        assert body["code"] == ResultCode.PARAM_ERROR

    def test_get_by_id(self, client, login_token):
        token = login_token()
        record = client.get("/auth/login-logs", headers=_bearer(token)).json()["data"]["records"][0]

        body = client.get(f"/auth/login-logs/{record['id']}", headers=_bearer(token)).json()
        assert body["code"] == ResultCode.SUCCESS
        assert body["data"]["username"] == "admin"

        missing = client.get("/auth/login-logs/99999", headers=_bearer(token)).json()
        assert missing["code"] == ResultCode.DATA_NOT_EXIST
        assert missing["message"] == "Login log does not exist"

    def test_clear(self, client, login_token):
        token = login_token()

        body = client.delete("/auth/login-logs", headers=_bearer(token)).json()
        assert body["code"] == ResultCode.SUCCESS
        assert body["message"] == "Login logs cleared"

        page = client.get("/auth/login-logs", headers=_bearer(token)).json()["data"]
        assert page["total"] == 0
        assert page["pages"] == 0


class TestProfileEndpoint:
    """Test PUT /auth/profile."""

    def test_update_profile_refreshes_session(self, client, login_token):
        token = login_token()

        body = client.put("/auth/profile", json={"realName": "Root", "phone": "555-0100"}, headers=_bearer(token)).json()
        assert body["code"] == ResultCode.SUCCESS
        assert body["message"] == "Profile updated"

        info = client.get("/auth/info", headers=_bearer(token)).json()["data"]
        assert info["realName"] == "Root"

    def test_email_conflict(self, client, container, login_token):
        container.admins.create_admin("other", "other123", email="taken@example.com")

        body = client.put("/auth/profile", json={"email": "taken@example.com"}, headers=_bearer(login_token())).json()
        assert body["code"] == ResultCode.DATA_CONFLICT
        assert body["message"] == "Email is already used by another admin"

    def test_invalid_email(self, client, login_token):
        body = client.put("/auth/profile", json={"email": "not-an-email"}, headers=_bearer(login_token())).json()
        assert body["code"] == ResultCode.PARAM_ERROR

    def test_requires_token(self, client):
        body = client.put("/auth/profile", json={"realName": "Nobody"}).json()
        assert body["code"] == ResultCode.TOKEN_INVALID

    def test_session_dropped(self, client, container, login_token):
        token = login_token()
        container.tokens.delete_token(token)

        body = client.put("/auth/profile", json={"realName": "Nobody"}, headers=_bearer(token)).json()
        assert body["code"] == ResultCode.TOKEN_EXPIRED
        assert body["message"] == "User info expired, please log in again"
        assert container.admins.get_admin(1).real_name == "Administrator"

    def test_null_clears_field(self, client, login_token):
        token = login_token()
        client.put("/auth/profile", json={"avatar": "https://example.com/a.png"}, headers=_bearer(token))

        body = client.put("/auth/profile", json={"avatar": None}, headers=_bearer(token)).json()
        assert body["code"] == ResultCode.SUCCESS

        info = client.get("/auth/info", headers=_bearer(token)).json()["data"]
        assert info["avatar"] is None
        assert info["realName"] == "Administrator"


class TestPasswordEndpoint:
    """Test PUT /auth/password."""

    def test_change_password_revokes_all_sessions(self, client, login_token):
        first = login_token()
        second = login_token()

        body = client.put(
            "/auth/password",
            json={"oldPassword": "admin123", "newPassword": "n3w-secret", "confirmPassword": "n3w-secret"},
            headers=_bearer(first),
        ).json()
        assert body["code"] == ResultCode.SUCCESS
        assert body["message"] == "Password changed, please log in again"

        for token in (first, second):
            assert client.get("/auth/info", headers=_bearer(token)).json()["code"] == ResultCode.TOKEN_EXPIRED

        old = client.post("/auth/login", json={"username": "admin", "password": "admin123"}).json()
        assert old["code"] == ResultCode.LOGIN_FAILED
        assert login_token(password="n3w-secret")

    def test_wrong_old_password(self, client, login_token):
        token = login_token()

        body = client.put(
            "/auth/password",
            json={"oldPassword": "nope", "newPassword": "n3w-secret", "confirmPassword": "n3w-secret"},
            headers=_bearer(token),
        ).json()
        assert body["code"] == ResultCode.PARAM_ERROR
        assert body["message"] == "Old password is incorrect"

        # Session survives a rejected change
        assert client.get("/auth/info", headers=_bearer(token)).json()["code"] == ResultCode.SUCCESS

    def test_short_new_password(self, client, login_token):
        body = client.put(
            "/auth/password",
            json={"oldPassword": "admin123", "newPassword": "abc", "confirmPassword": "abc"},
            headers=_bearer(login_token()),
        ).json()
        assert body["code"] == ResultCode.PARAM_ERROR

    def test_mismatched_confirmation(self, client, login_token):
        token = login_token()

        body = client.put(
            "/auth/password",
            json={"oldPassword": "admin123", "newPassword": "n3w-secret", "confirmPassword": "other-secret"},
            headers=_bearer(token),
        ).json()
        assert body["code"] == ResultCode.PARAM_ERROR
        assert body["message"] == "New password and confirmation do not match"
        assert client.get("/auth/info", headers=_bearer(token)).json()["code"] == ResultCode.SUCCESS

    def test_requires_token(self, client):
        body = client.put(
            "/auth/password",
            json={"oldPassword": "admin123", "newPassword": "n3w-secret", "confirmPassword": "n3w-secret"},
        ).json()
        assert body["code"] == ResultCode.TOKEN_INVALID

    def test_session_dropped(self, client, container, login_token):
        token = login_token()
        container.tokens.delete_token(token)

        body = client.put(
            "/auth/password",
            json={"oldPassword": "admin123", "newPassword": "n3w-secret", "confirmPassword": "n3w-secret"},
            headers=_bearer(token),
        ).json()
        assert body["code"] == ResultCode.TOKEN_EXPIRED
        assert body["message"] == "User info expired, please log in again"

        # Password is unchanged
        assert login_token(password="admin123")


class TestClientAddress:
    """Test where login logs take the client IP from."""

    def _last_ip(self, client, token):
        records = client.get("/auth/login-logs", headers=_bearer(token)).json()["data"]["records"]
        return records[0]["ipAddress"]

    def test_real_ip_header(self, client, login_token):
        client.post("/auth/login", json={"username": "admin", "password": "admin123"}, headers={"X-Real-IP": "198.51.100.4"})
        token = login_token()

        records = client.get("/auth/login-logs", headers=_bearer(token)).json()["data"]["records"]
        assert records[1]["ipAddress"] == "198.51.100.4"

    def test_forwarded_for_wins_over_real_ip(self, client, login_token):
        client.post(
            "/auth/login",
            json={"username": "admin", "password": "admin123"},
            headers={"X-Forwarded-For": "203.0.113.9", "X-Real-IP": "198.51.100.4"},
        )
        token = login_token()

        records = client.get("/auth/login-logs", headers=_bearer(token)).json()["data"]["records"]
        assert records[1]["ipAddress"] == "203.0.113.9"

    def test_socket_peer_fallback(self, client, login_token):
        assert self._last_ip(client, login_token()) == "testclient"
