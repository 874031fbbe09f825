"""
Admin Auth Client - High-level SDK for the /auth HTTP API.

Simplifies common admin console workflows for application developers.
"""

from typing import Optional, Dict, Any
import httpx

from admin_auth.domain.result import ResultCode
from admin_auth.exceptions import AdminAuthError


class AdminAuthClient:
    """
    HTTP client for the admin auth service.

    Keeps the current bearer token and unwraps the {code, message, data}
    envelope, raising AdminAuthError for any non-success code.

    Example:
        from admin_auth import AdminAuthClient

        client = AdminAuthClient(base_url="http://localhost:8000")

        # Login
        client.login("admin", "secret")
        profile = client.info()

        # Logout
        client.logout()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http: Optional[httpx.Client] = None,
        token: Optional[str] = None,
        timeout: float = 10.0,
    ):
        """
        Initialize client.

        Args:
            base_url: Service root URL (ignored when http is given)
            http: Pre-built httpx client (e.g. a FastAPI TestClient)
            token: Existing bearer token
            timeout: Request timeout in seconds
        """
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.token = token

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def _call(self, method: str, path: str, **kwargs) -> Any:
        response = self._http.request(method, path, headers=self._headers(), **kwargs)
        response.raise_for_status()
        body = response.json()
        if body.get("code") != ResultCode.SUCCESS:
            raise AdminAuthError(body.get("message"), code=body.get("code", ResultCode.ERROR))
        return body.get("data")

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """
        Log in and remember the token.

        Returns:
            Login payload: token, tokenType, expiresIn, userInfo
        """
        data = self._call("POST", "/auth/login", json={"username": username, "password": password})
        self.token = data["token"]
        return data

    def logout(self) -> bool:
        """Revoke the current token and forget it."""
        self._call("POST", "/auth/logout")
        self.token = None
        return True

    def refresh(self) -> str:
        """Swap the current token for a new one."""
        self.token = self._call("POST", "/auth/refresh")
        return self.token

    def info(self) -> Dict[str, Any]:
        """Current admin profile with roles and permissions."""
        return self._call("GET", "/auth/info")

    def login_logs(self, page_num: int = 1, page_size: int = 10, **filters) -> Dict[str, Any]:
        """
        Query login logs.

        Args:
            page_num: Page number (1-based)
            page_size: Page size
            **filters: username, ipAddress, status, startTime, endTime

        Returns:
            Page: records, total, pageNum, pageSize, pages
        """
        params = {"pageNum": page_num, "pageSize": page_size}
        params.update({k: v for k, v in filters.items() if v is not None})
        return self._call("GET", "/auth/login-logs", params=params)

    def login_log(self, log_id: int) -> Dict[str, Any]:
        return self._call("GET", f"/auth/login-logs/{log_id}")

    def clear_login_logs(self) -> bool:
        self._call("DELETE", "/auth/login-logs")
        return True

    def update_profile(self, **fields) -> bool:
        """
        Update profile fields.

        Args:
            **fields: realName, email, phone, avatar
        """
        self._call("PUT", "/auth/profile", json=fields)
        return True

    def change_password(self, old_password: str, new_password: str, confirm_password: Optional[str] = None) -> bool:
        """Change password; the server revokes the token, so it is dropped here too."""
        self._call(
            "PUT",
            "/auth/password",
            json={
                "oldPassword": old_password,
                "newPassword": new_password,
                "confirmPassword": confirm_password if confirm_password is not None else new_password,
            },
        )
        self.token = None
        return True

    def close(self) -> None:
        self._http.close()
