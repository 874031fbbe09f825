"""
Admin Console Example - Login, token refresh and login logs over HTTP.

Runs the service in-process on in-memory SQLite, so no server is needed.
"""

from fastapi.testclient import TestClient

from admin_auth import AdminAuthClient
from admin_auth.api import create_app
from admin_auth.config import AuthSettings
from admin_auth.exceptions import AdminAuthError


def main():
    settings = AuthSettings(
        jwt_secret="my-secret-key",
        database_url="sqlite:///:memory:",
        default_admin_username="admin",
        default_admin_password="admin123",
    )
    client = AdminAuthClient(http=TestClient(create_app(settings)))

    # A bad password is rejected and logged
    try:
        client.login("admin", "guess")
    except AdminAuthError as e:
        print(f"Login rejected: {e.code} {e.message}")

    # Login
    data = client.login("admin", "admin123")
    print(f"\nLogin successful!")
    print(f"Token: {data['token'][:50]}...")
    print(f"Expires in: {data['expiresIn']}s")

    info = client.info()
    print(f"\nSigned in as {info['username']} roles={info['roles']} permissions={info['permissions']}")

    # Refresh rotates the token
    old_token = client.token
    client.refresh()
    print(f"\nToken rotated: {old_token != client.token}")

    # Login history
    page = client.login_logs(page_size=5)
    print(f"\nLogin logs ({page['total']} total):")
    for record in page["records"]:
        outcome = "ok" if record["status"] == 1 else "failed"
        print(f"  {record['loginTime']} {record['username']} from {record['ipAddress']}: {outcome}")

    # Logout
    client.logout()
    print(f"\nLogged out successfully")

    # The revoked token no longer works
    client.token = old_token
    try:
        client.info()
    except AdminAuthError as e:
        print(f"Old token after logout: {e.code} {e.message}")


if __name__ == "__main__":
    main()
