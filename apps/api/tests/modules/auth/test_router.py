"""
HTTP tests for login and passcode change, including the full
sign-up -> approve -> login -> change passcode journey.
"""

import pytest

from infosys.core.config import settings
from infosys.core.exceptions import INVALID_CREDENTIALS_MESSAGE
from infosys.core.security import create_refresh_token, decode_token


@pytest.fixture(autouse=True)
def show_passcode(monkeypatch):
    monkeypatch.setattr(settings, "expose_passcode_in_response", True)


async def _approved_student(client, admin_headers) -> tuple[int, str]:
    response = await client.post(
        "/api/signup",
        json={"name": "Ada Etuk", "regNumber": "24/is/co/346", "email": "ada@example.com"},
    )
    user_id = response.json()["userId"]
    response = await client.post(f"/api/confirm-registration/{user_id}", headers=admin_headers)
    return user_id, response.json()["passcode"]


class TestLogin:
    @pytest.mark.asyncio
    async def test_approved_student_logs_in(self, client, admin_headers):
        user_id, passcode = await _approved_student(client, admin_headers)

        response = await client.post(
            "/api/login", json={"regNumber": "24/IS/CO/346", "passcode": passcode}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["tokenType"] == "bearer"
        assert body["user"] == {
            "id": user_id,
            "name": "Ada Etuk",
            "regNumber": "24/is/co/346",
            "email": "ada@example.com",
            "role": "student",
        }

        claims = decode_token(body["accessToken"])
        assert claims["sub"] == str(user_id)
        assert claims["role"] == "student"
        assert claims["type"] == "access"
        assert decode_token(body["refreshToken"])["type"] == "refresh"

    @pytest.mark.asyncio
    async def test_admin_logs_in(self, client, admin_headers):
        response = await client.post(
            "/api/login",
            json={"regNumber": settings.admin_reg_number, "passcode": settings.admin_passcode},
        )

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "admin"

    @pytest.mark.asyncio
    async def test_failures_share_one_response(self, client, admin_headers):
        await client.post(
            "/api/signup",
            json={"name": "Pending", "regNumber": "24/is/co/400", "email": "p@example.com"},
        )
        await _approved_student(client, admin_headers)

        unknown = await client.post("/api/login", json={"regNumber": "99/xx/yy/999", "passcode": "x"})
        pending = await client.post("/api/login", json={"regNumber": "24/is/co/400", "passcode": "x"})
        wrong = await client.post("/api/login", json={"regNumber": "24/is/co/346", "passcode": "x"})

        for response in (unknown, pending, wrong):
            assert response.status_code == 401
            assert response.json() == {
                "detail": {"error": "INVALID_CREDENTIALS", "message": INVALID_CREDENTIALS_MESSAGE}
            }

    @pytest.mark.asyncio
    async def test_rate_limited_per_client(self, client, monkeypatch):
        monkeypatch.setattr("infosys.modules.auth.router.RATE_LIMIT_LOGIN", (3, 60))

        for _ in range(3):
            response = await client.post(
                "/api/login", json={"regNumber": "99/xx/yy/999", "passcode": "x"}
            )
            assert response.status_code == 401

        response = await client.post("/api/login", json={"regNumber": "99/xx/yy/999", "passcode": "x"})
        assert response.status_code == 429
        assert "Retry-After" in response.headers


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_full_journey(self, client, admin_headers):
        _, passcode = await _approved_student(client, admin_headers)
        login = await client.post(
            "/api/login", json={"regNumber": "24/is/co/346", "passcode": passcode}
        )
        headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}

        response = await client.post(
            "/api/change-password",
            json={"currentPasscode": passcode, "newPasscode": "my-new-pass"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

        old = await client.post("/api/login", json={"regNumber": "24/is/co/346", "passcode": passcode})
        new = await client.post(
            "/api/login", json={"regNumber": "24/is/co/346", "passcode": "my-new-pass"}
        )
        assert old.status_code == 401
        assert new.status_code == 200

    @pytest.mark.asyncio
    async def test_short_new_passcode(self, client, admin_headers):
        _, passcode = await _approved_student(client, admin_headers)
        login = await client.post(
            "/api/login", json={"regNumber": "24/is/co/346", "passcode": passcode}
        )
        headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}

        response = await client.post(
            "/api/change-password",
            json={"currentPasscode": passcode, "newPasscode": "12345"},
            headers=headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "WEAK_PASSCODE"

    @pytest.mark.asyncio
    async def test_overlong_new_passcode_rejected(self, client, admin_headers):
        _, passcode = await _approved_student(client, admin_headers)
        login = await client.post(
            "/api/login", json={"regNumber": "24/is/co/346", "passcode": passcode}
        )
        headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}

        response = await client.post(
            "/api/change-password",
            json={"currentPasscode": passcode, "newPasscode": "A" * 72 + "secret-suffix-1234"},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_INPUT"

        lookalike = await client.post(
            "/api/login",
            json={"regNumber": "24/is/co/346", "passcode": "A" * 72 + "totally-different"},
        )
        old = await client.post("/api/login", json={"regNumber": "24/is/co/346", "passcode": passcode})
        assert lookalike.status_code == 401
        assert old.status_code == 200

    @pytest.mark.asyncio
    async def test_wrong_current_passcode(self, client, admin_headers):
        _, passcode = await _approved_student(client, admin_headers)
        login = await client.post(
            "/api/login", json={"regNumber": "24/is/co/346", "passcode": passcode}
        )
        headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}

        response = await client.post(
            "/api/change-password",
            json={"currentPasscode": "not-it", "newPasscode": "long-enough"},
            headers=headers,
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_requires_token(self, client):
        response = await client.post(
            "/api/change-password",
            json={"currentPasscode": "a", "newPasscode": "long-enough"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_refresh_token_rejected(self, client):
        token = create_refresh_token("1")

        response = await client.post(
            "/api/change-password",
            json={"currentPasscode": "a", "newPasscode": "long-enough"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401
        assert response.json()["detail"]["error"] == "INVALID_TOKEN_TYPE"
