from datetime import UTC, datetime, timedelta

import pytest

from app.auth.services.email_service import get_email_service
from app.auth.services.password_reset_service import GENERIC_RESET_MESSAGE
from app.core.datetime_utils import ensure_utc
from app.core.security import generate_reset_token, verify_password
from tests.utils.factories import create_user_factory
from tests.utils.helpers import assert_error_code

FORGOT_URL = "/api/auth/forgot-password"
RESET_URL = "/api/auth/reset-password"


def _token_from_outbox(email_outbox) -> str:
    return email_outbox.sent[-1].body_text.split("token=")[1].split()[0]


class TestForgotPasswordEndpoint:
    @pytest.mark.asyncio
    async def test_should_return_generic_message_for_existing_user(
        self, test_client, test_admin, email_outbox
    ):
        response = await test_client.post(FORGOT_URL, json={"email": test_admin.email})

        assert response.status_code == 200
        assert response.json() == {"message": GENERIC_RESET_MESSAGE}
        assert len(email_outbox.sent) == 1

    @pytest.mark.asyncio
    async def test_should_return_identical_response_for_nonexistent_user(
        self, test_client, test_admin, email_outbox
    ):
        existing = await test_client.post(FORGOT_URL, json={"email": test_admin.email})
        missing = await test_client.post(FORGOT_URL, json={"email": "nobody@example.com"})

        assert missing.status_code == existing.status_code == 200
        assert missing.json() == existing.json()
        assert len(email_outbox.sent) == 1

    @pytest.mark.asyncio
    async def test_should_return_generic_message_when_mail_fails(
        self, test_client, test_admin, email_outbox
    ):
        email_outbox.fail = True

        response = await test_client.post(FORGOT_URL, json={"email": test_admin.email})

        assert response.status_code == 200
        assert response.json() == {"message": GENERIC_RESET_MESSAGE}

    @pytest.mark.asyncio
    async def test_should_return_400_when_email_missing(self, test_client):
        response = await test_client.post(FORGOT_URL, json={})

        assert response.status_code == 400
        assert_error_code(response.json(), "VALIDATION_ERROR")


class TestResetPasswordEndpoint:
    @pytest.mark.asyncio
    async def test_should_reset_password_with_valid_token(
        self, test_client, test_user, db_session
    ):
        raw_token, hashed_token, expiry = generate_reset_token()
        test_user.reset_token = hashed_token
        test_user.reset_token_expires = expiry
        db_session.commit()

        response = await test_client.post(
            RESET_URL, json={"token": raw_token, "password": "newSecurePassword123"}
        )

        assert response.status_code == 200
        assert "reset successfully" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_should_return_400_when_token_invalid(self, test_client):
        response = await test_client.post(
            RESET_URL, json={"token": "invalid-token", "password": "newPassword123"}
        )

        assert response.status_code == 400
        assert_error_code(response.json(), "INVALID_OR_EXPIRED_TOKEN")

    @pytest.mark.asyncio
    async def test_should_return_400_when_token_expired(self, test_client, db_session):
        raw_token, hashed_token, _ = generate_reset_token()
        create_user_factory(
            db_session,
            reset_token=hashed_token,
            reset_token_expires=datetime.now(UTC) - timedelta(hours=1),
        )

        response = await test_client.post(
            RESET_URL, json={"token": raw_token, "password": "newPassword123"}
        )

        assert response.status_code == 400
        assert_error_code(response.json(), "INVALID_OR_EXPIRED_TOKEN")

    @pytest.mark.asyncio
    async def test_should_return_400_when_password_too_short(
        self, test_client, test_user, db_session
    ):
        raw_token, hashed_token, expiry = generate_reset_token()
        test_user.reset_token = hashed_token
        test_user.reset_token_expires = expiry
        db_session.commit()

        response = await test_client.post(RESET_URL, json={"token": raw_token, "password": "short"})

        assert response.status_code == 400
        data = response.json()
        assert_error_code(data, "WEAK_PASSWORD")
        assert "at least 8 characters" in data["error"]["message"]

        db_session.refresh(test_user)
        assert verify_password("testpass123", test_user.hashed_password)
        assert test_user.reset_token == hashed_token

    @pytest.mark.asyncio
    async def test_should_return_400_when_fields_missing(self, test_client):
        response = await test_client.post(RESET_URL, json={"token": "abc"})

        assert response.status_code == 400
        assert_error_code(response.json(), "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_should_allow_login_with_new_password(
        self, test_client, test_user, db_session
    ):
        raw_token, hashed_token, expiry = generate_reset_token()
        test_user.reset_token = hashed_token
        test_user.reset_token_expires = expiry
        db_session.commit()

        new_password = "brandNewPassword123"
        await test_client.post(RESET_URL, json={"token": raw_token, "password": new_password})

        login_payload = {"email": test_user.email, "password": new_password}
        response = await test_client.post("/api/auth/login", json=login_payload)

        assert response.status_code == 200
        assert "token" in response.json()


class TestPasswordResetFlow:
    @pytest.mark.asyncio
    async def test_forgot_then_reset_then_repeat(
        self, test_client, test_admin, db_session, email_outbox
    ):
        old_hash = test_admin.hashed_password
        before = datetime.now(UTC)

        response = await test_client.post(FORGOT_URL, json={"email": "admin@example.com"})
        assert response.status_code == 200

        db_session.refresh(test_admin)
        assert test_admin.reset_token is not None
        expires = ensure_utc(test_admin.reset_token_expires)
        assert before + timedelta(minutes=59) < expires <= datetime.now(UTC) + timedelta(hours=1)

        token = _token_from_outbox(email_outbox)
        payload = {"token": token, "password": "longenough1"}

        response = await test_client.post(RESET_URL, json=payload)
        assert response.status_code == 200

        db_session.refresh(test_admin)
        assert test_admin.hashed_password != old_hash
        assert test_admin.reset_token is None
        assert test_admin.reset_token_expires is None

        response = await test_client.post(RESET_URL, json=payload)
        assert response.status_code == 400
        assert_error_code(response.json(), "INVALID_OR_EXPIRED_TOKEN")


class TestResetPasswordDoesNotNeedMail:
    @pytest.mark.asyncio
    async def test_should_not_build_email_service_on_reset(
        self, test_client, test_app, test_user, db_session
    ):
        def unavailable_email_service():
            raise AssertionError("reset-password must not resolve an email service")

        test_app.dependency_overrides[get_email_service] = unavailable_email_service
        raw_token, hashed_token, expiry = generate_reset_token()
        test_user.reset_token = hashed_token
        test_user.reset_token_expires = expiry
        db_session.commit()

        response = await test_client.post(
            RESET_URL, json={"token": raw_token, "password": "newSecurePassword123"}
        )

        assert response.status_code == 200
