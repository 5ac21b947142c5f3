"""
Route tests for /auth.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import STRONG_PASSWORD, auth_headers_for, make_settings, register_user
from dependencies.services import get_user_service
from main import app
from routers.auth_router import FORGOT_PASSWORD_MESSAGE
from utils.auth_utils import create_access_token
from utils.google_oauth import GoogleIdentity


def login(client, email="creator@example.com", password=STRONG_PASSWORD):
    return client.post("/auth/login", json={"email": email, "password": password})


class TestRegister:

    def test_register_returns_token_and_user(self, client):
        response = register_user(client, city="Lisbon", gender="Female", birthday="1995-04-12")

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"
        assert body["token"]

        user = body["user"]
        assert user["email"] == "creator@example.com"
        assert user["firstName"] == "Jane"
        assert user["lastName"] == "Doe"
        assert user["city"] == "Lisbon"
        assert user["birthday"] == "1995-04-12"
        assert user["accountType"] is None
        assert user["isVerified"] is True
        assert "password" not in user

    def test_no_mail_when_verification_disabled(self, client, mailer):
        register_user(client)
        assert mailer.sent == []

    def test_duplicate_email(self, client):
        register_user(client)
        response = register_user(client)

        assert response.status_code == 400
        assert response.json() == {
            "error": "Registration failed",
            "message": "User with this email already exists",
        }

    @pytest.mark.parametrize(
        "overrides, field, message",
        [
            ({"email": "not-an-email"}, "email", None),
            ({"password": "short1A"}, "password", "Password must be at least 8 characters long"),
            ({"password": "lowercase123"}, "password", "Password must contain at least one uppercase letter"),
            ({"password": "NoDigitsHere"}, "password", "Password must contain at least one number"),
            ({"firstname": " J "}, "firstname", "Name must be at least 2 characters"),
            ({"city": "X"}, "city", "City must be at least 2 characters"),
            ({"gender": "Robot"}, "gender", None),
            ({"birthday": "12/04/1995"}, "birthday", None),
        ],
    )
    def test_validation_errors(self, client, overrides, field, message):
        response = register_user(client, **overrides)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        details = {d["field"]: d["message"] for d in body["details"]}
        assert field in details
        if message:
            assert details[field] == message

    def test_missing_fields(self, client):
        response = client.post("/auth/register", json={"email": "a@example.com"})
        assert response.status_code == 400
        fields = {d["field"] for d in response.json()["details"]}
        assert {"password", "firstname", "lastname"} <= fields


class TestLogin:

    def test_login(self, client):
        register_user(client)
        response = login(client)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["token"]
        assert body["user"]["email"] == "creator@example.com"

    def test_wrong_password_and_unknown_email_are_indistinguishable(self, client):
        register_user(client)
        wrong_password = login(client, password="Wrong12345")
        unknown_email = login(client, email="nobody@example.com")

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json() == {
            "error": "Authentication failed",
            "message": "Invalid email or password",
        }

    def test_unexpected_failure_is_a_generic_500(self, client):
        class BrokenService:
            async def authenticate_user(self, email, password):
                raise RuntimeError("database exploded")

        app.dependency_overrides[get_user_service] = lambda: BrokenService()
        response = login(client)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Authentication failed",
            "message": "Internal server error during login",
        }
        assert "exploded" not in response.text


class TestSession:

    def test_me(self, client):
        headers = auth_headers_for(client)
        response = client.get("/auth/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "creator@example.com"

    def test_me_requires_token(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401
        assert response.json()["error"] == "Authentication required"

    def test_me_rejects_garbage_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 401

    def test_token_from_another_secret_rejected(self, client):
        register_user(client)

        forged = create_access_token(
            {"sub": "1", "email": "creator@example.com"}, make_settings(JWT_SECRET="attacker")
        )
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {forged}"})
        assert response.status_code == 401


class TestForgotAndResetPassword:

    def test_known_and_unknown_emails_get_the_same_answer(self, client, mailer):
        register_user(client)
        known = client.post("/auth/forgot-password", json={"email": "creator@example.com"})
        unknown = client.post("/auth/forgot-password", json={"email": "nobody@example.com"})

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json() == {"message": FORGOT_PASSWORD_MESSAGE}

        assert len(mailer.sent) == 1
        kind, email, token = mailer.sent[0]
        assert (kind, email) == ("reset", "creator@example.com")
        assert len(token) == 64

    def test_mailer_failure_still_returns_200(self, client, mailer):
        register_user(client)
        mailer.fail = True

        response = client.post("/auth/forgot-password", json={"email": "creator@example.com"})
        assert response.status_code == 200
        assert response.json() == {"message": FORGOT_PASSWORD_MESSAGE}

    def test_reset_flow(self, client, mailer):
        register_user(client)
        client.post("/auth/forgot-password", json={"email": "creator@example.com"})
        token = mailer.sent[-1][2]

        response = client.post(f"/auth/reset-password/{token}", json={"password": "BrandNew123"})
        assert response.status_code == 200
        assert response.json() == {"message": "Password has been reset successfully"}

        assert login(client, password="BrandNew123").status_code == 200
        assert login(client).status_code == 401

        replay = client.post(f"/auth/reset-password/{token}", json={"password": "Another123"})
        assert replay.status_code == 400
        assert replay.json()["error"] == "Password reset failed"

    def test_only_latest_reset_token_works(self, client, mailer):
        register_user(client)
        client.post("/auth/forgot-password", json={"email": "creator@example.com"})
        client.post("/auth/forgot-password", json={"email": "creator@example.com"})
        first, second = mailer.sent[0][2], mailer.sent[1][2]

        assert client.post(f"/auth/reset-password/{first}", json={"password": "BrandNew123"}).status_code == 400
        assert client.post(f"/auth/reset-password/{second}", json={"password": "BrandNew123"}).status_code == 200

    def test_reset_with_unknown_token(self, client):
        response = client.post("/auth/reset-password/deadbeef", json={"password": "BrandNew123"})
        assert response.status_code == 400
        assert response.json() == {"error": "Password reset failed", "message": "Invalid or expired reset token"}

    def test_reset_requires_strong_password(self, client, mailer):
        register_user(client)
        client.post("/auth/forgot-password", json={"email": "creator@example.com"})
        token = mailer.sent[-1][2]

        response = client.post(f"/auth/reset-password/{token}", json={"password": "weak"})
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"


class TestChangePassword:

    def test_change_password(self, client):
        headers = auth_headers_for(client)
        response = client.post(
            "/auth/change-password",
            json={"oldPassword": STRONG_PASSWORD, "newPassword": "Changed123", "confirmPassword": "Changed123"},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Password changed successfully"}
        assert login(client, password="Changed123").status_code == 200

    def test_requires_authentication(self, client):
        response = client.post(
            "/auth/change-password", json={"oldPassword": STRONG_PASSWORD, "newPassword": "Changed123"}
        )
        assert response.status_code == 401

    def test_wrong_current_password(self, client):
        headers = auth_headers_for(client)
        response = client.post(
            "/auth/change-password",
            json={"oldPassword": "Wrong12345", "newPassword": "Changed123"},
            headers=headers,
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Password change failed", "message": "Current password is incorrect"}

    def test_same_password(self, client):
        headers = auth_headers_for(client)
        response = client.post(
            "/auth/change-password",
            json={"oldPassword": STRONG_PASSWORD, "newPassword": STRONG_PASSWORD},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "New password must be different from current password"

    def test_confirmation_mismatch(self, client):
        headers = auth_headers_for(client)
        response = client.post(
            "/auth/change-password",
            json={"oldPassword": STRONG_PASSWORD, "newPassword": "Changed123", "confirmPassword": "Changed124"},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["details"][0]["message"] == "Passwords do not match"


class TestAccountType:

    def test_update_account_type(self, client):
        headers = auth_headers_for(client)
        response = client.patch("/auth/account-type", json={"accountType": "Business"}, headers=headers)

        assert response.status_code == 200
        assert response.json()["user"]["accountType"] == "Business"
        assert client.get("/auth/me", headers=headers).json()["user"]["accountType"] == "Business"

    @pytest.mark.parametrize("body", [{}, {"accountType": "Admin"}, {"accountType": "business"}])
    def test_invalid_account_type(self, client, body):
        headers = auth_headers_for(client)
        response = client.patch("/auth/account-type", json=body, headers=headers)

        assert response.status_code == 400
        assert response.json() == {
            "error": "Invalid account type",
            "message": "Account type must be one of: Individual, Business, Creator, None",
        }

    def test_requires_authentication(self, client):
        response = client.patch("/auth/account-type", json={"accountType": "Business"})
        assert response.status_code == 401


class TestGoogle:

    def test_authorization_url(self, client):
        response = client.get("/auth/google/url")
        assert response.status_code == 200
        assert response.json()["url"].startswith("https://accounts.google.com/")

    def test_google_login_creates_account(self, client, google):
        google.identities["good-token"] = GoogleIdentity(
            email="g@example.com", given_name="Gina", family_name="Green"
        )
        response = client.post("/auth/google/login", json={"idToken": "good-token"})

        assert response.status_code == 200
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "g@example.com"
        assert body["user"]["firstName"] == "Gina"
        assert body["user"]["isVerified"] is True

        again = client.post("/auth/google/login", json={"idToken": "good-token"})
        assert again.json()["user"]["id"] == body["user"]["id"]

    def test_google_login_with_existing_email(self, client, google):
        created = register_user(client, email="g@example.com").json()["user"]
        google.identities["good-token"] = GoogleIdentity(email="g@example.com")

        response = client.post("/auth/google/login", json={"idToken": "good-token"})
        assert response.json()["user"]["id"] == created["id"]

    def test_missing_token(self, client):
        response = client.post("/auth/google/login", json={})
        assert response.status_code == 400
        assert response.json()["message"] == "Google ID token is required"

    def test_rejected_token(self, client):
        response = client.post("/auth/google/login", json={"idToken": "forged"})
        assert response.status_code == 400
        assert response.json() == {"error": "Authentication failed", "message": "Invalid Google token"}


class TestVerificationDisabled:

    def test_verify_email_is_a_no_op(self, client):
        response = client.get("/auth/verify-email/anything")
        assert response.status_code == 200
        assert response.json() == {"message": "Email verification is currently disabled."}

    def test_resend_is_a_no_op(self, client, mailer):
        response = client.post("/auth/resend-verification", json={"email": "creator@example.com"})
        assert response.status_code == 200
        assert mailer.sent == []


class TestVerificationEnabled:

    @pytest.fixture
    def settings(self):
        return make_settings(EMAIL_VERIFICATION_ENABLED=True)

    def test_register_sends_verification_mail(self, client, mailer):
        response = register_user(client)

        assert response.status_code == 201
        assert response.json()["user"]["isVerified"] is False
        assert [(kind, email) for kind, email, _ in mailer.sent] == [("verification", "creator@example.com")]

    def test_unverified_login_forbidden_until_verified(self, client, mailer):
        register_user(client)
        response = login(client)
        assert response.status_code == 403
        assert response.json()["message"] == "Email not verified. Please verify your email before logging in."

        token = mailer.sent[0][2]
        verified = client.get(f"/auth/verify-email/{token}")
        assert verified.status_code == 200
        assert verified.json()["user"]["isVerified"] is True

        assert login(client).status_code == 200
        assert client.get(f"/auth/verify-email/{token}").status_code == 400

    def test_resend_verification(self, client, mailer):
        register_user(client)
        response = client.post("/auth/resend-verification", json={"email": "creator@example.com"})

        assert response.status_code == 200
        assert len(mailer.sent) == 2
        assert mailer.sent[0][2] != mailer.sent[1][2]

    def test_resend_for_unknown_email(self, client):
        response = client.post("/auth/resend-verification", json={"email": "nobody@example.com"})
        assert response.status_code == 404

    def test_failed_verification_mail_does_not_fail_registration(self, client, mailer):
        mailer.fail = True
        assert register_user(client).status_code == 201


def test_health(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
