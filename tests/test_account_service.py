"""
Tests for the account service, run against both store implementations.
"""

from datetime import timedelta

import jwt
import pytest

from jobboard.core.config import settings
from jobboard.core.errors import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from jobboard.core.security import create_access_token, verify_password
from jobboard.models.account import utcnow


class TestRegister:
    def test_register_job_seeker(self, service, job_seeker_payload):
        account = service.register(job_seeker_payload)

        assert account.id is not None
        assert account.name == "Ann"
        assert account.email == "a@x.com"
        assert account.role == "jobSeeker"
        assert account.is_verified is False

    def test_password_is_hashed(self, service, job_seeker_payload):
        account = service.register(job_seeker_payload)

        assert account.hashed_password != "secret1"
        assert verify_password("secret1", account.hashed_password)

    def test_verification_token_expires_in_an_hour(self, service, job_seeker_payload):
        account = service.register(job_seeker_payload)

        assert account.verify_token
        remaining = account.verify_token_expiry - utcnow()
        assert timedelta(minutes=59) < remaining <= timedelta(minutes=60)

    def test_duplicate_email_conflicts(self, service, job_seeker_payload):
        service.register(job_seeker_payload)
        with pytest.raises(ConflictError, match="Email already exists"):
            service.register(dict(job_seeker_payload, name="Other Ann"))

    def test_email_uniqueness_is_case_sensitive(self, service, job_seeker_payload):
        service.register(job_seeker_payload)
        other = service.register(dict(job_seeker_payload, email="A@x.com"))
        assert other.email == "A@x.com"

    @pytest.mark.parametrize("missing", ["name", "email", "password", "role"])
    def test_missing_required_field(self, service, job_seeker_payload, missing):
        payload = dict(job_seeker_payload)
        del payload[missing]
        with pytest.raises(ValidationError, match="Missing required fields"):
            service.register(payload)

    def test_empty_field_counts_as_missing(self, service, job_seeker_payload):
        with pytest.raises(ValidationError):
            service.register(dict(job_seeker_payload, name=""))

    def test_invalid_role(self, service, job_seeker_payload):
        with pytest.raises(ValidationError, match="Invalid role") as excinfo:
            service.register(dict(job_seeker_payload, role="admin"))
        assert isinstance(excinfo.value.__cause__, ValueError)

    @pytest.mark.parametrize("missing", ["organization_name", "industry_type"])
    def test_employer_requires_organization_details(self, service, employer_payload, missing):
        payload = dict(employer_payload)
        del payload[missing]
        with pytest.raises(ValidationError, match="Missing organization details"):
            service.register(payload)

    def test_register_employer_keeps_organization_fields(self, service, employer_payload):
        account = service.register(employer_payload)

        assert account.role == "employer"
        assert account.organization_name == "Acme Logistics"
        assert account.industry_type == "Transportation"
        assert account.total_employee == 250
        assert account.city == "Springfield"

    def test_job_seeker_drops_employer_fields(self, service, job_seeker_payload):
        account = service.register(
            dict(job_seeker_payload, organization_name="Acme", industry_type="Retail")
        )
        assert account.organization_name is None
        assert account.industry_type is None


class TestLogin:
    def test_login_returns_verifiable_token(self, service, job_seeker_payload):
        registered = service.register(job_seeker_payload)

        token, account = service.login("a@x.com", "secret1")

        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        assert payload["sub"] == str(registered.id)
        assert account.id == registered.id

    def test_unknown_email(self, service):
        with pytest.raises(NotFoundError, match="User Not Found"):
            service.login("nobody@x.com", "secret1")

    def test_wrong_password(self, service, job_seeker_payload):
        service.register(job_seeker_payload)
        with pytest.raises(AuthenticationError, match="Invalid Credentials"):
            service.login("a@x.com", "wrong-password")

    def test_unverified_login_blocked_when_required(self, service, job_seeker_payload, monkeypatch):
        monkeypatch.setattr(settings, "REQUIRE_VERIFIED_EMAIL", True)
        account = service.register(job_seeker_payload)

        with pytest.raises(AuthenticationError, match="Email not verified"):
            service.login("a@x.com", "secret1")

        service.verify_email(account.verify_token)
        token, _ = service.login("a@x.com", "secret1")
        assert token


class TestLogout:
    def test_valid_token(self, service):
        service.logout(create_access_token({"sub": "1"}))

    def test_missing_token(self, service):
        with pytest.raises(AuthenticationError, match="No token"):
            service.logout(None)

    def test_expired_token(self, service):
        token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-1))
        with pytest.raises(AuthenticationError, match="Token verification failed"):
            service.logout(token)

    def test_token_still_valid_after_logout(self, service):
        token = create_access_token({"sub": "1"})
        service.logout(token)
        service.logout(token)


class TestProfile:
    def test_get_account(self, service, job_seeker_payload):
        registered = service.register(job_seeker_payload)
        assert service.get_account(registered.id).email == "a@x.com"

    def test_get_missing_account(self, service):
        with pytest.raises(NotFoundError):
            service.get_account(999)
        with pytest.raises(NotFoundError):
            service.get_account(None)

    def test_empty_update_changes_nothing(self, service, job_seeker_payload):
        registered = service.register(job_seeker_payload)
        before = (registered.name, registered.email, registered.hashed_password)

        account = service.update_account(registered.id, {})

        assert (account.name, account.email, account.hashed_password) == before

    def test_password_only_update(self, service, job_seeker_payload):
        registered = service.register(job_seeker_payload)
        old_hash = registered.hashed_password

        account = service.update_account(registered.id, {"password": "newpass123"})

        assert account.hashed_password != old_hash
        assert account.hashed_password != "newpass123"
        assert account.name == "Ann"
        assert account.email == "a@x.com"
        service.login("a@x.com", "newpass123")
        with pytest.raises(AuthenticationError):
            service.login("a@x.com", "secret1")

    def test_update_ignores_empty_values(self, service, job_seeker_payload):
        registered = service.register(job_seeker_payload)
        account = service.update_account(registered.id, {"name": "", "email": None})
        assert account.name == "Ann"
        assert account.email == "a@x.com"

    def test_update_name_and_email(self, service, job_seeker_payload):
        registered = service.register(job_seeker_payload)

        service.update_account(registered.id, {"name": "Ann B", "email": "ann.b@x.com"})

        account = service.get_account(registered.id)
        assert account.name == "Ann B"
        assert account.email == "ann.b@x.com"

    def test_update_to_taken_email_conflicts(self, service, job_seeker_payload):
        service.register(dict(job_seeker_payload, email="taken@x.com"))
        registered = service.register(job_seeker_payload)

        with pytest.raises(ConflictError):
            service.update_account(registered.id, {"email": "taken@x.com"})

    def test_role_cannot_be_changed(self, service, job_seeker_payload):
        registered = service.register(job_seeker_payload)
        account = service.update_account(registered.id, {"role": "employer"})
        assert account.role == "jobSeeker"

    def test_employer_profile_fields_update(self, service, employer_payload):
        registered = service.register(employer_payload)
        account = service.update_account(registered.id, {"total_employee": 300, "city": "Shelbyville"})
        assert account.total_employee == 300
        assert account.city == "Shelbyville"

    def test_update_without_subject(self, service):
        with pytest.raises(BadRequestError, match="User ID is required"):
            service.update_account(None, {"name": "x"})

    def test_update_missing_account(self, service):
        with pytest.raises(NotFoundError, match="User not found"):
            service.update_account(999, {"name": "x"})

    def test_delete_account(self, service, job_seeker_payload):
        account_id = service.register(job_seeker_payload).id

        service.delete_account(account_id)

        with pytest.raises(NotFoundError):
            service.get_account(account_id)

    def test_delete_missing_account(self, service):
        with pytest.raises(NotFoundError, match="User not found"):
            service.delete_account(999)

    def test_delete_without_subject(self, service):
        with pytest.raises(BadRequestError):
            service.delete_account(None)


class TestVerifyEmail:
    def test_verify_email(self, service, job_seeker_payload):
        registered = service.register(job_seeker_payload)

        account = service.verify_email(registered.verify_token)

        assert account.is_verified is True
        assert account.verify_token is None
        assert account.verify_token_expiry is None

    def test_token_is_single_use(self, service, job_seeker_payload):
        registered = service.register(job_seeker_payload)
        token = registered.verify_token
        service.verify_email(token)

        with pytest.raises(ValidationError, match="Invalid verification token"):
            service.verify_email(token)

    def test_unknown_token(self, service):
        with pytest.raises(ValidationError, match="Invalid verification token"):
            service.verify_email("unknown")
        with pytest.raises(ValidationError):
            service.verify_email(None)

    def test_expired_token(self, service, store, job_seeker_payload):
        registered = service.register(job_seeker_payload)
        registered.verify_token_expiry = utcnow() - timedelta(minutes=1)
        store.save(registered)

        with pytest.raises(ValidationError, match="Verification token expired"):
            service.verify_email(registered.verify_token)
