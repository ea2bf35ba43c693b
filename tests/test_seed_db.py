"""
Tests for the development seeder.
"""

from seed_db import EMPLOYER_EMAIL, JOB_SEEKER_EMAIL, seed_accounts
from jobboard.services import AccountService


def test_seed_accounts(store):
    assert seed_accounts(store) is True

    employer = store.get_by_email(EMPLOYER_EMAIL)
    assert employer.role == "employer"
    assert employer.organization_name == "Acme Logistics"

    job_seeker = store.get_by_email(JOB_SEEKER_EMAIL)
    assert job_seeker.is_verified is True

    token, _ = AccountService(store).login(JOB_SEEKER_EMAIL, "jobseeker123")
    assert token


def test_seed_is_idempotent(store, capsys):
    seed_accounts(store)
    assert seed_accounts(store) is False
    assert "already seeded" in capsys.readouterr().out
