"""
JobBoard Database Seeder

Creates demo accounts for local development:
- An employer (Acme Logistics) with organization details
- A verified job seeker
"""

from jobboard.core.errors import ConflictError
from jobboard.db.base import Base
from jobboard.db.session import SessionLocal, engine
from jobboard.services import AccountService, AccountStore, SqlAccountStore

EMPLOYER_EMAIL = "hiring@acme.example.com"
JOB_SEEKER_EMAIL = "ann.lee@example.com"


def seed_accounts(store: AccountStore) -> bool:
    """
    Seed the demo accounts into ``store``.

    Returns False if the store was already seeded.
    """
    if store.get_by_email(EMPLOYER_EMAIL) is not None:
        print("Database already seeded. Skipping...")
        return False

    print("Seeding database...")
    service = AccountService(store)

    try:
        # 1. Employer with organization details
        employer = service.register({
            "name": "Sarah Chen",
            "email": EMPLOYER_EMAIL,
            "password": "employer123",
            "role": "employer",
            "organization_name": "Acme Logistics",
            "industry_type": "Transportation",
            "total_employee": 250,
            "description": "Regional freight and warehousing.",
            "city": "Springfield",
            "province": "Central",
            "postal_code": "40100",
        })

        # 2. Job seeker, verified so login works with REQUIRE_VERIFIED_EMAIL on
        job_seeker = service.register({
            "name": "Ann Lee",
            "email": JOB_SEEKER_EMAIL,
            "password": "jobseeker123",
            "role": "jobSeeker",
        })
        service.verify_email(job_seeker.verify_token)
    except ConflictError:
        print("Demo accounts partially present. Skipping...")
        return False

    print("\n" + "=" * 50)
    print("DATABASE SEEDED SUCCESSFULLY!")
    print("=" * 50)
    print("\nTest Accounts:")
    print(f"  Employer:   {EMPLOYER_EMAIL} / employer123 (id {employer.id})")
    print(f"  Job seeker: {JOB_SEEKER_EMAIL} / jobseeker123 (id {job_seeker.id})")
    print("=" * 50)
    return True


def seed_database():
    """Create tables and seed the configured database."""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_accounts(SqlAccountStore(db))
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
