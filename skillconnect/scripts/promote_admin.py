"""
Give an existing account the admin role.
Usage: python -m skillconnect.scripts.promote_admin user@example.com
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from skillconnect.database import SessionLocal, ensure_tables_exist
from skillconnect.repos.user_repo import get_by_email, update


def main(argv: list[str] | None = None):
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Usage: python -m skillconnect.scripts.promote_admin <email>")
        sys.exit(1)
    email = args[0].strip()
    ensure_tables_exist()
    db = SessionLocal()
    try:
        user = get_by_email(db, email)
        if not user:
            print(f"User not found: {email}")
            sys.exit(1)
        update(db, user.id, role="admin", status="active")
        print(f"Promoted {email} to admin.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
