from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.orm import Session

from skillconnect.models.user import User
from skillconnect.core.security import hash_password, generate_id

SEEKER_DEFAULTS = {
    "skills": [],
    "experience": "",
    "education": "",
    "location": "",
    "bio": "",
}
EMPLOYER_DEFAULTS = {
    "company_name": "",
    "company_size": "",
    "industry": "",
    "website": "",
    "company_description": "",
}

# Columns a user may change on their own profile (email/role/status go through dedicated paths).
PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "phone",
    "skills",
    "experience",
    "education",
    "location",
    "bio",
    "portfolio_url",
    "linkedin_url",
    "resume_url",
    "company_name",
    "company_size",
    "industry",
    "website",
    "company_description",
)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(
    db: Session,
    email: str,
    password: str,
    *,
    first_name: str = "",
    last_name: str = "",
    phone: str | None = None,
    role: str = "seeker",
) -> User:
    defaults = SEEKER_DEFAULTS if role == "seeker" else EMPLOYER_DEFAULTS if role == "employer" else {}
    user = User(
        id=generate_id(),
        email=normalize_email(email),
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        role=role,
        status="active",
        last_login=datetime.now(timezone.utc),
        **defaults,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_profile(db: Session, user_id: str, changes: dict) -> User | None:
    """Apply allowed profile fields; unknown keys and None values are ignored."""
    user = get_by_id(db, user_id)
    if not user:
        return None
    for field, value in changes.items():
        if field in PROFILE_FIELDS and value is not None:
            setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def update(
    db: Session,
    user_id: str,
    *,
    email: str | None = None,
    password_hash: str | None = None,
    role: str | None = None,
    status: str | None = None,
) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    if email is not None:
        user.email = normalize_email(email)
    if password_hash is not None:
        user.password_hash = password_hash
    if role is not None:
        user.role = role
    if status is not None:
        user.status = status
    db.commit()
    db.refresh(user)
    return user


def touch_last_login(db: Session, user_id: str, when: datetime | None = None) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    user.last_login = when or datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user


def _filtered(
    db: Session,
    search: str | None = None,
    role: str | None = None,
    status: str | None = None,
):
    q = db.query(User).order_by(User.created_at.desc())
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(
            or_(
                User.email.ilike(term),
                User.first_name.ilike(term),
                User.last_name.ilike(term),
            )
        )
    if role and role != "all":
        q = q.filter(User.role == role)
    if status and status != "all":
        q = q.filter(User.status == status)
    return q


def get_all_users(
    db: Session,
    search: str | None = None,
    role: str | None = None,
    status: str | None = None,
) -> list[User]:
    """All users matching the filters, newest first (used by CSV export)."""
    return _filtered(db, search=search, role=role, status=status).all()


def get_all_users_paginated(
    db: Session,
    search: str | None = None,
    role: str | None = None,
    status: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[User], int]:
    """List users with optional name/email search, role and status filters. Returns (items, total)."""
    q = _filtered(db, search=search, role=role, status=status)
    total = q.count()
    items = q.offset(offset).limit(limit).all()
    return items, total
