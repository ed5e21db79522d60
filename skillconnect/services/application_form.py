from skillconnect.models.user import User

# Profile fields that make an application noticeably weaker when empty
IMPORTANT_FIELDS = {
    "phone": "Phone number",
    "bio": "Professional bio",
    "experience": "Work experience",
    "skills": "Skills",
    "resume_url": "CV / Resume",
}


def experience_summary(user: User) -> str:
    parts = []
    if user.bio:
        parts.append(user.bio.strip())
    if user.experience:
        parts.append(user.experience.strip())
    if user.education:
        parts.append(f"Education:\n{user.education.strip()}")
    if user.skills:
        parts.append(f"Skills: {', '.join(user.skills)}")
    return "\n\n".join(p for p in parts if p)


def missing_fields(user: User) -> list[str]:
    return [label for field, label in IMPORTANT_FIELDS.items() if not getattr(user, field, None)]


def build_prefill(user: User) -> dict:
    """Application form defaults taken from the seeker's profile."""
    return {
        "applicant_name": f"{user.first_name or ''} {user.last_name or ''}".strip(),
        "applicant_email": user.email or "",
        "applicant_phone": user.phone or "",
        "experience_summary": experience_summary(user),
        "portfolio_url": user.portfolio_url or "",
        "linkedin_url": user.linkedin_url or "",
        "additional_info": f"Location: {user.location}" if user.location else "",
        "cv_url": user.resume_url or "",
        "missing_fields": missing_fields(user),
    }
