import re

MIN_PASSWORD_LENGTH = 8
STRONG_PASSWORD_LENGTH = 12

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"\d")
_SPECIAL = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")
_WHITESPACE = re.compile(r"\s")

# Kenyan mobile numbers: +2547XXXXXXXX / 07XXXXXXXX (and the 1xx range)
_PHONE = re.compile(r"^(\+254|0)[17]\d{8}$")
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def password_strength(password: str) -> str:
    """Label a password weak / medium / strong / very-strong by how many rules it meets."""
    score = sum(
        (
            len(password) >= MIN_PASSWORD_LENGTH,
            bool(_UPPER.search(password)),
            bool(_LOWER.search(password)),
            bool(_DIGIT.search(password)),
            bool(_SPECIAL.search(password)),
            len(password) >= STRONG_PASSWORD_LENGTH,
        )
    )
    if score <= 2:
        return "weak"
    if score <= 4:
        return "medium"
    if score <= 5:
        return "strong"
    return "very-strong"


def password_requirements(password: str) -> dict[str, bool]:
    return {
        "min_length": len(password) >= MIN_PASSWORD_LENGTH,
        "has_uppercase": bool(_UPPER.search(password)),
        "has_lowercase": bool(_LOWER.search(password)),
        "has_number": bool(_DIGIT.search(password)),
        "has_special_char": bool(_SPECIAL.search(password)),
        "has_no_spaces": not _WHITESPACE.search(password),
    }


def is_valid_password(password: str) -> bool:
    return all(password_requirements(password).values())


def normalize_phone(phone: str) -> str:
    return _WHITESPACE.sub("", phone or "")


def validate_phone(phone: str) -> bool:
    return bool(_PHONE.match(normalize_phone(phone)))


def validate_email(email: str) -> bool:
    return bool(_EMAIL.match(email or ""))
