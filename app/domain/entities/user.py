"""User field rules shared by account creation, profile updates and password changes.

Users are persisted as rows and read as UserResult DTOs; this module holds
only the validation and normalization every user write path applies.
"""

import re
from collections.abc import Mapping
from typing import Any

from app.domain.enums import UserRole
from app.domain.exceptions import ValidationException

EMAIL_MIN_LENGTH = 5
EMAIL_MAX_LENGTH = 100
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 100
PASSWORD_SPECIALS = "@$!%*?&"

# Roles a caller may pick for themselves when signing up without an admin token.
SELF_SERVICE_ROLES = frozenset({UserRole.DEVELOPER, UserRole.VIEWER})

USER_PROFILE_FIELDS = frozenset(
    {"email", "first_name", "last_name", "role", "is_active", "password"}
)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_NAME_RE = re.compile(r"^[A-Za-zÀ-ÿ\s'-]+$")


def normalize_email(value: Any) -> str:
    """Return the trimmed, lower-cased email or raise ValidationException."""
    if not isinstance(value, str):
        raise ValidationException("Email must be a string", field="email")
    email = value.strip().lower()
    if not EMAIL_MIN_LENGTH <= len(email) <= EMAIL_MAX_LENGTH:
        raise ValidationException(
            f"Email must be between {EMAIL_MIN_LENGTH} and {EMAIL_MAX_LENGTH} characters",
            field="email",
        )
    if not _EMAIL_RE.match(email):
        raise ValidationException("Invalid email address", field="email")
    return email


def validate_name(value: Any, field: str) -> str:
    """Return the trimmed first or last name or raise ValidationException."""
    label = field.replace("_", " ").capitalize()
    if not isinstance(value, str):
        raise ValidationException(f"{label} must be a string", field=field)
    name = value.strip()
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ValidationException(
            f"{label} must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
            field=field,
        )
    if not _NAME_RE.match(name):
        raise ValidationException(
            f"{label} can only contain letters, spaces, hyphens and apostrophes",
            field=field,
        )
    return name


def validate_password(value: Any, field: str = "password") -> str:
    """Check password strength; returns the password unchanged.

    Requires 8-100 characters with a lowercase letter, an uppercase letter,
    a digit and one of @$!%*?&.
    """
    if not isinstance(value, str):
        raise ValidationException("Password must be a string", field=field)
    if not PASSWORD_MIN_LENGTH <= len(value) <= PASSWORD_MAX_LENGTH:
        raise ValidationException(
            f"Password must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters",
            field=field,
        )
    if not (
        any(c.islower() for c in value)
        and any(c.isupper() for c in value)
        and any(c.isdigit() for c in value)
        and any(c in PASSWORD_SPECIALS for c in value)
    ):
        raise ValidationException(
            "Password must contain at least one uppercase letter, one lowercase letter, "
            f"one number and one special character ({PASSWORD_SPECIALS})",
            field=field,
        )
    return value


def parse_role(value: Any) -> UserRole:
    """Coerce a role value (enum or string, any case) or raise ValidationException."""
    if isinstance(value, UserRole):
        return value
    if isinstance(value, str) and value.strip().lower() in UserRole.values():
        return UserRole(value.strip().lower())
    raise ValidationException(
        f"Role must be one of: {', '.join(UserRole.values())}", field="role"
    )


def normalize_user_fields(props: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and normalize the user fields present in props.

    Raises:
        ValidationException: Unknown field or a field breaks its rule.
    """
    unknown = sorted(set(props) - USER_PROFILE_FIELDS)
    if unknown:
        raise ValidationException(
            f"Unknown or read-only user field(s): {', '.join(unknown)}", field=unknown[0]
        )
    out: dict[str, Any] = {}
    for name, value in props.items():
        if name == "email":
            out[name] = normalize_email(value)
        elif name in ("first_name", "last_name"):
            out[name] = validate_name(value, name)
        elif name == "role":
            out[name] = parse_role(value)
        elif name == "is_active":
            if not isinstance(value, bool):
                raise ValidationException("is_active must be a boolean", field=name)
            out[name] = value
        elif name == "password":
            out[name] = validate_password(value)
    return out
