"""Create a user (Postgres only) and print an access token for it.

Usage:
    python -m scripts.create_user <email> <first_name> <last_name> [role]
role is one of admin, manager, developer (default), viewer. The password is
read from the TASKBOARD_USER_PASSWORD environment variable, or prompted for.
Requires DATABASE_URL and SECRET_KEY (read from .env when present) and a
migrated schema (alembic upgrade head).
"""

import asyncio
import getpass
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from app.core.config import get_settings
from app.domain.entities.user import normalize_user_fields
from app.domain.exceptions import DuplicateEmailException, ValidationException
from app.infrastructure.persistence import database
from app.infrastructure.persistence.repositories import UserRepository
from app.infrastructure.security.jwt import create_access_token

USAGE = "Usage: python -m scripts.create_user <email> <first_name> <last_name> [role]"


async def main() -> None:
    """Create the user in one transaction, then print its id and a bearer token."""
    if len(sys.argv) < 4:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    email, first_name, last_name = sys.argv[1:4]
    password = os.environ.get("TASKBOARD_USER_PASSWORD") or getpass.getpass("Password: ")
    try:
        props = normalize_user_fields(
            {
                "email": email,
                "first_name": first_name,
                "last_name": last_name,
                "role": sys.argv[4] if len(sys.argv) > 4 else "developer",
                "password": password,
            }
        )
    except ValidationException as exc:
        print(exc.message, file=sys.stderr)
        sys.exit(1)

    load_dotenv(Path(__file__).resolve().parent.parent / ".env")
    get_settings()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL not configured", file=sys.stderr)
        sys.exit(1)

    try:
        async with database.AsyncSessionLocal() as session:
            async with session.begin():
                user = await UserRepository(session).create_user(
                    props["email"],
                    props["first_name"],
                    props["last_name"],
                    props["role"],
                    password=props["password"],
                )
    except DuplicateEmailException:
        print(f"Email already registered: {props['email']}", file=sys.stderr)
        sys.exit(1)
    finally:
        await database.dispose_engine()

    print(f"Created user: {user.id} ({user.email}, {user.role.value})")
    print(f"Access token: {create_access_token(user.id, user.role)}")


if __name__ == "__main__":
    asyncio.run(main())
