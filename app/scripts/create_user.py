"""
Create a user (e.g. the first admin, which cannot self-register). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Site Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from dotenv import load_dotenv

from app.core.config import get_settings
from app.core.database import session_scope
from app.core.logging_config import configure_logging
from app.core.security import EMAIL_MAX_LEN, NAME_MAX_LEN, PASSWORD_MAX_LEN, hash_password
from app.models.user import ROLE_CONSUMER, ROLES, User
from app.services.auth import normalize_email

logger = logging.getLogger(__name__)

PASSWORD_MIN_LEN = 8


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a ProAuthenticate user from the command line.")
    parser.add_argument("name", help=f"Display name (1-{NAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=ROLE_CONSUMER, choices=ROLES)
    parser.add_argument("--farm-name", default=None, help="Farm name (farmers)")
    parser.add_argument("--location", default=None)
    parser.add_argument("--phone", default=None)
    args = parser.parse_args(argv)

    name = args.name.strip()
    if not name or len(name) > NAME_MAX_LEN:
        print("Invalid name length.", file=sys.stderr)
        return 1
    email = normalize_email(args.email)
    if "@" not in email or len(email) > EMAIL_MAX_LEN:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    try:
        with session_scope() as db:
            if db.query(User).filter(User.email == email).first():
                print(f"User '{email}' already exists.", file=sys.stderr)
                return 1
            db.add(
                User(
                    name=name,
                    email=email,
                    password_hash=hash_password(args.password, rounds=settings.BCRYPT_ROUNDS),
                    role=args.role,
                    phone=args.phone,
                    location=args.location,
                    farm_name=args.farm_name,
                )
            )
    except Exception as e:
        logger.exception("Creating user failed: %s", e)
        return 1
    print(f"Created user '{email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    load_dotenv()
    sys.exit(main())
