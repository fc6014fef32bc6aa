"""
Create a user directly in the database (the only way to create an admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import SessionLocal
from app.core.security import PASSWORD_MIN_LEN, hash_password
from app.models.user import ROLES, ROLE_USER, User

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Sanctuary user with an explicit role.")
    parser.add_argument("username", help="Username (1-255 chars, stored as given)")
    parser.add_argument("email", help="Email address (1-255 chars)")
    parser.add_argument("password", help=f"Password (at least {PASSWORD_MIN_LEN} chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=list(ROLES))
    args = parser.parse_args(argv)

    if not args.username or len(args.username) > 255:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not args.email or len(args.email) > 255:
        print("Invalid email length.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN:
        print(f"Password must be at least {PASSWORD_MIN_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = (
            db.query(User)
            .filter(or_(User.username == args.username, User.email == args.email))
            .first()
        )
        if existing:
            print("A user with that username or email already exists.", file=sys.stderr)
            return 1
        user = User(
            username=args.username,
            email=args.email,
            password_hash=hash_password(args.password),
            role=args.role,
        )
        db.add(user)
        db.commit()
        print(f"Created user '{args.username}' with role '{args.role}'.")
        return 0
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create user: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    sys.exit(main())
