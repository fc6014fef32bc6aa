"""Account service: registration, login, logout and session introspection."""

import logging
from datetime import timedelta
from functools import lru_cache

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ErrorKind, Result
from app.core.security import PASSWORD_MIN_LEN, hash_password, verify_password
from app.models import User, UserSession
from app.models.user import ROLE_USER
from app.schemas.auth import AuthStatusResponse, SessionContext, UserPublic
from app.services.sessions import create_session, destroy_session

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("dummy-password-for-timing")


def register(db: Session, username: str | None, email: str | None, password: str | None) -> Result[UserPublic]:
    """
    Create a user with role "user". Any caller-supplied role is never consulted.

    Validation runs before hashing. Duplicate username or email -> CONFLICT.
    """
    if not username or not email or not password:
        return Result.failure(ErrorKind.VALIDATION, "All fields are required")
    if len(password) < PASSWORD_MIN_LEN:
        return Result.failure(
            ErrorKind.VALIDATION,
            f"Password must be at least {PASSWORD_MIN_LEN} characters",
        )

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=ROLE_USER,
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        logger.warning("Registration rejected: duplicate username or email", exc_info=True)
        return Result.failure(ErrorKind.CONFLICT, "Username or email already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error during registration")
        return Result.failure(ErrorKind.INTERNAL, "Registration failed")

    logger.info("User registered", extra={"user_id": user.id})
    return Result.success(UserPublic.model_validate(user))


def login(
    db: Session,
    username: str | None,
    password: str | None,
    ttl: timedelta,
    *,
    previous_token: str | None = None,
) -> Result[tuple[UserPublic, str]]:
    """
    Verify credentials and open a new session; returns (identity, session token).

    Unknown username and wrong password produce the same UNAUTHENTICATED error.
    A session already attached to the request (previous_token) is replaced.
    """
    if not username or not password:
        return Result.failure(ErrorKind.VALIDATION, "Username and password are required")

    try:
        user = db.query(User).filter(User.username == username).first()
        if user is None:
            # Spend the same hashing time as a real check so timing does not reveal the username.
            verify_password(password, _dummy_hash())
            return Result.failure(ErrorKind.UNAUTHENTICATED, INVALID_CREDENTIALS)
        if not verify_password(password, user.password_hash):
            return Result.failure(ErrorKind.UNAUTHENTICATED, INVALID_CREDENTIALS)

        if previous_token:
            db.query(UserSession).filter(UserSession.token == previous_token).delete(
                synchronize_session=False
            )
        session_row = create_session(db, user, ttl)
        token = session_row.token
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error during login")
        return Result.failure(ErrorKind.INTERNAL, "Login failed")

    logger.info("User logged in", extra={"user_id": user.id})
    return Result.success((UserPublic.model_validate(user), token))


def logout(db: Session, token: str | None) -> Result[None]:
    """End the current session. Without a session there is nothing to destroy."""
    if not token:
        return Result.success()
    return destroy_session(db, token)


def auth_status(ctx: SessionContext | None) -> AuthStatusResponse:
    """Describe the current session; never fails."""
    if ctx is None:
        return AuthStatusResponse(authenticated=False)
    return AuthStatusResponse(
        authenticated=True,
        user_id=ctx.user_id,
        username=ctx.username,
        role=ctx.role,
    )
