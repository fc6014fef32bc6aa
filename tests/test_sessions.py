"""Unit tests for app.services.sessions: fixed expiry, destroy, purge."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.errors import ErrorKind
from app.models import Base, User, UserSession
from app.services.sessions import (
    create_session,
    destroy_session,
    load_session,
    purge_expired_sessions,
    revoke_user_sessions,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)
TTL = timedelta(hours=24)


class SessionStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.db = sessionmaker(bind=self.engine)()
        self.user = User(username="alice", email="a@x.com", password_hash="x", role="user")
        self.db.add(self.user)
        self.db.commit()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def _open(self, now: datetime = NOW) -> str:
        row = create_session(self.db, self.user, TTL, now=now)
        token = row.token
        self.db.commit()
        return token


class TestLoadSession(SessionStoreTestCase):
    def test_snapshot_fields(self) -> None:
        token = self._open()
        ctx = load_session(self.db, token, now=NOW + timedelta(hours=1))
        self.assertIsNotNone(ctx)
        self.assertEqual(ctx.user_id, self.user.id)
        self.assertEqual(ctx.username, "alice")
        self.assertEqual(ctx.role, "user")
        self.assertEqual(ctx.expires_at, NOW + TTL)

    def test_expired_after_fixed_ttl(self) -> None:
        token = self._open()
        self.assertIsNotNone(load_session(self.db, token, now=NOW + TTL - timedelta(seconds=1)))
        self.assertIsNone(load_session(self.db, token, now=NOW + TTL))

    def test_activity_does_not_extend_expiry(self) -> None:
        token = self._open()
        for hours in (1, 10, 23):
            load_session(self.db, token, now=NOW + timedelta(hours=hours))
        self.assertIsNone(load_session(self.db, token, now=NOW + TTL + timedelta(minutes=1)))

    def test_missing_or_unknown_token(self) -> None:
        self.assertIsNone(load_session(self.db, None))
        self.assertIsNone(load_session(self.db, ""))
        self.assertIsNone(load_session(self.db, "no-such-token"))

    def test_store_failure_is_no_session(self) -> None:
        db = MagicMock()
        db.get.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with self.assertLogs("app.services.sessions", level="ERROR"):
            self.assertIsNone(load_session(db, "tok"))
        db.rollback.assert_called_once()


class TestDestroyAndRevoke(SessionStoreTestCase):
    def test_destroy(self) -> None:
        token = self._open()
        result = destroy_session(self.db, token)
        self.assertTrue(result.ok)
        self.assertIsNone(self.db.get(UserSession, token))

    def test_destroy_store_failure_is_internal(self) -> None:
        db = MagicMock()
        db.query.side_effect = OperationalError("DELETE", {}, Exception("connection reset"))
        with self.assertLogs("app.services.sessions", level="ERROR"):
            result = destroy_session(db, "tok")
        self.assertEqual(result.error.kind, ErrorKind.INTERNAL)
        self.assertEqual(result.error.message, "Logout failed")

    def test_revoke_user_sessions(self) -> None:
        self._open()
        self._open()
        self.assertEqual(revoke_user_sessions(self.db, self.user.id), 2)
        self.db.commit()
        self.assertEqual(self.db.query(UserSession).count(), 0)


class TestPurgeExpired(SessionStoreTestCase):
    def test_purges_only_expired(self) -> None:
        self._open(now=NOW - timedelta(hours=30))
        live = self._open(now=NOW - timedelta(hours=1))
        deleted = purge_expired_sessions(self.db, now=NOW)
        self.assertEqual(deleted, 1)
        self.assertEqual([s.token for s in self.db.query(UserSession).all()], [live])

    def test_idempotent(self) -> None:
        self._open(now=NOW - timedelta(hours=30))
        self.assertEqual(purge_expired_sessions(self.db, now=NOW), 1)
        self.assertEqual(purge_expired_sessions(self.db, now=NOW), 0)


if __name__ == "__main__":
    unittest.main()
