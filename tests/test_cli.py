"""Tests for the command-line entrypoints: session cleanup and create_user."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import session_cleanup
from app.core.security import verify_password
from app.models import Base, User
from app.scripts import create_user


class TestSessionCleanupMain(unittest.TestCase):
    @patch("app.session_cleanup.purge_expired_sessions", return_value=3)
    @patch("app.session_cleanup.SessionLocal")
    def test_success_closes_session(self, mock_session_local: MagicMock, mock_purge: MagicMock) -> None:
        db = mock_session_local.return_value
        self.assertEqual(session_cleanup.main(), 0)
        mock_purge.assert_called_once_with(db)
        db.close.assert_called_once()

    @patch("app.session_cleanup.purge_expired_sessions", side_effect=RuntimeError("db down"))
    @patch("app.session_cleanup.SessionLocal")
    def test_failure_returns_one(self, mock_session_local: MagicMock, _mock_purge: MagicMock) -> None:
        with self.assertLogs("app.session_cleanup", level="ERROR"):
            self.assertEqual(session_cleanup.main(), 1)
        mock_session_local.return_value.close.assert_called_once()


class TestCreateUserMain(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine)
        patcher = patch("app.scripts.create_user.SessionLocal", self.Session)
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self.engine.dispose()

    def test_creates_admin(self) -> None:
        code = create_user.main(["root", "root@example.com", "rootpass", "admin"])
        self.assertEqual(code, 0)
        with self.Session() as db:
            user = db.query(User).filter(User.username == "root").one()
            self.assertEqual(user.role, "admin")
            self.assertEqual(user.email, "root@example.com")
            self.assertTrue(verify_password("rootpass", user.password_hash))

    def test_default_role_is_user(self) -> None:
        self.assertEqual(create_user.main(["alice", "a@x.com", "secret1"]), 0)
        with self.Session() as db:
            self.assertEqual(db.query(User).one().role, "user")

    def test_rejects_short_password(self) -> None:
        self.assertEqual(create_user.main(["alice", "a@x.com", "12345"]), 1)
        with self.Session() as db:
            self.assertEqual(db.query(User).count(), 0)

    def test_rejects_existing_email(self) -> None:
        self.assertEqual(create_user.main(["alice", "a@x.com", "secret1"]), 0)
        self.assertEqual(create_user.main(["bob", "a@x.com", "secret1"]), 1)


if __name__ == "__main__":
    unittest.main()
