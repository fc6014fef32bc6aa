"""Shared test fixture: the FastAPI app wired to a fresh in-memory SQLite database."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.core.security import hash_password
from app.main import app
from app.models import Base, User


class ApiTestCase(unittest.TestCase):
    """Each test gets its own database and a cookie-keeping TestClient."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        # Cleanups run last-in first-out: sessions and clients handed out later close
        # before the schema is dropped and the shared connection is disposed.
        self.addCleanup(self.engine.dispose)
        self.addCleanup(Base.metadata.drop_all, self.engine)
        self.SessionTesting = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

        def override_get_db():
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = self.new_client()

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def new_client(self) -> TestClient:
        """A separate browser: its own cookie jar."""
        client = TestClient(app)
        self.addCleanup(client.close)
        return client

    def db(self) -> Session:
        session = self.SessionTesting()
        self.addCleanup(session.close)
        return session

    def create_user(
        self,
        username: str,
        email: str,
        password: str,
        role: str = "user",
    ) -> int:
        """Insert a user directly (registration cannot create admins)."""
        with self.SessionTesting() as session:
            user = User(
                username=username,
                email=email,
                password_hash=hash_password(password),
                role=role,
            )
            session.add(user)
            session.commit()
            return user.id

    def login(self, client: TestClient, username: str, password: str) -> dict:
        resp = client.post("/api/login", json={"username": username, "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def login_admin(self, client: TestClient | None = None) -> int:
        admin_id = self.create_user("root", "root@example.com", "rootpass", role="admin")
        self.login(client or self.client, "root", "rootpass")
        return admin_id
