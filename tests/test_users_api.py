"""API tests for admin user management and the login-time role snapshot."""

import unittest

from support import ApiTestCase

from app.models import Member, User, UserSession


class TestListUsers(ApiTestCase):
    def test_anonymous_caller_forbidden(self) -> None:
        for resp in (self.client.get("/api/users"), self.client.delete("/api/users/5")):
            self.assertEqual(resp.status_code, 403)
            self.assertEqual(resp.json(), {"error": "Admin access required"})

    def test_non_admin_forbidden(self) -> None:
        self.create_user("alice", "a@x.com", "secret1")
        self.login(self.client, "alice", "secret1")
        resp = self.client.get("/api/users")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"error": "Admin access required"})

    def test_admin_lists_users_newest_first_without_hashes(self) -> None:
        admin_id = self.login_admin()
        alice = self.create_user("alice", "a@x.com", "secret1")
        resp = self.client.get("/api/users")
        self.assertEqual(resp.status_code, 200)
        users = resp.json()
        self.assertEqual([u["id"] for u in users], [alice, admin_id])
        for u in users:
            self.assertEqual(set(u), {"id", "username", "email", "role", "created_at"})
        self.assertEqual(users[1]["role"], "admin")


class TestDeleteUser(ApiTestCase):
    def test_admin_cannot_delete_self(self) -> None:
        admin_id = self.login_admin()
        resp = self.client.delete(f"/api/users/{admin_id}")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Cannot delete your own account"})
        self.assertIsNotNone(self.db().get(User, admin_id))

    def test_admin_deletes_other_user(self) -> None:
        self.login_admin()
        alice = self.create_user("alice", "a@x.com", "secret1")
        resp = self.client.delete(f"/api/users/{alice}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "User alice deleted successfully"})
        self.assertIsNone(self.db().get(User, alice))

    def test_delete_missing_user(self) -> None:
        self.login_admin()
        resp = self.client.delete("/api/users/424242")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "User not found"})

    def test_delete_cascades_story_and_revokes_sessions(self) -> None:
        alice = self.create_user("alice", "a@x.com", "secret1")
        alice_client = self.new_client()
        self.login(alice_client, "alice", "secret1")
        self.assertEqual(
            alice_client.post(
                "/api/members",
                json={"firstName": "A", "lastName": "L", "song": "s", "story": "x"},
            ).status_code,
            201,
        )

        self.login_admin()
        self.assertEqual(self.client.delete(f"/api/users/{alice}").status_code, 200)

        db = self.db()
        self.assertEqual(db.query(Member).filter(Member.user_id == alice).count(), 0)
        self.assertEqual(db.query(UserSession).filter(UserSession.user_id == alice).count(), 0)
        self.assertEqual(alice_client.get("/api/auth/status").json(), {"authenticated": False})

    def test_non_admin_forbidden(self) -> None:
        bob = self.create_user("bob", "b@x.com", "secret1")
        self.create_user("alice", "a@x.com", "secret1")
        self.login(self.client, "alice", "secret1")
        resp = self.client.delete(f"/api/users/{bob}")
        self.assertEqual(resp.status_code, 403)
        self.assertIsNotNone(self.db().get(User, bob))


class TestRoleSnapshot(ApiTestCase):
    """The role cached in the session only changes on the next login."""

    def test_promotion_takes_effect_after_relogin(self) -> None:
        alice = self.create_user("alice", "a@x.com", "secret1")
        self.login(self.client, "alice", "secret1")

        with self.SessionTesting() as session:
            session.get(User, alice).role = "admin"
            session.commit()

        self.assertEqual(self.client.get("/api/users").status_code, 403)
        self.login(self.client, "alice", "secret1")
        self.assertEqual(self.client.get("/api/users").status_code, 200)


if __name__ == "__main__":
    unittest.main()
