import unittest

from harness import ApiTestCase, PASSWORD
from sqlmodel import select

from recipe_planner.api.auth import seed_admin
from recipe_planner.core.config import settings
from recipe_planner.core.security import create_access_token, password_issues
from recipe_planner.models import User


class TestPasswordPolicy(unittest.TestCase):
    def test_strong_password_has_no_issues(self):
        self.assertEqual(password_issues("Secret123"), [])

    def test_weak_passwords(self):
        self.assertIn("Contains a number", password_issues("Secretive"))
        self.assertIn("Contains an uppercase letter", password_issues("secret123"))
        self.assertIn("Contains a lowercase letter", password_issues("SECRET123"))
        self.assertTrue(any(i.startswith("At least") for i in password_issues("Ab1")))


class TestAuthAPI(ApiTestCase):
    def test_signup_logs_in(self):
        resp = self.client.post("/api/v1/auth/signup", json={
            "email": "new@example.com", "displayName": "New Cook", "password": PASSWORD,
        })
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["displayName"], "New Cook")

        me = self.client.get("/api/v1/auth/me")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["email"], "new@example.com")
        self.assertEqual(me.json()["role"], "user")

    def test_signup_duplicate_email(self):
        self.add_user("taken@example.com")
        resp = self.client.post("/api/v1/auth/signup", json={
            "email": "taken@example.com", "displayName": "Again", "password": PASSWORD,
        })
        self.assertEqual(resp.status_code, 409)

    def test_signup_weak_password(self):
        resp = self.client.post("/api/v1/auth/signup", json={
            "email": "weak@example.com", "displayName": "Weak", "password": "password",
        })
        self.assertEqual(resp.status_code, 422)

    def test_login_and_logout(self):
        self.add_user("cook@example.com")
        self.assertEqual(self.client.get("/api/v1/auth/me").status_code, 401)

        self.assertEqual(self.login(self.client, "cook@example.com").status_code, 200)
        self.assertEqual(self.client.get("/api/v1/mealplans").status_code, 200)

        self.client.post("/api/v1/auth/logout")
        self.assertEqual(self.client.get("/api/v1/mealplans").status_code, 401)

    def test_login_wrong_password(self):
        self.add_user("cook@example.com")
        self.assertEqual(self.login(self.client, "cook@example.com", "Wrong1234").status_code, 401)
        self.assertEqual(self.login(self.client, "nobody@example.com").status_code, 401)

    def test_banned_user_cannot_login(self):
        self.add_user("banned@example.com", banned=True)
        resp = self.login(self.client, "banned@example.com")
        self.assertEqual(resp.status_code, 403)
        resp = self.client.post("/api/v1/auth/token", data={"username": "banned@example.com", "password": PASSWORD})
        self.assertEqual(resp.status_code, 403)

    def test_existing_session_survives_ban(self):
        uid = self.add_user("cook@example.com")
        self.login(self.client, "cook@example.com")
        with self.session() as s:
            u = s.get(User, uid)
            u.is_banned = True
            s.add(u)
            s.commit()
        self.assertEqual(self.client.get("/api/v1/mealplans").status_code, 200)

    def test_bearer_token(self):
        self.add_user("cook@example.com")
        resp = self.client.post("/api/v1/auth/token", data={"username": "cook@example.com", "password": PASSWORD})
        self.assertEqual(resp.status_code, 200)
        token = resp.json()["access_token"]

        api = self.new_client()
        ok = api.get("/api/v1/mealplans", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(ok.status_code, 200)
        bad = api.get("/api/v1/mealplans", headers={"Authorization": "Bearer not-a-token"})
        self.assertEqual(bad.status_code, 401)

    def test_token_endpoint_takes_password_form(self):
        self.add_user("cook@example.com")
        as_json = self.client.post("/api/v1/auth/token", json={"email": "cook@example.com", "password": PASSWORD})
        self.assertEqual(as_json.status_code, 422)
        wrong = self.client.post("/api/v1/auth/token", data={"username": "cook@example.com", "password": "Wrong1234"})
        self.assertEqual(wrong.status_code, 401)
        ok = self.client.post("/api/v1/auth/token", data={"username": " cook@example.com ", "password": PASSWORD})
        self.assertEqual(ok.json()["token_type"], "bearer")

    def test_token_for_unknown_user_is_not_a_session(self):
        token = create_access_token("777")
        me = self.new_client().get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(me.status_code, 401)


class TestSeedAdmin(ApiTestCase):
    def setUp(self):
        super().setUp()
        self._saved = (settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
        settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD = "root@example.com", "Admin1234"

    def tearDown(self):
        settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD = self._saved
        super().tearDown()

    def test_seed_is_idempotent(self):
        with self.session() as s:
            seed_admin(s)
            seed_admin(s)
            admins = s.exec(select(User).where(User.email == "root@example.com")).all()
        self.assertEqual(len(admins), 1)
        self.assertEqual(admins[0].role, "admin")
        self.assertEqual(self.login(self.client, "root@example.com", "Admin1234").status_code, 200)

    def test_existing_account_is_promoted(self):
        self.add_user("root@example.com")
        with self.session() as s:
            seed_admin(s)
            u = s.exec(select(User).where(User.email == "root@example.com")).one()
        self.assertEqual(u.role, "admin")


if __name__ == '__main__':
    unittest.main()
