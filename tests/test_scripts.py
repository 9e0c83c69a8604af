import importlib.util
import unittest
from pathlib import Path

from harness import DbTestCase
from sqlalchemy import inspect

from recipe_planner.models import User

SCRIPTS = Path(__file__).resolve().parents[1] / "scripts"


def _load(name):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS / f"{name}.py")
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


class TestBanUser(DbTestCase):
    def test_ban_and_unban(self):
        ban_user = _load("ban_user")
        uid = self.add_user("cook@example.com")

        with self.session() as s:
            self.assertTrue(ban_user.set_banned(s, "cook@example.com", True))
            self.assertTrue(s.get(User, uid).is_banned)
            self.assertTrue(ban_user.set_banned(s, "cook@example.com", False))
            self.assertFalse(s.get(User, uid).is_banned)
            self.assertFalse(ban_user.set_banned(s, "nobody@example.com", True))


class TestResetDb(DbTestCase):
    def test_recreate_schema_empties_tables(self):
        reset_db = _load("reset_db")
        self.add_user("cook@example.com")

        reset_db.recreate_schema(self.engine)

        tables = set(inspect(self.engine).get_table_names())
        self.assertTrue({"users", "recipes", "ingredients", "meal_plans", "meal_plan_items"} <= tables)
        with self.session() as s:
            self.assertIsNone(s.get(User, 1))


if __name__ == '__main__':
    unittest.main()
