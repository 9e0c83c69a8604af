"""Shared setup for the API tests: a fresh in-memory database per test."""
import os
import unittest
from datetime import date
from typing import Iterable, Optional, Tuple

# Must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"

from fastapi.testclient import TestClient
from sqlmodel import Session

from recipe_planner.core.db import get_session, init_db, make_engine
from recipe_planner.core.security import hash_password
from recipe_planner.main import app
from recipe_planner.models import Ingredient, MealPlan, MealPlanItem, Recipe, User

PASSWORD = "Secret123"

IngredientRow = Tuple[str, str, Optional[str]]


class DbTestCase(unittest.TestCase):
    def setUp(self):
        self.engine = make_engine("sqlite://")
        init_db(self.engine)

    def tearDown(self):
        self.engine.dispose()

    def session(self) -> Session:
        return Session(self.engine)

    def add_user(self, email: str, role: str = "user", banned: bool = False) -> int:
        with self.session() as s:
            u = User(
                email=email,
                display_name=email.split("@")[0],
                password_hash=hash_password(PASSWORD),
                role=role,
                is_banned=banned,
            )
            s.add(u)
            s.commit()
            s.refresh(u)
            return u.id

    def add_recipe(self, name: str, ingredients: Iterable[IngredientRow]) -> int:
        with self.session() as s:
            r = Recipe(name=name)
            for ing_name, qty, unit in ingredients:
                r.ingredients.append(Ingredient(name=ing_name, quantity=qty, unit=unit))
            s.add(r)
            s.commit()
            s.refresh(r)
            return r.id

    def add_plan(self, user_id: int, start: date, end: date, items: Iterable[Tuple[int, date]]) -> int:
        with self.session() as s:
            plan = MealPlan(user_id=user_id, start_date=start, end_date=end)
            for recipe_id, d in items:
                plan.items.append(MealPlanItem(recipe_id=recipe_id, date=d, meal_type="dinner"))
            s.add(plan)
            s.commit()
            s.refresh(plan)
            return plan.id


class ApiTestCase(DbTestCase):
    def setUp(self):
        super().setUp()

        def _session_override():
            with Session(self.engine) as s:
                yield s

        app.dependency_overrides[get_session] = _session_override
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        super().tearDown()

    def new_client(self) -> TestClient:
        return TestClient(app)

    def login(self, client: TestClient, email: str, password: str = PASSWORD):
        return client.post("/api/v1/auth/login", json={"email": email, "password": password})
