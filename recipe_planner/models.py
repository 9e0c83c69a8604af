import datetime as dt
from datetime import datetime
from typing import List, Optional
import sqlalchemy as sa
from sqlmodel import SQLModel, Field, Relationship

class User(SQLModel, table=True):
    __tablename__ = "users"
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(sa_column=sa.Column(sa.String(254), unique=True, index=True, nullable=False))
    display_name: str = Field(sa_column=sa.Column(sa.String(120), nullable=False))
    password_hash: str = Field(nullable=False)
    # "user" or "admin"
    role: str = Field(default="user", sa_column=sa.Column(sa.String(16), nullable=False))
    # Checked at login only
    is_banned: bool = Field(default=False, sa_column=sa.Column(sa.Boolean, nullable=False))
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    meal_plans: List["MealPlan"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

class Recipe(SQLModel, table=True):
    __tablename__ = "recipes"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(sa_column=sa.Column(sa.String(160), nullable=False))

    ingredients: List["Ingredient"] = Relationship(
        back_populates="recipe",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "Ingredient.id"},
    )

class Ingredient(SQLModel, table=True):
    __tablename__ = "ingredients"
    id: Optional[int] = Field(default=None, primary_key=True)
    recipe_id: int = Field(sa_column=sa.Column(sa.Integer, sa.ForeignKey("recipes.id", ondelete="CASCADE"), index=True, nullable=False))
    name: str = Field(sa_column=sa.Column(sa.String(120), nullable=False))
    # Free text as entered ("200", "1/2", "a pinch")
    quantity: str = Field(default="", sa_column=sa.Column(sa.String(40), nullable=False))
    unit: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(24)))

    recipe: Optional[Recipe] = Relationship(back_populates="ingredients")

class MealPlan(SQLModel, table=True):
    __tablename__ = "meal_plans"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(sa_column=sa.Column(sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False))
    start_date: dt.date = Field(sa_column=sa.Column(sa.Date, index=True, nullable=False))
    end_date: dt.date = Field(sa_column=sa.Column(sa.Date, index=True, nullable=False))

    user: Optional[User] = Relationship(back_populates="meal_plans")
    items: List["MealPlanItem"] = Relationship(
        back_populates="meal_plan",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "MealPlanItem.id"},
    )

class MealPlanItem(SQLModel, table=True):
    __tablename__ = "meal_plan_items"
    id: Optional[int] = Field(default=None, primary_key=True)
    meal_plan_id: int = Field(sa_column=sa.Column(sa.Integer, sa.ForeignKey("meal_plans.id", ondelete="CASCADE"), index=True, nullable=False))
    # No FK: recipes can be deleted while plans still point at them
    recipe_id: int = Field(sa_column=sa.Column(sa.Integer, index=True, nullable=False))
    date: dt.date = Field(sa_column=sa.Column(sa.Date, index=True, nullable=False))
    meal_type: str = Field(sa_column=sa.Column(sa.String(32), nullable=False))

    meal_plan: Optional[MealPlan] = Relationship(back_populates="items")
    recipe: Optional[Recipe] = Relationship(
        sa_relationship_kwargs={
            "primaryjoin": "foreign(MealPlanItem.recipe_id) == Recipe.id",
            "viewonly": True,
        },
    )
