from datetime import date, datetime
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _date_only(v: Any) -> Any:
    """Accept dates, datetimes or ISO strings and drop any time-of-day."""
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, str) and len(v.strip()) > 10:
        return datetime.fromisoformat(v.strip().replace("Z", "+00:00")).date()
    return v

DateOnly = Annotated[date, BeforeValidator(_date_only)]


class CamelModel(BaseModel):
    # JSON in and out uses camelCase; snake_case is accepted on input too
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ------------------------------------------------------------------------------
# Meal plans
# ------------------------------------------------------------------------------
class MealPlanItemIn(CamelModel):
    recipe_id: int
    date: DateOnly
    meal_type: str = Field(min_length=1, max_length=32)

class MealPlanCreate(CamelModel):
    start_date: DateOnly
    end_date: DateOnly
    items: List[MealPlanItemIn] = []

class MealPlanItemOut(CamelModel):
    id: int
    meal_plan_id: int
    recipe_id: int
    date: date
    meal_type: str

class MealPlanOut(CamelModel):
    id: int
    user_id: int
    start_date: date
    end_date: date
    items: List[MealPlanItemOut] = []


# ------------------------------------------------------------------------------
# Shopping list
# ------------------------------------------------------------------------------
class ShoppingListItemOut(CamelModel):
    name: str
    quantity: float
    unit: Optional[str] = None
    original_string: Optional[str] = None


# ------------------------------------------------------------------------------
# Recipes
# ------------------------------------------------------------------------------
class IngredientIn(CamelModel):
    name: str = Field(min_length=1, max_length=120)
    quantity: str = Field(default="", max_length=40)
    unit: Optional[str] = Field(default=None, max_length=24)

class RecipeCreate(CamelModel):
    name: str = Field(min_length=1, max_length=160)
    ingredients: List[IngredientIn] = []

class IngredientOut(CamelModel):
    id: int
    name: str
    quantity: str
    unit: Optional[str] = None

class RecipeOut(CamelModel):
    id: int
    name: str
    ingredients: List[IngredientOut] = []
