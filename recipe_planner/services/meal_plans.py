from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List
import logging

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ..core.config import settings
from ..core.errors import Forbidden, InvalidPlan, NotFound
from ..models import MealPlan, MealPlanItem

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannedMeal:
    recipe_id: int
    date: date
    meal_type: str


def list_plans(session: Session, user_id: int) -> List[MealPlan]:
    q = (
        select(MealPlan)
        .where(MealPlan.user_id == user_id)
        .options(selectinload(MealPlan.items))
        .order_by(MealPlan.id)
    )
    return list(session.exec(q).all())


def _check_dates(start: date, end: date, items: List[PlannedMeal]) -> None:
    if start > end:
        raise InvalidPlan("startDate must not be after endDate")
    for it in items:
        if not (start <= it.date <= end):
            raise InvalidPlan(f"item date {it.date.isoformat()} is outside {start.isoformat()}..{end.isoformat()}")


def create_plan(
    session: Session,
    user_id: int,
    start: date,
    end: date,
    items: Iterable[PlannedMeal],
) -> MealPlan:
    """
    Store a plan and its items in one commit. Recipe ids are not checked;
    a missing recipe only shows up as a skipped item when the shopping
    list is generated. Date ordering is enforced only with STRICT_PLAN_DATES.
    """
    items = list(items)
    if settings.STRICT_PLAN_DATES:
        _check_dates(start, end, items)

    plan = MealPlan(user_id=user_id, start_date=start, end_date=end)  # type: ignore[call-arg]
    for it in items:
        plan.items.append(MealPlanItem(recipe_id=it.recipe_id, date=it.date, meal_type=it.meal_type))  # type: ignore[call-arg]
    session.add(plan)
    session.commit()
    session.refresh(plan)
    log.info("user %s created meal plan %s (%s..%s, %d items)", user_id, plan.id, start, end, len(items))
    return plan


def delete_plan(session: Session, user_id: int, plan_id: int) -> None:
    plan = session.get(MealPlan, plan_id)
    if plan is None:
        raise NotFound("Meal plan not found")
    if plan.user_id != user_id:
        raise Forbidden("Meal plan belongs to another user")
    session.delete(plan)
    session.commit()
    log.info("user %s deleted meal plan %s", user_id, plan_id)
