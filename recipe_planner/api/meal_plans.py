from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlmodel import Session

from ..core.db import get_session
from ..core.security import require_user_id
from ..services import meal_plans as svc
from .schemas import MealPlanCreate, MealPlanOut

router = APIRouter()

@router.get("/mealplans", response_model=List[MealPlanOut])
def list_meal_plans(
    *,
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user_id),
):
    return svc.list_plans(session, user_id)

@router.post("/mealplans", status_code=status.HTTP_201_CREATED, response_class=Response)
def create_meal_plan(
    payload: MealPlanCreate,
    request: Request,
    *,
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user_id),
):
    svc.create_plan(
        session,
        user_id,
        payload.start_date,
        payload.end_date,
        [svc.PlannedMeal(recipe_id=it.recipe_id, date=it.date, meal_type=it.meal_type) for it in payload.items],
    )
    # Created, no body; Location points at the collection
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": str(request.url_for("list_meal_plans"))},
    )

@router.delete("/mealplans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_meal_plan(
    plan_id: int,
    *,
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user_id),
):
    svc.delete_plan(session, user_id, plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
