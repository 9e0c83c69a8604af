from typing import List
import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ..core.db import get_session
from ..core.errors import Forbidden, NotFound
from ..core.security import get_current_user, require_user_id
from ..models import Ingredient, Recipe, User
from .schemas import RecipeCreate, RecipeOut

log = logging.getLogger(__name__)

router = APIRouter()

def _get_recipe(session: Session, recipe_id: int) -> Recipe:
    recipe = session.get(Recipe, recipe_id)
    if recipe is None:
        raise NotFound("Recipe not found")
    return recipe

@router.get("/recipes", response_model=List[RecipeOut])
def list_recipes(
    *,
    session: Session = Depends(get_session),
    _uid: int = Depends(require_user_id),
):
    q = select(Recipe).options(selectinload(Recipe.ingredients)).order_by(Recipe.name, Recipe.id)
    return session.exec(q).all()

@router.get("/recipes/{recipe_id}", response_model=RecipeOut)
def get_recipe(
    recipe_id: int,
    *,
    session: Session = Depends(get_session),
    _uid: int = Depends(require_user_id),
):
    return _get_recipe(session, recipe_id)

@router.post("/recipes", response_model=RecipeOut, status_code=status.HTTP_201_CREATED)
def create_recipe(
    payload: RecipeCreate,
    *,
    session: Session = Depends(get_session),
    _uid: int = Depends(require_user_id),
):
    recipe = Recipe(name=payload.name.strip())  # type: ignore[call-arg]
    for ing in payload.ingredients:
        recipe.ingredients.append(Ingredient(name=ing.name, quantity=ing.quantity, unit=ing.unit))  # type: ignore[call-arg]
    session.add(recipe)
    session.commit()
    session.refresh(recipe)
    return recipe

@router.delete("/recipes/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_recipe(
    recipe_id: int,
    *,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    if user.role != "admin":
        raise Forbidden("Only administrators can delete recipes")
    recipe = _get_recipe(session, recipe_id)
    # Meal plan items keep pointing at the id; the shopping list skips them
    session.delete(recipe)
    session.commit()
    log.info("admin %s deleted recipe %s", user.id, recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
