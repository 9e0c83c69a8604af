from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, Response
from sqlmodel import Session

from ..core.db import get_session
from ..core.security import require_user_id
from ..services import shopping_list as svc
from .schemas import DateOnly, ShoppingListItemOut

router = APIRouter()

@router.get("/shopping-list", response_model=List[ShoppingListItemOut])
def generate_shopping_list(
    response: Response,
    *,
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user_id),
    # Time-of-day is dropped, as for request bodies
    start_date: Annotated[DateOnly, Query(alias="startDate", description="YYYY-MM-DD, inclusive")],
    end_date: Annotated[DateOnly, Query(alias="endDate", description="YYYY-MM-DD, inclusive")],
):
    result = svc.generate(session, user_id, start_date, end_date)
    response.headers["X-Skipped-Ingredients"] = str(len(result.skipped))
    return [
        ShoppingListItemOut(
            name=e.name,
            quantity=e.quantity,
            unit=e.unit,
            original_string=e.original_string,
        )
        for e in result.items
    ]
