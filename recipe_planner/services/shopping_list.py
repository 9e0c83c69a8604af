"""
Shopping list aggregation.

Collects the ingredients of every recipe planned between two dates
(inclusive) for one user, merges duplicates on a normalized (name, unit)
key and sums their quantities. Quantities that are not plain decimal
numbers ("1/2", "a pinch") are left out of the totals and reported back
as skipped contributions instead of failing the request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple
import logging
import math
import re

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ..models import MealPlan, MealPlanItem, Recipe

log = logging.getLogger(__name__)

MergeKey = Tuple[str, str]

# Invariant decimal: optional sign, digits with optional fraction, optional exponent.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class AggregatedItem:
    name: str
    unit: Optional[str]
    quantity: float = 0.0
    original_string: Optional[str] = None


@dataclass(frozen=True)
class SkippedIngredient:
    recipe_id: int
    name: str
    quantity: str


@dataclass
class ShoppingList:
    items: List[AggregatedItem] = field(default_factory=list)
    skipped: List[SkippedIngredient] = field(default_factory=list)


def merge_key(name: str, unit: Optional[str]) -> MergeKey:
    """Case and surrounding-whitespace insensitive; the unit text itself must match."""
    return ((name or "").strip().lower(), (unit or "").strip().lower())


def parse_quantity(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    text = raw.strip()
    if not _DECIMAL_RE.fullmatch(text):
        return None
    value = float(text)
    # "1e400" matches the grammar but overflows
    return value if math.isfinite(value) else None


def aggregate(items: Iterable[MealPlanItem]) -> ShoppingList:
    """Merge the ingredients of the given plan items, in the order given."""
    merged: Dict[MergeKey, AggregatedItem] = {}
    skipped: List[SkippedIngredient] = []

    for item in items:
        recipe: Optional[Recipe] = item.recipe
        if recipe is None:
            log.debug("meal plan item %s points at missing recipe %s", item.id, item.recipe_id)
            continue
        for ing in recipe.ingredients:
            key = merge_key(ing.name, ing.unit)
            entry = merged.get(key)
            if entry is None:
                unit = ing.unit.strip() if ing.unit is not None else None
                entry = merged[key] = AggregatedItem(name=ing.name.strip(), unit=unit)
            qty = parse_quantity(ing.quantity)
            # A sum that would overflow is treated like an unparseable quantity
            if qty is None or not math.isfinite(entry.quantity + qty):
                skipped.append(SkippedIngredient(recipe_id=recipe.id, name=ing.name, quantity=ing.quantity or ""))
                if entry.original_string is None:
                    entry.original_string = ing.quantity
                continue
            entry.quantity += qty

    # sorted() is stable, so equal names keep retrieval order
    return ShoppingList(items=sorted(merged.values(), key=lambda e: e.name), skipped=skipped)


def items_in_range(plans: Iterable[MealPlan], start: date, end: date) -> List[MealPlanItem]:
    return [it for plan in plans for it in plan.items if start <= it.date <= end]


def generate(session: Session, user_id: int, start: date, end: date) -> ShoppingList:
    q = (
        select(MealPlan)
        .where(
            MealPlan.user_id == user_id,
            MealPlan.start_date <= end,
            MealPlan.end_date >= start,
        )
        .options(
            selectinload(MealPlan.items)
            .selectinload(MealPlanItem.recipe)
            .selectinload(Recipe.ingredients)
        )
        .order_by(MealPlan.id)
    )
    plans = session.exec(q).all()
    result = aggregate(items_in_range(plans, start, end))
    log.debug(
        "shopping list user=%s %s..%s: %d plans, %d lines, %d skipped",
        user_id, start, end, len(plans), len(result.items), len(result.skipped),
    )
    for s in result.skipped:
        log.debug("skipped quantity %r for %r (recipe %s)", s.quantity, s.name, s.recipe_id)
    return result
