"""Repair ingredients that an earlier importer stored with the quantity in the name.

A broken import looks like ``name="1/2 teaspoon black pepper", quantity=0,
unit="as needed"``. Re-parsing the name recovers the structured fields.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from recipe_importer.ingredient_parser import IngredientParser
from recipe_importer.models import Ingredient, PlanItem, Recipe

logger = logging.getLogger(__name__)

_parser = IngredientParser(logger=logger)


@dataclass
class RepairResult:
    fixed_recipes: list[Recipe]
    fixed_plan: list[PlanItem]
    ingredients_fixed: int


def _is_suspect(ingredient: Ingredient) -> bool:
    unit = (ingredient.unit or '').strip().lower()
    return not ingredient.quantity and unit in ('', 'as needed')


def fix_ingredient(ingredient: Ingredient) -> tuple[Ingredient, bool]:
    """Return the repaired ingredient and whether anything changed.

    A re-parse is accepted only when it yields exactly one record with a
    positive quantity and a shorter name than before.
    """
    if not _is_suspect(ingredient):
        return ingredient, False

    records = _parser.parse(ingredient.name)
    if len(records) != 1:
        return ingredient, False

    parsed = records[0]
    if parsed.quantity is None or parsed.quantity <= 0:
        return ingredient, False
    if parsed.name == ingredient.name or len(parsed.name) >= len(ingredient.name):
        return ingredient, False

    return replace(
        ingredient,
        name=parsed.name,
        quantity=parsed.quantity,
        unit=parsed.unit or '',
        preparation=parsed.preparation or ingredient.preparation or '',
    ), True


def fix_recipe_ingredients(recipe: Recipe) -> tuple[Recipe, int]:
    if not recipe.ingredients:
        return recipe, 0

    fixed_count = 0
    ingredients = []
    for ingredient in recipe.ingredients:
        repaired, fixed = fix_ingredient(ingredient)
        if fixed:
            fixed_count += 1
            logger.debug(
                "Ingredient repaired",
                extra={"recipe": recipe.name, "before": ingredient.name, "after": repaired.name},
            )
        ingredients.append(repaired)

    if fixed_count == 0:
        return recipe, 0

    updated_at = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
    return replace(recipe, ingredients=ingredients, updated_at=updated_at), fixed_count


def fix_ingredient_data(custom_recipes: list[Recipe], plan: list[PlanItem]) -> RepairResult:
    """Scan custom recipes and plan snapshots for ingredients with embedded quantities.

    Returns new lists; recipes and plan items that needed no repair are passed
    through as-is. Running this on its own output reports zero fixes.
    """
    ingredients_fixed = 0

    fixed_recipes = []
    for recipe in custom_recipes:
        repaired, count = fix_recipe_ingredients(recipe)
        ingredients_fixed += count
        fixed_recipes.append(repaired)

    fixed_plan = []
    for item in plan:
        if item.recipe is None:
            fixed_plan.append(item)
            continue
        repaired, count = fix_recipe_ingredients(item.recipe)
        ingredients_fixed += count
        fixed_plan.append(replace(item, recipe=repaired) if count else item)

    logger.info("Ingredient repair scan complete", extra={"ingredients_fixed": ingredients_fixed})
    return RepairResult(
        fixed_recipes=fixed_recipes,
        fixed_plan=fixed_plan,
        ingredients_fixed=ingredients_fixed,
    )
