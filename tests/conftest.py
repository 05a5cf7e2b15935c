"""Pytest configuration and fixtures."""

import json

from recipe_importer.models import Ingredient, PlanItem, Recipe


def create_test_ingredient(
    name: str,
    quantity: float | None = None,
    unit: str = "",
    preparation: str = "",
    category: str = "other",
) -> Ingredient:
    return Ingredient(
        name=name,
        quantity=quantity,
        unit=unit,
        preparation=preparation,
        category=category,
    )


def create_test_recipe(
    recipe_id: str,
    name: str,
    ingredients: list | None = None,
    is_custom: bool = True,
    tags: list | None = None,
) -> Recipe:
    """Helper to create a test Recipe with structured ingredients."""
    return Recipe(
        id=recipe_id,
        name=name,
        is_custom=is_custom,
        tags=tags or [],
        ingredients=ingredients or [],
    )


def create_test_plan_item(item_id: str, day: int, recipe: Recipe | None) -> PlanItem:
    return PlanItem(id=item_id, day=day, recipe=recipe)


def create_recipe_page(*schemas, extra_head: str = "") -> str:
    """Build an HTML page with one application/ld+json block per schema.

    A schema given as a str is embedded verbatim (for malformed blocks).
    """
    blocks = []
    for schema in schemas:
        body = schema if isinstance(schema, str) else json.dumps(schema)
        blocks.append(f'<script type="application/ld+json">{body}</script>')
    return (
        "<!DOCTYPE html><html><head><title>Recipe</title>"
        f"{extra_head}{''.join(blocks)}"
        "</head><body><h1>Recipe</h1></body></html>"
    )


SAMPLE_RECIPE_SCHEMA = {
    "@context": "https://schema.org",
    "@type": "Recipe",
    "name": "Garlic Butter Chicken",
    "description": "Weeknight chicken with a garlic butter pan sauce.",
    "author": {"@type": "Person", "name": "Jamie Cook"},
    "image": ["https://example.com/chicken.jpg"],
    "prepTime": "PT10M",
    "cookTime": "PT25M",
    "totalTime": "PT35M",
    "recipeYield": "4 servings",
    "recipeCategory": "Main Course",
    "recipeCuisine": "American",
    "keywords": "chicken, garlic, easy",
    "recipeIngredient": [
        "2 lb chicken thighs",
        "3 cloves garlic, minced",
        "(50g) butter",
        "salt and pepper to taste",
    ],
    "recipeInstructions": [
        {"@type": "HowToStep", "text": "Season the chicken."},
        {"@type": "HowToStep", "text": "Sear until golden."},
    ],
    "nutrition": {
        "@type": "NutritionInformation",
        "calories": "420 calories",
        "proteinContent": "35 g",
        "carbohydrateContent": "3g",
        "fatContent": "28 g",
    },
    "aggregateRating": {"@type": "AggregateRating", "ratingValue": "4.7"},
}
