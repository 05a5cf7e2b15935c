"""Map a schema.org Recipe object onto the internal `Recipe` model."""

import re
from typing import Any, Optional

from recipe_importer.ingredient_parser import IngredientParser
from recipe_importer.instruction_parser import parse_schema_instructions
from recipe_importer.models import Ingredient, Nutrition, Recipe, Servings
from recipe_importer.quantity import leading_number
from recipe_importer.text import decode_html_entities

# Checked in this order against every category, keyword and the recipe name
MEAL_TYPE_PATTERNS: list[tuple[str, list[str]]] = [
    ('breakfast', [r'breakfast', r'brunch', r'morning', r'pancake', r'waffle', r'omelette',
                   r'omelet', r'scramble', r'french toast']),
    ('lunch', [r'lunch', r'sandwich', r'wrap', r'salad', r'tacos?', r'burrito', r'quesadilla']),
    ('dinner', [r'dinner', r'supper', r'main dish', r'main course', r'entree', r'entrée',
                r'tacos?', r'burrito', r'enchilada', r'fajita']),
    ('dessert', [r'dessert', r'cake', r'cookie', r'brownie', r'pie', r'pastry', r'sweet treat',
                 r'ice cream', r'pudding']),
    ('snack', [r'snack', r'appetizer', r'finger food', r'dip', r'chips']),
]

# Used only when nothing above matched: these read like a main dish
MAIN_DISH_PATTERNS = [r'chicken', r'beef', r'pork', r'fish', r'pasta', r'rice', r'steak',
                      r'roast', r'casserole', r'stew', r'soup']


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return decode_html_entities(value.strip())
    return None


def _as_list(value: Any) -> list:
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def extract_author(author: Any) -> Optional[str]:
    """Author may be a string, a Person/Organization object, or a list of either."""
    if isinstance(author, list):
        author = author[0] if author else None
    if isinstance(author, dict):
        return _text(author.get('name'))
    return _text(author)


def extract_image_url(image: Any) -> Optional[str]:
    if isinstance(image, str):
        return image or None
    if isinstance(image, list) and image:
        return extract_image_url(image[0])
    if isinstance(image, dict):
        url = image.get('url')
        return url if isinstance(url, str) and url else None
    return None


def extract_video_url(video: Any) -> Optional[str]:
    if isinstance(video, str):
        return video or None
    if isinstance(video, dict):
        url = video.get('contentUrl')
        return url if isinstance(url, str) and url else None
    return None


def extract_servings(recipe_yield: Any) -> Optional[Servings]:
    """Servings from recipeYield: 4, "4 servings", "Serves 6", ["6", "6 servings"]."""
    if isinstance(recipe_yield, list):
        recipe_yield = recipe_yield[0] if recipe_yield else None
    if isinstance(recipe_yield, bool):
        return None
    if isinstance(recipe_yield, (int, float)):
        return Servings(default=int(recipe_yield))
    if isinstance(recipe_yield, str):
        match = re.search(r'(\d+)', recipe_yield)
        if match:
            return Servings(default=int(match.group(1)))
    return None


def extract_nutrient(value: Any) -> float:
    """Numeric value of a nutrient ("200 calories" -> 200.0), 0 when missing."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        number = leading_number(re.sub(r'[^\d.]', '', value))
        return number if number is not None else 0.0
    return 0.0


def extract_nutrition(nutrition: Any) -> Optional[Nutrition]:
    if not isinstance(nutrition, dict):
        return None
    return Nutrition(
        calories=extract_nutrient(nutrition.get('calories')),
        protein_g=extract_nutrient(nutrition.get('proteinContent')),
        carbs_g=extract_nutrient(nutrition.get('carbohydrateContent')),
        fat_g=extract_nutrient(nutrition.get('fatContent')),
        fiber_g=extract_nutrient(nutrition.get('fiberContent')),
        source='Schema.org',
    )


def extract_rating(aggregate_rating: Any) -> Optional[float]:
    if not isinstance(aggregate_rating, dict):
        return None
    value = aggregate_rating.get('ratingValue')
    if isinstance(value, bool) or not value:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return leading_number(value)
    return None


def split_keywords(keywords: Any) -> list[str]:
    if isinstance(keywords, str):
        keywords = keywords.split(',')
    return [k for k in (_text(k) for k in _as_list(keywords)) if k]


def infer_meal_types(categories: list[str], keywords: list[str], name: str) -> list[str]:
    """Infer meal types from categories, keywords and the recipe name.

    Falls back to "dinner" when nothing matched but the text names a typical
    main-dish ingredient or style.
    """
    texts = [t.lower() for t in [*categories, *keywords, name]]

    meal_types = []
    for meal_type, patterns in MEAL_TYPE_PATTERNS:
        if any(re.search(p, text) for text in texts for p in patterns):
            meal_types.append(meal_type)

    if not meal_types and any(re.search(p, text) for text in texts for p in MAIN_DISH_PATTERNS):
        meal_types.append('dinner')

    return meal_types


def extract_ingredients(raw: Any, parser: IngredientParser) -> list[Ingredient]:
    if not isinstance(raw, list):
        return []
    ingredients = []
    for line in raw:
        if isinstance(line, str):
            ingredients.extend(parser.parse(line))
    return ingredients


def map_recipe_schema(
    schema: dict,
    source_url: str,
    ingredient_parser: Optional[IngredientParser] = None,
) -> Recipe:
    """Build a `Recipe` draft from a schema.org Recipe object.

    The name is left empty when the page does not provide one; the caller
    decides whether that is an error.
    """
    parser = ingredient_parser or IngredientParser()

    name = _text(schema.get('name')) or ''
    categories = [c for c in (_text(c) for c in _as_list(schema.get('recipeCategory'))) if c]
    keywords = split_keywords(schema.get('keywords'))
    cuisine = _as_list(schema.get('recipeCuisine'))

    return Recipe(
        name=name,
        source_url=source_url,
        is_custom=True,
        description=_text(schema.get('description')),
        author=extract_author(schema.get('author')),
        image_url=extract_image_url(schema.get('image')),
        video_url=extract_video_url(schema.get('video')),
        # ISO 8601 durations are kept as published
        prep_time=schema.get('prepTime') or None,
        cook_time=schema.get('cookTime') or None,
        total_time=schema.get('totalTime') or None,
        servings=extract_servings(schema.get('recipeYield')),
        tags=list(dict.fromkeys(categories + keywords)),
        meal_types=infer_meal_types(categories, keywords, name),
        cuisine=_text(cuisine[0]) if cuisine else None,
        ingredients=extract_ingredients(schema.get('recipeIngredient'), parser),
        instructions=parse_schema_instructions(schema.get('recipeInstructions')),
        nutrition=extract_nutrition(schema.get('nutrition')),
        rating=extract_rating(schema.get('aggregateRating')),
    )
