"""Structured recipe model shared by the import pipeline and the repair scanner.

Dataclasses use snake_case attributes and serialise to the camelCase JSON the
front end stores (``to_dict`` / ``from_dict``). Keys the pipeline does not know
about are carried through untouched in ``extra`` so a stored recipe survives a
round trip through the repair scanner.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

CATEGORIES = (
    "protein/meat",
    "protein/seafood",
    "dairy",
    "bakery",
    "canned goods",
    "frozen",
    "spices",
    "pantry",
    "produce",
    "other",
)


@dataclass
class Ingredient:
    name: str
    quantity: Optional[float] = None
    unit: str = ""
    preparation: str = ""
    category: str = "other"
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        result = {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
        }
        if self.preparation:
            result["preparation"] = self.preparation
        if self.optional:
            result["optional"] = True
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ingredient":
        if "name" not in data:
            raise ValueError("Ingredient is missing required field: name")
        quantity = data.get("quantity")
        return cls(
            name=_text_field(data, "name"),
            quantity=float(quantity) if quantity is not None else None,
            unit=_text_field(data, "unit"),
            preparation=_text_field(data, "preparation"),
            category=_text_field(data, "category") or "other",
            optional=bool(data.get("optional", False)),
        )


def _text_field(data: dict[str, Any], key: str) -> str:
    """Return a string field, "" when null or absent; other types are rejected."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"Ingredient field '{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass
class InstructionSection:
    section: str
    steps: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"section": self.section, "steps": list(self.steps)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InstructionSection":
        return cls(section=data.get("section", ""), steps=list(data.get("steps") or []))


@dataclass
class Servings:
    default: int
    unit: str = "servings"

    def to_dict(self) -> dict[str, Any]:
        return {"default": self.default, "unit": self.unit}


@dataclass
class Nutrition:
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    source: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result = {
            "calories": self.calories,
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fat_g": self.fat_g,
            "fiber_g": self.fiber_g,
        }
        if self.source:
            result["source"] = self.source
        return result


# attribute name -> JSON key, for the plain scalar fields of Recipe
_RECIPE_SCALARS = {
    "id": "id",
    "name": "name",
    "description": "description",
    "author": "author",
    "source_url": "sourceUrl",
    "image_url": "imageUrl",
    "video_url": "videoUrl",
    "cuisine": "cuisine",
    "prep_time": "prepTime",
    "cook_time": "cookTime",
    "total_time": "totalTime",
    "rating": "rating",
    "is_custom": "isCustom",
    "updated_at": "updatedAt",
}


@dataclass
class Recipe:
    name: str
    id: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    source_url: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    cuisine: Optional[str] = None
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    total_time: Optional[str] = None
    rating: Optional[float] = None
    is_custom: bool = False
    updated_at: Optional[str] = None
    servings: Optional[Servings] = None
    nutrition: Optional[Nutrition] = None
    tags: list[str] = field(default_factory=list)
    meal_types: list[str] = field(default_factory=list)
    ingredients: list[Ingredient] = field(default_factory=list)
    instructions: list[InstructionSection] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the front-end JSON shape, leaving out unset fields."""
        result: dict[str, Any] = dict(self.extra)
        for attr, key in _RECIPE_SCALARS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        if self.servings:
            result["servings"] = self.servings.to_dict()
        if self.nutrition:
            result["nutrition"] = self.nutrition.to_dict()
        if self.tags:
            result["tags"] = list(self.tags)
        if self.meal_types:
            result["mealTypes"] = list(self.meal_types)
        result["ingredients"] = [ing.to_dict() for ing in self.ingredients]
        result["instructions"] = [section.to_dict() for section in self.instructions]
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recipe":
        if "name" not in data:
            raise ValueError("Recipe is missing required field: name")

        known = set(_RECIPE_SCALARS.values()) | {
            "servings", "nutrition", "tags", "mealTypes", "ingredients", "instructions",
        }
        kwargs = {attr: data.get(key) for attr, key in _RECIPE_SCALARS.items()}
        kwargs["is_custom"] = bool(kwargs["is_custom"])

        servings = data.get("servings")
        if isinstance(servings, dict) and servings.get("default") is not None:
            kwargs["servings"] = Servings(
                default=servings["default"], unit=servings.get("unit", "servings")
            )

        nutrition = data.get("nutrition")
        if isinstance(nutrition, dict):
            kwargs["nutrition"] = Nutrition(
                calories=nutrition.get("calories", 0),
                protein_g=nutrition.get("protein_g", 0),
                carbs_g=nutrition.get("carbs_g", 0),
                fat_g=nutrition.get("fat_g", 0),
                fiber_g=nutrition.get("fiber_g", 0),
                source=nutrition.get("source"),
            )

        return cls(
            tags=list(data.get("tags") or []),
            meal_types=list(data.get("mealTypes") or []),
            ingredients=[Ingredient.from_dict(i) for i in data.get("ingredients") or []],
            instructions=[InstructionSection.from_dict(s) for s in data.get("instructions") or []],
            extra={k: v for k, v in data.items() if k not in known},
            **kwargs,
        )


@dataclass
class PlanItem:
    """A day-planner slot holding a snapshot of the recipe it was planned with."""
    id: str
    day: int
    recipe: Optional[Recipe] = None
    servings_multiplier: float = 1.0
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "day": self.day,
            "recipe": self.recipe.to_dict() if self.recipe else None,
            "servingsMultiplier": self.servings_multiplier,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlanItem":
        missing = [f for f in ("id", "day") if f not in data]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")
        recipe = data.get("recipe")
        return cls(
            id=data["id"],
            day=data["day"],
            recipe=Recipe.from_dict(recipe) if recipe else None,
            servings_multiplier=data.get("servingsMultiplier", 1.0),
            extra={k: v for k, v in data.items() if k not in ("id", "day", "recipe", "servingsMultiplier")},
        )


@dataclass
class ParseResult:
    """Outcome of one import attempt. Never persisted."""
    success: bool
    recipe: Optional[Recipe] = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, recipe: Recipe) -> "ParseResult":
        return cls(success=True, recipe=recipe)

    @classmethod
    def fail(cls, message: str) -> "ParseResult":
        return cls(success=False, errors=[message])

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "recipe": self.recipe.to_dict()}
        return {"success": False, "errors": list(self.errors)}
