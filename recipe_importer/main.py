import logging
import time

from flask import Flask, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

from recipe_importer import config
from recipe_importer.ingredient_parser import parse_ingredient_lines
from recipe_importer.instruction_parser import GENERIC_SECTION, parse_freeform_instructions
from recipe_importer.logging_config import configure_logging
from recipe_importer.models import PlanItem, Recipe
from recipe_importer.recipe_parser import INVALID_URL_MESSAGE, RecipeParser, is_valid_url
from recipe_importer.repair import fix_ingredient_data

configure_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SECRET_KEY"] = config.SECRET_KEY
csrf = CSRFProtect(app)
limiter = Limiter(
    get_remote_address,
    app=app,
    default_limits=[],          # no global limit; apply per-route only
    storage_uri="memory://",
)


def _json_body():
    """Return the request JSON object, or None if the body is not a JSON object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _invalid_json():
    return jsonify({
        "error": "Invalid JSON",
        "message": "Request body must be a JSON object"
    }), 400


@app.route("/import-recipe", methods=["POST"])
@limiter.limit(config.IMPORT_RATE_LIMIT)
def import_recipe():
    """Import a recipe draft from a URL for the user to review."""
    data = _json_body()
    if data is None:
        return _invalid_json()

    url = data.get("url")
    if not url:
        return jsonify({
            "error": "Invalid request",
            "message": "URL is required"
        }), 400

    if not is_valid_url(url):
        return jsonify({"success": False, "errors": [INVALID_URL_MESSAGE]}), 400

    logger.info("Importing recipe from URL", extra={"url": url})
    t0 = time.monotonic()
    result = RecipeParser().parse_from_url(url)
    logger.info(
        "Recipe import finished",
        extra={"url": url, "success": result.success, "elapsed_s": round(time.monotonic() - t0, 2)},
    )

    return jsonify(result.to_dict()), (200 if result.success else 400)


@app.route("/parse-ingredients", methods=["POST"])
def parse_ingredients():
    """Parse a bulk-pasted ingredient list, one ingredient per line."""
    data = _json_body()
    if data is None:
        return _invalid_json()

    text = data.get("text")
    if not isinstance(text, str):
        return jsonify({
            "error": "Invalid request",
            "message": "Text is required"
        }), 400

    ingredients = parse_ingredient_lines(text)
    logger.debug("Parsed pasted ingredients", extra={"count": len(ingredients)})
    return jsonify({"ingredients": [ing.to_dict() for ing in ingredients]})


@app.route("/parse-instructions", methods=["POST"])
def parse_instructions():
    """Parse bulk-pasted instructions into steps."""
    data = _json_body()
    if data is None:
        return _invalid_json()

    text = data.get("text")
    if not isinstance(text, str):
        return jsonify({
            "error": "Invalid request",
            "message": "Text is required"
        }), 400

    section = (data.get("section") or "").strip() or GENERIC_SECTION
    sections = parse_freeform_instructions(text, section=section)
    return jsonify({
        "steps": sections[0].steps if sections else [],
        "sections": [s.to_dict() for s in sections],
    })


@app.route("/fix-ingredients", methods=["POST"])
def fix_ingredients():
    """Repair stored ingredients whose quantity ended up inside the name."""
    data = _json_body()
    if data is None:
        return _invalid_json()

    try:
        recipes = [Recipe.from_dict(r) for r in data.get("recipes") or []]
        plan = [PlanItem.from_dict(p) for p in data.get("plan") or []]
    except (ValueError, TypeError, AttributeError) as e:
        logger.exception("Invalid repair payload")
        return jsonify({
            "error": "Validation error",
            "message": str(e)
        }), 400

    result = fix_ingredient_data(recipes, plan)
    return jsonify({
        "recipes": [r.to_dict() for r in result.fixed_recipes],
        "plan": [p.to_dict() for p in result.fixed_plan],
        "ingredientsFixed": result.ingredients_fixed,
    })
