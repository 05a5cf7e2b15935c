import os
import secrets
import sys


# Check if we're running in a test environment
def _is_testing():
    """Check if code is running under pytest."""
    return "pytest" in sys.modules or "PYTEST_CURRENT_TEST" in os.environ


# Flask secret key, used for session signing and CSRF token generation.
# Set SECRET_KEY in the environment for production; a random key is
# generated on startup as a fallback (sessions won't survive restarts).
SECRET_KEY = os.environ.get("SECRET_KEY", secrets.token_hex(32))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG" if _is_testing() else "INFO")

# CORS proxy that fetches third-party recipe pages on our behalf.
# Contract: POST {PROXY_URL}/api/fetch-recipe {"url": ...}
#   -> {"success": true, "html": "...", "url": "..."} or {"error": "..."}
PROXY_URL = os.environ.get("PROXY_URL", "http://localhost:3001").rstrip("/")

# Applied separately to the proxy call and the direct fetch
FETCH_TIMEOUT_SECONDS = float(os.environ.get("FETCH_TIMEOUT_SECONDS", "15"))

USER_AGENT = os.environ.get(
    "RECIPE_IMPORTER_USER_AGENT",
    "Mozilla/5.0 (compatible; RecipeImporter/1.0)",
)

# Default data file for scripts/fix_ingredient_data.py
RECIPES_FILE = os.environ.get("RECIPES_FILE", "data/recipes.json")

IMPORT_RATE_LIMIT = "10 per minute"
