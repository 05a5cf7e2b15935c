"""URL import pipeline: fetch, extract JSON-LD, map to a `Recipe` draft."""

import logging
from typing import Optional
from urllib.parse import urlparse

from recipe_importer.fetcher import FetchBlockedError, RecipeFetcher, is_amp_url, looks_like_amp_page, strip_amp
from recipe_importer.ingredient_parser import IngredientParser
from recipe_importer.jsonld import extract_json_ld, find_recipe_schema
from recipe_importer.models import ParseResult
from recipe_importer.schema_mapper import map_recipe_schema

INVALID_URL_MESSAGE = "Invalid URL format. Please enter a valid recipe URL."
AMP_PAGE_MESSAGE = (
    "AMP pages often lack recipe data. Try removing .amp from the URL "
    "or use the regular (non-AMP) version of the page."
)
NON_STANDARD_MESSAGE = (
    "This website doesn't use standard recipe formatting. Try another site "
    "or look for a different recipe page on the same site."
)
NO_RECIPE_MESSAGE = (
    "No recipe data found on this page. The page may not contain a recipe, "
    "or it may use non-standard formatting."
)
MISSING_NAME_MESSAGE = "Recipe name is missing from the page data. The page may not be formatted correctly."
BLOCKED_MESSAGE = (
    "This website blocks automatic imports (CORS policy). You can still add this recipe "
    "manually - copy the URL and paste it in the Source URL field when creating a recipe."
)


class RecipeParseError(Exception):
    """Raised when a fetched page does not yield a usable recipe."""
    pass


def is_valid_url(url: str) -> bool:
    if not isinstance(url, str):
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


class RecipeParser:
    """Parse recipes from URLs using schema.org JSON-LD."""

    def __init__(
        self,
        fetcher: Optional[RecipeFetcher] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.fetcher = fetcher or RecipeFetcher(logger=self.logger)
        self.ingredient_parser = IngredientParser(logger=self.logger)

    def parse_from_url(self, url: str) -> ParseResult:
        """Main entry point - parse recipe from URL. Never raises."""
        if not is_valid_url(url):
            return ParseResult.fail(INVALID_URL_MESSAGE)
        url = url.strip()

        if is_amp_url(url):
            non_amp_url = strip_amp(url)
            if non_amp_url != url:
                self.logger.info("AMP URL detected, trying regular page first", extra={"url": non_amp_url})
                result = self._try_fetch_recipe(non_amp_url)
                if result.success:
                    return result

        return self._try_fetch_recipe(url)

    def _try_fetch_recipe(self, url: str) -> ParseResult:
        try:
            page = self.fetcher.fetch(url)
            recipe = self._parse_html(page.html, url)
        except RecipeParseError as e:
            return ParseResult.fail(str(e))
        except FetchBlockedError:
            self.logger.warning("Direct fetch blocked", extra={"url": url})
            return ParseResult.fail(BLOCKED_MESSAGE)
        except Exception as e:
            self.logger.exception("Recipe import failed", extra={"url": url})
            return ParseResult.fail(f"Failed to import recipe: {e}")

        self.logger.info("Successfully parsed recipe", extra={"url": url, "recipe_name": recipe.name})
        return ParseResult.ok(recipe)

    def _parse_html(self, html: str, url: str):
        candidates = extract_json_ld(html)
        self.logger.info("Found JSON-LD data on page", extra={"url": url, "count": len(candidates)})

        if not candidates:
            if looks_like_amp_page(html):
                raise RecipeParseError(AMP_PAGE_MESSAGE)
            raise RecipeParseError(NON_STANDARD_MESSAGE)

        schema = find_recipe_schema(candidates)
        if schema is None:
            raise RecipeParseError(NO_RECIPE_MESSAGE)

        recipe = map_recipe_schema(schema, url, ingredient_parser=self.ingredient_parser)
        if not recipe.name.strip():
            raise RecipeParseError(MISSING_NAME_MESSAGE)

        return recipe


def parse_recipe_from_url(url: str) -> ParseResult:
    """Import a recipe draft from *url* with the default fetcher."""
    return RecipeParser().parse_from_url(url)
