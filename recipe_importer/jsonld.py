"""Schema.org JSON-LD extraction from recipe page HTML."""

import json
import logging
import re
from typing import Any, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

LD_JSON_TYPE_RE = re.compile(r"^application/ld\+json$", re.IGNORECASE)


def extract_json_ld(html: str) -> list[Any]:
    """Parse every application/ld+json block on the page.

    Each block is decoded on its own; empty or malformed blocks are skipped.
    Top-level arrays are flattened into the returned candidate list.
    """
    soup = BeautifulSoup(html, 'html.parser')
    candidates: list[Any] = []

    for index, script in enumerate(soup.find_all('script', type=LD_JSON_TYPE_RE), start=1):
        content = (script.string or script.get_text() or '').strip()
        if not content:
            logger.debug("Skipping empty JSON-LD block", extra={"block": index})
            continue

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.debug("Skipping malformed JSON-LD block", extra={"block": index, "error": str(e)})
            continue

        if isinstance(data, list):
            candidates.extend(data)
        else:
            candidates.append(data)

    logger.debug("JSON-LD items extracted", extra={"count": len(candidates)})
    return candidates


def is_recipe_type(obj: Any) -> bool:
    """True when @type is "Recipe" or a list containing it."""
    if not isinstance(obj, dict):
        return False
    schema_type = obj.get('@type')
    if isinstance(schema_type, str):
        return schema_type == 'Recipe'
    if isinstance(schema_type, list):
        return 'Recipe' in schema_type
    return False


def _describe_type(obj: dict) -> Optional[str]:
    schema_type = obj.get('@type')
    if not schema_type:
        return None
    if isinstance(schema_type, list):
        return ', '.join(str(t) for t in schema_type)
    return str(schema_type)


def find_recipe_schema(candidates: list[Any]) -> Optional[dict]:
    """Return the first Recipe object, looking inside @graph lists too."""
    seen_types = []

    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue

        seen_types.append(_describe_type(candidate))
        if is_recipe_type(candidate):
            return candidate

        graph = candidate.get('@graph')
        if isinstance(graph, list):
            for item in graph:
                if not isinstance(item, dict):
                    continue
                seen_types.append(_describe_type(item))
                if is_recipe_type(item):
                    return item

    logger.info(
        "No Recipe schema found in JSON-LD data",
        extra={"schema_types": [t for t in seen_types if t]},
    )
    return None
