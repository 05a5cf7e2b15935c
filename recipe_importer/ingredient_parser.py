"""Ingredient line parsing: quantity, unit, name, preparation and category."""

import logging
import re
from typing import Callable, Optional

from recipe_importer.categories import guess_category
from recipe_importer.models import Ingredient
from recipe_importer.quantity import parse_quantity
from recipe_importer.text import decode_html_entities, normalize_unicode_fractions

# (quantity, unit, rest of line)
QuantityMatch = tuple[Optional[float], str, str]


class IngredientParser:
    """Parse free-text ingredient lines into structured `Ingredient` records.

    A line yields zero records (blank or annotation lines), one record, or
    several (the combined "salt and pepper" entry).
    """

    # Lines that annotate the list rather than name an ingredient
    NON_INGREDIENT_RE = re.compile(
        r'^(other:|suggested\s+garnish|suggested\s+topping|garnish(?:es)?:|for\s+garnish'
        r'|preferred\s+topping|any\s+combination\s+of|any\s+of\s+the\s+following'
        r'|bread\s+for\s+mopping|empanada\s+sauce$)',
        re.IGNORECASE,
    )

    SALT_AND_PEPPER_RE = re.compile(
        r'^(kosher\s+)?salt\s+and\s+(freshly\s+)?(ground\s+)?(black\s+)?pepper(\s+to\s+taste)?$',
        re.IGNORECASE,
    )
    TRAILING_TO_TASTE_RE = re.compile(r',?\s+to\s+taste$', re.IGNORECASE)

    # "(50g) butter", "(about 2 1/4 tsp) yeast"
    LEADING_PAREN_QTY_RE = re.compile(
        r'^\(\s*(?:about\s+)?([\d\s./]+)\s*(g|ml|kg|oz|ounces?|grams?|milliliters?|millilitres?'
        r'|liters?|litres?|cups?|tablespoons?|tbsp|teaspoons?|tsp|pounds?|lbs?|lb)\s*\)\s*',
        re.IGNORECASE,
    )
    # "/ 2.5 lb potatoes" (left over from "1 kg / 2.5 lb potatoes" style lines)
    LEADING_SLASH_QTY_RE = re.compile(
        r'^/\s*([\d\s./]+)\s*(g|ml|kg|oz|ounces?|grams?|pounds?|lbs?|lb|cups?|tablespoons?|tbsp'
        r'|teaspoons?|tsp)\s+',
        re.IGNORECASE,
    )
    # "(9 inch) unbaked pie crust"
    LEADING_SIZE_RE = re.compile(r'^\(\s*\d[\d\s./]*\s*inch(?:es)?\s*\)\s*', re.IGNORECASE)

    # Longest spellings first so "tablespoons" wins over "tbs"
    KNOWN_UNITS = [
        r'tablespoons?', r'tbsp\.?', r'tbs\.?',
        r'teaspoons?', r'tsp\.?',
        r'ounces?', r'oz\.?',
        r'pounds?', r'lbs?\.?', r'lb\.?',
        r'cups?',
        r'grams?',
        r'kilograms?', r'kg\.?',
        r'milliliters?', r'ml\.?',
        r'liters?',
        r'quarts?', r'qt\.?',
        r'pints?', r'pt\.?',
        r'gallons?', r'gal\.?',
        r'pinch(?:es)?',
        r'dash(?:es)?',
        r'cloves?',
        r'cans?',
        r'packages?', r'pkg\.?',
        r'bunche?s?',
        r'stalks?',
        r'slices?',
        r'pieces?',
        r'heads?',
        r'sprigs?',
        r'leaves?',
        r'whole',
        r'large',
        r'medium',
        r'small',
    ]

    ADJACENT_METRIC_RE = re.compile(r'^(\d+(?:\.\d+)?)\s*(g|ml|kg)\s+(.+)$', re.IGNORECASE)
    WITH_UNIT_RE = re.compile(
        r'^([\d\s/\-.]+)\s+(' + '|'.join(KNOWN_UNITS) + r')\s+(.+)$', re.IGNORECASE
    )
    NO_UNIT_RE = re.compile(r'^([\d\s/\-.]+)\s+(.+)$')

    TRAILING_PAREN_RE = re.compile(r'^(.+?)\s*\(([^)]+)\)\s*$')

    # A comma only separates name from preparation when one of these follows it
    PREPARATION_WORDS = {
        'diced', 'chopped', 'minced', 'sliced', 'shredded', 'grated', 'mashed',
        'julienned', 'halved', 'quartered', 'crushed', 'peeled', 'pitted', 'seeded',
        'deveined', 'trimmed', 'thawed', 'drained', 'rinsed', 'cooked', 'uncooked',
        'sifted', 'softened', 'melted', 'beaten', 'divided', 'crumbled', 'torn',
        'toasted', 'roasted', 'optional', 'for serving', 'for garnish', 'to taste',
        'packed', 'lightly packed', 'heaping', 'room temperature',
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        # Tried in order when the line has no parenthetical/slash quantity
        self.quantity_patterns: list[tuple[re.Pattern, Callable[[re.Match], QuantityMatch]]] = [
            (self.ADJACENT_METRIC_RE, self._from_adjacent_metric),
            (self.WITH_UNIT_RE, self._from_known_unit),
            (self.NO_UNIT_RE, self._from_bare_number),
        ]

    def parse(self, line: str) -> list[Ingredient]:
        """Parse one ingredient line.

        Examples:
            "2 cups flour, sifted" -> [flour, 2 cups, prep "sifted"]
            "(50g) butter" -> [butter, 50 g]
            "salt and pepper to taste" -> [salt, black pepper]
            "Other: lime wedges for serving" -> []
        """
        if not line or not line.strip():
            return []

        text = normalize_unicode_fractions(decode_html_entities(line.strip()))

        if self.NON_INGREDIENT_RE.match(text):
            self.logger.debug("Skipping non-ingredient line", extra={"line": text})
            return []

        if self.SALT_AND_PEPPER_RE.match(self.TRAILING_TO_TASTE_RE.sub('', text).strip()):
            self.logger.debug("Splitting combined salt and pepper line", extra={"line": text})
            return [
                Ingredient(name='salt', quantity=0, unit='', preparation='to taste', category='spices'),
                Ingredient(name='black pepper', quantity=0, unit='', preparation='to taste', category='spices'),
            ]

        quantity, unit, text = self._strip_prefix_quantity(text)
        text = self.LEADING_SIZE_RE.sub('', text).strip()

        rest = text
        if quantity is None:
            for pattern, handler in self.quantity_patterns:
                match = pattern.match(text)
                if match:
                    quantity, unit, rest = handler(match)
                    break

        name, preparation = self._extract_name_and_preparation(rest)
        if not name:
            return []

        return [
            Ingredient(
                name=name,
                quantity=quantity,
                unit=unit,
                preparation=preparation,
                category=guess_category(name),
            )
        ]

    def _strip_prefix_quantity(self, text: str) -> tuple[Optional[float], str, str]:
        """Remove a leading "(50g)" or "/ 2.5 lb" quantity and return it.

        A quantity found here takes priority over anything later in the line.
        """
        quantity: Optional[float] = None
        unit = ''

        match = self.LEADING_PAREN_QTY_RE.match(text)
        if match:
            quantity = parse_quantity(match.group(1))
            unit = self._normalize_prefix_unit(match.group(2))
            text = text[match.end():]

        match = self.LEADING_SLASH_QTY_RE.match(text)
        if match and quantity is None:
            quantity = parse_quantity(match.group(1))
            unit = self._normalize_prefix_unit(match.group(2))
            text = text[match.end():]

        return quantity, unit, text

    @staticmethod
    def _normalize_prefix_unit(unit: str) -> str:
        return re.sub(r'\.$', '', re.sub(r's$', '', unit.lower()))

    @staticmethod
    def _from_adjacent_metric(match: re.Match) -> QuantityMatch:
        # "200g butter"
        return parse_quantity(match.group(1)), match.group(2).lower(), match.group(3)

    @staticmethod
    def _from_known_unit(match: re.Match) -> QuantityMatch:
        # "2 cups flour, sifted"
        unit = re.sub(r'\.$', '', match.group(2).lower())
        return parse_quantity(match.group(1)), unit, match.group(3)

    @staticmethod
    def _from_bare_number(match: re.Match) -> QuantityMatch:
        # "2 onions, diced"
        return parse_quantity(match.group(1)), '', match.group(2)

    def _extract_name_and_preparation(self, rest: str) -> tuple[str, str]:
        """Split "cabbage (shredded)" or "onions, diced" into name and preparation."""
        match = self.TRAILING_PAREN_RE.match(rest)
        if match:
            return match.group(1).strip(), match.group(2).strip()
        return self._split_on_preparation_comma(rest)

    def _split_on_preparation_comma(self, rest: str) -> tuple[str, str]:
        comma = rest.find(',')
        if comma == -1:
            return rest.strip(), ''

        after = rest[comma + 1:].strip()
        after_lower = after.lower()
        words = after_lower.split()
        first_word = words[0] if words else ''
        first_segment = after_lower.split(',')[0].strip()

        if first_word in self.PREPARATION_WORDS or first_segment in self.PREPARATION_WORDS:
            return rest[:comma].strip(), after

        # "tomatoes, canned, San Marzano" stays whole
        return rest.strip(), ''


_default_parser = IngredientParser()


def parse_ingredient(line: str) -> list[Ingredient]:
    """Parse one line with the shared parser. Returns zero or more records."""
    return _default_parser.parse(line)


def parse_ingredient_line(line: str) -> Optional[Ingredient]:
    """Parse one line and return its first record, or None if it has none."""
    records = _default_parser.parse(line)
    return records[0] if records else None


def parse_ingredient_lines(text: str) -> list[Ingredient]:
    """Parse a pasted block of ingredients, one per line.

    Lines that yield nothing or a record without a name are dropped; the
    combined salt-and-pepper line contributes both of its records.
    """
    ingredients = []
    for line in (text or '').splitlines():
        ingredients.extend(ing for ing in _default_parser.parse(line) if ing.name.strip())
    return ingredients
