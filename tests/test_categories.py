import pytest

from recipe_importer.categories import guess_category
from recipe_importer.models import CATEGORIES


class TestGuessCategory:
    """Test shopping-category guesses for ingredient names."""

    @pytest.mark.parametrize("name,expected", [
        ("chicken thigh", "protein/meat"),
        ("ground beef", "protein/meat"),
        ("shrimp", "protein/seafood"),
        ("anchovies", "protein/seafood"),
        ("parmesan", "dairy"),
        ("unsalted butter", "dairy"),
        ("sourdough", "bakery"),
        ("canned chickpeas", "canned goods"),
        ("frozen pizza", "frozen"),
        ("smoked paprika", "spices"),
        ("flour", "pantry"),
        ("olive oil", "pantry"),
        ("onion", "produce"),
        ("garlic", "produce"),
    ])
    def test_known_keywords(self, name, expected):
        assert guess_category(name) == expected

    def test_protein_checked_before_pantry(self):
        """Test "chicken broth" stays a meat item rather than pantry stock."""
        assert guess_category("chicken broth") == "protein/meat"

    def test_case_insensitive(self):
        assert guess_category("Chicken Breast") == "protein/meat"

    def test_whole_words_only(self):
        """Test "ham" does not match inside "graham"."""
        assert guess_category("graham") == "other"

    def test_unmatched_falls_back_to_other(self):
        assert guess_category("mystery ingredient") == "other"
        assert guess_category("") == "other"

    def test_result_is_known_category(self):
        for name in ("salmon", "kale", "cocoa", "widget"):
            assert guess_category(name) in CATEGORIES
