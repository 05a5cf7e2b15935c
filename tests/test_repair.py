from recipe_importer.repair import fix_ingredient, fix_ingredient_data, fix_recipe_ingredients
from tests.conftest import create_test_ingredient, create_test_plan_item, create_test_recipe


def _broken(name, unit="as needed"):
    """An ingredient as stored by an import that dumped the full line into name."""
    return create_test_ingredient(name, quantity=0, unit=unit)


class TestFixIngredient:
    """Test the per-ingredient repair rule."""

    def test_repairs_embedded_quantity(self):
        fixed, changed = fix_ingredient(_broken("1/2 teaspoon black pepper"))

        assert changed is True
        assert fixed.name == "black pepper"
        assert fixed.quantity == 0.5
        assert fixed.unit == "teaspoon"

    def test_repairs_with_empty_unit(self):
        fixed, changed = fix_ingredient(_broken("2 cups flour, sifted", unit=""))

        assert changed is True
        assert fixed.name == "flour"
        assert fixed.preparation == "sifted"

    def test_null_quantity_is_suspect(self):
        fixed, changed = fix_ingredient(create_test_ingredient("3 carrots", quantity=None))

        assert changed is True
        assert fixed.quantity == 3
        assert fixed.name == "carrots"

    def test_keeps_existing_preparation_when_parse_has_none(self):
        ingredient = create_test_ingredient("3 carrots", quantity=0, preparation="peeled")

        fixed, _ = fix_ingredient(ingredient)

        assert fixed.preparation == "peeled"

    def test_keeps_category(self):
        ingredient = create_test_ingredient("1 cup rice", quantity=0, category="pantry")

        fixed, _ = fix_ingredient(ingredient)

        assert fixed.category == "pantry"

    def test_ingredient_with_quantity_untouched(self):
        ingredient = create_test_ingredient("2 cups flour", quantity=1, unit="")

        fixed, changed = fix_ingredient(ingredient)

        assert changed is False
        assert fixed is ingredient

    def test_ingredient_with_real_unit_untouched(self):
        ingredient = create_test_ingredient("2 cups flour", quantity=0, unit="cups")

        _, changed = fix_ingredient(ingredient)

        assert changed is False

    def test_name_without_quantity_untouched(self):
        """Test a correct short name like "salt" is not rewritten."""
        _, changed = fix_ingredient(_broken("salt"))

        assert changed is False

    def test_salt_and_pepper_line_untouched(self):
        _, changed = fix_ingredient(_broken("salt and pepper to taste"))

        assert changed is False


class TestFixRecipeIngredients:
    def test_only_affected_ingredients_replaced(self):
        good = create_test_ingredient("onion", quantity=1, category="produce")
        recipe = create_test_recipe("r1", "Soup", ingredients=[good, _broken("2 cups stock")])

        fixed, count = fix_recipe_ingredients(recipe)

        assert count == 1
        assert fixed.ingredients[0] is good
        assert fixed.ingredients[1].name == "stock"
        assert fixed.updated_at.endswith("Z")
        assert recipe.ingredients[1].name == "2 cups stock"

    def test_clean_recipe_returned_as_is(self):
        recipe = create_test_recipe("r1", "Soup", ingredients=[create_test_ingredient("onion", quantity=1)])

        fixed, count = fix_recipe_ingredients(recipe)

        assert count == 0
        assert fixed is recipe
        assert fixed.updated_at is None


class TestFixIngredientData:
    """Test the scan over custom recipes and plan snapshots."""

    def _data(self):
        recipes = [
            create_test_recipe("r1", "Pasta", ingredients=[
                _broken("1/2 teaspoon black pepper"),
                _broken("400 g spaghetti", unit=""),
            ]),
            create_test_recipe("r2", "Salad", ingredients=[
                create_test_ingredient("lettuce", quantity=1, unit="head"),
            ]),
        ]
        plan = [
            create_test_plan_item("p1", 0, create_test_recipe("r3", "Stew", ingredients=[
                _broken("2 carrots, diced"),
            ])),
            create_test_plan_item("p2", 1, None),
        ]
        return recipes, plan

    def test_counts_recipes_and_plan(self):
        recipes, plan = self._data()

        result = fix_ingredient_data(recipes, plan)

        assert result.ingredients_fixed == 3
        assert [i.name for i in result.fixed_recipes[0].ingredients] == ["black pepper", "spaghetti"]
        assert result.fixed_recipes[1] is recipes[1]
        assert result.fixed_plan[0].recipe.ingredients[0].name == "carrots"
        assert result.fixed_plan[0].recipe.ingredients[0].preparation == "diced"
        assert result.fixed_plan[1] is plan[1]

    def test_inputs_not_mutated(self):
        recipes, plan = self._data()

        fix_ingredient_data(recipes, plan)

        assert recipes[0].ingredients[0].name == "1/2 teaspoon black pepper"
        assert plan[0].recipe.ingredients[0].name == "2 carrots, diced"

    def test_second_run_fixes_nothing(self):
        recipes, plan = self._data()

        first = fix_ingredient_data(recipes, plan)
        second = fix_ingredient_data(first.fixed_recipes, first.fixed_plan)

        assert first.ingredients_fixed > 0
        assert second.ingredients_fixed == 0

    def test_empty_input(self):
        result = fix_ingredient_data([], [])

        assert result.fixed_recipes == []
        assert result.fixed_plan == []
        assert result.ingredients_fixed == 0


class TestAdversarialNames:
    def test_oversized_number_in_name_left_alone(self):
        """Test an unparseable quantity in the name is reported as unfixed, not raised."""
        name = "9" * 400 + " eggs"
        recipe = create_test_recipe("r1", "Omelette", ingredients=[_broken(name)])

        result = fix_ingredient_data([recipe], [])

        assert result.ingredients_fixed == 0
        assert result.fixed_recipes[0].ingredients[0].name == name

    def test_zero_denominator_in_name_left_alone(self):
        _, changed = fix_ingredient(_broken("1/0 cup sugar"))

        assert changed is False
