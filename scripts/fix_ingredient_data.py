#!/usr/bin/env python3
"""Repair ingredients whose quantity and unit ended up inside the name.

Older imports stored lines like "1/2 teaspoon black pepper" as the ingredient
name with quantity 0 and unit "as needed". This script re-parses those names
and rewrites the structured fields.

The data file holds {"recipes": [...], "plan": [...]} in the front-end JSON
shape; "plan" is optional.

Usage:
    python scripts/fix_ingredient_data.py [path] [--apply] [--verbose]

Without --apply the script only reports what it would change. It is
idempotent - a second run reports nothing to fix.
"""

import argparse
import json
import os
import sys
import tempfile
from pathlib import Path

# Add parent directory to path to import recipe_importer modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from recipe_importer import config
from recipe_importer.models import PlanItem, Recipe
from recipe_importer.repair import fix_ingredient_data


def load_data(file_path: Path) -> tuple[list[Recipe], list[PlanItem], dict]:
    """Load recipes and plan items from *file_path*.

    Raises:
        ValueError: If the file is not valid JSON or lacks a 'recipes' key
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_path}: {e}")

    if not isinstance(data, dict) or "recipes" not in data:
        raise ValueError("Data file must contain a 'recipes' key")

    recipes = [Recipe.from_dict(r) for r in data["recipes"]]
    plan = [PlanItem.from_dict(p) for p in data.get("plan", [])]
    return recipes, plan, data


def save_data(file_path: Path, data: dict) -> None:
    """Write *data* atomically: temp file in the same directory, then replace."""
    temp_fd, temp_path = tempfile.mkstemp(
        dir=file_path.parent,
        prefix=".recipes_tmp_",
        suffix=".json"
    )
    try:
        with os.fdopen(temp_fd, 'w') as f:
            json.dump(data, f, indent=2)
        os.replace(temp_path, file_path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def report_changes(before: list[Recipe], after: list[Recipe]) -> None:
    for old, new in zip(before, after):
        if old is new:
            continue
        print(f"  → {new.name}")
        for old_ing, new_ing in zip(old.ingredients, new.ingredients):
            if old_ing != new_ing:
                unit = f" {new_ing.unit}" if new_ing.unit else ""
                print(f"      '{old_ing.name}' -> {new_ing.quantity:g}{unit} '{new_ing.name}'")


def run(file_path: Path, apply: bool = False, verbose: bool = False) -> int:
    """Scan *file_path* and optionally write the repairs. Returns the fix count."""
    recipes, plan, data = load_data(file_path)
    print(f"Found {len(recipes)} recipes and {len(plan)} plan items")

    result = fix_ingredient_data(recipes, plan)

    if verbose:
        report_changes(recipes, result.fixed_recipes)
        report_changes(
            [p.recipe for p in plan if p.recipe],
            [p.recipe for p in result.fixed_plan if p.recipe],
        )

    print(f"Ingredients to fix: {result.ingredients_fixed}")

    if apply and result.ingredients_fixed:
        data["recipes"] = [r.to_dict() for r in result.fixed_recipes]
        if "plan" in data:
            data["plan"] = [p.to_dict() for p in result.fixed_plan]
        save_data(file_path, data)
        print(f"✓ Saved repaired data to {file_path}")
    elif result.ingredients_fixed:
        print("Dry run - re-run with --apply to save changes")

    return result.ingredients_fixed


def main():
    parser = argparse.ArgumentParser(
        description="Repair ingredients with quantities embedded in their names"
    )
    parser.add_argument(
        'path',
        nargs='?',
        default=config.RECIPES_FILE,
        help='Data file with "recipes" and optional "plan" keys'
    )
    parser.add_argument(
        '--apply',
        action='store_true',
        help='Write the repairs (default is a dry run)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show every repaired ingredient'
    )
    args = parser.parse_args()

    file_path = Path(args.path)

    print("=" * 60)
    print("Ingredient Data Repair")
    print("=" * 60)
    print(f"Target file: {file_path}")
    print()

    if not file_path.exists():
        print(f"Error: File not found: {file_path}")
        sys.exit(1)

    try:
        run(file_path, apply=args.apply, verbose=args.verbose)
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
