from recipe_importer.instruction_parser import (
    GENERIC_SECTION,
    parse_freeform_instructions,
    parse_instruction_text,
    parse_schema_instructions,
)


class TestSchemaInstructions:
    """Test schema.org recipeInstructions shapes."""

    def test_newline_separated_string(self):
        sections = parse_schema_instructions("Preheat oven.\n\nMix batter.\nBake.")
        assert len(sections) == 1
        assert sections[0].section == GENERIC_SECTION
        assert sections[0].steps == ["Preheat oven.", "Mix batter.", "Bake."]

    def test_list_of_strings(self):
        sections = parse_schema_instructions(["Chop onions.", "  ", "Fry onions."])
        assert sections[0].steps == ["Chop onions.", "Fry onions."]

    def test_how_to_steps_use_text(self):
        sections = parse_schema_instructions([
            {"@type": "HowToStep", "name": "Prep", "text": "Chop the onions."},
            {"@type": "HowToStep", "text": "Fry until soft."},
        ])
        assert sections[0].steps == ["Chop the onions.", "Fry until soft."]

    def test_step_without_text_falls_back_to_name(self):
        sections = parse_schema_instructions([{"@type": "HowToStep", "name": "Serve warm."}])
        assert sections[0].steps == ["Serve warm."]

    def test_sections_are_named_and_ordered(self):
        """Test loose steps flush into a generic section before each HowToSection."""
        sections = parse_schema_instructions([
            "Preheat the oven.",
            {
                "@type": "HowToSection",
                "name": "For the sauce:",
                "itemListElement": [
                    {"@type": "HowToStep", "name": "Sauce title", "text": "Whisk the sauce."},
                    {"@type": "HowToStep", "name": "Simmer."},
                ],
            },
            {"@type": "HowToStep", "text": "Plate and serve."},
        ])
        assert [s.section for s in sections] == [GENERIC_SECTION, "For the sauce", GENERIC_SECTION]
        assert sections[0].steps == ["Preheat the oven."]
        assert sections[1].steps == ["Whisk the sauce.", "Simmer."]
        assert sections[2].steps == ["Plate and serve."]

    def test_empty_section_dropped(self):
        sections = parse_schema_instructions([
            {"@type": "HowToSection", "name": "Empty", "itemListElement": []},
            {"@type": "HowToStep", "text": "Only step."},
        ])
        assert len(sections) == 1
        assert sections[0].steps == ["Only step."]

    def test_entities_decoded(self):
        sections = parse_schema_instructions(["Add salt &amp; pepper."])
        assert sections[0].steps == ["Add salt & pepper."]

    def test_unusable_input(self):
        assert parse_schema_instructions(None) == []
        assert parse_schema_instructions("") == []
        assert parse_schema_instructions({"@type": "HowToStep"}) == []
        assert parse_schema_instructions([42, {"@type": "HowToStep"}]) == []


class TestFreeformInstructions:
    """Test pasted instruction text."""

    def test_numbered_list(self):
        text = "1. Boil water\n2) Add pasta\n3. Drain"
        sections = parse_freeform_instructions(text)
        assert len(sections) == 1
        assert sections[0].steps == ["Boil water", "Add pasta", "Drain"]

    def test_bulleted_list(self):
        text = "- Boil water\n* Add pasta\n• Drain"
        assert parse_instruction_text(text) == ["Boil water", "Add pasta", "Drain"]

    def test_list_mode_keeps_unprefixed_lines(self):
        text = "1. Boil water\nStir occasionally\n2. Drain"
        assert parse_instruction_text(text) == ["Boil water", "Stir occasionally", "Drain"]

    def test_paragraph_mode(self):
        text = "Boil water.\n\n  Add pasta and cook 10 minutes.  \nDrain."
        assert parse_instruction_text(text) == [
            "Boil water.",
            "Add pasta and cook 10 minutes.",
            "Drain.",
        ]

    def test_numbered_list_keeps_count_and_order(self):
        lines = [f"{i}. Step number {i}" for i in range(1, 13)]
        sections = parse_freeform_instructions("\n".join(lines))
        assert len(sections) == 1
        assert sections[0].steps == [f"Step number {i}" for i in range(1, 13)]

    def test_custom_section_name(self):
        sections = parse_freeform_instructions("Mix.\nBake.", section="Cake")
        assert sections[0].section == "Cake"

    def test_blank_input(self):
        assert parse_freeform_instructions("") == []
        assert parse_freeform_instructions("\n  \n") == []
        assert parse_instruction_text("") == []


class TestSectionNames:
    def test_only_one_trailing_colon_removed(self):
        sections = parse_schema_instructions([
            {"@type": "HowToSection", "name": "Note::", "itemListElement": ["Rest the dough."]},
        ])
        assert sections[0].section == "Note:"

    def test_colon_inside_name_kept(self):
        sections = parse_schema_instructions([
            {"@type": "HowToSection", "name": "Step 1: Dough", "itemListElement": ["Knead."]},
        ])
        assert sections[0].section == "Step 1: Dough"

    def test_colon_only_name_becomes_generic(self):
        sections = parse_schema_instructions([
            {"@type": "HowToSection", "name": ":", "itemListElement": ["Knead."]},
        ])
        assert sections[0].section == GENERIC_SECTION
