"""Instruction parsing for schema.org recipeInstructions and pasted text."""

import re
from typing import Any

from recipe_importer.models import InstructionSection
from recipe_importer.text import decode_html_entities

GENERIC_SECTION = "Instructions"

# "1. ", "1) ", "- ", "* ", "• "
LIST_PREFIX_RE = re.compile(r'^\s*(?:\d+[.)]|[-*•])\s+')


def _type_of(item: dict) -> list[str]:
    item_type = item.get('@type')
    if isinstance(item_type, list):
        return [t for t in item_type if isinstance(t, str)]
    return [item_type] if isinstance(item_type, str) else []


def _clean(text: Any) -> str:
    if not isinstance(text, str):
        return ''
    return decode_html_entities(text.strip())


def _classify(item: Any) -> str | None:
    """Name the shape of one recipeInstructions entry, or None to skip it."""
    if isinstance(item, str):
        return 'text'
    if not isinstance(item, dict):
        return None
    if 'HowToSection' in _type_of(item) and isinstance(item.get('itemListElement'), list):
        return 'section'
    if _clean(item.get('text')):
        return 'step'
    if _clean(item.get('name')) and 'HowToSection' not in _type_of(item):
        return 'named_step'
    return None


def _section_steps(elements: list) -> list[str]:
    steps = []
    for element in elements:
        if isinstance(element, str):
            step = _clean(element)
        elif isinstance(element, dict):
            # HowToStep / HowToDirection: prefer the full text over the title
            step = _clean(element.get('text')) or _clean(element.get('name'))
        else:
            continue
        if step:
            steps.append(step)
    return steps


def parse_schema_instructions(instructions: Any) -> list[InstructionSection]:
    """Convert schema.org recipeInstructions into ordered sections.

    Accepts a single newline-separated string, a list of strings, or a list of
    HowToStep / HowToSection objects (mixed freely). Loose steps collect into
    a generic "Instructions" section; every HowToSection becomes its own named
    section. Sections without steps are dropped.
    """
    if not instructions:
        return []

    if isinstance(instructions, str):
        steps = [_clean(s) for s in re.split(r'\n+', instructions) if s.strip()]
        return [InstructionSection(section=GENERIC_SECTION, steps=steps)] if steps else []

    if not isinstance(instructions, list):
        return []

    sections: list[InstructionSection] = []
    current: list[str] = []

    for item in instructions:
        kind = _classify(item)
        if kind == 'text':
            step = _clean(item)
            if step:
                current.append(step)
        elif kind == 'section':
            if current:
                sections.append(InstructionSection(section=GENERIC_SECTION, steps=current))
                current = []
            name = re.sub(r':$', '', _clean(item.get('name'))).strip() or GENERIC_SECTION
            sections.append(InstructionSection(section=name, steps=_section_steps(item['itemListElement'])))
        elif kind == 'step':
            current.append(_clean(item['text']))
        elif kind == 'named_step':
            current.append(_clean(item['name']))

    if current:
        sections.append(InstructionSection(section=GENERIC_SECTION, steps=current))

    return [s for s in sections if s.steps]


def parse_freeform_instructions(text: str, section: str = GENERIC_SECTION) -> list[InstructionSection]:
    """Turn pasted instructions into a single section.

    If any line is numbered ("1.", "1)") or bulleted ("-", "*", "•"), every
    line loses its prefix and becomes one step. Otherwise each non-empty line
    is a step of its own.
    """
    lines = [line.strip() for line in (text or '').splitlines() if line.strip()]

    if any(LIST_PREFIX_RE.match(line) for line in lines):
        steps = [LIST_PREFIX_RE.sub('', line, count=1).strip() for line in lines]
        steps = [step for step in steps if step]
    else:
        steps = lines

    if not steps:
        return []
    return [InstructionSection(section=section, steps=steps)]


def parse_instruction_text(text: str) -> list[str]:
    """Steps from pasted instruction text, in order."""
    sections = parse_freeform_instructions(text)
    return sections[0].steps if sections else []
