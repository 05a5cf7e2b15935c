"""Text clean-up applied to every scraped or pasted string before parsing."""

import html
import re

UNICODE_FRACTIONS = {
    '½': '1/2', '¼': '1/4', '¾': '3/4',
    '⅓': '1/3', '⅔': '2/3',
    '⅛': '1/8', '⅜': '3/8', '⅝': '5/8', '⅞': '7/8',
    '⅕': '1/5', '⅖': '2/5', '⅗': '3/5', '⅘': '4/5',
    '⅙': '1/6', '⅚': '5/6',
}

_MIXED_GLYPH_RE = re.compile(r'(\d)([' + ''.join(UNICODE_FRACTIONS) + r'])')


def decode_html_entities(text: str) -> str:
    """Decode named and numeric HTML entities ("&amp;", "&#39;", "&#x27;").

    Non-breaking spaces come back as plain spaces so downstream regexes
    only have to deal with one kind of whitespace.
    """
    if not text:
        return text
    return html.unescape(text).replace('\xa0', ' ')


def normalize_unicode_fractions(text: str) -> str:
    """Rewrite fraction glyphs as ASCII: "1½" -> "1 1/2", "¼" -> "1/4"."""
    text = _MIXED_GLYPH_RE.sub(lambda m: f"{m.group(1)} {UNICODE_FRACTIONS[m.group(2)]}", text)
    for glyph, ascii_fraction in UNICODE_FRACTIONS.items():
        text = text.replace(glyph, ascii_fraction)
    return text
