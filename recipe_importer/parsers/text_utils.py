"""
Shared text helpers for the extraction layers.

Cleaning, URL resolution, section label normalization and the small pattern
vocabulary (quantities, cooking verbs, step numbering) every layer relies on.
"""

import html
import re
from typing import Any, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import Tag

BOILERPLATE_PATTERN = re.compile(r"\b(Print|Pin|Share|Save)\b", re.IGNORECASE)
TAG_PATTERN = re.compile(r"<[^>]*>")
WHITESPACE_PATTERN = re.compile(r"\s+")

VULGAR_FRACTIONS = "¼½¾⅓⅔⅛⅜⅝⅞"

INGREDIENT_PATTERNS = [
    re.compile(
        r"\d+\s*(cup|tbsp|tsp|oz|lb|g|kg|ml|l|pound|ounce|gram|kilogram|milliliter|liter)",
        re.IGNORECASE,
    ),
    re.compile(r"\d+/\d+"),
    re.compile(r"\d+"),
    re.compile(f"[{VULGAR_FRACTIONS}]"),
    re.compile(r"(cup|cups|tablespoon|teaspoon|ounce|pound)", re.IGNORECASE),
]

STEP_PATTERN = re.compile(r"^(step\s+\d+|step\s+(one|two|three|four|five)|\d+\.)", re.IGNORECASE)

COOKING_VERBS = {
    "heat", "add", "mix", "stir", "bake", "combine", "cook", "transfer", "place",
    "pour", "whisk", "season", "simmer", "boil", "fry", "sauté", "saute", "roast",
    "grill", "steam", "blend", "chop", "dice", "slice", "mince", "peel", "grate",
    "zest", "juice", "drain", "rinse", "pat", "toss", "fold", "knead", "roll",
    "spread", "brush", "drizzle", "garnish", "preheat", "beat", "melt", "serve",
}

CAUTION_WORDS = {"do", "don't", "dont", "never", "always", "note", "tip", "be"}

GENERIC_INGREDIENT_HEADERS = {
    "ingredients", "ingredient", "what you need", "you will need", "shopping list",
}

GENERIC_INSTRUCTION_HEADERS = {
    "instructions", "instruction", "method", "directions", "direction", "steps",
    "how to make", "preparation",
}


def clean_text(text: Optional[str]) -> str:
    """
    Strip tags, decode entities, collapse whitespace and drop share-bar words.

    Args:
        text: Raw text or an HTML fragment

    Returns:
        Cleaned single-line text (empty string for None)
    """
    if not text:
        return ""
    text = html.unescape(TAG_PATTERN.sub(" ", str(text)))
    text = BOILERPLATE_PATTERN.sub("", text)
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def node_text(node: Optional[Tag]) -> str:
    """Cleaned visible text of a BeautifulSoup node"""
    if node is None:
        return ""
    return clean_text(node.get_text(" "))


def resolve_url(url: Any, base_url: Optional[str]) -> Optional[str]:
    """Resolve a possibly relative URL against the document base"""
    if not isinstance(url, str) or not url.strip():
        return None
    url = url.strip()
    if url.startswith("data:"):
        return None
    resolved = urljoin(base_url or "", url)
    if urlparse(resolved).scheme not in ("http", "https"):
        return None
    return resolved


def normalize_section_label(label: Optional[str], upper: bool = False) -> Optional[str]:
    """Clean a section heading and strip its trailing colon"""
    cleaned = clean_text(label).rstrip(":").strip()
    if not cleaned:
        return None
    return cleaned.upper() if upper else cleaned


def strip_label_punctuation(text: str) -> str:
    """Lower-cased comparison key for labels and items ('Sauce:' == 'sauce')"""
    return re.sub(r"[:.]\s*$", "", text.strip()).strip().lower()


def looks_like_ingredient(text: str) -> bool:
    return any(pattern.search(text) for pattern in INGREDIENT_PATTERNS)


def starts_with_cooking_verb(text: str) -> bool:
    words = text.strip().lower().split()
    if not words:
        return False
    return re.sub(r"[^\w]", "", words[0]) in COOKING_VERBS


def looks_like_step(text: str) -> bool:
    return bool(STEP_PATTERN.match(text.strip())) or starts_with_cooking_verb(text)


def is_heading_like(text: str) -> bool:
    """
    True for lines that read as a section heading rather than content.

    Lines ending in a colon ("For the sauce:") qualify, as do short all-caps
    lines ("FOR THE SAUCE") unless they read as a shouted instruction
    ("DO NOT OVERMIX", "BAKE 20 MINUTES.").
    """
    stripped = text.strip()
    if not stripped:
        return False
    if stripped.endswith(":"):
        return True
    if stripped.endswith((".", "!", "?")):
        return False
    letters = [c for c in stripped if c.isalpha()]
    if not letters or stripped.upper() != stripped or len(stripped.split()) > 6:
        return False
    first = re.sub(r"[^\w']", "", stripped.split()[0].lower())
    return first not in COOKING_VERBS and first not in CAUTION_WORDS


def dedupe_consecutive_words(text: str) -> str:
    """Collapse immediate word repeats ('flour flour' -> 'flour')"""
    words: List[str] = []
    for word in text.split():
        if words and words[-1].lower() == word.lower():
            continue
        words.append(word)
    return " ".join(words)


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit]


def strip_step_number(text: str) -> str:
    """Remove 'Step 3:' or '3.' style numbering from the start of a step"""
    text = re.sub(r"^step\s+\d+[:.]?\s*", "", text.strip(), flags=re.IGNORECASE)
    return re.sub(r"^\d+[.:)]\s*", "", text).strip()
