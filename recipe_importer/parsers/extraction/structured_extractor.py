"""
Structured data extraction from HTML pages.

Most recipe sites embed a schema.org Recipe node in a JSON-LD <script> tag.
This is the most reliable source for titles, images and (usually) steps, so it
runs first in the cascade.
"""

import json
import logging
import re
from typing import Any, Dict, Iterator, List, Optional

from bs4 import BeautifulSoup

from ...models import ExtractionAttempt, ExtractionLayer, IngredientGroup, InstructionGroup
from ..text_utils import clean_text, normalize_section_label
from .base import ExtractionContext, ExtractionStrategy
from .image_extractor import resolve_image_value

logger = logging.getLogger(__name__)

RECIPE_TYPE_PATTERN = re.compile(r"^(https?://schema\.org/)?Recipe$", re.IGNORECASE)
SECTION_TYPE_PATTERN = re.compile(r"^(https?://schema\.org/)?HowToSection$", re.IGNORECASE)


def matches_schema_type(type_value: Any, pattern: re.Pattern = RECIPE_TYPE_PATTERN) -> bool:
    """Accept 'Recipe', 'https://schema.org/Recipe' and type arrays containing either"""
    if isinstance(type_value, str):
        return bool(pattern.match(type_value.strip()))
    if isinstance(type_value, list):
        return any(matches_schema_type(t, pattern) for t in type_value)
    return False


def find_recipe_node(data: Any) -> Optional[Dict]:
    """Depth-first search for the first Recipe node (handles lists and @graph)"""
    if isinstance(data, list):
        for item in data:
            node = find_recipe_node(item)
            if node:
                return node
        return None

    if not isinstance(data, dict):
        return None

    if matches_schema_type(data.get("@type")):
        return data

    for key, value in data.items():
        if isinstance(value, (dict, list)):
            node = find_recipe_node(value)
            if node:
                return node
    return None


def iter_json_ld(soup: BeautifulSoup) -> Iterator[Any]:
    """Yield each decodable JSON-LD payload; malformed blocks are skipped"""
    for script in soup.find_all("script", type="application/ld+json"):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            yield json.loads(raw, strict=False)
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug(f"Skipping malformed JSON-LD block: {e}")
            continue


def _is_section(entry: Dict) -> bool:
    return matches_schema_type(entry.get("@type"), SECTION_TYPE_PATTERN) or isinstance(
        entry.get("itemListElement"), list
    )


def _entry_text(entry: Any, *keys: str) -> str:
    if isinstance(entry, str):
        return clean_text(entry)
    if isinstance(entry, dict):
        for key in keys:
            value = entry.get(key)
            if isinstance(value, str) and value.strip():
                return clean_text(value)
    return ""


def parse_ingredient_groups(value: Any) -> List[IngredientGroup]:
    """
    Convert recipeIngredient into ordered groups.

    Handles flat string lists, WP Recipe Maker style grouped lists
    ({name, ingredients: [...]}) and HowToSection lists.
    """
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []

    groups: List[IngredientGroup] = []
    current = IngredientGroup()

    def flush():
        nonlocal current
        if current.items:
            groups.append(current)
        current = IngredientGroup()

    for entry in value:
        if isinstance(entry, dict) and isinstance(entry.get("ingredients"), list):
            flush()
            items = [_entry_text(i, "name", "text", "ingredient") for i in entry["ingredients"]]
            groups.append(IngredientGroup(
                section=normalize_section_label(entry.get("name"), upper=True),
                items=[i for i in items if i],
            ))
        elif isinstance(entry, dict) and _is_section(entry):
            flush()
            items = [
                _entry_text(i, "text", "name", "ingredient", "item")
                for i in entry.get("itemListElement") or []
            ]
            groups.append(IngredientGroup(
                section=normalize_section_label(entry.get("name"), upper=True),
                items=[i for i in items if i],
            ))
        else:
            text = _entry_text(entry, "name", "text", "ingredient")
            if text:
                current.items.append(text)

    flush()
    return [group for group in groups if group.items]


def _section_steps(elements: Any) -> List[str]:
    steps: List[str] = []
    if isinstance(elements, (str, dict)):
        elements = [elements]
    for element in elements or []:
        if isinstance(element, dict) and isinstance(element.get("itemListElement"), list):
            steps.extend(_section_steps(element["itemListElement"]))
            continue
        text = _entry_text(element, "text", "name", "instruction")
        if text:
            steps.append(text)
    return steps


def parse_instruction_groups(value: Any) -> List[InstructionGroup]:
    """
    Convert recipeInstructions into ordered groups.

    Strings and HowToStep objects collect into an unlabeled group; each
    HowToSection becomes its own group labeled with its upper-cased name.
    The label is never repeated inside the step list.
    """
    if isinstance(value, str):
        steps = [clean_text(line) for line in value.splitlines()]
        steps = [step for step in steps if step]
        return [InstructionGroup(steps=steps)] if steps else []
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        return []

    groups: List[InstructionGroup] = []
    current = InstructionGroup()

    for entry in value:
        if isinstance(entry, dict) and matches_schema_type(entry.get("@type"), SECTION_TYPE_PATTERN):
            if current.steps:
                groups.append(current)
            current = InstructionGroup()
            groups.append(InstructionGroup(
                section=normalize_section_label(entry.get("name"), upper=True),
                steps=_section_steps(entry.get("itemListElement")),
            ))
        elif isinstance(entry, list):
            current.steps.extend(_section_steps(entry))
        else:
            current.steps.extend(_section_steps([entry]))

    if current.steps:
        groups.append(current)
    return [group for group in groups if group.steps]


def extract_from_json_ld(soup: BeautifulSoup, base_url: Optional[str]) -> Optional[ExtractionAttempt]:
    """
    Extract recipe data from JSON-LD structured data.

    Args:
        soup: BeautifulSoup parsed HTML
        base_url: Document URL for resolving relative image paths

    Returns:
        ExtractionAttempt, or None if no Recipe node carries a title or ingredients
    """
    for payload in iter_json_ld(soup):
        node = find_recipe_node(payload)
        if not node:
            continue

        title = clean_text(node.get("name") if isinstance(node.get("name"), str) else "")
        ingredient_groups = parse_ingredient_groups(node.get("recipeIngredient") or node.get("ingredients"))

        if not title and not ingredient_groups:
            continue

        return ExtractionAttempt(
            layer=ExtractionLayer.structured,
            title=title or None,
            ingredient_groups=ingredient_groups,
            instruction_groups=parse_instruction_groups(node.get("recipeInstructions")),
            image_url=resolve_image_value(node.get("image"), base_url),
            source="json-ld",
        )

    return None


class StructuredDataExtractor(ExtractionStrategy):
    """Schema.org JSON-LD reader"""

    layer = ExtractionLayer.structured

    async def extract(self, context: ExtractionContext) -> Optional[ExtractionAttempt]:
        if not context.is_markup:
            return None
        return extract_from_json_ld(context.soup, context.base_url)
