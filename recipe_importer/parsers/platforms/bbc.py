from typing import List

from bs4 import BeautifulSoup, Tag

from ...models import IngredientGroup, InstructionGroup
from ..text_utils import node_text
from ..sections import GroupBuilder
from .base import STEP_PREFIX_PATTERN, PlatformExtractor


class BBCGoodFoodExtractor(PlatformExtractor):
    """BBC Good Food style pages (ingredients-list sections, method in an ordered list)"""

    family = "bbc"
    fingerprints = [
        "section.ingredients-list",
        ".ingredients-list section",
        "h3.ingredients-list__heading",
    ]

    def _ingredient_line(self, item: Tag) -> str:
        parts = [
            node_text(item.select_one(f".ingredients-list__item-{suffix}"))
            for suffix in ("quantity", "ingredient", "note")
        ]
        if not parts[1]:
            return node_text(item)
        return " ".join(part for part in parts if part)

    def extract_ingredients(self, soup: BeautifulSoup) -> List[IngredientGroup]:
        builder = GroupBuilder()
        for node in soup.select("h3.ingredients-list__heading, li.ingredients-list__item"):
            if node.name == "h3":
                builder.start_section(node_text(node))
            else:
                builder.add(self._ingredient_line(node))
        return builder.ingredient_groups()

    def extract_instructions(self, soup: BeautifulSoup) -> List[InstructionGroup]:
        scope = soup.find("article") or soup.find("main") or soup
        builder = GroupBuilder()
        for item in scope.select("ol li"):
            builder.add(STEP_PREFIX_PATTERN.sub("", node_text(item)))
        return builder.instruction_groups()
