from typing import List

from bs4 import BeautifulSoup, Tag

from ...models import IngredientGroup, InstructionGroup
from ..text_utils import dedupe_consecutive_words, node_text
from ..sections import GroupBuilder
from .base import PlatformExtractor, is_bold_heading


class TastyRecipesExtractor(PlatformExtractor):
    """Tasty Recipes plugin cards (h4 group headings followed by lists)"""

    family = "tasty"
    fingerprints = ["[data-tasty-recipes-customization]"]
    title_selector = ".tasty-recipes-title"
    image_selector = ".tasty-recipes-image"

    def _card(self, soup: BeautifulSoup) -> Tag:
        return soup.select_one(".tasty-recipes") or soup.select_one(self.fingerprints[0]) or soup

    def _ingredient_line(self, item: Tag) -> str:
        if item.has_attr("data-tr-ingredient-checkbox") or item.select_one("[data-amount], [data-unit]"):
            # amount/unit spans often repeat the value in a child element
            return dedupe_consecutive_words(node_text(item))
        return node_text(item)

    def extract_ingredients(self, soup: BeautifulSoup) -> List[IngredientGroup]:
        container = self._card(soup).select_one(".tasty-recipes-ingredients")
        if container is None:
            return []

        builder = GroupBuilder()
        for node in container.select("h3, h4, li"):
            if node.name in ("h3", "h4"):
                builder.start_section(node_text(node))
            elif is_bold_heading(node):
                builder.start_section(node_text(node))
            else:
                builder.add(self._ingredient_line(node))
        return builder.ingredient_groups()

    def extract_instructions(self, soup: BeautifulSoup) -> List[InstructionGroup]:
        container = self._card(soup).select_one(".tasty-recipes-instructions")
        if container is None:
            return []

        builder = GroupBuilder()
        for node in container.select("h3, h4, li"):
            if node.name in ("h3", "h4") or is_bold_heading(node):
                builder.start_section(node_text(node))
            else:
                builder.add(node_text(node))
        return builder.instruction_groups()
