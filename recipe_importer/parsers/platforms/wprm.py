from typing import List

from bs4 import BeautifulSoup, Tag

from ...models import IngredientGroup, InstructionGroup
from ..text_utils import node_text
from ..sections import GroupBuilder
from .base import PlatformExtractor


class WPRMExtractor(PlatformExtractor):
    """WP Recipe Maker cards"""

    family = "wprm"
    fingerprints = [".wprm-recipe-container", '[class*="wprm-recipe"]']
    title_selector = ".wprm-recipe-name"
    image_selector = ".wprm-recipe-image"

    def _part(self, item: Tag, suffix: str) -> str:
        return node_text(item.select_one(f".wprm-recipe-ingredient-{suffix}"))

    def _is_name_only_heading(self, item: Tag) -> bool:
        """A bold name with no amount, unit or notes is a section label"""
        if self._part(item, "amount") or self._part(item, "unit") or self._part(item, "notes"):
            return False
        name = item.select_one(".wprm-recipe-ingredient-name")
        if name is None:
            return False
        bold = name.find(["strong", "b"])
        return bold is not None and node_text(bold) == node_text(name)

    def _ingredient_line(self, item: Tag) -> str:
        parts = [self._part(item, key) for key in ("amount", "unit", "name", "notes")]
        line = " ".join(part for part in parts if part)
        return line or node_text(item)

    def extract_ingredients(self, soup: BeautifulSoup) -> List[IngredientGroup]:
        builder = GroupBuilder()
        groups = soup.select(".wprm-recipe-ingredient-group")

        if not groups:
            for item in soup.select(".wprm-recipe-ingredient"):
                builder.add(self._ingredient_line(item))
            return builder.ingredient_groups()

        for group in groups:
            builder.start_section(node_text(group.select_one(".wprm-recipe-group-name")))
            for item in group.select(".wprm-recipe-ingredient"):
                if self._is_name_only_heading(item):
                    builder.start_section(self._part(item, "name"))
                    continue
                builder.add(self._ingredient_line(item))
        return builder.ingredient_groups()

    def extract_instructions(self, soup: BeautifulSoup) -> List[InstructionGroup]:
        builder = GroupBuilder()
        groups = soup.select(".wprm-recipe-instruction-group") or [soup]

        for group in groups:
            if group is not soup:
                builder.start_section(node_text(group.select_one(".wprm-recipe-group-name")))
            for item in group.select(".wprm-recipe-instruction"):
                text_node = item.select_one(".wprm-recipe-instruction-text") or item
                builder.add(node_text(text_node))
        return builder.instruction_groups()
