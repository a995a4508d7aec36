from typing import List, Optional

from bs4 import BeautifulSoup

from ...models import IngredientGroup, InstructionGroup
from ..text_utils import node_text
from ..sections import GroupBuilder
from .base import PlatformExtractor


class MediavineExtractor(PlatformExtractor):
    """Mediavine Create cards"""

    family = "mediavine"
    fingerprints = [".mv-create-ingredients", ".mv-create-instructions"]
    title_selector = ".mv-create-title"
    image_selector = ".mv-create-image"

    def _collect(self, soup: BeautifulSoup, selector: str) -> Optional[GroupBuilder]:
        container = soup.select_one(selector)
        if container is None:
            return None

        builder = GroupBuilder()
        for node in container.select("h3, h4, li"):
            if node.name in ("h3", "h4"):
                builder.start_section(node_text(node))
            else:
                builder.add(node_text(node))
        return builder

    def extract_ingredients(self, soup: BeautifulSoup) -> List[IngredientGroup]:
        builder = self._collect(soup, ".mv-create-ingredients")
        return builder.ingredient_groups() if builder else []

    def extract_instructions(self, soup: BeautifulSoup) -> List[InstructionGroup]:
        builder = self._collect(soup, ".mv-create-instructions")
        return builder.instruction_groups() if builder else []
