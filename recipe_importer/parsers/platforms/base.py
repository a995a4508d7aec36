"""
Base class for recipe-card plugin extractors.

Recipe plugins (WP Recipe Maker, Tasty Recipes, Mediavine Create) and a few
large publishers render ingredients and steps with stable class names. Each
family gets a small extractor that knows its fingerprint and its markup.
"""

import re
from abc import ABC, abstractmethod
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ...models import ExtractionAttempt, ExtractionLayer, IngredientGroup, InstructionGroup
from ..text_utils import INGREDIENT_PATTERNS, node_text
from ..extraction.image_extractor import image_source

STEP_PREFIX_PATTERN = re.compile(r"^step\s*\d+\s*[:.]?\s*", re.IGNORECASE)


def is_bold_heading(item: Tag) -> bool:
    """True for list items whose whole text is a bold label with no quantity"""
    text = node_text(item)
    if not text:
        return False
    bold = item.find(["strong", "b"])
    if bold is None or node_text(bold) != text:
        return False
    return not any(pattern.search(text) for pattern in INGREDIENT_PATTERNS[:2])


class PlatformExtractor(ABC):
    """Extractor for one recipe-card family"""

    family: str = ""
    fingerprints: List[str] = []
    title_selector: Optional[str] = None
    image_selector: Optional[str] = None

    def matches(self, soup: BeautifulSoup) -> bool:
        """True when any of this family's DOM fingerprints is present"""
        return any(soup.select_one(selector) is not None for selector in self.fingerprints)

    @abstractmethod
    def extract_ingredients(self, soup: BeautifulSoup) -> List[IngredientGroup]:
        pass

    @abstractmethod
    def extract_instructions(self, soup: BeautifulSoup) -> List[InstructionGroup]:
        pass

    def extract_title(self, soup: BeautifulSoup) -> Optional[str]:
        if self.title_selector:
            title = node_text(soup.select_one(self.title_selector))
            if title:
                return title
        return node_text(soup.find("h1")) or None

    def extract_image(self, soup: BeautifulSoup, base_url: Optional[str]) -> Optional[str]:
        if not self.image_selector:
            return None
        node = soup.select_one(self.image_selector)
        if node is not None and node.name != "img":
            node = node.find("img")
        return image_source(node, base_url)

    def parse(self, soup: BeautifulSoup, base_url: Optional[str]) -> Optional[ExtractionAttempt]:
        """
        Run this family's extraction.

        Args:
            soup: BeautifulSoup parsed HTML
            base_url: Document URL for resolving relative image paths

        Returns:
            ExtractionAttempt, or None when the family's container is absent
        """
        if not self.matches(soup):
            return None

        return ExtractionAttempt(
            layer=ExtractionLayer.platform,
            title=self.extract_title(soup),
            ingredient_groups=self.extract_ingredients(soup),
            instruction_groups=self.extract_instructions(soup),
            image_url=self.extract_image(soup, base_url),
            source=self.family,
        )
