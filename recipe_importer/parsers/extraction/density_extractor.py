"""
Density fallback: treat the biggest block of text as the recipe container.

Pages built without semantic landmarks (no <main>, no <article>) still tend
to keep the recipe in one large wrapper. The largest text-bearing block above
a minimum size stands in for the missing container, and the structural
heuristics are re-applied to it.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from ...config.settings import settings
from ...models import ExtractionAttempt, ExtractionLayer
from .base import ExtractionContext, ExtractionStrategy
from .heuristic_extractor import extract_from_container, find_content_container

logger = logging.getLogger(__name__)


def find_densest_block(soup: BeautifulSoup, min_chars: int) -> Optional[Tag]:
    """Largest div/section by text length, if it clears min_chars"""
    best: Optional[Tag] = None
    best_length = min_chars
    for block in soup.find_all(["div", "section"]):
        length = len(block.get_text(" ", strip=True))
        if length > best_length:
            best, best_length = block, length
    return best


class DensityExtractor(ExtractionStrategy):
    """Largest-content fallback before the assisted layer"""

    layer = ExtractionLayer.density

    def __init__(self, min_chars: Optional[int] = None):
        self.min_chars = min_chars if min_chars is not None else settings.density_min_chars

    async def extract(self, context: ExtractionContext) -> Optional[ExtractionAttempt]:
        if not context.is_markup:
            return None

        container = find_content_container(context.soup)
        if container is None:
            container = find_densest_block(context.soup, self.min_chars)
        if container is None:
            logger.debug(f"No text block above {self.min_chars} chars")
            return None

        return extract_from_container(
            context.soup, container, context.base_url, self.layer, lenient=True
        )
