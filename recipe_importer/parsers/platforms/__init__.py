"""
Platform detection and dispatch.

Families are checked in strict priority order; the first whose fingerprint is
present wins and no further detection happens.
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from ...models import ExtractionAttempt, ExtractionLayer
from ..extraction.base import ExtractionContext, ExtractionStrategy
from .base import PlatformExtractor
from .bbc import BBCGoodFoodExtractor
from .mediavine import MediavineExtractor
from .tasty import TastyRecipesExtractor
from .wprm import WPRMExtractor

logger = logging.getLogger(__name__)

PLATFORM_EXTRACTORS: List[PlatformExtractor] = [
    BBCGoodFoodExtractor(),
    TastyRecipesExtractor(),
    WPRMExtractor(),
    MediavineExtractor(),
]


def detect_platform(soup: BeautifulSoup) -> Optional[PlatformExtractor]:
    """Return the highest-priority family whose fingerprint matches, if any"""
    for extractor in PLATFORM_EXTRACTORS:
        if extractor.matches(soup):
            return extractor
    return None


class PlatformDetector(ExtractionStrategy):
    """Dispatcher over the family-specific extractors"""

    layer = ExtractionLayer.platform

    async def extract(self, context: ExtractionContext) -> Optional[ExtractionAttempt]:
        if not context.is_markup:
            return None

        extractor = detect_platform(context.soup)
        if extractor is None:
            return None

        logger.debug(f"Detected recipe platform: {extractor.family}")
        return extractor.parse(context.soup, context.base_url)


__all__ = [
    "PLATFORM_EXTRACTORS",
    "PlatformDetector",
    "PlatformExtractor",
    "detect_platform",
]
