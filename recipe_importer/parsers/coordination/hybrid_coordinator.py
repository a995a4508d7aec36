"""
Hybrid recipe extraction coordinator.

This module orchestrates the layered extraction approach: structured data
first, then recipe-plugin markup, then structural heuristics, then the
density fallback, and finally (for instructions only) the language model.

Each field is resolved by its own ordered chain of layers. Layers run lazily
and at most once per request, so a page with complete JSON-LD never pays for
heuristics and the assisted layer only runs when nothing else found steps.

Merge policy:
- Title: structured > platform > heuristic > density > "Untitled Recipe"
- Ingredients: platform (any items) > structured > heuristic > density
- Instructions: structured > platform > heuristic > density > assisted
- Image: structured > platform > heuristic > density > page-level fallbacks
"""

import logging
import time
from typing import Callable, Dict, List, Optional

from ...models import (
    UNTITLED_RECIPE,
    ExtractionAttempt,
    ExtractionLayer,
    ParsedRecipe,
    RawDocument,
)
from ...services.llm_service import CompletionService
from ...services.source_fetcher import fetch_document
from ..extraction import (
    AssistedExtractor,
    DensityExtractor,
    ExtractionContext,
    ExtractionStrategy,
    HeuristicExtractor,
    StructuredDataExtractor,
    TextExtractor,
)
from ..extraction.image_extractor import extract_page_image
from ..platforms import PlatformDetector
from .normalizer import normalize_ingredient_groups, normalize_instruction_groups

logger = logging.getLogger(__name__)

FieldCheck = Callable[[ExtractionAttempt], bool]

MARKUP_CHAINS: Dict[str, List[ExtractionLayer]] = {
    "title": [
        ExtractionLayer.structured,
        ExtractionLayer.platform,
        ExtractionLayer.heuristic,
        ExtractionLayer.density,
    ],
    "ingredients": [
        ExtractionLayer.platform,
        ExtractionLayer.structured,
        ExtractionLayer.heuristic,
        ExtractionLayer.density,
    ],
    "instructions": [
        ExtractionLayer.structured,
        ExtractionLayer.platform,
        ExtractionLayer.heuristic,
        ExtractionLayer.density,
        ExtractionLayer.assisted,
    ],
    "image": [
        ExtractionLayer.structured,
        ExtractionLayer.platform,
        ExtractionLayer.heuristic,
        ExtractionLayer.density,
    ],
}

TEXT_CHAINS: Dict[str, List[ExtractionLayer]] = {
    "title": [ExtractionLayer.text],
    "ingredients": [ExtractionLayer.text],
    "instructions": [ExtractionLayer.text, ExtractionLayer.assisted],
    "image": [],
}

FIELD_CHECKS: Dict[str, FieldCheck] = {
    "title": lambda attempt: bool(attempt.title),
    "ingredients": lambda attempt: attempt.has_ingredients,
    "instructions": lambda attempt: attempt.has_instructions,
    "image": lambda attempt: bool(attempt.image_url),
}


class RecipeExtractionPipeline:
    """
    Cascade of extraction strategies plus the per-field merge.

    Strategies are plain values sharing the ExtractionStrategy interface;
    swapping one (e.g. a fake assisted layer in tests) is a constructor
    argument.
    """

    def __init__(
        self,
        strategies: Optional[List[ExtractionStrategy]] = None,
        completion_service: Optional[CompletionService] = None,
    ):
        if strategies is None:
            strategies = [
                StructuredDataExtractor(),
                PlatformDetector(),
                HeuristicExtractor(),
                DensityExtractor(),
                AssistedExtractor(service=completion_service),
                TextExtractor(),
            ]
        self.strategies: Dict[ExtractionLayer, ExtractionStrategy] = {
            strategy.layer: strategy for strategy in strategies
        }

    async def _attempt(self, layer: ExtractionLayer, context: ExtractionContext) -> Optional[ExtractionAttempt]:
        """Run a layer once per request and remember its result"""
        if layer not in context.attempts:
            strategy = self.strategies.get(layer)
            attempt = await strategy.try_extract(context) if strategy else None
            context.attempts[layer] = attempt
            if attempt is not None:
                logger.debug(
                    f"{layer.value} layer: title={bool(attempt.title)}, "
                    f"ingredients={sum(len(g.items) for g in attempt.ingredient_groups)}, "
                    f"steps={sum(len(g.steps) for g in attempt.instruction_groups)}"
                )
        return context.attempts[layer]

    async def first_with(self, field: str, context: ExtractionContext) -> Optional[ExtractionAttempt]:
        """Fold over the field's chain, stopping at the first layer that has it"""
        chains = MARKUP_CHAINS if context.is_markup else TEXT_CHAINS
        has_field = FIELD_CHECKS[field]
        for layer in chains[field]:
            attempt = await self._attempt(layer, context)
            if attempt is not None and has_field(attempt):
                logger.info(f"{field} resolved by {layer.value} layer")
                return attempt
        logger.debug(f"No layer produced {field}")
        return None

    async def extract(self, document: RawDocument) -> ParsedRecipe:
        """
        Extract a structured recipe from a raw document.

        Args:
            document: MarkupDocument, PlainTextDocument or OcrTextDocument

        Returns:
            ParsedRecipe; a total miss yields the sentinel title with empty groups
        """
        start = time.time()
        context = ExtractionContext.from_document(document)

        title_source = await self.first_with("title", context)
        ingredient_source = await self.first_with("ingredients", context)
        instruction_source = await self.first_with("instructions", context)
        image_source = await self.first_with("image", context)

        image_url = image_source.image_url if image_source else None
        if image_url is None and context.is_markup:
            image_url = extract_page_image(context.soup, context.base_url)

        recipe = ParsedRecipe(
            title=title_source.title if title_source else UNTITLED_RECIPE,
            ingredient_groups=normalize_ingredient_groups(
                ingredient_source.ingredient_groups if ingredient_source else []
            ),
            instruction_groups=normalize_instruction_groups(
                instruction_source.instruction_groups if instruction_source else []
            ),
            image_url=image_url,
        )

        elapsed = time.time() - start
        if recipe.is_empty:
            logger.info(f"No recipe content found ({elapsed:.2f}s)")
        else:
            logger.info(
                f"Extracted '{recipe.title}': "
                f"{sum(len(g.items) for g in recipe.ingredient_groups)} ingredients, "
                f"{sum(len(g.steps) for g in recipe.instruction_groups)} steps ({elapsed:.2f}s)"
            )
        return recipe


_default_pipeline: Optional[RecipeExtractionPipeline] = None


def get_pipeline() -> RecipeExtractionPipeline:
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = RecipeExtractionPipeline()
    return _default_pipeline


async def extract(document: RawDocument) -> ParsedRecipe:
    """Extract a recipe with the default pipeline; always returns a ParsedRecipe"""
    return await get_pipeline().extract(document)


async def import_from_url(url: str, pipeline: Optional[RecipeExtractionPipeline] = None) -> ParsedRecipe:
    """
    Fetch a recipe page and extract it.

    Raises:
        SourceUnavailableError: the page could not be fetched
    """
    document = await fetch_document(url)
    return await (pipeline or get_pipeline()).extract(document)


__all__ = [
    "RecipeExtractionPipeline",
    "extract",
    "get_pipeline",
    "import_from_url",
]
