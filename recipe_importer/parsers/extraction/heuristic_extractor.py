"""
Structural heuristics for pages without structured data or a known plugin.

Both heuristics only look inside the page's main content container so that
navigation menus, footers and comment threads are never mistaken for
ingredient lists or method steps.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ...models import ExtractionAttempt, ExtractionLayer, IngredientGroup, InstructionGroup
from ..text_utils import (
    STEP_PATTERN,
    looks_like_ingredient,
    looks_like_step,
    node_text,
    normalize_section_label,
    starts_with_cooking_verb,
    strip_step_number,
)
from .base import ExtractionContext, ExtractionStrategy
from .image_extractor import image_source, is_large_image

logger = logging.getLogger(__name__)

CONTAINER_SELECTORS = [
    "main",
    "article",
    '[role="main"]',
    ".content",
    ".post-content",
    ".entry-content",
    ".recipe",
    ".recipe-content",
]

INGREDIENT_SCORE_THRESHOLD = 0.5
STEP_LIST_THRESHOLD = 0.6
MIN_ORDERED_STEPS = 3
MIN_STEP_PARAGRAPHS = 3
SHORT_HEADING_CHARS = 30
INSTRUCTION_HEADING_WORDS = ("INSTRUCTION", "METHOD", "DIRECTION")


@dataclass
class ScoredList:
    """A candidate list and its heuristic score"""
    element: Tag
    items: List[str]
    score: float


def select_best(candidates: List[ScoredList], threshold: float = float("-inf")) -> Optional[ScoredList]:
    """
    Max-by-score over materialized candidates.

    Tie-break: the first candidate encountered wins; a later one replaces it
    only on strict improvement.
    """
    best: Optional[ScoredList] = None
    for candidate in candidates:
        if candidate.score <= threshold:
            continue
        if best is None or candidate.score > best.score:
            best = candidate
    return best


def find_content_container(soup: BeautifulSoup) -> Optional[Tag]:
    for selector in CONTAINER_SELECTORS:
        container = soup.select_one(selector)
        if container is not None:
            return container
    return None


def list_items(element: Tag) -> List[str]:
    items = [node_text(li) for li in element.find_all("li", recursive=False)]
    return [item for item in items if item]


def preceding_heading(element: Tag, container: Tag) -> Optional[str]:
    """Closest h2/h3/h4 before the element, as long as it is inside the container"""
    heading = element.find_previous(["h2", "h3", "h4"])
    if heading is None or container not in heading.parents:
        return None
    return node_text(heading) or None


def score_ingredient_lists(container: Tag) -> List[ScoredList]:
    candidates = []
    for element in container.find_all("ul"):
        items = list_items(element)
        if len(items) < 2:
            continue
        matches = sum(1 for item in items if looks_like_ingredient(item))
        candidates.append(ScoredList(element=element, items=items, score=matches / len(items)))
    return candidates


def select_ingredient_group(container: Tag) -> Optional[IngredientGroup]:
    """Pick the list most of whose items read like quantities (score > 0.5)"""
    best = select_best(score_ingredient_lists(container), INGREDIENT_SCORE_THRESHOLD)
    if best is None:
        return None

    label = preceding_heading(best.element, container)
    if label and not (len(label) < SHORT_HEADING_CHARS or "ingredient" in label.lower()):
        label = None
    return IngredientGroup(section=normalize_section_label(label), items=best.items)


def _instruction_label(element: Tag, container: Tag) -> Optional[str]:
    label = preceding_heading(element, container)
    if not label:
        return None
    if len(label) < SHORT_HEADING_CHARS or any(w in label.upper() for w in INSTRUCTION_HEADING_WORDS):
        return normalize_section_label(label)
    return None


def _steps(items: List[str]) -> List[str]:
    steps = [strip_step_number(item) for item in items]
    return [step for step in steps if step]


def select_instruction_group(container: Tag, lenient: bool = False) -> Optional[InstructionGroup]:
    """
    Pick the instruction steps inside a container.

    Tries, in order: the longest ordered list with at least 3 items; a list
    where more than 60% of items start with a cooking verb or "Step N"; at
    least 3 paragraphs carrying step numbers. With lenient set, paragraphs
    that open with a cooking verb are accepted as a final option.
    """
    ordered = [
        ScoredList(element=element, items=items, score=len(items))
        for element in container.find_all("ol")
        for items in [list_items(element)]
        if len(items) >= MIN_ORDERED_STEPS
    ]
    best = select_best(ordered)

    if best is None:
        step_lists = []
        for element in container.find_all(["ul", "ol"]):
            items = list_items(element)
            if not items:
                continue
            ratio = sum(1 for item in items if looks_like_step(item)) / len(items)
            step_lists.append(ScoredList(element=element, items=items, score=ratio))
        best = select_best(step_lists, STEP_LIST_THRESHOLD)

    if best is not None:
        steps = _steps(best.items)
        if steps:
            return InstructionGroup(section=_instruction_label(best.element, container), steps=steps)

    paragraphs = [node_text(p) for p in container.find_all("p")]
    numbered = [text for text in paragraphs if STEP_PATTERN.match(text)]
    if len(numbered) >= MIN_STEP_PARAGRAPHS:
        return InstructionGroup(steps=_steps(numbered))

    if lenient:
        verb_led = [text for text in paragraphs if starts_with_cooking_verb(text) and len(text) > 20]
        if len(verb_led) >= MIN_STEP_PARAGRAPHS:
            return InstructionGroup(steps=verb_led)

    return None


def container_image(container: Tag, base_url: Optional[str]) -> Optional[str]:
    for img in container.find_all("img"):
        if is_large_image(img):
            resolved = image_source(img, base_url)
            if resolved:
                return resolved
    return None


def page_title(soup: BeautifulSoup) -> Optional[str]:
    return node_text(soup.find("h1")) or node_text(soup.find("title")) or None


def extract_from_container(
    soup: BeautifulSoup,
    container: Tag,
    base_url: Optional[str],
    layer: ExtractionLayer,
    lenient: bool = False,
) -> Optional[ExtractionAttempt]:
    """Apply both list heuristics to a container; None only if both miss"""
    ingredients = select_ingredient_group(container)
    instructions = select_instruction_group(container, lenient=lenient)

    if ingredients is None and instructions is None:
        return None

    return ExtractionAttempt(
        layer=layer,
        title=page_title(soup),
        ingredient_groups=[ingredients] if ingredients else [],
        instruction_groups=[instructions] if instructions else [],
        image_url=container_image(container, base_url),
        source=container.name,
    )


class HeuristicExtractor(ExtractionStrategy):
    """Generic list scoring inside the main content container"""

    layer = ExtractionLayer.heuristic

    async def extract(self, context: ExtractionContext) -> Optional[ExtractionAttempt]:
        if not context.is_markup:
            return None

        container = find_content_container(context.soup)
        if container is None:
            logger.debug("No content container found for heuristic extraction")
            return None

        return extract_from_container(context.soup, container, context.base_url, self.layer)
