"""
Line-based reader for pasted recipes and OCR output.

Plain text has no markup to score, so lines are classified by the headings
around them ("Ingredients", "Method", ...) and, where there are none, by
their shape: quantity-led lines are ingredients, numbered lines and
sentences are steps.
"""

import logging
import re
from typing import Optional

from ...models import ExtractionAttempt, ExtractionLayer
from ..sections import GroupBuilder
from ..text_utils import (
    GENERIC_INGREDIENT_HEADERS,
    GENERIC_INSTRUCTION_HEADERS,
    STEP_PATTERN,
    VULGAR_FRACTIONS,
    WHITESPACE_PATTERN,
    is_heading_like,
    starts_with_cooking_verb,
    strip_label_punctuation,
    strip_step_number,
)
from .base import ExtractionContext, ExtractionStrategy

logger = logging.getLogger(__name__)

BULLET_PATTERN = re.compile(r"^[\-–•·*•‣◦]+\s*")
QUANTITY_LEAD_PATTERN = re.compile(rf"^(\d|[{VULGAR_FRACTIONS}])")
MAX_TITLE_CHARS = 100
MAX_INGREDIENT_CHARS = 80
SENTENCE_MIN_WORDS = 6

MODE_INGREDIENTS = "ingredients"
MODE_INSTRUCTIONS = "instructions"


def normalize_ingredient_line(line: str) -> str:
    line = BULLET_PATTERN.sub("", line.strip())
    line = WHITESPACE_PATTERN.sub(" ", line)
    return line.rstrip(",;").strip()


def normalize_instruction_line(line: str) -> str:
    line = BULLET_PATTERN.sub("", line.strip())
    return WHITESPACE_PATTERN.sub(" ", strip_step_number(line))


def reads_as_step(line: str) -> bool:
    """Unquantified line inside an ingredient block that belongs to the method"""
    if QUANTITY_LEAD_PATTERN.match(line):
        return False
    words = line.split()
    sentence = line.endswith((".", "!"))
    if starts_with_cooking_verb(line) and (sentence or len(words) > 4):
        return True
    if sentence and len(words) >= SENTENCE_MIN_WORDS:
        return True
    return len(line) > MAX_INGREDIENT_CHARS


def parse_recipe_text(text: str) -> Optional[ExtractionAttempt]:
    """
    Classify the lines of a plain-text recipe.

    Args:
        text: Pasted or OCR text

    Returns:
        ExtractionAttempt, or None when no ingredient or step line was found
    """
    lines = [line.strip() for line in (text or "").splitlines()]
    lines = [line for line in lines if line]

    title: Optional[str] = None
    mode: Optional[str] = None
    ingredients = GroupBuilder()
    instructions = GroupBuilder()
    seen_ingredients = set()
    seen_steps = set()

    for line in lines:
        key = strip_label_punctuation(line)
        if key in GENERIC_INGREDIENT_HEADERS:
            mode = MODE_INGREDIENTS
            continue
        if key in GENERIC_INSTRUCTION_HEADERS:
            mode = MODE_INSTRUCTIONS
            continue

        if mode is None:
            if QUANTITY_LEAD_PATTERN.match(line) and not STEP_PATTERN.match(line):
                mode = MODE_INGREDIENTS
            elif STEP_PATTERN.match(line):
                mode = MODE_INSTRUCTIONS
            else:
                if title is None and len(line) <= MAX_TITLE_CHARS:
                    title = line
                continue

        if mode == MODE_INGREDIENTS and len(ingredients):
            # numbered or sentence-like lines after the ingredients start the method
            if STEP_PATTERN.match(line) or reads_as_step(line):
                mode = MODE_INSTRUCTIONS

        if is_heading_like(line) and not QUANTITY_LEAD_PATTERN.match(line):
            target = ingredients if mode == MODE_INGREDIENTS else instructions
            target.start_section(line)
            continue

        if mode == MODE_INGREDIENTS:
            item = normalize_ingredient_line(line)
            if item and item.lower() not in seen_ingredients:
                seen_ingredients.add(item.lower())
                ingredients.add(item)
        else:
            step = normalize_instruction_line(line)
            if step and step.lower() not in seen_steps:
                seen_steps.add(step.lower())
                instructions.add(step)

    ingredient_groups = ingredients.ingredient_groups()
    instruction_groups = instructions.instruction_groups()
    if not ingredient_groups and not instruction_groups:
        return None

    return ExtractionAttempt(
        layer=ExtractionLayer.text,
        title=title,
        ingredient_groups=ingredient_groups,
        instruction_groups=instruction_groups,
        source="text",
    )


class TextExtractor(ExtractionStrategy):
    """Reader for PlainTextDocument and OcrTextDocument inputs"""

    layer = ExtractionLayer.text

    async def extract(self, context: ExtractionContext) -> Optional[ExtractionAttempt]:
        if context.is_markup:
            return None
        return parse_recipe_text(context.text)
