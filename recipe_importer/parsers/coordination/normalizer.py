"""
Section normalization for merged recipes.

Whatever layer produced the groups, the output follows the same rules: no
generic "Ingredients"/"Method" labels, no items that merely repeat their
section label, heading-like steps turned into section boundaries, and no
empty groups.
"""

import re
from typing import List, Optional

from ...models import IngredientGroup, InstructionGroup
from ..text_utils import (
    GENERIC_INGREDIENT_HEADERS,
    GENERIC_INSTRUCTION_HEADERS,
    is_heading_like,
    normalize_section_label,
    strip_label_punctuation,
)

SECTION_PREFIX_PATTERN = re.compile(r"^section\s*:\s*", re.IGNORECASE)


def _label(section: Optional[str], generic_headers: set) -> Optional[str]:
    label = normalize_section_label(section)
    if label and strip_label_punctuation(label) in generic_headers:
        return None
    return label


def _keep_line(text: str, label: Optional[str], generic_headers: set) -> bool:
    key = strip_label_punctuation(text)
    if not key or key in generic_headers:
        return False
    return not (label and key == strip_label_punctuation(label))


def normalize_ingredient_groups(groups: List[IngredientGroup]) -> List[IngredientGroup]:
    """
    Clean ingredient sections.

    Args:
        groups: Ingredient groups from the winning layer

    Returns:
        Groups with generic labels cleared, label echoes dropped and
        empty groups removed
    """
    normalized = []
    for group in groups:
        label = _label(group.section, GENERIC_INGREDIENT_HEADERS)
        items = []
        for item in group.items:
            text = SECTION_PREFIX_PATTERN.sub("", item).strip()
            if _keep_line(text, label, GENERIC_INGREDIENT_HEADERS):
                items.append(text)
        if items:
            normalized.append(IngredientGroup(section=label, items=items))
    return normalized


def normalize_instruction_groups(groups: List[InstructionGroup]) -> List[InstructionGroup]:
    """
    Clean instruction sections and split on heading-like steps.

    A step such as "FOR THE SAUCE" or "Make the glaze:" inside a step list is
    a section heading that lost its markup; it opens a new group.
    """
    normalized = []

    for group in groups:
        label = _label(group.section, GENERIC_INSTRUCTION_HEADERS)
        steps: List[str] = []

        for step in group.steps:
            text = SECTION_PREFIX_PATTERN.sub("", step).strip()
            if not _keep_line(text, label, GENERIC_INSTRUCTION_HEADERS):
                continue
            if is_heading_like(text):
                if steps:
                    normalized.append(InstructionGroup(section=label, steps=steps))
                label = _label(text, GENERIC_INSTRUCTION_HEADERS)
                steps = []
                continue
            steps.append(text)

        if steps:
            normalized.append(InstructionGroup(section=label, steps=steps))

    return normalized
