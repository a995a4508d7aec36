"""
Per-layer extraction results.

Each strategy in the cascade reports what it found as an ExtractionAttempt,
or None when it found nothing. Attempts are internal fragments; only the
merged ParsedRecipe leaves the pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .recipe import IngredientGroup, InstructionGroup


class ExtractionLayer(str, Enum):
    """Extraction layers in cascade priority order"""
    structured = "structured"
    platform = "platform"
    heuristic = "heuristic"
    density = "density"
    assisted = "assisted"
    text = "text"


@dataclass
class ExtractionAttempt:
    """Fragment of a recipe produced by a single layer"""
    layer: ExtractionLayer
    title: Optional[str] = None
    ingredient_groups: List[IngredientGroup] = field(default_factory=list)
    instruction_groups: List[InstructionGroup] = field(default_factory=list)
    image_url: Optional[str] = None
    source: Optional[str] = None  # platform family or container that produced it

    @property
    def has_ingredients(self) -> bool:
        return any(group.items for group in self.ingredient_groups)

    @property
    def has_instructions(self) -> bool:
        return any(group.steps for group in self.instruction_groups)

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.has_ingredients or self.has_instructions or self.image_url)
