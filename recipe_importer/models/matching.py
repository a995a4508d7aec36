from dataclasses import dataclass
from typing import Dict, FrozenSet, List, NamedTuple


class IngredientId(NamedTuple):
    """Position of an ingredient line: (section index, item index)"""
    section_index: int
    item_index: int

    def __str__(self) -> str:
        return f"{self.section_index}-{self.item_index}"


@dataclass(frozen=True)
class MatchCandidate:
    """Tentative pairing of one step with one ingredient line"""
    ingredient_id: IngredientId
    score: int
    tokens: FrozenSet[str]


# step id ("step-0", "step-1", ...) -> ingredient ids in first-matched order
StepMapping = Dict[str, List[IngredientId]]
