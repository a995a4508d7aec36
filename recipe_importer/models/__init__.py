from .recipe import (
    UNTITLED_RECIPE,
    IngredientGroup,
    InstructionGroup,
    MarkupDocument,
    OcrTextDocument,
    ParsedRecipe,
    PlainTextDocument,
    RawDocument,
)
from .extraction import ExtractionAttempt, ExtractionLayer
from .matching import IngredientId, MatchCandidate, StepMapping

__all__ = [
    "UNTITLED_RECIPE",
    "IngredientGroup",
    "InstructionGroup",
    "MarkupDocument",
    "OcrTextDocument",
    "ParsedRecipe",
    "PlainTextDocument",
    "RawDocument",
    "ExtractionAttempt",
    "ExtractionLayer",
    "IngredientId",
    "MatchCandidate",
    "StepMapping",
]
