"""
Recipe Importer

Turns recipe web pages, pasted text and OCR output into structured recipes,
and maps instruction steps to the ingredient lines they use.
"""

from .matching import compute_step_mapping
from .models import (
    IngredientGroup,
    InstructionGroup,
    MarkupDocument,
    OcrTextDocument,
    ParsedRecipe,
    PlainTextDocument,
)
from .parsers.coordination import RecipeExtractionPipeline, extract, import_from_url

__version__ = "1.0.0"

__all__ = [
    "compute_step_mapping",
    "extract",
    "import_from_url",
    "RecipeExtractionPipeline",
    "IngredientGroup",
    "InstructionGroup",
    "MarkupDocument",
    "OcrTextDocument",
    "ParsedRecipe",
    "PlainTextDocument",
]
