from .hybrid_coordinator import RecipeExtractionPipeline, extract, get_pipeline, import_from_url
from .normalizer import normalize_ingredient_groups, normalize_instruction_groups

__all__ = [
    "RecipeExtractionPipeline",
    "extract",
    "get_pipeline",
    "import_from_url",
    "normalize_ingredient_groups",
    "normalize_instruction_groups",
]
