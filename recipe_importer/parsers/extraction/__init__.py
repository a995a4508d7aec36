from .base import ExtractionContext, ExtractionStrategy
from .structured_extractor import StructuredDataExtractor, extract_from_json_ld
from .heuristic_extractor import HeuristicExtractor
from .density_extractor import DensityExtractor
from .assisted_extractor import AssistedExtractor
from .text_extractor import TextExtractor

__all__ = [
    "ExtractionContext",
    "ExtractionStrategy",
    "StructuredDataExtractor",
    "extract_from_json_ld",
    "HeuristicExtractor",
    "DensityExtractor",
    "AssistedExtractor",
    "TextExtractor",
]
