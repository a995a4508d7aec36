from .llm_service import CompletionService, OpenAICompletionService, get_completion_service
from .source_fetcher import fetch_document

__all__ = [
    "CompletionService",
    "OpenAICompletionService",
    "get_completion_service",
    "fetch_document",
]
