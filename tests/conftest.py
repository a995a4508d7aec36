"""
Shared fixtures for the recipe importer tests
"""

from typing import List, Optional

import pytest

from recipe_importer.models import MarkupDocument
from recipe_importer.parsers.coordination import RecipeExtractionPipeline
from recipe_importer.services.llm_service import CompletionService, Message

PAGE_URL = "https://example.com/recipes/dinner"


class FakeCompletionService(CompletionService):
    """Completion service returning a canned reply and recording every call"""

    def __init__(self, reply: Optional[str] = None, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[List[Message]] = []

    async def complete(self, messages, temperature=None, max_tokens=None) -> str:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply or ""


@pytest.fixture
def fake_completion():
    """Factory for FakeCompletionService instances"""
    return FakeCompletionService


@pytest.fixture
def make_pipeline():
    """Pipeline with the default layers and the given completion service"""
    def _make(service: Optional[CompletionService] = None) -> RecipeExtractionPipeline:
        return RecipeExtractionPipeline(completion_service=service or FakeCompletionService())
    return _make


@pytest.fixture
def page():
    """Wrap HTML in a MarkupDocument at a fixed URL"""
    def _page(markup: str, url: str = PAGE_URL) -> MarkupDocument:
        return MarkupDocument(markup=markup, base_url=url)
    return _page
