"""
Base extraction strategy.

Every layer of the cascade implements the same interface so the coordinator
can fold over an ordered list of strategies and stop at the first one that
produces something useful.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

from bs4 import BeautifulSoup

from ...models import (
    ExtractionAttempt,
    ExtractionLayer,
    MarkupDocument,
    OcrTextDocument,
    PlainTextDocument,
    RawDocument,
)

logger = logging.getLogger(__name__)


@dataclass
class ExtractionContext:
    """Per-request state shared by the strategies of one import"""
    document: RawDocument
    soup: Optional[BeautifulSoup] = None
    base_url: Optional[str] = None
    text: Optional[str] = None
    attempts: Dict[ExtractionLayer, Optional[ExtractionAttempt]] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document: RawDocument) -> "ExtractionContext":
        if isinstance(document, MarkupDocument):
            return cls(
                document=document,
                soup=BeautifulSoup(document.markup, "html.parser"),
                base_url=document.base_url,
            )
        if isinstance(document, PlainTextDocument):
            return cls(document=document, text=document.plain_text)
        if isinstance(document, OcrTextDocument):
            return cls(document=document, text=document.ocr_text)
        raise TypeError(f"Unsupported document type: {type(document).__name__}")

    @property
    def is_markup(self) -> bool:
        return self.soup is not None


class ExtractionStrategy(ABC):
    """Abstract base class for one layer of the extraction cascade.

    Implementations return None when they find nothing. Raising is reserved
    for programmer error, and even then try_extract contains it.
    """

    layer: ExtractionLayer

    @abstractmethod
    async def extract(self, context: ExtractionContext) -> Optional[ExtractionAttempt]:
        """Extract a recipe fragment.

        Args:
            context: Parsed document and results of earlier layers

        Returns:
            An ExtractionAttempt, or None when this layer found nothing
        """
        pass

    @property
    def name(self) -> str:
        return self.layer.value

    async def try_extract(self, context: ExtractionContext) -> Optional[ExtractionAttempt]:
        """Run extract with the layer boundary acting as a catch point"""
        try:
            attempt = await self.extract(context)
        except Exception:
            logger.exception(f"{self.name} layer raised; treating as no result")
            return None

        if attempt is None or attempt.is_empty:
            logger.debug(f"{self.name} layer: no result")
            return None
        return attempt
