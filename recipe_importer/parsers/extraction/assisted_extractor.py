"""
Assisted instruction extraction via a language model.

Last layer of the instruction cascade. The page (or pasted) text is truncated
and sent to the completion service, which is asked for a JSON array of
{section, steps} objects. The reply is treated as untrusted input: it is
parsed, repaired once if needed, shape-checked and cleaned before any of it
becomes an InstructionGroup.
"""

import json
import logging
import re
from typing import Any, List, Optional

from bs4 import Comment, Tag

from ...config.settings import settings
from ...exceptions import AssistedExtractionError
from ...models import ExtractionAttempt, ExtractionLayer, InstructionGroup
from ...services.llm_service import CompletionService, get_completion_service
from ..text_utils import WHITESPACE_PATTERN, clean_text, normalize_section_label, strip_step_number, truncate
from .base import ExtractionContext, ExtractionStrategy
from .heuristic_extractor import find_content_container

logger = logging.getLogger(__name__)

FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
NON_CONTENT_TAGS = {"script", "style", "noscript", "template"}

SYSTEM_PROMPT = (
    "You extract cooking instructions from recipe pages. "
    "Reply with JSON only, no commentary."
)

USER_PROMPT = """Extract the cooking instructions from the recipe text below.

Return a JSON array of objects shaped like {{"section": "...", "steps": ["...", "..."]}}.
- Keep any section labels found in the text (e.g. "For the sauce"); use "" when there is none
- One instruction step per entry, in the original order
- Leave out ingredient lists, notes, ads and comments

Recipe text:
{text}"""


def visible_text(node: Tag) -> str:
    """Text of a node without script/style contents, whitespace collapsed"""
    parts = [
        str(string)
        for string in node.find_all(string=True)
        if not isinstance(string, Comment)
        and string.parent is not None
        and string.parent.name not in NON_CONTENT_TAGS
    ]
    return WHITESPACE_PATTERN.sub(" ", " ".join(parts)).strip()


def first_embedded_array(text: str) -> Optional[list]:
    """First JSON array of sections or steps in free text; bracketed citations are skipped"""
    decoder = json.JSONDecoder()
    start = text.find("[")
    while start != -1:
        try:
            value, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, list) and (not value or any(isinstance(e, (dict, str)) for e in value)):
            return value
        start = text.find("[", start + 1)
    return None


def load_json_with_repair(raw: str) -> Any:
    """
    Parse a model reply as JSON, with one repair attempt.

    The repair takes the contents of a fenced code block if there is one,
    otherwise the first JSON array embedded in the surrounding prose.
    """
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        pass

    fenced = FENCE_PATTERN.search(raw or "")
    if fenced:
        try:
            return json.loads(fenced.group(1))
        except json.JSONDecodeError as e:
            raise AssistedExtractionError(f"unparseable JSON after repair: {e}")

    array = first_embedded_array(raw or "")
    if array is None:
        raise AssistedExtractionError("reply contained no JSON array")
    return array


def validate_instruction_payload(payload: Any) -> List[InstructionGroup]:
    """Shape-check decoded model output and turn it into cleaned groups"""
    if isinstance(payload, dict):
        payload = payload.get("instructions") or payload.get("steps")
    if not isinstance(payload, list):
        raise AssistedExtractionError("expected a JSON array of sections")

    groups: List[InstructionGroup] = []
    loose_steps: List[str] = []

    for entry in payload:
        if isinstance(entry, str):
            loose_steps.append(entry)
            continue
        if not isinstance(entry, dict):
            continue

        steps = entry.get("steps")
        if isinstance(steps, str):
            steps = [steps]
        if not isinstance(steps, list):
            continue

        cleaned = [strip_step_number(clean_text(step)) for step in steps if isinstance(step, str)]
        cleaned = [step for step in cleaned if step]
        if cleaned:
            section = entry.get("section") if isinstance(entry.get("section"), str) else None
            groups.append(InstructionGroup(
                section=normalize_section_label(section, upper=True),
                steps=cleaned,
            ))

    if loose_steps:
        cleaned = [strip_step_number(clean_text(step)) for step in loose_steps]
        cleaned = [step for step in cleaned if step]
        if cleaned:
            groups.insert(0, InstructionGroup(steps=cleaned))

    return groups


class AssistedExtractor(ExtractionStrategy):
    """Language-model fallback for instructions"""

    layer = ExtractionLayer.assisted

    def __init__(
        self,
        service: Optional[CompletionService] = None,
        max_chars: Optional[int] = None,
        min_chars: Optional[int] = None,
    ):
        self.service = service
        self.max_chars = max_chars or settings.assisted_max_chars
        self.min_chars = min_chars if min_chars is not None else settings.assisted_min_chars

    def source_text(self, context: ExtractionContext) -> str:
        if context.is_markup:
            container = find_content_container(context.soup) or context.soup.body or context.soup
            return visible_text(container)
        return WHITESPACE_PATTERN.sub(" ", context.text or "").strip()

    async def request_instructions(self, text: str) -> List[InstructionGroup]:
        """
        Ask the completion service for instruction sections.

        Raises:
            AssistedExtractionError: service failure or unusable reply
        """
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": USER_PROMPT.format(text=text)},
        ]
        try:
            service = self.service or get_completion_service()
            raw = await service.complete(messages, temperature=settings.assisted_temperature)
        except Exception as e:
            raise AssistedExtractionError(str(e)) from e

        return validate_instruction_payload(load_json_with_repair(raw))

    async def extract(self, context: ExtractionContext) -> Optional[ExtractionAttempt]:
        text = truncate(self.source_text(context), self.max_chars)
        if len(text) < self.min_chars:
            logger.debug(f"Assisted layer skipped: only {len(text)} chars of text")
            return None

        try:
            groups = await self.request_instructions(text)
        except AssistedExtractionError as e:
            logger.warning(f"{e}; continuing without assisted instructions")
            return None

        if not groups:
            return None

        logger.info(f"Assisted layer recovered {sum(len(g.steps) for g in groups)} steps")
        return ExtractionAttempt(layer=self.layer, instruction_groups=groups, source="completion")
