"""
Step-Ingredient Matching System
Matches cooking steps with the ingredient lines they use, so the app can
highlight ingredients while a step is on screen.

Matching is deterministic and token based: ingredient lines are reduced to
their identifying words ("2 cups finely chopped onions" -> "onion") and
looked up in each step's text, then filtered by section affinity and
resolved when several ingredients compete for the same words.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from ..models import IngredientGroup, IngredientId, InstructionGroup, MatchCandidate, StepMapping
from .vocabulary import (
    FRACTION_MAP,
    GENERIC_STEP_SECTIONS,
    HEAD_NOUN_IGNORE,
    PREP_WORDS,
    STOP_WORDS,
    UNIT_WORDS,
)

logger = logging.getLogger(__name__)


def _word_pattern(words: Iterable[str]) -> re.Pattern:
    alternation = "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


PARENTHETICAL_PATTERN = re.compile(r"\([^)]*\)")
QUANTITY_PATTERN = re.compile(r"(?<![\w/])\d+[\d/.\-]*")
UNIT_PATTERN = _word_pattern(UNIT_WORDS)
PREP_PATTERN = _word_pattern(PREP_WORDS)
STOP_PATTERN = _word_pattern(STOP_WORDS)
PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")
WHITESPACE_PATTERN = re.compile(r"\s+")
LABEL_TRAILING_PATTERN = re.compile(r"[:.]\s*$")


def singularize(word: str) -> str:
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word.endswith("es") and len(word) > 2:
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss") and len(word) > 1:
        return word[:-1]
    return word


def replace_fractions(text: str) -> str:
    for glyph, ascii_fraction in FRACTION_MAP.items():
        text = text.replace(glyph, f" {ascii_fraction}")
    return text


def clean_ingredient_text(text: str) -> str:
    """Reduce an ingredient line to its identifying words"""
    text = replace_fractions(text.lower())
    text = PARENTHETICAL_PATTERN.sub(" ", text)
    text = QUANTITY_PATTERN.sub(" ", text)
    text = UNIT_PATTERN.sub(" ", text)
    text = PREP_PATTERN.sub(" ", text)
    text = STOP_PATTERN.sub(" ", text)
    text = PUNCTUATION_PATTERN.sub(" ", text)
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def clean_step_text(text: str) -> str:
    text = PUNCTUATION_PATTERN.sub(" ", text.lower())
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def tokenize_ingredient(text: str) -> Tuple[str, ...]:
    return tuple(singularize(word) for word in clean_ingredient_text(text).split(" ") if len(word) > 1)


def tokenize_step(text: str) -> FrozenSet[str]:
    return frozenset(singularize(word) for word in clean_step_text(text).split(" ") if word)


def remove_phrase(words: List[str], phrase: Sequence[str]) -> List[str]:
    """Drop every contiguous occurrence of phrase from words"""
    size = len(phrase)
    if not size:
        return list(words)
    kept: List[str] = []
    i = 0
    while i < len(words):
        if tuple(words[i:i + size]) == tuple(phrase):
            i += size
            continue
        kept.append(words[i])
        i += 1
    return kept


def head_noun(tokens: Sequence[str]) -> Optional[str]:
    """Rightmost content-bearing token, else the last token"""
    for token in reversed(tokens):
        if len(token) > 1 and token not in HEAD_NOUN_IGNORE:
            return token
    return tokens[-1] if tokens else None


def _label_key(text: Optional[str]) -> str:
    return LABEL_TRAILING_PATTERN.sub("", (text or "").strip()).strip().lower()


def sections_compatible(step_section: Optional[str], ingredient_section: Optional[str]) -> bool:
    """
    Section affinity between a step and an ingredient.

    Unlabeled sides always match. Labeled sides match when they share a word
    longer than 3 characters (substring containment counts), or when the step
    label is a generic method header.
    """
    step_label = (step_section or "").strip().lower()
    ingredient_label = (ingredient_section or "").strip().lower()
    if not step_label or not ingredient_label:
        return True

    if set(re.findall(r"[a-z]+", step_label)) & GENERIC_STEP_SECTIONS:
        return True

    step_words = [w for w in re.split(r"\W+", step_label) if len(w) > 3]
    ingredient_words = [w for w in re.split(r"\W+", ingredient_label) if len(w) > 3]
    return any(w in ingredient_label for w in step_words) or any(w in step_label for w in ingredient_words)


@dataclass(frozen=True)
class PreparedIngredient:
    """Tokenized ingredient line"""
    ingredient_id: IngredientId
    section: Optional[str]
    tokens: Tuple[str, ...]
    head: Optional[str]

    @property
    def phrase(self) -> str:
        return " ".join(self.tokens)

    @property
    def token_set(self) -> FrozenSet[str]:
        return frozenset(self.tokens)


@dataclass(frozen=True)
class PreparedStep:
    """Tokenized instruction step"""
    step_id: str
    section: Optional[str]
    text: str
    tokens: FrozenSet[str]


class StepIngredientMatcher:
    """
    Matches recipe steps with the ingredient lines they reference.
    Pure: output depends only on the ingredient and instruction groups.
    """

    def prepare_ingredients(self, ingredient_groups: Sequence[IngredientGroup]) -> List[PreparedIngredient]:
        """
        Tokenize every ingredient line, keeping its (section, item) position.

        Args:
            ingredient_groups: Ingredient sections in display order

        Returns:
            Prepared ingredients; lines with no identifying words are skipped
        """
        prepared = []
        for section_index, group in enumerate(ingredient_groups):
            label_key = _label_key(group.section)
            for item_index, item in enumerate(group.items):
                if label_key and _label_key(item) == label_key:
                    continue
                tokens = tokenize_ingredient(item)
                if not tokens:
                    continue
                prepared.append(PreparedIngredient(
                    ingredient_id=IngredientId(section_index, item_index),
                    section=group.section,
                    tokens=tokens,
                    head=head_noun(tokens),
                ))
        return prepared

    def prepare_steps(self, instruction_groups: Sequence[InstructionGroup]) -> List[PreparedStep]:
        """Tokenize steps; ids are 'step-N', counted across all sections"""
        prepared = []
        step_number = 0
        for group in instruction_groups:
            label_key = _label_key(group.section)
            for step in group.steps:
                step_id = f"step-{step_number}"
                step_number += 1
                if label_key and _label_key(step) == label_key:
                    continue
                prepared.append(PreparedStep(
                    step_id=step_id,
                    section=group.section,
                    text=clean_step_text(step),
                    tokens=tokenize_step(step),
                ))
        return prepared

    @staticmethod
    def score(ingredient: PreparedIngredient, text: str, tokens: FrozenSet[str]) -> Optional[int]:
        """
        Match count of an ingredient against step text, or None if rejected.

        Accepted when every token matches, or when at least half match and
        either the head noun or the whole token phrase appears in the step.
        """
        match_count = sum(1 for token in ingredient.tokens if token in tokens or token in text)
        percentage = match_count / len(ingredient.tokens)

        if percentage == 1:
            return match_count
        if percentage >= 0.5:
            head = ingredient.head
            if (head and (head in tokens or head in text)) or ingredient.phrase in text:
                return match_count
        return None

    def find_candidates(self, step: PreparedStep, ingredients: List[PreparedIngredient]) -> List[MatchCandidate]:
        candidates = []
        for ingredient in ingredients:
            score = self.score(ingredient, step.text, step.tokens)
            if score is None:
                continue
            if not sections_compatible(step.section, ingredient.section):
                continue
            candidates.append(MatchCandidate(
                ingredient_id=ingredient.ingredient_id,
                score=score,
                tokens=ingredient.token_set,
            ))
        return candidates

    @staticmethod
    def resolve_sections(candidates: List[MatchCandidate]) -> List[MatchCandidate]:
        """
        Keep every candidate from the section(s) with the most candidates.
        Candidates from other sections survive only if they share no token
        with a kept candidate.
        """
        if not candidates:
            return []

        counts: Dict[int, int] = {}
        for candidate in candidates:
            section = candidate.ingredient_id.section_index
            counts[section] = counts.get(section, 0) + 1
        best_count = max(counts.values())
        winning_sections = {section for section, count in counts.items() if count == best_count}

        winner_tokens = set()
        for candidate in candidates:
            if candidate.ingredient_id.section_index in winning_sections:
                winner_tokens |= candidate.tokens

        return [
            candidate for candidate in candidates
            if candidate.ingredient_id.section_index in winning_sections
            or not (candidate.tokens & winner_tokens)
        ]

    def suppress_subsets(
        self,
        step: PreparedStep,
        candidates: List[MatchCandidate],
        ingredients: Dict[IngredientId, PreparedIngredient],
    ) -> List[MatchCandidate]:
        """
        Drop a candidate whose tokens are a proper subset of another kept
        candidate's tokens when it only matched through that candidate's
        words ("sugar" inside "brown sugar").
        """
        kept = []
        for candidate in candidates:
            supersets = [
                other for other in candidates
                if other is not candidate and candidate.tokens < other.tokens
            ]
            if not supersets:
                kept.append(candidate)
                continue

            # compare in singular form, the form ingredient tokens are stored in
            remaining = [singularize(word) for word in step.text.split(" ") if word]
            for other in supersets:
                remaining = remove_phrase(remaining, ingredients[other.ingredient_id].tokens)

            ingredient = ingredients[candidate.ingredient_id]
            if self.score(ingredient, " ".join(remaining), frozenset(remaining)) is not None:
                kept.append(candidate)
        return kept

    def match_steps_with_ingredients(
        self,
        ingredient_groups: Sequence[IngredientGroup],
        instruction_groups: Sequence[InstructionGroup],
    ) -> StepMapping:
        """
        Main method: map each step id to the ingredient ids it references.

        Args:
            ingredient_groups: Ingredient sections in display order
            instruction_groups: Instruction sections in display order

        Returns:
            StepMapping with an entry for every step (possibly empty)
        """
        ingredients = self.prepare_ingredients(ingredient_groups)
        by_id = {ingredient.ingredient_id: ingredient for ingredient in ingredients}
        mapping: StepMapping = {}

        step_number = 0
        for group in instruction_groups:
            for _ in group.steps:
                mapping[f"step-{step_number}"] = []
                step_number += 1

        for step in self.prepare_steps(instruction_groups):
            candidates = self.find_candidates(step, ingredients)
            candidates = self.resolve_sections(candidates)
            candidates = self.suppress_subsets(step, candidates, by_id)
            mapping[step.step_id] = [candidate.ingredient_id for candidate in candidates]

        matched = sum(1 for ids in mapping.values() if ids)
        logger.debug(f"Matched ingredients for {matched}/{len(mapping)} steps")
        return mapping


GroupKey = Tuple[Tuple[Optional[str], Tuple[str, ...]], ...]

_matcher = StepIngredientMatcher()


@lru_cache(maxsize=256)
def _cached_mapping(ingredient_key: GroupKey, instruction_key: GroupKey) -> Tuple[Tuple[str, Tuple[IngredientId, ...]], ...]:
    ingredient_groups = [IngredientGroup(section=section, items=list(items)) for section, items in ingredient_key]
    instruction_groups = [InstructionGroup(section=section, steps=list(steps)) for section, steps in instruction_key]
    mapping = _matcher.match_steps_with_ingredients(ingredient_groups, instruction_groups)
    return tuple((step_id, tuple(ids)) for step_id, ids in mapping.items())


def _group_key(groups: Sequence[Union[IngredientGroup, InstructionGroup, dict]], field: str) -> GroupKey:
    key = []
    for group in groups:
        if isinstance(group, dict):
            key.append((group.get("section"), tuple(group.get(field) or ())))
        else:
            key.append((group.section, tuple(getattr(group, field))))
    return tuple(key)


def compute_step_mapping(
    ingredient_groups: Sequence[Union[IngredientGroup, dict]],
    instruction_groups: Sequence[Union[InstructionGroup, dict]],
) -> StepMapping:
    """
    Compute which ingredient lines each instruction step references.

    Results are memoized by content, so repeated renders of an unchanged
    recipe are free. A fresh dict is returned on every call.

    Args:
        ingredient_groups: IngredientGroup models or {section, items} dicts
        instruction_groups: InstructionGroup models or {section, steps} dicts

    Returns:
        Mapping of "step-N" to IngredientId list, in first-matched order
    """
    cached = _cached_mapping(_group_key(ingredient_groups, "items"), _group_key(instruction_groups, "steps"))
    return {step_id: list(ids) for step_id, ids in cached}
