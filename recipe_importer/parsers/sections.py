from typing import List, Optional, Tuple

from ..models import IngredientGroup, InstructionGroup
from .text_utils import clean_text, normalize_section_label, strip_label_punctuation


class GroupBuilder:
    """
    Accumulates cleaned lines into sections in document order.

    An item whose text repeats the open section's heading is treated as the
    section boundary it already is, not as a list item.
    """

    def __init__(self):
        self._sections: List[Tuple[Optional[str], List[str]]] = []
        self._label: Optional[str] = None
        self._lines: List[str] = []

    def start_section(self, label: Optional[str]):
        self._flush()
        self._label = normalize_section_label(label)

    def add(self, text: Optional[str]):
        line = clean_text(text)
        if not line:
            return
        if self._label and strip_label_punctuation(line) == strip_label_punctuation(self._label):
            return
        self._lines.append(line)

    def __len__(self) -> int:
        return sum(len(lines) for _, lines in self._sections) + len(self._lines)

    def _flush(self):
        if self._lines:
            self._sections.append((self._label, self._lines))
        self._label = None
        self._lines = []

    def ingredient_groups(self) -> List[IngredientGroup]:
        self._flush()
        return [IngredientGroup(section=label, items=list(lines)) for label, lines in self._sections]

    def instruction_groups(self) -> List[InstructionGroup]:
        self._flush()
        return [InstructionGroup(section=label, steps=list(lines)) for label, lines in self._sections]
