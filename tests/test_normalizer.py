"""
Tests for section normalization of merged recipes
"""

import pytest

from recipe_importer.models import IngredientGroup, InstructionGroup
from recipe_importer.parsers.coordination import normalize_ingredient_groups, normalize_instruction_groups
from recipe_importer.parsers.text_utils import is_heading_like


class TestIngredientNormalization:

    def test_generic_label_is_cleared(self):
        groups = normalize_ingredient_groups([IngredientGroup(section="Ingredients:", items=["1 egg"])])
        assert groups == [IngredientGroup(section=None, items=["1 egg"])]

    def test_label_echo_is_dropped(self):
        groups = normalize_ingredient_groups([
            IngredientGroup(section="For the sauce", items=["For the sauce:", "1 tbsp soy sauce"]),
        ])
        assert groups[0].section == "For the sauce"
        assert groups[0].items == ["1 tbsp soy sauce"]

    def test_empty_groups_are_removed(self):
        groups = normalize_ingredient_groups([
            IngredientGroup(section="Crust", items=[]),
            IngredientGroup(section="Filling", items=["Filling"]),
            IngredientGroup(section="Topping", items=["2 tbsp sugar"]),
        ])
        assert [g.section for g in groups] == ["Topping"]


class TestInstructionNormalization:

    def test_heading_like_step_opens_section(self):
        groups = normalize_instruction_groups([
            InstructionGroup(steps=["Mix the dough.", "FOR THE GLAZE", "Whisk sugar and milk."]),
        ])
        assert [(g.section, g.steps) for g in groups] == [
            (None, ["Mix the dough."]),
            ("FOR THE GLAZE", ["Whisk sugar and milk."]),
        ]

    def test_generic_method_label_is_cleared(self):
        groups = normalize_instruction_groups([InstructionGroup(section="Method", steps=["Bake."])])
        assert groups[0].section is None

    def test_section_prefix_and_generic_lines(self):
        groups = normalize_instruction_groups([
            InstructionGroup(steps=["Instructions", "Section: Make the sauce:", "Simmer gently."]),
        ])
        assert [(g.section, g.steps) for g in groups] == [("Make the sauce", ["Simmer gently."])]

    def test_shouted_instruction_stays_a_step(self):
        groups = normalize_instruction_groups([
            InstructionGroup(steps=["Preheat oven.", "DO NOT OVERMIX", "Bake 20 minutes."]),
        ])
        assert [(g.section, g.steps) for g in groups] == [
            (None, ["Preheat oven.", "DO NOT OVERMIX", "Bake 20 minutes."]),
        ]

    def test_generic_label_cleared_beside_other_sections(self):
        groups = normalize_instruction_groups([
            InstructionGroup(section="Instructions", steps=["Boil the pasta."]),
            InstructionGroup(section="For the sauce", steps=["Simmer the tomatoes."]),
        ])
        assert [g.section for g in groups] == [None, "For the sauce"]


class TestHeadingDetection:

    @pytest.mark.parametrize("text", ["FOR THE GLAZE", "TO SERVE", "Make the sauce:", "SAUCE"])
    def test_headings(self, text):
        assert is_heading_like(text)

    @pytest.mark.parametrize("text", ["DO NOT OVERMIX", "BAKE 20 MINUTES", "STIR WELL!", "Mix the dough.", ""])
    def test_not_headings(self, text):
        assert not is_heading_like(text)
