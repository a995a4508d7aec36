"""
Tests for the layered extraction pipeline and the merge policy
"""

import json

import pytest

from recipe_importer.models import UNTITLED_RECIPE, ExtractionLayer, OcrTextDocument, PlainTextDocument
from recipe_importer.parsers.coordination import RecipeExtractionPipeline
from recipe_importer.parsers.extraction import HeuristicExtractor, StructuredDataExtractor
from recipe_importer.parsers.extraction.base import ExtractionStrategy


def json_ld(data: dict) -> str:
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


EGGS_PAGE = "<html><head>{}</head><body><h1>Scrambled Eggs</h1></body></html>".format(json_ld({
    "@context": "https://schema.org",
    "@type": "Recipe",
    "name": "Scrambled Eggs",
    "recipeIngredient": ["2 eggs", "1 cup milk"],
    "recipeInstructions": ["Beat eggs.", "Add milk and whisk."],
    "image": "/images/eggs.jpg",
}))

PIE_PAGE = """
<html><head>{}</head><body>
<div class="wprm-recipe-container">
  <h2 class="wprm-recipe-name">Apple Pie</h2>
  <div class="wprm-recipe-ingredient-group">
    <h4 class="wprm-recipe-group-name">FOR THE CRUST</h4>
    <ul>
      <li class="wprm-recipe-ingredient">
        <span class="wprm-recipe-ingredient-amount">1</span>
        <span class="wprm-recipe-ingredient-unit">cup</span>
        <span class="wprm-recipe-ingredient-name">flour</span>
      </li>
    </ul>
  </div>
</div>
</body></html>
""".format(json_ld({
    "@type": "Recipe",
    "name": "Grandma's Apple Pie",
    "recipeIngredient": ["3 apples", "1 tbsp cinnamon"],
    "recipeInstructions": [{"@type": "HowToStep", "text": "Bake the pie."}],
}))

SOUP_PAGE = """
<html><head><meta property="og:image" content="https://cdn.example.com/soup.jpg"></head><body>
<main>
  <h1>Lentil Soup</h1>
  <h2>Ingredients</h2>
  <ul><li>1 cup lentils</li><li>2 carrots</li><li>1 onion</li><li>3 cups stock</li><li>1 tsp cumin</li><li>Salt to taste</li></ul>
  <h2>Method</h2>
  <ol><li>Chop the vegetables.</li><li>Simmer the lentils in the stock.</li><li>Season and serve.</li></ol>
</main>
</body></html>
"""

STORY = (
    "Put the beef, potatoes and carrots in a heavy pot with enough water to cover, "
    "then leave it to bubble gently for an hour until everything is tender."
)

STEW_PAGE = """
<html><head>{}</head><body><article><h1>Beef Stew</h1><p>{}</p></article></body></html>
""".format(json_ld({
    "@type": "Recipe",
    "name": "Beef Stew",
    "recipeIngredient": ["500g beef", "4 potatoes", "2 carrots"],
}), STORY)

STEW_LIST = [
    "500g beef",
    "4 potatoes",
    "2 carrots",
    "1 onion",
    "2 cups beef stock",
    "1 tbsp tomato paste",
    "2 bay leaves",
    "Salt and pepper",
]

STEW_REPLY = '```json\n[{"section": "", "steps": ["1. Brown the beef.", "2. Simmer for an hour."]}]\n```'


class ExplodingStrategy(ExtractionStrategy):
    layer = ExtractionLayer.structured

    async def extract(self, context):
        raise ValueError("broken layer")


class CountingStructuredExtractor(StructuredDataExtractor):

    def __init__(self):
        self.calls = 0

    async def extract(self, context):
        self.calls += 1
        return await super().extract(context)


class TestMarkupPipeline:
    """Merged results for web pages"""

    @pytest.mark.asyncio
    async def test_structured_data_recipe(self, make_pipeline, page, fake_completion):
        service = fake_completion(reply="[]")
        recipe = await make_pipeline(service).extract(page(EGGS_PAGE))

        assert recipe.title == "Scrambled Eggs"
        assert [g.items for g in recipe.ingredient_groups] == [["2 eggs", "1 cup milk"]]
        assert [g.steps for g in recipe.instruction_groups] == [["Beat eggs.", "Add milk and whisk."]]
        assert recipe.image_url == "https://example.com/images/eggs.jpg"
        assert service.calls == []

    @pytest.mark.asyncio
    async def test_platform_ingredients_win_without_duplication(self, make_pipeline, page):
        recipe = await make_pipeline().extract(page(PIE_PAGE))

        assert recipe.title == "Grandma's Apple Pie"
        assert [(g.section, g.items) for g in recipe.ingredient_groups] == [("FOR THE CRUST", ["1 cup flour"])]
        assert recipe.instruction_groups[0].steps == ["Bake the pie."]

    @pytest.mark.asyncio
    async def test_heuristic_page(self, make_pipeline, page):
        recipe = await make_pipeline().extract(page(SOUP_PAGE))

        assert recipe.title == "Lentil Soup"
        assert recipe.ingredient_groups[0].section is None
        assert len(recipe.ingredient_groups[0].items) == 6
        assert recipe.instruction_groups[0].section is None
        assert recipe.instruction_groups[0].steps[-1] == "Season and serve."
        assert recipe.image_url == "https://cdn.example.com/soup.jpg"

    @pytest.mark.asyncio
    async def test_assisted_fills_missing_instructions(self, make_pipeline, page, fake_completion):
        service = fake_completion(reply=STEW_REPLY)
        recipe = await make_pipeline(service).extract(page(STEW_PAGE))

        assert recipe.title == "Beef Stew"
        assert recipe.ingredient_groups[0].items == ["500g beef", "4 potatoes", "2 carrots"]
        assert recipe.instruction_groups[0].steps == ["Brown the beef.", "Simmer for an hour."]
        assert len(service.calls) == 1

    @pytest.mark.asyncio
    async def test_assisted_garbage_keeps_other_fields(self, make_pipeline, page, fake_completion):
        service = fake_completion(reply="no idea, sorry")
        recipe = await make_pipeline(service).extract(page(STEW_PAGE))

        assert recipe.title == "Beef Stew"
        assert len(recipe.ingredient_groups[0].items) == 3
        assert recipe.instruction_groups == []

    @pytest.mark.asyncio
    async def test_total_miss(self, make_pipeline, page, fake_completion):
        service = fake_completion(reply="[]")
        recipe = await make_pipeline(service).extract(page("<html><body><p>Nothing here</p></body></html>"))

        assert recipe.title == UNTITLED_RECIPE
        assert recipe.ingredient_groups == []
        assert recipe.instruction_groups == []
        assert recipe.image_url is None
        assert recipe.is_empty
        assert service.calls == []


class TestStrategyBoundaries:
    """Layers as values behind a common interface"""

    @pytest.mark.asyncio
    async def test_raising_layer_is_contained(self, page):
        pipeline = RecipeExtractionPipeline(strategies=[ExplodingStrategy(), HeuristicExtractor()])
        recipe = await pipeline.extract(page(SOUP_PAGE))

        assert recipe.title == "Lentil Soup"
        assert len(recipe.instruction_groups[0].steps) == 3

    @pytest.mark.asyncio
    async def test_each_layer_runs_once(self, page):
        structured = CountingStructuredExtractor()
        pipeline = RecipeExtractionPipeline(strategies=[structured])
        await pipeline.extract(page(EGGS_PAGE))

        assert structured.calls == 1


class TestTextPipeline:
    """Pasted and OCR text"""

    @pytest.mark.asyncio
    async def test_plain_text(self, make_pipeline, fake_completion):
        service = fake_completion(reply="[]")
        text = "Pancakes\n\nIngredients\n2 eggs\n1 cup milk\n\nMethod\n1. Whisk the eggs.\n2. Add the milk."
        recipe = await make_pipeline(service).extract(PlainTextDocument(plain_text=text))

        assert recipe.title == "Pancakes"
        assert recipe.ingredient_groups[0].items == ["2 eggs", "1 cup milk"]
        assert recipe.instruction_groups[0].steps == ["Whisk the eggs.", "Add the milk."]
        assert recipe.image_url is None
        assert service.calls == []

    @pytest.mark.asyncio
    async def test_ocr_text_without_steps_uses_assisted(self, make_pipeline, fake_completion):
        service = fake_completion(reply='[{"section": null, "steps": ["Simmer everything for an hour."]}]')
        text = "Beef Stew\nIngredients\n" + "\n".join(STEW_LIST)
        recipe = await make_pipeline(service).extract(OcrTextDocument(ocr_text=text))

        assert recipe.title == "Beef Stew"
        assert recipe.ingredient_groups[0].items == STEW_LIST
        assert recipe.instruction_groups[0].steps == ["Simmer everything for an hour."]
        assert len(service.calls) == 1

    @pytest.mark.asyncio
    async def test_ocr_prose_becomes_the_method(self, make_pipeline, fake_completion):
        service = fake_completion(reply="[]")
        text = f"Beef Stew\nIngredients\n500g beef\n4 potatoes\n\n{STORY}"
        recipe = await make_pipeline(service).extract(OcrTextDocument(ocr_text=text))

        assert [g.items for g in recipe.ingredient_groups] == [["500g beef", "4 potatoes"]]
        assert recipe.instruction_groups[0].steps == [STORY]
        assert service.calls == []

    @pytest.mark.asyncio
    async def test_text_total_miss(self, make_pipeline):
        recipe = await make_pipeline().extract(PlainTextDocument(plain_text="hello"))
        assert recipe.title == UNTITLED_RECIPE
        assert recipe.is_empty
