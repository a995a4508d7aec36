"""
Tests for recipe-card plugin detection and extraction
"""

from bs4 import BeautifulSoup

from recipe_importer.parsers.platforms import detect_platform
from recipe_importer.parsers.platforms.base import is_bold_heading
from recipe_importer.parsers.platforms.bbc import BBCGoodFoodExtractor
from recipe_importer.parsers.platforms.mediavine import MediavineExtractor
from recipe_importer.parsers.platforms.tasty import TastyRecipesExtractor
from recipe_importer.parsers.platforms.wprm import WPRMExtractor

BASE_URL = "https://example.com/recipes/lemon-bars"

TASTY_CARD = """
<div class="tasty-recipes" data-tasty-recipes-customization="body-color.color">
  <h2 class="tasty-recipes-title">Lemon Bars</h2>
  <div class="tasty-recipes-image"><img src="/img/lemon-bars.jpg"></div>
  <div class="tasty-recipes-ingredients">
    <h4>Crust</h4>
    <ul><li>1 cup flour</li><li>1/2 cup butter</li></ul>
    <h4>Filling</h4>
    <ul><li>3 eggs</li><li><strong>Topping</strong></li><li>2 tbsp icing sugar</li></ul>
  </div>
  <div class="tasty-recipes-instructions">
    <ol><li>Bake the crust.</li><li>Pour over the filling.</li></ol>
  </div>
</div>
"""

WPRM_CARD = """
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
      <li class="wprm-recipe-ingredient">
        <span class="wprm-recipe-ingredient-name"><strong>Egg wash</strong></span>
      </li>
      <li class="wprm-recipe-ingredient">
        <span class="wprm-recipe-ingredient-amount">1</span>
        <span class="wprm-recipe-ingredient-name">egg</span>
        <span class="wprm-recipe-ingredient-notes">beaten</span>
      </li>
    </ul>
  </div>
  <div class="wprm-recipe-instruction-group">
    <h4 class="wprm-recipe-group-name">Assemble</h4>
    <ul>
      <li class="wprm-recipe-instruction"><div class="wprm-recipe-instruction-text">Roll out the dough.</div></li>
      <li class="wprm-recipe-instruction"><div class="wprm-recipe-instruction-text">Brush with egg.</div></li>
    </ul>
  </div>
</div>
"""

BBC_PAGE = """
<article>
  <h1>Victoria sponge</h1>
  <section class="ingredients-list">
    <h3 class="ingredients-list__heading">For the sponge</h3>
    <ul>
      <li class="ingredients-list__item">
        <span class="ingredients-list__item-quantity">225g</span>
        <span class="ingredients-list__item-ingredient">butter</span>
        <span class="ingredients-list__item-note">softened</span>
      </li>
    </ul>
  </section>
  <ol><li>STEP 1 Heat oven to 190C.</li><li>STEP 2 Beat the butter.</li></ol>
</article>
"""

MEDIAVINE_CARD = """
<div class="mv-create-card">
  <h2 class="mv-create-title">Chili</h2>
  <div class="mv-create-ingredients"><h4>Base</h4><ul><li>1 onion</li><li>2 cans beans</li></ul></div>
  <div class="mv-create-instructions"><ol><li>Cook the onion.</li><li>Add the beans.</li></ol></div>
</div>
"""


def soup_of(markup: str) -> BeautifulSoup:
    return BeautifulSoup(f"<html><body>{markup}</body></html>", "html.parser")


class TestDetection:
    """Fingerprint priority"""

    def test_first_matching_family_wins(self):
        soup = soup_of(BBC_PAGE + WPRM_CARD)
        assert detect_platform(soup).family == "bbc"

    def test_tasty_before_wprm(self):
        soup = soup_of(WPRM_CARD + TASTY_CARD)
        assert detect_platform(soup).family == "tasty"

    def test_no_platform(self):
        assert detect_platform(soup_of("<main><ul><li>1 egg</li></ul></main>")) is None

    def test_bold_heading(self):
        soup = soup_of("<ul><li><strong>Topping</strong></li><li><b>2 cups</b> sugar</li></ul>")
        first, second = soup.find_all("li")
        assert is_bold_heading(first)
        assert not is_bold_heading(second)


class TestTastyRecipes:
    """Tasty Recipes cards"""

    def test_sections_and_bold_labels(self):
        attempt = TastyRecipesExtractor().parse(soup_of(TASTY_CARD), BASE_URL)

        assert attempt.title == "Lemon Bars"
        assert [(g.section, g.items) for g in attempt.ingredient_groups] == [
            ("Crust", ["1 cup flour", "1/2 cup butter"]),
            ("Filling", ["3 eggs"]),
            ("Topping", ["2 tbsp icing sugar"]),
        ]
        assert attempt.instruction_groups[0].steps == ["Bake the crust.", "Pour over the filling."]
        assert attempt.image_url == "https://example.com/img/lemon-bars.jpg"

    def test_absent_card_returns_none(self):
        assert TastyRecipesExtractor().parse(soup_of(WPRM_CARD), BASE_URL) is None


class TestWPRM:
    """WP Recipe Maker cards"""

    def test_grouped_ingredients(self):
        attempt = WPRMExtractor().parse(soup_of(WPRM_CARD), BASE_URL)

        assert attempt.title == "Apple Pie"
        assert [(g.section, g.items) for g in attempt.ingredient_groups] == [
            ("FOR THE CRUST", ["1 cup flour"]),
            ("Egg wash", ["1 egg beaten"]),
        ]

    def test_instruction_groups(self):
        groups = WPRMExtractor().extract_instructions(soup_of(WPRM_CARD))
        assert groups[0].section == "Assemble"
        assert groups[0].steps == ["Roll out the dough.", "Brush with egg."]


class TestBBCGoodFood:
    """BBC Good Food style pages"""

    def test_ingredient_parts_and_step_prefixes(self):
        attempt = BBCGoodFoodExtractor().parse(soup_of(BBC_PAGE), BASE_URL)

        assert attempt.title == "Victoria sponge"
        assert attempt.ingredient_groups[0].section == "For the sponge"
        assert attempt.ingredient_groups[0].items == ["225g butter softened"]
        assert attempt.instruction_groups[0].steps == ["Heat oven to 190C.", "Beat the butter."]


class TestMediavine:
    """Mediavine Create cards"""

    def test_card(self):
        attempt = MediavineExtractor().parse(soup_of(MEDIAVINE_CARD), BASE_URL)

        assert attempt.title == "Chili"
        assert attempt.ingredient_groups[0].section == "Base"
        assert attempt.ingredient_groups[0].items == ["1 onion", "2 cans beans"]
        assert attempt.instruction_groups[0].steps == ["Cook the onion.", "Add the beans."]
