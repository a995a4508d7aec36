from typing import List, Optional, Union

from pydantic import Field

from .base import RecipeModel

UNTITLED_RECIPE = "Untitled Recipe"


class MarkupDocument(RecipeModel):
    """Fetched web page markup plus the URL it was resolved from"""
    markup: str = Field(..., description="Raw HTML of the page")
    base_url: str = Field(..., description="URL used to resolve relative links", alias="baseUrl")

    model_config = {"frozen": True}


class PlainTextDocument(RecipeModel):
    """Recipe text pasted by the user"""
    plain_text: str = Field(..., alias="plainText")

    model_config = {"frozen": True}


class OcrTextDocument(RecipeModel):
    """Text recognized from a photographed recipe page"""
    ocr_text: str = Field(..., alias="ocrText")

    model_config = {"frozen": True}


RawDocument = Union[MarkupDocument, PlainTextDocument, OcrTextDocument]


class IngredientGroup(RecipeModel):
    """Ordered run of ingredient lines under an optional section label"""
    section: Optional[str] = Field(None, description="Section label, e.g. 'For the crust'")
    items: List[str] = Field(default_factory=list, description="Ingredient lines in source order")


class InstructionGroup(RecipeModel):
    """Ordered run of instruction steps under an optional section label"""
    section: Optional[str] = Field(None, description="Section label, e.g. 'FOR THE GLAZE'")
    steps: List[str] = Field(default_factory=list, description="Step text in source order")


class ParsedRecipe(RecipeModel):
    """Structured recipe produced by the extraction pipeline"""
    title: str = Field(UNTITLED_RECIPE, description="Recipe title, sentinel when none was found")
    ingredient_groups: List[IngredientGroup] = Field(default_factory=list, alias="ingredientGroups")
    instruction_groups: List[InstructionGroup] = Field(default_factory=list, alias="instructionGroups")
    image_url: Optional[str] = Field(None, alias="imageUrl")

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Lemon Drizzle Cake",
                "ingredientGroups": [
                    {"section": "FOR THE CAKE", "items": ["225g butter", "225g caster sugar"]},
                    {"section": "FOR THE GLAZE", "items": ["85g icing sugar"]},
                ],
                "instructionGroups": [
                    {"section": None, "steps": ["Heat oven to 180C.", "Beat the butter and sugar."]},
                ],
                "imageUrl": "https://example.com/lemon-drizzle.jpg",
            }
        }
    }

    @property
    def is_empty(self) -> bool:
        """True when no layer produced ingredients or instructions"""
        return not any(g.items for g in self.ingredient_groups) and not any(
            g.steps for g in self.instruction_groups
        )
