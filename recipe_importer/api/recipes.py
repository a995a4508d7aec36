from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from ..exceptions import InvalidDocumentError, SourceUnavailableError
from ..matching import compute_step_mapping
from ..models import (
    IngredientGroup,
    InstructionGroup,
    MarkupDocument,
    OcrTextDocument,
    ParsedRecipe,
    PlainTextDocument,
    RawDocument,
)
from ..parsers.coordination import get_pipeline, import_from_url

router = APIRouter()


class URLImportRequest(BaseModel):
    url: str


class DocumentImportRequest(BaseModel):
    """Exactly one of markup (with baseUrl), plainText or ocrText"""
    markup: Optional[str] = None
    base_url: Optional[str] = Field(None, alias="baseUrl")
    plain_text: Optional[str] = Field(None, alias="plainText")
    ocr_text: Optional[str] = Field(None, alias="ocrText")

    model_config = {"populate_by_name": True}

    def to_document(self) -> RawDocument:
        if self.markup and self.markup.strip():
            return MarkupDocument(markup=self.markup, base_url=self.base_url or "")
        if self.plain_text and self.plain_text.strip():
            return PlainTextDocument(plain_text=self.plain_text)
        if self.ocr_text and self.ocr_text.strip():
            return OcrTextDocument(ocr_text=self.ocr_text)
        raise InvalidDocumentError("empty")


class StepMappingRequest(BaseModel):
    ingredient_groups: List[IngredientGroup] = Field(default_factory=list, alias="ingredientGroups")
    instruction_groups: List[InstructionGroup] = Field(default_factory=list, alias="instructionGroups")

    model_config = {"populate_by_name": True}


class StepMappingResponse(BaseModel):
    mapping: Dict[str, List[str]]


@router.post("/import-from-url", response_model=ParsedRecipe)
async def import_recipe_from_url(request: URLImportRequest):
    """Fetch a recipe page and extract it"""
    try:
        return await import_from_url(request.url)
    except SourceUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch recipe page: {e.reason}"
        )


@router.post("/import", response_model=ParsedRecipe)
async def import_recipe(request: DocumentImportRequest):
    """Extract a recipe from markup, pasted text or OCR text"""
    try:
        document = request.to_document()
    except InvalidDocumentError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e)
        )
    return await get_pipeline().extract(document)


@router.post("/step-mapping", response_model=StepMappingResponse)
async def step_mapping(request: StepMappingRequest):
    """Map each instruction step to the ingredient lines it references"""
    mapping = compute_step_mapping(request.ingredient_groups, request.instruction_groups)
    return StepMappingResponse(
        mapping={step_id: [str(ingredient_id) for ingredient_id in ids] for step_id, ids in mapping.items()}
    )
