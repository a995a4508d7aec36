from pydantic import BaseModel


class RecipeModel(BaseModel):
    """Base model for recipe payloads exchanged with the app"""

    model_config = {
        "validate_assignment": True,
        "populate_by_name": True,
        "extra": "forbid",
    }
