"""
Custom exception classes for the recipe importer
"""


class RecipeImportError(Exception):
    """Base exception for recipe import"""
    pass


class SourceUnavailableError(RecipeImportError):
    """Raised when the source document cannot be fetched"""
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not fetch '{url}': {reason}")


class InvalidDocumentError(RecipeImportError):
    """Raised when a raw document carries no content to extract from"""
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Document of kind '{kind}' has no content")


class AssistedExtractionError(RecipeImportError):
    """Raised when the completion service fails or returns unusable output"""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Assisted extraction failed: {reason}")
