"""
Recipe Importer API
FastAPI service exposing URL/text recipe import and step-ingredient mapping.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config.settings import settings
from .recipes import router as recipes_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title="Recipe Importer API",
    description="Import recipes from web pages, pasted text or OCR output into structured sections.",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(recipes_router, prefix="/recipes", tags=["recipes"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
