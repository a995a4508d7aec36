"""
Entry point for the Recipe Importer API

Runs the FastAPI service with uvicorn. The port comes from the PORT
environment variable (default 8000).
"""

import os

if __name__ == "__main__":
    import uvicorn
    from recipe_importer.api import app

    port = int(os.getenv("PORT", 8000))

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        workers=1,
        log_level="info"
    )
