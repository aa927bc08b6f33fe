"""Main entry point for the Bridge gateway.

Initializes the FastAPI app from environment configuration and makes it runnable standalone.

Usage:
    Development: uvicorn bridge_gateway.main:app --reload --port 3000
    Production: uvicorn bridge_gateway.main:app --host 0.0.0.0 --port 3000 --workers 4
"""

import os

from bridge_gateway.api import create_app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bridge_gateway.main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "3000")),
        reload=True,
        log_level="info",
    )
