"""Entrypoint for running the whiskey_dash FastAPI backend locally."""
from __future__ import annotations

import logging

import uvicorn

from whiskey_dash.api import app


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "whiskey_dash.api:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
