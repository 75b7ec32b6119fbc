"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flipscore.api.routes import deals
from flipscore.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Flipscore",
    description="House flip deal scoring calculator",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(deals.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
