"""FastAPI application setup for the weather gateway."""

from fastapi import FastAPI

from .api import router as api_router

app = FastAPI(title="Weather Gateway")

app.include_router(api_router)
