"""HTTP API for the sales dashboard.

Run with ``uvicorn sales_dashboard.api.main:app`` or call ``serve()``.
"""

import logging
import os

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from sales_dashboard import __version__
from sales_dashboard.api.routers import dashboard
from sales_dashboard.config import ConfigError
from sales_dashboard.sheets.client import SheetError


logger = logging.getLogger(__name__)


class HealthStatus(BaseModel):
    status: str
    version: str


app = FastAPI(title="Sales Dashboard API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(SheetError)
async def sheet_error_handler(request: Request, exc: SheetError) -> JSONResponse:
    logger.error(f"Sheet error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


api = APIRouter(prefix="/api")


@api.get("/health")
async def health_check() -> HealthStatus:
    """Return health status of the API."""
    return HealthStatus(status="healthy", version=__version__)


api.include_router(dashboard.router)

app.include_router(api)


def serve() -> None:
    """Run the API with uvicorn on HOST/PORT (default 0.0.0.0:8000)"""
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
