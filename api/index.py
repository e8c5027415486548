"""
QSR Storefront - Main FastAPI Application

Single entry point for the storefront API (Vercel serverless function).
"""
import sys
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Vercel runs this file directly; make the project root importable
_base_path = Path(__file__).parent.parent
if str(_base_path) not in sys.path:
    sys.path.insert(0, str(_base_path))

from qsr import config  # noqa: E402
from qsr.logging import get_logger  # noqa: E402
from qsr.routers import storefront_router  # noqa: E402

logger = get_logger(__name__)


app = FastAPI(
    title="QSR Storefront",
    description="QR-code restaurant ordering: availability, menu and session cart",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(storefront_router, prefix="/api")


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}
