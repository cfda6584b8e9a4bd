"""FastAPI app with API routes and the output/asset file mounts"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from hanbok.config import get_settings
from hanbok.log import setup_logging
from hanbok.routes import router
from hanbok.services.rasterizer import get_rasterizer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup and close the shared browser on shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level)
    settings.output_path.mkdir(parents=True, exist_ok=True)
    settings.assets_path.mkdir(parents=True, exist_ok=True)
    logger.info(f"Starting app (output={settings.output_path.absolute()}, assets={settings.assets_path.absolute()})")

    yield

    logger.info("Shutting down...")
    rasterizer = get_rasterizer()
    if rasterizer.running:
        await rasterizer.stop()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Hanbok Slides", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")

    # Directories are created on startup
    app.mount("/output", StaticFiles(directory=str(settings.output_path), check_dir=False), name="output")
    app.mount("/assets", StaticFiles(directory=str(settings.assets_path), check_dir=False), name="assets")

    return app


app = create_app()
