#!/usr/bin/env python3
"""
Start the lesson slide generator server.
"""

import logging

import uvicorn
from hanbok.config import get_settings
from hanbok.log import setup_logging

settings = get_settings()
logger = logging.getLogger("hanbok.run")

if __name__ == "__main__":
    setup_logging(settings.log_level)
    logger.info("=" * 50)
    logger.info("Hanbok Slides")
    logger.info("=" * 50)
    logger.info(f"Starting server at http://{settings.host}:{settings.port}")
    logger.info(f"API Docs: http://localhost:{settings.port}/docs")

    uvicorn.run(
        "hanbok.main:app",
        host=settings.host,
        port=settings.port,
        reload=True
    )
