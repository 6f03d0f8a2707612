#!/usr/bin/env python3
"""
Production startup script for BloodConnect API
"""
import uvicorn
import os
import sys
from bloodconnect.core.config import settings
from bloodconnect.core.logging import logger

def main():
    """Start the FastAPI application."""

    os.makedirs("logs", exist_ok=True)

    logger.info(f"Starting {settings.APP_NAME} Server")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug Mode: {settings.DEBUG}")
    logger.info(f"Database: {'SQLite' if settings.is_sqlite else 'PostgreSQL'}")

    config = {
        "app": "bloodconnect.main:app",
        "host": settings.HOST,
        "port": settings.PORT,
        "reload": settings.DEBUG,
        "log_level": settings.LOG_LEVEL.lower(),
        "access_log": True,
        "use_colors": settings.DEBUG,
    }

    if not settings.DEBUG:
        # SQLite cannot be shared safely between worker processes
        config.update({
            "workers": 1 if settings.is_sqlite else settings.WORKERS,
            "lifespan": "on",
        })

    logger.info(f"Starting server on {config['host']}:{config['port']}")

    try:
        uvicorn.run(**config)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
