"""Launcher for the Valorant abuse detector API (``python main.py``)."""

import uvicorn
from app.core.config import get_global_settings

if __name__ == "__main__":
    settings = get_global_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        # structlog owns log formatting
        log_config=None,
    )
