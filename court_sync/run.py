#!/usr/bin/env python3
"""
Court Sync server
=================

Usage:
    python -m court_sync.run

Host, port and reload come from API_HOST, API_PORT and API_RELOAD.
"""

import uvicorn

from .config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    print(f"Starting Court Sync v{settings.service_version}")
    print(f"API docs: http://localhost:{settings.api_port}/docs")
    print()

    uvicorn.run(
        "court_sync.api:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
