"""
main.py: Server launcher and entry point.

Run this file to start the hostel booking API:

    python main.py

This file does NOT contain application logic. See app.py for the FastAPI
application, service wiring, and startup sequence.

Direct uvicorn usage:
    uvicorn app:app --reload --port 5000
"""

from __future__ import annotations

import uvicorn

from backend.utils.config import get_settings
from backend.utils.logger import resolve_log_level


def main() -> None:
    """Start the hostel booking API server."""
    settings = get_settings()
    base_url = f"http://{settings.host}:{settings.port}"

    print("=" * 60)
    print(f"  {settings.app_name} v{settings.app_version}")
    print("=" * 60)
    print(f"  Server    : {base_url}")
    print(f"  API docs  : {base_url}/docs")
    print(f"  Data file : {settings.data_file_path}")
    print("=" * 60)
    print("  Press CTRL+C to stop\n")

    # Start uvicorn: this blocks until CTRL+C
    uvicorn.run(
        "app:app",       # points to app.py, app object
        host=settings.host,
        port=settings.port,
        reload=True,     # hot-reload on file changes during development
        log_level=resolve_log_level(settings.log_level).lower(),
    )


if __name__ == "__main__":
    main()
