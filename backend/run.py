#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Serves spotbnb.main:app with auto-reload on http://localhost:8000.
"""

import uvicorn

from spotbnb.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "spotbnb.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.is_production,
        log_level=settings.log_level.lower(),
    )
