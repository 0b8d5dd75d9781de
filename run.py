#!/usr/bin/env python3
"""Run the console API."""
import uvicorn

from pipeline_console.api.dependencies import get_config

if __name__ == "__main__":
    config = get_config()
    uvicorn.run(
        "pipeline_console.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=True,
    )
