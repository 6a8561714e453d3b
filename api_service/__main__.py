"""
Run the list API with uvicorn: `python -m api_service`.
"""

import os

import uvicorn

if __name__ == "__main__":
    enable_reload = os.getenv("ENABLE_RELOAD", "false").lower() == "true"

    uvicorn.run(
        "api_service.app:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "5000")),
        reload=enable_reload,
        workers=1,
        log_level=os.getenv("UVICORN_LOG_LEVEL", "info"),
    )
