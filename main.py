"""
BenefitScout API server.

    python main.py

Host, port and auto-reload come from the API_HOST, API_PORT and
API_RELOAD settings.
"""

import uvicorn

from benefitscout.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "benefitscout.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
