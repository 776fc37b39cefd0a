"""Run FastAPI server."""
import uvicorn

from family_kinship.config import settings, setup_logging
from family_kinship.api.main import app

if __name__ == "__main__":
    setup_logging()
    print(f"Starting FastAPI on http://localhost:{settings.api.port}")
    uvicorn.run(app, host=settings.api.host, port=settings.api.port)
