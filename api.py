import logging

import uvicorn
from config import ApplicationConfig
from src.api.app import create_app

logging.basicConfig(
    level=ApplicationConfig.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = create_app(ApplicationConfig, create_tables=True)

if __name__ == "__main__":
    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        reload=True,
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )
