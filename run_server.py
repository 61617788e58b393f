import uvicorn

from weather_gateway.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="weather_gateway")
    logger.info(f"Starting weather gateway on port {settings.port}")

    uvicorn.run(
        "weather_gateway.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=False,
    )
